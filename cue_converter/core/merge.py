"""Sentence-merge engine: join subtitle fragments into full sentences.

WHY: Transcription engines frequently break one spoken sentence across
several time-coded fragments ("Hello" / "world."). Editors want one cue per
sentence. Capitalisation of the leading character is a cheap proxy for
"this fragment starts a new sentence" that needs no language tooling.

HOW: One pass over the input, no lookahead. A cue whose first character
changes when upper-cased is a continuation and is folded into the latest
output cue; any other cue starts a new sentence and is copied to the
output.

RULES:
- Continuation: text[0].upper() != text[0] (digits/punctuation never are)
- Continuation text is joined with exactly one space: prev + " " + text
- Continuation end replaces the output cue's end; start is kept
- A continuation with no output cue yet is dropped silently
- Runs of continuations merge transitively into the same output cue
- Input cues are never mutated; output cues are fresh copies
- Case folding is whatever str.upper() does for the first character
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Iterable, List

from cue_converter.core.cue import Cue

logger = logging.getLogger(__name__)


def is_continuation(cue: Cue) -> bool:
    """Return True if the cue looks like the tail of the previous sentence.

    Raises:
        ValueError: If the cue text is empty.
    """
    if not cue.text:
        raise ValueError(
            "Cannot classify cue at {}ms: text is empty".format(cue.start)
        )
    first = cue.text[0]
    return first.upper() != first


def merge_cues(cues: Iterable[Cue]) -> List[Cue]:
    """Merge continuation cues into the sentence they belong to.

    Args:
        cues: Ordered cues with non-empty text. Treated as read-only.

    Returns:
        A new list of cues, same length or shorter, in the same order.

    Raises:
        ValueError: If any cue has empty text.
    """
    merged: List[Cue] = []
    seen = 0
    dropped = 0

    for cue in cues:
        seen += 1
        if is_continuation(cue):
            if merged:
                last = merged[-1]
                last.end = cue.end
                last.text = last.text + " " + cue.text
            else:
                dropped += 1
            continue
        # Copy so that extending the output cue never touches the input
        merged.append(dataclasses.replace(cue))

    logger.debug(
        "Merged %d cues into %d (%d leading continuation(s) dropped)",
        seen, len(merged), dropped,
    )
    return merged
