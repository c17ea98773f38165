"""Flat JSON cue formatter.

WHY: Cues edited in the converter need to be saved and loaded again
without loss. The flat JSON array is the converter's own interchange
format: the JSON segment importer reads it back unchanged.

HOW: Each cue is serialized with Cue.to_dict() (stable key order, absent
optional fields omitted) and the list is dumped with 4-space indentation.

RULES:
- Top level is a JSON array of cue objects
- Key order: start, end, text, speaker, misc
- Integer millisecond timing
- Non-ASCII text is written as-is (UTF-8), not escaped
- Output suffix: "-cues.json"
"""

from __future__ import annotations

import json
from typing import List, Optional, Sequence

from cue_converter.config import JSON_INDENT
from cue_converter.core.cue import Cue
from cue_converter.formatters.base import BaseFormatter, FormatterOutput


def cues_to_json(cues: Sequence[Cue]) -> str:
    """Serialize cues to the flat JSON string."""
    return json.dumps(
        [cue.to_dict() for cue in cues],
        indent=JSON_INDENT,
        ensure_ascii=False,
    )


class JsonCueFormatter(BaseFormatter):
    """Formatter that produces the flat JSON cue list."""

    @property
    def name(self) -> str:
        return "JSON Cues"

    def format(
        self,
        cues: Sequence[Cue],
        speaker_names: Optional[Sequence[str]] = None,
    ) -> List[FormatterOutput]:
        return [
            FormatterOutput(
                suffix="-cues.json",
                content=cues_to_json(cues),
                media_type="application/json",
            )
        ]
