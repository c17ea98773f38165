"""WebVTT parser: subtitle text to an ordered list of cues.

WHY: Subtitle editors and video platforms exchange transcripts as WebVTT.
The converter needs the cue timing and text back out of such files so they
can be merged, re-exported as JSON, or turned into an interview transcript.

HOW: A two-state line scanner. Every line is trimmed and classified as
BLANK, TIMING or TEXT; the scanner has one transition method per class:

  IDLE        between blocks (after the header or a blank line)
  ASSEMBLING  a timing line has been seen, text lines belong to the cue

A cue is appended to the output only once its range and text are final,
i.e. when the next timing line arrives or the input ends.

RULES:
- Line 1 (exactly, not the first non-blank line) must be "WEBVTT"
- Timing grammar: [HH:]MM:SS.mmm --> [HH:]MM:SS.mmm, hour optional per side
- Consecutive text lines of a cue are concatenated with NO separator
- A cue whose text is still empty is never emitted
- Every TEXT line joins the cue being built, in either state: a cue
  identifier joins the previous cue, header metadata forms a 0..0 cue
- Cue settings, NOTE/STYLE blocks and inline tags are not interpreted
"""

from __future__ import annotations

import enum
import logging
import re
from typing import List, Optional, Tuple

from cue_converter.core.cue import Cue, FormatError

logger = logging.getLogger(__name__)

WEBVTT_HEADER = "WEBVTT"

_TIMESTAMP = r"(?:(\d{2}):)?(\d{2}):(\d{2})\.(\d{3})"
_TIMING_RE = re.compile(_TIMESTAMP + " --> " + _TIMESTAMP, re.ASCII)

_MS_PER_HOUR = 3_600_000
_MS_PER_MINUTE = 60_000
_MS_PER_SECOND = 1_000


class LineKind(enum.Enum):
    """Classification of a single trimmed WebVTT line."""

    BLANK = "blank"
    TIMING = "timing"
    TEXT = "text"


class ScanState(enum.Enum):
    """Scanner state between lines."""

    IDLE = "idle"
    ASSEMBLING = "assembling"


def _timestamp_ms(hours: Optional[str], minutes: str, seconds: str, millis: str) -> int:
    return (
        (int(hours) * _MS_PER_HOUR if hours else 0)
        + int(minutes) * _MS_PER_MINUTE
        + int(seconds) * _MS_PER_SECOND
        + int(millis)
    )


def parse_timing(line: str) -> Optional[Tuple[int, int]]:
    """Parse a timing line into (start_ms, end_ms).

    Returns None when the (already trimmed) line does not match the
    ``[HH:]MM:SS.mmm --> [HH:]MM:SS.mmm`` grammar exactly.
    """
    match = _TIMING_RE.fullmatch(line)
    if match is None:
        return None
    groups = match.groups()
    return _timestamp_ms(*groups[:4]), _timestamp_ms(*groups[4:])


def classify_line(line: str) -> LineKind:
    """Classify a trimmed line as BLANK, TIMING or TEXT."""
    if not line:
        return LineKind.BLANK
    if _TIMING_RE.fullmatch(line):
        return LineKind.TIMING
    return LineKind.TEXT


class CueScanner:
    """Line-driven state machine that assembles cues.

    WHY: Keeping each transition in its own method makes the awkward edge
    cases (empty block, unfinished cue at end of input, stray text between
    blocks) testable in isolation.

    HOW: Feed trimmed lines through on_blank()/on_timing()/on_text(), then
    call finish() to get the cues. The state only records whether a timing
    line opened the current block; text is accumulated regardless.
    """

    def __init__(self) -> None:
        self.state = ScanState.IDLE
        self.cues: List[Cue] = []
        self._start = 0
        self._end = 0
        self._text = ""

    def on_blank(self) -> None:
        self.state = ScanState.IDLE

    def on_timing(self, start: int, end: int) -> None:
        self._finalize()
        self._start = start
        self._end = end
        self.state = ScanState.ASSEMBLING

    def on_text(self, line: str) -> None:
        if self.state is ScanState.IDLE:
            logger.debug("Text line outside a timed block: %r", line)
        self._text += line

    def finish(self) -> List[Cue]:
        self._finalize()
        self.state = ScanState.IDLE
        return self.cues

    def _finalize(self) -> None:
        if self._text:
            self.cues.append(Cue(start=self._start, end=self._end, text=self._text))
        self._text = ""


def parse_webvtt(text: str) -> List[Cue]:
    """Parse the full text of a WebVTT file into cues.

    Args:
        text: WebVTT file content.

    Returns:
        Ordered list of Cue objects (speaker and misc unset).

    Raises:
        FormatError: If line 1 is not the literal ``WEBVTT`` header.
    """
    lines = text.split("\n")

    header = lines[0].lstrip("\ufeff").strip()
    if header != WEBVTT_HEADER:
        raise FormatError(
            "Invalid WebVTT file: expected {!r} header, got {!r}".format(
                WEBVTT_HEADER, header
            ),
            line=1,
        )

    scanner = CueScanner()
    for raw_line in lines[1:]:
        line = raw_line.strip()
        kind = classify_line(line)
        if kind is LineKind.BLANK:
            scanner.on_blank()
        elif kind is LineKind.TIMING:
            start, end = parse_timing(line)
            scanner.on_timing(start, end)
        else:
            scanner.on_text(line)

    cues = scanner.finish()
    logger.debug("Parsed %d cues from %d WebVTT lines", len(cues), len(lines))
    return cues
