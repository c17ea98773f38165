"""WebVTT subtitle formatter.

WHY: Merged or speaker-attributed cues often need to go back into a video
player or subtitle editor, which expect WebVTT.

HOW: Writes the "WEBVTT" header, then one block per cue: a timing line in
HH:MM:SS.mmm form and the cue text, blocks separated by blank lines.

RULES:
- Header line is exactly "WEBVTT"
- Timing always includes the hour field
- Cue text is written on a single line as stored
- Output re-parses with parse_webvtt() to the same start/end/text
- Output suffix: ".vtt"
- Media type: "text/vtt"
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from cue_converter.core.cue import Cue
from cue_converter.formatters.base import BaseFormatter, FormatterOutput
from cue_converter.parsers.webvtt import WEBVTT_HEADER


def format_timestamp(ms: int) -> str:
    """Format milliseconds as an HH:MM:SS.mmm WebVTT timestamp."""
    hours, rest = divmod(ms, 3_600_000)
    minutes, rest = divmod(rest, 60_000)
    seconds, millis = divmod(rest, 1_000)
    return "{:02d}:{:02d}:{:02d}.{:03d}".format(hours, minutes, seconds, millis)


def cues_to_webvtt(cues: Sequence[Cue]) -> str:
    blocks = [WEBVTT_HEADER]
    for cue in cues:
        blocks.append("{} --> {}\n{}".format(
            format_timestamp(cue.start), format_timestamp(cue.end), cue.text,
        ))
    return "\n\n".join(blocks) + "\n"


class WebVTTFormatter(BaseFormatter):
    """Formatter that produces a WebVTT subtitle file."""

    @property
    def name(self) -> str:
        return "WebVTT"

    def format(
        self,
        cues: Sequence[Cue],
        speaker_names: Optional[Sequence[str]] = None,
    ) -> List[FormatterOutput]:
        return [
            FormatterOutput(
                suffix=".vtt",
                content=cues_to_webvtt(cues),
                media_type="text/vtt",
            )
        ]
