"""Cue dataclass and the FormatError raised by every parser.

WHY: WebVTT files, segment JSON and previously exported cue lists all
describe the same thing: a time range with some spoken text, optionally
attributed to a speaker. The Cue record is the single well-typed form the
parsers produce and the merge engine and formatters consume.

HOW: A plain dataclass with integer millisecond timing. Optional fields
(speaker, misc) are None when the source gives no value, so "absent" is
never confused with a sentinel number. to_dict()/from_dict() provide the
flat JSON representation with a stable key order.

RULES:
- start/end: integer milliseconds from the start of the recording
- start <= end is assumed by all consumers, not enforced here
- text: never empty for cues produced by a parser
- speaker: 1-based speaker slot, or None when unattributed
- misc: True marks non-dialogue (noise annotations etc.), None when absent
- Components copy cues with dataclasses.replace(), never mutate their input
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

# Key order of the flat JSON representation.
CUE_FIELDS = ("start", "end", "text", "speaker", "misc")


class FormatError(ValueError):
    """Raised when input text or JSON does not match the expected format.

    WHY: Callers need a single typed exception for every kind of malformed
    input (bad WebVTT header, invalid JSON, incomplete segment) so they can
    report it without caring which parser failed.

    HOW: Wraps a human-readable message plus optional location context.

    RULES:
    - line: 1-based line number in the input text, when known
    - path: slash-separated JSON location (e.g. "segments/2/text"), when known
    - The location is prefixed onto the message so str(exc) is self-contained
    """

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        path: Optional[str] = None,
    ) -> None:
        self.message = message
        self.line = line
        self.path = path
        if line is not None:
            message = "line {}: {}".format(line, message)
        elif path:
            message = "{}: {}".format(path, message)
        super().__init__(message)


@dataclass
class Cue:
    """A time-bounded unit of transcript text.

    Attributes:
        start: Start time in milliseconds.
        end: End time in milliseconds.
        text: The spoken text (never empty when produced by a parser).
        speaker: 1-based speaker slot, or None when unattributed.
        misc: True for non-dialogue cues, None when absent.
    """

    start: int
    end: int
    text: str
    speaker: Optional[int] = None
    misc: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return the flat JSON form, omitting absent optional fields."""
        data: Dict[str, Any] = {
            "start": self.start,
            "end": self.end,
            "text": self.text,
        }
        if self.speaker is not None:
            data["speaker"] = self.speaker
        if self.misc is not None:
            data["misc"] = self.misc
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Cue:
        """Build a Cue from its flat JSON form.

        Integral float timings (``1500.0``) are accepted and stored as int;
        fractional ones are rounded to the nearest millisecond.

        Raises:
            FormatError: If a timing is NaN or infinite.
        """
        speaker = data.get("speaker")
        return cls(
            start=_to_ms(data["start"], "start"),
            end=_to_ms(data["end"], "end"),
            text=data["text"],
            speaker=int(speaker) if speaker is not None else None,
            misc=data.get("misc"),
        )


def _to_ms(value: Any, name: str) -> int:
    if isinstance(value, int):
        return value
    if not math.isfinite(value):
        raise FormatError("Not a finite number: {!r}".format(value), path=name)
    return int(round(value))
