"""Interview-style plain text formatter.

WHY: Journalists and researchers want the dialogue as running text with
the speaker's name in front of each turn, laid out like a printed
interview and without timecodes.

HOW: Walks the cues in order. Non-dialogue (misc) cues are skipped. Each
time an attributed cue comes from a different speaker than the current
one, a blank line and "<Name>: " are emitted. Every dialogue cue then adds
its text followed by a single space.

RULES:
- misc cues are omitted entirely
- Speaker change → "\\n\\n<Name>: " (also before the very first turn)
- Cues without a speaker continue the current turn
- Name lookup: speaker_names[speaker - 1], falling back to "Speaker N"
- Every cue's text is followed by one space (trailing space is kept)
- Output suffix: "-interview.txt"
- Media type: "text/plain"
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from cue_converter.core.cue import Cue
from cue_converter.formatters.base import BaseFormatter, FormatterOutput


def speaker_display_name(speaker: int, speaker_names: Sequence[str]) -> str:
    """Look up the display name for a 1-based speaker slot.

    Falls back to "Speaker N" when the caller supplied no name for the slot.
    """
    index = speaker - 1
    if 0 <= index < len(speaker_names):
        return speaker_names[index]
    return "Speaker {}".format(speaker)


def cues_to_interview_text(
    cues: Sequence[Cue],
    speaker_names: Sequence[str],
) -> str:
    parts: List[str] = []
    current_speaker: Optional[int] = None

    for cue in cues:
        if cue.misc:
            continue

        if cue.speaker and cue.speaker != current_speaker:
            current_speaker = cue.speaker
            parts.append("\n\n{}: ".format(
                speaker_display_name(current_speaker, speaker_names)
            ))

        parts.append(cue.text + " ")

    return "".join(parts)


class InterviewTextFormatter(BaseFormatter):
    """Formatter that produces a speaker-labelled interview transcript."""

    @property
    def name(self) -> str:
        return "Interview Text"

    def format(
        self,
        cues: Sequence[Cue],
        speaker_names: Optional[Sequence[str]] = None,
    ) -> List[FormatterOutput]:
        """Convert cues into interview text.

        Args:
            cues: Ordered cues; misc cues are skipped.
            speaker_names: Display names indexed by ``speaker - 1``.

        Returns:
            A single-element list containing the plain text output.
        """
        content = cues_to_interview_text(cues, speaker_names or [])
        return [
            FormatterOutput(
                suffix="-interview.txt",
                content=content,
                media_type="text/plain",
            )
        ]
