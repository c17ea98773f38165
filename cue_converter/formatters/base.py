"""Abstract base formatter and output container.

WHY: Every output format consumes the same list of cues but produces
different file content. This base class enforces a consistent interface so
the CLI (or any other caller) can work with any formatter generically.

HOW: BaseFormatter is an ABC with two requirements: a ``name`` property
and a ``format()`` method. FormatterOutput is a plain dataclass that
bundles a file suffix with its content (string or bytes) and MIME type.

RULES:
- Subclasses MUST implement ``name`` (human-readable) and ``format()``
- ``format()`` returns a list; every current formatter returns one item
- ``format()`` treats the cues as read-only and keeps no reference to them
- The caller is responsible for prepending the source filename stem
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from cue_converter.core.cue import Cue


@dataclass
class FormatterOutput:
    """One output file produced by a formatter.

    Attributes:
        suffix: File suffix appended to the source stem,
                e.g. ``"-cues.json"`` → ``"interview-cues.json"``.
        content: The file content as a string or bytes.
        media_type: MIME type for the content, e.g. ``"application/json"``.
    """

    suffix: str
    content: Union[str, bytes]
    media_type: str


class BaseFormatter(ABC):
    """Abstract base for all output formatters.

    To add a new output format:
    1. Create a new file in formatters/
    2. Subclass BaseFormatter
    3. Implement format() and name
    4. Register in FORMATTERS dict in formatters/__init__.py
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'Interview Text'."""

    @abstractmethod
    def format(
        self,
        cues: Sequence[Cue],
        speaker_names: Optional[Sequence[str]] = None,
    ) -> List[FormatterOutput]:
        """Convert cues into one or more output files.

        Args:
            cues: Ordered cues to serialize.
            speaker_names: Display names indexed by ``speaker - 1``. Only
                           formatters that print speaker names use it.

        Returns:
            List of FormatterOutput objects, each containing a file suffix,
            content string/bytes, and MIME type.
        """
