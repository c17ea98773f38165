"""Output formatter registry: pluggable format hub.

WHY: The CLI needs a single lookup to find the right formatter by name. A
central dict makes it trivial to add new formats: create the formatter
class, import it here, add one line.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed: ``formatter = FORMATTERS["interview"]()``.

RULES:
- Keys are short snake_case identifiers (used in CLI flags, config, etc.)
- Values are BaseFormatter subclasses (not instances)
- Every formatter listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from cue_converter.formatters.interview_text import InterviewTextFormatter
from cue_converter.formatters.json_cues import JsonCueFormatter
from cue_converter.formatters.webvtt import WebVTTFormatter

if TYPE_CHECKING:
    from cue_converter.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "json": JsonCueFormatter,
    "interview": InterviewTextFormatter,
    "webvtt": WebVTTFormatter,
}
