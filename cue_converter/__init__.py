"""Cue Converter: transcript format hub for subtitle cues.

WHY: Transcription scripts emit segment JSON, subtitle tools speak WebVTT,
and editors want a readable interview transcript. Each representation
splits the same spoken dialogue into time-coded cues, but none of them can
be handed to the others directly.

HOW: Three-stage pipeline: parse (WebVTT parser, JSON segment importer),
optionally merge (sentence-merge engine), format (pluggable formatters).
All stages share the Cue model from ``cue_converter.core.cue``.

RULES:
- Every parser produces a list of Cue records with non-empty text
- Every formatter consumes the same list of Cue records
- Adding a new output format = one new formatter module, no core changes
"""

__version__ = "0.1.0"
