"""Core cue model and sentence-merge engine.

WHY: The core package holds the stable heart of the converter: the Cue
record every parser produces and every formatter consumes, plus the merge
pass that operates purely on that record.

HOW: cue.py defines the data structure and FormatError, merge.py joins
sentence fragments into full sentences.

RULES:
- The Cue dataclass is the contract; change with care
- Core code never performs I/O
"""
