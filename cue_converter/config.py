"""Configuration defaults and .env loading.

WHY: Centralizes all configurable values so they are easy to find, update,
and override. The CLI reads its defaults from here, so a team can pin the
speaker names of a recurring interview format or switch sentence merging on
by default without touching code.

HOW: python-dotenv loads the .env file on import. Constants are defined as
module-level values read from environment variables with sensible defaults.

RULES:
- Every default can be overridden via an environment variable
- List settings are comma separated, blanks are dropped
- Boolean variables accept "true"/"false" (case-insensitive)
"""

from __future__ import annotations

import os
from typing import List, Optional

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Input / output formats
# ---------------------------------------------------------------------------

SUPPORTED_INPUT_FORMATS: set[str] = {".vtt", ".json"}
"""Input file extensions the parsers accept (lowercase, with dot)."""

JSON_INDENT = 4
"""Indentation of the flat JSON cue export."""


def split_comma_list(raw: Optional[str]) -> List[str]:
    """Split a comma-separated setting (speaker names, formatter keys).

    RULES:
    - Entries are stripped of surrounding whitespace
    - Empty entries are dropped
    - None or an empty string yields an empty list
    """
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


# ---------------------------------------------------------------------------
# Conversion defaults
# ---------------------------------------------------------------------------

DEFAULT_MERGE = os.getenv("CUE_CONVERTER_MERGE", "false").lower() == "true"
DEFAULT_FORMATS = split_comma_list(os.getenv("CUE_CONVERTER_FORMATS"))
DEFAULT_SPEAKER_NAMES = split_comma_list(os.getenv("CUE_CONVERTER_SPEAKER_NAMES"))
LOG_LEVEL = os.getenv("CUE_CONVERTER_LOG_LEVEL", "WARNING").upper()
