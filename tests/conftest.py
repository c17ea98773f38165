"""Shared test fixtures for the cue_converter test suite.

WHY: Parser, merge, formatter and CLI tests all need the same small
interview: a WebVTT file, the matching segmented transcription JSON, and
the Cue list both should produce.

HOW: Pytest fixtures return fresh copies so tests may mutate them freely.

RULES:
- The WebVTT sample, the segmented sample and SAMPLE_CUES describe the
  same three fragments, "Hello" / "world." / "Bye"
- Timings are chosen so seconds -> ms conversion is exact
"""

import copy
from typing import Any, Dict, List

import pytest

from cue_converter.core.cue import Cue


SAMPLE_VTT = (
    "WEBVTT\n"
    "\n"
    "00:00:00.000 --> 00:00:01.000\n"
    "Hello\n"
    "\n"
    "00:00:01.000 --> 00:00:02.500\n"
    "world.\n"
    "\n"
    "00:00:03.000 --> 00:00:04.250\n"
    "Bye\n"
)

SAMPLE_SEGMENTED: Dict[str, Any] = {
    "language": "en",
    "segments": [
        {
            "start": 0.0,
            "end": 1.0,
            "text": "Hello",
            "speakers": [{"speaker": "0", "talk_fraction": 1.0}],
        },
        {
            "start": 1.0,
            "end": 2.5,
            "text": "world.",
            "speakers": [{"speaker": "0", "talk_fraction": 1.0}],
        },
        {
            "start": 3.0,
            "end": 4.25,
            "text": "Bye",
            "speakers": [
                {"speaker": "1", "talk_fraction": 0.75},
                {"speaker": "0", "talk_fraction": 0.25},
            ],
        },
    ],
}

SAMPLE_CUES: List[Cue] = [
    Cue(start=0, end=1000, text="Hello", speaker=1),
    Cue(start=1000, end=2500, text="world.", speaker=1),
    Cue(start=3000, end=4250, text="Bye", speaker=2),
]


@pytest.fixture
def sample_vtt():
    """A three-cue WebVTT file without cue identifiers."""
    return SAMPLE_VTT


@pytest.fixture
def sample_segmented():
    """Segmented transcription JSON (already parsed) for the sample."""
    return copy.deepcopy(SAMPLE_SEGMENTED)


@pytest.fixture
def sample_cues():
    """The speaker-attributed cues the segmented sample imports to."""
    return copy.deepcopy(SAMPLE_CUES)
