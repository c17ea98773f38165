"""Input parser registry: route raw input to the right parser.

WHY: The CLI (and any other caller) only knows the input file name. A
central extension -> loader mapping keeps routing in one place, mirroring
the FORMATTERS registry on the output side.

HOW: PARSERS maps lower-case file extensions to functions taking the raw
text and returning a list of Cue objects. load_file() reads the file and
dispatches on its extension.

RULES:
- Keys include the leading dot (".vtt", ".json")
- Every loader raises FormatError on malformed input
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, List, Union

from cue_converter.core.cue import Cue, FormatError
from cue_converter.parsers.json_segments import import_json, load_json
from cue_converter.parsers.webvtt import parse_webvtt
from cue_converter.storage import read_input

PARSERS: Dict[str, Callable[[str], List[Cue]]] = {
    ".vtt": parse_webvtt,
    ".json": load_json,
}

__all__ = ["PARSERS", "import_json", "load_file", "load_json", "parse_webvtt"]


def load_file(path: Union[str, Path]) -> List[Cue]:
    """Read an input file and parse it according to its extension.

    Raises:
        FormatError: If the extension is unknown or the content is malformed.
        OSError: If the file cannot be read.
    """
    path = Path(path)
    ext = path.suffix.lower()
    if ext not in PARSERS:
        raise FormatError(
            "Unsupported input type '{}'. Supported formats: {}".format(
                ext, ", ".join(sorted(PARSERS))
            )
        )
    try:
        raw = read_input(path)
    except UnicodeDecodeError as e:
        raise FormatError("{} is not UTF-8 text ({})".format(path.name, e.reason)) from e
    return PARSERS[ext](raw)
