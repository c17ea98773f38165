"""Command-line interface for the Cue Converter.

WHY: Users need a simple way to convert a transcript from the terminal.
The CLI wires the whole pipeline behind a single command: input
validation, parsing (WebVTT or JSON), the optional sentence merge,
formatter output and saving.

HOW: Uses argparse to accept an input file, output format selection,
merge toggle, speaker names, and output directory. Status messages go to
stderr; output files are saved next to the source (or to --output-dir)
through the storage module, which never overwrites existing files.

RULES:
- Positional argument: input transcript path (.vtt or .json)
- Validates file existence and extension before parsing
- --formats: comma-separated formatter keys (default: config, else all)
- --merge/--no-merge: sentence merge (default from CUE_CONVERTER_MERGE)
- --speakers: comma-separated display names for the interview text
- Output naming: {stem}{suffix}, numeric suffix for conflicts
- Status output goes to stderr (not stdout)
- Exit codes: 0 = success, 1 = error
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from cue_converter.config import (
    DEFAULT_FORMATS,
    DEFAULT_MERGE,
    DEFAULT_SPEAKER_NAMES,
    LOG_LEVEL,
    SUPPORTED_INPUT_FORMATS,
    split_comma_list,
)
from cue_converter.core.cue import FormatError
from cue_converter.core.merge import merge_cues
from cue_converter.formatters import FORMATTERS
from cue_converter.parsers import load_file
from cue_converter.storage import save_output


def _status(msg: str) -> None:
    """Print a status message to stderr, flushed so it shows immediately."""
    print(msg, file=sys.stderr, flush=True)


def _error(msg: str) -> None:
    print("Error: {}".format(msg), file=sys.stderr)
    sys.exit(1)


def _resolve_format_keys(raw: Optional[str]) -> List[str]:
    """Pick the formatter keys from --formats, the config default, or all."""
    keys = split_comma_list(raw) if raw else list(DEFAULT_FORMATS)
    if not keys:
        return list(FORMATTERS.keys())
    for key in keys:
        if key not in FORMATTERS:
            _error("Unknown format '{}'. Available formats: {}".format(
                key, ", ".join(sorted(FORMATTERS.keys()))
            ))
    return keys


def run(args: argparse.Namespace) -> List[Path]:
    """Execute the conversion pipeline for parsed arguments.

    HOW: Validate paths, parse the input, optionally merge, run each
    selected formatter and save its outputs.

    Returns:
        Paths of the saved output files.
    """
    input_path = Path(args.input_file).resolve()

    if not input_path.is_file():
        _error("File not found: {}".format(input_path))

    ext = input_path.suffix.lower()
    if ext not in SUPPORTED_INPUT_FORMATS:
        _error("Unsupported file type '{}'. Supported formats: {}".format(
            ext, ", ".join(sorted(SUPPORTED_INPUT_FORMATS))
        ))

    output_dir = Path(args.output_dir).resolve() if args.output_dir else input_path.parent
    if not output_dir.is_dir():
        _error("Output directory does not exist: {}".format(output_dir))

    format_keys = _resolve_format_keys(args.formats)
    speaker_names = split_comma_list(args.speakers) if args.speakers else list(DEFAULT_SPEAKER_NAMES)

    _status("Reading {}...".format(input_path.name))
    try:
        cues = load_file(input_path)
    except FormatError as e:
        _error("{}: {}".format(input_path.name, e))
    except OSError as e:
        _error("Could not read {}: {}".format(input_path, e))
    _status("  Parsed {} cues".format(len(cues)))

    if args.merge:
        merged = merge_cues(cues)
        _status("  Merged into {} sentences".format(len(merged)))
        cues = merged

    saved_files: List[Path] = []
    stem = input_path.stem
    try:
        for key in format_keys:
            formatter = FORMATTERS[key]()
            _status("  Running {} formatter...".format(formatter.name))
            for output in formatter.format(cues, speaker_names):
                saved_path = save_output(output, stem, output_dir)
                saved_files.append(saved_path)
                _status("  Saved: {}".format(saved_path.name))
    except OSError as e:
        _error("Could not write output: {}".format(e))

    _status("")
    _status("Done! Saved {} file(s) to {}".format(len(saved_files), output_dir))
    return saved_files


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable: tests can inspect the parser without running the pipeline.
    """
    parser = argparse.ArgumentParser(
        prog="cue_converter",
        description="Convert transcripts between WebVTT, JSON cue lists and "
                    "interview-style plain text.",
    )

    parser.add_argument(
        "input_file",
        help="Path to the transcript to convert (.vtt or .json).",
    )

    parser.add_argument(
        "--formats",
        default=None,
        help="Comma-separated list of output formats. "
             "Available: {}. Default: all.".format(", ".join(sorted(FORMATTERS.keys()))),
    )

    parser.add_argument(
        "--merge",
        action=argparse.BooleanOptionalAction,
        default=DEFAULT_MERGE,
        help="Merge lower-case continuation cues into full sentences "
             "(default: %(default)s).",
    )

    parser.add_argument(
        "--speakers",
        default=None,
        help="Comma-separated speaker names, in speaker order, for the "
             "interview text (e.g. 'Interviewer,Guest').",
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory to save output files (default: same as input file).",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log parser and merge details to stderr.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    run(args)


if __name__ == "__main__":
    main()
