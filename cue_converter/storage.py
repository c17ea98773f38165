"""File storage for converter input and output.

WHY: The parsers and formatters are pure transformations; something still
has to read the input file and persist the formatted output. Output must
never clobber earlier work, and a failed write must never leave a truncated
file behind.

HOW: read_input() reads UTF-8 text. save_output() resolves a conflict-free
path, writes the content to a temporary file in the destination directory,
and atomically renames it into place. The temporary file is removed if
anything fails before the rename.

RULES:
- Output naming: {stem}{suffix}, numeric suffix on conflict (-cues-2.json)
- String content written as UTF-8 text, bytes content written as-is
- No partial writes: either the complete file appears or nothing does
- Written files get umask-derived permissions, as a plain open() would
- I/O errors propagate to the caller after cleanup
"""

from __future__ import annotations

import itertools
import logging
import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from cue_converter.formatters.base import FormatterOutput

logger = logging.getLogger(__name__)


def read_input(path: Union[str, Path]) -> str:
    """Read an input file as UTF-8 text.

    Raises:
        FileNotFoundError: If the file does not exist.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    return Path(path).read_text(encoding="utf-8")


def resolve_output_path(
    stem: str,
    suffix: str,
    output_dir: Path,
) -> Path:
    """Pick a file name in output_dir that no earlier export occupies.

    The first choice is the plain ``{stem}{suffix}``. When that is taken, a
    counter starting at 2 goes between the formatter's tag and the file
    extension, so ``talk-cues.json`` becomes ``talk-cues-2.json``. Suffixes
    that are a bare extension, such as the WebVTT exporter's ``.vtt``, put
    the counter straight after the stem (``talk-2.vtt``).

    Args:
        stem: Source filename stem (without extension).
        suffix: Formatter's suffix, e.g. "-interview.txt" or ".vtt".
        output_dir: Directory the export goes into.

    Returns:
        A Path that does not yet exist.
    """
    first_choice = output_dir / (stem + suffix)
    if not first_choice.exists():
        return first_choice

    if "." in suffix:
        tag, extension = suffix.rsplit(".", 1)
        extension = "." + extension
    else:
        tag, extension = suffix, ""

    candidates = (
        output_dir / "{}{}-{}{}".format(stem, tag, counter, extension)
        for counter in itertools.count(2)
    )
    return next(path for path in candidates if not path.exists())


def _default_file_mode() -> int:
    """Mode a plain open() would give a new file under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_atomic(path: Path, content: Union[str, bytes]) -> None:
    """Write content to path via a temporary file and an atomic rename.

    The temporary file is created owner-only, so it is given the usual
    umask-derived permissions before it replaces the target.
    """
    data = content if isinstance(content, bytes) else content.encode("utf-8")
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".{}.".format(path.name), suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.chmod(tmp_name, _default_file_mode())
        os.replace(tmp_name, path)
    except BaseException:
        logger.warning("Write to %s failed, removing temp file %s", path, tmp_name)
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


def save_output(
    output: FormatterOutput,
    stem: str,
    output_dir: Path,
) -> Path:
    """Save a single formatter output to disk.

    Args:
        output: The FormatterOutput to save.
        stem: Source filename stem.
        output_dir: Directory to save into.

    Returns:
        The Path where the file was saved.
    """
    path = resolve_output_path(stem, output.suffix, output_dir)
    write_atomic(path, output.content)
    logger.info("Saved %s (%s)", path, output.media_type)
    return path
