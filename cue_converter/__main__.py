"""Package entry point for ``python -m cue_converter``.

WHY: Users run the converter as ``python -m cue_converter input.vtt``.
Python's ``-m`` flag looks for ``__main__.py`` inside the package and
executes it.

HOW: Delegates straight to the CLI's main() function.
"""

from cue_converter.cli import main

if __name__ == "__main__":
    main()
