"""Package entry point for ``python -m whisper_srt``.

WHY: Users run the converter from the directory holding their whisper.cpp
JSON files. Python's ``-m`` flag looks for ``__main__.py`` inside the
package and executes it.

HOW: Delegates to the CLI's main() function and exits with its status.
"""

import sys

from whisper_srt.cli import main

if __name__ == "__main__":
    sys.exit(main())
