"""Command-line interface for the whisper.cpp JSON to SRT converter.

WHY: The converter is run by hand in a folder of finished transcripts.
It should need no arguments in the common case and say clearly, per
file, what it did.

HOW: argparse accepts an optional directory (default: the current working
directory) and --workers. Logging goes to stderr. The batch runner does
the work; this module only reports the BatchReport and picks the exit
code.

RULES:
- Exit 0 when every file converted (or there was nothing to convert)
- Exit 1 when any file failed, the directory is unreadable, or the
  configuration is invalid
- Exit 130 when interrupted with Ctrl-C
- Status output goes to stderr (not stdout)
"""

from __future__ import annotations

import argparse
import logging
import sys
import threading
from pathlib import Path
from typing import List, Optional

from whisper_srt import __version__
from whisper_srt.batch import BatchReport, run_directory
from whisper_srt.config import INPUT_EXTENSION, load_log_level, load_worker_count

logger = logging.getLogger(__name__)

_RULE = "=" * 40


def _configure_logging(level: str) -> None:
    """Send log records to stderr with a short, human-readable format."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-7s %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError("expected a whole number, got {!r}".format(value))
    if number < 1:
        raise argparse.ArgumentTypeError("must be at least 1, got {}".format(number))
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() lets tests inspect
    the parser without running a batch.

    RULES:
    - Positional: directory (optional, default CWD)
    - Optional: --workers (default: WHISPER_SRT_WORKERS or CPU count)
    """
    parser = argparse.ArgumentParser(
        prog="whisper_srt",
        description="Convert every whisper.cpp JSON transcript in a directory "
                    "to an SRT file timed from its spoken tokens.",
    )
    parser.add_argument(
        "directory",
        nargs="?",
        default=None,
        help="Directory containing {} files (default: current directory).".format(INPUT_EXTENSION),
    )
    parser.add_argument(
        "--workers",
        type=_positive_int,
        default=None,
        help="Number of files converted in parallel (default: one per CPU).",
    )
    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s {}".format(__version__),
    )
    return parser


def _log_report(report: BatchReport) -> None:
    logger.info(_RULE)
    for result in report.failed:
        logger.error("  [failed] %s", result.error)
    logger.info(
        "Done: processed %d JSON file(s), %d converted, %d failed.",
        report.total, len(report.succeeded), len(report.failed),
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Returns the process exit code instead of calling sys.exit()
    """
    args = build_parser().parse_args(argv)
    try:
        level = load_log_level()
    except ValueError as e:
        # Logging is not configured yet, so report straight to stderr
        print("Error: {}".format(e), file=sys.stderr)
        return 1
    _configure_logging(level)

    directory = Path(args.directory) if args.directory else Path.cwd()
    try:
        workers = args.workers if args.workers is not None else load_worker_count()
    except ValueError as e:
        logger.error("Error: %s", e)
        return 1

    logger.info("Converting JSON files in %s", directory.resolve())

    cancel_event = threading.Event()
    try:
        report = run_directory(directory, workers=workers, cancel_event=cancel_event)
    except OSError as e:
        logger.error("Error: cannot read directory %s: %s", directory, e)
        return 1

    if report.total == 0:
        logger.info("Nothing to do: no %s files found.", INPUT_EXTENSION)
        return 0

    _log_report(report)
    if cancel_event.is_set():
        logger.warning("Cancelled by user.")
        return 130
    return 0 if report.ok else 1


if __name__ == "__main__":
    sys.exit(main())
