"""Configuration constants and .env loading.

WHY: The converter's behaviour is fixed: file extensions, the noise
marker, the output encoding: but the worker pool size and log level
are environment concerns that differ between a laptop and a build box.
Keeping every value here makes them easy to find and override.

HOW: python-dotenv loads the .env file on import. Fixed values are plain
module-level constants. Environment overrides are read through small
loader functions that fail with a clear message on bad input.

RULES:
- NOISE_MARKER_PREFIX is fixed, never read from the environment
- WHISPER_SRT_WORKERS overrides the pool size (default: CPU count)
- WHISPER_SRT_LOG_LEVEL overrides the log level (default: INFO)
- Invalid overrides raise ValueError; the CLI reports them and exits 1
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

# Load .env from the directory the converter is run from
load_dotenv()

# ---------------------------------------------------------------------------
# Fixed format constants
# ---------------------------------------------------------------------------

NOISE_MARKER_PREFIX = "[_"
"""Prefix whisper.cpp uses for special tokens such as [_BEG_] and [_TT_150]."""

INPUT_EXTENSION = ".json"
OUTPUT_EXTENSION = ".srt"

UTF8_BOM = b"\xef\xbb\xbf"
"""Written before every SRT so players detect UTF-8 instead of a legacy codepage."""

# ---------------------------------------------------------------------------
# Environment overrides
# ---------------------------------------------------------------------------

DEFAULT_LOG_LEVEL = "INFO"


def default_worker_count() -> int:
    """Number of workers when nothing is configured: one per CPU."""
    return os.cpu_count() or 1


def load_worker_count() -> int:
    """Load the worker pool size from the environment.

    WHY: The pool is sized to the machine by default, but CI runners and
    shared hosts often report more CPUs than they should use.

    HOW: Reads WHISPER_SRT_WORKERS (populated by python-dotenv). Falls
    back to default_worker_count() when unset or blank.

    RULES:
    - Raises ValueError if the value is not an integer or is below 1
    """
    raw = os.getenv("WHISPER_SRT_WORKERS", "").strip()
    if not raw:
        return default_worker_count()
    try:
        count = int(raw)
    except ValueError:
        raise ValueError(
            "WHISPER_SRT_WORKERS must be a whole number, got {!r}".format(raw)
        ) from None
    if count < 1:
        raise ValueError(
            "WHISPER_SRT_WORKERS must be at least 1, got {}".format(count)
        )
    return count


def load_log_level() -> str:
    """Load the log level name from the environment (upper-cased).

    RULES:
    - Raises ValueError for names the logging module does not know
    """
    name = os.getenv("WHISPER_SRT_LOG_LEVEL", "").strip().upper() or DEFAULT_LOG_LEVEL
    if not isinstance(logging.getLevelName(name), int):
        raise ValueError(
            "WHISPER_SRT_LOG_LEVEL must be a logging level name "
            "(DEBUG, INFO, WARNING, ERROR, CRITICAL), got {!r}".format(name)
        )
    return name
