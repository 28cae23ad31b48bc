"""Typed errors for converting one transcript file.

WHY: The batch runner must isolate failures per file and report what went
wrong for each one. A small exception hierarchy lets it catch every
expected failure with one except clause while callers can still tell a
missing file from a broken one.

HOW: ConversionError is the base and optionally carries the path of the
file being converted. Each stage of the pipeline raises its own subclass.

RULES:
- ReadError: input bytes could not be obtained
- ParseError: bytes are not JSON, not text, or not the expected shape
- MalformedInputError: JSON is fine but "transcription" is missing or null
- WriteError: the .srt could not be written
- ConversionCancelled: the batch was cancelled before the file finished
- The caption extractor never raises any of these
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class ConversionError(Exception):
    """Base class for every per-file conversion failure.

    Attributes:
        message: Human-readable description without the path.
        path: The file being converted, when known.
    """

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        self.message = message
        self.path = path
        if path is not None:
            super().__init__("{}: {}".format(Path(path).name, message))
        else:
            super().__init__(message)

    def with_path(self, path: Path) -> "ConversionError":
        """Return a copy of this error bound to ``path``."""
        error = type(self)(self.message, path)
        error.__cause__ = self.__cause__
        return error


class ReadError(ConversionError):
    """Raised when the input file cannot be read."""


class ParseError(ConversionError):
    """Raised when the input is not valid transcript JSON.

    Covers undecodable bytes, JSON syntax errors and values of the wrong
    type (e.g. a number where token text should be).
    """


class MalformedInputError(ConversionError):
    """Raised when the document parses but has no "transcription" list.

    A present but empty list is valid and is NOT this error.
    """


class WriteError(ConversionError):
    """Raised when the output file cannot be written."""


class ConversionCancelled(ConversionError):
    """Raised when cancellation is requested while a file is pending or in progress."""
