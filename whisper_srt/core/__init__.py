"""Core parsing, timing extraction and SRT rendering.

WHY: The conversion itself is small and must be exactly right, so it is
kept free of file I/O, threads and logging. Everything here is a pure
function of its input and can be tested without touching disk.

HOW: ir.py defines the data structures, parser.py builds them from bytes,
extractor.py resolves each segment's caption timing, renderer.py turns a
Document into SRT text. convert_bytes() chains the three.

RULES:
- No module in core/ reads or writes files
- The output of convert_bytes() is UTF-8 without a BOM
"""

from __future__ import annotations

from typing import Optional

from whisper_srt.core.parser import parse_document
from whisper_srt.core.renderer import CancelCheck, render


def convert_bytes(content: bytes, should_cancel: Optional[CancelCheck] = None) -> bytes:
    """Convert whisper.cpp JSON bytes to SRT bytes (UTF-8, no BOM)."""
    return render(parse_document(content), should_cancel).encode("utf-8")


__all__ = ["convert_bytes"]
