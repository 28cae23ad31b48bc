"""SRT rendering for a parsed transcript.

WHY: Each whisper.cpp segment becomes one SubRip block. Segments without
usable timing must be dropped without leaving a hole in the numbering,
since some players stop at the first out-of-sequence index.

HOW: build_captions() walks the segments in order, asks the extractor for
each caption and numbers the accepted ones from 1. render() joins the
formatted blocks into one string.

RULES:
- Block layout: index line, "start --> end" line, text line, blank line
- Output ends with the last block's blank line; nothing after it
- No captions → empty string
- A document without a "transcription" list raises MalformedInputError
- should_cancel (optional) is checked before every segment
"""

from __future__ import annotations

from typing import Callable, List, Optional

from whisper_srt.core.extractor import extract_caption
from whisper_srt.core.ir import Caption, Document
from whisper_srt.errors import ConversionCancelled, MalformedInputError

CancelCheck = Callable[[], bool]


def build_captions(
    document: Document,
    should_cancel: Optional[CancelCheck] = None,
) -> List[Caption]:
    """Extract the numbered captions for every usable segment.

    Args:
        document: Parsed transcript.
        should_cancel: Returns True when the caller wants to stop.

    Returns:
        Captions in segment order, indexed 1..n without gaps.

    Raises:
        MalformedInputError: document.segments is None.
        ConversionCancelled: should_cancel() returned True.
    """
    if document.is_malformed:
        raise MalformedInputError('missing "transcription" list')

    captions: List[Caption] = []
    for segment in document.segments:
        if should_cancel is not None and should_cancel():
            raise ConversionCancelled("cancelled while rendering")
        caption = extract_caption(segment, len(captions) + 1)
        if caption is not None:
            captions.append(caption)
    return captions


def format_caption(caption: Caption) -> str:
    """Serialize one caption as an SRT block, including its trailing blank line."""
    return "{}\n{} --> {}\n{}\n\n".format(
        caption.index,
        caption.range.start,
        caption.range.end,
        caption.text,
    )


def render(
    document: Document,
    should_cancel: Optional[CancelCheck] = None,
) -> str:
    """Render a parsed transcript as SRT text (no BOM)."""
    return "".join(format_caption(c) for c in build_captions(document, should_cancel))
