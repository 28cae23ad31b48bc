"""Caption timing extraction from token-level timestamps.

WHY: whisper.cpp's segment timestamps cover the whole decoding window,
including leading and trailing silence and special tokens ("[_BEG_]",
"[_TT_150]"). Captions timed from them appear early and linger. The first
and last spoken tokens give the real speech boundaries.

HOW: Scan the tokens forwards for the first speech token (its start) and
backwards for the last one (its end). If either scan comes up empty, or
gives an empty timecode, use the segment's own timing for both bounds.

RULES:
- Speech token: text is non-empty and does not start with "[_"
- Fallback is all-or-nothing: never one token bound with one segment bound
- A segment whose fallback timing is also empty resolves to an incomplete
  pair; the renderer skips it
- Nothing here raises or has side effects
"""

from __future__ import annotations

from typing import Iterable, Optional, Tuple

from whisper_srt.config import NOISE_MARKER_PREFIX
from whisper_srt.core.ir import Caption, Segment, TimeRange, Token


def is_noise_token(token: Token) -> bool:
    """True for tokens that must not bound a caption (markers and empty text)."""
    return not token.text or token.text.startswith(NOISE_MARKER_PREFIX)


def _first_speech_token(tokens: Iterable[Token]) -> Optional[Token]:
    for token in tokens:
        if not is_noise_token(token):
            return token
    return None


def resolve_timing(segment: Segment) -> Tuple[str, str]:
    """Resolve the (start, end) timecodes for one segment.

    Args:
        segment: A parsed transcript segment.

    Returns:
        (start, end) strings. Either may be empty when neither the tokens
        nor the segment carry usable timing.
    """
    first = _first_speech_token(segment.tokens)
    last = _first_speech_token(reversed(segment.tokens))

    start = first.range.start if first is not None else ""
    end = last.range.end if last is not None else ""

    if not start or not end:
        return segment.range.as_pair()
    return start, end


def extract_caption(segment: Segment, index: int) -> Optional[Caption]:
    """Build the caption for ``segment`` numbered ``index``, or None to skip it."""
    timing = TimeRange(*resolve_timing(segment))
    if not timing.is_complete:
        return None
    return Caption(index=index, range=timing, text=segment.text.strip())
