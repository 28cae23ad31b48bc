"""Intermediate representation dataclasses for whisper.cpp transcripts.

WHY: whisper.cpp's JSON nests timing under "timestamps" with "from"/"to"
keys on both segments and tokens. The extractor and renderer should not
care about key names or missing fields, so the parser maps the JSON onto
a small typed hierarchy once, and everything downstream works with that.

HOW: Five dataclasses:
  TimeRange: an opaque start/end timecode pair
  Token    : one recognised word or special marker with its timing
  Segment  : one caption-worthy span: timing, text, tokens
  Document : the root of one input file
  Caption  : one numbered SRT block, derived from a Segment

RULES:
- Timecodes are kept as strings ("00:00:01,960"); they are never parsed
- An empty string means "no timing", not "time zero"
- Document.segments is None when the input had no "transcription" list;
  an empty list is a valid, empty transcript
- Missing or null fields read as empty strings / empty lists
- Instances are frozen: the core never mutates a parsed document
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple


@dataclass(frozen=True)
class TimeRange:
    """A start/end pair of formatted timecodes.

    RULES:
    - start/end: "HH:MM:SS,mmm" strings, or "" when absent
    - is_complete is the only check the core performs on them
    """

    start: str = ""
    end: str = ""

    @property
    def is_complete(self) -> bool:
        return bool(self.start) and bool(self.end)

    def as_pair(self) -> Tuple[str, str]:
        return self.start, self.end

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> TimeRange:
        """Parse a whisper.cpp ``timestamps`` object ({"from": ..., "to": ...})."""
        if not data:
            return cls()
        return cls(start=data.get("from") or "", end=data.get("to") or "")


@dataclass(frozen=True)
class Token:
    """One recognised unit within a segment.

    WHY: whisper.cpp emits words, sub-word pieces, and special markers
    ("[_BEG_]", "[_TT_150]") in the same token list. The extractor needs
    each one's text to decide whether it is speech, and its timing to
    bound the caption.
    """

    text: str
    range: TimeRange = field(default_factory=TimeRange)

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> Token:
        data = data or {}
        return cls(
            text=data.get("text") or "",
            range=TimeRange.from_dict(data.get("timestamps")),
        )


@dataclass(frozen=True)
class Segment:
    """One span of transcript that becomes at most one caption.

    RULES:
    - range: whole-segment timing, used when token timing is unusable
    - text: caption text as whisper.cpp wrote it (usually with a leading space)
    - tokens: in spoken order
    """

    range: TimeRange
    text: str
    tokens: Tuple[Token, ...] = ()

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> Segment:
        """A null segment reads as an empty one, which the renderer skips."""
        data = data or {}
        return cls(
            range=TimeRange.from_dict(data.get("timestamps")),
            text=data.get("text") or "",
            tokens=tuple(Token.from_dict(t) for t in data.get("tokens") or ()),
        )


@dataclass(frozen=True)
class Document:
    """The root of one whisper.cpp JSON file.

    RULES:
    - segments is None when "transcription" was missing or null
    - segments is an empty tuple for a transcript with no speech
    """

    segments: Optional[Tuple[Segment, ...]]

    @property
    def is_malformed(self) -> bool:
        return self.segments is None

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> Document:
        """Build a Document from already-validated JSON data."""
        raw: Optional[List[Any]] = (data or {}).get("transcription")
        if raw is None:
            return cls(segments=None)
        return cls(segments=tuple(Segment.from_dict(s) for s in raw))


@dataclass(frozen=True)
class Caption:
    """One emitted SRT block.

    RULES:
    - index: 1-based emission order, contiguous across skipped segments
    - range: both bounds non-empty
    - text: segment text with surrounding whitespace stripped
    """

    index: int
    range: TimeRange
    text: str
