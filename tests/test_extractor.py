"""Unit tests for caption timing extraction.

WHY: Timing extraction is the reason this converter exists. A wrong
bound shifts a caption on screen; a mixed bound (one from a token, one
from the segment) produces captions that overlap their neighbours.

HOW: Tests build Segments directly from the IR and cover:
  - Noise-token classification
  - First/last speech token selection
  - All-or-nothing fallback to segment timing
  - Unresolvable segments
  - extract_caption text trimming and numbering
"""

import pytest

from whisper_srt.core.extractor import extract_caption, is_noise_token, resolve_timing
from whisper_srt.core.ir import Segment, TimeRange, Token


def _token(text, start, end):
    return Token(text=text, range=TimeRange(start, end))


def _segment(tokens, start="00:00:10,000", end="00:00:20,000", text=" text"):
    return Segment(range=TimeRange(start, end), text=text, tokens=tuple(tokens))


class TestNoiseTokens:
    """Markers starting with "[_" and empty tokens are noise."""

    @pytest.mark.parametrize("text", ["[_BEG_]", "[_TT_150]", "[_SOT_]", "[_", ""])
    def test_noise(self, text):
        assert is_noise_token(_token(text, "a", "b"))

    @pytest.mark.parametrize("text", [" hello", "[Music]", "_[", " [_BEG_]", "."])
    def test_speech(self, text):
        assert not is_noise_token(_token(text, "a", "b"))


class TestTokenTiming:
    """Start comes from the first speech token, end from the last."""

    def test_noise_prefix_is_skipped(self):
        segment = _segment([
            _token("[_NOISE_]", "00:00:00,000", "00:00:00,100"),
            _token("hello", "00:00:00,500", "00:00:00,900"),
            _token("world", "00:00:01,000", "00:00:01,400"),
        ])
        assert resolve_timing(segment) == ("00:00:00,500", "00:00:01,400")

    def test_noise_on_both_ends_is_skipped(self):
        segment = _segment([
            _token("[_BEG_]", "00:00:00,000", "00:00:00,000"),
            _token(" Hi", "00:00:00,200", "00:00:00,400"),
            _token("[_TT_50]", "00:00:01,000", "00:00:01,000"),
        ])
        assert resolve_timing(segment) == ("00:00:00,200", "00:00:00,400")

    def test_empty_text_tokens_are_skipped(self):
        segment = _segment([
            _token("", "00:00:00,000", "00:00:00,100"),
            _token(" yes", "00:00:00,300", "00:00:00,600"),
            _token("", "00:00:00,700", "00:00:00,800"),
        ])
        assert resolve_timing(segment) == ("00:00:00,300", "00:00:00,600")

    def test_single_speech_token_bounds_both_ends(self):
        segment = _segment([_token(" Okay", "00:00:02,000", "00:00:02,500")])
        assert resolve_timing(segment) == ("00:00:02,000", "00:00:02,500")

    def test_segment_timing_is_ignored_when_tokens_resolve(self):
        segment = _segment(
            [_token(" a", "00:00:11,000", "00:00:12,000")],
            start="00:00:10,000",
            end="00:00:20,000",
        )
        assert resolve_timing(segment) == ("00:00:11,000", "00:00:12,000")


class TestFallback:
    """Unusable token timing falls back to the segment for BOTH bounds."""

    def test_no_tokens(self):
        segment = _segment([], start="00:00:01,000", end="00:00:02,000")
        assert resolve_timing(segment) == ("00:00:01,000", "00:00:02,000")

    def test_all_noise(self):
        segment = _segment(
            [
                _token("[_BEG_]", "00:00:00,000", "00:00:00,000"),
                _token("[_TT_100]", "00:00:05,000", "00:00:05,000"),
            ],
            start="00:00:01,000",
            end="00:00:02,000",
        )
        assert resolve_timing(segment) == ("00:00:01,000", "00:00:02,000")

    def test_empty_token_start_replaces_both_bounds(self):
        segment = _segment(
            [
                _token(" first", "", "00:00:00,500"),
                _token(" last", "00:00:00,600", "00:00:00,900"),
            ],
            start="00:00:00,000",
            end="00:00:03,000",
        )
        # The token end (00:00:00,900) is valid but is replaced too
        assert resolve_timing(segment) == ("00:00:00,000", "00:00:03,000")

    def test_empty_token_end_replaces_both_bounds(self):
        segment = _segment(
            [
                _token(" first", "00:00:00,100", "00:00:00,500"),
                _token(" last", "00:00:00,600", ""),
            ],
            start="00:00:00,000",
            end="00:00:03,000",
        )
        assert resolve_timing(segment) == ("00:00:00,000", "00:00:03,000")

    def test_fallback_with_empty_segment_timing_is_unresolved(self):
        segment = _segment([_token("[_BEG_]", "x", "y")], start="", end="")
        assert resolve_timing(segment) == ("", "")

    def test_fallback_copies_partial_segment_timing(self):
        segment = _segment([], start="00:00:01,000", end="")
        assert resolve_timing(segment) == ("00:00:01,000", "")


class TestExtractCaption:
    """extract_caption numbers, trims, and skips."""

    def test_text_is_trimmed(self):
        segment = _segment([_token(" hi", "00:00:01,000", "00:00:02,000")], text="  hi  ")
        caption = extract_caption(segment, 1)
        assert caption.text == "hi"

    def test_index_is_passed_through(self):
        segment = _segment([_token(" hi", "00:00:01,000", "00:00:02,000")])
        assert extract_caption(segment, 7).index == 7

    def test_range_holds_resolved_timing(self):
        segment = _segment([_token(" hi", "00:00:01,000", "00:00:02,000")])
        assert extract_caption(segment, 1).range == TimeRange("00:00:01,000", "00:00:02,000")

    def test_unresolved_segment_returns_none(self):
        segment = _segment([], start="", end="00:00:02,000")
        assert extract_caption(segment, 1) is None

    def test_pure(self):
        segment = _segment([_token(" hi", "00:00:01,000", "00:00:02,000")])
        assert extract_caption(segment, 1) == extract_caption(segment, 1)
