"""Shared test fixtures for the whisper_srt test suite.

WHY: Several test modules need the same realistic whisper.cpp output.
Centralizing it here keeps the sample consistent between the parser,
renderer and batch tests.

HOW: SAMPLE_TRANSCRIPT mirrors whisper.cpp ``--output-json-full`` output
(including the offsets, id and p fields the converter ignores). Fixtures
return it as a dict, as bytes, and as a parsed Document.

RULES:
- Segment 1 opens with [_BEG_] and closes with a [_TT_] marker
- Segment 2 has no tokens and relies on segment timing
- Segment 3 has no usable timing at all and must be skipped
- Segment 4 has only noise tokens
"""

import copy
import json
from typing import Any, Dict

import pytest

from whisper_srt.core.parser import parse_document


def _tok(text: str, start: str, end: str) -> Dict[str, Any]:
    return {
        "text": text,
        "timestamps": {"from": start, "to": end},
        "offsets": {"from": 0, "to": 0},
        "id": 0,
        "p": 0.9,
    }


SAMPLE_TRANSCRIPT: Dict[str, Any] = {
    "systeminfo": "AVX = 1 | NEON = 0",
    "model": {"type": "base"},
    "params": {"model": "models/ggml-base.bin", "language": "en"},
    "result": {"language": "en"},
    "transcription": [
        {
            "timestamps": {"from": "00:00:00,000", "to": "00:00:03,000"},
            "offsets": {"from": 0, "to": 3000},
            "text": " Hello there, everyone.",
            "tokens": [
                _tok("[_BEG_]", "00:00:00,000", "00:00:00,000"),
                _tok(" Hello", "00:00:00,320", "00:00:00,710"),
                _tok(" there", "00:00:00,710", "00:00:01,050"),
                _tok(",", "00:00:01,050", "00:00:01,100"),
                _tok(" everyone", "00:00:01,100", "00:00:01,840"),
                _tok(".", "00:00:01,840", "00:00:01,960"),
                _tok("[_TT_150]", "00:00:03,000", "00:00:03,000"),
            ],
        },
        {
            "timestamps": {"from": "00:00:03,000", "to": "00:00:05,500"},
            "offsets": {"from": 3000, "to": 5500},
            "text": " Welcome to the show.",
            "tokens": [],
        },
        {
            "timestamps": {"from": "", "to": ""},
            "offsets": {"from": 0, "to": 0},
            "text": " (lost)",
            "tokens": [_tok("[_TT_275]", "", "")],
        },
        {
            "timestamps": {"from": "00:00:06,000", "to": "00:00:07,000"},
            "offsets": {"from": 6000, "to": 7000},
            "text": " [Music]",
            "tokens": [
                _tok("[_BEG_]", "00:00:06,000", "00:00:06,000"),
                _tok("[_TT_350]", "00:00:07,000", "00:00:07,000"),
            ],
        },
    ],
}

SAMPLE_SRT = (
    "1\n"
    "00:00:00,320 --> 00:00:01,960\n"
    "Hello there, everyone.\n"
    "\n"
    "2\n"
    "00:00:03,000 --> 00:00:05,500\n"
    "Welcome to the show.\n"
    "\n"
    "3\n"
    "00:00:06,000 --> 00:00:07,000\n"
    "[Music]\n"
    "\n"
)


@pytest.fixture
def sample_transcript():
    """A deep copy of the whisper.cpp sample, safe to mutate."""
    return copy.deepcopy(SAMPLE_TRANSCRIPT)


@pytest.fixture
def sample_bytes():
    """The sample transcript encoded as whisper.cpp writes it."""
    return json.dumps(SAMPLE_TRANSCRIPT, indent=2).encode("utf-8")


@pytest.fixture
def sample_document(sample_bytes):
    """The sample transcript parsed into the Document IR."""
    return parse_document(sample_bytes)


@pytest.fixture
def expected_srt():
    """SRT text expected for the sample transcript (no BOM)."""
    return SAMPLE_SRT
