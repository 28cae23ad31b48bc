"""Parse whisper.cpp JSON bytes into the Document IR.

WHY: Input files come from whisper.cpp's ``--output-json-full`` mode, but
also from hand edits, older builds and truncated runs. A bad file must
fail with a typed error that names the problem, never with a KeyError or
AttributeError deep inside the renderer.

HOW: Decode and load the JSON, validate its shape against TRANSCRIPT_SCHEMA
with jsonschema, then map it onto the IR dataclasses. A missing or null
"transcription" is not a shape error: it parses into Document(segments=None)
and the renderer reports it as MalformedInputError.

RULES:
- Undecodable bytes or invalid JSON → ParseError
- Wrong JSON type anywhere in the known structure → ParseError
- Null or missing strings/objects inside segments and tokens → empty values
- A null segment or token element reads as an empty segment or token
- Unknown keys (offsets, id, p, systeminfo, ...) are ignored
- A UTF-8 BOM at the start of the input is accepted
"""

from __future__ import annotations

import json
from typing import Any, Dict

from jsonschema import Draft7Validator
from jsonschema.exceptions import best_match

from whisper_srt.core.ir import Document
from whisper_srt.errors import ParseError

_NULLABLE_STRING = {"type": ["string", "null"]}

_TIMESTAMPS = {
    "type": ["object", "null"],
    "properties": {
        "from": _NULLABLE_STRING,
        "to": _NULLABLE_STRING,
    },
}

TRANSCRIPT_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "whisper.cpp JSON transcript",
    "type": ["object", "null"],
    "properties": {
        "transcription": {
            "type": ["array", "null"],
            "items": {
                "type": ["object", "null"],
                "properties": {
                    "timestamps": _TIMESTAMPS,
                    "text": _NULLABLE_STRING,
                    "tokens": {
                        "type": ["array", "null"],
                        "items": {
                            "type": ["object", "null"],
                            "properties": {
                                "text": _NULLABLE_STRING,
                                "timestamps": _TIMESTAMPS,
                            },
                        },
                    },
                },
            },
        },
    },
}

_VALIDATOR = Draft7Validator(TRANSCRIPT_SCHEMA)


def load_json(content: bytes) -> Any:
    """Decode raw file bytes into JSON data, raising ParseError on failure."""
    try:
        return json.loads(content)
    except ValueError as e:
        # JSONDecodeError and UnicodeDecodeError are both ValueErrors
        raise ParseError("invalid JSON: {}".format(e)) from e


def validate_shape(data: Any) -> None:
    """Check ``data`` against TRANSCRIPT_SCHEMA.

    Raises:
        ParseError: naming the first offending location, e.g.
            ``transcription/0/tokens/2/text: 5 is not of type 'string', 'null'``.
    """
    error = best_match(_VALIDATOR.iter_errors(data))
    if error is None:
        return
    location = "/".join(str(p) for p in error.absolute_path) or "<root>"
    raise ParseError("unexpected structure at {}: {}".format(location, error.message))


def parse_document(content: bytes) -> Document:
    """Parse one whisper.cpp JSON file.

    Args:
        content: Raw file bytes.

    Returns:
        The Document IR. segments is None when "transcription" is absent.

    Raises:
        ParseError: The bytes are not a valid transcript document.
    """
    data = load_json(content)
    validate_shape(data)
    return Document.from_dict(data)
