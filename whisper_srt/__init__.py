"""Whisper transcript to SRT converter.

WHY: whisper.cpp writes its full JSON output with per-token timing, but
its own SRT writer uses segment-level timing, which drifts whenever a
segment opens or closes on silence or a non-speech marker. This package
rebuilds each caption's timing from the first and last spoken token.

HOW: Three layers: parse (bytes to Document IR), render (Document to
SRT text, one caption per segment), batch (a fixed worker pool that
converts every JSON file in a directory and writes the .srt next to it).

RULES:
- The core (core/) is pure: no file I/O, no logging, no global state
- One input file → one output file, failures isolated per file
- Captions are numbered by emission order, starting at 1
"""

__version__ = "0.1.0"
