#!/usr/bin/env python3
"""
fb_hexmem.py

RGB565 memory-image text streams, one pixel per line, as loaded by
Verilog ``$readmemh``.

Writing is strict: exactly four uppercase hex digits per line, row-major,
nothing else. Reading is lenient, because the files are often hand-edited or
dumped from a simulation that did not finish:

- ``// ...`` comment lines, blank lines, lines containing ``x``/``X``
  (unknown/placeholder values) and malformed lines are skipped;
- reading stops once ``total`` values are collected;
- if the stream ends early, the remaining slots repeat the last valid value
  (0 if there was none).

The fill keeps the output a displayable full frame but hides truncation, so
``decode_hex_stream`` also reports how many lines of each kind it saw and how
many slots were filled.
"""

from __future__ import annotations
import enum
import logging
import string
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, Optional, TextIO

import numpy as np

log = logging.getLogger(__name__)

# Longest line content considered; anything past it is ignored.
MAX_LINE_CHARS = 63
MAX_DIGITS = 4

C_WHITESPACE = " \t\n\v\f\r"
HEX_DIGITS = frozenset(string.hexdigits)


class LineKind(enum.Enum):
    DATA = "data"
    COMMENT = "comment"
    BLANK = "blank"
    PLACEHOLDER = "placeholder"
    MALFORMED = "malformed"


@dataclass
class DecodeReport:
    total: int
    counts: Dict[LineKind, int] = field(default_factory=lambda: {k: 0 for k in LineKind})
    filled: int = 0

    @property
    def parsed(self) -> int:
        return self.counts[LineKind.DATA]

    @property
    def skipped(self) -> int:
        return sum(n for k, n in self.counts.items() if k is not LineKind.DATA)


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------

def format_hex_lines(arr565: np.ndarray) -> Iterator[str]:
    for v in np.asarray(arr565, dtype=np.uint16).ravel():
        yield f"{int(v):04X}\n"


def write_hex(stream: TextIO, arr565: np.ndarray) -> int:
    n = 0
    for line in format_hex_lines(arr565):
        stream.write(line)
        n += 1
    return n


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------

def _line_content(line: str) -> str:
    """Cut at the first CR/LF or after MAX_LINE_CHARS, whichever is first."""
    end = 0
    while end < len(line) and end < MAX_LINE_CHARS and line[end] not in "\r\n":
        end += 1
    return line[:end]


def classify_line(line: str) -> tuple[LineKind, Optional[int]]:
    """
    Classify one input line.

    Returns:
        (kind, value) where value is the 16-bit word for DATA lines, else None.
    """
    line = line.lstrip(C_WHITESPACE)
    if line.startswith("//"):
        return LineKind.COMMENT, None

    content = _line_content(line)
    if not content:
        return LineKind.BLANK, None
    if "x" in content or "X" in content:
        return LineKind.PLACEHOLDER, None
    if len(content) > MAX_DIGITS or not all(c in HEX_DIGITS for c in content):
        return LineKind.MALFORMED, None

    return LineKind.DATA, int(content, 16) & 0xFFFF


def decode_hex_stream(lines: Iterable[str], total: int):
    """
    Collect exactly ``total`` RGB565 words from ``lines``.

    Returns:
        (values, report) where values is a 1-D uint16 array of length total.
    """
    out = np.zeros(total, dtype=np.uint16)
    report = DecodeReport(total=total)
    written = 0
    last_valid = 0

    if total > 0:
        for lineno, line in enumerate(lines, 1):
            kind, value = classify_line(line)
            report.counts[kind] += 1
            if value is None:
                log.debug("line %d: skipped %s: %r", lineno, kind.value, line[:MAX_LINE_CHARS])
                continue
            out[written] = value
            last_valid = value
            written += 1
            if written == total:
                break

    if written < total:
        out[written:] = last_valid
        report.filled = total - written
        log.warning(
            "Input ended after %d of %d pixels; filled %d with last value %04X",
            written, total, report.filled, last_valid,
        )

    log.debug(
        "Hex stream: %s",
        ", ".join(f"{k.value}={n}" for k, n in report.counts.items()),
    )
    return out, report
