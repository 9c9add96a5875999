"""Shared fixtures: hand-built BMP blobs."""
import re
import struct

import numpy as np
import pytest


def build_bmp(rows, *, top_down=False, bit_count=24, compression=0, signature=b"BM"):
    """Build a BMP blob from top-down rows of (r, g, b) tuples.

    Pixel bytes are written B, G, R with each row zero-padded to 4 bytes,
    in file order: bottom row first unless top_down.
    """
    height = len(rows)
    width = len(rows[0])
    stride = (width * 3 + 3) & ~3
    file_rows = rows if top_down else rows[::-1]
    pix = b""
    for row in file_rows:
        raw = b"".join(bytes((b, g, r)) for r, g, b in row)
        pix += raw + b"\x00" * (stride - len(raw))

    off = 54
    filehdr = struct.pack("<2sIHHI", signature, off + len(pix), 0, 0, off)
    infohdr = struct.pack(
        "<IiiHHIIiiII", 40, width, -height if top_down else height,
        1, bit_count, compression, len(pix), 0, 0, 0, 0,
    )
    return filehdr + infohdr + pix


@pytest.fixture
def make_bmp():
    return build_bmp


@pytest.fixture
def corners_2x2():
    """2x2 image with distinct corner colors, top-down."""
    return [
        [(255, 0, 0), (0, 255, 0)],
        [(0, 0, 255), (255, 255, 255)],
    ]


@pytest.fixture
def gradient_rgb():
    """Deterministic 5x3 (WxH) RGB array with an odd width (row padding)."""
    h, w = 3, 5
    rgb = np.zeros((h, w, 3), dtype=np.uint8)
    for y in range(h):
        for x in range(w):
            rgb[y, x] = (x * 50, y * 100, (x + y) * 20)
    return rgb


def parse_ppm(blob):
    """Parse a binary P6 PPM with maxval 255 into an (H, W, 3) array."""
    m = re.match(rb"^P6\s+(\d+)\s+(\d+)\s+255\s", blob)
    assert m, blob[:16]
    w, h = int(m.group(1)), int(m.group(2))
    pix = blob[m.end():]
    assert len(pix) == w * h * 3
    return np.frombuffer(pix, dtype=np.uint8).reshape((h, w, 3))


@pytest.fixture
def read_ppm():
    return parse_ppm
