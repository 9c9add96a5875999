#!/usr/bin/env python3
"""
fb_frame.py

Fixed 320x240 framebuffer and the two conversions around it:

  BMP blob  -> resize -> RGB565 words       (encode)
  hex lines -> RGB565 words -> RGB888 frame (decode / verify)
"""

from __future__ import annotations
import logging
from typing import Iterable

import numpy as np

from fb_bmp import read_bmp24
from fb_hexmem import decode_hex_stream
from fb_resample import fit_to_frame
from fb_rgb565 import rgb565_to_rgb888, rgb888_to_rgb565

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

WIDTH = 320
HEIGHT = 240
TOTAL_PIXELS = WIDTH * HEIGHT

log = logging.getLogger(__name__)


def encode_bmp_blob(blob: bytes, width: int = WIDTH, height: int = HEIGHT) -> np.ndarray:
    """Decode a 24-bit BMP and return a (height, width) uint16 RGB565 frame."""
    hdr, rgb = read_bmp24(blob)
    src_h, src_w = rgb.shape[:2]
    log.info("Input image: %dx%d pixels (24-bit BMP, %s)",
             src_w, src_h, "top-down" if hdr.top_down else "bottom-up")

    if (src_w, src_h) == (width, height):
        log.info("Image already %dx%d, skipping resize.", width, height)
    else:
        log.info("Resizing to %dx%d using bilinear interpolation...", width, height)
    frame = fit_to_frame(rgb, width, height)
    return rgb888_to_rgb565(frame)


def decode_hex_lines(lines: Iterable[str], width: int = WIDTH, height: int = HEIGHT):
    """
    Rebuild an RGB888 frame from a lenient RGB565 hex stream.

    Returns:
        (rgb, report) with rgb shaped (height, width, 3).
    """
    words, report = decode_hex_stream(lines, width * height)
    rgb = rgb565_to_rgb888(words.reshape((height, width)))
    return rgb, report
