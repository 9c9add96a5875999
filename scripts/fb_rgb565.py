#!/usr/bin/env python3
"""
fb_rgb565.py

RGB888 <-> RGB565 conversion for the framebuffer memory image.

Layout of a packed word: [15:11]=R, [10:5]=G, [4:0]=B.

Encoding drops the low bits of each channel (no rounding). Decoding expands
each field with floor(field * 255 / max_field), which maps 0 -> 0 and the
field maximum -> 255 but is not an exact inverse of encoding.
"""

from __future__ import annotations
import numpy as np

R_MAX = 0x1F
G_MAX = 0x3F
B_MAX = 0x1F


def rgb888_to_rgb565(rgb: np.ndarray) -> np.ndarray:
    if rgb.ndim != 3 or rgb.shape[2] != 3:
        raise ValueError(f"Expected HxWx3 RGB array, got shape {rgb.shape}")
    r = (rgb[:, :, 0].astype(np.uint16) >> 3) & R_MAX
    g = (rgb[:, :, 1].astype(np.uint16) >> 2) & G_MAX
    b = (rgb[:, :, 2].astype(np.uint16) >> 3) & B_MAX
    return ((r << 11) | (g << 5) | b).astype(np.uint16)


def rgb565_to_rgb888(arr565: np.ndarray) -> np.ndarray:
    """Expand packed words of any shape to a trailing RGB axis (uint8)."""
    # uint32 so that field * 255 cannot wrap
    a = np.asarray(arr565).astype(np.uint32) & 0xFFFF
    r = (a >> 11) & R_MAX
    g = (a >> 5) & G_MAX
    b = a & B_MAX

    r8 = (r * 255 // R_MAX).astype(np.uint8)
    g8 = (g * 255 // G_MAX).astype(np.uint8)
    b8 = (b * 255 // B_MAX).astype(np.uint8)
    return np.stack([r8, g8, b8], axis=-1)
