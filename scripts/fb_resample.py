#!/usr/bin/env python3
"""
fb_resample.py

Bilinear resize of HxWx3 uint8 RGB arrays.

Sample positions are dst * (src / dst) with the right and bottom neighbours
clamped to the last column/row, so nothing outside the source is read. Each
channel is blended independently in 32-bit float and truncated to uint8.
"""

from __future__ import annotations
import logging

import numpy as np

from fb_bmp import AllocationError

log = logging.getLogger(__name__)


def _axis_taps(src_n: int, dst_n: int):
    scale = np.float32(src_n) / np.float32(dst_n)
    pos = np.arange(dst_n, dtype=np.float32) * scale
    i0 = pos.astype(np.int64)  # pos >= 0, so truncation == floor
    i1 = np.minimum(i0 + 1, src_n - 1)
    frac = (pos - i0.astype(np.float32)).astype(np.float32)
    return i0, i1, frac


def resize_bilinear(rgb: np.ndarray, out_h: int, out_w: int) -> np.ndarray:
    """
    Resize an (H, W, 3) uint8 array to (out_h, out_w, 3).

    Returns the input array itself when it is already the requested size.
    """
    if rgb.ndim != 3 or rgb.shape[2] != 3:
        raise ValueError(f"Expected HxWx3 RGB array, got shape {rgb.shape}")
    in_h, in_w = rgb.shape[:2]
    if in_h == out_h and in_w == out_w:
        return rgb
    if out_h <= 0 or out_w <= 0:
        raise AllocationError(f"Cannot allocate a {out_w}x{out_h} pixel buffer")

    x0, x1, fx = _axis_taps(in_w, out_w)
    y0, y1, fy = _axis_taps(in_h, out_h)

    try:
        src = rgb.astype(np.float32)
        p00 = src[y0][:, x0]
        p10 = src[y0][:, x1]
        p01 = src[y1][:, x0]
        p11 = src[y1][:, x1]
    except MemoryError as e:
        raise AllocationError(f"Cannot allocate a {out_w}x{out_h} pixel buffer") from e

    one = np.float32(1)
    fx = fx[np.newaxis, :, np.newaxis]
    fy = fy[:, np.newaxis, np.newaxis]

    out = (
        p00 * (one - fx) * (one - fy)
        + p10 * fx * (one - fy)
        + p01 * (one - fx) * fy
        + p11 * fx * fy
    )
    log.debug("Resized %dx%d -> %dx%d", in_w, in_h, out_w, out_h)
    # float -> uint8 truncates toward zero; clip only guards float overshoot
    return np.clip(out, 0, 255).astype(np.uint8)


def fit_to_frame(rgb: np.ndarray, width: int, height: int) -> np.ndarray:
    return resize_bilinear(rgb, height, width)
