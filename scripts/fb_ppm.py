#!/usr/bin/env python3
"""
fb_ppm.py

Binary PPM (P6) container: "P6\\n<w> <h>\\n255\\n" then raw RGB bytes.
"""

from __future__ import annotations
import numpy as np


def encode_ppm(rgb: np.ndarray) -> bytes:
    if rgb.ndim != 3 or rgb.shape[2] != 3:
        raise ValueError(f"Expected HxWx3 RGB array, got shape {rgb.shape}")
    h0, w0 = rgb.shape[:2]
    return f"P6\n{w0} {h0}\n255\n".encode("ascii") + rgb.astype(np.uint8).tobytes()


def write_ppm(path: str, rgb: np.ndarray):
    with open(path, "wb") as f:
        f.write(encode_ppm(rgb))

