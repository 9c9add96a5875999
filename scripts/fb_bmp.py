#!/usr/bin/env python3
"""
fb_bmp.py

Read and write uncompressed 24-bit BMPs (BITMAPINFOHEADER) as canonical
top-down HxWx3 RGB arrays.

Rows on disk are padded to 4 bytes and stored B,G,R. A positive height means
the last row in the file is the top of the image; a negative height means
rows are already top-down.
"""

from __future__ import annotations
import logging
import struct
from dataclasses import dataclass

import numpy as np

log = logging.getLogger(__name__)

FILE_HEADER = struct.Struct("<2sIHHI")
INFO_HEADER = struct.Struct("<IiiHHIIiiII")
HEADER_SIZE = FILE_HEADER.size + INFO_HEADER.size  # 54

BI_RGB = 0


class FormatError(ValueError):
    """Input is not a readable BMP (bad signature, truncated data)."""


class UnsupportedFormatError(FormatError):
    """A BMP, but not 24-bit uncompressed."""


class AllocationError(MemoryError):
    """The pixel buffer could not be allocated."""


@dataclass(frozen=True)
class BitmapHeader:
    signature: bytes
    file_size: int
    data_offset: int
    header_size: int
    width: int          # signed, as stored
    height: int         # signed, negative = top-down
    planes: int
    bit_count: int
    compression: int
    image_size: int
    x_ppm: int
    y_ppm: int
    colors_used: int
    colors_important: int

    @property
    def top_down(self) -> bool:
        return self.height < 0

    @property
    def abs_width(self) -> int:
        return abs(self.width)

    @property
    def abs_height(self) -> int:
        return abs(self.height)

    @property
    def row_stride(self) -> int:
        return (self.abs_width * 3 + 3) & ~3


def row_stride(width: int) -> int:
    return (width * 3 + 3) & ~3


def read_bmp_header(blob: bytes) -> BitmapHeader:
    if len(blob) < 2 or blob[0:2] != b"BM":
        raise FormatError("Not a valid BMP file")
    if len(blob) < HEADER_SIZE:
        raise FormatError(f"Truncated BMP header ({len(blob)} < {HEADER_SIZE} bytes)")

    sig, bfSize, _, _, bfOffBits = FILE_HEADER.unpack_from(blob, 0)
    (biSize, biWidth, biHeight, biPlanes, biBitCount, biCompression,
     biSizeImage, biXPelsPerMeter, biYPelsPerMeter, biClrUsed,
     biClrImportant) = INFO_HEADER.unpack_from(blob, FILE_HEADER.size)

    hdr = BitmapHeader(
        signature=sig,
        file_size=bfSize,
        data_offset=bfOffBits,
        header_size=biSize,
        width=biWidth,
        height=biHeight,
        planes=biPlanes,
        bit_count=biBitCount,
        compression=biCompression,
        image_size=biSizeImage,
        x_ppm=biXPelsPerMeter,
        y_ppm=biYPelsPerMeter,
        colors_used=biClrUsed,
        colors_important=biClrImportant,
    )
    log.debug("BMP header: %s", hdr)
    return hdr


def check_supported(hdr: BitmapHeader):
    if hdr.bit_count != 24:
        raise UnsupportedFormatError(
            f"Only 24-bit BMP is supported. Got {hdr.bit_count}-bit."
        )
    if hdr.compression != BI_RGB:
        raise UnsupportedFormatError(
            f"Compressed BMP not supported (compression={hdr.compression})"
        )


def read_bmp24(blob: bytes):
    """
    Decode a 24-bit BMP blob.

    Returns:
        (header, rgb) where rgb is a top-down (H, W, 3) uint8 array.
    """
    hdr = read_bmp_header(blob)
    check_supported(hdr)

    w, h = hdr.abs_width, hdr.abs_height
    if w == 0 or h == 0:
        raise AllocationError(f"Cannot allocate a {w}x{h} pixel buffer")

    stride = hdr.row_stride
    start = hdr.data_offset
    need = stride * h
    pix = blob[start:start + need]
    if len(pix) != need:
        raise FormatError(
            f"Truncated BMP pixel data ({len(pix)} of {need} bytes at offset {start})"
        )

    try:
        rows = np.frombuffer(pix, dtype=np.uint8).reshape((h, stride))
        # drop row padding, then BGR -> RGB
        rgb = rows[:, :w * 3].reshape((h, w, 3))[:, :, ::-1]
        if not hdr.top_down:
            rgb = rgb[::-1]
        rgb = np.ascontiguousarray(rgb)
    except MemoryError as e:
        raise AllocationError(f"Cannot allocate a {w}x{h} pixel buffer") from e

    return hdr, rgb


def encode_bmp24(rgb: np.ndarray, top_down: bool = False) -> bytes:
    if rgb.ndim != 3 or rgb.shape[2] != 3:
        raise ValueError(f"Expected HxWx3 RGB array, got shape {rgb.shape}")

    h0, w0 = rgb.shape[:2]
    stride = row_stride(w0)
    rows = np.zeros((h0, stride), dtype=np.uint8)
    rows[:, :w0 * 3] = rgb.astype(np.uint8)[:, :, ::-1].reshape((h0, w0 * 3))
    if not top_down:
        rows = rows[::-1]
    pix = rows.tobytes()

    bfOffBits = HEADER_SIZE
    filehdr = FILE_HEADER.pack(b"BM", bfOffBits + len(pix), 0, 0, bfOffBits)
    infohdr = INFO_HEADER.pack(
        INFO_HEADER.size, w0, -h0 if top_down else h0, 1, 24, BI_RGB,
        len(pix), 2835, 2835, 0, 0
    )
    return filehdr + infohdr + pix


def write_bmp24(path: str, rgb: np.ndarray, top_down: bool = False):
    with open(path, "wb") as f:
        f.write(encode_bmp24(rgb, top_down=top_down))
