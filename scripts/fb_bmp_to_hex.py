#!/usr/bin/env python3
"""
fb_bmp_to_hex.py

CLI: convert any 24-bit BMP (any resolution) to a 320x240 RGB565 hex file,
one 4-digit word per line, for $readmemh in a Verilog frame buffer model.

Usage:
  fb_bmp_to_hex.py input.bmp output.hex
  fb_bmp_to_hex.py input.bmp output.hex --debug
"""

from __future__ import annotations
import argparse
import logging
from pathlib import Path

from fb_bmp import AllocationError, FormatError
from fb_frame import HEIGHT, TOTAL_PIXELS, WIDTH, encode_bmp_blob
from fb_hexmem import write_hex

log = logging.getLogger("fb_bmp_to_hex")


def parse_args(argv=None):
    p = argparse.ArgumentParser(
        description=f"Convert a 24-bit BMP to a {WIDTH}x{HEIGHT} RGB565 hex memory image"
    )
    p.add_argument("infile", type=Path, help="Input 24-bit BMP, any resolution")
    p.add_argument("outfile", type=Path, help="Output RGB565 hex file for $readmemh")
    p.add_argument("--debug", action="store_true")
    return p.parse_args(argv)


def write_hex_file(path: Path, arr565) -> int:
    tmp = path.with_suffix(path.suffix + ".tmp")
    try:
        with open(tmp, "w", newline="\n") as f:
            n = write_hex(f, arr565)
        tmp.replace(path)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise
    return n


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
    )
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        arr565 = encode_bmp_blob(args.infile.read_bytes())
        n = write_hex_file(args.outfile, arr565)
    except (FormatError, AllocationError, OSError) as e:
        raise SystemExit(f"ERROR: {e}")

    if n != TOTAL_PIXELS:
        raise SystemExit(f"ERROR: wrote {n} pixels, expected {TOTAL_PIXELS}")
    log.info("Done. Wrote %d pixels to %s", n, args.outfile)
    log.info('Load in Verilog with: $readmemh("%s", frame_buffer);', args.outfile)


if __name__ == "__main__":
    main()
