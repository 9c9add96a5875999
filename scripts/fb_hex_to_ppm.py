#!/usr/bin/env python3
"""
fb_hex_to_ppm.py

CLI: turn an RGB565 hex memory image (e.g. a frame buffer dump from
simulation) back into a 320x240 PPM for viewing.

Comment lines, blank lines, xxxx placeholders and garbage are skipped; a
short file is padded with its last valid pixel. The output is always a full
frame, so this tool exits 0 whenever it could read its input and write its
output.

Usage:
  fb_hex_to_ppm.py                       # blurred.hex -> output.ppm
  fb_hex_to_ppm.py --in dump.hex --out dump.ppm --png dump.png
"""

from __future__ import annotations
import argparse
import logging
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from fb_bmp import write_bmp24
from fb_frame import HEIGHT, TOTAL_PIXELS, WIDTH, decode_hex_lines
from fb_hexmem import LineKind
from fb_ppm import write_ppm

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

IN_FILE = Path("blurred.hex")
OUT_FILE = Path("output.ppm")

log = logging.getLogger("fb_hex_to_ppm")


def parse_args(argv=None):
    p = argparse.ArgumentParser(
        description=f"Convert an RGB565 hex memory image to a {WIDTH}x{HEIGHT} PPM"
    )
    p.add_argument("--in", dest="infile", type=Path, default=IN_FILE,
                   help=f"Input hex file (default: {IN_FILE})")
    p.add_argument("--out", dest="outfile", type=Path, default=OUT_FILE,
                   help=f"Output PPM (default: {OUT_FILE})")
    p.add_argument("--bmp", type=Path, help="Also write a 24-bit BMP")
    p.add_argument("--png", type=Path, help="Also write a PNG preview")
    p.add_argument("--debug", action="store_true")
    return p.parse_args(argv)


def write_png(path: Path, rgb):
    plt.imsave(str(path), rgb, format="png")


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
        with open(args.infile, "r", encoding="ascii", errors="replace", newline="\n") as f:
            rgb, report = decode_hex_lines(f)
        write_ppm(args.outfile, rgb)
        if args.bmp:
            write_bmp24(args.bmp, rgb)
        if args.png:
            write_png(args.png, rgb)
    except OSError as e:
        raise SystemExit(f"ERROR: {e}")

    if report.skipped:
        log.info(
            "Skipped %d lines (%d comment, %d blank, %d placeholder, %d malformed)",
            report.skipped,
            report.counts[LineKind.COMMENT],
            report.counts[LineKind.BLANK],
            report.counts[LineKind.PLACEHOLDER],
            report.counts[LineKind.MALFORMED],
        )
    log.info("Wrote %s (%d pixels)", args.outfile, TOTAL_PIXELS)


if __name__ == "__main__":
    main()
