"""
Command-line entry point.

    seamcarve INPUT VERTICAL [HORIZONTAL]

Removes VERTICAL vertical seams and then HORIZONTAL horizontal seams from
INPUT and writes INPUT_processed_<V>_<H>.<ext> next to it.
"""

import sys
import argparse
from typing import List, Optional

from .carving import SeamCarver
from .energy import ENERGY_MODES
from .image_io import load_image, output_path, save_image
from .seam import TIE_BREAKS


def _count(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid seam count: {value!r}")
    if n < 0:
        raise argparse.ArgumentTypeError(f"seam count must be non-negative, got {n}")
    return n


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='seamcarve',
        description="Shrink an image by removing low-energy seams"
    )
    parser.add_argument(
        'input', type=str,
        help='Input image (.pgm/.ppm text PNM, or any format Pillow reads)'
    )
    parser.add_argument(
        'vertical', type=_count,
        help='Number of vertical seams to remove (reduces width)'
    )
    parser.add_argument(
        'horizontal', type=_count, nargs='?', default=0,
        help='Number of horizontal seams to remove (reduces height, default: 0)'
    )
    parser.add_argument(
        '-o', '--output', type=str,
        help='Output path (default: {input}_processed_{V}_{H}{ext})'
    )
    parser.add_argument(
        '--tie-break', choices=TIE_BREAKS, default='leftmost',
        help='How to choose between equal-cost seam steps (default: leftmost)'
    )
    parser.add_argument(
        '--energy', choices=ENERGY_MODES, default='mean',
        help='Energy of color pixels: averaged intensity or per-channel sum (default: mean)'
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        image = load_image(args.input)
    except (OSError, ValueError) as e:
        print(f"Fatal: {e}", file=sys.stderr)
        return 1

    grid = image.grid
    if args.vertical >= grid.width or args.horizontal >= grid.height:
        print(f"Error: requested seams ({args.vertical},{args.horizontal}) "
              f"exceed dimensions ({grid.width},{grid.height})", file=sys.stderr)
        return 1

    carver = SeamCarver(grid, tie_break=args.tie_break, energy_mode=args.energy)
    carver.carve(args.vertical, args.horizontal)

    out = args.output or output_path(args.input, args.vertical, args.horizontal)
    try:
        save_image(image, out)
    except (OSError, ValueError) as e:
        print(f"Fatal: {e}", file=sys.stderr)
        return 1

    print(f"Saved: {out}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
