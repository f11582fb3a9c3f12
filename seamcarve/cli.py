"""
Command line seam carving.

    seamcarve input.pgm 10 5

removes 10 vertical and 5 horizontal seams and writes
input_processed_10_5.pgm next to the input.
"""

import argparse
import logging
import os
import sys

from .carving import carve, check_seam_counts
from .errors import DegenerateGridError, SeamCarveError
from .pnm import load_image, save_image


def output_path_for(input_path: str, n_vertical: int, n_horizontal: int,
                    channels: int = 1) -> str:
    """
    Default output filename: <base>_processed_<v>_<h><ext>.

    Inputs without an extension get .pgm (grayscale) or .ppm (color).
    """
    base, ext = os.path.splitext(input_path)
    if not ext:
        ext = '.pgm' if channels == 1 else '.ppm'
    return f"{base}_processed_{n_vertical}_{n_horizontal}{ext}"


def _non_negative_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}") from None
    if n < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {n}")
    return n


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='seamcarve',
        description='Shrink an image with content-aware seam carving'
    )
    parser.add_argument('input', help='Input image (P2 PGM, P3 PPM, or any format Pillow reads)')
    parser.add_argument('vertical', type=_non_negative_int,
                        help='Number of vertical seams (columns) to remove')
    parser.add_argument('horizontal', type=_non_negative_int,
                        help='Number of horizontal seams (rows) to remove')
    parser.add_argument('-o', '--output', default=None,
                        help='Output path (default: <input>_processed_<v>_<h><ext>)')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Log progress for every seam')
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=level, format='%(message)s')
    logging.getLogger('seamcarve').setLevel(level)

    try:
        image = load_image(args.input)
        grid = image.grid
        try:
            check_seam_counts(grid, args.vertical, args.horizontal)
        except DegenerateGridError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

        carved = carve(grid, args.vertical, args.horizontal)

        output = args.output or output_path_for(args.input, args.vertical,
                                                args.horizontal, grid.channels)
        save_image(image.with_grid(carved), output)
        print(f"Saved: {output}")
    except (SeamCarveError, OSError) as e:
        print(f"Fatal: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
