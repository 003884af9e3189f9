#!/usr/bin/env python3
"""
SVG Theme Merge

Merges <base>-LIGHT.svg and <base>-DARK.svg into <base>.svg, a single SVG
that follows the viewer's color scheme.

Usage:
    python svg_theme_merge.py icons/logo
    python svg_theme_merge.py --batch icons/
"""

import argparse
import logging
import sys

from svg_document import ThemeMergeError
from svg_theme_merger import DARK_SUFFIX, LIGHT_SUFFIX, merge_directory, merge_svg_files


def build_parser():
    parser = argparse.ArgumentParser(
        description='Merge light and dark variants of an SVG into one color-scheme aware SVG'
    )
    parser.add_argument(
        'base',
        help='Base path of the SVG pair (e.g. icons/logo for icons/logo-LIGHT.svg '
             'and icons/logo-DARK.svg), or a directory with --batch'
    )
    parser.add_argument(
        '--output',
        '-o',
        help='Write the merged SVG here instead of <base>.svg'
    )
    parser.add_argument(
        '--light-suffix',
        default=LIGHT_SUFFIX,
        help=f'Suffix of the light variant (default: {LIGHT_SUFFIX})'
    )
    parser.add_argument(
        '--dark-suffix',
        default=DARK_SUFFIX,
        help=f'Suffix of the dark variant (default: {DARK_SUFFIX})'
    )
    parser.add_argument(
        '--batch',
        action='store_true',
        help='Treat base as a directory and merge every pair found in it'
    )
    parser.add_argument(
        '--verbose',
        '-v',
        action='store_true',
        help='Log merge details to stderr'
    )
    return parser


def run_batch(args) -> int:
    results = merge_directory(args.base, light_suffix=args.light_suffix,
                              dark_suffix=args.dark_suffix)
    if not results:
        print(f"No *{args.light_suffix}.svg files found in {args.base}", file=sys.stderr)
        return 1

    failures = 0
    for result in results:
        if result.ok:
            print(result.output_path)
        else:
            failures += 1
            print(f"Error: {result.base}: {result.error}", file=sys.stderr)

    return 1 if failures else 0


def main(argv=None) -> int:
    """Main function to run the script."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
        stream=sys.stderr,
    )

    if args.batch:
        if args.output:
            parser.error('--output cannot be combined with --batch')
        return run_batch(args)

    try:
        output_path = merge_svg_files(args.base, output_path=args.output,
                                      light_suffix=args.light_suffix,
                                      dark_suffix=args.dark_suffix)
    except (ThemeMergeError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(output_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
