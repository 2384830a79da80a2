#!/usr/bin/env python3
"""
gpxtrack - load and validate the trackpoints of a GPX file.

Usage: gpxtrack <input gpx> <output gpx>
"""

import argparse
import sys

from gpxtrack.utils.app_config import get_lenient_numbers
from gpxtrack.utils.errors import LoadError
from gpxtrack.utils.gpx_loader import load_gpx_file
from gpxtrack.utils.track_extractor import console_progress


def build_parser():
    parser = argparse.ArgumentParser(
        prog='gpxtrack',
        description='Read and validate the trackpoints of a GPX file',
    )
    parser.add_argument('input', help='Path to the GPX file to read')
    parser.add_argument('output', help='Path of the GPX file to write')
    parser.add_argument('--quiet', action='store_true', default=False,
                        help='Do not print per-track progress')
    parser.add_argument('--lenient-numbers', action='store_true', default=None,
                        help='Treat malformed numbers as 0.0 instead of failing')
    return parser


def main(argv=None):
    """Run the command line tool and return its exit status."""
    args = build_parser().parse_args(argv)
    lenient = args.lenient_numbers if args.lenient_numbers is not None else get_lenient_numbers()

    try:
        collection = load_gpx_file(
            args.input,
            progress=None if args.quiet else console_progress,
            lenient=lenient,
        )
    except LoadError as e:
        print(f"[ERROR] Cannot read file '{args.input}': {e.message}", file=sys.stderr)
        return 1

    if not args.quiet:
        print(f"[INFO] loaded {len(collection)} trackpoints from '{args.input}'")
    print(f"[WARN] Writing '{args.output}' is not implemented; no output file produced",
          file=sys.stderr)
    return 0


if __name__ == '__main__':
    sys.exit(main())
