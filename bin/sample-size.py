#!/usr/bin/env python3
"""
Sample Size CLI - Pick the tile sample size for a zoom level or viewport

Prints the power-of-two downsampling factor a subsampled image renderer
would decode tiles at.

Usage:
    python bin/sample-size.py --zoom 0.25
    python bin/sample-size.py --viewport 1080x1920 --image 4000x3000
    python bin/sample-size.py --zoom 0.01 --max 8
"""

import os
import sys
import argparse

# Add src/python directory to Python path
script_dir = os.path.dirname(os.path.abspath(__file__))
python_dir = os.path.join(os.path.dirname(script_dir), 'src', 'python')
if python_dir not in sys.path:
    sys.path.insert(0, python_dir)

# Now we can import our modules
from geometry import Size
from image_sample_size import ImageSampleSize


def parse_size(size_str):
    """Parse a size given as WIDTHxHEIGHT, e.g. "1080x1920"."""
    width, sep, height = size_str.lower().partition('x')
    if not sep:
        raise ValueError(f"Expected WIDTHxHEIGHT, got {size_str!r}")
    return Size(float(width), float(height))


def main(argv=None):
    parser = argparse.ArgumentParser(description='Pick the tile sample size for a zoom level or viewport')

    input_group = parser.add_mutually_exclusive_group(required=True)
    input_group.add_argument('--zoom', '-z', type=float, help='Zoom relative to the full resolution image')
    input_group.add_argument('--viewport', '-v', help='Viewport size in pixels, e.g. 1080x1920')

    parser.add_argument('--image', '-i', help='Image size in pixels (required with --viewport)')
    parser.add_argument('--max', '-m', type=int, help='Clamp the result to at most this sample size')

    args = parser.parse_args(argv)

    try:
        if args.zoom is not None:
            sample_size = ImageSampleSize.calculate_for_zoom(args.zoom)
        else:
            if not args.image:
                print("Error: --image is required with --viewport")
                return 1
            sample_size = ImageSampleSize.calculate_for_size(parse_size(args.viewport), parse_size(args.image))

        if args.max is not None:
            sample_size = sample_size.coerce_at_most(ImageSampleSize(args.max))
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    print(sample_size.size)
    return 0


if __name__ == "__main__":
    sys.exit(main())
