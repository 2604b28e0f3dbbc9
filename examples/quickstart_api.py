#!/usr/bin/env python3
"""Quickstart example using the high-level encode/decode API.

- Generate a smooth test image (or load one with --input)
- Encode it into a Laplacian pyramid
- Inspect the planes and decode
- Report reconstruction quality
"""

from __future__ import annotations

import argparse
from pathlib import Path

import numpy as np

from laplacian_pyramid.api import decode, encode, get_pyramid_info, reconstruction_error
from laplacian_pyramid.cli import load_image


def _synthetic_image(size: int) -> np.ndarray:
    y, x = np.mgrid[0:size, 0:size].astype(np.float32) / size
    return 0.5 + 0.25 * np.sin(8 * np.pi * x) * np.cos(6 * np.pi * y)


def main() -> None:
    parser = argparse.ArgumentParser(description="Quickstart API example")
    parser.add_argument("--input", type=Path, default=None, help="Input image path")
    parser.add_argument("--size", type=int, default=512, help="Synthetic image size")
    parser.add_argument("--depth", type=int, default=5, help="Number of pyramid levels")
    parser.add_argument("--quantization", type=float, default=0.0, help="Detail step size")
    args = parser.parse_args()

    if args.input is not None and args.input.exists():
        image = load_image(args.input, keep_color=False)
        print(f"Loaded {args.input} with shape {image.shape}")
    else:
        image = _synthetic_image(args.size)
        print(f"Generated synthetic image with shape {image.shape}")

    pyramid = encode(image, depth=args.depth, quantization=args.quantization)
    info = get_pyramid_info(pyramid)
    print(f"Trimmed shape: {info['shape']}")
    for level, shape in enumerate(info["plane_shapes"]):
        plane = pyramid[level]
        print(f"  level {level}: {shape[0]}x{shape[1]}  std={plane.std():.5f}")

    recon = decode(pyramid)
    errors = reconstruction_error(image, pyramid, data_range=1.0)
    print(f"Decoded shape: {recon.shape}")
    print(f"PSNR: {errors['psnr']:.2f} dB  max abs error: {errors['max_abs']:.2e}")


if __name__ == "__main__":
    main()
