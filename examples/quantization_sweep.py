#!/usr/bin/env python3
"""Reconstruction quality across quantization step sizes.

Runs the ECS pipeline (encode → decode → metrics) once per step size and
prints a small table.
"""

from __future__ import annotations

import argparse

import numpy as np

from laplacian_pyramid.components.image import ReconImage
from laplacian_pyramid.core.world import World
from laplacian_pyramid.systems.laplacian import LaplacianEncode
from laplacian_pyramid.systems.metrics import MetricMaxAbsError, MetricPSNR, MetricSSIM


def main() -> None:
    parser = argparse.ArgumentParser(description="Quantization sweep example")
    parser.add_argument("--size", type=int, default=253, help="Random image size")
    parser.add_argument("--depth", type=int, default=4, help="Number of pyramid levels")
    parser.add_argument("--seed", type=int, default=0, help="Random seed")
    args = parser.parse_args()

    rng = np.random.default_rng(args.seed)
    image = rng.random((args.size, args.size), dtype=np.float32)

    print(f"{'step':>8} {'psnr':>8} {'ssim':>8} {'max_abs':>10}")
    for step in (0.0, 0.01, 0.05, 0.1, 0.25):
        world = World()
        entity = world.spawn_image(image)
        (
            world.pipe(entity)
            .to(LaplacianEncode(depth=args.depth, quantization=step))
            .to(LaplacianEncode(mode="inverse"))
            .to(MetricPSNR(data_range=1.0))
            .to(MetricSSIM(data_range=1.0))
            .to(MetricMaxAbsError())
            .out(ReconImage)
        )
        meta = world.metadata[entity]
        print(f"{step:8.3f} {meta['psnr']:8.2f} {meta['ssim']:8.4f} {meta['max_abs']:10.5f}")


if __name__ == "__main__":
    main()
