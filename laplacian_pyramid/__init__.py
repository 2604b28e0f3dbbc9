"""Laplacian pyramid image codec.

Decomposes a single-channel float image into band-pass detail planes plus a
low-resolution baseband, and reconstructs the image from them.

Quick Start:
    >>> import numpy as np
    >>> from laplacian_pyramid import LaplacianPyramid
    >>>
    >>> img = np.random.rand(509, 509).astype(np.float32)
    >>> pyramid = LaplacianPyramid(img, depth=5, quantization=0.0)
    >>> detail = pyramid[0]        # finest detail plane
    >>> baseband = pyramid.at(4)   # coarsest Gaussian level
    >>> recon = pyramid.decode()

Pipelines with metrics use the ECS layer:
    >>> from laplacian_pyramid.components.image import ReconImage
    >>> from laplacian_pyramid.core.world import World
    >>> from laplacian_pyramid.systems.laplacian import LaplacianEncode
    >>> from laplacian_pyramid.systems.metrics import MetricPSNR
    >>>
    >>> world = World()
    >>> entity = world.spawn_image(img)
    >>> recon = (
    ...     world.pipe(entity)
    ...     .to(LaplacianEncode(depth=5, mode='forward'))
    ...     .to(LaplacianEncode(mode='inverse'))
    ...     .to(MetricPSNR())
    ...     .out(ReconImage)
    ... )
"""

__version__ = "0.1.0"

from laplacian_pyramid.api import decode, encode, get_pyramid_info, reconstruction_error
from laplacian_pyramid.core.errors import (
    IndexOutOfRange,
    InvariantViolation,
    PyramidError,
    ScalingImpossible,
)
from laplacian_pyramid.core.kernel import build_kernel
from laplacian_pyramid.pyramid import LaplacianPyramid

__all__ = [
    "__version__",
    "LaplacianPyramid",
    "build_kernel",
    "encode",
    "decode",
    "get_pyramid_info",
    "reconstruction_error",
    "PyramidError",
    "ScalingImpossible",
    "IndexOutOfRange",
    "InvariantViolation",
]
