"""High-level API for pyramid encoding and decoding.

Provides encode()/decode() wrappers around LaplacianPyramid plus helpers to
inspect a pyramid and measure reconstruction quality.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from laplacian_pyramid.core.kernel import DEFAULT_A, EdgePolicy
from laplacian_pyramid.eval.quality import quality_report
from laplacian_pyramid.pyramid import DEFAULT_DEPTH, DEFAULT_QUANTIZATION, LaplacianPyramid


def encode(
    image: np.ndarray,
    depth: int = DEFAULT_DEPTH,
    quantization: float = DEFAULT_QUANTIZATION,
    a: float = DEFAULT_A,
    edge: EdgePolicy = "asymmetric",
) -> LaplacianPyramid:
    """Encode a single-channel image into a Laplacian pyramid.

    Args:
        image: Input image as (H, W) array of any real dtype
        depth: Number of pyramid levels
        quantization: Detail plane step size (0 = lossless)
        a: Centre weight of the smoothing kernel
        edge: Border policy, 'asymmetric' or 'replicate'

    Returns:
        Immutable LaplacianPyramid

    Raises:
        TypeError: If image is not an ndarray
        ScalingImpossible: If the image is too small for ``depth``

    Example:
        >>> img = np.random.rand(253, 253).astype(np.float32)
        >>> pyramid = encode(img, depth=4, quantization=0.0)
        >>> recon = decode(pyramid)
        >>> print(recon.shape)
        (253, 253)
    """
    if not isinstance(image, np.ndarray):
        raise TypeError(f"Expected ndarray, got {type(image)}")
    return LaplacianPyramid(image, depth=depth, quantization=quantization, a=a, edge=edge)


def decode(pyramid: LaplacianPyramid) -> np.ndarray:
    """Reconstruct the image held by ``pyramid``.

    Returns:
        float32 image with the validated (trimmed) input shape
    """
    if not isinstance(pyramid, LaplacianPyramid):
        raise TypeError(f"Expected LaplacianPyramid, got {type(pyramid)}")
    return pyramid.decode()


def get_pyramid_info(pyramid: LaplacianPyramid) -> dict[str, Any]:
    """Describe a pyramid without decoding it.

    Returns:
        Dictionary with keys: depth, quantization, a, edge, shape,
        plane_shapes, baseband_mean
    """
    return {
        "depth": pyramid.depth,
        "quantization": pyramid.quantization,
        "a": pyramid.a,
        "edge": pyramid.edge,
        "shape": pyramid.shape,
        "plane_shapes": pyramid.shapes(),
        "baseband_mean": float(np.mean(pyramid.at(pyramid.depth - 1))),
    }


def reconstruction_error(
    image: np.ndarray,
    pyramid: LaplacianPyramid,
    data_range: float | None = None,
) -> dict[str, float]:
    """Compare ``image`` with the decoded pyramid over the trimmed region.

    Returns:
        Dictionary with keys: mse, max_abs, psnr, ssim
    """
    return quality_report(np.asarray(image, dtype=np.float32), pyramid.decode(), data_range)
