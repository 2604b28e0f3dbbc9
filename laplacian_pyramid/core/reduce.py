"""Gaussian pyramid reduction (smooth + downsample by two).

Output pixel ``(i, j)`` is ``sum(kernel[m, n] * image[2i - m, 2j - n])`` over
kernel offsets ``m, n`` in ``-2..2``. With the default ``"asymmetric"`` edge
policy, taps landing on a negative row/column are dropped while taps past the
last row/column are clamped to it. ``"replicate"`` clamps both sides.

Note:
    The asymmetric policy darkens the top and left borders of every level.
    It is kept as the default for compatibility with existing pyramids.
"""

from __future__ import annotations

import logging

import numpy as np

from laplacian_pyramid.core.kernel import (
    KERNEL_RADIUS,
    EdgePolicy,
    accumulate_taps,
    check_edge,
    check_kernel,
)
from laplacian_pyramid.core.scale import coarsest_sizes, level_shape

logger = logging.getLogger(__name__)

OFFSETS = range(-KERNEL_RADIUS, KERNEL_RADIUS + 1)


def _reduce_taps(
    n_out: int, n_in: int, offset: int, edge: str
) -> tuple[np.ndarray, np.ndarray]:
    """Source indices and validity mask along one axis for one kernel offset."""
    src = 2 * np.arange(n_out) - offset
    if edge == "replicate":
        valid = np.ones(n_out, dtype=bool)
    else:
        valid = src >= 0
    return np.clip(src, 0, n_in - 1), valid


def reduce_image(
    image: np.ndarray,
    kernel: np.ndarray,
    shape: tuple[int, int],
    edge: EdgePolicy = "asymmetric",
) -> np.ndarray:
    """Reduce ``image`` to exactly ``shape``.

    Args:
        image: 2-D float image
        kernel: (5, 5) smoothing kernel
        shape: Target (rows, cols)
        edge: Border policy, 'asymmetric' or 'replicate'

    Returns:
        Reduced float32 image of the requested shape
    """
    kernel = check_kernel(kernel)
    check_edge(edge)
    rows, cols = shape
    if rows <= 0 or cols <= 0:
        raise ValueError(f"Target shape must be positive, got {shape}")

    src = np.asarray(image, dtype=np.float64)
    row_taps = [_reduce_taps(rows, src.shape[0], m, edge) for m in OFFSETS]
    col_taps = [_reduce_taps(cols, src.shape[1], n, edge) for n in OFFSETS]
    return accumulate_taps(src, kernel, row_taps, col_taps).astype(np.float32)


def gaussians(
    image: np.ndarray,
    kernel: np.ndarray,
    depth: int,
    edge: EdgePolicy = "asymmetric",
) -> list[np.ndarray]:
    """Build the Gaussian pyramid ``[G_0, ..., G_{depth-1}]`` of a validated image.

    ``G_0`` is ``image`` itself. Each further level is reduced from the one
    before it to ``M * 2**(depth - level) - 3`` samples per axis, with ``M``
    computed once from ``image.shape``.

    Raises:
        ScalingImpossible: If ``image.shape`` has not been validated for ``depth``
    """
    coarsest = coarsest_sizes(image.shape, depth)
    levels = [np.asarray(image, dtype=np.float32)]
    for level in range(1, depth):
        shape = level_shape(coarsest, depth, level)
        levels.append(reduce_image(levels[-1], kernel, shape, edge))
        logger.debug("Reduced level %d to %dx%d", level, shape[0], shape[1])
    return levels
