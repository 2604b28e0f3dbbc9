"""Pyramid expansion (upsample by two to an exact target size)."""

from __future__ import annotations

import numpy as np

from laplacian_pyramid.core.kernel import (
    KERNEL_RADIUS,
    EdgePolicy,
    accumulate_taps,
    check_edge,
    check_kernel,
)

OFFSETS = range(-KERNEL_RADIUS, KERNEL_RADIUS + 1)

# Zero insertion keeps one sample in four, so the kernel is scaled back up.
UPSAMPLE_GAIN = 4.0


def _expand_taps(
    n_out: int, n_in: int, offset: int, edge: str
) -> tuple[np.ndarray, np.ndarray]:
    """Source indices and validity mask along one axis for one kernel offset.

    A tap contributes only where ``i - offset`` is even (a non-inserted
    sample). The asymmetric policy also drops negative positions.
    """
    pos = np.arange(n_out) - offset
    valid = pos % 2 == 0
    if edge != "replicate":
        valid &= pos >= 0
    return np.clip(pos // 2, 0, n_in - 1), valid


def expand_to(
    image: np.ndarray,
    kernel: np.ndarray,
    shape: tuple[int, int],
    edge: EdgePolicy = "asymmetric",
) -> np.ndarray:
    """Upsample ``image`` to exactly ``shape``.

    Output pixel ``(i, j)`` is
    ``4 * sum(kernel[m, n] * image[(i - m) / 2, (j - n) / 2])`` over the
    offsets for which both halves are integers. Indices past the source
    extent are clamped to its last row/column.

    Args:
        image: Coarser 2-D float image
        kernel: (5, 5) smoothing kernel
        shape: Target (rows, cols), normally the next finer level's shape
        edge: Border policy, 'asymmetric' or 'replicate'

    Returns:
        Expanded float32 image of the requested shape
    """
    kernel = check_kernel(kernel)
    check_edge(edge)
    rows, cols = shape
    if rows <= 0 or cols <= 0:
        raise ValueError(f"Target shape must be positive, got {shape}")

    src = np.asarray(image, dtype=np.float64)
    row_taps = [_expand_taps(rows, src.shape[0], m, edge) for m in OFFSETS]
    col_taps = [_expand_taps(cols, src.shape[1], n, edge) for n in OFFSETS]
    out = accumulate_taps(src, kernel, row_taps, col_taps)
    return (UPSAMPLE_GAIN * out).astype(np.float32)
