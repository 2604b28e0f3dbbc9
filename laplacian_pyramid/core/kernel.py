"""Separable 5x5 smoothing kernel shared by reduce and expand."""

from __future__ import annotations

from typing import Literal

import numpy as np

DEFAULT_A = 1.0

# Kernel taps run over offsets -2..2; array index = offset + KERNEL_RADIUS.
KERNEL_RADIUS = 2
KERNEL_SIZE = 2 * KERNEL_RADIUS + 1


def generating_vector(a: float = DEFAULT_A) -> np.ndarray:
    """Return the 1-D vector ``w = [1/4 - a/2, 1/4, a, 1/4, 1/4 - a/2]``."""
    outer = 0.25 - a / 2.0
    return np.array([outer, 0.25, a, 0.25, outer], dtype=np.float32)


def build_kernel(a: float = DEFAULT_A) -> np.ndarray:
    """Build the 5x5 smoothing kernel ``w @ w.T``.

    The weights sum to one for every ``a``, so reduction preserves the mean.
    The returned array is read-only and can be shared between calls.

    Args:
        a: Centre weight of the generating vector

    Returns:
        (5, 5) float32 kernel
    """
    w = generating_vector(a)
    kernel = np.outer(w, w).astype(np.float32)
    kernel.setflags(write=False)
    return kernel


def check_kernel(kernel: np.ndarray) -> np.ndarray:
    """Validate kernel shape and return it as a 2-D float array."""
    kernel = np.asarray(kernel)
    if kernel.shape != (KERNEL_SIZE, KERNEL_SIZE):
        raise ValueError(
            f"Expected ({KERNEL_SIZE}, {KERNEL_SIZE}) kernel, got {kernel.shape}"
        )
    return kernel


EdgePolicy = Literal["asymmetric", "replicate"]
EDGE_POLICIES: tuple[str, ...] = ("asymmetric", "replicate")


def check_edge(edge: str) -> str:
    """Validate an edge policy name."""
    if edge not in EDGE_POLICIES:
        raise ValueError(f"edge must be one of {EDGE_POLICIES}, got {edge!r}")
    return edge


def accumulate_taps(
    src: np.ndarray,
    kernel: np.ndarray,
    row_taps: list[tuple[np.ndarray, np.ndarray]],
    col_taps: list[tuple[np.ndarray, np.ndarray]],
) -> np.ndarray:
    """Sum ``kernel[m, n] * src[rows_m, cols_n]`` over all 25 kernel taps.

    ``row_taps[m + 2]`` holds the (source index, valid mask) pair for row
    offset ``m``; likewise for columns. Masked-out taps contribute zero.
    Accumulation is done in float64.
    """
    out = np.zeros((len(row_taps[0][0]), len(col_taps[0][0])), dtype=np.float64)
    for m, (r_idx, r_valid) in enumerate(row_taps):
        for n, (c_idx, c_valid) in enumerate(col_taps):
            weight = float(kernel[m, n])
            if weight == 0.0:
                continue
            mask = np.outer(r_valid, c_valid)
            out += weight * np.where(mask, src[np.ix_(r_idx, c_idx)], 0.0)
    return out
