"""Scalar quantization of detail planes."""

from __future__ import annotations

import math

import numpy as np

# Smallest usable non-zero step; anything smaller is below float32 resolution.
MIN_STEP = float(np.finfo(np.float32).tiny)


def check_step(step: float) -> float:
    """Validate a quantization step size.

    Raises:
        ValueError: If ``step`` is negative, non-finite, or a positive value
            below ``MIN_STEP``
    """
    step = float(step)
    if not math.isfinite(step) or step < 0:
        raise ValueError(f"quantization must be a finite value >= 0, got {step}")
    if 0.0 < step < MIN_STEP:
        raise ValueError(f"quantization must be 0 or >= {MIN_STEP:g}, got {step}")
    return step


def quantize_plane(plane: np.ndarray, step: float) -> np.ndarray:
    """Round every sample to the nearest multiple of ``step``.

    ``step == 0`` returns the plane unchanged. Ties round to the even
    multiple, as ``np.rint`` does. The division runs in float64 so small
    steps cannot overflow. There is no matching dequantize step: the rounded
    values are the stored values.
    """
    step = check_step(step)
    if step == 0.0:
        return plane
    scaled = np.asarray(plane, dtype=np.float64) / step
    return (np.rint(scaled) * step).astype(np.float32)
