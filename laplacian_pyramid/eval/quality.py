"""Reconstruction quality measures for pyramid round trips.

The validator only trims the high-index edge, so a source image is compared
with its reconstruction over the leading block the reconstruction covers.
"""

from __future__ import annotations

import numpy as np
from skimage.metrics import (
    mean_squared_error,
    peak_signal_noise_ratio,
    structural_similarity,
)

SSIM_WINDOW = 7


def crop_to(src: np.ndarray, recon: np.ndarray) -> np.ndarray:
    """Crop ``src`` to the leading block matching ``recon``'s shape."""
    if src.ndim != recon.ndim or any(r > s for r, s in zip(recon.shape, src.shape)):
        raise ValueError(
            f"Shape mismatch: src {src.shape} vs recon {recon.shape}"
        )
    return src[tuple(slice(0, n) for n in recon.shape)]


def auto_data_range(src: np.ndarray) -> float:
    """Peak-to-peak range of ``src``, or 1.0 for a constant image."""
    if src.dtype == np.uint8:
        return 255.0
    span = float(np.max(src) - np.min(src))
    return span if span > 0 else 1.0


def mse(src: np.ndarray, recon: np.ndarray) -> float:
    src = crop_to(src, recon)
    return float(mean_squared_error(src.astype(np.float64), recon.astype(np.float64)))


def max_abs_error(src: np.ndarray, recon: np.ndarray) -> float:
    src = crop_to(src, recon)
    return float(np.max(np.abs(src.astype(np.float64) - recon.astype(np.float64))))


def psnr(src: np.ndarray, recon: np.ndarray, data_range: float | None = None) -> float:
    """Peak signal-to-noise ratio in dB; ``inf`` for an exact match."""
    src = crop_to(src, recon)
    if data_range is None:
        data_range = auto_data_range(src)
    if mse(src, recon) == 0.0:
        return float("inf")
    return float(
        peak_signal_noise_ratio(
            src.astype(np.float64), recon.astype(np.float64), data_range=data_range
        )
    )


def ssim(src: np.ndarray, recon: np.ndarray, data_range: float | None = None) -> float:
    """Structural similarity of two 2-D images.

    The window shrinks to the largest odd size that fits; images smaller than
    3x3 return ``nan``.
    """
    src = crop_to(src, recon)
    if data_range is None:
        data_range = auto_data_range(src)
    win_size = min(SSIM_WINDOW, *recon.shape)
    if win_size % 2 == 0:
        win_size -= 1
    if win_size < 3:
        return float("nan")
    return float(
        structural_similarity(
            src.astype(np.float64),
            recon.astype(np.float64),
            data_range=data_range,
            win_size=win_size,
        )
    )


def quality_report(
    src: np.ndarray, recon: np.ndarray, data_range: float | None = None
) -> dict[str, float]:
    """Return mse, max_abs, psnr and ssim in one dict."""
    return {
        "mse": mse(src, recon),
        "max_abs": max_abs_error(src, recon),
        "psnr": psnr(src, recon, data_range),
        "ssim": ssim(src, recon, data_range),
    }
