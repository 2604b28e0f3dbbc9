from laplacian_pyramid.eval.quality import (
    auto_data_range,
    crop_to,
    max_abs_error,
    mse,
    psnr,
    quality_report,
    ssim,
)

__all__ = [
    "auto_data_range",
    "crop_to",
    "max_abs_error",
    "mse",
    "psnr",
    "quality_report",
    "ssim",
]
