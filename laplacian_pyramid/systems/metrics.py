"""Quality metric systems for evaluating pyramid reconstructions.

Metrics store results in World metadata rather than creating components.
The source image is cropped to the reconstruction's (trimmed) shape.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any

import numpy as np

from laplacian_pyramid.components.image import GrayImage, ReconImage
from laplacian_pyramid.core.system import System
from laplacian_pyramid.eval.quality import max_abs_error, mse, psnr, ssim

if TYPE_CHECKING:
    from laplacian_pyramid.core.world import World


class _PairMetric(System):
    """Metric comparing a source and a reconstructed image component."""

    key = ""

    def __init__(
        self,
        src_component: type = GrayImage,
        recon_component: type = ReconImage,
    ):
        super().__init__(mode="forward")
        self.src_component = src_component
        self.recon_component = recon_component

    def required_components(self) -> list[type]:
        return [self.src_component, self.recon_component]

    def produced_components(self) -> list[type]:
        """Return produced component types (none - stores in metadata)."""
        return []

    @abstractmethod
    def compute(self, src: np.ndarray, recon: np.ndarray) -> float:
        """Return the metric value for one source/reconstruction pair."""

    def run(self, world: World, eids: list[int]) -> None:
        for eid in eids:
            src: Any = world.get_component(eid, self.src_component)
            recon: Any = world.get_component(eid, self.recon_component)
            world.metadata.setdefault(eid, {})[self.key] = self.compute(src.pix, recon.pix)


class MetricPSNR(_PairMetric):
    """Peak Signal-to-Noise Ratio in dB, stored as metadata['psnr'].

    ``data_range`` defaults to the source's peak-to-peak range.
    """

    key = "psnr"

    def __init__(
        self,
        src_component: type = GrayImage,
        recon_component: type = ReconImage,
        data_range: float | None = None,
    ):
        super().__init__(src_component, recon_component)
        self.data_range = data_range

    def compute(self, src: np.ndarray, recon: np.ndarray) -> float:
        return psnr(src, recon, self.data_range)


class MetricSSIM(MetricPSNR):
    """Structural Similarity Index, stored as metadata['ssim']."""

    key = "ssim"

    def compute(self, src: np.ndarray, recon: np.ndarray) -> float:
        return ssim(src, recon, self.data_range)


class MetricMSE(_PairMetric):
    """Mean Squared Error, stored as metadata['mse']."""

    key = "mse"

    def compute(self, src: np.ndarray, recon: np.ndarray) -> float:
        return mse(src, recon)


class MetricMaxAbsError(_PairMetric):
    """Largest absolute pixel difference, stored as metadata['max_abs']."""

    key = "max_abs"

    def compute(self, src: np.ndarray, recon: np.ndarray) -> float:
        return max_abs_error(src, recon)
