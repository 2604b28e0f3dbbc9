"""Laplacian pyramid encode/decode system.

Forward mode: GrayImage → LaplacianPlanes
Inverse mode: LaplacianPlanes → ReconImage
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from laplacian_pyramid.components.image import GrayImage, ReconImage
from laplacian_pyramid.components.pyramid import LaplacianPlanes
from laplacian_pyramid.core.kernel import DEFAULT_A, EdgePolicy, check_edge
from laplacian_pyramid.core.quantize import check_step
from laplacian_pyramid.core.system import System
from laplacian_pyramid.pyramid import DEFAULT_DEPTH, DEFAULT_QUANTIZATION, LaplacianPyramid

if TYPE_CHECKING:
    from laplacian_pyramid.core.world import World


class LaplacianEncode(System):
    """Build or invert a Laplacian pyramid per entity.

    The pyramid parameters only matter in forward mode; inverse mode decodes
    with whatever the stored pyramid was built with.
    """

    def __init__(
        self,
        depth: int = DEFAULT_DEPTH,
        quantization: float = DEFAULT_QUANTIZATION,
        a: float = DEFAULT_A,
        edge: EdgePolicy = "asymmetric",
        mode: Literal["forward", "inverse"] = "forward",
    ):
        """Initialize Laplacian pyramid system.

        Args:
            depth: Number of pyramid levels (>= 1)
            quantization: Detail plane step size; 0 disables quantization
            a: Centre weight of the smoothing kernel
            edge: Border policy for reduce/expand
            mode: 'forward' to encode, 'inverse' to decode
        """
        super().__init__(mode=mode)
        if depth < 1:
            raise ValueError(f"depth must be >= 1, got {depth}")
        self.depth = depth
        self.quantization = check_step(quantization)
        self.a = a
        self.edge = check_edge(edge)

    def required_components(self) -> list[type]:
        if self.mode == "forward":
            return [GrayImage]
        return [LaplacianPlanes]

    def produced_components(self) -> list[type]:
        if self.mode == "forward":
            return [LaplacianPlanes]
        return [ReconImage]

    def run(self, world: World, eids: list[int]) -> None:
        """Encode or decode entities.

        Raises:
            ScalingImpossible: If an image cannot be trimmed for ``depth``
        """
        if self.mode == "forward":
            self._run_forward(world, eids)
        else:
            self._run_inverse(world, eids)

    def _run_forward(self, world: World, eids: list[int]) -> None:
        for eid in eids:
            image = world.get_component(eid, GrayImage)
            pyramid = LaplacianPyramid(
                image.pix,
                depth=self.depth,
                quantization=self.quantization,
                a=self.a,
                edge=self.edge,
            )
            world.add_component(
                eid,
                LaplacianPlanes(
                    pyramid=pyramid,
                    depth=pyramid.depth,
                    quantization=pyramid.quantization,
                ),
            )
            world.metadata[eid]["trimmed_shape"] = pyramid.shape

    def _run_inverse(self, world: World, eids: list[int]) -> None:
        for eid in eids:
            planes = world.get_component(eid, LaplacianPlanes)
            world.add_component(eid, ReconImage(pix=planes.pyramid.decode()))

    def __repr__(self) -> str:
        return (
            f"LaplacianEncode(depth={self.depth}, quantization={self.quantization}, "
            f"mode={self.mode})"
        )
