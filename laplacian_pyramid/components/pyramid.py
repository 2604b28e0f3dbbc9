"""Laplacian pyramid component."""

from pydantic import Field

from laplacian_pyramid.components.image import Component
from laplacian_pyramid.pyramid import LaplacianPyramid


class LaplacianPlanes(Component):
    """Encoded Laplacian pyramid of one entity.

    Attributes:
        pyramid: Immutable pyramid built from the entity's GrayImage
        depth: Number of planes
        quantization: Detail plane step size used when encoding
    """

    pyramid: LaplacianPyramid
    depth: int = Field(ge=1)
    quantization: float = Field(default=0.0, ge=0.0)
