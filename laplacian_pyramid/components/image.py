"""Image components: GrayImage, ReconImage."""

import numpy as np
from pydantic import BaseModel


class Component(BaseModel):
    """Base class for all ECS components.

    Components are data containers using Pydantic for validation and type safety.
    Pixel data is held as 2-D float32 numpy arrays.
    """

    model_config = {"arbitrary_types_allowed": True}


class GrayImage(Component):
    """Single-channel source image.

    Attributes:
        pix: Pixel data (H, W) float32
    """

    pix: np.ndarray


class ReconImage(Component):
    """Single-channel image reconstructed from a pyramid.

    Attributes:
        pix: Pixel data (H', W') float32, H' <= H and W' <= W after trimming
    """

    pix: np.ndarray
