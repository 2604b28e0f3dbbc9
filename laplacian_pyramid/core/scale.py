"""Scale validation: trim an image to sizes a pyramid of given depth supports.

A dimension ``C`` is usable at depth ``N`` when ``(C + 3)`` is a multiple of
``2**N``; ``M = (C + 3) // 2**N`` is the coarsest-level ratio. Level ``l`` of
the pyramid then has ``M * 2**(N - l) - 3`` samples along that axis, so every
level shrinks exactly and reduce/expand round trips never drift by a pixel.
``M`` must also be at least 2, otherwise the coarsest level would be empty.
"""

from __future__ import annotations

import logging

import numpy as np

from laplacian_pyramid.core.errors import ScalingImpossible

logger = logging.getLogger(__name__)

MIN_COARSEST = 2


def is_valid_dimension(dimension: int, depth: int) -> bool:
    """Check whether one image dimension satisfies the divisibility rule."""
    # Integer arithmetic is exact at any size.
    quotient, remainder = divmod(int(dimension) + 3, 2**depth)
    return remainder == 0 and quotient >= MIN_COARSEST


def coarsest_sizes(shape: tuple[int, int], depth: int) -> tuple[int, int]:
    """Return ``(M_r, M_c)`` for an already validated image shape.

    Raises:
        ScalingImpossible: If either dimension does not satisfy the rule
    """
    rows, cols = shape
    if not (is_valid_dimension(rows, depth) and is_valid_dimension(cols, depth)):
        raise ScalingImpossible(
            f"Shape {rows}x{cols} is not valid for depth {depth}; "
            f"(dimension + 3) must be a multiple of {2**depth}"
        )
    return (rows + 3) // 2**depth, (cols + 3) // 2**depth


def level_shape(coarsest: tuple[int, int], depth: int, level: int) -> tuple[int, int]:
    """Shape of pyramid level ``level`` given the coarsest-level ratios."""
    scale = 2 ** (depth - level)
    return coarsest[0] * scale - 3, coarsest[1] * scale - 3


def validate_scale(image: np.ndarray, depth: int) -> np.ndarray:
    """Trim the last rows/columns until both dimensions suit ``depth``.

    Pixels are never moved or resampled; the result is a view of the leading
    block of ``image``.

    Args:
        image: 2-D image
        depth: Number of pyramid levels

    Returns:
        View of ``image`` with valid dimensions

    Raises:
        ScalingImpossible: If a dimension would shrink to a single pixel
            without becoming valid
    """
    rows, cols = image.shape
    while True:
        rows_ok = is_valid_dimension(rows, depth)
        cols_ok = is_valid_dimension(cols, depth)
        if rows_ok and cols_ok:
            break
        if rows <= 1 or cols <= 1:
            raise ScalingImpossible(
                f"Image of shape {image.shape[0]}x{image.shape[1]} is too small "
                f"for depth {depth}"
            )
        if not cols_ok:
            cols -= 1
        if not rows_ok:
            rows -= 1

    if (rows, cols) != image.shape:
        logger.debug(
            "Trimmed image from %dx%d to %dx%d for depth %d",
            image.shape[0], image.shape[1], rows, cols, depth,
        )
    return image[:rows, :cols]
