"""Laplacian pyramid encoder/decoder.

A pyramid of depth ``N`` holds ``N`` planes. Planes ``0..N-2`` are band-pass
detail planes ``G_l - expand(G_{l+1})`` (optionally quantized); plane ``N-1``
is the coarsest Gaussian level, kept unchanged to seed reconstruction.

Example:
    >>> import numpy as np
    >>> from laplacian_pyramid import LaplacianPyramid
    >>> img = np.random.rand(509, 509).astype(np.float32)
    >>> pyramid = LaplacianPyramid(img, depth=5, quantization=0.0)
    >>> pyramid.levels()
    5
    >>> recon = pyramid.decode()
    >>> recon.shape
    (509, 509)
"""

from __future__ import annotations

import logging
import operator
from collections.abc import Iterator

import numpy as np

from laplacian_pyramid.core.errors import IndexOutOfRange, InvariantViolation
from laplacian_pyramid.core.expand import expand_to
from laplacian_pyramid.core.kernel import DEFAULT_A, EdgePolicy, build_kernel, check_edge
from laplacian_pyramid.core.quantize import check_step, quantize_plane
from laplacian_pyramid.core.reduce import gaussians
from laplacian_pyramid.core.scale import validate_scale

logger = logging.getLogger(__name__)

DEFAULT_DEPTH = 5
DEFAULT_QUANTIZATION = 1.0


def as_image(image: np.ndarray) -> np.ndarray:
    """Copy ``image`` into a fresh 2-D float32 array.

    Raises:
        TypeError: If ``image`` is not array-like with a real dtype
        ValueError: If ``image`` is not 2-D or is empty
    """
    arr = np.asarray(image)
    if not (np.issubdtype(arr.dtype, np.integer) or np.issubdtype(arr.dtype, np.floating)):
        raise TypeError(f"Expected real-valued image, got dtype {arr.dtype}")
    if arr.ndim != 2:
        raise ValueError(f"Expected single-channel image (H, W), got shape {arr.shape}")
    if arr.size == 0:
        raise ValueError(f"Expected non-empty image, got shape {arr.shape}")
    return np.array(arr, dtype=np.float32)


class LaplacianPyramid:
    """Immutable Laplacian pyramid of a single-channel image.

    The full encode pipeline runs in the constructor: validate scale, build
    Gaussian levels, expand each coarser level onto its finer neighbour and
    subtract, then quantize the detail planes. Stored planes are read-only.

    Attributes:
        depth: Number of planes
        quantization: Step size used for detail planes (0 = lossless)
        a: Centre weight of the smoothing kernel
        edge: Border policy used by reduce/expand
        shape: Shape of the validated (trimmed) input
    """

    def __init__(
        self,
        image: np.ndarray,
        depth: int = DEFAULT_DEPTH,
        quantization: float = DEFAULT_QUANTIZATION,
        a: float = DEFAULT_A,
        edge: EdgePolicy = "asymmetric",
    ) -> None:
        """Encode ``image`` into a pyramid of ``depth`` planes.

        Args:
            image: 2-D image, any real dtype (converted to float32)
            depth: Number of pyramid levels (>= 1)
            quantization: Detail plane step size; 0 disables quantization
            a: Centre weight of the smoothing kernel
            edge: 'asymmetric' (drop low-side taps, clamp high side) or
                'replicate' (clamp both sides)

        Raises:
            ScalingImpossible: If the image cannot be trimmed to a valid size
            ValueError: If depth or quantization are out of range
        """
        depth = operator.index(depth)
        if depth < 1:
            raise ValueError(f"depth must be >= 1, got {depth}")

        self._depth = depth
        self._quantization = check_step(quantization)
        self._a = float(a)
        self._edge = check_edge(edge)
        self._kernel = build_kernel(self._a)

        validated = validate_scale(as_image(image), depth)
        self._shape: tuple[int, int] = validated.shape
        self._planes = self._encode(validated)

    def _encode(self, validated: np.ndarray) -> tuple[np.ndarray, ...]:
        levels = gaussians(validated, self._kernel, self._depth, self._edge)
        expanded = [
            expand_to(coarse, self._kernel, fine.shape, self._edge)
            for fine, coarse in zip(levels[:-1], levels[1:])
        ]
        if len(expanded) != len(levels) - 1:
            raise InvariantViolation(
                f"Expanded {len(expanded)} levels for {len(levels)} Gaussian levels"
            )

        planes = []
        for level, (fine, up) in enumerate(zip(levels, expanded)):
            if up.shape != fine.shape:
                raise InvariantViolation(
                    f"Level {level}: expanded shape {up.shape} != {fine.shape}"
                )
            planes.append(quantize_plane(fine - up, self._quantization))
        planes.append(levels[-1])

        for plane in planes:
            plane.setflags(write=False)

        logger.debug(
            "Encoded %dx%d image into %d planes (quantization=%g)",
            self._shape[0], self._shape[1], self._depth, self._quantization,
        )
        return tuple(planes)

    def decode(self) -> np.ndarray:
        """Reconstruct the image from the stored planes.

        Starts from the baseband and, for each finer level, expands the
        running reconstruction to that level's shape and adds its plane.

        Returns:
            float32 image with shape ``self.shape``
        """
        recon = self._planes[-1]
        for plane in reversed(self._planes[:-1]):
            recon = expand_to(recon, self._kernel, plane.shape, self._edge) + plane
        if recon is self._planes[-1]:
            return recon.copy()
        return recon

    def at(self, level: int) -> np.ndarray:
        """Return the stored plane at ``level`` (0 = finest, depth-1 = baseband).

        Raises:
            IndexOutOfRange: If ``level`` is not in ``[0, depth)``
        """
        level = operator.index(level)
        if not 0 <= level < self._depth:
            raise IndexOutOfRange(
                f"Level {level} out of range for pyramid with {self._depth} levels"
            )
        return self._planes[level]

    def __getitem__(self, level: int) -> np.ndarray:
        return self.at(level)

    def levels(self) -> int:
        """Return the number of stored planes."""
        return self._depth

    def __len__(self) -> int:
        return self._depth

    def __iter__(self) -> Iterator[np.ndarray]:
        return iter(self._planes)

    def shapes(self) -> list[tuple[int, int]]:
        """Return the shape of every plane, finest first."""
        return [plane.shape for plane in self._planes]

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def quantization(self) -> float:
        return self._quantization

    @property
    def a(self) -> float:
        return self._a

    @property
    def edge(self) -> str:
        return self._edge

    @property
    def kernel(self) -> np.ndarray:
        return self._kernel

    @property
    def shape(self) -> tuple[int, int]:
        return self._shape

    def __repr__(self) -> str:
        return (
            f"LaplacianPyramid(shape={self._shape}, depth={self._depth}, "
            f"quantization={self._quantization}, edge={self._edge!r})"
        )
