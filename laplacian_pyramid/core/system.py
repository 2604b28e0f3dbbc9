"""System base class for ECS transformations.

Systems are the "logic" layer of the ECS architecture. They operate on
components attached to entities, reading required components and producing
new components.

Systems support two modes:
- 'forward': Image to pyramid (encode direction)
- 'inverse': Pyramid to image (decode direction)

Example:
    >>> class MySystem(System):
    ...     def required_components(self):
    ...         return [GrayImage]
    ...     def produced_components(self):
    ...         return [LaplacianPlanes]
    ...     def run(self, world, eids):
    ...         for eid in eids:
    ...             img = world.get_component(eid, GrayImage)
    ...             world.add_component(eid, LaplacianPlanes(...))
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from laplacian_pyramid.core.world import World


class System(ABC):
    """Base class for all ECS systems.

    Systems transform components attached to entities. They declare:
    - required_components(): What inputs they need
    - produced_components(): What outputs they create
    - run(): The actual transformation logic

    Attributes:
        mode: Transformation direction ('forward' or 'inverse')
    """

    def __init__(self, mode: Literal["forward", "inverse"] = "forward") -> None:
        if mode not in ("forward", "inverse"):
            raise ValueError(f"mode must be 'forward' or 'inverse', got {mode!r}")
        self.mode = mode

    @abstractmethod
    def required_components(self) -> list[type]:
        """Return list of component types this system requires as input."""

    @abstractmethod
    def produced_components(self) -> list[type]:
        """Return list of component types this system produces as output."""

    @abstractmethod
    def run(self, world: World, eids: list[int]) -> None:
        """Execute system on given entities.

        Args:
            world: World instance with entities and components
            eids: List of entity IDs to process
        """

    def can_run(self, world: World, eid: int) -> bool:
        """Check if entity has all required components."""
        return all(world.has_component(eid, ct) for ct in self.required_components())

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(mode={self.mode})"
