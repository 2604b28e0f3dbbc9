"""World: Entity-Component-System manager.

The World is the central ECS registry that manages:
- Entity creation (integer IDs)
- Component storage (type -> entity -> component mapping)
- Component queries (find entities with specific component combinations)
- Per-entity metadata (trimmed shapes, metric results, channel index)

Example:
    >>> world = World()
    >>> eid = world.spawn_image(np.zeros((509, 509), dtype=np.float32))
    >>> entities = world.query(GrayImage)
    >>> world.clear()  # Reset for next batch
"""

from __future__ import annotations

from typing import Any, TypeVar

import numpy as np
from pydantic import BaseModel

Component = BaseModel

T = TypeVar("T", bound=Component)


class World:
    """Central ECS registry managing entities, components and metadata.

    Attributes:
        metadata: Per-entity metadata dict

    Example:
        >>> world = World()
        >>> eids = world.spawn_channels(rgb)  # One entity per channel
        >>> world.pipe(eids[0]).to(LaplacianEncode(depth=4)).out(LaplacianPlanes)
    """

    def __init__(self) -> None:
        self._next_eid = 0
        self._components: dict[type[Component], dict[int, Component]] = {}
        self.metadata: dict[int, dict[str, Any]] = {}

    def new_entity(self) -> int:
        """Create a new entity and return its ID.

        Returns:
            Entity ID (monotonically increasing integer)
        """
        eid = self._next_eid
        self._next_eid += 1
        self.metadata[eid] = {}
        return eid

    def spawn_image(self, img: np.ndarray) -> int:
        """Ingest a single-channel image into the world.

        Args:
            img: Image array (H, W) with integer or float dtype

        Returns:
            Entity ID with GrayImage component attached

        Raises:
            ValueError: If image shape or dtype is invalid
        """
        # Import here to avoid circular dependency
        from laplacian_pyramid.components.image import GrayImage

        if img.ndim != 2:
            raise ValueError(f"Expected image with shape (H, W), got {img.shape}")
        if not (np.issubdtype(img.dtype, np.integer) or np.issubdtype(img.dtype, np.floating)):
            raise ValueError(f"Expected integer or float dtype, got {img.dtype}")

        eid = self.new_entity()
        self.add_component(eid, GrayImage(pix=np.array(img, dtype=np.float32)))

        self.metadata[eid]["image_shape"] = img.shape
        self.metadata[eid]["image_dtype"] = str(img.dtype)
        return eid

    def spawn_channels(self, img: np.ndarray) -> list[int]:
        """Ingest a multi-channel image as one entity per channel.

        Args:
            img: Image array (H, W, C)

        Returns:
            Entity IDs in channel order, each with a GrayImage component and
            metadata key 'channel'
        """
        if img.ndim != 3:
            raise ValueError(f"Expected image with shape (H, W, C), got {img.shape}")

        eids = []
        for channel in range(img.shape[2]):
            eid = self.spawn_image(img[:, :, channel])
            self.metadata[eid]["channel"] = channel
            eids.append(eid)
        return eids

    def clear(self) -> None:
        """Clear all entities/components so the World can be reused."""
        self._next_eid = 0
        self._components.clear()
        self.metadata.clear()

    def add_component(self, eid: int, component: Component) -> None:
        """Attach a component to an entity.

        Raises:
            ValueError: If entity does not exist
        """
        if eid not in self.metadata:
            raise ValueError(f"Entity {eid} does not exist")

        comp_type = type(component)
        if comp_type not in self._components:
            self._components[comp_type] = {}

        self._components[comp_type][eid] = component

    def get_component(self, eid: int, comp_type: type[T]) -> T:
        """Retrieve a component from an entity.

        Raises:
            KeyError: If entity does not have the component
        """
        if comp_type not in self._components:
            raise KeyError(f"No entities have component type {comp_type.__name__}")
        if eid not in self._components[comp_type]:
            raise KeyError(f"Entity {eid} does not have component {comp_type.__name__}")

        return self._components[comp_type][eid]  # type: ignore

    def has_component(self, eid: int, comp_type: type[Component]) -> bool:
        """Check if entity has a specific component type."""
        return (
            comp_type in self._components
            and eid in self._components[comp_type]
        )

    def remove_component(self, eid: int, comp_type: type[Component]) -> None:
        """Remove a component from an entity.

        Raises:
            KeyError: If entity does not have the component
        """
        if not self.has_component(eid, comp_type):
            raise KeyError(f"Entity {eid} does not have component {comp_type.__name__}")

        del self._components[comp_type][eid]

    def query(self, *comp_types: type[Component]) -> list[int]:
        """Query entities that have ALL specified component types.

        Example:
            >>> eids = world.query(GrayImage, LaplacianPlanes)
        """
        if not comp_types:
            return list(self.metadata.keys())

        result_set = set(self._components.get(comp_types[0], {}).keys())

        for comp_type in comp_types[1:]:
            if comp_type not in self._components:
                return []
            result_set &= set(self._components[comp_type].keys())

        return sorted(result_set)

    def destroy_entity(self, eid: int) -> None:
        """Remove entity and all its components."""
        if eid not in self.metadata:
            raise ValueError(f"Entity {eid} does not exist")

        for comp_store in self._components.values():
            comp_store.pop(eid, None)

        del self.metadata[eid]

    def pipe(self, entity: int) -> Any:
        """Create a pipeline for the given entity.

        Example:
            >>> recon = (
            ...     world.pipe(entity)
            ...     .to(LaplacianEncode(depth=5, mode='forward'))
            ...     .to(LaplacianEncode(mode='inverse'))
            ...     .out(ReconImage)
            ... )
        """
        from laplacian_pyramid.core.pipeline import Pipe

        return Pipe(world=self, entity=entity)

    def __repr__(self) -> str:
        return (
            f"World(entities={len(self.metadata)}, "
            f"component_types={len(self._components)})"
        )
