"""Fluent pipeline for chaining systems on one entity.

Example:
    >>> recon = (
    ...     world.pipe(entity)
    ...     .to(LaplacianEncode(depth=5, quantization=0.0))
    ...     .to(LaplacianEncode(mode='inverse'))
    ...     .out(ReconImage)
    ... )
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel

if TYPE_CHECKING:
    from laplacian_pyramid.core.system import System
    from laplacian_pyramid.core.world import World

T = TypeVar("T", bound=BaseModel)


class Pipe:
    """Ordered list of systems bound to an entity, run lazily by `.out()`.

    Systems are appended with `.to()` or the `|` operator. `.select()`/`.use()`
    choose the component `.out()` returns when called without a type.
    """

    def __init__(self, world: "World", entity: int) -> None:
        self.world: Any = world
        self.entities = [entity]
        self.systems: list[Any] = []
        self._current_component_type: type[BaseModel] | None = None

    def to(self, system: "System") -> "Pipe":
        """Append a system and return self for chaining."""
        self.systems.append(system)
        return self

    def __or__(self, system: "System") -> "Pipe":
        return self.to(system)

    def select(self, component_type: type[T]) -> "Pipe":
        """Choose the component that `.out()` returns when called without a type."""
        self._current_component_type = component_type
        return self

    def use(self, component_type: type[T]) -> "Pipe":
        """Alias for select()."""
        return self.select(component_type)

    def out(self, component_type: type[T] | None = None) -> Any:
        """Run the pipeline and return the entity's component of the given type.

        Args:
            component_type: Component to return; defaults to the one chosen
                with `.select()`/`.use()`

        Raises:
            ValueError: If no type is given and none was selected
            RuntimeError: If a system's required components are missing
            KeyError: If the component is absent after execution
        """
        if component_type is None:
            component_type = self._current_component_type
        if component_type is None:
            raise ValueError("No component type given; pass one or call select() first")
        self.execute()
        return self.world.get_component(self.entities[0], component_type)

    def execute(self) -> None:
        """Run all systems in order.

        Raises:
            RuntimeError: If no entity has the components a system requires
        """
        for system in self.systems:
            runnable = [
                eid for eid in self.entities if system.can_run(self.world, eid)
            ]
            if not runnable:
                required = [ct.__name__ for ct in system.required_components()]
                raise RuntimeError(
                    f"System {type(system).__name__} cannot run: "
                    f"entities missing required components {required}. "
                    f"Available entities: {self.entities}"
                )
            system.run(self.world, runnable)

    def __repr__(self) -> str:
        names = " | ".join(type(s).__name__ for s in self.systems)
        return f"Pipe(entities={self.entities}, systems=[{names}])"
