"""Component types and their per-world storage."""

from __future__ import annotations

import threading
from typing import Any, Generic, Iterator, TypeVar

from gomp.component_mask import ComponentBitArray256, ComponentID, EntityID
from gomp.sparse_set import SparseSet

T = TypeVar("T")


class WorldComponents(Generic[T]):
    """The values of one component type inside one world."""

    def __init__(
        self,
        component_id: ComponentID,
        mask_component: SparseSet[ComponentBitArray256],
    ) -> None:
        self.id = component_id
        self._masks = mask_component
        self._instances: SparseSet[T] = SparseSet()
        self._lock = threading.Lock()
        self.registered_mask: Any = None

    def _mask(self, entity: EntityID) -> ComponentBitArray256:
        mask = self._masks.get(entity)
        if mask is None:
            raise KeyError(f"entity {entity} does not exist")
        return mask

    def register_component_mask(self, mask: Any) -> None:
        """Record a mask store offered by a world; values keep the masks given at construction."""
        self.registered_mask = mask

    def get(self, entity: EntityID) -> T | None:
        """Return the value of ``entity`` or None."""
        return self._instances.get(entity)

    def __contains__(self, entity: object) -> bool:
        return entity in self._instances

    def set(self, entity: EntityID, data: T) -> T:
        """Attach or replace the value of ``entity`` and mark it in the entity's mask."""
        with self._lock:
            mask = self._mask(entity)
            stored = self._instances.set(entity, data)
            mask.set(self.id)
            return stored

    def remove(self, entity: EntityID) -> None:
        """Detach the value of ``entity`` and clear its bit in the entity's mask."""
        self._instances.soft_delete(entity)
        self._mask(entity).unset(self.id)

    def clean(self) -> None:
        """Release storage left behind by removals."""
        self._instances.clean()
        self._masks.clean()

    def all(self) -> Iterator[tuple[EntityID, T]]:
        """Yield ``(entity, value)`` pairs."""
        return self._instances.all()

    def all_parallel(self) -> Iterator[tuple[EntityID, T]]:
        """Yield ``(entity, value)`` pairs in worker-split order."""
        return self._instances.all_parallel()

    def all_data(self) -> Iterator[T]:
        """Yield every value."""
        return self._instances.all_data()

    def all_data_parallel(self) -> Iterator[T]:
        """Yield every value in worker-split order."""
        return self._instances.all_data_parallel()

    def __len__(self) -> int:
        return len(self._instances)


class ComponentType(Generic[T]):
    """A component kind that can be registered in any number of worlds."""

    def __init__(self) -> None:
        self._by_world: dict[int, tuple[Any, WorldComponents[T]]] = {}
        self._lock = threading.Lock()

    def instances(self, world: Any) -> WorldComponents[T]:
        """Return this component's storage in ``world``."""
        entry = self._by_world.get(id(world))
        if entry is None or entry[0] is not world:
            title = getattr(world, "title", "")
            raise KeyError(f"component is not registered in <{title}> world")
        return entry[1]

    def register(self, world: Any, component_id: ComponentID) -> WorldComponents[T]:
        """Create storage for this component in ``world`` under ``component_id``."""
        components: WorldComponents[T] = WorldComponents(
            component_id, world.entity_component_mask
        )
        with self._lock:
            self._by_world[id(world)] = (world, components)
        return components