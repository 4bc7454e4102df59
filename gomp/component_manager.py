"""Densely packed component storage with swap-and-pop removal."""

from __future__ import annotations

from typing import Generic, Iterator, TypeVar

from gomp.component_mask import ComponentBitArray256, ComponentID, EntityID

T = TypeVar("T")

ENTITY_COMPONENT_MASK_ID: ComponentID = (1 << 8) - 1
INVALID_ENTITY: EntityID = -1


class ComponentManager(Generic[T]):
    """Stores one value per entity in a packed list, indexed through a lookup table.

    Unless this manager itself holds the entity masks, creating a component
    sets its bit in the entity's mask.
    """

    def __init__(self, component_id: ComponentID) -> None:
        self.id = component_id
        self._data: list[T] = []
        self._entities: list[EntityID] = []
        self._lookup: dict[EntityID, int] = {}
        self._world_mask: ComponentManager[ComponentBitArray256] | None = None

    @staticmethod
    def _check_entity(entity: EntityID) -> None:
        if entity == INVALID_ENTITY:
            raise ValueError("invalid entity id -1")

    def _check_consistency(self) -> None:
        if not len(self._entities) == len(self._data) == len(self._lookup):
            raise RuntimeError("component storage is out of sync")

    def register_component_mask(
        self, mask: ComponentManager[ComponentBitArray256]
    ) -> None:
        """Use ``mask`` as the store of per-entity component masks."""
        self._world_mask = mask

    def create(self, entity: EntityID, value: T) -> T:
        """Attach ``value`` to ``entity``; an entity may hold one value only."""
        self._check_entity(entity)
        if entity in self._lookup:
            raise ValueError(f"entity {entity} already has component {self.id}")
        self._check_consistency()

        if self.id != ENTITY_COMPONENT_MASK_ID:
            if self._world_mask is None:
                raise RuntimeError(f"component {self.id} has no mask registered")
            mask = self._world_mask.get(entity)
            if mask is None:
                raise KeyError(f"entity {entity} has no component mask")
            mask.set(self.id)

        self._lookup[entity] = len(self._data)
        self._data.append(value)
        self._entities.append(entity)
        return value

    def get(self, entity: EntityID) -> T | None:
        """Return the value attached to ``entity`` or None."""
        self._check_entity(entity)
        index = self._lookup.get(entity)
        if index is None:
            return None
        return self._data[index]

    def __contains__(self, entity: object) -> bool:
        return entity in self._lookup

    def remove(self, entity: EntityID) -> None:
        """Detach the value of ``entity``, moving the last value into its slot."""
        self._check_entity(entity)
        if entity not in self._lookup:
            raise KeyError(f"entity {entity} has no component {self.id}")

        index = self._lookup.pop(entity)
        last = len(self._data) - 1
        if index < last:
            self._data[index] = self._data[last]
            self._entities[index] = self._entities[last]
            self._lookup[self._entities[index]] = index
        self._data.pop()
        self._entities.pop()
        self._check_consistency()

    def all(self) -> Iterator[tuple[EntityID, T]]:
        """Yield ``(entity, value)`` pairs from the last packed to the first."""
        self._check_consistency()
        for index in range(len(self._data) - 1, -1, -1):
            yield self._entities[index], self._data[index]

    def all_parallel(self) -> Iterator[tuple[EntityID, T]]:
        """Yield ``(entity, value)`` pairs in the same order as :meth:`all`."""
        return self.all()

    def all_data(self) -> Iterator[T]:
        """Yield every value from the last packed to the first."""
        self._check_consistency()
        for index in range(len(self._data) - 1, -1, -1):
            yield self._data[index]

    def all_data_parallel(self) -> Iterator[T]:
        """Yield every value in the same order as :meth:`all_data`."""
        return self.all_data()

    def __len__(self) -> int:
        return len(self._data)

    def clean(self) -> None:
        """Storage is compacted on every removal, so nothing is left to release."""
        self._check_consistency()