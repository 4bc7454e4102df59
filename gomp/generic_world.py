"""A world whose components and systems are declared as fields of two objects."""

from __future__ import annotations

import dataclasses
import threading
from typing import Any

from gomp.component_manager import ENTITY_COMPONENT_MASK_ID, ComponentManager
from gomp.component_mask import ComponentBitArray256, EntityID
from gomp.systems import DrawSystem, DrawSystemBuilder, UpdateSystem, UpdateSystemBuilder
from gomp.world import _run_stages

_COMPONENT_METHODS = ("register_component_mask", "remove", "clean")


def _field_names(obj: Any) -> list[str]:
    if dataclasses.is_dataclass(obj):
        return [f.name for f in dataclasses.fields(obj)]
    return list(vars(obj))


class GenericWorld:
    """Entities whose component stores and systems come from declared fields.

    Every field of ``components`` must hold a component store; every field of
    ``systems`` must hold a system class, which is replaced by a new instance.
    Update systems and draw systems each run one per stage in field order.
    """

    def __init__(self, world_id: int, components: Any, systems: Any) -> None:
        self.id = world_id
        self.components = components
        self.systems = systems
        self.tick = 0
        self.entity_component_mask: ComponentManager[ComponentBitArray256] = (
            ComponentManager(ENTITY_COMPONENT_MASK_ID)
        )
        self._components: list[Any] = []
        self._update_systems: list[list[Any]] = []
        self._draw_systems: list[list[Any]] = []
        self._deleted_ids: list[EntityID] = []
        self._last_entity_id: EntityID = 0
        self._size = 0
        self._lock = threading.Lock()

        stores = []
        for name in _field_names(components):
            store = getattr(components, name)
            if not all(hasattr(store, attr) for attr in _COMPONENT_METHODS + ("id",)):
                raise TypeError(f"component field {name!r} is not a component store")
            stores.append(store)
        self._register_components(stores)

        update_systems = []
        draw_systems = []
        for name in _field_names(systems):
            system_class = getattr(systems, name)
            if not isinstance(system_class, type):
                raise TypeError(f"system field {name!r} must hold a class")
            system = system_class()
            setattr(systems, name, system)
            if isinstance(system, UpdateSystem):
                update_systems.append(system)
            elif isinstance(system, DrawSystem):
                draw_systems.append(system)
            else:
                raise TypeError(f"system field {name!r} is neither an update nor a draw system")

        UpdateSystemBuilder(self, self._update_systems).sequential(*update_systems)
        DrawSystemBuilder(self, self._draw_systems).sequential(*draw_systems)

    def _register_components(self, stores: list[Any]) -> None:
        max_id = max((store.id for store in stores), default=0)
        self._components = [None] * (max_id + 1)
        for store in stores:
            store.register_component_mask(self.entity_component_mask)
            self._components[store.id] = store

    def run_update_systems(self) -> None:
        """Run every update stage, advance the tick and release freed storage."""
        _run_stages(self._update_systems, lambda system: system.run(self))
        self.tick += 1
        self.clean()

    def run_draw_systems(self, screen: Any) -> None:
        """Run every draw stage onto ``screen``."""
        _run_stages(self._draw_systems, lambda system: system.run(self, screen))

    def create_entity(self, title: str) -> EntityID:
        """Create an entity with an empty component mask and return its id."""
        with self._lock:
            entity = self._generate_entity_id()
            self.entity_component_mask.create(entity, ComponentBitArray256())
            self._size += 1
        return entity

    def destroy_entity(self, entity_id: EntityID) -> None:
        """Remove the entity and every component it holds; its id is reused later."""
        mask = self.entity_component_mask.get(entity_id)
        if mask is None:
            raise KeyError(f"Entity {entity_id} does not exist")
        for component_id in list(mask.all_set()):
            self._components[component_id].remove(entity_id)
        with self._lock:
            self.entity_component_mask.remove(entity_id)
            self._deleted_ids.append(entity_id)
            self._size -= 1

    def clean(self) -> None:
        """Release storage left behind by removals in every component."""
        for store in self._components:
            if store is not None:
                store.clean()

    def __len__(self) -> int:
        with self._lock:
            return self._size

    def _generate_entity_id(self) -> EntityID:
        if self._deleted_ids:
            return self._deleted_ids.pop()
        self._last_entity_id += 1
        return self._last_entity_id