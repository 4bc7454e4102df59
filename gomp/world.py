"""A world holding entities, their component masks and the systems run on them."""

from __future__ import annotations

import itertools
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable

from gomp.component_mask import ComponentBitArray256, EntityID
from gomp.sparse_set import SparseSet
from gomp.systems import DrawSystemBuilder, UpdateSystemBuilder

_world_ids = itertools.count()


def _run_stages(stages: list[list[Any]], call: Callable[[Any], None]) -> None:
    """Run stages in order; a stage of several systems runs them on worker threads."""
    for stage in stages:
        if len(stage) == 1:
            call(stage[0])
            continue
        if not stage:
            continue
        with ThreadPoolExecutor(max_workers=len(stage)) as pool:
            futures = [pool.submit(call, system) for system in stage]
        for future in futures:
            future.result()


class World:
    """Entities identified by integers, each with a mask of the components it holds."""

    def __init__(self, title: str) -> None:
        self.id = next(_world_ids)
        self.title = title
        self.tick = 0
        self.entity_component_mask: SparseSet[ComponentBitArray256] = SparseSet()
        self._components: list[Any] = []
        self._update_systems: list[list[Any]] = []
        self._draw_systems: list[list[Any]] = []
        self._deleted_ids: list[EntityID] = []
        self._last_entity_id: EntityID = 0
        self._lock = threading.Lock()

    def register_component_types(self, *args: Any) -> None:
        """Register component types, numbering them in the order given."""
        for component_type in args:
            component_id = len(self._components)
            self._components.append(component_type.register(self, component_id))

    def register_update_systems(self) -> UpdateSystemBuilder[World]:
        """Return a builder that adds update stages to this world."""
        return UpdateSystemBuilder(self, self._update_systems)

    def register_draw_systems(self) -> DrawSystemBuilder[World]:
        """Return a builder that adds draw stages to this world."""
        return DrawSystemBuilder(self, self._draw_systems)

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
            self.entity_component_mask.set(entity, ComponentBitArray256())
        return entity

    def destroy_entity(self, entity_id: EntityID) -> None:
        """Remove the entity and every component it holds; its id is reused later."""
        mask = self.entity_component_mask.get(entity_id)
        if mask is None:
            raise KeyError(f"Entity {entity_id} does not exist")
        for component_id in list(mask.all_set()):
            self._components[component_id].remove(entity_id)
        with self._lock:
            self.entity_component_mask.soft_delete(entity_id)
            self._deleted_ids.append(entity_id)

    def clean(self) -> None:
        """Release storage left behind by removals in every component."""
        for components in self._components:
            components.clean()

    def _generate_entity_id(self) -> EntityID:
        if self._deleted_ids:
            return self._deleted_ids.pop()
        self._last_entity_id += 1
        return self._last_entity_id