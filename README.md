# gomp

A small entity-component-system (ECS) toolkit for games and simulations,
written in plain Python with no third-party dependencies.

## What is in the package

- `gomp.world.World`: creates and destroys entities (integer ids, reused
  after destruction), keeps a component mask per entity, and runs update
  and draw systems in stages. `run_update_systems()` runs every stage,
  advances `tick` and calls `clean()`. A stage holding more than one
  system runs its systems on worker threads.
- `gomp.component.ComponentType` and `WorldComponents`: a component kind
  and its storage inside one world. `WorldComponents` offers `set`, `get`,
  `remove`, `len()`, `in`, and iteration through `all()`, `all_data()`,
  `all_parallel()` and `all_data_parallel()`. `ComponentType.instances(world)`
  raises `KeyError` if the component was not registered in that world.
- `gomp.systems`: the `UpdateSystem` and `DrawSystem` base classes and the
  `UpdateSystemBuilder` / `DrawSystemBuilder` returned by
  `World.register_update_systems()` and `World.register_draw_systems()`.
  `sequential(...)` gives each system a stage of its own; `parallel(...)`
  puts all of them into one stage. Both call each system's `init(world)`.
- `gomp.generic_world.GenericWorld`: a world built from two objects
  (dataclasses or plain objects). Every field of the components object
  holds a component store such as `ComponentManager`; every field of the
  systems object holds an `UpdateSystem` or `DrawSystem` subclass, which is
  replaced by a new instance and registered as its own stage. `len()` gives
  the number of live entities.
- Storage building blocks:
  - `gomp.sparse_set.SparseSet`: integer keys mapped to densely packed
    values; `soft_delete` moves the last value into the freed slot.
  - `gomp.chunk_array.ChunkArray`: an append-only array in chunks whose
    capacity doubles, with `ChunkArrayIndex` positions.
  - `gomp.chunk_map.ChunkMap`: a sparse integer-keyed map in doubling pages.
  - `gomp.collection.Collection` and `gomp.bucket.Bucket`: values in
    equally sized buckets with a soft size.
  - `gomp.component_manager.ComponentManager`: one value per entity in a
    packed list with swap-and-pop removal.
  - `gomp.component_mask.ComponentBitArray256`: a 256-bit set of component
    ids.
  - `gomp.intlog.fast_int_log2`: integer base-2 logarithm.
- `gomp.example`: a complete shooter simulation (`PlayerSpawnSystem`,
  `BulletSpawnSystem`, `BulletSystem`, `TransformSystem`) that spawns
  players, fires bullets from every other player, counts down their hit
  points and destroys them.

Iteration through `all()` and `all_data()` yields the most recently packed
values first.

## Installation

```
pip install .
```

## Example

```python
from dataclasses import dataclass

from gomp.component import ComponentType
from gomp.systems import UpdateSystem
from gomp.world import World


@dataclass
class Position:
    x: float = 0.0
    y: float = 0.0


position = ComponentType()


class MoveRight(UpdateSystem):
    def init(self, world):
        self.positions = position.instances(world)

    def run(self, world):
        for entity, pos in self.positions.all():
            pos.x += 1

    def destroy(self, world):
        pass


world = World("main")
world.register_component_types(position)
positions = position.instances(world)

hero = world.create_entity("hero")
positions.set(hero, Position())

world.register_update_systems().sequential(MoveRight())
world.run_update_systems()

print(positions.get(hero))  # Position(x=1.0, y=0.0)
```

## What the package does not do

It is a library only: there is no command, no game loop, no window and no
rendering. Draw systems receive whatever `screen` object the caller passes
to `run_draw_systems`; the package never creates one. There is no physics,
no input handling, no networking and no saving of worlds to storage.

## Running the tests

```
pip install .[test]
pytest
```