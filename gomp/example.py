"""A small shooter simulation built from players, bullet spawners and bullets."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from gomp.component import ComponentType
from gomp.systems import UpdateSystem
from gomp.world import World


@dataclass
class Transform:
    """Position in space."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass
class Rotation:
    """Rotation around each axis."""

    rx: int = 0
    ry: int = 0
    rz: int = 0


@dataclass
class BulletSpawn:
    """Marks an entity that fires a bullet every update."""


@dataclass
class Bullet:
    """A bullet with the number of updates it has left."""

    hp: int = 0


rotation_component: ComponentType[Rotation] = ComponentType()
transform_component: ComponentType[Transform] = ComponentType()
bullet_spawner_component: ComponentType[BulletSpawn] = ComponentType()
bullet_component: ComponentType[Bullet] = ComponentType()

BULLET_HP = 5


class TransformSystem(UpdateSystem[World]):
    """Moves every transform by (+1, -1, +2) each update."""

    def __init__(self) -> None:
        self.n = 0
        self.transform: Any = None

    def init(self, world: World) -> None:
        self.transform = transform_component.instances(world)

    def destroy(self, world: World) -> None:
        self.transform = None

    def run(self, world: World) -> None:
        self.n += 1
        for _, t in self.transform.all():
            t.x += 1
            t.y -= 1
            t.z += 2


class BulletSpawnSystem(UpdateSystem[World]):
    """Creates a bullet at the position of every spawner that has a transform."""

    def __init__(self) -> None:
        self.n = 0
        self.bullet_spawner: Any = None
        self.transform: Any = None
        self.bullet: Any = None

    def init(self, world: World) -> None:
        self.bullet_spawner = bullet_spawner_component.instances(world)
        self.transform = transform_component.instances(world)
        self.bullet = bullet_component.instances(world)

    def destroy(self, world: World) -> None:
        self.bullet_spawner = None
        self.transform = None
        self.bullet = None

    def run(self, world: World) -> None:
        self.n += 1
        for entity, _ in self.bullet_spawner.all():
            position = self.transform.get(entity)
            if position is None:
                continue
            new_bullet = world.create_entity("bullet")
            self.transform.set(new_bullet, replace(position))
            self.bullet.set(new_bullet, Bullet(hp=BULLET_HP))


class BulletSystem(UpdateSystem[World]):
    """Ages every bullet and destroys those that run out."""

    def __init__(self) -> None:
        self.bullet: Any = None

    def init(self, world: World) -> None:
        self.bullet = bullet_component.instances(world)

    def destroy(self, world: World) -> None:
        self.bullet = None

    def run(self, world: World) -> None:
        for entity, bullet in self.bullet.all():
            bullet.hp -= 1
            if bullet.hp <= 0:
                world.destroy_entity(entity)


class PlayerSpawnSystem(UpdateSystem[World]):
    """Creates ``count`` players on init; every other one is a bullet spawner."""

    def __init__(self, count: int = 100_000) -> None:
        self.count = count
        self.bullet_spawner: Any = None
        self.transform: Any = None

    def init(self, world: World) -> None:
        self.bullet_spawner = bullet_spawner_component.instances(world)
        self.transform = transform_component.instances(world)
        start = Transform(0, 1, 2)
        for i in range(self.count):
            player = world.create_entity("Player")
            self.transform.set(player, replace(start))
            if i % 2 == 0:
                self.bullet_spawner.set(player, BulletSpawn())

    def destroy(self, world: World) -> None:
        self.bullet_spawner = None
        self.transform = None

    def run(self, world: World) -> None:
        pass