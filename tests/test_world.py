import random
from dataclasses import dataclass

import pytest

from gomp.component import ComponentType
from gomp.systems import DrawSystem, UpdateSystem
from gomp.world import World


@dataclass
class Color:
    r: int
    g: int
    b: int
    a: int


@dataclass
class Pixel:
    x: int
    y: int
    hp: int
    color: Color
    breath: bool = False


pixel_component_type = ComponentType()

SIDE = 20


def prepare_world(description, system):
    world = World(description)
    world.register_component_types(pixel_component_type)
    world.register_update_systems().parallel(system)
    return world


def init_pixel_component(world):
    pixels = pixel_component_type.instances(world)
    rng = random.Random(42)
    for i in range(SIDE):
        for j in range(SIDE):
            entity = world.create_entity("Pixel")
            green = 135 // (rng.randrange(10) + 1)
            blue = 135 // (rng.randrange(10) + 1)
            pixels.set(entity, Pixel(j, i, 100, Color(0, green, blue, 255)))
    return pixels


def breathe(pixel):
    color = pixel.color
    if pixel.breath:
        if color.g < 135:
            color.g += 1
        else:
            pixel.hp += 1
        if color.b < 135:
            color.b += 1
        else:
            pixel.hp += 1
    else:
        if color.g > 0:
            color.g -= 1
        else:
            pixel.hp -= 1
        if color.b > 0:
            color.b -= 1
        else:
            pixel.hp -= 1
    if pixel.hp <= 0:
        pixel.breath = True
    elif pixel.hp >= 100:
        pixel.breath = False


class PixelSystem(UpdateSystem):
    def init(self, world):
        self.pixels = init_pixel_component(world)

    def run(self, world):
        for pixel in self.pixels.all_data():
            breathe(pixel)


class PixelSystemDirectCall(UpdateSystem):
    def init(self, world):
        self.pixels = init_pixel_component(world)

    def run(self, world):
        for pixel in self.pixels.all_data_parallel():
            breathe(pixel)


@pytest.mark.parametrize("system_class", [PixelSystem, PixelSystemDirectCall])
def test_pixel_iteration(system_class):
    system = system_class()
    world = prepare_world("iteration", system)
    start = {e: (p.color.g, p.color.b) for e, p in system.pixels.all()}
    assert len(start) == SIDE * SIDE
    coords = {(p.x, p.y) for p in system.pixels.all_data()}
    assert len(coords) == SIDE * SIDE

    for _ in range(5):
        world.run_update_systems()

    assert world.tick == 5
    for entity, pixel in system.pixels.all():
        g0, b0 = start[entity]
        assert pixel.color.g == g0 - 5
        assert pixel.color.b == b0 - 5
        assert pixel.hp == 100
        assert pixel.breath is False


def test_entity_ids_start_at_one():
    world = World("ids")
    assert [world.create_entity("e") for _ in range(3)] == [1, 2, 3]


def test_destroyed_id_is_reused():
    world = World("reuse")
    for _ in range(3):
        world.create_entity("e")
    world.destroy_entity(2)
    assert 2 not in world.entity_component_mask
    assert world.create_entity("e") == 2
    assert world.create_entity("e") == 4


def test_destroy_unknown_entity_raises():
    world = World("missing")
    with pytest.raises(KeyError):
        world.destroy_entity(7)


def test_worlds_get_consecutive_ids():
    first = World("a")
    second = World("b")
    assert second.id == first.id + 1


def test_set_marks_mask_and_destroy_removes_components():
    first_type = ComponentType()
    second_type = ComponentType()
    world = World("components")
    world.register_component_types(first_type, second_type)
    first = first_type.instances(world)
    second = second_type.instances(world)

    entity = world.create_entity("e")
    other = world.create_entity("e")
    first.set(entity, "a")
    second.set(entity, "b")
    first.set(other, "c")

    mask = world.entity_component_mask.get(entity)
    assert mask.is_set(0) and mask.is_set(1)
    assert sorted(mask.all_set()) == [0, 1]

    world.destroy_entity(entity)
    assert first.get(entity) is None
    assert second.get(entity) is None
    assert first.get(other) == "c"
    assert len(first) == 1
    assert len(second) == 0


def test_remove_clears_mask_bit():
    component_type = ComponentType()
    world = World("remove")
    world.register_component_types(component_type)
    values = component_type.instances(world)
    entity = world.create_entity("e")
    values.set(entity, 5)
    values.remove(entity)
    assert world.entity_component_mask.get(entity).is_set(0) is False
    assert entity not in values


def test_instances_in_unregistered_world_raises():
    component_type = ComponentType()
    with pytest.raises(KeyError):
        component_type.instances(World("unregistered"))


class Recorder(UpdateSystem):
    def __init__(self, name, log):
        self.name = name
        self.log = log

    def init(self, world):
        self.log.append(("init", self.name))

    def run(self, world):
        self.log.append(("run", self.name))


def test_stages_run_in_order_and_tick_advances():
    log = []
    world = World("stages")
    world.register_update_systems().sequential(
        Recorder("a", log), Recorder("b", log)
    ).parallel(Recorder("c", log), Recorder("d", log))
    assert log == [("init", "a"), ("init", "b"), ("init", "c"), ("init", "d")]

    log.clear()
    world.run_update_systems()
    assert log[:2] == [("run", "a"), ("run", "b")]
    assert sorted(log[2:]) == [("run", "c"), ("run", "d")]
    assert world.tick == 1


class Failing(UpdateSystem):
    def run(self, world):
        raise RuntimeError("boom")


class Idle(UpdateSystem):
    def run(self, world):
        pass


def test_error_in_parallel_stage_propagates():
    world = World("errors")
    world.register_update_systems().parallel(Failing(), Idle())
    with pytest.raises(RuntimeError, match="boom"):
        world.run_update_systems()


class Painter(DrawSystem):
    def __init__(self, name):
        self.name = name

    def run(self, world, screen):
        screen.append(self.name)


def test_draw_systems_receive_screen():
    world = World("draw")
    world.register_draw_systems().sequential(Painter("x")).parallel(
        Painter("y"), Painter("z")
    )
    screen = []
    world.run_draw_systems(screen)
    assert screen[0] == "x"
    assert sorted(screen[1:]) == ["y", "z"]
    assert world.tick == 0