"""System interfaces and builders that arrange them into run stages."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

W = TypeVar("W")


class UpdateSystem(ABC, Generic[W]):
    """A system run once per world update."""

    def init(self, world: W) -> None:
        """Remember the world the system belongs to."""
        self.world = world

    @abstractmethod
    def run(self, world: W) -> None:
        """Advance the system by one update."""

    def destroy(self, world: W) -> None:
        """Forget the world the system belonged to."""
        self.world = None


class DrawSystem(ABC, Generic[W]):
    """A system run once per frame to draw onto a screen."""

    def init(self, world: W) -> None:
        """Remember the world the system belongs to."""
        self.world = world

    @abstractmethod
    def run(self, world: W, screen: Any) -> None:
        """Draw the system's part of the frame onto ``screen``."""

    def destroy(self, world: W) -> None:
        """Forget the world the system belonged to."""
        self.world = None


class _StageBuilder(Generic[W]):
    def __init__(self, world: W, systems: list[list[Any]]) -> None:
        self.world = world
        self.systems = systems

    def sequential(self, *args: Any) -> "_StageBuilder[W]":
        """Initialise each system and give it a stage of its own."""
        for system in args:
            system.init(self.world)
            self.systems.append([system])
        return self

    def parallel(self, *args: Any) -> "_StageBuilder[W]":
        """Put all systems into one stage, then initialise them."""
        self.systems.append(list(args))
        for system in args:
            system.init(self.world)
        return self


class UpdateSystemBuilder(_StageBuilder[W]):
    """Adds update systems to a world's list of stages."""

    def __init__(self, world: W, systems: list[list[Any]]) -> None:
        super().__init__(world, systems)

    def sequential(self, *args: Any) -> "UpdateSystemBuilder[W]":
        """Initialise each system and give it a stage of its own."""
        super().sequential(*args)
        return self

    def parallel(self, *args: Any) -> "UpdateSystemBuilder[W]":
        """Put all systems into one stage, then initialise them."""
        super().parallel(*args)
        return self


class DrawSystemBuilder(_StageBuilder[W]):
    """Adds draw systems to a world's list of stages."""

    def __init__(self, world: W, systems: list[list[Any]]) -> None:
        super().__init__(world, systems)

    def sequential(self, *args: Any) -> "DrawSystemBuilder[W]":
        """Initialise each system and give it a stage of its own."""
        super().sequential(*args)
        return self

    def parallel(self, *args: Any) -> "DrawSystemBuilder[W]":
        """Put all systems into one stage, then initialise them."""
        super().parallel(*args)
        return self