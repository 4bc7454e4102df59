"""Entity-component-system toolkit: worlds, component storage, staged systems and containers."""

__version__ = "0.1.0"