"""Fixture type registry for building devices from configuration."""

from typing import TYPE_CHECKING, Type

from .base import DmxDevice

if TYPE_CHECKING:
    from config import FixtureConfig


# Global registry of fixture types
_fixture_types: dict[str, Type[DmxDevice]] = {}


def register(cls: Type[DmxDevice]) -> Type[DmxDevice]:
    """Decorator to register a fixture type.

    Usage:
        @register
        class MyScanner(DmxDevice):
            name = "my_scanner"
            capabilities = ("pan", "tilt")

    The type will be registered under its `name` class attribute (lowercase).
    """
    name = cls.name.lower()
    if name in _fixture_types:
        raise ValueError(f"Fixture type '{name}' is already registered")
    _fixture_types[name] = cls
    return cls


def get_fixture_type(name: str) -> Type[DmxDevice] | None:
    """Get a registered fixture type by name (case-insensitive)."""
    return _fixture_types.get(name.lower())


def list_fixture_types() -> dict[str, Type[DmxDevice]]:
    """Get all registered fixture types."""
    return _fixture_types.copy()


def create_fixture(config: "FixtureConfig") -> DmxDevice:
    """Instantiate a device from its configuration.

    Raises:
        ValueError: if the fixture type is not registered
    """
    cls = get_fixture_type(config.type)
    if cls is None:
        raise ValueError(f"Unknown fixture type: {config.type}")
    return cls(
        start_address=config.start_address,
        capabilities=config.capabilities,
        points=config.points,
        defaults=config.defaults,
        label=config.name,
    )


register(DmxDevice)
