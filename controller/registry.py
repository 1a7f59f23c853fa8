"""Ordered collection of the fixtures attached to a controller."""

import logging
from typing import TYPE_CHECKING, Iterator

from .compositor import frame_length

if TYPE_CHECKING:
    from fixtures.base import DmxDevice
    from .dmx_controller import DmxController

logger = logging.getLogger(__name__)


class DeviceRegistry:
    """Places fixtures on the bus.

    Owns only placement: insertion order and start addresses. Fixture state
    stays with the fixtures.
    """

    def __init__(self) -> None:
        self._fixtures: list["DmxDevice"] = []

    def attach(self, fixture: "DmxDevice", owner: "DmxController") -> "DmxDevice":
        """Append a fixture, assigning the next free address if it has none."""
        if fixture.start_address is None:
            fixture.start_address = frame_length(self._fixtures) + 1
        fixture.controller = owner

        for other in self._fixtures:
            if fixture.start_address <= other.end_address and other.start_address <= fixture.end_address:
                logger.debug(
                    "%s (%d-%d) overlaps %s (%d-%d); later fixture wins",
                    fixture.label, fixture.start_address, fixture.end_address,
                    other.label, other.start_address, other.end_address,
                )

        self._fixtures.append(fixture)
        logger.debug("Attached %s at address %d", fixture.label, fixture.start_address)
        return fixture

    @property
    def fixtures(self) -> tuple["DmxDevice", ...]:
        return tuple(self._fixtures)

    def __iter__(self) -> Iterator["DmxDevice"]:
        return iter(self._fixtures)

    def __len__(self) -> int:
        return len(self._fixtures)

    def __getitem__(self, index: int) -> "DmxDevice":
        return self._fixtures[index]
