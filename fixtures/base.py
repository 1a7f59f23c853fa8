"""Generic DMX device model."""

import logging
import weakref
from typing import TYPE_CHECKING, Any, ClassVar, Iterable, Mapping

from errors import UnknownCommand

if TYPE_CHECKING:
    from controller.dmx_controller import DmxController

logger = logging.getLogger(__name__)


class DmxDevice:
    """A fixture occupying a contiguous range of channels on the bus.

    Capabilities, points and defaults can be given per instance or declared
    as class attributes by a fixture type:

        class Scanner(DmxDevice):
            name = "scanner"
            capabilities = ("pan", "tilt")
            points = {"center": {"pan": 127, "tilt": 127}}

    Values are buffered only; nothing reaches the bus until the owning
    controller writes a frame.
    """

    name: ClassVar[str] = "generic"
    description: ClassVar[str] = "Generic DMX device"
    capabilities: tuple[str, ...] = ()
    points: dict[str, dict[str, float]] = {}
    defaults: dict[str, float] = {}

    def __init__(
        self,
        start_address: int | None = None,
        capabilities: Iterable[str] | None = None,
        points: dict[str, dict[str, float]] | None = None,
        defaults: dict[str, float] | None = None,
        label: str | None = None,
    ) -> None:
        self.start_address = start_address
        if capabilities is not None:
            self.capabilities = tuple(capabilities)
        else:
            self.capabilities = tuple(type(self).capabilities)
        self.points = {
            point: dict(values)
            for point, values in (points if points is not None else type(self).points).items()
        }
        self.defaults = dict(defaults if defaults is not None else type(self).defaults)
        self.label = label or self.name
        self._values: dict[str, float] = {}
        self._controller: weakref.ref | None = None

    @property
    def controller(self) -> "DmxController | None":
        """The controller this device is attached to, if it is still alive."""
        if self._controller is None:
            return None
        return self._controller()

    @controller.setter
    def controller(self, value: "DmxController | None") -> None:
        self._controller = weakref.ref(value) if value is not None else None

    @property
    def channel_count(self) -> int:
        return len(self.capabilities)

    @property
    def end_address(self) -> int | None:
        """Last channel used by this device (inclusive)."""
        if self.start_address is None:
            return None
        return self.start_address + self.channel_count - 1

    def point(self, name: str) -> dict[str, float]:
        """Get the capability values of a named point."""
        try:
            return dict(self.points[name])
        except KeyError:
            raise UnknownCommand(name) from None

    def buffer(self, point: str | None = None, **values: float) -> None:
        """Buffer new capability values.

        A point is applied first so explicit values can override it. Use
        buffer_values() for a capability that is itself called ``point``.
        """
        self.buffer_values(values, point)

    def buffer_values(self, values: Mapping[str, float], point: str | None = None) -> None:
        """Buffer a mapping of capability values, after an optional point."""
        updates: dict[str, float] = {}
        if point is not None:
            updates.update(self.point(point))
        for capability in values:
            if capability not in self.capabilities:
                raise UnknownCommand(capability)
        updates.update(values)
        self._values.update(updates)

    def instant(self, point: str | None = None, **values: float) -> None:
        """Buffer values and have the controller write a frame right away."""
        self.buffer_values(values, point)
        controller = self.controller
        if controller is None:
            logger.debug("%s is not attached; values buffered only", self.label)
            return
        controller.write()

    def value(self, capability: str) -> float:
        """Current value of one capability."""
        if capability not in self.capabilities:
            raise UnknownCommand(capability)
        return self._values.get(capability, self.defaults.get(capability, 0))

    def current_values(self) -> list[float]:
        """Current values in capability order."""
        return [self.value(capability) for capability in self.capabilities]

    def to_dict(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "type": self.name,
            "start_address": self.start_address,
            "capabilities": list(self.capabilities),
            "points": sorted(self.points),
            "values": dict(zip(self.capabilities, self.current_values())),
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(label={self.label!r}, start_address={self.start_address!r})"
