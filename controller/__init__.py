"""DMX bus controller: addressing, composition, commands and animation."""

from .animation import Animator, interpolate, ticks
from .commands import CommandResolver
from .compositor import compose
from .dmx_controller import DmxController
from .registry import DeviceRegistry
from .timing import Clock, ImmediateClock, RealtimeClock

__all__ = [
    "DmxController",
    "DeviceRegistry",
    "CommandResolver",
    "Animator",
    "Clock",
    "ImmediateClock",
    "RealtimeClock",
    "compose",
    "interpolate",
    "ticks",
]
