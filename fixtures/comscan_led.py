"""Comscan LED moving-mirror scanner."""

from .base import DmxDevice
from .registry import register


@register
class ComscanLed(DmxDevice):
    """Four channel mirror scanner with a fixed colour gobo wheel.

    Channels: pan, tilt, strobe/shutter, gobo wheel.
    """

    name = "comscan_led"
    description = "Comscan LED mirror scanner"
    capabilities = ("pan", "tilt", "strobe", "gobo")
    defaults = {"pan": 127, "tilt": 127, "strobe": 6, "gobo": 0}
    points = {
        "center": {"pan": 127, "tilt": 127},
        # Shutter
        "strobe_blackout": {"strobe": 0},
        "strobe_open": {"strobe": 6},
        "strobe_slow": {"strobe": 16},
        "strobe_fast": {"strobe": 131},
        "strobe_sound": {"strobe": 248},
        # Gobo wheel colours
        "white": {"gobo": 0},
        "yellow": {"gobo": 7},
        "red": {"gobo": 15},
        "green": {"gobo": 22},
        "blue": {"gobo": 30},
        "pink": {"gobo": 37},
        "orange": {"gobo": 45},
        "light_blue": {"gobo": 52},
        "magenta": {"gobo": 60},
    }
