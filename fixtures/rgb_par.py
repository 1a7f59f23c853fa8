"""RGB PAR fixture model."""

from dataclasses import dataclass

from .base import DmxDevice
from .registry import register


@dataclass
class Color:
    """RGB color."""
    r: int = 0
    g: int = 0
    b: int = 0

    def __post_init__(self) -> None:
        self.r = max(0, min(255, self.r))
        self.g = max(0, min(255, self.g))
        self.b = max(0, min(255, self.b))

    @classmethod
    def from_hsv(cls, h: float, s: float, v: float) -> "Color":
        """Create color from HSV values (h: 0-360, s: 0-1, v: 0-1)."""
        h = h % 360
        c = v * s
        x = c * (1 - abs((h / 60) % 2 - 1))
        m = v - c

        if h < 60:
            r, g, b = c, x, 0
        elif h < 120:
            r, g, b = x, c, 0
        elif h < 180:
            r, g, b = 0, c, x
        elif h < 240:
            r, g, b = 0, x, c
        elif h < 300:
            r, g, b = x, 0, c
        else:
            r, g, b = c, 0, x

        return cls(
            r=int((r + m) * 255),
            g=int((g + m) * 255),
            b=int((b + m) * 255),
        )

    def to_point(self) -> dict[str, float]:
        """Convert to a point mapping for an RGB fixture."""
        return {"red": self.r, "green": self.g, "blue": self.b}


def _color_points() -> dict[str, dict[str, float]]:
    colors = {
        "black": Color(),
        "white": Color(255, 255, 255),
        "red": Color.from_hsv(0, 1.0, 1.0),
        "orange": Color.from_hsv(30, 1.0, 1.0),
        "yellow": Color.from_hsv(60, 1.0, 1.0),
        "green": Color.from_hsv(120, 1.0, 1.0),
        "cyan": Color.from_hsv(180, 1.0, 1.0),
        "blue": Color.from_hsv(240, 1.0, 1.0),
        "magenta": Color.from_hsv(300, 1.0, 1.0),
        "warm_white": Color.from_hsv(30, 0.3, 1.0),
    }
    points = {name: color.to_point() for name, color in colors.items()}
    points["full"] = {"dimmer": 255}
    points["off"] = {"dimmer": 0}
    return points


@register
class RGBPar(DmxDevice):
    """Four channel RGB PAR (red, green, blue, master dimmer)."""

    name = "rgb_par"
    description = "RGB PAR can with master dimmer"
    capabilities = ("red", "green", "blue", "dimmer")
    defaults = {"dimmer": 255}
    points = _color_points()

    def set_color(self, color: Color) -> None:
        """Buffer a color."""
        self.buffer(**color.to_point())

    @property
    def color(self) -> Color:
        return Color(
            r=int(self.value("red")),
            g=int(self.value("green")),
            b=int(self.value("blue")),
        )
