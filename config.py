"""Configuration for the DMX controller."""

from dataclasses import dataclass, field
from typing import Any

DEFAULT_FPS = 40.0
DEFAULT_UNIVERSE = 1
DEFAULT_CMD_TEMPLATE = "ola_streaming_client -u {universe}"


@dataclass
class ControllerConfig:
    """Bus and transport settings for one controller."""
    fps: float = DEFAULT_FPS  # Animation frame rate
    universe: int = DEFAULT_UNIVERSE
    cmd_template: str = DEFAULT_CMD_TEMPLATE  # Formatted with {universe}
    test: bool = False  # No sleeping, frames are kept in memory

    def __post_init__(self) -> None:
        if self.fps <= 0:
            raise ValueError(f"fps must be positive, got {self.fps!r}")

    @property
    def cmd(self) -> str:
        return self.cmd_template.format(universe=self.universe)

    def to_dict(self) -> dict[str, Any]:
        return {
            "fps": self.fps,
            "universe": self.universe,
            "cmd_template": self.cmd_template,
            "test": self.test,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ControllerConfig":
        return cls(
            fps=data.get("fps", DEFAULT_FPS),
            universe=data.get("universe", DEFAULT_UNIVERSE),
            cmd_template=data.get("cmd_template", DEFAULT_CMD_TEMPLATE),
            test=data.get("test", False),
        )


@dataclass
class FixtureConfig:
    """Configuration for a single DMX fixture."""
    name: str
    type: str = "generic"  # Registered fixture type
    start_address: int | None = None  # None = next free channel
    # Overrides for the fixture type's declarations
    capabilities: list[str] | None = None
    points: dict[str, dict[str, float]] | None = None
    defaults: dict[str, float] | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "type": self.type}
        if self.start_address is not None:
            data["start_address"] = self.start_address
        if self.capabilities is not None:
            data["capabilities"] = list(self.capabilities)
        if self.points is not None:
            data["points"] = self.points
        if self.defaults is not None:
            data["defaults"] = self.defaults
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FixtureConfig":
        return cls(
            name=data["name"],
            type=data.get("type", "generic"),
            start_address=data.get("start_address"),
            capabilities=data.get("capabilities"),
            points=data.get("points"),
            defaults=data.get("defaults"),
        )


@dataclass
class Config:
    """Main configuration."""
    controller: ControllerConfig = field(default_factory=ControllerConfig)

    # Web server
    web_host: str = "0.0.0.0"
    web_port: int = 8085

    # Fixtures, attached in this order
    fixtures: list[FixtureConfig] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "controller": self.controller.to_dict(),
            "web_host": self.web_host,
            "web_port": self.web_port,
            "fixtures": [f.to_dict() for f in self.fixtures],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Config":
        return cls(
            controller=ControllerConfig.from_dict(data.get("controller", {})),
            web_host=data.get("web_host", "0.0.0.0"),
            web_port=data.get("web_port", 8085),
            fixtures=[FixtureConfig.from_dict(f) for f in data.get("fixtures", [])],
        )


# Default configuration - two scanners and a PAR wash
DEFAULT_CONFIG = Config(
    fixtures=[
        FixtureConfig("Scanner L", type="comscan_led", start_address=1),
        FixtureConfig("Scanner R", type="comscan_led", start_address=5),
        FixtureConfig("Wash", type="rgb_par", start_address=9),
    ]
)
