"""Resolution of named commands to fixture mutations."""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from errors import UnknownCommand

if TYPE_CHECKING:
    from fixtures.base import DmxDevice

# Suffix that turns a buffering command into an immediate one ("center!")
INSTANT_SUFFIX = "!"


class CommandKind(Enum):
    POINT = "point"
    CAPABILITY = "capability"


@dataclass
class Command:
    """A resolvable name and the fixtures that declare it."""
    name: str
    kind: CommandKind
    fixtures: list["DmxDevice"] = field(default_factory=list)

    def apply(self, value: float | None = None) -> None:
        """Buffer this command on every fixture that declares it."""
        if self.kind is CommandKind.CAPABILITY and value is None:
            raise ValueError(f"Capability {self.name!r} needs a value")
        for fixture in self.fixtures:
            if self.kind is CommandKind.POINT:
                fixture.buffer_values({}, self.name)
            else:
                fixture.buffer_values({self.name: value})


def split_instant(name: str) -> tuple[str, bool]:
    """Strip the instant suffix, returning (name, is_instant)."""
    if name.endswith(INSTANT_SUFFIX):
        return name[:-len(INSTANT_SUFFIX)], True
    return name, False


class CommandResolver:
    """Lookup table from command names to the fixtures supporting them.

    The table is extended as fixtures are attached. When a name is both a
    point and a capability, the point wins.
    """

    def __init__(self) -> None:
        self._points: dict[str, Command] = {}
        self._capabilities: dict[str, Command] = {}

    def add(self, fixture: "DmxDevice") -> None:
        """Register the names declared by a newly attached fixture."""
        for point in fixture.points:
            command = self._points.setdefault(point, Command(point, CommandKind.POINT))
            command.fixtures.append(fixture)
        for capability in fixture.capabilities:
            command = self._capabilities.setdefault(
                capability, Command(capability, CommandKind.CAPABILITY)
            )
            command.fixtures.append(fixture)

    @property
    def capabilities(self) -> list[str]:
        return list(self._capabilities)

    @property
    def points(self) -> list[str]:
        return list(self._points)

    def __contains__(self, name: str) -> bool:
        name, _ = split_instant(name)
        return name in self._points or name in self._capabilities

    def lookup(self, name: str) -> Command:
        """Find the command for a name (without instant suffix).

        Raises:
            UnknownCommand: if no attached fixture declares the name
        """
        command = self._points.get(name) or self._capabilities.get(name)
        if command is None:
            raise UnknownCommand(name)
        return command

    def lookup_capability(self, name: str) -> Command:
        command = self._capabilities.get(name)
        if command is None:
            raise UnknownCommand(name)
        return command

    def lookup_point(self, name: str) -> Command:
        command = self._points.get(name)
        if command is None:
            raise UnknownCommand(name)
        return command
