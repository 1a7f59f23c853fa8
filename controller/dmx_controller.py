"""The controller that drives every fixture on one DMX bus."""

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Callable, Iterable, Iterator, Mapping, Sequence

from config import DEFAULT_CMD_TEMPLATE, DEFAULT_FPS, DEFAULT_UNIVERSE, ControllerConfig
from output import FrameOutput, LoopbackOutput, StreamingClientOutput, serialize

from .animation import Animator, interpolate, ticks
from .commands import CommandResolver, split_instant
from .compositor import compose
from .registry import DeviceRegistry
from .timing import Clock, ImmediateClock, RealtimeClock

if TYPE_CHECKING:
    from config import FixtureConfig
    from fixtures.base import DmxDevice

logger = logging.getLogger(__name__)

Mutation = Callable[[Sequence["DmxDevice"]], None]


class DmxController:
    """Sends control messages across a DMX bus.

    Every frame carries a value for every channel, so the controller gathers
    the buffered values of all attached fixtures into one channel vector
    before anything is written. Writes go to a single output, opened on
    first use and released by close().

    In test mode the controller never sleeps between animation frames and
    keeps written frames in memory (``controller.output.readline()``).
    """

    def __init__(
        self,
        fps: float = DEFAULT_FPS,
        universe: int = DEFAULT_UNIVERSE,
        cmd_template: str = DEFAULT_CMD_TEMPLATE,
        devices: Iterable["DmxDevice"] = (),
        test: bool = False,
        clock: Clock | None = None,
        output: FrameOutput | None = None,
    ) -> None:
        self._config = ControllerConfig(
            fps=fps, universe=universe, cmd_template=cmd_template, test=test
        )
        self.clock = clock or (ImmediateClock() if test else RealtimeClock())
        if output is None:
            output = LoopbackOutput() if test else StreamingClientOutput(self.cmd)
        self.output = output

        self._registry = DeviceRegistry()
        self._resolver = CommandResolver()
        for device in devices:
            self.attach(device)

    @classmethod
    def from_config(
        cls,
        config: ControllerConfig,
        fixtures: Iterable["FixtureConfig"] = (),
        **kwargs,
    ) -> "DmxController":
        """Build a controller and attach the configured fixtures in order."""
        from fixtures.registry import create_fixture

        controller = cls(
            fps=config.fps,
            universe=config.universe,
            cmd_template=config.cmd_template,
            test=config.test,
            **kwargs,
        )
        for fixture_config in fixtures:
            controller.attach(create_fixture(fixture_config))
        return controller

    # === Configuration ===

    @property
    def fps(self) -> float:
        return self._config.fps

    @property
    def universe(self) -> int:
        return self._config.universe

    @property
    def cmd(self) -> str:
        """Command line of the bus-driving process for this universe."""
        return self._config.cmd

    @property
    def test(self) -> bool:
        return self._config.test

    @property
    def do_not_sleep(self) -> bool:
        """True when animation frames are written back-to-back."""
        return not self.clock.realtime

    # === Devices ===

    def attach(self, device: "DmxDevice") -> "DmxDevice":
        """Add a fixture to the bus, assigning the next free address if unset."""
        self._registry.attach(device, self)
        self._resolver.add(device)
        return device

    def extend(self, devices: Iterable["DmxDevice"]) -> None:
        for device in devices:
            self.attach(device)

    @property
    def fixtures(self) -> tuple["DmxDevice", ...]:
        return self._registry.fixtures

    @property
    def capabilities(self) -> list[str]:
        """Every capability name declared on the bus, in first-seen order."""
        return self._resolver.capabilities

    @property
    def points(self) -> list[str]:
        """Every point name declared on the bus, in first-seen order."""
        return self._resolver.points

    def __contains__(self, name: str) -> bool:
        return name in self._resolver

    # === Values ===

    def current_values(self) -> list[float]:
        return compose(self.fixtures)

    def to_dmx(self) -> str:
        return serialize(self.current_values())

    def buffer(self, point: str | None = None, **values: float) -> None:
        """Buffer a point and/or capability values on the fixtures declaring them.

        Capabilities named like a parameter (``point``) need buffer_values().

        Raises:
            UnknownCommand: if a name is declared by no attached fixture
        """
        self.buffer_values(values, point)

    def buffer_values(self, values: Mapping[str, float], point: str | None = None) -> None:
        """Buffer a mapping of capability values, after an optional point.

        Every name is resolved before anything is buffered.

        Raises:
            UnknownCommand: if a name is declared by no attached fixture
        """
        commands = []
        if point is not None:
            commands.append((self._resolver.lookup_point(point), None))
        for capability, value in values.items():
            commands.append((self._resolver.lookup_capability(capability), value))
        for command, value in commands:
            command.apply(value)

    def instant(self, point: str | None = None, **values: float) -> None:
        """Buffer values and write the resulting frame immediately."""
        self.buffer_values(values, point)
        self.write()

    def command(self, name: str, value: float | None = None, instant: bool = False) -> None:
        """Run a named command: a point name, or a capability with a value.

        A trailing ``!`` on the name (``"center!"``) is the same as
        ``instant=True``: the frame is written right away.

        Raises:
            UnknownCommand: if no attached fixture declares the name
        """
        name, bang = split_instant(name)
        self._resolver.lookup(name).apply(value)
        if instant or bang:
            self.write()

    def write(self, values: Sequence[float] | None = None) -> None:
        """Write a frame (the current values by default) to the output.

        Raises:
            TransportFailure: if the output cannot be written
        """
        if values is None:
            values = self.current_values()
        self.output.write(values)

    # === Animation ===

    def ticks(self, seconds: float) -> int:
        return ticks(seconds, self.fps)

    @property
    def wait_time(self) -> float:
        return 1.0 / float(self.fps)

    interpolate = staticmethod(interpolate)

    def animate(
        self,
        seconds: float,
        mutation: Mutation | None = None,
        /,
        point: str | None = None,
        **values: float,
    ) -> int:
        """Fade from the current frame to the mutated one over ``seconds``.

        Values (and the point, if any) are buffered first, then ``mutation``
        is called with the fixtures for arbitrary changes. Runs to completion;
        a failed write aborts the remaining frames.

        Raises:
            FrameLengthMismatch: if the mutation changed the channel count
            UnknownCommand: if a buffered name is not declared on the bus
            TransportFailure: if a frame cannot be written
        Returns:
            the number of frames written
        """
        return self.animate_to(seconds, values, point=point, mutation=mutation)

    def animate_to(
        self,
        seconds: float,
        values: Mapping[str, float],
        point: str | None = None,
        mutation: Mutation | None = None,
    ) -> int:
        """Like animate(), with capability values given as a mapping."""
        before = self.current_values()
        if point is not None or values:
            self.buffer_values(values, point)
        if mutation is not None:
            mutation(self.fixtures)
        after = self.current_values()
        return self._animator().run(before, after, seconds)

    @contextmanager
    def begin_animation(self, seconds: float) -> Iterator[tuple["DmxDevice", ...]]:
        """Animate the changes made inside a ``with`` block.

            with controller.begin_animation(seconds=5) as devices:
                devices[0].buffer(pan=25)
                devices[1].buffer(pan=50)

        Nothing is written if the block raises.
        """
        before = self.current_values()
        yield self.fixtures
        self._animator().run(before, self.current_values(), seconds)

    def _animator(self) -> Animator:
        return Animator(self.fps, self.clock, self.write)

    # === Lifecycle ===

    def close(self) -> None:
        """Release the output. Safe to call more than once."""
        self.output.close()

    def __enter__(self) -> "DmxController":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"DmxController(universe={self.universe}, fps={self.fps}, "
            f"fixtures={len(self._registry)})"
        )
