"""Clocks used to pace animation frames."""

import time
from abc import ABC, abstractmethod


class Clock(ABC):
    """Source of the wait between animation ticks."""

    #: Whether waits actually suspend the caller
    realtime: bool = True

    @abstractmethod
    def wait(self, seconds: float) -> None:
        """Suspend for the given number of seconds."""
        pass

    @abstractmethod
    def now(self) -> float:
        """Current time in seconds."""
        pass


class RealtimeClock(Clock):
    """Wall-clock pacing with time.sleep."""

    realtime = True

    def wait(self, seconds: float) -> None:
        if seconds > 0:
            time.sleep(seconds)

    def now(self) -> float:
        return time.monotonic()


class ImmediateClock(Clock):
    """Logical clock for tests: time advances, nothing sleeps."""

    realtime = False

    def __init__(self, start: float = 0.0) -> None:
        self._now = start
        self.waits: list[float] = []

    def wait(self, seconds: float) -> None:
        self.waits.append(seconds)
        self._now += max(0.0, seconds)

    def now(self) -> float:
        return self._now
