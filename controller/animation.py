"""Fixed-rate interpolated animation between two frames."""

import logging
from typing import Callable, Sequence

from errors import FrameLengthMismatch
from .timing import Clock

logger = logging.getLogger(__name__)


def ticks(seconds: float, fps: float) -> int:
    """Number of frames for an animation, rounded down but at least one."""
    return max(1, int(float(seconds) * float(fps)))


def interpolate(first: Sequence[float], last: Sequence[float], total: int, i: int) -> list[float]:
    """Linear step ``i`` of ``total`` from ``first`` to ``last``.

    Step ``total`` returns ``last`` and step 0 returns ``first`` unchanged,
    so the end points are exact regardless of float error.
    """
    if i == total:
        return list(last)
    if i == 0:
        return list(first)
    return [(b - a) * i / total + a for a, b in zip(first, last)]


class Animator:
    """Writes the frames of an animation at a fixed rate.

    Each frame is followed by a wait of one frame period on the clock, so an
    animation of N ticks takes N / fps seconds.
    """

    def __init__(self, fps: float, clock: Clock, write: Callable[[list[float]], None]) -> None:
        self.fps = fps
        self.clock = clock
        self._write = write

    @property
    def wait_time(self) -> float:
        return 1.0 / float(self.fps)

    def run(self, before: Sequence[float], after: Sequence[float], seconds: float) -> int:
        """Play from ``before`` to ``after`` over ``seconds``.

        Raises:
            FrameLengthMismatch: if the frames differ in length; nothing is
                written in that case
        Returns:
            the number of frames written
        """
        if len(before) != len(after):
            raise FrameLengthMismatch(len(before), len(after))

        count = ticks(seconds, self.fps)
        logger.debug("Animating %d channels over %d ticks", len(after), count)
        for i in range(1, count + 1):
            self._write(interpolate(before, after, count, i))
            self.clock.wait(self.wait_time)
        return count
