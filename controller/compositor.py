"""Composition of fixture values into one channel vector."""

from typing import TYPE_CHECKING, Iterable, Sequence

if TYPE_CHECKING:
    from fixtures.base import DmxDevice


def frame_length(fixtures: Iterable["DmxDevice"]) -> int:
    """Highest channel reached by any fixture (0 when there are none)."""
    return max((fixture.end_address or 0 for fixture in fixtures), default=0)


def compose(fixtures: Sequence["DmxDevice"]) -> list[float]:
    """Build the channel vector for the bus.

    Fixtures are written in registry order, so where two ranges overlap the
    later fixture wins. Channels no fixture covers stay at zero.
    Index 0 of the result is channel 1.
    """
    values: list[float] = [0] * frame_length(fixtures)
    for fixture in fixtures:
        start = fixture.start_address - 1
        current = fixture.current_values()
        values[start:start + len(current)] = current
    return values
