"""Base frame output interface."""

from abc import ABC, abstractmethod
from typing import Iterable

from errors import TransportFailure


def serialize(values: Iterable[float]) -> str:
    """Render a channel vector in the wire format (channel 1 first).

    Values are truncated toward zero. They are not clamped to 0-255.
    """
    return ",".join(str(int(value)) for value in values)


class FrameOutput(ABC):
    """Abstract base class for frame outputs.

    The output channel is opened lazily by the first write and kept for the
    lifetime of the output. Closing is idempotent; an output cannot be
    reopened once closed.
    """

    def __init__(self) -> None:
        self._closed = False
        self.frames_written = 0

    @property
    @abstractmethod
    def is_open(self) -> bool:
        """Whether the output channel is currently open."""
        pass

    @abstractmethod
    def _open(self) -> None:
        """Establish the output channel."""
        pass

    @abstractmethod
    def _send(self, line: str) -> None:
        """Write one terminated line and flush it."""
        pass

    @abstractmethod
    def _release(self) -> None:
        """Release the output channel."""
        pass

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, values: Iterable[float]) -> None:
        """Serialize a frame and write it, opening the output if needed.

        Raises:
            TransportFailure: if the output is closed or the write fails
        """
        if self._closed:
            raise TransportFailure("Output is closed")
        if not self.is_open:
            self._open()
        self._send(serialize(values) + "\n")
        self.frames_written += 1

    def close(self) -> None:
        """Close the output channel if it is open."""
        if self._closed:
            return
        self._closed = True
        if self.is_open:
            self._release()
