"""In-process output for tests and dry runs."""

from collections import deque

from errors import TransportFailure

from .base import FrameOutput


class LoopbackOutput(FrameOutput):
    """Keeps written frames in memory instead of sending them anywhere.

    Read frames back, oldest first, with ``output.readline()``. Nothing
    drains the buffer by itself, so it grows without bound and writes
    never block.
    """

    def __init__(self) -> None:
        super().__init__()
        self.lines: deque[str] | None = None

    @property
    def is_open(self) -> bool:
        return self.lines is not None

    def _open(self) -> None:
        self.lines = deque()

    def _send(self, line: str) -> None:
        self.lines.append(line)

    def _release(self) -> None:
        # Unread frames stay readable after close
        pass

    def readline(self) -> str:
        """Pop the oldest unread frame line, including its newline.

        Returns an empty string when every written frame has been read.

        Raises:
            TransportFailure: if nothing has been written yet
        """
        if self.lines is None:
            raise TransportFailure("Nothing has been written yet")
        if not self.lines:
            return ""
        return self.lines.popleft()
