"""Output to an external bus-driving process over its stdin."""

import logging
import shlex
import subprocess
from typing import IO

from errors import TransportFailure

from .base import FrameOutput

logger = logging.getLogger(__name__)

DEFAULT_CMD = "ola_streaming_client -u {universe}"


class StreamingClientOutput(FrameOutput):
    """Streams frames to a process such as OLA's ``ola_streaming_client``.

    The process is launched on the first write and receives one line of
    comma-separated channel values per frame on its standard input.
    Failed writes are not retried.
    """

    def __init__(self, cmd: str, close_timeout: float = 2.0) -> None:
        super().__init__()
        self.cmd = cmd
        self.close_timeout = close_timeout
        self._process: subprocess.Popen | None = None

    @property
    def is_open(self) -> bool:
        return self._process is not None

    @property
    def stdin(self) -> IO[str] | None:
        return self._process.stdin if self._process else None

    def _open(self) -> None:
        try:
            self._process = subprocess.Popen(
                shlex.split(self.cmd),
                stdin=subprocess.PIPE,
                text=True,
            )
        except (OSError, ValueError) as e:
            logger.error("Could not launch %r: %s", self.cmd, e)
            raise TransportFailure(f"Could not launch {self.cmd!r}: {e}") from e
        logger.info("Started %r (pid %d)", self.cmd, self._process.pid)

    def _send(self, line: str) -> None:
        try:
            self._process.stdin.write(line)
            self._process.stdin.flush()
        except (OSError, ValueError) as e:
            # BrokenPipeError once the process has exited, ValueError if stdin was closed
            logger.error("Write to %r failed: %s", self.cmd, e)
            raise TransportFailure(f"Write to {self.cmd!r} failed: {e}") from e

    def _release(self) -> None:
        process = self._process
        try:
            process.stdin.close()
        except OSError as e:
            logger.warning("Error closing stdin of %r: %s", self.cmd, e)
        try:
            process.wait(timeout=self.close_timeout)
        except subprocess.TimeoutExpired:
            logger.warning("%r did not exit, terminating", self.cmd)
            process.terminate()
            process.wait()
        logger.info("Stopped %r (exit code %s)", self.cmd, process.returncode)
