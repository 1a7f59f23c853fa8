"""Frame outputs for the DMX bus."""

from .base import FrameOutput, serialize
from .loopback import LoopbackOutput
from .streaming_client import DEFAULT_CMD, StreamingClientOutput

__all__ = [
    "FrameOutput",
    "serialize",
    "LoopbackOutput",
    "StreamingClientOutput",
    "DEFAULT_CMD",
]
