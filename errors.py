"""Exceptions raised by the DMX controller."""


class ControllerError(Exception):
    """Base class for controller errors."""


class UnknownCommand(ControllerError, LookupError):
    """A command name matches no capability or point on the bus."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown command: {name!r}")
        self.name = name


class TransportFailure(ControllerError, OSError):
    """Writing a frame to the output failed."""


class FrameLengthMismatch(ControllerError, ValueError):
    """The channel count changed between the start and end of an animation."""

    def __init__(self, before: int, after: int) -> None:
        super().__init__(
            f"Animation changed the frame length from {before} to {after} channels"
        )
        self.before = before
        self.after = after
