"""Web interface for the DMX controller."""

from .server import create_app

__all__ = ["create_app"]
