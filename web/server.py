"""FastAPI server for the DMX controller."""

import threading
from typing import TYPE_CHECKING

from fastapi import FastAPI

if TYPE_CHECKING:
    from config_manager import ConfigManager
    from controller import DmxController


def create_app(
    controller: "DmxController",
    config_manager: "ConfigManager | None" = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    The configuration endpoints are only served when a ConfigManager is given.
    """
    app = FastAPI(
        title="DMX Controller",
        description="Named commands and animation for a DMX bus",
        version="1.0.0",
    )

    # Store controller reference for API routes. Routes run in worker
    # threads, the controller is single-threaded: one operation at a time.
    app.state.controller = controller
    app.state.config_manager = config_manager
    app.state.lock = threading.Lock()

    # Import and include API routes
    from .api import router
    app.include_router(router, prefix="/api")

    return app
