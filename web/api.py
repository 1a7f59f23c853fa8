"""REST API endpoints for the DMX controller."""

from contextlib import contextmanager
from typing import Any, Iterator

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from config_manager import CONFIG_ERRORS
from errors import TransportFailure, UnknownCommand

router = APIRouter()


# Pydantic models for request/response
class CommandModel(BaseModel):
    value: float | None = None
    instant: bool = False


class AnimateModel(BaseModel):
    seconds: float
    point: str | None = None
    values: dict[str, float] = Field(default_factory=dict)


class FrameResponse(BaseModel):
    frame: str
    channels: list[int]


@contextmanager
def locked_controller(request: Request) -> Iterator[Any]:
    """Get the controller from app state, holding its lock.

    Maps controller errors to HTTP errors.
    """
    with request.app.state.lock:
        try:
            yield request.app.state.controller
        except UnknownCommand as e:
            raise HTTPException(status_code=404, detail=str(e))
        except TransportFailure as e:
            raise HTTPException(status_code=503, detail=str(e))
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))


# === Status Endpoints ===

@router.get("/status")
def get_status(request: Request) -> dict[str, Any]:
    """Get controller settings and the current frame."""
    with locked_controller(request) as controller:
        return {
            "universe": controller.universe,
            "fps": controller.fps,
            "cmd": controller.cmd,
            "do_not_sleep": controller.do_not_sleep,
            "fixtures": len(controller.fixtures),
            "frame": controller.to_dmx(),
        }


@router.get("/frame")
def get_frame(request: Request) -> FrameResponse:
    """Get the current (buffered) frame."""
    with locked_controller(request) as controller:
        values = controller.current_values()
        return FrameResponse(
            frame=controller.to_dmx(),
            channels=[int(v) for v in values],
        )


@router.post("/frame")
def write_frame(request: Request) -> FrameResponse:
    """Write the buffered frame to the bus."""
    with locked_controller(request) as controller:
        controller.write()
        return FrameResponse(
            frame=controller.to_dmx(),
            channels=[int(v) for v in controller.current_values()],
        )


# === Fixture Endpoints ===

@router.get("/fixtures")
def list_fixtures(request: Request) -> list[dict[str, Any]]:
    """List attached fixtures in bus order."""
    with locked_controller(request) as controller:
        return [
            {"id": i, **fixture.to_dict()}
            for i, fixture in enumerate(controller.fixtures)
        ]


@router.get("/fixtures/{fixture_id}")
def get_fixture(request: Request, fixture_id: int) -> dict[str, Any]:
    """Get one fixture."""
    with locked_controller(request) as controller:
        if fixture_id < 0 or fixture_id >= len(controller.fixtures):
            raise HTTPException(status_code=404, detail="Fixture not found")
        return {"id": fixture_id, **controller.fixtures[fixture_id].to_dict()}


# === Command Endpoints ===

@router.get("/commands")
def list_commands(request: Request) -> dict[str, list[str]]:
    """List the capability and point names available on the bus."""
    with locked_controller(request) as controller:
        return {
            "capabilities": controller.capabilities,
            "points": controller.points,
        }


@router.post("/commands/{name}")
def run_command(request: Request, name: str, data: CommandModel) -> dict[str, Any]:
    """Buffer a named command, writing it right away if instant."""
    with locked_controller(request) as controller:
        controller.command(name, data.value, instant=data.instant)
        return {"status": "ok", "frame": controller.to_dmx()}


@router.post("/animate")
def animate(request: Request, data: AnimateModel) -> dict[str, Any]:
    """Fade to new values over the given number of seconds.

    Blocks until the animation has finished.
    """
    with locked_controller(request) as controller:
        frames = controller.animate_to(data.seconds, data.values, point=data.point)
        return {"status": "ok", "frames": frames, "frame": controller.to_dmx()}


@router.post("/blackout")
def blackout(request: Request) -> dict[str, Any]:
    """Set every channel to zero and write immediately."""
    with locked_controller(request) as controller:
        for fixture in controller.fixtures:
            fixture.buffer_values({capability: 0 for capability in fixture.capabilities})
        controller.write()
        return {"status": "ok", "frame": controller.to_dmx()}


# === Config Endpoints ===

def get_config_manager(request: Request) -> Any:
    """Get the config manager, 404 when the app was built without one."""
    config_manager = request.app.state.config_manager
    if config_manager is None:
        raise HTTPException(status_code=404, detail="No configuration file in use")
    return config_manager


@router.get("/config")
def get_config(request: Request) -> dict[str, Any]:
    """Get the full configuration."""
    config_manager = get_config_manager(request)
    with request.app.state.lock:
        return config_manager.config.to_dict()


@router.put("/config")
def update_config(request: Request, data: dict[str, Any]) -> dict[str, Any]:
    """Replace the configuration. Takes effect on the next start."""
    config_manager = get_config_manager(request)
    with request.app.state.lock:
        try:
            config = config_manager.update_from_dict(data)
        except CONFIG_ERRORS as e:
            raise HTTPException(status_code=400, detail=f"Invalid config: {e}")
        return config.to_dict()


@router.post("/config/save")
def save_config(request: Request) -> dict[str, str]:
    """Save configuration to the JSON file."""
    config_manager = get_config_manager(request)
    with request.app.state.lock:
        config_manager.save()
        return {"status": "saved", "path": str(config_manager.config_path)}


@router.post("/config/reload")
def reload_config(request: Request) -> dict[str, Any]:
    """Reload configuration from the JSON file."""
    config_manager = get_config_manager(request)
    with request.app.state.lock:
        return config_manager.reload().to_dict()
