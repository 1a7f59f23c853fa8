"""Pytest configuration and fixtures for the DMX controller tests."""

import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import pytest

from controller import DmxController
from fixtures.base import DmxDevice

PAN_TILT_DIMMER = ["pan", "tilt", "dimmer"]
CENTER = {"center": {"pan": 127, "tilt": 127}}


def make_device(start_address: int | None = None, **kwargs) -> DmxDevice:
    """A pan/tilt/dimmer device with a center point."""
    kwargs.setdefault("capabilities", PAN_TILT_DIMMER)
    kwargs.setdefault("points", CENTER)
    return DmxDevice(start_address=start_address, **kwargs)


@pytest.fixture
def controller():
    """Test-mode controller with two pan/tilt/dimmer devices at 1 and 4."""
    c = DmxController(test=True)
    c.attach(make_device(1))
    c.attach(make_device(4))
    yield c
    c.close()


@pytest.fixture
def slow_controller():
    """Test-mode controller at 1 fps with two devices at 1 and 4."""
    c = DmxController(fps=1, test=True)
    c.attach(make_device(1))
    c.attach(make_device(4))
    yield c
    c.close()


@pytest.fixture
def sample_config_dict() -> dict:
    """Sample configuration dictionary for testing."""
    return {
        "controller": {
            "fps": 30,
            "universe": 2,
            "cmd_template": "ola_streaming_client -u {universe}",
            "test": True,
        },
        "web_host": "127.0.0.1",
        "web_port": 9000,
        "fixtures": [
            {"name": "Left", "type": "comscan_led", "start_address": 1},
            {"name": "Right", "type": "comscan_led"},
            {
                "name": "Custom",
                "type": "generic",
                "start_address": 20,
                "capabilities": ["pan", "tilt", "dimmer"],
                "points": {"center": {"pan": 127, "tilt": 127}},
            },
        ],
    }
