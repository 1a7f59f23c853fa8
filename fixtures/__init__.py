"""Fixture models for DMX lighting."""

from .base import DmxDevice
from .comscan_led import ComscanLed
from .registry import create_fixture, get_fixture_type, list_fixture_types, register
from .rgb_par import Color, RGBPar

__all__ = [
    "DmxDevice",
    "ComscanLed",
    "Color",
    "RGBPar",
    "create_fixture",
    "get_fixture_type",
    "list_fixture_types",
    "register",
]
