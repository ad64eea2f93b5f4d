"""Configuration for the radial menu."""

from .settings import MenuSettings, MotionSettings, Settings, SimulatorSettings, get_settings
from .presets import list_presets, load_preset

__all__ = [
    "MenuSettings",
    "MotionSettings",
    "Settings",
    "SimulatorSettings",
    "get_settings",
    "list_presets",
    "load_preset",
]
