"""
Menu presets and preset loading utilities.

A preset is a YAML file overriding any of the menu, motion and simulator
settings:

    name: wide
    description: Half-circle fan
    menu:
      radius: 140
      arc_span: 3.14159
    motion:
      expand_ease: back.out(1.7)
"""

from pathlib import Path
from typing import Any
import logging

import yaml

from fabmenu.config.settings import MenuSettings, MotionSettings, Settings, SimulatorSettings

logger = logging.getLogger(__name__)

PRESETS_PATH = Path(__file__).parent / "presets"

_SECTIONS = {
    "menu": MenuSettings,
    "motion": MotionSettings,
    "simulator": SimulatorSettings,
}


def settings_from_yaml(data: dict[str, Any], base: Settings | None = None) -> Settings:
    """Apply preset data on top of ``base`` (or fresh settings)."""
    base = base or Settings()
    updates: dict[str, Any] = {}

    for section, model in _SECTIONS.items():
        if section in data:
            current = getattr(base, section).model_dump()
            current.update(data[section] or {})
            updates[section] = model(**current)

    if "name" in data:
        updates["preset"] = data["name"]

    return base.model_copy(update=updates)


def load_preset(preset_name: str, presets_path: Path | None = None, base: Settings | None = None) -> Settings:
    """
    Load settings from a preset YAML file.

    Args:
        preset_name: Name of the preset (without .yaml extension) or a path
        presets_path: Directory holding presets
        base: Settings to apply the preset on

    Returns:
        Settings with the preset applied; ``base`` unchanged if the preset is missing
    """
    if presets_path is None:
        presets_path = PRESETS_PATH

    preset_file = Path(preset_name)
    if preset_file.suffix != ".yaml":
        preset_file = presets_path / f"{preset_name}.yaml"

    if not preset_file.exists():
        logger.warning(f"Preset not found: {preset_file}")
        return base or Settings()

    with open(preset_file, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    logger.info(f"Loaded preset: {preset_file.stem}")
    data.setdefault("name", preset_file.stem)
    return settings_from_yaml(data, base)


def list_presets(presets_path: Path | None = None) -> list[str]:
    """List available presets."""
    if presets_path is None:
        presets_path = PRESETS_PATH

    return sorted(f.stem for f in presets_path.glob("*.yaml"))
