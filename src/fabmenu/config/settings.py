"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
"""

from functools import lru_cache
from typing import Literal
import math

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from fabmenu.menu.layout import ArcConfig


class MenuSettings(BaseSettings):
    """Menu geometry and labels."""

    model_config = SettingsConfigDict(env_prefix="FABMENU_MENU_", extra="ignore")

    child_count: int = Field(default=5, ge=0)
    child_labels: list[str] = Field(default_factory=list)

    # Arc geometry
    radius: float = Field(default=100.0, ge=0.0)  # pixels
    arc_span: float = math.pi / 1.5  # radians
    start_angle: float | None = None  # radians, None centers the arc on "up"

    # Toggle control glyphs
    expanded_label: str = "×"
    collapsed_label: str = "＋"

    def arc_config(self) -> ArcConfig:
        """Build the arc geometry."""
        if self.start_angle is None:
            return ArcConfig.centered(radius=self.radius, arc_span=self.arc_span)
        return ArcConfig(radius=self.radius, arc_span=self.arc_span, start_angle=self.start_angle)


class MotionSettings(BaseSettings):
    """Timing and easing of the expand and collapse cascades."""

    model_config = SettingsConfigDict(env_prefix="FABMENU_MOTION_", extra="ignore")

    # Seconds
    expand_duration: float = Field(default=0.5, ge=0.0)
    collapse_duration: float = Field(default=0.3, ge=0.0)
    expand_step: float = Field(default=0.1, ge=0.0)
    collapse_step: float = Field(default=0.1, ge=0.0)

    # Fast start / slow end going out, slow start / fast end coming back
    expand_ease: str = "expo.out"
    collapse_ease: str = "expo.in"

    # Degrees spun while expanding
    expand_rotation: float = 360.0

    # Collapse cascades in the same order as expand unless set
    collapse_reversed: bool = False


class SimulatorSettings(BaseSettings):
    """Simulator window settings."""

    model_config = SettingsConfigDict(env_prefix="FABMENU_SIMULATOR_", extra="ignore")

    width: int = 640
    height: int = 480
    fps: int = 60
    fullscreen: bool = False

    fab_radius: int = 32
    child_radius: int = 22

    # Colors
    bg_color: tuple[int, int, int] = (20, 20, 30)
    fab_color: tuple[int, int, int] = (255, 71, 0)
    child_color: tuple[int, int, int] = (100, 150, 255)
    text_color: tuple[int, int, int] = (200, 200, 220)
    guide_color: tuple[int, int, int] = (50, 50, 70)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="FABMENU_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment
    env: Literal["simulator", "headless"] = "simulator"
    debug: bool = False
    preset: str | None = None

    # Nested settings
    menu: MenuSettings = Field(default_factory=MenuSettings)
    motion: MotionSettings = Field(default_factory=MotionSettings)
    simulator: SimulatorSettings = Field(default_factory=SimulatorSettings)

    @property
    def is_simulator(self) -> bool:
        """Check if running the pygame simulator."""
        return self.env == "simulator"

    def arc_config(self) -> ArcConfig:
        """Arc geometry of the configured menu."""
        return self.menu.arc_config()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
