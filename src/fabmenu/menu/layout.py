"""Arc layout for the menu children.

Children are spread evenly over an arc, index 0 at the start angle and the
last child at ``start_angle - arc_span``. Angles follow the trigonometric
convention (counter-clockwise, up is pi/2) while offsets are in screen
coordinates, so the vertical component is negated.
"""

from dataclasses import dataclass
import math

from fabmenu.menu.errors import ConfigurationError


@dataclass(frozen=True)
class ArcConfig:
    """Arc geometry.

    Attributes:
        radius: Distance from the FAB center in pixels
        arc_span: Angle covered by the children in radians
        start_angle: Angle of the first child in radians
    """

    radius: float = 100.0
    arc_span: float = math.pi / 1.5
    start_angle: float = math.pi / 2 + (math.pi / 1.5) / 2

    def __post_init__(self) -> None:
        if self.radius < 0:
            raise ConfigurationError(f"Arc radius must be >= 0, got {self.radius}")
        for name in ("radius", "arc_span", "start_angle"):
            if not math.isfinite(getattr(self, name)):
                raise ConfigurationError(f"Arc {name} must be finite")

    @classmethod
    def centered(cls, radius: float = 100.0, arc_span: float = math.pi / 1.5) -> "ArcConfig":
        """Arc symmetric around straight up."""
        return cls(radius=radius, arc_span=arc_span, start_angle=math.pi / 2 + arc_span / 2)


def angle_for(index: int, count: int, cfg: ArcConfig) -> float:
    """Angle in radians of child ``index`` out of ``count``.

    Raises:
        ConfigurationError: If count is less than 1
    """
    if count < 1:
        raise ConfigurationError(f"Child count must be >= 1, got {count}")
    if count == 1:
        return cfg.start_angle
    return cfg.start_angle - index * (cfg.arc_span / (count - 1))


def position(index: int, count: int, cfg: ArcConfig) -> tuple[float, float]:
    """Offset (dx, dy) of child ``index`` from the FAB center."""
    angle = angle_for(index, count, cfg)
    return cfg.radius * math.cos(angle), -cfg.radius * math.sin(angle)


def positions(count: int, cfg: ArcConfig) -> list[tuple[float, float]]:
    """Offsets of all ``count`` children in index order."""
    return [position(i, count, cfg) for i in range(count)]
