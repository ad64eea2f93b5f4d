"""Menu child elements."""

from dataclasses import dataclass
import math


@dataclass
class MenuChild:
    """One movable child of the menu.

    ``x``, ``y``, ``rotation`` and ``opacity`` are written by the tween
    engine; ``interactable`` decides whether the child can be hit.
    Offsets are relative to the FAB center, rotation is in degrees.
    """

    label: str = ""
    x: float = 0.0
    y: float = 0.0
    rotation: float = 0.0
    opacity: float = 0.0
    interactable: bool = False
    hit_radius: float = 22.0

    def contains(self, px: float, py: float) -> bool:
        """Check if a point (relative to the FAB center) lies on this child."""
        return math.hypot(px - self.x, py - self.y) <= self.hit_radius

    def hit_test(self, px: float, py: float) -> bool:
        """Check if the child is interactable and under the point."""
        return self.interactable and self.contains(px, py)


def make_children(count: int, labels: list[str] | None = None) -> tuple[MenuChild, ...]:
    """Create ``count`` collapsed children, labelled from ``labels`` when given."""
    labels = labels or []
    return tuple(
        MenuChild(label=labels[i] if i < len(labels) else str(i + 1))
        for i in range(count)
    )
