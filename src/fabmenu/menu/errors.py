"""Errors raised by the radial menu."""


class FabMenuError(Exception):
    """Base class for menu errors."""


class ConfigurationError(FabMenuError, ValueError):
    """Invalid menu geometry or motion configuration (e.g. fewer than one child)."""


class AnimationOverrideFailure(FabMenuError, RuntimeError):
    """A superseded animation is still live on a child after a new request."""

    def __init__(self, index: int, stale: object) -> None:
        super().__init__(f"Stale animation still active on child {index}: {stale!r}")
        self.index = index
        self.stale = stale
