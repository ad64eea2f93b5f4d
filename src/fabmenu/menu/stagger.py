"""Per-child start delays."""


def delay_for(index: int, step: float) -> float:
    """Delay in seconds before child ``index`` starts moving."""
    return index * step


def stagger_index(index: int, count: int, reverse: bool = False) -> int:
    """Position of a child in the cascade.

    Collapse uses the same order as expand unless ``reverse`` is set, in
    which case the last child moves first.
    """
    return count - 1 - index if reverse else index
