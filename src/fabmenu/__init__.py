"""fabmenu: expandable radial action menu driven by a tween engine."""

__version__ = "0.1.0"
