"""Desktop simulator for the radial menu."""
