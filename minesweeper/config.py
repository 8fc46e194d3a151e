"""Board limits and defaults shared by the core and the presentation layers."""

# Largest accepted width or height.
MAX_DIMENSION = 50

DEFAULT_WIDTH = 10
DEFAULT_HEIGHT = 10
DEFAULT_MINES = 10

# Real time between two Session.tick() calls.
TICK_INTERVAL_SECONDS = 1.0
