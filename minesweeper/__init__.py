"""
Minesweeper

A headless Minesweeper core with pluggable front ends:
- Grid model: lazy mine placement with a first-click safe zone, adjacency
  counts and work-list flood fill
- Game controller: playing/won/lost lifecycle, flag counter, externally
  driven timer and change notifications
- Front ends: terminal CLI and a streamlit browser app
- Analysis: mine placement and first-click opening statistics
"""

from .engine import GameListener, GameState, GameTimer, Session, TickDriver, new_game
from .errors import InvalidDimensions
from .grid import Cell, Grid
from .console import format_board, play_cli
from .analysis import (
    adjacency_histogram,
    mine_frequency_map,
    opening_sizes,
    run_placement_analysis,
    summarize_final_state,
)

__version__ = "1.0.0"

__all__ = [
    # Core classes
    "Cell",
    "Grid",
    "Session",
    "GameState",
    "GameTimer",
    "GameListener",
    "TickDriver",
    "new_game",
    "InvalidDimensions",
    # CLI
    "format_board",
    "play_cli",
    # Analysis functions
    "adjacency_histogram",
    "mine_frequency_map",
    "opening_sizes",
    "run_placement_analysis",
    "summarize_final_state",
]
