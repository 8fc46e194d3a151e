"""Statistics and plots for the mine generator and first-click openings."""

import random
from typing import Dict, Optional, Tuple

import matplotlib.pyplot as plt
import numpy as np

from .engine import GameState, Session
from .grid import Grid
from .utils import Coord, safe_zone


def _default_first_click(width: int, height: int) -> Coord:
    return (width // 2, height // 2)


def mine_frequency_map(
    width: int,
    height: int,
    mine_count: int,
    runs: int,
    *,
    first_click: Optional[Coord] = None,
    seed: Optional[int] = None,
) -> np.ndarray:
    """
    Plant mines on `runs` fresh boards and measure how often each cell gets one.

    Args:
        width: Board width.
        height: Board height.
        mine_count: Mines per board.
        runs: Number of boards to generate, must be > 0.
        first_click: Safe-zone center; defaults to the board center.
        seed: Seed for the shared random source.

    Returns:
        Array of shape (height, width) with the fraction of boards that had a
        mine in each cell.
    """
    if runs <= 0:
        raise ValueError("runs must be positive.")
    fx, fy = first_click or _default_first_click(width, height)
    rng = random.Random(seed)

    counts = np.zeros((height, width), dtype=np.int64)
    for _ in range(runs):
        grid = Grid(width, height, mine_count, rng=rng)
        grid.plant_mines(fx, fy)
        for x, y in grid.mine_coords():
            counts[y, x] += 1

    return counts / runs


def opening_sizes(
    width: int,
    height: int,
    mine_count: int,
    runs: int,
    *,
    first_click: Optional[Coord] = None,
    seed: Optional[int] = None,
) -> np.ndarray:
    """
    Count the cells uncovered by the first click of `runs` independent games.

    Returns:
        Integer array of length `runs`.
    """
    if runs <= 0:
        raise ValueError("runs must be positive.")
    fx, fy = first_click or _default_first_click(width, height)
    seeds = np.random.default_rng(seed).integers(0, 2**31 - 1, size=runs)

    sizes = np.empty(runs, dtype=np.int64)
    for i, game_seed in enumerate(seeds):
        session = Session(width, height, mine_count, seed=int(game_seed))
        session.reveal_cell(fx, fy)
        sizes[i] = session.cells_revealed
    return sizes


def adjacency_histogram(grid: Grid) -> np.ndarray:
    """Count non-mine cells by adjacent mine count (index 0..8)."""
    values = [c.adjacent_mines for c in grid.cells() if not c.is_mine]
    return np.bincount(np.asarray(values, dtype=np.int64), minlength=9)


def run_placement_analysis(
    width: int,
    height: int,
    mine_count: int,
    runs: int,
    *,
    first_click: Optional[Coord] = None,
    seed: Optional[int] = None,
    show_plots: bool = True,
) -> Dict[str, float]:
    """
    Summarize mine placement and first-click openings for one board size.

    Returns:
        Dict with keys:
        - avg_opening_size: mean cells revealed by the first click
        - first_click_win_rate: fraction of games won by the first click alone
        - safe_zone_mine_rate: highest mine frequency inside the safe zone
        - mean_mine_rate, min_mine_rate, max_mine_rate: mine frequency over
          cells outside the safe zone
    """
    click: Tuple[int, int] = first_click or _default_first_click(width, height)

    freq = mine_frequency_map(
        width, height, mine_count, runs, first_click=click, seed=seed
    )
    sizes = opening_sizes(
        width, height, mine_count, runs, first_click=click, seed=seed
    )

    zone_mask = np.zeros((height, width), dtype=bool)
    for x, y in safe_zone(click[0], click[1], width, height):
        zone_mask[y, x] = True
    outside = freq[~zone_mask]

    safe_cells = width * height - mine_count
    out: Dict[str, float] = {
        "avg_opening_size": float(sizes.mean()),
        "first_click_win_rate": float(np.mean(sizes == safe_cells)),
        "safe_zone_mine_rate": float(freq[zone_mask].max()),
        "mean_mine_rate": float(outside.mean()) if outside.size else 0.0,
        "min_mine_rate": float(outside.min()) if outside.size else 0.0,
        "max_mine_rate": float(outside.max()) if outside.size else 0.0,
    }

    if show_plots:
        plt.figure()  # type: ignore[misc]
        plt.imshow(freq, cmap="viridis", vmin=0.0)  # type: ignore[misc]
        plt.colorbar(label="Mine frequency")  # type: ignore[misc]
        plt.scatter([click[0]], [click[1]], marker="x", color="red")  # type: ignore[misc]
        plt.title(f"Mine frequency ({width}x{height}, {mine_count} mines, {runs} boards)")  # type: ignore[misc]
        plt.tight_layout()
        plt.show()  # type: ignore[misc]

        plt.figure()  # type: ignore[misc]
        plt.hist(sizes, bins=min(50, max(1, int(sizes.max() - sizes.min()) + 1)))  # type: ignore[misc]
        plt.xlabel("Cells revealed by first click")  # type: ignore[misc]
        plt.ylabel("Games")  # type: ignore[misc]
        plt.title("First-click opening size")  # type: ignore[misc]
        plt.tight_layout()
        plt.show()  # type: ignore[misc]

    return out


def summarize_final_state(session: Session) -> Dict[str, object]:
    """Snapshot of a session's counters, e.g. for logging a finished game."""
    return {
        "state": session.get_state().value,
        "won": session.get_state() == GameState.WON,
        "cells_revealed": session.cells_revealed,
        "mines_remaining": session.mines_remaining,
        "elapsed_seconds": session.elapsed_seconds,
        "adjacency_histogram": adjacency_histogram(session.grid).tolist(),
    }
