import matplotlib

matplotlib.use("Agg")

from typing import Iterable, List, Tuple

import pytest

from minesweeper import Cell, GameListener, Session


class RecordingListener(GameListener):
    def __init__(self) -> None:
        self.cells: List[Tuple[int, int]] = []
        self.counters: List[int] = []
        self.ticks: List[int] = []
        self.endings: List[bool] = []

    def on_cell_changed(self, cell: Cell) -> None:
        self.cells.append(cell.coord)

    def on_counters_changed(self, mines_remaining: int) -> None:
        self.counters.append(mines_remaining)

    def on_timer_tick(self, elapsed_seconds: int) -> None:
        self.ticks.append(elapsed_seconds)

    def on_game_ended(self, did_win: bool) -> None:
        self.endings.append(did_win)


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def rigged(listener):
    """Build a session whose mines sit exactly at the given coordinates."""

    def build(width: int, height: int, mines: Iterable[Tuple[int, int]]) -> Session:
        layout = list(mines)
        session = Session(width, height, len(layout), listener=listener)
        session.grid.set_mines(layout)
        return session

    return build
