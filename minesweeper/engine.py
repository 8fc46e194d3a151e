"""Game controller: lifecycle state, counters, timer and change notifications."""

import logging
import random
from enum import Enum
from typing import List, Optional

from .config import TICK_INTERVAL_SECONDS
from .grid import Cell, Grid

logger = logging.getLogger(__name__)


class GameState(str, Enum):
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


class GameListener:
    """
    Receives change notifications from a Session.

    Presentation layers subclass this and override the hooks they render;
    the defaults do nothing.
    """

    def on_cell_changed(self, cell: Cell) -> None:
        pass

    def on_counters_changed(self, mines_remaining: int) -> None:
        pass

    def on_timer_tick(self, elapsed_seconds: int) -> None:
        pass

    def on_game_ended(self, did_win: bool) -> None:
        pass


class GameTimer:
    """Seconds counter advanced by an external driver through tick()."""

    def __init__(self) -> None:
        self.elapsed_seconds: int = 0
        self.running: bool = False
        self.stopped: bool = False

    def start(self) -> None:
        if self.running or self.stopped:
            return
        self.running = True

    def stop(self) -> bool:
        """Freeze the timer. Returns True only for the call that stopped it."""
        if self.stopped:
            return False
        self.running = False
        self.stopped = True
        return True

    def tick(self) -> bool:
        if not self.running:
            return False
        self.elapsed_seconds += 1
        return True


class Session:
    """One game of Minesweeper from the first click to a win or a loss."""

    def __init__(
        self,
        width: int,
        height: int,
        mine_count: int,
        *,
        listener: Optional[GameListener] = None,
        seed: Optional[int] = None,
    ) -> None:
        """
        Args:
            width: Board width (number of columns).
            height: Board height (number of rows).
            mine_count: Total number of mines.
            listener: Notification sink; a no-op listener when omitted.
            seed: Seed for mine placement; OS entropy when None.

        Raises:
            InvalidDimensions: If the board parameters are out of range.
        """
        rng = random.Random(seed) if seed is not None else random.Random()
        self.grid: Grid = Grid(width, height, mine_count, rng=rng)
        self.listener: GameListener = listener if listener is not None else GameListener()

        self.state: GameState = GameState.PLAYING
        self.mines_remaining: int = mine_count
        self.cells_revealed: int = 0
        self.first_click_taken: bool = False
        self.timer: GameTimer = GameTimer()

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    @property
    def mine_count(self) -> int:
        return self.grid.mine_count

    @property
    def elapsed_seconds(self) -> int:
        return self.timer.elapsed_seconds

    def get_state(self) -> GameState:
        return self.state

    def reveal_cell(self, x: int, y: int) -> List[Cell]:
        """
        Reveal a cell, flood-filling from it when it has no adjacent mines.

        Calls on a finished game, out-of-bounds coordinates, or revealed or
        flagged cells do nothing. The first effective call places the mines
        around (x, y), so the first reveal is never a mine.

        Returns:
            Every cell whose revealed state changed during this call.
        """
        if self.state != GameState.PLAYING or not self.grid.is_in_bounds(x, y):
            return []

        cell = self.grid.cell(x, y)
        if cell.is_revealed or cell.is_flagged:
            return []

        if not self.first_click_taken:
            if not self.grid.mines_planted:
                self.grid.plant_mines(x, y)
            self.grid.compute_adjacency()
            self.timer.start()
            self.first_click_taken = True

        if cell.is_mine:
            # Only safe cells count towards cells_revealed.
            cell.is_revealed = True
            changed = [cell] + self.grid.reveal_mines()
            self._notify_cells(changed)
            self._end_game(did_win=False)
            return changed

        changed = self.grid.flood_fill(x, y)
        self.cells_revealed += len(changed)
        self._notify_cells(changed)

        if self.grid.is_cleared(self.cells_revealed):
            shown = self.grid.reveal_mines()
            self._notify_cells(shown)
            changed.extend(shown)
            self._end_game(did_win=True)

        return changed

    def toggle_flag(self, x: int, y: int) -> bool:
        """
        Flag or unflag a hidden cell.

        Flags are only accepted after the first reveal. mines_remaining is not
        clamped, so over-flagging drives it negative.

        Returns:
            True if the flag changed.
        """
        if self.state != GameState.PLAYING or not self.grid.is_in_bounds(x, y):
            return False
        if not self.first_click_taken:
            return False

        cell = self.grid.cell(x, y)
        if cell.is_revealed:
            return False

        cell.is_flagged = not cell.is_flagged
        self.mines_remaining += -1 if cell.is_flagged else 1

        self.listener.on_counters_changed(self.mines_remaining)
        self.listener.on_cell_changed(cell)
        return True

    def tick(self) -> bool:
        """Advance the game clock by one second while the game is in progress."""
        if self.state != GameState.PLAYING or not self.timer.tick():
            return False
        self.listener.on_timer_tick(self.timer.elapsed_seconds)
        return True

    def _notify_cells(self, cells: List[Cell]) -> None:
        for cell in cells:
            self.listener.on_cell_changed(cell)

    def _end_game(self, did_win: bool) -> None:
        self.state = GameState.WON if did_win else GameState.LOST
        if self.timer.stop():
            logger.debug("Timer stopped at %d s.", self.timer.elapsed_seconds)
        logger.debug(
            "Game %s after %d revealed cells.", self.state.value, self.cells_revealed
        )
        self.listener.on_game_ended(did_win)


class TickDriver:
    """
    Turns wall-clock readings into Session.tick() calls.

    Front ends without their own scheduler call pump() whenever they get
    control; every whole interval elapsed since the last pump becomes a tick.
    """

    def __init__(self, session: Session, interval: float = TICK_INTERVAL_SECONDS) -> None:
        self.session = session
        self.interval = interval
        self._last: Optional[float] = None

    def pump(self, now: float) -> int:
        """
        Deliver the ticks due at time `now` (seconds, monotonic).

        Returns:
            Number of ticks the session accepted.
        """
        if not self.session.timer.running:
            self._last = None
            return 0
        if self._last is None:
            self._last = now
            return 0

        accepted = 0
        while now - self._last >= self.interval:
            self._last += self.interval
            if self.session.tick():
                accepted += 1
        return accepted


def new_game(
    width: int,
    height: int,
    mine_count: int,
    *,
    listener: Optional[GameListener] = None,
    seed: Optional[int] = None,
) -> Session:
    """
    Start a fresh game and announce its initial mine counter.

    Raises:
        InvalidDimensions: If the board parameters are out of range.
    """
    session = Session(width, height, mine_count, listener=listener, seed=seed)
    session.listener.on_counters_changed(session.mines_remaining)
    return session
