"""Terminal front end: board rendering, the interactive loop and the CLI entry point."""

import argparse
import logging
import sys
import time
from typing import Callable, List, Optional, Tuple

from .config import DEFAULT_HEIGHT, DEFAULT_MINES, DEFAULT_WIDTH
from .engine import GameListener, GameState, Session, TickDriver, new_game
from .errors import InvalidDimensions

_ANSI_RESET = "\033[0m"
_ANSI_COORD = "\033[96m"
_ANSI_MINE = "\033[91m"


def _c(s: str, color: bool) -> str:
    """Wrap string in coordinate color."""
    return f"{_ANSI_COORD}{s}{_ANSI_RESET}" if color else s


def _m(s: str, color: bool) -> str:
    """Wrap string in mine color (red)."""
    return f"{_ANSI_MINE}{s}{_ANSI_RESET}" if color else s


def format_board(session: Session, reveal_all: bool = False, color: bool = True) -> str:
    """
    Render the board as a multi-line string for terminal display.

    Hidden cells show as '.', flags as 'F', mines as 'M' and revealed cells as
    their adjacent mine count.

    Args:
        session: Game to render.
        reveal_all: If True, show mines and counts under hidden cells too.
        color: If True, use ANSI colors for coordinates and mines.

    Returns:
        A formatted multi-line string with coordinate labels and the board grid.
    """
    grid = session.grid
    w, h = grid.width, grid.height

    def cell_str(x: int, y: int) -> str:
        cell = grid.cell(x, y)
        if cell.is_revealed or reveal_all:
            if cell.is_mine:
                return _m("M", color)
            return str(cell.adjacent_mines)
        if cell.is_flagged:
            return "F"
        return "."

    header_cells = " ".join(f"{x:2d}" for x in range(w))
    out = [_c("   ", color) + _c(header_cells, color)]
    out.append(_c("   " + "-" * (3 * w - 1), color))

    for y in range(h):
        row_cells = " ".join(f" {cell_str(x, y)}" for x in range(w))
        out.append(_c(f"{y:2d} ", color) + _c("|", color) + row_cells)

    return "\n".join(out)


def format_status(session: Session) -> str:
    return f"Mines left: {session.mines_remaining}   Time: {session.elapsed_seconds}s"


def parse_command(s: str) -> Optional[Tuple[str, int, int]]:
    """
    Parse one line of player input.

    Accepts "x y" to reveal and "f x y" to toggle a flag; commas work as
    separators too.

    Returns:
        ("reveal" | "flag", x, y), or None if the line is not a valid move.
    """
    parts: List[str] = s.replace(",", " ").split()
    action = "reveal"
    if parts and parts[0].lower() in {"f", "flag"}:
        action = "flag"
        parts = parts[1:]
    if len(parts) != 2:
        return None
    try:
        return action, int(parts[0]), int(parts[1])
    except ValueError:
        return None


class _ConsoleListener(GameListener):
    def on_game_ended(self, did_win: bool) -> None:
        if did_win:
            print("\nYou revealed all safe cells. You won!")
        else:
            print("\nYou hit a mine. You lost.")


def play_cli(
    session: Session, clock: Callable[[], float] = time.monotonic
) -> GameState:
    """
    Run the interactive terminal loop until the game ends or the player quits.

    The loop blocks on input, so elapsed seconds are delivered to the session
    in a batch each time a move comes in.

    Args:
        session: A Session to play.
        clock: Monotonic time source in seconds.

    Returns:
        The session state when the loop exits.
    """
    print(
        "Minesweeper CLI (reveal: x y, flag: f x y). "
        "Coordinates are 0-based. Type 'q' to quit.\n"
    )
    print(format_board(session))
    driver = TickDriver(session)

    while session.get_state() == GameState.PLAYING:
        s = input("\nMove: ").strip()
        driver.pump(clock())
        if s.lower() in {"q", "quit", "exit"}:
            print("Quit.")
            return session.get_state()

        command = parse_command(s)
        if command is None:
            print("Invalid input. Examples: 3 5  or  f 3 5")
            continue

        action, x, y = command
        if not session.grid.is_in_bounds(x, y):
            print("Cell coordinates are outside the board.")
            continue

        if action == "flag":
            if not session.toggle_flag(x, y):
                print("That cell cannot be flagged right now.")
        else:
            session.reveal_cell(x, y)
        driver.pump(clock())

        print()
        print(format_board(session))
        print(format_status(session))

    print("\nFull board:")
    print(format_board(session, reveal_all=True))
    return session.get_state()


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Play Minesweeper in the terminal.")
    parser.add_argument("--width", type=int, default=DEFAULT_WIDTH)
    parser.add_argument("--height", type=int, default=DEFAULT_HEIGHT)
    parser.add_argument("--mines", type=int, default=DEFAULT_MINES)
    parser.add_argument(
        "--seed", type=int, default=-1, help="RNG seed; <0 uses OS entropy"
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(asctime)s %(name)s %(levelname)s %(message)s"
        )

    try:
        session = new_game(
            args.width,
            args.height,
            args.mines,
            listener=_ConsoleListener(),
            seed=None if args.seed < 0 else args.seed,
        )
    except InvalidDimensions as exc:
        print(f"Cannot start game: {exc}", file=sys.stderr)
        return 2

    play_cli(session)
    return 0


if __name__ == "__main__":
    sys.exit(main())
