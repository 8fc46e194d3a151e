"""
Minesweeper - Browser Game

Run with: streamlit run app/demo.py
"""

import sys
import time
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import streamlit as st
from typing import Optional

from minesweeper import (
    Cell,
    GameListener,
    GameState,
    InvalidDimensions,
    Session,
    TickDriver,
    new_game,
    summarize_final_state,
)
from minesweeper.config import (
    DEFAULT_HEIGHT,
    DEFAULT_MINES,
    DEFAULT_WIDTH,
    MAX_DIMENSION,
    TICK_INTERVAL_SECONDS,
)

NUMBER_LABELS = {
    1: "1️⃣", 2: "2️⃣", 3: "3️⃣", 4: "4️⃣",
    5: "5️⃣", 6: "6️⃣", 7: "7️⃣", 8: "8️⃣",
}


class StreamlitListener(GameListener):
    """Stores session notifications in st.session_state for the next render."""

    def on_cell_changed(self, cell: Cell) -> None:
        st.session_state.changed_cells += 1

    def on_counters_changed(self, mines_remaining: int) -> None:
        st.session_state.mines_remaining = mines_remaining

    def on_timer_tick(self, elapsed_seconds: int) -> None:
        st.session_state.elapsed_seconds = elapsed_seconds

    def on_game_ended(self, did_win: bool) -> None:
        st.session_state.end_notice = "You won!" if did_win else "You lost!"


def cell_label(cell: Cell) -> str:
    """Button text for one cell."""
    if cell.is_revealed:
        if cell.is_mine:
            return "💣"
        return NUMBER_LABELS.get(cell.adjacent_mines, "▫️")
    if cell.is_flagged:
        return "🚩"
    return "⬜"


def start_game(width: int, height: int, mines: int) -> None:
    """Replace the current game; a rejected setup is reported once."""
    try:
        game = new_game(width, height, mines, listener=StreamlitListener())
    except InvalidDimensions as exc:
        st.session_state.setup_error = str(exc)
        return
    st.session_state.changed_cells = 0
    st.session_state.elapsed_seconds = 0
    st.session_state.end_notice = None
    st.session_state.game = game
    st.session_state.driver = TickDriver(game)


def on_cell_click(x: int, y: int) -> None:
    game: Optional[Session] = st.session_state.game
    if game is None:
        return
    driver: TickDriver = st.session_state.driver
    driver.pump(time.monotonic())
    st.session_state.changed_cells = 0
    if st.session_state.click_mode == "Flag":
        game.toggle_flag(x, y)
    else:
        game.reveal_cell(x, y)
    driver.pump(time.monotonic())


@st.fragment(run_every=TICK_INTERVAL_SECONDS)
def timer_panel() -> None:
    game: Optional[Session] = st.session_state.game
    if game is not None:
        st.session_state.driver.pump(time.monotonic())
    st.metric("Time", f"{st.session_state.elapsed_seconds} s")


def render_board(game: Session) -> None:
    finished = game.get_state() != GameState.PLAYING
    for y in range(game.height):
        cols = st.columns(game.width, gap="small")
        for x in range(game.width):
            cell = game.grid.cell(x, y)
            cols[x].button(
                cell_label(cell),
                key=f"cell_{x}_{y}",
                on_click=on_cell_click,
                args=(x, y),
                disabled=finished or cell.is_revealed,
            )


def main():
    st.set_page_config(
        page_title="Minesweeper",
        page_icon="💣",
        layout="wide",
    )

    st.title("Minesweeper")

    # Initialize session state
    if "game" not in st.session_state:
        st.session_state.game = None
        st.session_state.driver = None
        st.session_state.mines_remaining = DEFAULT_MINES
        st.session_state.elapsed_seconds = 0
        st.session_state.changed_cells = 0
        st.session_state.end_notice = None
        st.session_state.setup_error = None
        start_game(DEFAULT_WIDTH, DEFAULT_HEIGHT, DEFAULT_MINES)

    # Sidebar configuration
    st.sidebar.header("Game Configuration")
    width = st.sidebar.number_input("Width", 1, MAX_DIMENSION, DEFAULT_WIDTH)
    height = st.sidebar.number_input("Height", 1, MAX_DIMENSION, DEFAULT_HEIGHT)
    mines = st.sidebar.number_input("Mines", 1, MAX_DIMENSION * MAX_DIMENSION, DEFAULT_MINES)

    if st.sidebar.button("New Game", type="primary"):
        start_game(int(width), int(height), int(mines))

    if st.session_state.setup_error:
        st.sidebar.error(st.session_state.setup_error)
        st.session_state.setup_error = None

    st.sidebar.radio(
        "Click Mode",
        ["Reveal", "Flag"],
        key="click_mode",
        horizontal=True,
        help="Flags can be placed after the first reveal.",
    )

    game: Optional[Session] = st.session_state.game
    if game is None:
        st.info("Choose a board size and press 'New Game'.")
        return

    col1, col2 = st.columns(2)
    with col1:
        st.metric("Mines Left", st.session_state.mines_remaining)
    with col2:
        timer_panel()

    if st.session_state.changed_cells:
        st.caption(f"Last move changed {st.session_state.changed_cells} cells.")

    if st.session_state.end_notice:
        if game.get_state() == GameState.WON:
            st.success(st.session_state.end_notice)
        else:
            st.error(st.session_state.end_notice)
        st.json(summarize_final_state(game), expanded=False)

    render_board(game)


if __name__ == "__main__":
    main()
