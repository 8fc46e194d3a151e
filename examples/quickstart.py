"""
Quickstart example for the Minesweeper core.

This script plays a scripted headless game and runs the placement analysis.
"""

from minesweeper import (
    GameListener,
    GameState,
    format_board,
    new_game,
    run_placement_analysis,
    summarize_final_state,
)


class PrintingListener(GameListener):
    def on_counters_changed(self, mines_remaining):
        print(f"  mines left: {mines_remaining}")

    def on_game_ended(self, did_win):
        print(f"  game ended: {'won' if did_win else 'lost'}")


def main():
    print("=" * 60)
    print("Minesweeper - Quickstart Example")
    print("=" * 60)

    # Example 1: Open a board and flag a cell
    print("\n1. Opening a 9x9 board with 10 mines at the center...")
    print("-" * 60)

    game = new_game(9, 9, 10, listener=PrintingListener(), seed=7)
    changed = game.reveal_cell(4, 4)
    print(f"First click revealed {len(changed)} cells.")
    print(format_board(game))

    hidden = next(
        (c for c in game.grid.cells() if not c.is_revealed and not c.is_flagged),
        None,
    )
    if hidden is not None:
        game.toggle_flag(hidden.x, hidden.y)
        print(f"Flagged ({hidden.x}, {hidden.y}).")

    # Example 2: Reveal every safe cell to finish the game
    print("\n2. Revealing every remaining safe cell...")
    print("-" * 60)

    if hidden is not None:
        game.toggle_flag(hidden.x, hidden.y)
    for cell in list(game.grid.cells()):
        if game.get_state() != GameState.PLAYING:
            break
        if not cell.is_mine:
            game.reveal_cell(cell.x, cell.y)
    print(format_board(game, reveal_all=True))
    print(summarize_final_state(game))

    # Example 3: Mine placement statistics
    print("\n3. Placement statistics over 200 boards (16x16, 40 mines)...")
    print("-" * 60)

    stats = run_placement_analysis(16, 16, 40, runs=200, seed=1, show_plots=False)
    for key, value in stats.items():
        print(f"{key:22s} {value:.3f}")

    print("\n" + "=" * 60)
    print("Done! Play interactively with `minesweeper-cli` or `streamlit run app/demo.py`.")
    print("=" * 60)


if __name__ == "__main__":
    main()
