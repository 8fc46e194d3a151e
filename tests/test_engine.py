import pytest

from minesweeper import GameState, GameTimer, InvalidDimensions, Session, TickDriver, new_game
from minesweeper.utils import safe_zone


def test_new_game_rejects_bad_dimensions():
    with pytest.raises(InvalidDimensions):
        new_game(1, 1, 0)
    with pytest.raises(InvalidDimensions):
        new_game(4, 4, 16)


def test_new_game_initial_state(listener):
    session = new_game(8, 6, 5, listener=listener, seed=1)
    assert session.get_state() == GameState.PLAYING
    assert session.get_state() == "playing"
    assert session.mines_remaining == 5
    assert session.cells_revealed == 0
    assert not session.first_click_taken
    assert not session.grid.mines_planted
    assert session.elapsed_seconds == 0
    assert listener.counters == [5]


def test_three_by_three_single_mine_wins_on_first_click(rigged, listener):
    session = rigged(3, 3, [(2, 2)])

    changed = session.reveal_cell(0, 0)

    assert session.get_state() == GameState.WON
    assert session.cells_revealed == 8
    assert listener.endings == [True]
    # Eight safe cells plus the mine shown for display.
    assert {c.coord for c in changed} == {(x, y) for y in range(3) for x in range(3)}
    assert set(listener.cells) == {(x, y) for y in range(3) for x in range(3)}


def test_first_click_places_mines_outside_safe_zone(listener):
    for seed in range(25):
        session = new_game(9, 9, 10, listener=listener, seed=seed)
        session.reveal_cell(4, 4)
        mines = session.grid.mine_coords()
        assert len(mines) == 10
        assert not mines & safe_zone(4, 4, 9, 9)
        assert session.get_state() != GameState.LOST


def test_first_click_starts_timer_and_sets_flag(rigged):
    session = rigged(4, 4, [(3, 3)])
    assert not session.timer.running
    session.reveal_cell(2, 2)
    assert session.first_click_taken
    assert session.timer.running
    assert session.get_state() == GameState.PLAYING


def test_reveal_mine_loses_and_shows_all_mines(rigged, listener):
    session = rigged(4, 4, [(3, 3), (0, 3)])
    session.reveal_cell(0, 0)
    session.toggle_flag(0, 3)

    session.reveal_cell(3, 3)

    assert session.get_state() == GameState.LOST
    assert listener.endings == [False]
    assert session.grid.cell(3, 3).is_revealed
    assert session.grid.cell(0, 3).is_revealed
    assert session.grid.cell(0, 3).is_flagged
    assert not session.timer.running


def test_revealing_a_number_does_not_cascade(rigged):
    session = rigged(4, 4, [(3, 3)])
    changed = session.reveal_cell(2, 2)
    assert [c.coord for c in changed] == [(2, 2)]
    assert session.cells_revealed == 1
    assert session.get_state() == GameState.PLAYING


def test_win_iff_all_safe_cells_revealed(rigged):
    session = rigged(4, 1, [(1, 0)])
    session.reveal_cell(0, 0)
    assert session.cells_revealed == 1
    assert session.get_state() == GameState.PLAYING
    session.reveal_cell(2, 0)
    assert session.cells_revealed == 2
    assert session.get_state() == GameState.PLAYING
    session.reveal_cell(3, 0)
    assert session.cells_revealed == 3
    assert session.get_state() == GameState.WON


@pytest.mark.parametrize("x,y", [(-1, 0), (0, -1), (5, 0), (0, 5)])
def test_out_of_bounds_actions_are_noops(rigged, listener, x, y):
    session = rigged(5, 5, [(4, 4)])
    assert session.reveal_cell(x, y) == []
    assert not session.first_click_taken
    session.reveal_cell(3, 3)
    assert session.toggle_flag(x, y) is False
    assert listener.counters == []


def test_reveal_already_revealed_or_flagged_is_noop(rigged):
    session = rigged(4, 4, [(3, 3), (0, 3)])
    session.reveal_cell(2, 2)
    assert session.reveal_cell(2, 2) == []

    session.toggle_flag(0, 0)
    assert session.reveal_cell(0, 0) == []
    assert not session.grid.cell(0, 0).is_revealed
    assert session.cells_revealed == 1


def test_flag_before_first_click_is_noop(rigged, listener):
    session = rigged(3, 3, [(2, 2)])
    assert session.toggle_flag(1, 1) is False
    assert not session.grid.cell(1, 1).is_flagged
    assert session.mines_remaining == 1
    assert listener.counters == []


def test_flag_unflag_restores_counter(rigged, listener):
    session = rigged(4, 4, [(3, 3), (0, 3)])
    session.reveal_cell(2, 1)

    assert session.toggle_flag(3, 3) is True
    assert session.mines_remaining == 1
    assert session.grid.cell(3, 3).is_flagged
    assert session.toggle_flag(3, 3) is True
    assert session.mines_remaining == 2
    assert not session.grid.cell(3, 3).is_flagged

    assert listener.counters == [1, 2]
    assert listener.cells[-2:] == [(3, 3), (3, 3)]


def test_flag_revealed_cell_is_noop(rigged):
    session = rigged(4, 4, [(3, 3)])
    session.reveal_cell(2, 2)
    assert session.toggle_flag(2, 2) is False
    assert not session.grid.cell(2, 2).is_flagged
    assert session.mines_remaining == 1


def test_over_flagging_goes_negative(rigged):
    session = rigged(4, 4, [(3, 3)])
    session.reveal_cell(2, 2)
    for coord in [(3, 3), (3, 2), (2, 3)]:
        session.toggle_flag(*coord)
    assert session.mines_remaining == -2


def test_no_mutation_after_game_end(rigged, listener):
    session = rigged(4, 4, [(3, 3), (0, 3)])
    session.reveal_cell(2, 1)
    session.reveal_cell(3, 3)
    assert session.get_state() == GameState.LOST

    revealed_before = {c.coord for c in session.grid.cells() if c.is_revealed}
    counters_before = list(listener.counters)

    assert session.reveal_cell(0, 0) == []
    assert session.toggle_flag(1, 3) is False
    assert session.tick() is False

    assert {c.coord for c in session.grid.cells() if c.is_revealed} == revealed_before
    assert not session.grid.cell(1, 3).is_flagged
    assert listener.counters == counters_before
    assert session.get_state() == GameState.LOST
    assert listener.endings == [False]


def test_no_mutation_after_win(rigged, listener):
    session = rigged(4, 1, [(1, 0)])
    session.reveal_cell(0, 0)
    session.reveal_cell(3, 0)
    assert session.get_state() == GameState.WON

    revealed_before = {c.coord for c in session.grid.cells() if c.is_revealed}
    flagged_before = {c.coord for c in session.grid.cells() if c.is_flagged}
    calls_before = (
        list(listener.cells),
        list(listener.counters),
        list(listener.ticks),
        list(listener.endings),
    )

    assert session.reveal_cell(1, 0) == []
    assert session.reveal_cell(2, 0) == []
    assert session.toggle_flag(1, 0) is False
    assert session.tick() is False

    assert {c.coord for c in session.grid.cells() if c.is_revealed} == revealed_before
    assert {c.coord for c in session.grid.cells() if c.is_flagged} == flagged_before
    assert session.cells_revealed == 3
    assert session.mines_remaining == 1
    assert (
        listener.cells,
        listener.counters,
        listener.ticks,
        listener.endings,
    ) == calls_before
    assert session.get_state() == GameState.WON


def test_losing_move_does_not_count_as_revealed(rigged, listener):
    session = rigged(4, 1, [(1, 0)])
    session.reveal_cell(0, 0)
    session.reveal_cell(2, 0)
    assert session.cells_revealed == 2

    session.reveal_cell(1, 0)

    assert session.get_state() == GameState.LOST
    assert session.cells_revealed == 2
    assert not session.grid.is_cleared(session.cells_revealed)
    assert listener.endings == [False]


def test_losing_after_all_but_one_safe_cell(rigged):
    session = rigged(3, 1, [(1, 0)])
    session.reveal_cell(0, 0)
    assert session.cells_revealed == session.grid.safe_cell_count - 1

    session.reveal_cell(1, 0)

    assert session.get_state() == GameState.LOST
    assert session.cells_revealed != session.grid.safe_cell_count


def test_flood_fill_notifies_each_cell_once(rigged, listener):
    session = rigged(5, 4, [(3, y) for y in range(4)])
    changed = session.reveal_cell(0, 0)
    assert len(changed) == 12
    assert sorted(listener.cells) == sorted(c.coord for c in changed)
    assert session.cells_revealed == 12


def test_tick_only_while_timer_running(rigged, listener):
    session = rigged(4, 4, [(3, 3)])
    assert session.tick() is False
    session.reveal_cell(2, 2)
    assert session.tick() is True
    assert session.tick() is True
    assert session.elapsed_seconds == 2
    assert listener.ticks == [1, 2]


def test_timer_freezes_on_win(rigged):
    session = rigged(2, 1, [(1, 0)])
    session.reveal_cell(0, 0)
    assert session.get_state() == GameState.WON
    assert session.tick() is False
    assert session.elapsed_seconds == 0


def test_game_timer_stop_is_idempotent():
    timer = GameTimer()
    timer.start()
    assert timer.tick()
    assert timer.stop() is True
    assert timer.stop() is False
    timer.start()
    assert not timer.running
    assert not timer.tick()
    assert timer.elapsed_seconds == 1


def test_tick_driver_converts_wall_clock(rigged, listener):
    session = rigged(4, 4, [(3, 3)])
    driver = TickDriver(session)

    assert driver.pump(100.0) == 0
    session.reveal_cell(2, 2)
    assert driver.pump(100.0) == 0
    assert driver.pump(100.9) == 0
    assert driver.pump(102.5) == 2
    assert driver.pump(103.0) == 1
    assert session.elapsed_seconds == 3
    assert listener.ticks == [1, 2, 3]


def test_tick_driver_stops_with_game(rigged):
    session = rigged(4, 4, [(3, 3)])
    driver = TickDriver(session)
    session.reveal_cell(2, 2)
    driver.pump(0.0)
    session.reveal_cell(3, 3)
    assert session.get_state() == GameState.LOST
    assert driver.pump(10.0) == 0
    assert session.elapsed_seconds == 0


def test_seeded_sessions_are_reproducible():
    a = Session(10, 10, 15, seed=42)
    b = Session(10, 10, 15, seed=42)
    a.reveal_cell(5, 5)
    b.reveal_cell(5, 5)
    assert a.grid.mine_coords() == b.grid.mine_coords()
