# tests/test_catch_state.py
from __future__ import annotations

import logging

import pytest

from catch_rl.game.core.constants import CHANCE_PLAYER_ID, TERMINAL_PLAYER_ID
from catch_rl.game.core.errors import BoardIndexError, IllegalActionError
from catch_rl.game.core.game import PLAYER_ID, CatchGame, CatchState
from catch_rl.game.core.types import Action, CellState

LEFT, STAY, RIGHT = int(Action.LEFT), int(Action.STAY), int(Action.RIGHT)


def _started(rows: int, columns: int, ball_col: int) -> CatchState:
    st = CatchGame(rows=rows, columns=columns).new_initial_state()
    st.apply_action(ball_col)
    return st


@pytest.mark.parametrize("rows,columns", [(1, 1), (3, 3), (10, 5), (4, 7)])
def test_fresh_state_is_a_uniform_chance_node(rows: int, columns: int) -> None:
    st = CatchGame(rows=rows, columns=columns).new_initial_state()
    assert not st.is_terminal()
    assert st.is_chance_node()
    assert st.current_player() == CHANCE_PLAYER_ID
    assert st.legal_actions() == list(range(columns))

    outcomes = st.chance_outcomes()
    assert [a for a, _p in outcomes] == list(range(columns))
    for _a, p in outcomes:
        assert p == pytest.approx(1.0 / columns)
    assert sum(p for _a, p in outcomes) == pytest.approx(1.0)
    assert st.returns() == [0.0]
    assert st.paddle_col == columns // 2


@pytest.mark.parametrize("c", [0, 2, 4])
def test_chance_action_places_ball_on_top_row(c: int) -> None:
    st = _started(10, 5, c)
    assert st.current_player() == PLAYER_ID
    assert st.is_player_node()
    assert st.ball_row == 0
    assert st.ball_col == c
    assert st.legal_actions() == [LEFT, STAY, RIGHT]
    assert st.chance_outcomes() == []


def test_player_actions_drop_ball_and_move_paddle_within_bounds() -> None:
    st = _started(8, 3, 0)
    moves = [LEFT, LEFT, RIGHT, RIGHT, RIGHT, STAY, LEFT]
    for a in moves:
        row_before, paddle_before = st.ball_row, st.paddle_col
        st.apply_action(a)
        assert st.ball_row == row_before + 1
        assert abs(st.paddle_col - paddle_before) <= 1
        assert 0 <= st.paddle_col <= 2
    assert st.is_terminal()
    assert st.player_moves() == moves


def test_edge_moves_are_clamped_not_rejected() -> None:
    st = _started(6, 3, 1)
    assert st.paddle_col == 1
    st.apply_action(LEFT)
    assert st.paddle_col == 0
    st.apply_action(LEFT)
    assert st.paddle_col == 0
    st.apply_action(RIGHT)
    st.apply_action(RIGHT)
    st.apply_action(RIGHT)
    assert st.paddle_col == 2


def test_catch_scores_plus_one() -> None:
    st = _started(3, 3, 1)
    st.apply_action(STAY)
    assert not st.is_terminal()
    assert st.returns() == [0.0]
    st.apply_action(STAY)
    assert st.is_terminal()
    assert st.ball_row == 2
    assert st.paddle_col == 1
    assert st.returns() == [1.0]


def test_miss_scores_minus_one() -> None:
    st = _started(3, 3, 0)
    st.apply_action(STAY)
    st.apply_action(STAY)
    assert st.is_terminal()
    assert st.returns() == [-1.0]
    assert st.rewards() == [-1.0]


def test_terminal_state_rejects_further_actions() -> None:
    st = _started(2, 3, 2)
    st.apply_action(RIGHT)
    assert st.is_terminal()
    assert st.current_player() == TERMINAL_PLAYER_ID
    assert st.legal_actions() == []
    assert st.returns()[0] in (-1.0, 1.0)
    assert len(st.returns()) == 1
    with pytest.raises(IllegalActionError, match="no legal actions"):
        st.apply_action(STAY)


def test_single_row_board_is_terminal_after_chance() -> None:
    st = _started(1, 1, 0)
    assert st.is_terminal()
    assert st.returns() == [1.0]


def test_illegal_chance_outcome_is_rejected() -> None:
    st = CatchGame(rows=3, columns=2).new_initial_state()
    with pytest.raises(IllegalActionError, match="not legal"):
        st.apply_action(2)
    assert not st.is_initialized


def test_unknown_player_action_is_rejected() -> None:
    st = _started(4, 5, 3)
    with pytest.raises(IllegalActionError, match="not legal"):
        st.apply_action(3)
    assert st.ball_row == 0


@pytest.mark.parametrize("a", [LEFT, STAY, RIGHT])
def test_undo_restores_interior_moves(a: int) -> None:
    st = _started(5, 5, 4)
    st.apply_action(STAY)
    before = st.to_dict()
    st.apply_action(a)
    st.undo_action(PLAYER_ID, a)
    assert st.to_dict() == before
    assert st.history() == [4, STAY]


def test_undo_chance_returns_to_uninitialized() -> None:
    st = _started(5, 5, 3)
    st.undo_action(CHANCE_PLAYER_ID, 3)
    assert not st.is_initialized
    assert st.ball_row is None
    assert st.ball_col is None
    assert st.paddle_col == 2
    assert st.is_chance_node()
    assert st.history() == []


def test_undo_at_edge_warns_and_assumes_unclamped_move(caplog: pytest.LogCaptureFixture) -> None:
    st = _started(6, 3, 0)
    st.apply_action(LEFT)
    st.apply_action(LEFT)  # clamped: paddle stays at 0
    assert st.paddle_col == 0

    with caplog.at_level(logging.WARNING, logger="catch_rl.game.core.game"):
        st.undo_action(PLAYER_ID, LEFT)
    assert "ambiguous" in caplog.text
    # documented limitation: the clamped move is inverted as if it had moved
    assert st.paddle_col == 1
    assert st.ball_row == 1


def test_undo_of_forced_clamp_is_exact(caplog: pytest.LogCaptureFixture) -> None:
    st = _started(4, 1, 0)
    st.apply_action(RIGHT)
    with caplog.at_level(logging.WARNING, logger="catch_rl.game.core.game"):
        st.undo_action(PLAYER_ID, RIGHT)
    assert st.paddle_col == 0
    assert st.ball_row == 0
    assert "ambiguous" not in caplog.text


def test_undo_must_match_last_transition() -> None:
    st = _started(5, 5, 1)
    st.apply_action(LEFT)
    with pytest.raises(IllegalActionError, match="does not match"):
        st.undo_action(PLAYER_ID, RIGHT)
    with pytest.raises(IllegalActionError, match="does not match"):
        st.undo_action(CHANCE_PLAYER_ID, 1)

    fresh = CatchGame().new_initial_state()
    with pytest.raises(IllegalActionError, match="empty history"):
        fresh.undo_action(CHANCE_PLAYER_ID, 0)


def test_board_at_marks_ball_and_paddle() -> None:
    st = _started(3, 3, 0)
    assert st.board_at(0, 0) is CellState.BALL
    assert st.board_at(2, 1) is CellState.PADDLE
    assert st.board_at(1, 1) is CellState.EMPTY

    st.apply_action(LEFT)
    st.apply_action(STAY)
    # ball lands on the paddle: ball wins the cell
    assert st.board_at(2, 0) is CellState.BALL


@pytest.mark.parametrize("row,col", [(-1, 0), (0, -1), (3, 0), (0, 3)])
def test_board_at_rejects_out_of_range(row: int, col: int) -> None:
    st = _started(3, 3, 0)
    with pytest.raises(BoardIndexError, match="outside board"):
        st.board_at(row, col)
    with pytest.raises(IndexError):
        st.board_at(row, col)


def test_render_board() -> None:
    st = CatchGame(rows=3, columns=3).new_initial_state()
    assert str(st) == "...\n...\n.x."

    st.apply_action(1)
    assert str(st) == ".o.\n...\n.x."
    assert st.observation_string() == str(st)

    st.apply_action(STAY)
    st.apply_action(STAY)
    assert str(st) == "...\n...\n.@."

    missed = _started(3, 3, 2)
    missed.apply_action(LEFT)
    missed.apply_action(STAY)
    assert str(missed) == "...\n...\nx.o"


def test_action_to_string() -> None:
    st = _started(3, 3, 0)
    assert st.action_to_string(CHANCE_PLAYER_ID, 2) == "Initialized ball to 2"
    assert st.action_to_string(PLAYER_ID, LEFT) == "LEFT"
    assert st.action_to_string(PLAYER_ID, STAY) == "STAY"
    assert st.action_to_string(PLAYER_ID, RIGHT) == "RIGHT"
    with pytest.raises(IllegalActionError):
        st.action_to_string(PLAYER_ID, 7)
    with pytest.raises(IllegalActionError):
        st.action_to_string(CHANCE_PLAYER_ID, 3)


def test_history_and_information_state_string() -> None:
    st = _started(4, 3, 2)
    st.apply_action(RIGHT)
    st.apply_action(LEFT)
    assert st.history() == [2, RIGHT, LEFT]
    assert st.full_history() == [(CHANCE_PLAYER_ID, 2), (PLAYER_ID, RIGHT), (PLAYER_ID, LEFT)]
    assert st.information_state_string() == "2, 2, 0"
    assert st.move_number() == 3


def test_clone_is_independent() -> None:
    st = _started(5, 5, 3)
    st.apply_action(RIGHT)

    cp = st.clone()
    assert cp is not st
    assert str(cp) == str(st)
    assert cp.legal_actions() == st.legal_actions()
    assert cp.to_dict() == st.to_dict()
    assert cp.history() == st.history()

    cp.apply_action(RIGHT)
    assert cp.ball_row == 2
    assert st.ball_row == 1
    assert st.history() == [3, RIGHT]


def test_dict_round_trip() -> None:
    game = CatchGame(rows=4, columns=4)
    st = game.new_initial_state()
    st.apply_action(3)
    st.apply_action(RIGHT)
    st.apply_action(RIGHT)

    data = st.to_dict()
    assert data == {"initialized": True, "ball_row": 2, "ball_col": 3, "paddle_col": 3, "moves": [RIGHT, RIGHT]}

    back = CatchState.from_dict(game, data)
    assert back.to_dict() == data
    assert back.history() == st.history()
    assert (back.information_state_tensor() == st.information_state_tensor()).all()


def test_from_dict_rejects_inconsistent_data() -> None:
    game = CatchGame(rows=4, columns=4)
    with pytest.raises(ValueError, match="requires 2 moves"):
        CatchState.from_dict(game, {"initialized": True, "ball_row": 2, "ball_col": 0, "paddle_col": 1, "moves": [1]})
    with pytest.raises(ValueError, match="outside"):
        CatchState.from_dict(game, {"initialized": False, "ball_row": None, "ball_col": None, "paddle_col": 9})


@pytest.mark.parametrize("a", list(Action))
def test_typed_player_action_is_rejected_at_chance_node(a: Action) -> None:
    st = CatchGame().new_initial_state()
    with pytest.raises(IllegalActionError, match="before the ball was placed"):
        st.apply_action(a)
    assert not st.is_initialized
    assert st.history() == []


def test_typed_player_action_is_accepted_after_chance() -> None:
    st = _started(4, 3, 1)
    st.apply_action(Action.RIGHT)
    assert st.paddle_col == 2
    assert st.player_moves() == [RIGHT]


def test_from_dict_requires_ball_position_when_initialized() -> None:
    game = CatchGame(rows=4, columns=4)
    with pytest.raises(ValueError, match="requires ball_row and ball_col"):
        CatchState.from_dict(game, {"initialized": True, "ball_row": None, "ball_col": 1, "paddle_col": 1, "moves": []})
    with pytest.raises(ValueError, match="requires ball_row and ball_col"):
        CatchState.from_dict(game, {"initialized": True, "ball_row": 0, "paddle_col": 1})
