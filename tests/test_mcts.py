import pytest

from kxo.game import FIXED_MAX, available_moves, check_win
from kxo.mcts import Mcts, fixed_log, fixed_sqrt, uct_score

DRAW_BOARD = list("XXOO" "OOXX" "XXOO" "OOXX")


def _board_with_empty(*cells):
    board = list(DRAW_BOARD)
    for cell in cells:
        board[cell] = " "
    return board


def test_fixed_sqrt_identities():
    assert fixed_sqrt(0) == 0
    assert fixed_sqrt(1 << 8) == 1 << 8


def test_fixed_sqrt_of_four():
    assert fixed_sqrt(1024) == 512


def test_fixed_log_identities():
    assert fixed_log(0) == 0
    assert fixed_log(1 << 8) == 0


def test_fixed_log_of_e_is_about_one():
    assert abs(fixed_log(696) - (1 << 8)) <= 8


def test_fixed_log_below_one_is_negative():
    value = fixed_log(128)
    assert value & (1 << 31)
    assert abs((value & ((1 << 31) - 1)) - 177) <= 8


def test_fixed_log_non_decreasing():
    values = [fixed_log(v) for v in range(300, 3000, 37)]
    assert values == sorted(values)


def test_uct_score_unvisited_is_max():
    assert uct_score(10, 0, 5) == FIXED_MAX


def test_uct_score_single_total_visit_is_score():
    assert uct_score(1, 1, 300) == 300


def test_uct_score_grows_with_total_visits():
    scores = [uct_score(n, 3, 100) for n in range(1, 60)]
    assert scores == sorted(scores)
    assert all(s >= 100 for s in scores)


def test_choose_move_on_finished_board():
    assert check_win(DRAW_BOARD) == "D"
    assert Mcts(iterations=20).choose_move(DRAW_BOARD, "O") == -1


def test_choose_move_on_won_board():
    board = ["X", "X", "X"] + [" "] * 13
    assert Mcts(iterations=20).choose_move(board, "O") == -1


def test_choose_move_single_cell():
    board = _board_with_empty(0)
    assert check_win(board) == " "
    engine = Mcts(iterations=10)
    assert engine.choose_move(board, "X") == 0
    assert engine.nr_active_nodes == 2


def test_choose_move_is_legal_and_keeps_input():
    board = _board_with_empty(0, 5, 10, 15)
    before = list(board)
    move = Mcts(iterations=100).choose_move(board, "O")
    assert move in available_moves(board)
    assert board == before


def test_choose_move_deterministic_for_same_seed():
    board = _board_with_empty(0, 5, 10, 15)
    first = Mcts(iterations=100).choose_move(board, "O")
    second = Mcts(iterations=100).choose_move(board, "O")
    assert first == second


def test_zero_iterations_gives_no_move():
    assert Mcts(iterations=0).choose_move([" "] * 16, "O") == -1