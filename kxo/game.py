"""Board model, win detection and static evaluation for the kxo game."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

BOARD_SIZE = 4
GOAL = 3
ALLOW_EXCEED = True
N_GRIDS = BOARD_SIZE * BOARD_SIZE
LOAD_SIZE = 64

FIXED_SCALE_BITS = 8
FIXED_MAX = 0xFFFFFFFF
FIXED_MIN = 0

DRAW_SIZE = N_GRIDS + BOARD_SIZE
DRAWBUFFER_SIZE = (
    ((BOARD_SIZE * (BOARD_SIZE + 1)) << 1)
    + BOARD_SIZE * BOARD_SIZE
    + ((BOARD_SIZE << 1) + 1)
    + 1
)

EMPTY = " "
DRAW = "D"


def get_index(i: int, j: int) -> int:
    """Return the flat index of row ``i``, column ``j``."""
    return i * BOARD_SIZE + j


def opponent(player: str) -> str:
    """Return the other mark, swapping 'O' and 'X'."""
    return chr(ord(player) ^ ord("O") ^ ord("X"))


@dataclass(frozen=True)
class Line:
    """A direction on the board and the range of start cells for a segment."""

    i_shift: int
    j_shift: int
    i_lower_bound: int
    j_lower_bound: int
    i_upper_bound: int
    j_upper_bound: int

    def starts(self):
        """Yield every (row, column) where a GOAL-long segment can start."""
        for i in range(self.i_lower_bound, self.i_upper_bound):
            for j in range(self.j_lower_bound, self.j_upper_bound):
                yield i, j

    def cells(self, i: int, j: int):
        """Yield the flat indices of the segment starting at (i, j)."""
        for k in range(GOAL):
            yield get_index(i + k * self.i_shift, j + k * self.j_shift)


LINES: tuple[Line, ...] = (
    Line(0, 1, 0, 0, BOARD_SIZE, BOARD_SIZE - GOAL + 1),  # row
    Line(1, 0, 0, 0, BOARD_SIZE - GOAL + 1, BOARD_SIZE),  # column
    Line(1, 1, 0, 0, BOARD_SIZE - GOAL + 1, BOARD_SIZE - GOAL + 1),  # primary
    Line(1, -1, 0, GOAL - 1, BOARD_SIZE - GOAL + 1, BOARD_SIZE),  # secondary
)


def _empty_table() -> list[str]:
    return [EMPTY] * N_GRIDS


@dataclass
class GameState:
    """One game: its board, whose turn it is and the finish flag."""

    table: list[str] = field(default_factory=_empty_table)
    turn: str = EMPTY
    finish: int = 0

    def reset(self) -> None:
        """Clear the board and the turn."""
        self.table = _empty_table()
        self.turn = EMPTY
        self.finish = 0


def _segment_winner(table: Sequence[str], line: Line, i: int, j: int) -> str:
    marks = {table[idx] for idx in line.cells(i, j)}
    if len(marks) == 1:
        (mark,) = marks
        return mark
    return EMPTY


def check_win(table: Sequence[str]) -> str:
    """Return the winning mark, 'D' for a full board, or ' ' if play goes on."""
    for line in LINES:
        for i, j in line.starts():
            winner = _segment_winner(table, line, i, j)
            if winner != EMPTY:
                return winner
    if any(cell == EMPTY for cell in table[:N_GRIDS]):
        return EMPTY
    return DRAW


def calculate_win_value(win: str, player: str) -> int:
    """Return the fixed-point value of outcome ``win`` for ``player``."""
    if win == player:
        return 1 << FIXED_SCALE_BITS
    if win == opponent(player):
        return 0
    return 1 << (FIXED_SCALE_BITS - 1)


def available_moves(table: Sequence[str]) -> list[int]:
    """Return the indices of the empty cells, in board order."""
    return [idx for idx, cell in enumerate(table[:N_GRIDS]) if cell == EMPTY]


def table_compressor(table: Sequence[str]) -> int:
    """Pack the board into 32 bits, two bits per cell (01 = X, 10 = O)."""
    packed = 0
    for idx, cell in enumerate(table[:N_GRIDS]):
        if cell == "X":
            packed |= 0b01 << (idx << 1)
        elif cell == "O":
            packed |= 0b10 << (idx << 1)
    return packed


def eval_line_segment_score(
    table: Sequence[str], player: str, i: int, j: int, line: Line
) -> int:
    """Score one segment: positive for ``player``'s marks, negative for others."""
    score = 0
    for idx in line.cells(i, j):
        cell = table[idx]
        if cell == player:
            if score < 0:
                return 0
            score = score * 10 if score else 1
        elif cell != EMPTY:
            if score > 0:
                return 0
            score = score * 10 if score else -1
    return score


def get_score(table: Sequence[str], player: str) -> int:
    """Return the heuristic value of the board for ``player``."""
    return sum(
        eval_line_segment_score(table, player, i, j, line)
        for line in LINES
        for i, j in line.starts()
    )