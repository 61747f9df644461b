"""Iterative-deepening negamax player with history ordering and a position cache."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from kxo.game import (
    EMPTY,
    N_GRIDS,
    available_moves,
    check_win,
    get_score,
    opponent,
)
from kxo.zobrist import ZobristTable

MAX_SEARCH_DEPTH = 6

_ALPHA = -100000
_BETA = 100000
_WORST = -10000


@dataclass(frozen=True)
class Move:
    """A search result: its score and the chosen cell (-1 for none)."""

    score: int
    move: int


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


class Negamax:
    """Principal-variation negamax searched at depths 2, 4, ... up to a limit."""

    def __init__(
        self, zobrist: ZobristTable | None = None, max_depth: int = MAX_SEARCH_DEPTH
    ) -> None:
        if max_depth < 2:
            raise ValueError("max_depth must be at least 2")
        self.zobrist = zobrist if zobrist is not None else ZobristTable()
        self.max_depth = max_depth
        self.hash_value = 0
        self._history_sum = [0] * N_GRIDS
        self._history_count = [0] * N_GRIDS

    def _history_average(self, move: int) -> int:
        count = self._history_count[move]
        return _trunc_div(self._history_sum[move], count) if count else 0

    def _search(
        self, table: list[str], depth: int, player: str, alpha: int, beta: int
    ) -> Move:
        if depth == 0 or check_win(table) != EMPTY:
            return Move(get_score(table, player), -1)
        entry = self.zobrist.get(self.hash_value)
        if entry is not None:
            return Move(entry.score, entry.move)

        other = opponent(player)
        best_score, best_move = _WORST, -1
        moves = sorted(available_moves(table), key=lambda m: -self._history_average(m))

        for i, move in enumerate(moves):
            key = self.zobrist.key_for(move, player == "X")
            table[move] = player
            self.hash_value ^= key
            if i == 0:
                score = -self._search(table, depth - 1, other, -beta, -alpha).score
            else:
                score = -self._search(table, depth - 1, other, -alpha - 1, -alpha).score
                if alpha < score < beta:
                    score = -self._search(table, depth - 1, other, -beta, -score).score
            self._history_count[move] += 1
            self._history_sum[move] += score
            if score > best_score:
                best_score, best_move = score, move
            table[move] = EMPTY
            self.hash_value ^= key
            alpha = max(alpha, score)
            if alpha >= beta:
                break

        self.zobrist.put(self.hash_value, best_score, best_move)
        return Move(best_score, best_move)

    def predict(self, table: Sequence[str], player: str) -> Move:
        """Return the best move for ``player`` found by the deepest search."""
        self._history_sum = [0] * N_GRIDS
        self._history_count = [0] * N_GRIDS
        board = list(table[:N_GRIDS])
        result = Move(_WORST, -1)
        for depth in range(2, self.max_depth + 1, 2):
            result = self._search(board, depth, player, _ALPHA, _BETA)
            self.zobrist.clear()
        return result