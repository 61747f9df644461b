"""Monte Carlo tree search player working in 32-bit fixed-point arithmetic."""

from __future__ import annotations

from collections.abc import Sequence

from kxo.game import (
    EMPTY,
    FIXED_MAX,
    FIXED_SCALE_BITS,
    N_GRIDS,
    available_moves,
    calculate_win_value,
    check_win,
    opponent,
)
from kxo.xoroshiro import Xoroshiro128

ITERATIONS = 100000

_MASK32 = 0xFFFFFFFF
_ONE = 1 << FIXED_SCALE_BITS
_HALF = 1 << (FIXED_SCALE_BITS - 1)
_SIGN = 1 << 31


def fixed_sqrt(x: int) -> int:
    """Return the fixed-point square root of ``x``."""
    x &= _MASK32
    if x == 0 or x == _ONE:
        return x
    s = 0
    for i in range((x | 1).bit_length() - 1, -1, -1):
        t = 1 << i
        if ((((s + t) * (s + t)) & _MASK32) >> FIXED_SCALE_BITS) <= x:
            s += t
    return s


def fixed_log(v: int) -> int:
    """Return the fixed-point natural logarithm of ``v``.

    A negative result is flagged by bit 31 with the magnitude in the low bits.
    """
    v &= _MASK32
    if v == 0 or v == _ONE:
        return 0

    numerator = (v - _ONE) & _MASK32
    negative = bool(numerator & _SIGN)
    if negative:
        numerator = (_SIGN - (numerator & (_SIGN - 1))) & _MASK32

    y = ((numerator << FIXED_SCALE_BITS) & _MASK32) // ((v + _ONE) & _MASK32)

    ans = 0
    for i in range(1, 20, 2):
        z = _ONE
        for _ in range(i):
            z = ((z * y) & _MASK32) >> FIXED_SCALE_BITS
        z = ((z << FIXED_SCALE_BITS) & _MASK32) // (i << FIXED_SCALE_BITS)
        ans = (ans + z) & _MASK32
    ans = (ans << 1) & _MASK32
    return ans | _SIGN if negative else ans


EXPLORATION_FACTOR = fixed_sqrt(1 << (FIXED_SCALE_BITS + 1))


def uct_score(n_total: int, n_visits: int, score: int) -> int:
    """Return the selection score of a child visited ``n_visits`` times."""
    if n_visits == 0:
        return FIXED_MAX
    # The accumulated score is used as is; the visit count does not scale it.
    result = score & _MASK32
    log_total = fixed_log((n_total << FIXED_SCALE_BITS) & _MASK32)
    tmp = (EXPLORATION_FACTOR * fixed_sqrt(log_total // n_visits)) & _MASK32
    tmp >>= FIXED_SCALE_BITS
    return (result + tmp) & _MASK32


class _Node:
    __slots__ = ("move", "player", "n_visits", "score", "parent", "children")

    def __init__(self, move: int, player: str, parent: _Node | None = None) -> None:
        self.move = move
        self.player = player
        self.n_visits = 0
        self.score = 0
        self.parent = parent
        self.children: list[_Node] = []


def _select_move(node: _Node) -> _Node | None:
    best_node = None
    best_score = 0
    for child in node.children:
        score = uct_score(node.n_visits, child.n_visits, child.score)
        if score > best_score:
            best_score = score
            best_node = child
    return best_node


def _backpropagate(node: _Node | None, score: int) -> None:
    while node is not None:
        node.n_visits += 1
        node.score = (node.score + score) & _MASK32
        node = node.parent
        score = (1 - score) & _MASK32


class Mcts:
    """Tree-search player whose random playouts share one generator."""

    def __init__(
        self, iterations: int = ITERATIONS, rng: Xoroshiro128 | None = None
    ) -> None:
        self.iterations = iterations
        self.rng = rng if rng is not None else Xoroshiro128()
        self.nr_active_nodes = 0

    def _simulate(self, table: Sequence[str], player: str) -> int:
        board = list(table)
        current = player
        self.rng.jump()
        while moves := available_moves(board):
            move = moves[self.rng.next_u64() % len(moves)]
            board[move] = current
            win = check_win(board)
            if win != EMPTY:
                return calculate_win_value(win, player)
            current = opponent(current)
        return _HALF

    @staticmethod
    def _expand(node: _Node, table: Sequence[str]) -> int:
        child_player = opponent(node.player)
        node.children = [_Node(m, child_player, node) for m in available_moves(table)]
        return len(node.children)

    def choose_move(self, table: Sequence[str], player: str) -> int:
        """Return the cell ``player`` should take, or -1 if there is none."""
        root = _Node(-1, player)
        self.nr_active_nodes = 1
        for _ in range(self.iterations):
            node = root
            board = list(table[:N_GRIDS])
            while True:
                win = check_win(board)
                if win != EMPTY:
                    value = calculate_win_value(win, opponent(node.player))
                    _backpropagate(node, value)
                    break
                if node.n_visits == 0:
                    _backpropagate(node, self._simulate(board, node.player))
                    break
                if not node.children:
                    self.nr_active_nodes += self._expand(node, board)
                selected = _select_move(node)
                if selected is None:
                    return -1
                node = selected
                board[node.move] = opponent(node.player)
        best = max(root.children, key=lambda child: child.n_visits, default=root)
        return best.move