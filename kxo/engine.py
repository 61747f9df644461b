"""Two self-playing games driven by a clock tick, with a byte stream of boards."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable

from kxo.game import (
    EMPTY,
    LOAD_SIZE,
    N_GRIDS,
    GameState,
    check_win,
    table_compressor,
)
from kxo.load import Load
from kxo.mcts import Mcts
from kxo.negamax import Negamax

logger = logging.getLogger(__name__)

DEFAULT_DELAY_MS = 100
FIFO_SIZE = 4096
LOAD_FORMAT = "1min: {:10d} 5min: {:10d} 15min: {:10d}"


def _scan_chars(text: str, count: int) -> list[str]:
    """Read up to ``count`` single characters separated by optional whitespace."""
    found: list[str] = []
    pos = 0
    for k in range(count):
        if k:
            while pos < len(text) and text[pos].isspace():
                pos += 1
        if pos >= len(text):
            break
        found.append(text[pos])
        pos += 1
    return found


class KxoEngine:
    """Runs two games, O by tree search and X by negamax, and streams their boards.

    Each call to :meth:`tick` stands for one expiry of the game clock. The
    clock runs only while the engine is open and the games are not ended.
    Output is a byte stream: the load line followed by both packed boards.
    """

    def __init__(
        self,
        mcts: Mcts | None = None,
        negamax: Negamax | None = None,
        delay_ms: int = DEFAULT_DELAY_MS,
        fifo_size: int = FIFO_SIZE,
        clock: Callable[[], int] = time.perf_counter_ns,
    ) -> None:
        self.mcts = mcts if mcts is not None else Mcts()
        self.negamax = negamax if negamax is not None else Negamax()
        self.delay_ms = delay_ms
        self.games: tuple[GameState, GameState] = (GameState(), GameState())
        self.load = Load()
        self.display = "1"
        self.resume = "1"
        self.end = "0"
        self.open_count = 0
        self._fifo = bytearray()
        self._fifo_size = fifo_size
        self._clock = clock
        self._timer_armed = False
        self._lock = threading.RLock()

    @property
    def timer_armed(self) -> bool:
        """Whether the next :meth:`tick` will advance the games."""
        return self._timer_armed

    def __len__(self) -> int:
        return len(self._fifo)

    # Control attribute

    def state_show(self) -> str:
        """Return the control flags as 'display resume end'."""
        with self._lock:
            # The attribute buffer holds five characters; the newline is cut off.
            return f"{self.display} {self.resume} {self.end}\n"[:5]

    def state_store(self, text: str) -> int:
        """Set the control flags from 'display resume end'; return len(text)."""
        with self._lock:
            values = _scan_chars(text, 3)
            for name, value in zip(("display", "resume", "end"), values):
                setattr(self, name, value)
        return len(text)

    # Output stream

    def _push(self, data: bytes) -> int:
        room = self._fifo_size - len(self._fifo)
        taken = data[: max(room, 0)]
        self._fifo.extend(taken)
        if len(taken) < len(data):
            logger.warning("%d bytes dropped", len(data) - len(taken))
        return len(taken)

    def produce_board(self) -> None:
        """Append the load line and both packed boards to the stream."""
        with self._lock:
            line = LOAD_FORMAT.format(
                self.load.one_min_load,
                self.load.five_min_load,
                self.load.fifteen_min_load,
            )
            self._push(line.encode("ascii")[: LOAD_SIZE - 1])
            for game in self.games:
                packed = table_compressor(game.table)
                self._push(packed.to_bytes(4, "little"))

    def read(self, count: int = FIFO_SIZE, block: bool = True) -> bytes:
        """Take up to ``count`` bytes from the stream.

        When the stream is empty a non-blocking read raises BlockingIOError;
        a blocking read advances the clock until data arrives, and raises
        BlockingIOError if the clock is stopped.
        """
        if count < 0:
            raise ValueError("count must not be negative")
        with self._lock:
            while not self._fifo:
                if not block:
                    raise BlockingIOError("no data available")
                if not self.tick():
                    raise BlockingIOError("no data and the game clock is stopped")
            data = bytes(self._fifo[:count])
            del self._fifo[:count]
            return data

    # Players

    def _play_o(self, game: GameState) -> None:
        start = self._clock()
        move = self.mcts.choose_move(game.table, "O")
        if move != -1 and game.turn == "O":
            game.table[move] = "O"
        game.turn = "X"
        game.finish = 1
        elapsed_us = max(self._clock() - start, 0) >> 10
        self.load.renew(elapsed_us)

    def _play_x(self, game: GameState) -> None:
        move = self.negamax.predict(game.table, "X").move
        if move != -1 and game.turn == "X":
            game.table[move] = "X"
        game.turn = "O"
        game.finish = 1

    def _draw_board(self) -> None:
        if self.display == "0":
            return
        self.produce_board()

    # Clock

    def tick(self) -> bool:
        """Advance both games by one clock expiry; return False if the clock is stopped."""
        with self._lock:
            if not self._timer_armed:
                return False
            wins = [check_win(game.table) for game in self.games]
            if EMPTY in wins:
                pending: list[Callable[[], None]] = []
                draw = False
                for game, win in zip(self.games, wins):
                    if win != EMPTY:
                        continue
                    player = self._play_o if game.turn == "O" else self._play_x
                    pending.append(lambda g=game, p=player: p(g))
                    if game.finish and game.turn in ("O", "X"):
                        game.finish = 0
                    draw = True
                for work in pending:
                    work()
                if draw:
                    self._draw_board()
            else:
                if self.display == "1":
                    self.produce_board()
                if self.end == "0":
                    for game in self.games:
                        game.table[:] = [EMPTY] * N_GRIDS
                else:
                    self._timer_armed = False
                for number, win in enumerate(wins, start=1):
                    logger.info("game%d: %s win", number, win)
            return True

    # Open / release

    def open(self) -> None:
        """Register a reader; the first one starts the clock."""
        with self._lock:
            self.open_count += 1
            if self.open_count == 1:
                self._timer_armed = True

    def release(self) -> None:
        """Unregister a reader; the last one stops the clock."""
        with self._lock:
            if self.open_count == 0:
                raise RuntimeError("engine is not open")
            self.open_count -= 1
            if self.open_count == 0:
                self._timer_armed = False
            self.end = "0"

    def __enter__(self) -> KxoEngine:
        self.open()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()