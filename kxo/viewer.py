"""Terminal viewer that runs the two self-playing games and draws their boards."""

from __future__ import annotations

import argparse
import contextlib
import logging
import os
import select
import sys
import time
from collections.abc import Iterator
from dataclasses import dataclass

from kxo.engine import DEFAULT_DELAY_MS, KxoEngine
from kxo.game import BOARD_SIZE, EMPTY, N_GRIDS
from kxo.mcts import ITERATIONS, Mcts
from kxo.negamax import MAX_SEARCH_DEPTH, Negamax

logger = logging.getLogger(__name__)

LOAD_LINE_SIZE = 51
FRAME_SIZE = LOAD_LINE_SIZE + 2 * 4

CTRL_P = b"\x10"
CTRL_Q = b"\x11"
CLEAR_SCREEN = "\033[H\033[J"

_CELL_MARKS = {0b00: EMPTY, 0b01: "X", 0b10: "O"}


@dataclass(frozen=True)
class Frame:
    """One update from the engine: the load line and both packed boards."""

    load: str
    table1: int
    table2: int


def table_parser(table: int, k: int) -> str:
    """Return the mark stored for cell ``k`` of a packed board."""
    grid_val = (table >> (k << 1)) & 0b11
    mark = _CELL_MARKS.get(grid_val)
    if mark is None:
        logger.warning("Unexpect value %d", grid_val)
        return EMPTY
    return mark


def draw_board(table: int) -> str:
    """Return the text drawing of a packed board."""
    separator = "-" * ((BOARD_SIZE << 1) - 1)
    rows = []
    for row in range(N_GRIDS // BOARD_SIZE):
        cells = (table_parser(table, row * BOARD_SIZE + col) for col in range(BOARD_SIZE))
        rows.append("|".join(cells) + "\n" + separator + "\n")
    return "\n\n" + "".join(rows)


def decode_frame(data: bytes) -> Frame:
    """Split one frame of the engine's stream into its parts."""
    if len(data) < FRAME_SIZE:
        raise ValueError(f"frame needs {FRAME_SIZE} bytes, got {len(data)}")
    load = data[:LOAD_LINE_SIZE].decode("ascii", errors="replace")
    table1 = int.from_bytes(data[LOAD_LINE_SIZE : LOAD_LINE_SIZE + 4], "little")
    table2 = int.from_bytes(data[LOAD_LINE_SIZE + 4 : FRAME_SIZE], "little")
    return Frame(load, table1, table2)


@dataclass
class _ViewState:
    display: bool = True
    end: bool = False


def _handle_key(engine: KxoEngine, view: _ViewState, key: bytes) -> None:
    flags = list(engine.state_show())
    if key == CTRL_P:
        flags[0] = "1" if flags[0] == "0" else "0"
        view.display = not view.display
        engine.state_store("".join(flags))
        if not view.display:
            print("Stopping to display the chess board...", flush=True)
    elif key == CTRL_Q:
        flags[4] = "1"
        view.display = False
        view.end = True
        engine.state_store("".join(flags))
        print("Stopping the kernel space tic-tac-toe game...", flush=True)


def _render(frame: Frame) -> str:
    now = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())
    return (
        CLEAR_SCREEN
        + f"Time: {now}\n"
        + frame.load
        + draw_board(frame.table1)
        + draw_board(frame.table2)
    )


@contextlib.contextmanager
def _raw_mode(fd: int) -> Iterator[None]:
    if not os.isatty(fd):
        yield
        return
    import termios

    original = termios.tcgetattr(fd)
    raw = termios.tcgetattr(fd)
    raw[3] &= ~(termios.ECHO | termios.ICANON)
    termios.tcsetattr(fd, termios.TCSAFLUSH, raw)
    try:
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSAFLUSH, original)


def main(argv: list[str] | None = None) -> int:
    """Run both games and draw them; Ctrl-P toggles drawing, Ctrl-Q stops."""
    parser = argparse.ArgumentParser(
        prog="kxo-view", description="Watch two self-playing tic-tac-toe games."
    )
    parser.add_argument("--iterations", type=int, default=ITERATIONS,
                        help="tree-search iterations per move")
    parser.add_argument("--depth", type=int, default=MAX_SEARCH_DEPTH,
                        help="deepest negamax search")
    parser.add_argument("--delay", type=int, default=DEFAULT_DELAY_MS,
                        help="milliseconds between moves")
    args = parser.parse_args(argv)

    engine = KxoEngine(
        mcts=Mcts(iterations=args.iterations),
        negamax=Negamax(max_depth=args.depth),
        delay_ms=args.delay,
    )
    view = _ViewState()
    fd = sys.stdin.fileno()
    watch_input = True

    with _raw_mode(fd), engine:
        while not view.end:
            watched = [fd] if watch_input else []
            ready, _, _ = select.select(watched, [], [], engine.delay_ms / 1000)
            if ready:
                key = os.read(fd, 1)
                if key:
                    _handle_key(engine, view, key)
                else:
                    watch_input = False
                continue
            engine.tick()
            if view.display and len(engine) >= FRAME_SIZE:
                frame = decode_frame(engine.read(FRAME_SIZE, block=False))
                sys.stdout.write(_render(frame))
                sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())