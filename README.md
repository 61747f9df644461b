# kxo

kxo is a tic-tac-toe engine for a 4×4 board, where three in a row wins.
Two computer players play each other. O uses Monte Carlo tree search
(`kxo.mcts.Mcts`). X uses principal-variation negamax with history move
ordering and a Zobrist position cache (`kxo.negamax.Negamax`).

## Installation

```
pip install .
pip install .[test]     # with pytest
```

The package needs nothing outside the standard library.

## Modules

- `kxo.game`: the board as a list of 16 one-character strings (`"X"`,
  `"O"`, `" "`), plus `GameState` (`table`, `turn`, `finish`, `reset()`).
  It provides these functions:
  - `check_win(table)` returns `"X"`, `"O"`, `"D"` for a full board, or `" "` while play goes on.
  - `calculate_win_value(win, player)` gives the result as a fixed-point value with 8 fraction bits.
  - `available_moves(table)` lists the empty cells.
  - `table_compressor(table)` packs the board into 32 bits, two bits per cell (`01` = X, `10` = O).
  - `get_score(table, player)` and `eval_line_segment_score(...)` give the heuristic evaluation.
- `kxo.xoroshiro.Xoroshiro128`: a 128-bit xoroshiro generator with
  `seed()`, `next_u64()` and `jump()`.
- `kxo.zobrist`:
  - `wyhash64_stateless(seed)` is the hash mix.
  - `ZobristTable` holds the per-cell keys (`key_for(index, is_x)`) and a result store (`get`, `put`, `clear`).
- `kxo.load`: `calc_load(load, exp, active)` and `Load`, which keeps 1-, 5-
  and 15-minute exponentially decaying averages in 11-bit fixed point
  (`renew(active)`).
- `kxo.mcts`:
  - `fixed_sqrt`, `fixed_log` and `uct_score` do 32-bit fixed-point arithmetic.
  - `Mcts(iterations=100000, rng=None).choose_move(table, player)` returns a cell index, or -1.
- `kxo.negamax`: `Negamax(zobrist=None, max_depth=6).predict(table, player)`
  searches at depths 2, 4, … up to `max_depth` and returns a
  `Move(score, move)`.
- `kxo.engine.KxoEngine`: runs two games side by side (see below).
- `kxo.viewer`:
  - `table_parser`, `draw_board(table)` and `decode_frame(data)` return a `Frame(load, table1, table2)`.
  - `main()` is the `kxo-view` command.
- `kxo.cpuusage`: `parse_cpu_seconds(stat_line, clk_ticks)`,
  `get_process_cpu_time(pid)` and `main()`, which is the `kxo-cpuusage`
  command.

```python
from kxo.game import GameState, check_win
from kxo.mcts import Mcts
from kxo.negamax import Negamax

state = GameState()
x_move = Negamax().predict(state.table, "X").move
state.table[x_move] = "X"
o_move = Mcts(iterations=2000).choose_move(state.table, "O")
```

## The engine

`KxoEngine` holds two `GameState`s. Each call to `tick()` counts as one
expiry of the game clock. The clock runs only while the engine is open. The
first `open()` starts it, the last `release()` stops it, and the engine can
also be used as a context manager.

On each tick, every unfinished game gets a move from the player whose turn
it is. After that, unless the display flag is `"0"`, a frame goes onto the
byte stream. A frame is the load line (51 ASCII characters) followed by the
two packed boards as 4-byte little-endian words.

When both games are over, what happens depends on the end flag:

- End flag `"0"`: both boards are cleared and play continues.
- Otherwise: the clock stops and `tick()` returns `False` from then on.

`read(count, block=True)` takes bytes off the stream. If the stream is
empty, a non-blocking read raises `BlockingIOError`. A blocking read
advances the clock until data arrives, and raises `BlockingIOError` if the
clock is stopped.

The control flags are written as display, resume and end:

- `state_show()` returns them as `"1 1 0"`.
- `state_store("0 1 0")` sets them.
- `release()` resets the end flag to `"0"`.

The load averages are fed with the time O's search takes, in units of
1024 ns.

## Commands

`kxo-view` runs an engine in the same process. After each move it clears
the screen and prints the time, the load line and both boards. Press Ctrl-P
to turn drawing on or off, and Ctrl-Q to stop. It takes these options:

- `--iterations`: tree-search iterations per move, default 100000.
- `--depth`: deepest negamax search, default 6.
- `--delay`: milliseconds between moves, default 100.

`kxo-cpuusage` reads its own CPU time from `/proc/<pid>/stat`, so it runs on
Linux only. It prints its PID and then, after each interval, a
`CPU Usage: N.NN%` line. It takes these options:

- `--interval`: seconds between reports, default 1.
- `--count`: number of reports, default forever.

## What it does not do

The engine lives inside the Python process that creates it. It does not
run as a background service. It does not offer a device file or a control
file that other processes can open. The viewer therefore cannot attach to
games that are already running elsewhere; it always starts its own.

## Tests

```
pytest
```