"""Zobrist keys and a transposition table for board positions."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from kxo.game import N_GRIDS

HASH_TABLE_SIZE = 100003

_MASK64 = (1 << 64) - 1


def wyhash64_stateless(seed: int) -> int:
    """Return the wyhash mix of ``seed`` advanced by the wyhash increment."""
    seed = (seed + 0x60BEE2BEE120FC15) & _MASK64
    tmp = seed * 0xA3B195354A39B70D
    m1 = ((tmp >> 64) ^ tmp) & _MASK64
    tmp = m1 * 0x1B03738712FAD5C9
    return ((tmp >> 64) ^ tmp) & _MASK64


@dataclass
class ZobristEntry:
    """A stored search result for one position key."""

    key: int
    score: int
    move: int


class ZobristTable:
    """Per-cell random keys plus a store of search results by position key."""

    def __init__(self, clock: Callable[[], int] = time.monotonic_ns) -> None:
        self._keys = [
            (wyhash64_stateless(clock()), wyhash64_stateless(clock()))
            for _ in range(N_GRIDS)
        ]
        self._entries: dict[int, ZobristEntry] = {}

    def key_for(self, index: int, is_x: bool) -> int:
        """Return the random key for a mark on cell ``index``."""
        return self._keys[index][int(bool(is_x))]

    def get(self, key: int) -> ZobristEntry | None:
        """Return the most recent entry stored under ``key``, if any."""
        return self._entries.get(key)

    def put(self, key: int, score: int, move: int) -> None:
        """Store a result for ``key``; it takes precedence over older ones."""
        self._entries[key] = ZobristEntry(key, score, move)

    def clear(self) -> None:
        """Drop every stored entry; the cell keys are kept."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)