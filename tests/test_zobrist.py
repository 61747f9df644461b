import itertools

import pytest

from kxo.game import N_GRIDS
from kxo.zobrist import ZobristEntry, ZobristTable, wyhash64_stateless


def counting_clock():
    counter = itertools.count(1)
    return lambda: next(counter)


def test_wyhash_is_deterministic():
    table = ZobristTable(lambda: 42)
    keys = {table.key_for(i, x) for i in range(N_GRIDS) for x in (False, True)}
    assert keys == {wyhash64_stateless(42)}
    assert wyhash64_stateless(42) != wyhash64_stateless(43)


def test_wyhash_range():
    assert all(0 <= wyhash64_stateless(s) < 1 << 64 for s in range(200))


def test_wyhash_distinguishes_seeds():
    values = {wyhash64_stateless(s) for s in range(200)}
    assert len(values) == 200


def test_keys_reproducible_with_same_clock():
    a = ZobristTable(counting_clock())
    b = ZobristTable(counting_clock())
    assert [a.key_for(i, x) for i in range(N_GRIDS) for x in (False, True)] == [
        b.key_for(i, x) for i in range(N_GRIDS) for x in (False, True)
    ]


def test_keys_come_from_clock_in_order():
    table = ZobristTable(counting_clock())
    assert table.key_for(0, False) == wyhash64_stateless(1)
    assert table.key_for(0, True) == wyhash64_stateless(2)
    assert table.key_for(1, False) == wyhash64_stateless(3)


def test_key_index_out_of_range():
    table = ZobristTable(counting_clock())
    with pytest.raises(IndexError):
        table.key_for(N_GRIDS, True)


def test_get_missing_returns_none():
    assert ZobristTable(counting_clock()).get(123) is None


def test_put_then_get():
    table = ZobristTable(counting_clock())
    table.put(99, 7, 3)
    assert table.get(99) == ZobristEntry(99, 7, 3)
    assert len(table) == 1


def test_latest_put_wins():
    table = ZobristTable(counting_clock())
    table.put(5, 1, 1)
    table.put(5, -4, 9)
    entry = table.get(5)
    assert (entry.score, entry.move) == (-4, 9)


def test_clear_drops_entries_but_keeps_keys():
    table = ZobristTable(counting_clock())
    key = table.key_for(2, True)
    table.put(1, 2, 3)
    table.clear()
    assert table.get(1) is None
    assert len(table) == 0
    assert table.key_for(2, True) == key