import os

import pytest

from kxo.cpuusage import get_process_cpu_time, main, parse_cpu_seconds

STAT_LINE = "1234 (python3) S 1 1234 1234 0 -1 4194304 100 0 0 0 250 50 0 0 20 0 1 0"


def test_parse_cpu_seconds():
    assert parse_cpu_seconds(STAT_LINE, 100) == pytest.approx(3.0)


def test_parse_cpu_seconds_collapses_repeated_spaces():
    spaced = STAT_LINE.replace(" ", "  ")
    assert parse_cpu_seconds(spaced, 100) == parse_cpu_seconds(STAT_LINE, 100)


def test_parse_cpu_seconds_scales_with_ticks():
    assert parse_cpu_seconds(STAT_LINE, 50) == pytest.approx(
        2 * parse_cpu_seconds(STAT_LINE, 100)
    )


def test_parse_cpu_seconds_too_few_fields():
    with pytest.raises(ValueError):
        parse_cpu_seconds("1234 (python3) S 1 2 3", 100)


def test_parse_cpu_seconds_bad_ticks():
    with pytest.raises(ValueError):
        parse_cpu_seconds(STAT_LINE, 0)


def test_get_process_cpu_time_is_monotonic():
    first = get_process_cpu_time(os.getpid())
    sum(i * i for i in range(200000))
    second = get_process_cpu_time(os.getpid())
    assert 0 <= first <= second


def test_get_process_cpu_time_missing_process():
    with pytest.raises(OSError):
        get_process_cpu_time(-1)


def test_main_reports(capsys):
    assert main(["--interval", "0", "--count", "2"]) == 0
    out = capsys.readouterr().out
    assert f"My PID: {os.getpid()}" in out
    assert out.count("CPU Usage:") == 2