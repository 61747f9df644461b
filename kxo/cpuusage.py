"""Report this process's CPU usage once per interval."""

from __future__ import annotations

import argparse
import os
import sys
import time

UTIME_FIELD = 13
STIME_FIELD = 14


def parse_cpu_seconds(stat_line: str, clk_ticks: int) -> float:
    """Return user plus system time, in seconds, from a /proc stat line."""
    if clk_ticks <= 0:
        raise ValueError("clk_ticks must be positive")
    tokens = [token for token in stat_line.split(" ") if token]
    if len(tokens) <= STIME_FIELD:
        raise ValueError("stat line has too few fields")
    utime = int(tokens[UTIME_FIELD])
    stime = int(tokens[STIME_FIELD])
    return (utime + stime) / clk_ticks


def get_process_cpu_time(pid: int) -> float:
    """Return the CPU seconds consumed so far by process ``pid``."""
    with open(f"/proc/{pid}/stat", encoding="ascii", errors="replace") as stat:
        line = stat.readline().rstrip("\n")
    return parse_cpu_seconds(line, os.sysconf("SC_CLK_TCK"))


def main(argv: list[str] | None = None) -> int:
    """Print this process's CPU usage after every interval."""
    parser = argparse.ArgumentParser(prog="kxo-cpuusage",
                                     description="Report this process's CPU usage.")
    parser.add_argument("--interval", type=float, default=1.0,
                        help="seconds between reports")
    parser.add_argument("--count", type=int, default=None,
                        help="number of reports (default: forever)")
    args = parser.parse_args(argv)

    pid = os.getpid()
    print(f"My PID: {pid}")

    prev_cpu = get_process_cpu_time(pid)
    prev_time = time.monotonic()
    done = 0
    while args.count is None or done < args.count:
        print("tick", flush=True)
        time.sleep(args.interval)

        curr_cpu = get_process_cpu_time(pid)
        curr_time = time.monotonic()
        delta_time = curr_time - prev_time
        usage = (curr_cpu - prev_cpu) / delta_time * 100.0 if delta_time > 0 else 0.0
        print(f"CPU Usage: {usage:.2f}%", flush=True)

        prev_cpu, prev_time = curr_cpu, curr_time
        done += 1
    return 0


if __name__ == "__main__":
    sys.exit(main())