"""Exponentially decaying load averages in 11-bit fixed point."""

from __future__ import annotations

from dataclasses import dataclass

FSHIFT = 11
FIXED_1 = 1 << FSHIFT
EXP_1 = 1884
EXP_5 = 2014
EXP_15 = 2037

_MASK64 = (1 << 64) - 1


def calc_load(load: int, exp: int, active: int) -> int:
    """Blend ``active`` into ``load`` with decay factor ``exp``."""
    newload = (load * exp + active * (FIXED_1 - exp)) & _MASK64
    if active >= load:
        newload = (newload + FIXED_1 - 1) & _MASK64
    return newload // FIXED_1


@dataclass
class Load:
    """One-, five- and fifteen-minute averages."""

    one_min_load: int = 0
    five_min_load: int = 0
    fifteen_min_load: int = 0

    def renew(self, active: int) -> None:
        """Fold a new sample into all three averages."""
        self.one_min_load = calc_load(self.one_min_load, EXP_1, active)
        self.five_min_load = calc_load(self.five_min_load, EXP_5, active)
        self.fifteen_min_load = calc_load(self.fifteen_min_load, EXP_15, active)