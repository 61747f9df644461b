"""A small 128-bit xoroshiro pseudo-random generator."""

from __future__ import annotations

_MASK64 = (1 << 64) - 1
_JUMP = (0xDF900294D8F554A5, 0x170865DF4B3201FC)

DEFAULT_SEED = (314159265, 1618033989)


def _rotl(x: int, k: int) -> int:
    return ((x << k) | (x >> (64 - k))) & _MASK64


class Xoroshiro128:
    """Generator with two 64-bit words of state."""

    def __init__(self, s0: int = DEFAULT_SEED[0], s1: int = DEFAULT_SEED[1]) -> None:
        self.state: tuple[int, int] = (0, 0)
        self.seed(s0, s1)

    def seed(self, s0: int, s1: int) -> None:
        """Set the state words."""
        self.state = (s0 & _MASK64, s1 & _MASK64)

    def next_u64(self) -> int:
        """Return the next 64-bit output and advance the state."""
        s0, s1 = self.state
        result = (_rotl((s0 + s1) & _MASK64, 24) + s0) & _MASK64
        s1 ^= s0
        self.state = (
            _rotl(s0, 24) ^ s1 ^ ((s1 << 16) & _MASK64),
            _rotl(s1, 37),
        )
        return result

    def jump(self) -> None:
        """Advance the state by the generator's fixed jump distance."""
        s0 = s1 = 0
        for word in _JUMP:
            for bit in range(64):
                if word & (1 << bit):
                    s0 ^= self.state[0]
                    s1 ^= self.state[1]
                self.next_u64()
        self.state = (s0, s1)