"""
rng.py

Deterministic random source for the order book simulator.

We use the Mulberry32 generator (a 32-bit xorshift-multiply mix). Python
ints are unbounded, so every step is masked back to 32 bits to keep the
stream bit-identical to the usual unsigned 32-bit implementation.
"""

from __future__ import annotations

from typing import Iterator

MASK32 = 0xFFFFFFFF
GOLDEN_GAMMA = 0x6D2B79F5
TWO_32 = 4294967296.0


def imul(a: int, b: int) -> int:
    """
    32x32 -> 32 truncating multiply.
    """
    return (a * b) & MASK32


def coerce_seed(seed) -> int:
    """
    Map any integer-like seed into a nonzero unsigned 32-bit value.
    """
    s = int(seed) & MASK32
    return s if s != 0 else 1


class Mulberry32:
    """
    Seeded uniform generator on [0, 1).

    Each instance owns its own state, so two generators built from the
    same seed produce the same stream without interfering.
    """

    def __init__(self, seed: int) -> None:
        self.seed = int(seed) & MASK32
        self._t = self.seed

    def reset(self) -> None:
        """
        Restart the stream from the seed.
        """
        self._t = self.seed

    def next_u32(self) -> int:
        self._t = (self._t + GOLDEN_GAMMA) & MASK32
        t = self._t
        x = imul(t ^ (t >> 15), t | 1)
        x ^= (x + imul(x ^ (x >> 7), x | 61)) & MASK32
        return (x ^ (x >> 14)) & MASK32

    def random(self) -> float:
        return self.next_u32() / TWO_32

    def __iter__(self) -> Iterator[float]:
        while True:
            yield self.random()
