"""Deterministic pseudo-random streams keyed by strings.

A 32-bit polynomial rolling hash of the seed string primes a 31-bit linear
congruential generator. Each :class:`SeededRandom` owns its state, so a
stream built for one call never leaks into another; the same seed string
always yields the same sequence, in any process.
"""

from __future__ import annotations

from typing import TypeVar

T = TypeVar("T")

_HASH_MASK = 0xFFFFFFFF
_LCG_MULTIPLIER = 1103515245
_LCG_INCREMENT = 12345
_LCG_MODULUS = 1 << 31


def stable_hash(seed: str) -> int:
    """32-bit polynomial rolling hash (``h * 31 + ord(c)``)."""
    h = 0
    for char in seed:
        h = (h * 31 + ord(char)) & _HASH_MASK
    return h


def seed_key(*parts: object) -> str:
    """Join seed components with ``-`` (``seed_key("ts", "home_value", "78704")``)."""
    return "-".join(str(p) for p in parts)


class SeededRandom:
    """Uniform floats in ``[0, 1)`` from a string seed."""

    __slots__ = ("_state",)

    def __init__(self, seed: str) -> None:
        self._state = stable_hash(seed)

    def random(self) -> float:
        self._state = (self._state * _LCG_MULTIPLIER + _LCG_INCREMENT) % _LCG_MODULUS
        return self._state / _LCG_MODULUS

    def uniform(self, low: float, high: float) -> float:
        """Uniform draw in ``[low, high)``."""
        return low + (high - low) * self.random()

    def choice(self, options: tuple[T, ...]) -> T:
        """Pick one of *options*."""
        return options[int(self.random() * len(options))]
