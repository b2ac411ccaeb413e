"""Seeded random number generator for deterministic game simulation.

Implements the mulberry32 generator on a single 32-bit integer state.
Every draw is a pure function of that state, so a session can be saved
and restored bit-exactly via :meth:`GameRNG.get_state` and
:meth:`GameRNG.set_state`.  One instance is shared by every system in a
game session and it cannot be forked.
"""

from __future__ import annotations

import math
from typing import Sequence, TypeVar

T = TypeVar("T")

_MASK32 = 0xFFFFFFFF
_INCREMENT = 0x6D2B79F5
_TWO_POW_32 = 4294967296.0


def _imul(a: int, b: int) -> int:
    """32-bit wrapping multiply of two unsigned 32-bit integers."""
    return (a * b) & _MASK32


class GameRNG:
    """Deterministic mulberry32 RNG with a serializable 32-bit state.

    Parameters
    ----------
    seed:
        Integer seed.  Only the low 32 bits are used.
    """

    def __init__(self, seed: int) -> None:
        self._seed = seed
        self._state = seed & _MASK32

    # -- public properties ---------------------------------------------------

    @property
    def seed(self) -> int:
        """Return the seed this RNG was initialised with."""
        return self._seed

    # -- state ---------------------------------------------------------------

    def get_state(self) -> int:
        """Return the current internal state as an unsigned 32-bit integer."""
        return self._state

    def set_state(self, state: int) -> None:
        """Restore a state previously obtained from :meth:`get_state`."""
        self._state = state & _MASK32

    # -- core random methods -------------------------------------------------

    def random_float(self) -> float:
        """Return a random float in the half-open interval ``[0.0, 1.0)``."""
        self._state = (self._state + _INCREMENT) & _MASK32
        s = self._state
        t = _imul(s ^ (s >> 15), s | 1)
        t = ((t + _imul(t ^ (t >> 7), t | 61)) & _MASK32) ^ t
        return ((t ^ (t >> 14)) & _MASK32) / _TWO_POW_32

    def random_int(self, low: int, high: int) -> int:
        """Return a random integer *N* such that ``low <= N <= high``."""
        return math.floor(self.random_float() * (high - low + 1)) + low

    def random_range(self, low: float, high: float) -> float:
        """Return a random float in ``[low, high)``."""
        return self.random_float() * (high - low) + low

    def gaussian(self, mean: float = 0.0, stddev: float = 1.0) -> float:
        """Return a normally distributed sample (Box-Muller transform)."""
        u1 = self.random_float()
        u2 = self.random_float()
        z = math.sqrt(-2.0 * math.log(u1 or 0.0001)) * math.cos(2.0 * math.pi * u2)
        return z * stddev + mean

    def chance(self, probability: float) -> bool:
        """Return ``True`` with the given probability."""
        return self.random_float() < probability

    def random_choice(self, seq: Sequence[T]) -> T:
        """Return a random element from a non-empty sequence."""
        return seq[math.floor(self.random_float() * len(seq))]

    def shuffle(self, lst: list[T]) -> None:
        """Shuffle *lst* in-place (Fisher-Yates, walking from the end)."""
        for i in range(len(lst) - 1, 0, -1):
            j = math.floor(self.random_float() * (i + 1))
            lst[i], lst[j] = lst[j], lst[i]

    def weighted_index(self, weights: Sequence[float]) -> int:
        """Pick an index with probability proportional to its weight.

        Scans linearly and stops at the first non-positive residual, so
        ties resolve by list order.  Falls back to the last index.
        """
        r = self.random_float() * sum(weights)
        for i, w in enumerate(weights):
            r -= w
            if r <= 0:
                return i
        return len(weights) - 1

    # -- dunder helpers ------------------------------------------------------

    def __repr__(self) -> str:
        return f"GameRNG(seed={self._seed}, state={self._state})"
