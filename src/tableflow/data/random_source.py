"""Injectable randomness for shuffling.

Every unseeded shuffle in tableflow draws from one process-wide
:class:`RandomSource`. Tests (or callers wanting a fixed stream) swap it
with :func:`set_default_random_source` or the :func:`using_random_source`
context manager.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator, Optional

import numpy as np


class RandomSource(ABC):
    """Produces uniformly random permutations of ``range(n)``."""

    @abstractmethod
    def permutation(self, n: int) -> np.ndarray:
        """Return a permutation of ``0 .. n-1`` as an int64 array."""
        raise NotImplementedError


class NumpyRandomSource(RandomSource):
    """
    ``RandomSource`` backed by :func:`numpy.random.default_rng`.

    ``Generator.permutation`` is a Fisher-Yates shuffle, so every
    ordering is equally likely. The same seed always yields the same
    sequence of permutations.

    Args:
        seed: Seed for the generator; ``None`` draws fresh OS entropy.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def permutation(self, n: int) -> np.ndarray:
        if n < 0:
            raise ValueError(f"n must be non-negative, got {n}")
        return self._rng.permutation(n).astype(np.int64)

    def __repr__(self) -> str:
        return f"NumpyRandomSource(seed={self.seed!r})"


_DEFAULT_SOURCE: RandomSource = NumpyRandomSource()


def default_random_source() -> RandomSource:
    """Return the process-wide source used by unseeded shuffles."""
    return _DEFAULT_SOURCE


def set_default_random_source(source: Optional[RandomSource]) -> RandomSource:
    """
    Replace the process-wide source and return the previous one.

    Passing ``None`` installs a fresh entropy-seeded source.
    """
    global _DEFAULT_SOURCE
    previous = _DEFAULT_SOURCE
    _DEFAULT_SOURCE = source if source is not None else NumpyRandomSource()
    return previous


@contextmanager
def using_random_source(source: RandomSource) -> Iterator[RandomSource]:
    """Temporarily install ``source`` as the process-wide default."""
    previous = set_default_random_source(source)
    try:
        yield source
    finally:
        set_default_random_source(previous)


def resolve_random_source(
    seed: Optional[int] = None,
    random_source: Optional[RandomSource] = None,
) -> RandomSource:
    """Pick the source for one shuffle: a seed wins, then an explicit source, then the default."""
    if seed is not None:
        return NumpyRandomSource(seed)
    if random_source is not None:
        return random_source
    return default_random_source()
