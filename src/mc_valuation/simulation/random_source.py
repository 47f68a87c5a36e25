"""
Sources of independent standard-normal draws.

The generator is passed explicitly into every path-generation call; there is
no process-wide random state. A seeded source always yields the same
sequence of draws.
"""

from abc import ABC, abstractmethod
from typing import Optional, Union

import numpy as np

Shape = Union[int, tuple[int, ...]]


class RandomSource(ABC):
    """
    Seedable stream of independent N(0, 1) draws.

    Subclasses implement :meth:`next`. :meth:`standard_normal` fills a block
    by calling :meth:`next` in C (row-major) order, so a bulk draw consumes
    the stream exactly as repeated scalar draws would.
    """

    @abstractmethod
    def next(self) -> float:
        """Draw a single standard-normal value."""
        ...

    def standard_normal(self, shape: Shape) -> np.ndarray:
        """Draw a block of standard-normal values in C order."""
        n_draws = int(np.prod(shape))
        draws = np.fromiter((self.next() for _ in range(n_draws)), dtype=float, count=n_draws)
        return draws.reshape(shape)


class NumpyRandomSource(RandomSource):
    """
    RandomSource backed by a numpy ``Generator`` (PCG64).

    Parameters
    ----------
    seed : int, optional
        Seed for reproducibility. None draws fresh OS entropy.

    Examples
    --------
    >>> source = NumpyRandomSource(seed=31415)
    >>> source.standard_normal((2, 3)).shape
    (2, 3)
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def next(self) -> float:
        return float(self._rng.standard_normal())

    def standard_normal(self, shape: Shape) -> np.ndarray:
        return self._rng.standard_normal(shape)

    def __repr__(self) -> str:
        return f"NumpyRandomSource(seed={self.seed})"
