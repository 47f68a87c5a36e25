"""
Time discretization for Monte Carlo simulation.

A TimeGrid is an immutable, strictly increasing sequence of simulation
times t0 < t1 < ... < tN with step sizes Δt_i = t_{i+1} - t_i.

See: Glasserman (2003) Ch. 3 - Generating sample paths
"""

import bisect
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence

import numpy as np

from mc_valuation.config.settings import SETTINGS
from mc_valuation.exceptions import InvalidGridError


@dataclass(frozen=True)
class TimeGrid:
    """
    Immutable ordered sequence of simulation times.

    Attributes
    ----------
    times : tuple[float, ...]
        Grid times, strictly increasing

    Examples
    --------
    >>> grid = TimeGrid.uniform(initial_time=0.0, n_steps=10, dt=0.1)
    >>> grid.n_steps
    10
    >>> grid.time(5)
    0.5
    """

    times: tuple[float, ...]

    def __init__(self, times: Sequence[float]):
        values = tuple(float(t) for t in times)
        if len(values) == 0:
            raise InvalidGridError("CRITICAL: time grid cannot be empty")
        if not all(np.isfinite(values)):
            raise InvalidGridError(f"CRITICAL: time grid contains non-finite times: {values}")
        steps = np.diff(values)
        if np.any(steps <= 0):
            bad = int(np.argmax(steps <= 0))
            raise InvalidGridError(
                f"CRITICAL: time steps must be > 0, got Δt[{bad}] = {steps[bad]}"
            )
        object.__setattr__(self, "times", values)

    @classmethod
    def uniform(cls, initial_time: float, n_steps: int, dt: float) -> "TimeGrid":
        """
        Build a grid of n_steps uniform steps of size dt.

        Times are computed as initial_time + i * dt (not by accumulation),
        so time(i) is exactly i * dt for initial_time = 0.

        Raises
        ------
        InvalidGridError
            If n_steps < 0 or dt <= 0
        """
        if n_steps < 0:
            raise InvalidGridError(f"CRITICAL: n_steps must be >= 0, got {n_steps}")
        if not dt > 0:
            raise InvalidGridError(f"CRITICAL: dt must be > 0, got {dt}")
        return cls(initial_time + i * dt for i in range(n_steps + 1))

    @property
    def n_steps(self) -> int:
        """Number of time steps."""
        return len(self.times) - 1

    @property
    def n_times(self) -> int:
        """Number of grid points (n_steps + 1)."""
        return len(self.times)

    @property
    def initial_time(self) -> float:
        return self.times[0]

    @property
    def last_time(self) -> float:
        return self.times[-1]

    @property
    def time_steps(self) -> np.ndarray:
        """Step sizes Δt_i, shape (n_steps,)."""
        return np.diff(np.asarray(self.times))

    def time(self, index: int) -> float:
        """Time value at grid index."""
        if index < 0 or index >= self.n_times:
            raise IndexError(f"time index must be in [0, {self.n_times}), got {index}")
        return self.times[index]

    def time_step(self, index: int) -> float:
        """Step size between grid index and index + 1."""
        if index < 0 or index >= self.n_steps:
            raise IndexError(f"step index must be in [0, {self.n_steps}), got {index}")
        return self.times[index + 1] - self.times[index]

    def time_index(self, time: float) -> Optional[int]:
        """
        Index of the grid point equal to time, or None if not on the grid.

        Times within SETTINGS.validation.time_tolerance of a grid point match it.
        """
        tolerance = SETTINGS.validation.time_tolerance
        index = self.time_index_nearest_less_or_equal(time)
        if index is not None and abs(self.times[index] - time) <= tolerance:
            return index
        if index is not None and index + 1 < self.n_times:
            if abs(self.times[index + 1] - time) <= tolerance:
                return index + 1
        return None

    def time_index_nearest_less_or_equal(self, time: float) -> Optional[int]:
        """Largest index i with times[i] <= time, or None if time < t0."""
        index = bisect.bisect_right(self.times, time + SETTINGS.validation.time_tolerance) - 1
        return index if index >= 0 else None

    def contains(self, time: float) -> bool:
        """Whether time lies within [t0, tN] (up to the time tolerance)."""
        tolerance = SETTINGS.validation.time_tolerance
        return self.initial_time - tolerance <= time <= self.last_time + tolerance

    def __len__(self) -> int:
        return self.n_times

    def __iter__(self) -> Iterator[float]:
        return iter(self.times)
