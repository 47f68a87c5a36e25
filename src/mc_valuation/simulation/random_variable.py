"""
Random variables realised across a Monte Carlo ensemble.

A PerPathVariable holds one float per path. Every operation returns a new
instance; the wrapped array is read-only.

[T1] Monte Carlo estimate: E[X] ≈ mean(X), SE = std(X) / √N
"""

from typing import Callable, Optional, Union

import numpy as np

from mc_valuation.exceptions import DimensionMismatchError

Operand = Union[float, "PerPathVariable"]


class PerPathVariable:
    """
    Realisation of a random variable on each simulated path.

    Parameters
    ----------
    values : array_like
        One value per path, shape (n_paths,)
    time : float, optional
        Filtration time the variable is measurable at (informational)

    Examples
    --------
    >>> payoff = PerPathVariable([95.0, 110.0, 130.0]).sub(100.0).floor(0.0)
    >>> payoff.values.tolist()
    [0.0, 10.0, 30.0]
    >>> payoff.mean()
    13.333333333333334
    """

    __slots__ = ("_values", "time")

    def __init__(self, values: np.ndarray, time: Optional[float] = None):
        array = np.array(values, dtype=float, copy=True)
        if array.ndim != 1 or array.size == 0:
            raise DimensionMismatchError(
                f"CRITICAL: per-path values must be a non-empty 1-D array, got shape {array.shape}"
            )
        array.setflags(write=False)
        self._values = array
        self.time = time

    @classmethod
    def constant(cls, value: float, n_paths: int, time: Optional[float] = None) -> "PerPathVariable":
        """Deterministic variable taking the same value on every path."""
        if n_paths < 1:
            raise DimensionMismatchError(f"CRITICAL: n_paths must be >= 1, got {n_paths}")
        return cls(np.full(n_paths, float(value)), time=time)

    @property
    def values(self) -> np.ndarray:
        return self._values

    @property
    def n_paths(self) -> int:
        return self._values.size

    @property
    def is_deterministic(self) -> bool:
        """True if all paths carry the same value."""
        return bool(np.all(self._values == self._values[0]))

    # -------------------------------------------------------------------------
    # Elementwise arithmetic
    # -------------------------------------------------------------------------

    def _operand(self, other: Operand) -> Union[float, np.ndarray]:
        if isinstance(other, PerPathVariable):
            if other.n_paths != self.n_paths:
                raise DimensionMismatchError(
                    f"CRITICAL: path count mismatch: {self.n_paths} vs {other.n_paths}"
                )
            return other._values
        return float(other)

    def _derive(self, values: np.ndarray, other: Optional[Operand] = None) -> "PerPathVariable":
        time = self.time
        if isinstance(other, PerPathVariable) and other.time is not None:
            time = other.time if time is None else max(time, other.time)
        return PerPathVariable(values, time=time)

    def add(self, other: Operand) -> "PerPathVariable":
        return self._derive(self._values + self._operand(other), other)

    def sub(self, other: Operand) -> "PerPathVariable":
        return self._derive(self._values - self._operand(other), other)

    def mult(self, other: Operand) -> "PerPathVariable":
        return self._derive(self._values * self._operand(other), other)

    def div(self, other: Operand) -> "PerPathVariable":
        return self._derive(self._values / self._operand(other), other)

    def floor(self, lower: float) -> "PerPathVariable":
        """Elementwise max(x, lower)."""
        return self._derive(np.maximum(self._values, lower))

    def cap(self, upper: float) -> "PerPathVariable":
        """Elementwise min(x, upper)."""
        return self._derive(np.minimum(self._values, upper))

    def apply(self, func: Callable[[np.ndarray], np.ndarray]) -> "PerPathVariable":
        """Apply a vectorised function to the path values."""
        result = np.asarray(func(self._values), dtype=float)
        if result.shape != self._values.shape:
            raise DimensionMismatchError(
                f"CRITICAL: apply must preserve shape {self._values.shape}, got {result.shape}"
            )
        return self._derive(result)

    def where(self, condition: np.ndarray, otherwise: Operand) -> "PerPathVariable":
        """Keep values where condition holds, take otherwise elsewhere."""
        mask = np.asarray(condition, dtype=bool)
        if mask.shape != self._values.shape:
            raise DimensionMismatchError(
                f"CRITICAL: condition shape {mask.shape} does not match {self._values.shape}"
            )
        return self._derive(np.where(mask, self._values, self._operand(otherwise)), otherwise)

    def barrier_knockout(self, threshold: float) -> "PerPathVariable":
        """
        Zero every path whose value is not strictly below threshold.

        An infinite threshold knocks nothing out. A NaN threshold knocks
        out every path (no value compares below NaN).
        """
        return self.where(self._values < threshold, 0.0)

    # -------------------------------------------------------------------------
    # Reductions
    # -------------------------------------------------------------------------

    def mean(self) -> float:
        return float(np.mean(self._values))

    def variance(self) -> float:
        """Sample variance (ddof=1); 0 for a single path."""
        if self.n_paths < 2:
            return 0.0
        return float(np.var(self._values, ddof=1))

    def std(self) -> float:
        return float(np.sqrt(self.variance()))

    def standard_error(self) -> float:
        """[T1] SE = std / √N."""
        return self.std() / np.sqrt(self.n_paths)

    # -------------------------------------------------------------------------
    # Operators
    # -------------------------------------------------------------------------

    def __add__(self, other: Operand) -> "PerPathVariable":
        return self.add(other)

    __radd__ = __add__

    def __sub__(self, other: Operand) -> "PerPathVariable":
        return self.sub(other)

    def __rsub__(self, other: float) -> "PerPathVariable":
        return self._derive(float(other) - self._values)

    def __mul__(self, other: Operand) -> "PerPathVariable":
        return self.mult(other)

    __rmul__ = __mul__

    def __truediv__(self, other: Operand) -> "PerPathVariable":
        return self.div(other)

    def __rtruediv__(self, other: float) -> "PerPathVariable":
        return self._derive(float(other) / self._values)

    def __neg__(self) -> "PerPathVariable":
        return self._derive(-self._values)

    def __len__(self) -> int:
        return self.n_paths

    def __array__(self, dtype=None, copy=None) -> np.ndarray:
        """View of the (read-only) values; a writable copy when copy=True."""
        if copy:
            return self._values.astype(dtype or float, copy=True)
        return self._values if dtype is None else self._values.astype(dtype)

    def __repr__(self) -> str:
        return f"PerPathVariable(n_paths={self.n_paths}, mean={self.mean():.6g}, time={self.time})"
