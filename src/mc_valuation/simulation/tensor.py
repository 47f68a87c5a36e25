"""
Three-axis simulation array indexed by (time, factor, path).

Used for Brownian increments (n_steps time slots) and for cumulative
Brownian or asset paths (n_steps + 1 time slots, slot 0 is the initial
value). The array is read-only once constructed.
"""

from typing import Optional, Sequence

import numpy as np
import pandas as pd

from mc_valuation.exceptions import DimensionMismatchError


class SimulationTensor:
    """
    Read-only array of shape (n_times, n_factors, n_paths).

    Parameters
    ----------
    values : array_like
        Data indexed ``[time][factor][path]``. Copied and frozen.

    Raises
    ------
    DimensionMismatchError
        If values is not three-dimensional or any extent is zero
    """

    __slots__ = ("_values",)

    def __init__(self, values: np.ndarray):
        array = np.array(values, dtype=float, copy=True)
        if array.ndim != 3:
            raise DimensionMismatchError(
                f"CRITICAL: simulation tensor must be 3-dimensional "
                f"(time, factor, path), got shape {array.shape}"
            )
        if min(array.shape) == 0:
            raise DimensionMismatchError(
                f"CRITICAL: simulation tensor extents must be > 0, got shape {array.shape}"
            )
        array.setflags(write=False)
        self._values = array

    @property
    def values(self) -> np.ndarray:
        """Underlying read-only array."""
        return self._values

    @property
    def shape(self) -> tuple[int, int, int]:
        return self._values.shape  # type: ignore[return-value]

    @property
    def n_times(self) -> int:
        return self._values.shape[0]

    @property
    def n_factors(self) -> int:
        return self._values.shape[1]

    @property
    def n_paths(self) -> int:
        return self._values.shape[2]

    def at(self, time_index: int, factor: int) -> np.ndarray:
        """Cross-section over paths at one time slot, shape (n_paths,)."""
        self._check_index(time_index, self.n_times, "time_index")
        self._check_index(factor, self.n_factors, "factor")
        return self._values[time_index, factor]

    def path(self, factor: int, path_index: int) -> np.ndarray:
        """Single path through time, shape (n_times,)."""
        self._check_index(factor, self.n_factors, "factor")
        self._check_index(path_index, self.n_paths, "path_index")
        return self._values[:, factor, path_index]

    def to_frame(self, factor: int = 0, times: Optional[Sequence[float]] = None) -> pd.DataFrame:
        """
        One factor as a DataFrame (rows = time, columns = path).

        Parameters
        ----------
        factor : int, default 0
            Factor to extract
        times : sequence of float, optional
            Row labels; must have n_times entries. Defaults to slot indices.
        """
        self._check_index(factor, self.n_factors, "factor")
        if times is not None and len(times) != self.n_times:
            raise DimensionMismatchError(
                f"CRITICAL: expected {self.n_times} time labels, got {len(times)}"
            )
        index = pd.Index(times if times is not None else range(self.n_times), name="time")
        columns = pd.RangeIndex(self.n_paths, name="path")
        return pd.DataFrame(self._values[:, factor, :], index=index, columns=columns)

    @staticmethod
    def _check_index(index: int, extent: int, name: str) -> None:
        if index < 0 or index >= extent:
            raise IndexError(f"{name} must be in [0, {extent}), got {index}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SimulationTensor):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._values, other._values))

    def __hash__(self) -> int:
        return hash((self.shape, self._values.tobytes()))

    def __repr__(self) -> str:
        return (
            f"SimulationTensor(n_times={self.n_times}, n_factors={self.n_factors}, "
            f"n_paths={self.n_paths})"
        )
