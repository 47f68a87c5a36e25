"""
Numeraire and Monte Carlo weights used for discounting.

[T1] Money-market account: N(t) = exp(r (t - t0))
[T1] Value at t of a claim X paid at T: N(t) E[X / N(T)]

Monte Carlo weights carry a measure change; under the risk-neutral
measure with no change of measure they are 1 on every path.
"""

from abc import ABC, abstractmethod

import numpy as np

from mc_valuation.exceptions import TimeOutOfRangeError
from mc_valuation.simulation.random_variable import PerPathVariable
from mc_valuation.simulation.time_grid import TimeGrid


class NumeraireModel(ABC):
    """
    Supplies N(t) and the Monte Carlo weights w(t) for any query time.

    Parameters
    ----------
    time_grid : TimeGrid
        Simulated horizon
    n_paths : int
        Length of the returned variables
    extrapolate : bool, default False
        Allow queries outside [t0, tN]; otherwise raise TimeOutOfRangeError
    """

    def __init__(self, time_grid: TimeGrid, n_paths: int, extrapolate: bool = False):
        if n_paths < 1:
            raise ValueError(f"CRITICAL: n_paths must be >= 1, got {n_paths}")
        self.time_grid = time_grid
        self.n_paths = n_paths
        self.extrapolate = extrapolate

    def _check_time(self, time: float) -> None:
        if not self.extrapolate and not self.time_grid.contains(time):
            raise TimeOutOfRangeError(
                time, self.time_grid.initial_time, self.time_grid.last_time
            )

    def numeraire(self, time: float) -> PerPathVariable:
        """N(time) on every path."""
        self._check_time(time)
        return self._numeraire(time)

    def monte_carlo_weights(self, time: float) -> PerPathVariable:
        """w(time) on every path; uniform 1 unless overridden."""
        self._check_time(time)
        return PerPathVariable.constant(1.0, self.n_paths, time=time)

    @abstractmethod
    def _numeraire(self, time: float) -> PerPathVariable:
        ...


class MoneyMarketNumeraire(NumeraireModel):
    """
    Deterministic money-market account with a constant short rate.

    Examples
    --------
    >>> grid = TimeGrid.uniform(0.0, 10, 0.1)
    >>> n = MoneyMarketNumeraire(rate=0.04, time_grid=grid, n_paths=3)
    >>> round(n.numeraire(1.0).mean(), 6)
    1.040811
    """

    def __init__(
        self,
        rate: float,
        time_grid: TimeGrid,
        n_paths: int,
        extrapolate: bool = False,
    ):
        super().__init__(time_grid, n_paths, extrapolate)
        self.rate = float(rate)

    def discount_factor(self, from_time: float, to_time: float) -> float:
        """N(to_time) / N(from_time) = exp(-r (from_time - to_time))."""
        return float(np.exp(-self.rate * (from_time - to_time)))

    def _numeraire(self, time: float) -> PerPathVariable:
        value = np.exp(self.rate * (time - self.time_grid.initial_time))
        return PerPathVariable.constant(value, self.n_paths, time=time)

    def __repr__(self) -> str:
        return f"MoneyMarketNumeraire(rate={self.rate}, extrapolate={self.extrapolate})"
