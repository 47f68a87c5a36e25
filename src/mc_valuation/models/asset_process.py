"""
Discretization schemes mapping Brownian increments to asset paths.

[T1] Log-Euler:        S(t+1) = S(t) * exp((μ - σ²/2)Δt + σ ΔW)
[T1] Arithmetic Euler: S(t+1) = S(t) + μ S(t) Δt + σ S(t) ΔW

Log-Euler is exact in distribution for constant coefficients and keeps
S > 0. Arithmetic Euler has O(Δt) weak error and can go negative; such
values are kept as produced (a warning is logged).

See: Glasserman (2003) Ch. 6.1 - Euler scheme
See: Kloeden & Platen (1992) Ch. 9
"""

import logging
from enum import Enum

import numpy as np

from mc_valuation.config.settings import SETTINGS
from mc_valuation.exceptions import DimensionMismatchError
from mc_valuation.models.asset_model import AssetModel
from mc_valuation.simulation.brownian import BrownianMotion, BrownianMotionResult
from mc_valuation.simulation.tensor import SimulationTensor
from mc_valuation.simulation.time_grid import TimeGrid

logger = logging.getLogger(__name__)


class DiscretizationScheme(Enum):
    """Time-stepping scheme for the asset SDE."""

    LOG_EULER = "log_euler"
    EULER = "euler"


def simulate_asset_paths_from_increments(
    model: AssetModel,
    increments: SimulationTensor,
    time_grid: TimeGrid,
    scheme: DiscretizationScheme = DiscretizationScheme.LOG_EULER,
) -> SimulationTensor:
    """
    Evolve asset values along the grid from Brownian increments.

    Parameters
    ----------
    model : AssetModel
        Coefficients; asset i uses factor i
    increments : SimulationTensor
        ΔW, shape (n_steps, n_factors, n_paths)
    time_grid : TimeGrid
        Grid the increments were generated on
    scheme : DiscretizationScheme
        LOG_EULER (default) or EULER

    Returns
    -------
    SimulationTensor
        S, shape (n_steps + 1, n_assets, n_paths); slot 0 is S(t0)

    Raises
    ------
    DimensionMismatchError
        If the increments do not match the grid or there are fewer
        factors than assets
    """
    if increments.n_times != time_grid.n_steps:
        raise DimensionMismatchError(
            f"CRITICAL: increments have {increments.n_times} time slots, "
            f"grid has {time_grid.n_steps} steps"
        )
    n_assets = model.n_assets
    if increments.n_factors < n_assets:
        raise DimensionMismatchError(
            f"CRITICAL: model has {n_assets} assets but only "
            f"{increments.n_factors} Brownian factors"
        )

    dw = increments.values[:, :n_assets, :]
    dt = time_grid.time_steps[:, np.newaxis, np.newaxis]
    mu = model.drift[np.newaxis, :, np.newaxis]
    sigma = model.volatility[np.newaxis, :, np.newaxis]
    s0 = model.initial_values[np.newaxis, :, np.newaxis]

    paths = np.empty((time_grid.n_times, n_assets, increments.n_paths))
    paths[0] = s0[0]

    if scheme == DiscretizationScheme.LOG_EULER:
        log_returns = (mu - 0.5 * sigma**2) * dt + sigma * dw
        paths[1:] = s0 * np.exp(np.cumsum(log_returns, axis=0))
    elif scheme == DiscretizationScheme.EULER:
        for t in range(time_grid.n_steps):
            paths[t + 1] = paths[t] + mu[0] * paths[t] * dt[t] + sigma[0] * paths[t] * dw[t]
        n_non_positive = int(np.count_nonzero(paths[1:] <= 0))
        if n_non_positive and SETTINGS.validation.warn_on_negative_assets:
            logger.warning(
                f"Arithmetic Euler produced {n_non_positive} non-positive asset values; "
                f"consider LOG_EULER or a finer grid"
            )
    else:
        raise ValueError(f"Unknown discretization scheme: {scheme}")

    logger.debug(f"Simulated {n_assets} asset(s) with {scheme.value} on {time_grid.n_steps} steps")
    return SimulationTensor(paths)


def simulate_asset_paths(
    model: AssetModel,
    brownian: "BrownianMotion | BrownianMotionResult",
    scheme: DiscretizationScheme = DiscretizationScheme.LOG_EULER,
) -> SimulationTensor:
    """Evolve asset paths from a generated Brownian motion."""
    result = brownian.result if isinstance(brownian, BrownianMotion) else brownian
    return simulate_asset_paths_from_increments(
        model, result.increments, result.time_grid, scheme
    )


class AssetProcess:
    """
    Discretized process: a Brownian driver plus a time-stepping scheme.

    Parameters
    ----------
    brownian : BrownianMotion or BrownianMotionResult
        Driving Brownian motion
    scheme : DiscretizationScheme, default LOG_EULER
        Time-stepping scheme

    Examples
    --------
    >>> grid = TimeGrid.uniform(0.0, 10, 0.1)
    >>> process = AssetProcess(BrownianMotion(grid, n_factors=1, n_paths=1000, seed=31415))
    >>> process.n_paths
    1000
    """

    def __init__(
        self,
        brownian: "BrownianMotion | BrownianMotionResult",
        scheme: DiscretizationScheme = DiscretizationScheme.LOG_EULER,
    ):
        self.brownian = brownian
        self.scheme = scheme

    @property
    def time_grid(self) -> TimeGrid:
        return self.brownian.time_grid

    @property
    def n_paths(self) -> int:
        return self.brownian.n_paths

    @property
    def n_factors(self) -> int:
        return self.brownian.n_factors

    def simulate(self, model: AssetModel) -> SimulationTensor:
        return simulate_asset_paths(model, self.brownian, self.scheme)

    def __repr__(self) -> str:
        return f"AssetProcess({self.brownian!r}, scheme={self.scheme.value})"
