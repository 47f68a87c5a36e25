"""
Brownian motion path generation.

[T1] Wiener increments: ΔW_t = Z_t * √Δt_t, Z_t ~ N(0, 1) i.i.d.
     W(t_{i+1}) = W(t_i) + ΔW_i

Factors are independent; any correlation is applied by the caller.

Reproducibility: all draws are taken from the RandomSource in one
sequential block ordered (factor, path, time), i.e. each path's walk is a
contiguous run of the stream. Worker threads only split the cumulative
sums by path block, so the result is bit-identical for any worker count.

See: Glasserman (2003) Ch. 3.1 - Brownian motion
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional

import numpy as np

from mc_valuation.config.settings import SETTINGS
from mc_valuation.exceptions import DimensionMismatchError
from mc_valuation.simulation.random_source import NumpyRandomSource, RandomSource
from mc_valuation.simulation.random_variable import PerPathVariable
from mc_valuation.simulation.tensor import SimulationTensor
from mc_valuation.simulation.time_grid import TimeGrid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BrownianMotionResult:
    """
    Brownian increments and cumulative paths on a time grid.

    Attributes
    ----------
    time_grid : TimeGrid
        Simulation times
    increments : SimulationTensor
        ΔW, shape (n_steps, n_factors, n_paths)
    paths : SimulationTensor
        W, shape (n_steps + 1, n_factors, n_paths)
    """

    time_grid: TimeGrid
    increments: SimulationTensor
    paths: SimulationTensor

    def __post_init__(self) -> None:
        """Validate tensor extents against the grid."""
        if self.increments.n_times != self.time_grid.n_steps:
            raise DimensionMismatchError(
                f"CRITICAL: increments have {self.increments.n_times} time slots, "
                f"grid has {self.time_grid.n_steps} steps"
            )
        if self.paths.n_times != self.increments.n_times + 1:
            raise DimensionMismatchError(
                f"CRITICAL: paths need {self.increments.n_times + 1} time slots, "
                f"got {self.paths.n_times}"
            )
        if self.paths.shape[1:] != self.increments.shape[1:]:
            raise DimensionMismatchError(
                f"CRITICAL: (factor, path) extents differ: paths {self.paths.shape[1:]} "
                f"vs increments {self.increments.shape[1:]}"
            )

    @property
    def n_factors(self) -> int:
        return self.increments.n_factors

    @property
    def n_paths(self) -> int:
        return self.increments.n_paths


def _cumulate_block(
    increments: np.ndarray,
    initial_value: float,
    out: np.ndarray,
    start: int,
    stop: int,
) -> None:
    """Fill out[:, :, start:stop] with W(t0) followed by running sums."""
    out[0, :, start:stop] = initial_value
    block = np.concatenate([out[:1, :, start:stop], increments[:, :, start:stop]], axis=0)
    out[:, :, start:stop] = np.cumsum(block, axis=0)


def generate_brownian_motion(
    time_grid: TimeGrid,
    n_factors: int,
    n_paths: int,
    random_source: RandomSource,
    initial_value: Optional[float] = None,
    n_workers: Optional[int] = None,
) -> BrownianMotionResult:
    """
    Generate Brownian increments and cumulative paths.

    Parameters
    ----------
    time_grid : TimeGrid
        Simulation times; step sizes may be non-uniform
    n_factors : int
        Number of independent Brownian drivers
    n_paths : int
        Number of Monte Carlo paths
    random_source : RandomSource
        Source of N(0, 1) draws; consumed for n_factors * n_paths * n_steps draws
    initial_value : float, optional
        W(t0) on every path; defaults to SETTINGS.simulation.initial_brownian_value
    n_workers : int, optional
        Threads used for the cumulative sums (None or 1 = single-threaded)

    Returns
    -------
    BrownianMotionResult
        Increments (n_steps slots) and paths (n_steps + 1 slots)

    Raises
    ------
    DimensionMismatchError
        If n_factors or n_paths < 1, the grid has no steps, or the source
        returns a block of the wrong shape

    Examples
    --------
    >>> grid = TimeGrid.uniform(0.0, n_steps=10, dt=0.1)
    >>> bm = generate_brownian_motion(grid, 1, 1000, NumpyRandomSource(seed=31415))
    >>> bm.paths.shape
    (11, 1, 1000)
    """
    if n_factors < 1:
        raise DimensionMismatchError(f"CRITICAL: n_factors must be >= 1, got {n_factors}")
    if n_paths < 1:
        raise DimensionMismatchError(f"CRITICAL: n_paths must be >= 1, got {n_paths}")
    n_steps = time_grid.n_steps
    if n_steps < 1:
        raise DimensionMismatchError(
            "CRITICAL: time grid has no steps, cannot generate Brownian increments"
        )
    if initial_value is None:
        initial_value = SETTINGS.simulation.initial_brownian_value
    if n_workers is not None and n_workers < 1:
        raise ValueError(f"CRITICAL: n_workers must be >= 1, got {n_workers}")

    draws = np.asarray(random_source.standard_normal((n_factors, n_paths, n_steps)))
    if draws.shape != (n_factors, n_paths, n_steps):
        raise DimensionMismatchError(
            f"CRITICAL: random source returned shape {draws.shape}, "
            f"expected {(n_factors, n_paths, n_steps)}"
        )

    # (factor, path, time) -> (time, factor, path)
    std_dev = np.sqrt(time_grid.time_steps)
    increments = np.transpose(draws, (2, 0, 1)) * std_dev[:, np.newaxis, np.newaxis]

    paths = np.empty((n_steps + 1, n_factors, n_paths))
    workers = min(n_workers or 1, n_paths)
    bounds = np.linspace(0, n_paths, workers + 1).astype(int)
    if workers == 1:
        _cumulate_block(increments, initial_value, paths, 0, n_paths)
    else:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(_cumulate_block, increments, initial_value, paths, start, stop)
                for start, stop in zip(bounds[:-1], bounds[1:])
            ]
            for future in futures:
                future.result()

    logger.debug(
        f"Generated Brownian motion: {n_steps} steps x {n_factors} factors x "
        f"{n_paths} paths ({workers} worker(s))"
    )

    return BrownianMotionResult(
        time_grid=time_grid,
        increments=SimulationTensor(increments),
        paths=SimulationTensor(paths),
    )


class BrownianMotion:
    """
    Lazily generated, cached Brownian motion.

    Generation happens on first access and at most once, even when several
    threads ask concurrently. The generated tensors are read-only and may
    be shared by any number of consumers.

    Parameters
    ----------
    time_grid : TimeGrid
        Simulation times
    n_factors : int
        Number of independent factors
    n_paths : int
        Number of paths
    seed : int, optional
        Seed for a NumpyRandomSource; defaults to SETTINGS.simulation.seed
    random_source : RandomSource, optional
        Explicit source (mutually exclusive with seed)
    initial_value : float, optional
        W(t0) on every path; defaults to SETTINGS.simulation.initial_brownian_value
    n_workers : int, optional
        Threads for generation; defaults to SETTINGS.simulation.n_workers

    Examples
    --------
    >>> bm = BrownianMotion(TimeGrid.uniform(0.0, 10, 0.1), n_factors=1, n_paths=100, seed=31415)
    >>> bm.get_increment(0, 0).n_paths
    100
    """

    def __init__(
        self,
        time_grid: TimeGrid,
        n_factors: int,
        n_paths: int,
        seed: Optional[int] = None,
        random_source: Optional[RandomSource] = None,
        initial_value: Optional[float] = None,
        n_workers: Optional[int] = None,
    ):
        if seed is not None and random_source is not None:
            raise ValueError("CRITICAL: specify either seed or random_source, not both")
        if n_factors < 1:
            raise DimensionMismatchError(f"CRITICAL: n_factors must be >= 1, got {n_factors}")
        if n_paths < 1:
            raise DimensionMismatchError(f"CRITICAL: n_paths must be >= 1, got {n_paths}")

        self.time_grid = time_grid
        self.n_factors = n_factors
        self.n_paths = n_paths
        self.seed = SETTINGS.simulation.seed if seed is None and random_source is None else seed
        self.initial_value = (
            SETTINGS.simulation.initial_brownian_value if initial_value is None else initial_value
        )
        self.n_workers = n_workers if n_workers is not None else SETTINGS.simulation.n_workers
        self._random_source = random_source
        self._result: Optional[BrownianMotionResult] = None
        self._lock = threading.Lock()

    @property
    def result(self) -> BrownianMotionResult:
        """Generated increments and paths (generated on first access)."""
        if self._result is None:
            with self._lock:
                if self._result is None:
                    source = self._random_source or NumpyRandomSource(self.seed)
                    self._result = generate_brownian_motion(
                        self.time_grid,
                        self.n_factors,
                        self.n_paths,
                        source,
                        initial_value=self.initial_value,
                        n_workers=self.n_workers,
                    )
        return self._result

    @property
    def increments(self) -> SimulationTensor:
        return self.result.increments

    @property
    def paths(self) -> SimulationTensor:
        return self.result.paths

    def get_increment(self, time_index: int, factor: int) -> PerPathVariable:
        """ΔW over [t_i, t_{i+1}] for one factor."""
        values = self.increments.at(time_index, factor)
        return PerPathVariable(values, time=self.time_grid.time(time_index + 1))

    def get_value(self, time_index: int, factor: int) -> PerPathVariable:
        """W(t_i) for one factor."""
        values = self.paths.at(time_index, factor)
        return PerPathVariable(values, time=self.time_grid.time(time_index))

    def __repr__(self) -> str:
        return (
            f"BrownianMotion(n_steps={self.time_grid.n_steps}, n_factors={self.n_factors}, "
            f"n_paths={self.n_paths}, seed={self.seed})"
        )
