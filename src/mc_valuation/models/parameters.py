"""
Model parameters for a single-asset Monte Carlo experiment.
"""

from dataclasses import dataclass
from typing import Optional

from mc_valuation.config.settings import SETTINGS, SimulationConfig
from mc_valuation.simulation.time_grid import TimeGrid


@dataclass(frozen=True)
class ModelParameters:
    """
    Immutable parameters of one simulation experiment.

    Attributes
    ----------
    initial_value : float
        S(0)
    risk_free_rate : float
        Risk-free rate (annualized, decimal); also the risk-neutral drift
    volatility : float
        Volatility (annualized, decimal)
    seed : int
        Random seed
    n_paths : int
        Number of Monte Carlo paths
    n_steps : int
        Number of time steps
    dt : float
        Uniform step size (years)
    initial_time : float
        First grid time
    """

    initial_value: float
    risk_free_rate: float
    volatility: float
    seed: int = 31415
    n_paths: int = 10_000
    n_steps: int = 10
    dt: float = 0.1
    initial_time: float = 0.0

    def __post_init__(self) -> None:
        """Validate parameters."""
        if self.initial_value <= 0:
            raise ValueError(f"CRITICAL: initial_value must be > 0, got {self.initial_value}")
        if self.volatility < 0:
            raise ValueError(f"CRITICAL: volatility must be >= 0, got {self.volatility}")
        if self.n_paths < 1:
            raise ValueError(f"CRITICAL: n_paths must be >= 1, got {self.n_paths}")
        if self.n_steps < 1:
            raise ValueError(f"CRITICAL: n_steps must be >= 1, got {self.n_steps}")
        if self.dt <= 0:
            raise ValueError(f"CRITICAL: dt must be > 0, got {self.dt}")

    @classmethod
    def from_config(
        cls,
        initial_value: float,
        risk_free_rate: float,
        volatility: float,
        config: Optional[SimulationConfig] = None,
    ) -> "ModelParameters":
        """Take discretization settings from a SimulationConfig (default SETTINGS)."""
        config = config or SETTINGS.simulation
        return cls(
            initial_value=initial_value,
            risk_free_rate=risk_free_rate,
            volatility=volatility,
            seed=config.seed,
            n_paths=config.n_paths,
            n_steps=config.n_steps,
            dt=config.dt,
        )

    @property
    def horizon(self) -> float:
        """Last simulated time."""
        return self.initial_time + self.n_steps * self.dt

    def time_grid(self) -> TimeGrid:
        return TimeGrid.uniform(self.initial_time, self.n_steps, self.dt)
