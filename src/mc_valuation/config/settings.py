"""
Frozen configuration settings for Monte Carlo valuation.

All configuration is immutable (frozen dataclasses) to ensure reproducibility.
"""

import os
from dataclasses import dataclass
from typing import Optional

from mc_valuation.config.tolerances import MC_PRICE_CONFIDENCE, TIME_TOLERANCE


def _resolve_n_workers() -> Optional[int]:
    """
    Resolve the default worker count for path generation.

    Priority:
    1. MC_VALUATION_WORKERS environment variable (if set)
    2. Default: None (single-threaded)
    """
    env_workers = os.environ.get("MC_VALUATION_WORKERS")
    if env_workers:
        n_workers = int(env_workers)
        if n_workers < 1:
            raise ValueError(
                f"CRITICAL: MC_VALUATION_WORKERS must be >= 1, got {n_workers}"
            )
        return n_workers
    return None


# =============================================================================
# Simulation Configuration
# =============================================================================

@dataclass(frozen=True)
class SimulationConfig:
    """
    Immutable simulation configuration.

    Attributes
    ----------
    n_paths : int
        Number of Monte Carlo paths
    n_steps : int
        Number of time steps
    dt : float
        Uniform time step size (years)
    seed : int
        Random seed for reproducibility
    initial_brownian_value : float
        Value of every Brownian path at the first grid time
    n_workers : int, optional
        Threads for path generation. Override with MC_VALUATION_WORKERS.
    """

    n_paths: int = 10_000
    n_steps: int = 10
    dt: float = 0.1
    seed: int = 31415
    initial_brownian_value: float = 0.0
    n_workers: Optional[int] = None

    def __post_init__(self) -> None:
        """Initialize n_workers using resolver function."""
        # Frozen dataclass workaround: use object.__setattr__
        if self.n_workers is None:
            object.__setattr__(self, "n_workers", _resolve_n_workers())


# =============================================================================
# Validation Configuration
# =============================================================================

@dataclass(frozen=True)
class ValidationConfig:
    """
    Immutable validation configuration.

    Attributes
    ----------
    confidence_z : float
        z-score for reported confidence intervals (95%)
    mc_price_confidence : float
        Standard errors allowed between MC and analytic prices
    time_tolerance : float
        Grid time matching tolerance
    warn_on_negative_assets : bool
        Log a warning when the arithmetic Euler scheme goes non-positive
    """

    confidence_z: float = 1.96
    mc_price_confidence: float = MC_PRICE_CONFIDENCE
    time_tolerance: float = TIME_TOLERANCE
    warn_on_negative_assets: bool = True


# =============================================================================
# Master Configuration
# =============================================================================

@dataclass(frozen=True)
class Settings:
    """
    Master frozen configuration combining all sub-configs.

    Usage
    -----
    >>> from mc_valuation.config.settings import SETTINGS
    >>> SETTINGS.simulation.n_paths
    10000
    """

    simulation: SimulationConfig = SimulationConfig()
    validation: ValidationConfig = ValidationConfig()


# Singleton instance - import this
SETTINGS = Settings()
