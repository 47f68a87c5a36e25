"""
Centralized pytest fixtures for the mc-valuation test suite.

Fixture Categories:
1. Tolerances - Tiered tolerance settings
2. Model Parameters - The reference experiment (S0=100, r=4%, σ=25%)
3. Simulations - Shared Monte Carlo asset models
4. Textbook Examples - Closed-form known answers
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np
import pytest

from mc_valuation.models import (
    AssetProcess,
    BlackScholesModel,
    ModelParameters,
    MonteCarloAssetModel,
)
from mc_valuation.simulation import BrownianMotion, TimeGrid

# =============================================================================
# TOLERANCE TIERS
# =============================================================================

@dataclass(frozen=True)
class ToleranceTiers:
    """
    Tiered tolerance framework for different test types.

    Derived from precision requirements, not ad hoc.
    """

    # Exact identities (discounting cancellation, knockout pass-through)
    exact: float = 1e-12

    # Closed-form known answers quoted to 2 decimals
    textbook: float = 0.01

    # Monte Carlo vs analytical: number of standard errors
    mc_standard_errors: float = 4.0


TOLERANCES = ToleranceTiers()


@pytest.fixture(scope="session")
def tolerances() -> ToleranceTiers:
    """Provide tiered tolerance settings for all tests."""
    return TOLERANCES


# =============================================================================
# MODEL PARAMETERS
# =============================================================================

@pytest.fixture(scope="session")
def reference_params() -> ModelParameters:
    """
    The reference experiment.

    S0=100, r=0.04, σ=0.25, 10 steps of 0.1, 10 000 paths, seed 31415.
    """
    return ModelParameters(
        initial_value=100.0,
        risk_free_rate=0.04,
        volatility=0.25,
        seed=31415,
        n_paths=10_000,
        n_steps=10,
        dt=0.1,
    )


@pytest.fixture(scope="session")
def reference_grid(reference_params: ModelParameters) -> TimeGrid:
    """Uniform grid 0.0, 0.1, ..., 1.0."""
    return reference_params.time_grid()


# =============================================================================
# SIMULATIONS
# =============================================================================

def make_simulation(
    n_paths: int = 1_000,
    seed: int = 31415,
    initial_value: float = 100.0,
    rate: float = 0.04,
    volatility: float = 0.25,
    n_steps: int = 10,
    dt: float = 0.1,
    name: Optional[str] = None,
) -> MonteCarloAssetModel:
    """Build a one-asset Black-Scholes simulation."""
    grid = TimeGrid.uniform(0.0, n_steps, dt)
    brownian = BrownianMotion(grid, n_factors=1, n_paths=n_paths, seed=seed)
    model = BlackScholesModel(initial_value, rate, volatility, name=name)
    return MonteCarloAssetModel(model, AssetProcess(brownian))


@pytest.fixture(scope="session")
def reference_simulation(reference_params: ModelParameters) -> MonteCarloAssetModel:
    """Simulation of the reference experiment (shared, read-only)."""
    return MonteCarloAssetModel.from_parameters(reference_params)


@pytest.fixture(scope="session")
def simulation_factory():
    """Factory for one-asset simulations with custom parameters."""
    return make_simulation


@pytest.fixture
def small_simulation() -> MonteCarloAssetModel:
    """1 000-path simulation for fast unit tests."""
    return make_simulation()


# =============================================================================
# TEXTBOOK EXAMPLES
# =============================================================================

@dataclass(frozen=True)
class HullExample:
    """A textbook example from Hull (2021) Options, Futures, and Other Derivatives."""

    name: str
    spot: float
    strike: float
    rate: float
    volatility: float
    time_to_expiry: float
    expected_call: float
    expected_put: float


# Hull (2021) Chapter 15, Example 15.6
HULL_EXAMPLE_15_6 = HullExample(
    name="Hull Example 15.6",
    spot=42.0,
    strike=40.0,
    rate=0.10,
    volatility=0.20,
    time_to_expiry=0.5,
    expected_call=4.76,
    expected_put=0.81,
)


@pytest.fixture
def hull_example() -> HullExample:
    return HULL_EXAMPLE_15_6


@pytest.fixture
def rng() -> np.random.Generator:
    """Independent generator for building test inputs."""
    return np.random.default_rng(2024)
