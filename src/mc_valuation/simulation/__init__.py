"""
Simulation primitives: time grids, random sources, Brownian paths.

[T1] Brownian increments scale with √Δt
"""

from mc_valuation.simulation.brownian import (
    BrownianMotion,
    BrownianMotionResult,
    generate_brownian_motion,
)
from mc_valuation.simulation.random_source import NumpyRandomSource, RandomSource
from mc_valuation.simulation.random_variable import PerPathVariable
from mc_valuation.simulation.tensor import SimulationTensor
from mc_valuation.simulation.time_grid import TimeGrid

__all__ = [
    "BrownianMotion",
    "BrownianMotionResult",
    "generate_brownian_motion",
    "NumpyRandomSource",
    "RandomSource",
    "PerPathVariable",
    "SimulationTensor",
    "TimeGrid",
]
