"""Configuration and tolerances."""

from mc_valuation.config.settings import (
    SETTINGS,
    Settings,
    SimulationConfig,
    ValidationConfig,
)
from mc_valuation.config.tolerances import (
    TIME_TOLERANCE,
    TOLERANCE_REGISTRY,
    get_tolerance,
    mc_tolerance,
)

__all__ = [
    "SETTINGS",
    "Settings",
    "SimulationConfig",
    "ValidationConfig",
    "TIME_TOLERANCE",
    "TOLERANCE_REGISTRY",
    "get_tolerance",
    "mc_tolerance",
]
