"""
mc-valuation: Monte Carlo valuation of European options with a payoff barrier.

Quick Start
-----------
>>> from mc_valuation import ModelParameters, OptionSpecification, price_european_option
>>> params = ModelParameters(initial_value=100.0, risk_free_rate=0.04, volatility=0.25)
>>> result = price_european_option(params, OptionSpecification(maturity=1.0, strike=90.0))

Version: 0.1.0
"""

__version__ = "0.1.0"

# =============================================================================
# Simulation
# =============================================================================
from mc_valuation.simulation import (
    BrownianMotion,
    BrownianMotionResult,
    NumpyRandomSource,
    PerPathVariable,
    RandomSource,
    SimulationTensor,
    TimeGrid,
    generate_brownian_motion,
)

# =============================================================================
# Models
# =============================================================================
from mc_valuation.models import (
    AssetModel,
    AssetProcess,
    BlackScholesModel,
    DiscretizationScheme,
    ModelParameters,
    MoneyMarketNumeraire,
    MonteCarloAssetModel,
    NumeraireModel,
)

# =============================================================================
# Products and valuation
# =============================================================================
from mc_valuation.products import (
    NO_BARRIER,
    EuropeanOption,
    OptionSpecification,
    OptionType,
    ValuationResult,
)
from mc_valuation.valuation import price_european_option, value_products

# =============================================================================
# Analytic reference
# =============================================================================
from mc_valuation.pricing import black_scholes_call, black_scholes_price, black_scholes_put

# =============================================================================
# Errors and configuration
# =============================================================================
from mc_valuation.exceptions import (
    CalculationError,
    DimensionMismatchError,
    InvalidGridError,
    MCValuationError,
    TimeOutOfRangeError,
)
from mc_valuation.config.settings import SETTINGS

__all__ = [
    "__version__",
    # Simulation
    "BrownianMotion",
    "BrownianMotionResult",
    "NumpyRandomSource",
    "PerPathVariable",
    "RandomSource",
    "SimulationTensor",
    "TimeGrid",
    "generate_brownian_motion",
    # Models
    "AssetModel",
    "AssetProcess",
    "BlackScholesModel",
    "DiscretizationScheme",
    "ModelParameters",
    "MoneyMarketNumeraire",
    "MonteCarloAssetModel",
    "NumeraireModel",
    # Products
    "NO_BARRIER",
    "EuropeanOption",
    "OptionSpecification",
    "OptionType",
    "ValuationResult",
    "price_european_option",
    "value_products",
    # Analytic
    "black_scholes_call",
    "black_scholes_price",
    "black_scholes_put",
    # Errors
    "CalculationError",
    "DimensionMismatchError",
    "InvalidGridError",
    "MCValuationError",
    "TimeOutOfRangeError",
    # Config
    "SETTINGS",
]
