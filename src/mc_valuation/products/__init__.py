"""
Products valued on a Monte Carlo asset simulation.

Provides:
- EuropeanOption: European call/put with a payoff barrier
- OptionSpecification: immutable option terms
- ValuationResult: price, standard error and per-path values
"""

from mc_valuation.products.base import AssetMonteCarloProduct, ValuationResult
from mc_valuation.products.european import (
    EuropeanOption,
    discount_to_evaluation_time,
    european_payoff,
)
from mc_valuation.products.option_spec import NO_BARRIER, OptionSpecification, OptionType

__all__ = [
    "AssetMonteCarloProduct",
    "ValuationResult",
    "EuropeanOption",
    "discount_to_evaluation_time",
    "european_payoff",
    "NO_BARRIER",
    "OptionSpecification",
    "OptionType",
]
