"""
Asset models, discretization schemes and numeraires.

[T1] Black-Scholes: dS = r S dt + σ S dW
"""

from mc_valuation.models.asset_model import AssetModel, BlackScholesModel
from mc_valuation.models.asset_process import (
    AssetProcess,
    DiscretizationScheme,
    simulate_asset_paths,
    simulate_asset_paths_from_increments,
)
from mc_valuation.models.monte_carlo_model import MonteCarloAssetModel
from mc_valuation.models.numeraire import MoneyMarketNumeraire, NumeraireModel
from mc_valuation.models.parameters import ModelParameters

__all__ = [
    "AssetModel",
    "BlackScholesModel",
    "AssetProcess",
    "DiscretizationScheme",
    "simulate_asset_paths",
    "simulate_asset_paths_from_increments",
    "MonteCarloAssetModel",
    "MoneyMarketNumeraire",
    "NumeraireModel",
    "ModelParameters",
]
