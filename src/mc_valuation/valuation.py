"""
Valuation entry points.

- price_european_option: parameters + option terms -> ValuationResult
- value_products: many products on one shared simulation

Errors from any step propagate unchanged; there are no partial results.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Sequence

from mc_valuation.config.settings import SETTINGS
from mc_valuation.models.asset_process import DiscretizationScheme
from mc_valuation.models.monte_carlo_model import MonteCarloAssetModel
from mc_valuation.models.parameters import ModelParameters
from mc_valuation.products.base import AssetMonteCarloProduct, ValuationResult
from mc_valuation.products.european import EuropeanOption
from mc_valuation.products.option_spec import OptionSpecification

logger = logging.getLogger(__name__)


def price_european_option(
    params: ModelParameters,
    spec: OptionSpecification,
    scheme: DiscretizationScheme = DiscretizationScheme.LOG_EULER,
    n_workers: Optional[int] = None,
    evaluation_time: Optional[float] = None,
) -> ValuationResult:
    """
    Value a European option under Black-Scholes by Monte Carlo.

    Parameters
    ----------
    params : ModelParameters
        Model and discretization parameters
    spec : OptionSpecification
        Option terms
    scheme : DiscretizationScheme, default LOG_EULER
        Time-stepping scheme
    n_workers : int, optional
        Threads for path generation
    evaluation_time : float, optional
        Time to discount to; defaults to params.initial_time

    Returns
    -------
    ValuationResult
        Price, standard error and per-path values

    Examples
    --------
    >>> params = ModelParameters(initial_value=100.0, risk_free_rate=0.04, volatility=0.25)
    >>> result = price_european_option(params, OptionSpecification(maturity=1.0, strike=90.0))
    >>> result.n_paths
    10000
    """
    model = MonteCarloAssetModel.from_parameters(
        params, scheme=scheme, n_workers=n_workers, name=spec.underlying_name
    )
    if evaluation_time is None:
        evaluation_time = params.initial_time
    result = EuropeanOption.from_spec(spec).value(model, evaluation_time)
    logger.info(
        f"European {spec.option_type.value} K={spec.strike} T={spec.maturity} "
        f"barrier={spec.barrier}: {result.price:.6f} ± {result.standard_error:.6f}"
    )
    return result


def value_products(
    products: Sequence[AssetMonteCarloProduct],
    model: MonteCarloAssetModel,
    evaluation_time: float = 0.0,
    n_workers: Optional[int] = None,
) -> list[ValuationResult]:
    """
    Value several products on the same simulation.

    The asset paths are simulated once, then shared read-only by all
    valuations. Results are returned in the order of products.

    Raises
    ------
    CalculationError
        If any product valuation fails
    """
    if n_workers is None:
        n_workers = SETTINGS.simulation.n_workers
    if n_workers is not None and n_workers < 1:
        raise ValueError(f"CRITICAL: n_workers must be >= 1, got {n_workers}")

    # Simulate before fanning out
    model.asset_paths

    if not n_workers or n_workers == 1 or len(products) < 2:
        results = [product.value(model, evaluation_time) for product in products]
    else:
        with ThreadPoolExecutor(max_workers=n_workers) as executor:
            futures = [
                executor.submit(product.value, model, evaluation_time) for product in products
            ]
            results = [future.result() for future in futures]

    logger.info(f"Valued {len(results)} product(s) at t={evaluation_time}")
    return results
