"""
European option with a payoff barrier.

[T1] Call payoff at T: V(T) = max(S(T) - K, 0)
[T1] Value at t: V(t) = N(t) / w(t) * V(T) * w(T) / N(T)

Barrier: a path pays V(T) only if V(T) < barrier, otherwise nothing. The
barrier acts on the payoff magnitude, not on the asset path.

See: Glasserman (2003) Ch. 1.2 - Principles of derivatives pricing
"""

import logging
from typing import Optional

from mc_valuation.exceptions import CalculationError
from mc_valuation.models.monte_carlo_model import MonteCarloAssetModel
from mc_valuation.products.base import AssetMonteCarloProduct
from mc_valuation.products.option_spec import NO_BARRIER, OptionSpecification, OptionType
from mc_valuation.simulation.random_variable import PerPathVariable

logger = logging.getLogger(__name__)


def european_payoff(
    underlying: PerPathVariable,
    strike: float,
    option_type: OptionType = OptionType.CALL,
) -> PerPathVariable:
    """
    Raw European payoff per path.

    [T1] Call: max(S - K, 0). Put: max(K - S, 0).
    """
    if option_type == OptionType.CALL:
        return underlying.sub(strike).floor(0.0)
    if option_type == OptionType.PUT:
        return (-underlying).add(strike).floor(0.0)
    raise ValueError(f"Unknown option type: {option_type}")


def discount_to_evaluation_time(
    values: PerPathVariable,
    payoff_time: float,
    evaluation_time: float,
    model: MonteCarloAssetModel,
) -> PerPathVariable:
    """
    Move a payoff paid at payoff_time to evaluation_time.

    Divides by N(T) and multiplies by w(T), then multiplies by N(t) and
    divides by w(t). For t = T with a deterministic numeraire this is
    values / N(T).
    """
    numeraire_at_payoff = model.get_numeraire(payoff_time)
    weights_at_payoff = model.get_monte_carlo_weights(payoff_time)
    values = values.div(numeraire_at_payoff).mult(weights_at_payoff)

    numeraire_at_evaluation = model.get_numeraire(evaluation_time)
    weights_at_evaluation = model.get_monte_carlo_weights(evaluation_time)
    return values.mult(numeraire_at_evaluation).div(weights_at_evaluation)


class EuropeanOption(AssetMonteCarloProduct):
    """
    European option on one asset of a Monte Carlo model.

    Parameters
    ----------
    maturity : float
        Payoff time T
    strike : float
        Strike K
    barrier : float, default NO_BARRIER
        Payoff threshold; paths with payoff >= barrier pay 0
    underlying_index : int, optional
        Index of the underlying (default 0)
    underlying_name : str, optional
        Name of the underlying (exclusive with underlying_index)
    option_type : OptionType, default CALL
        Call or put payoff

    Examples
    --------
    >>> from mc_valuation.models import ModelParameters, MonteCarloAssetModel
    >>> params = ModelParameters(initial_value=100.0, risk_free_rate=0.04, volatility=0.25)
    >>> option = EuropeanOption(maturity=1.0, strike=90.0)
    >>> price = option.price(MonteCarloAssetModel.from_parameters(params))
    """

    def __init__(
        self,
        maturity: float,
        strike: float,
        barrier: float = NO_BARRIER,
        underlying_index: Optional[int] = None,
        underlying_name: Optional[str] = None,
        option_type: OptionType = OptionType.CALL,
    ):
        self.spec = OptionSpecification(
            maturity=maturity,
            strike=strike,
            barrier=barrier,
            underlying_index=underlying_index,
            underlying_name=underlying_name,
            option_type=option_type,
        )

    @classmethod
    def from_spec(cls, spec: OptionSpecification) -> "EuropeanOption":
        return cls(
            maturity=spec.maturity,
            strike=spec.strike,
            barrier=spec.barrier,
            underlying_index=spec.underlying_index,
            underlying_name=spec.underlying_name,
            option_type=spec.option_type,
        )

    @property
    def maturity(self) -> float:
        return self.spec.maturity

    @property
    def strike(self) -> float:
        return self.spec.strike

    @property
    def barrier(self) -> float:
        return self.spec.barrier

    def payoff(self, model: MonteCarloAssetModel) -> PerPathVariable:
        """Payoff at maturity after the barrier knockout, undiscounted."""
        underlying_at_maturity = model.get_asset_value(self.maturity, self.spec.underlying)
        values = european_payoff(underlying_at_maturity, self.strike, self.spec.option_type)
        if self.spec.has_barrier:
            values = values.barrier_knockout(self.barrier)
        return values

    def get_value(self, evaluation_time: float, model: MonteCarloAssetModel) -> PerPathVariable:
        """
        Value discounted to evaluation_time, per path.

        Evaluation times after maturity are not rejected; the result is
        then the payoff accrued forward by the numeraire.

        Raises
        ------
        CalculationError
            If an asset value, numeraire or weight cannot be fetched
        """
        try:
            values = self.payoff(model)
            values = discount_to_evaluation_time(values, self.maturity, evaluation_time, model)
        except Exception as e:
            raise CalculationError(
                f"CRITICAL: valuation of {self!r} at t={evaluation_time} failed: {e}"
            ) from e

        logger.debug(
            f"Valued {self!r} at t={evaluation_time}: mean={values.mean():.6f} "
            f"over {values.n_paths} paths"
        )
        return values

    def __repr__(self) -> str:
        spec = self.spec
        return (
            f"EuropeanOption(maturity={spec.maturity}, strike={spec.strike}, "
            f"barrier={spec.barrier}, underlying={spec.underlying!r}, "
            f"option_type={spec.option_type.value})"
        )
