"""
Base class for products valued on a Monte Carlo asset simulation.

A product returns its value as a PerPathVariable discounted to an
evaluation time; the price is the ensemble mean when the numeraire at the
evaluation time is deterministic.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from mc_valuation.config.settings import SETTINGS
from mc_valuation.models.monte_carlo_model import MonteCarloAssetModel
from mc_valuation.simulation.random_variable import PerPathVariable


@dataclass(frozen=True)
class ValuationResult:
    """
    Monte Carlo valuation result.

    Attributes
    ----------
    price : float
        Ensemble mean of the discounted values
    standard_error : float
        Standard error of the estimate
    confidence_interval : tuple[float, float]
        Confidence interval (95% by default)
    n_paths : int
        Number of paths used
    evaluation_time : float
        Time the values are discounted to
    values : np.ndarray
        Discounted value on each path
    """

    price: float
    standard_error: float
    confidence_interval: tuple[float, float]
    n_paths: int
    evaluation_time: float
    values: np.ndarray = field(repr=False, compare=False)

    @classmethod
    def from_values(
        cls,
        values: PerPathVariable,
        evaluation_time: float,
        confidence_z: Optional[float] = None,
    ) -> "ValuationResult":
        if confidence_z is None:
            confidence_z = SETTINGS.validation.confidence_z
        price = values.mean()
        se = values.standard_error()
        return cls(
            price=price,
            standard_error=se,
            confidence_interval=(price - confidence_z * se, price + confidence_z * se),
            n_paths=values.n_paths,
            evaluation_time=evaluation_time,
            values=values.values,
        )

    @property
    def relative_error(self) -> float:
        """Relative standard error (SE / price)."""
        if abs(self.price) < 1e-10:
            return float("inf")
        return self.standard_error / abs(self.price)

    @property
    def ci_width(self) -> float:
        return self.confidence_interval[1] - self.confidence_interval[0]

    def agrees_with(self, reference: float, n_standard_errors: Optional[float] = None) -> bool:
        """
        Whether the MC price lies within n standard errors of a reference price.

        [T1] |price - reference| < n × SE, with n defaulting to
        SETTINGS.validation.mc_price_confidence.
        """
        if n_standard_errors is None:
            n_standard_errors = SETTINGS.validation.mc_price_confidence
        return abs(self.price - reference) < n_standard_errors * self.standard_error


class AssetMonteCarloProduct(ABC):
    """
    Product valued against a MonteCarloAssetModel.

    Subclasses implement get_value(); price() and value() reduce it.
    """

    @abstractmethod
    def get_value(self, evaluation_time: float, model: MonteCarloAssetModel) -> PerPathVariable:
        """
        Value of the product discounted to evaluation_time, per path.

        Cash flows before evaluation_time are not considered.

        Raises
        ------
        CalculationError
            If fetching an asset value, numeraire or weight fails
        """
        pass

    def price(self, model: MonteCarloAssetModel, evaluation_time: float = 0.0) -> float:
        """Monte Carlo price: ensemble mean of get_value()."""
        return self.get_value(evaluation_time, model).mean()

    def value(self, model: MonteCarloAssetModel, evaluation_time: float = 0.0) -> ValuationResult:
        """Price with standard error, confidence interval and per-path values."""
        return ValuationResult.from_values(self.get_value(evaluation_time, model), evaluation_time)
