"""
Asset dynamics models.

[T1] Black-Scholes SDE under the risk-neutral measure: dS = r S dt + σ S dW

A model only supplies coefficients; the discretization lives in
:mod:`mc_valuation.models.asset_process`.
"""

from abc import ABC, abstractmethod
from typing import Optional

import numpy as np

from mc_valuation.models.parameters import ModelParameters


class AssetModel(ABC):
    """
    Coefficients of a lognormal-type diffusion, one entry per asset.

    Asset i is driven by Brownian factor i.
    """

    @property
    @abstractmethod
    def initial_values(self) -> np.ndarray:
        """S_i(t0), shape (n_assets,)."""
        ...

    @property
    @abstractmethod
    def drift(self) -> np.ndarray:
        """Drift μ_i, shape (n_assets,)."""
        ...

    @property
    @abstractmethod
    def volatility(self) -> np.ndarray:
        """Volatility σ_i, shape (n_assets,)."""
        ...

    @property
    @abstractmethod
    def discount_rate(self) -> float:
        """Short rate of the money-market numeraire."""
        ...

    @property
    def asset_names(self) -> tuple[str, ...]:
        return tuple(f"asset_{i}" for i in range(self.n_assets))

    @property
    def n_assets(self) -> int:
        return len(self.initial_values)

    def asset_index(self, name: str) -> int:
        """Index of the asset with the given name."""
        try:
            return self.asset_names.index(name)
        except ValueError:
            raise KeyError(
                f"Unknown asset '{name}'. Available: {', '.join(self.asset_names)}"
            ) from None


class BlackScholesModel(AssetModel):
    """
    Single-asset Black-Scholes model with risk-neutral drift.

    Parameters
    ----------
    initial_value : float
        S(0)
    risk_free_rate : float
        r, used as both drift and discount rate
    volatility : float
        σ
    name : str, optional
        Asset name (default "asset_0")

    Examples
    --------
    >>> model = BlackScholesModel(initial_value=100.0, risk_free_rate=0.04, volatility=0.25)
    >>> model.n_assets
    1
    """

    def __init__(
        self,
        initial_value: float,
        risk_free_rate: float,
        volatility: float,
        name: Optional[str] = None,
    ):
        if initial_value <= 0:
            raise ValueError(f"CRITICAL: initial_value must be > 0, got {initial_value}")
        if volatility < 0:
            raise ValueError(f"CRITICAL: volatility must be >= 0, got {volatility}")
        self.initial_value = float(initial_value)
        self.risk_free_rate = float(risk_free_rate)
        self.sigma = float(volatility)
        self.name = name or "asset_0"

    @classmethod
    def from_parameters(cls, params: ModelParameters, name: Optional[str] = None) -> "BlackScholesModel":
        return cls(params.initial_value, params.risk_free_rate, params.volatility, name=name)

    @property
    def initial_values(self) -> np.ndarray:
        return np.array([self.initial_value])

    @property
    def drift(self) -> np.ndarray:
        return np.array([self.risk_free_rate])

    @property
    def volatility(self) -> np.ndarray:
        return np.array([self.sigma])

    @property
    def discount_rate(self) -> float:
        return self.risk_free_rate

    @property
    def asset_names(self) -> tuple[str, ...]:
        return (self.name,)

    def __repr__(self) -> str:
        return (
            f"BlackScholesModel(initial_value={self.initial_value}, "
            f"risk_free_rate={self.risk_free_rate}, volatility={self.sigma}, name={self.name!r})"
        )
