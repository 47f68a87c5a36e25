"""
Monte Carlo simulation of an asset model.

Combines an AssetModel (coefficients), an AssetProcess (Brownian driver and
discretization scheme) and a NumeraireModel into the object products are
valued against: asset values, numeraire and Monte Carlo weights at any
time in the simulated horizon.

Asset paths are simulated on first access and cached; the cached tensor is
read-only and may be shared by concurrent product valuations.
"""

import logging
import threading
from typing import Optional, Union

from mc_valuation.exceptions import TimeOutOfRangeError
from mc_valuation.models.asset_model import AssetModel, BlackScholesModel
from mc_valuation.models.asset_process import AssetProcess, DiscretizationScheme
from mc_valuation.models.numeraire import MoneyMarketNumeraire, NumeraireModel
from mc_valuation.models.parameters import ModelParameters
from mc_valuation.simulation.brownian import BrownianMotion
from mc_valuation.simulation.random_variable import PerPathVariable
from mc_valuation.simulation.tensor import SimulationTensor
from mc_valuation.simulation.time_grid import TimeGrid

logger = logging.getLogger(__name__)


class MonteCarloAssetModel:
    """
    Simulated asset model queried by products.

    Parameters
    ----------
    model : AssetModel
        Asset coefficients
    process : AssetProcess
        Brownian driver and discretization scheme
    numeraire_model : NumeraireModel, optional
        Defaults to a money-market account at model.discount_rate

    Examples
    --------
    >>> params = ModelParameters(initial_value=100.0, risk_free_rate=0.04, volatility=0.25)
    >>> simulation = MonteCarloAssetModel.from_parameters(params)
    >>> simulation.get_asset_value(1.0, 0).n_paths
    10000
    """

    def __init__(
        self,
        model: AssetModel,
        process: AssetProcess,
        numeraire_model: Optional[NumeraireModel] = None,
    ):
        self.model = model
        self.process = process
        self.numeraire_model = numeraire_model or MoneyMarketNumeraire(
            rate=model.discount_rate,
            time_grid=process.time_grid,
            n_paths=process.n_paths,
        )
        self._asset_paths: Optional[SimulationTensor] = None
        self._lock = threading.Lock()

    @classmethod
    def from_parameters(
        cls,
        params: ModelParameters,
        scheme: DiscretizationScheme = DiscretizationScheme.LOG_EULER,
        n_workers: Optional[int] = None,
        name: Optional[str] = None,
    ) -> "MonteCarloAssetModel":
        """Black-Scholes simulation with one factor on the parameters' uniform grid."""
        brownian = BrownianMotion(
            params.time_grid(),
            n_factors=1,
            n_paths=params.n_paths,
            seed=params.seed,
            n_workers=n_workers,
        )
        return cls(
            BlackScholesModel.from_parameters(params, name=name),
            AssetProcess(brownian, scheme),
        )

    @property
    def time_grid(self) -> TimeGrid:
        return self.process.time_grid

    @property
    def n_paths(self) -> int:
        return self.process.n_paths

    @property
    def n_assets(self) -> int:
        return self.model.n_assets

    @property
    def asset_paths(self) -> SimulationTensor:
        """S, shape (n_times, n_assets, n_paths); simulated on first access."""
        if self._asset_paths is None:
            with self._lock:
                if self._asset_paths is None:
                    self._asset_paths = self.process.simulate(self.model)
                    logger.debug(f"Simulated asset paths: {self._asset_paths!r}")
        return self._asset_paths

    def asset_index(self, name: str) -> int:
        return self.model.asset_index(name)

    def get_asset_value(self, time: float, asset_index: Union[int, str]) -> PerPathVariable:
        """
        S_i(time) on every path.

        Off-grid times use the last grid time less than or equal to time.

        Raises
        ------
        TimeOutOfRangeError
            If time is outside the simulated horizon
        IndexError
            If the asset index is out of range
        KeyError
            If an asset name is unknown
        """
        if isinstance(asset_index, str):
            asset_index = self.asset_index(asset_index)
        grid = self.time_grid
        time_index = grid.time_index_nearest_less_or_equal(time)
        if time_index is None or not grid.contains(time):
            raise TimeOutOfRangeError(time, grid.initial_time, grid.last_time)
        values = self.asset_paths.at(time_index, asset_index)
        return PerPathVariable(values, time=grid.time(time_index))

    def get_numeraire(self, time: float) -> PerPathVariable:
        return self.numeraire_model.numeraire(time)

    def get_monte_carlo_weights(self, time: float) -> PerPathVariable:
        return self.numeraire_model.monte_carlo_weights(time)

    def __repr__(self) -> str:
        return f"MonteCarloAssetModel({self.model!r}, {self.process!r})"
