"""
Tests for MonteCarloAssetModel and ModelParameters.
"""

import threading

import numpy as np
import pytest

from mc_valuation.exceptions import TimeOutOfRangeError
from mc_valuation.models.asset_model import BlackScholesModel
from mc_valuation.models.asset_process import AssetProcess, DiscretizationScheme
from mc_valuation.models.monte_carlo_model import MonteCarloAssetModel
from mc_valuation.models.numeraire import MoneyMarketNumeraire
from mc_valuation.models.parameters import ModelParameters
from mc_valuation.simulation.brownian import BrownianMotion
from mc_valuation.simulation.time_grid import TimeGrid


class TestModelParameters:
    def test_defaults(self):
        params = ModelParameters(initial_value=100.0, risk_free_rate=0.04, volatility=0.25)
        assert params.seed == 31415
        assert params.n_paths == 10_000
        assert params.n_steps == 10
        assert params.dt == 0.1
        assert params.horizon == pytest.approx(1.0)

    def test_time_grid(self):
        params = ModelParameters(100.0, 0.04, 0.25, n_steps=4, dt=0.25)
        assert params.time_grid() == TimeGrid.uniform(0.0, 4, 0.25)

    def test_horizon_is_last_grid_time(self):
        params = ModelParameters(100.0, 0.04, 0.25, n_steps=8, dt=0.25, initial_time=0.5)
        assert params.horizon == pytest.approx(params.time_grid().last_time)
        assert params.horizon == pytest.approx(2.5)

    def test_immutable(self):
        params = ModelParameters(100.0, 0.04, 0.25)
        with pytest.raises(AttributeError):
            params.volatility = 0.3

    @pytest.mark.parametrize(
        "kwargs, match",
        [
            ({"initial_value": 0.0}, "initial_value must be > 0"),
            ({"volatility": -0.1}, "volatility must be >= 0"),
            ({"n_paths": 0}, "n_paths must be >= 1"),
            ({"n_steps": 0}, "n_steps must be >= 1"),
            ({"dt": 0.0}, "dt must be > 0"),
        ],
    )
    def test_invalid(self, kwargs, match):
        base = {"initial_value": 100.0, "risk_free_rate": 0.04, "volatility": 0.25}
        base.update(kwargs)
        with pytest.raises(ValueError, match=match):
            ModelParameters(**base)

    def test_from_config(self):
        params = ModelParameters.from_config(100.0, 0.04, 0.25)
        assert params.n_paths == 10_000
        assert params.seed == 31415


class TestMonteCarloAssetModel:
    def test_from_parameters(self, reference_params):
        simulation = MonteCarloAssetModel.from_parameters(reference_params)

        assert simulation.n_paths == 10_000
        assert simulation.n_assets == 1
        assert simulation.time_grid.n_steps == 10
        assert isinstance(simulation.numeraire_model, MoneyMarketNumeraire)

    def test_asset_value_at_grid_time(self, small_simulation):
        value = small_simulation.get_asset_value(0.5, 0)
        np.testing.assert_array_equal(value.values, small_simulation.asset_paths.values[5, 0])
        assert value.time == pytest.approx(0.5)

    def test_initial_asset_value(self, small_simulation):
        np.testing.assert_array_equal(small_simulation.get_asset_value(0.0, 0).values, 100.0)

    def test_off_grid_uses_previous_grid_time(self, small_simulation):
        value = small_simulation.get_asset_value(0.57, 0)
        np.testing.assert_array_equal(value.values, small_simulation.asset_paths.values[5, 0])

    def test_asset_value_by_name(self, simulation_factory):
        simulation = simulation_factory(n_paths=10, name="SPX")
        np.testing.assert_array_equal(
            simulation.get_asset_value(1.0, "SPX").values,
            simulation.get_asset_value(1.0, 0).values,
        )

    def test_unknown_name(self, small_simulation):
        with pytest.raises(KeyError):
            small_simulation.get_asset_value(1.0, "missing")

    def test_unknown_index(self, small_simulation):
        with pytest.raises(IndexError):
            small_simulation.get_asset_value(1.0, 1)

    @pytest.mark.parametrize("time", [-0.5, 1.2])
    def test_out_of_horizon(self, small_simulation, time):
        with pytest.raises(TimeOutOfRangeError):
            small_simulation.get_asset_value(time, 0)

    def test_numeraire_and_weights(self, small_simulation):
        assert small_simulation.get_numeraire(1.0).mean() == pytest.approx(np.exp(0.04))
        assert small_simulation.get_monte_carlo_weights(1.0).mean() == 1.0

    def test_scheme_selection(self, reference_params):
        log_euler = MonteCarloAssetModel.from_parameters(reference_params)
        euler = MonteCarloAssetModel.from_parameters(
            reference_params, scheme=DiscretizationScheme.EULER
        )
        assert log_euler.asset_paths != euler.asset_paths

    def test_paths_simulated_once(self, small_simulation):
        assert small_simulation.asset_paths is small_simulation.asset_paths

    def test_concurrent_first_access(self):
        """Concurrent readers all see the same simulated tensor."""
        grid = TimeGrid.uniform(0.0, 10, 0.1)
        simulation = MonteCarloAssetModel(
            BlackScholesModel(100.0, 0.04, 0.25),
            AssetProcess(BrownianMotion(grid, 1, 2_000, seed=31415)),
        )
        seen = []

        def read():
            seen.append(simulation.asset_paths)

        threads = [threading.Thread(target=read) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert all(tensor is seen[0] for tensor in seen)

    def test_same_seed_same_paths(self, reference_params):
        first = MonteCarloAssetModel.from_parameters(reference_params)
        second = MonteCarloAssetModel.from_parameters(reference_params, n_workers=4)
        assert first.asset_paths == second.asset_paths
