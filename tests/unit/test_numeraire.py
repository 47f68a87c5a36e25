"""
Tests for numeraire models.

[T1] Money-market account: N(t) = exp(r (t - t0))
"""

import numpy as np
import pytest

from mc_valuation.exceptions import TimeOutOfRangeError
from mc_valuation.models.numeraire import MoneyMarketNumeraire, NumeraireModel
from mc_valuation.simulation.random_variable import PerPathVariable
from mc_valuation.simulation.time_grid import TimeGrid


@pytest.fixture
def grid():
    return TimeGrid.uniform(0.0, n_steps=10, dt=0.1)


class TestMoneyMarketNumeraire:
    def test_value(self, grid):
        numeraire = MoneyMarketNumeraire(rate=0.04, time_grid=grid, n_paths=5)
        value = numeraire.numeraire(0.5)

        assert value.n_paths == 5
        assert value.is_deterministic
        assert value.mean() == pytest.approx(np.exp(0.02))
        assert value.time == 0.5

    def test_unit_at_initial_time(self, grid):
        numeraire = MoneyMarketNumeraire(rate=0.04, time_grid=grid, n_paths=3)
        np.testing.assert_array_equal(numeraire.numeraire(0.0).values, 1.0)

    def test_relative_to_initial_time(self):
        grid = TimeGrid.uniform(2.0, n_steps=4, dt=0.25)
        numeraire = MoneyMarketNumeraire(rate=0.05, time_grid=grid, n_paths=1)
        assert numeraire.numeraire(3.0).mean() == pytest.approx(np.exp(0.05))

    def test_off_grid_time(self, grid):
        """The money-market account is continuous in time."""
        numeraire = MoneyMarketNumeraire(rate=0.04, time_grid=grid, n_paths=1)
        assert numeraire.numeraire(0.37).mean() == pytest.approx(np.exp(0.04 * 0.37))

    def test_uniform_weights(self, grid):
        numeraire = MoneyMarketNumeraire(rate=0.04, time_grid=grid, n_paths=4)
        np.testing.assert_array_equal(numeraire.monte_carlo_weights(0.7).values, 1.0)

    @pytest.mark.parametrize("time", [-0.1, 1.5])
    def test_out_of_range(self, grid, time):
        numeraire = MoneyMarketNumeraire(rate=0.04, time_grid=grid, n_paths=4)
        with pytest.raises(TimeOutOfRangeError) as excinfo:
            numeraire.numeraire(time)
        assert excinfo.value.time == time
        assert (excinfo.value.start, excinfo.value.end) == (0.0, grid.last_time)
        with pytest.raises(TimeOutOfRangeError):
            numeraire.monte_carlo_weights(time)

    def test_extrapolation(self, grid):
        numeraire = MoneyMarketNumeraire(rate=0.04, time_grid=grid, n_paths=2, extrapolate=True)
        assert numeraire.numeraire(2.0).mean() == pytest.approx(np.exp(0.08))
        assert numeraire.monte_carlo_weights(2.0).mean() == 1.0

    def test_discount_factor(self, grid):
        numeraire = MoneyMarketNumeraire(rate=0.04, time_grid=grid, n_paths=1)
        assert numeraire.discount_factor(1.0, 0.0) == pytest.approx(np.exp(-0.04))
        assert numeraire.discount_factor(1.0, 0.0) == pytest.approx(
            numeraire.numeraire(0.0).mean() / numeraire.numeraire(1.0).mean()
        )

    def test_invalid_paths(self, grid):
        with pytest.raises(ValueError, match="n_paths must be >= 1"):
            MoneyMarketNumeraire(rate=0.04, time_grid=grid, n_paths=0)


class TestCustomNumeraire:
    """Subclasses only implement _numeraire; weights default to 1."""

    def test_subclass(self, grid):
        class FlatNumeraire(NumeraireModel):
            def _numeraire(self, time: float) -> PerPathVariable:
                return PerPathVariable.constant(2.0, self.n_paths, time=time)

        numeraire = FlatNumeraire(grid, n_paths=3)
        assert numeraire.numeraire(0.5).mean() == 2.0
        assert numeraire.monte_carlo_weights(0.5).mean() == 1.0
        with pytest.raises(TimeOutOfRangeError):
            numeraire.numeraire(3.0)
