"""
Tests for the valuation entry points.
"""

import numpy as np
import pytest

from mc_valuation.exceptions import CalculationError
from mc_valuation.models.asset_process import DiscretizationScheme
from mc_valuation.models.monte_carlo_model import MonteCarloAssetModel
from mc_valuation.products.european import EuropeanOption
from mc_valuation.products.option_spec import OptionSpecification, OptionType
from mc_valuation.valuation import price_european_option, value_products


@pytest.fixture
def products():
    return [
        EuropeanOption(1.0, 90.0),
        EuropeanOption(1.0, 90.0, barrier=20.0),
        EuropeanOption(1.0, 110.0, option_type=OptionType.PUT),
        EuropeanOption(0.5, 100.0),
    ]


class TestPriceEuropeanOption:
    def test_matches_product_on_same_simulation(self, reference_params):
        spec = OptionSpecification(maturity=1.0, strike=90.0)
        result = price_european_option(reference_params, spec)

        simulation = MonteCarloAssetModel.from_parameters(reference_params)
        assert result.price == EuropeanOption.from_spec(spec).price(simulation)
        assert result.n_paths == reference_params.n_paths

    def test_reproducible(self, reference_params):
        spec = OptionSpecification(maturity=1.0, strike=90.0, barrier=30.0)
        first = price_european_option(reference_params, spec)
        second = price_european_option(reference_params, spec, n_workers=4)
        np.testing.assert_array_equal(first.values, second.values)

    def test_named_underlying(self, reference_params):
        by_name = price_european_option(
            reference_params, OptionSpecification(1.0, 90.0, underlying_name="SPX")
        )
        by_index = price_european_option(reference_params, OptionSpecification(1.0, 90.0))
        assert by_name.price == by_index.price

    def test_euler_scheme(self, reference_params):
        spec = OptionSpecification(maturity=1.0, strike=90.0)
        log_euler = price_european_option(reference_params, spec)
        euler = price_european_option(reference_params, spec, scheme=DiscretizationScheme.EULER)
        assert euler.price != log_euler.price
        assert euler.price == pytest.approx(log_euler.price, abs=0.5)

    def test_evaluation_time(self, reference_params):
        spec = OptionSpecification(maturity=1.0, strike=90.0)
        at_zero = price_european_option(reference_params, spec)
        at_maturity = price_european_option(reference_params, spec, evaluation_time=1.0)
        assert at_maturity.price == pytest.approx(at_zero.price * np.exp(0.04))

    def test_errors_propagate(self, reference_params):
        with pytest.raises(CalculationError):
            price_european_option(reference_params, OptionSpecification(maturity=5.0, strike=90.0))


class TestValueProducts:
    def test_matches_individual_valuation(self, small_simulation, products):
        results = value_products(products, small_simulation)
        for product, result in zip(products, results):
            assert result.price == product.price(small_simulation)

    def test_parallel_matches_sequential(self, small_simulation, products):
        sequential = value_products(products, small_simulation, n_workers=1)
        parallel = value_products(products, small_simulation, n_workers=4)
        assert [r.price for r in sequential] == [r.price for r in parallel]

    def test_simulation_shared(self, small_simulation, products):
        paths = small_simulation.asset_paths
        value_products(products, small_simulation, n_workers=4)
        assert small_simulation.asset_paths is paths

    def test_empty(self, small_simulation):
        assert value_products([], small_simulation) == []

    def test_failure_aborts(self, small_simulation, products):
        with pytest.raises(CalculationError):
            value_products(products + [EuropeanOption(3.0, 90.0)], small_simulation, n_workers=2)

    def test_invalid_workers(self, small_simulation, products):
        with pytest.raises(ValueError, match="n_workers must be >= 1"):
            value_products(products, small_simulation, n_workers=0)
