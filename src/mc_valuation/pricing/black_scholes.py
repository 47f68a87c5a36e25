"""
Closed-form Black-Scholes prices for validating Monte Carlo estimates.

Not used by the simulation itself.

References
----------
[T1] Black, F., & Scholes, M. (1973). The pricing of options and corporate liabilities.
[T1] Hull, J. C. (2018). Options, Futures, and Other Derivatives (10th ed.).
"""

import numpy as np
from scipy import stats

from mc_valuation.config.tolerances import PUT_CALL_PARITY_TOLERANCE
from mc_valuation.products.option_spec import OptionType


def _calculate_d1_d2(
    spot: float,
    strike: float,
    rate: float,
    volatility: float,
    time_to_expiry: float,
    dividend: float,
) -> tuple[float, float]:
    """
    Calculate d1 and d2 parameters.

    [T1] d1 = (ln(S/K) + (r - q + σ²/2)T) / (σ√T)
    [T1] d2 = d1 - σ√T
    """
    vol_sqrt_t = volatility * np.sqrt(time_to_expiry)
    d1 = (
        np.log(spot / strike) + (rate - dividend + 0.5 * volatility**2) * time_to_expiry
    ) / vol_sqrt_t
    return d1, d1 - vol_sqrt_t


def _validate_inputs(
    spot: float,
    strike: float,
    volatility: float,
    time_to_expiry: float,
) -> None:
    """Validate Black-Scholes inputs."""
    if spot <= 0:
        raise ValueError(f"CRITICAL: spot must be > 0, got {spot}")
    if strike <= 0:
        raise ValueError(f"CRITICAL: strike must be > 0, got {strike}")
    if volatility < 0:
        raise ValueError(f"CRITICAL: volatility must be >= 0, got {volatility}")
    if time_to_expiry < 0:
        raise ValueError(f"CRITICAL: time_to_expiry must be >= 0, got {time_to_expiry}")


def _forward_intrinsic(
    spot: float,
    strike: float,
    rate: float,
    time_to_expiry: float,
    dividend: float,
    option_type: OptionType,
) -> float:
    """Discounted intrinsic value on the forward; the σ√T → 0 limit."""
    forward_spot = spot * np.exp(-dividend * time_to_expiry)
    discounted_strike = strike * np.exp(-rate * time_to_expiry)
    if option_type == OptionType.CALL:
        return float(max(forward_spot - discounted_strike, 0.0))
    return float(max(discounted_strike - forward_spot, 0.0))


def black_scholes_call(
    spot: float,
    strike: float,
    rate: float,
    volatility: float,
    time_to_expiry: float,
    dividend: float = 0.0,
) -> float:
    """
    Price a European call.

    [T1] C = S*e^(-qT)*N(d1) - K*e^(-rT)*N(d2)

    Parameters
    ----------
    spot : float
        Current spot price
    strike : float
        Strike price
    rate : float
        Risk-free rate (decimal)
    volatility : float
        Volatility (decimal)
    time_to_expiry : float
        Time to expiry (years)
    dividend : float, default 0.0
        Dividend yield (decimal)

    Returns
    -------
    float
        Call option price

    Examples
    --------
    >>> 10.0 < black_scholes_call(100, 90, 0.04, 0.25, 1.0) < 100.0
    True
    """
    _validate_inputs(spot, strike, volatility, time_to_expiry)

    if time_to_expiry == 0 or volatility == 0:
        return _forward_intrinsic(spot, strike, rate, time_to_expiry, dividend, OptionType.CALL)

    d1, d2 = _calculate_d1_d2(spot, strike, rate, volatility, time_to_expiry, dividend)
    call_price = (
        spot * np.exp(-dividend * time_to_expiry) * stats.norm.cdf(d1)
        - strike * np.exp(-rate * time_to_expiry) * stats.norm.cdf(d2)
    )
    return float(call_price)


def black_scholes_put(
    spot: float,
    strike: float,
    rate: float,
    volatility: float,
    time_to_expiry: float,
    dividend: float = 0.0,
) -> float:
    """
    Price a European put.

    [T1] P = K*e^(-rT)*N(-d2) - S*e^(-qT)*N(-d1)
    """
    _validate_inputs(spot, strike, volatility, time_to_expiry)

    if time_to_expiry == 0 or volatility == 0:
        return _forward_intrinsic(spot, strike, rate, time_to_expiry, dividend, OptionType.PUT)

    d1, d2 = _calculate_d1_d2(spot, strike, rate, volatility, time_to_expiry, dividend)
    put_price = (
        strike * np.exp(-rate * time_to_expiry) * stats.norm.cdf(-d2)
        - spot * np.exp(-dividend * time_to_expiry) * stats.norm.cdf(-d1)
    )
    return float(put_price)


def black_scholes_price(
    spot: float,
    strike: float,
    rate: float,
    volatility: float,
    time_to_expiry: float,
    option_type: OptionType = OptionType.CALL,
    dividend: float = 0.0,
) -> float:
    """Price a European call or put."""
    if option_type == OptionType.CALL:
        return black_scholes_call(spot, strike, rate, volatility, time_to_expiry, dividend)
    return black_scholes_put(spot, strike, rate, volatility, time_to_expiry, dividend)


def put_call_parity_check(
    call_price: float,
    put_price: float,
    spot: float,
    strike: float,
    rate: float,
    time_to_expiry: float,
    dividend: float = 0.0,
    tolerance: float = PUT_CALL_PARITY_TOLERANCE,
) -> tuple[bool, float]:
    """
    Verify put-call parity holds.

    [T1] Put-Call Parity: C - P = S*e^(-qT) - K*e^(-rT)

    Returns
    -------
    tuple[bool, float]
        (parity_holds, error)
    """
    actual_diff = call_price - put_price
    expected_diff = (
        spot * np.exp(-dividend * time_to_expiry)
        - strike * np.exp(-rate * time_to_expiry)
    )
    error = abs(actual_diff - expected_diff)
    return error < tolerance, error
