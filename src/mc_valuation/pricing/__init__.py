"""
Closed-form reference prices.

[T1] Black-Scholes for European calls and puts
"""

from mc_valuation.pricing.black_scholes import (
    black_scholes_call,
    black_scholes_price,
    black_scholes_put,
    put_call_parity_check,
)

__all__ = [
    "black_scholes_call",
    "black_scholes_price",
    "black_scholes_put",
    "put_call_parity_check",
]
