"""
Centralized tolerance framework for Monte Carlo valuation.

Tolerances are derived from precision requirements, not ad hoc tuning.

Tolerance Tiers:
    Tier 1 (Analytical): Machine-precision achievable, deterministic results
    Tier 2 (Grid): Floating-point time arithmetic on discretization grids
    Tier 3 (Stochastic): CLT-derived, path-dependent calculations

References:
    [T1] Higham (2002) "Accuracy and Stability of Numerical Algorithms"
    [T1] Glasserman (2003) Ch. 3-4 - Monte Carlo error bounds
"""

from typing import Final

import numpy as np

# =============================================================================
# Tier 1: Analytical Tolerances (Deterministic)
# =============================================================================

#: Discounting identities (e.g. N(T)/N(T) cancels at evaluation = maturity)
#: Tolerance: ~1e-12 allows for float64 accumulation errors
DISCOUNTING_TOLERANCE: Final[float] = 1e-12

#: Put-call parity on analytic reference prices
PUT_CALL_PARITY_TOLERANCE: Final[float] = 1e-8


# =============================================================================
# Tier 2: Grid Tolerances
# =============================================================================

#: Two times closer than this are the same grid point.
#: i * dt and a cumulative sum of dt differ by a few ulps only.
TIME_TOLERANCE: Final[float] = 1e-10


# =============================================================================
# Tier 3: Stochastic Tolerances (CLT-Derived)
# =============================================================================


def mc_tolerance(n_paths: int, sigma: float = 0.20, confidence: float = 3.0) -> float:
    """
    Calculate CLT-derived Monte Carlo tolerance.

    [T1] Standard error of MC estimate is σ/√N.
    3σ gives 99.7% confidence interval.

    Parameters
    ----------
    n_paths : int
        Number of Monte Carlo paths
    sigma : float
        Estimated standard deviation of the sampled quantity
    confidence : float
        Number of standard deviations (default 3 for 99.7% CI)

    Returns
    -------
    float
        Tolerance for MC vs analytical comparison

    Examples
    --------
    >>> round(mc_tolerance(10_000), 4)
    0.006
    """
    if n_paths <= 0:
        raise ValueError(f"CRITICAL: n_paths must be > 0, got {n_paths}")
    return confidence * sigma / np.sqrt(n_paths)


#: Number of standard errors an MC price may sit from its analytic reference
MC_PRICE_CONFIDENCE: Final[float] = 4.0

#: Relative tolerance on sample variance of Brownian increments (100k paths)
#: SE of a sample variance is Var * sqrt(2/N) ≈ 0.45% at N = 100k
INCREMENT_VARIANCE_RELATIVE_TOLERANCE: Final[float] = 0.03

#: Absolute bias allowed for the arithmetic Euler scheme at dt = 0.1
#: [T2] Weak order 1: (1 + r dt)^N vs exp(rT) gives ~0.06 on S0 = 100
EULER_BIAS_TOLERANCE: Final[float] = 0.15


# =============================================================================
# Tolerance Registry (For Dynamic Access)
# =============================================================================

TOLERANCE_REGISTRY: dict[str, float] = {
    "discounting": DISCOUNTING_TOLERANCE,
    "put_call_parity": PUT_CALL_PARITY_TOLERANCE,
    "time": TIME_TOLERANCE,
    "mc_price_confidence": MC_PRICE_CONFIDENCE,
    "increment_variance": INCREMENT_VARIANCE_RELATIVE_TOLERANCE,
    "euler_bias": EULER_BIAS_TOLERANCE,
}


def get_tolerance(name: str) -> float:
    """
    Get tolerance by name from registry.

    Raises
    ------
    KeyError
        If tolerance name not found
    """
    if name not in TOLERANCE_REGISTRY:
        available = ", ".join(sorted(TOLERANCE_REGISTRY.keys()))
        raise KeyError(f"Unknown tolerance '{name}'. Available: {available}")
    return TOLERANCE_REGISTRY[name]
