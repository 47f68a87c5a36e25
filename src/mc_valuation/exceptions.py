"""
Error taxonomy for Monte Carlo valuation.

All errors derive from MCValuationError so callers can catch the family.
Errors always propagate to the caller of the valuation entry point; there
is no retry and no partial result. [T1: Deterministic numerics]
"""

from typing import Optional


class MCValuationError(Exception):
    """Base class for all valuation errors."""

    pass


class InvalidGridError(MCValuationError):
    """Raised when a time discretization is malformed."""

    pass


class DimensionMismatchError(MCValuationError):
    """Raised when factor/path/step counts disagree between components."""

    pass


class TimeOutOfRangeError(MCValuationError):
    """Raised when a query time lies outside the simulated horizon."""

    def __init__(self, time: float, start: float, end: float):
        self.time = time
        self.start = start
        self.end = end
        super().__init__(
            f"CRITICAL: time {time} outside simulated horizon [{start}, {end}]"
        )


class CalculationError(MCValuationError):
    """
    Raised when a valuation fails in an upstream dependency.

    The original exception is chained (``raise ... from e``) and exposed
    through :attr:`cause`.
    """

    @property
    def cause(self) -> Optional[BaseException]:
        """The upstream exception that aborted the valuation."""
        return self.__cause__
