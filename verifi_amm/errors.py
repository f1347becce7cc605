"""Exception types for the CPMM pricing engine.

User-input failures (`InvalidInput`, `InsufficientLiquidity`) are also
`ValueError`s. `InvariantViolation` is not: it signals a calculation bug and
must surface distinctly from bad input.
"""

from __future__ import annotations


class AmmError(Exception):
    """Base class for all engine errors."""

    code = "AMM_ERROR"


class InvalidInput(AmmError, ValueError):
    """Raised for a non-positive amount or reserve, or an out-of-range fee/tolerance."""

    code = "INVALID_INPUT"


class InsufficientLiquidity(AmmError, ValueError):
    """Raised when the pool (or the LP supply) cannot cover the request."""

    code = "INSUFFICIENT_LIQUIDITY"


class InvariantViolation(AmmError):
    """Raised when a post-condition fails. Treat as fatal."""

    code = "INVARIANT_VIOLATION"

    def __init__(self, message: str, *, k_before: int | None = None, k_after: int | None = None) -> None:
        self.k_before = k_before
        self.k_after = k_after
        super().__init__(message)
