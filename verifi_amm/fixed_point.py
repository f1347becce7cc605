"""
Fixed-point helpers shared by the kernels and the calculators.

Amounts are plain ints in the token's smallest unit. Display values
(`Decimal`) only appear at the edges: converting user input in, and
rendering prices/percentages out.

Rounding rules:
- amounts paid out to a user round down (`//`),
- amounts charged to a user round up (`ceil_div`).
"""

from __future__ import annotations

from decimal import ROUND_DOWN, Context, Decimal, InvalidOperation
from typing import Optional, Union

from .errors import InvalidInput


BPS_DENOM = 10_000

OUTCOME_TOKEN_DECIMALS = 6
BASE_ASSET_DECIMALS = 8
LP_TOKEN_DECIMALS = 6

# Precision for derived display ratios (prices, percentages).
RATIO_CONTEXT = Context(prec=28)

DisplayAmount = Union[Decimal, str, int]


def require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def require_positive(name: str, value: int) -> None:
    require_int(name, value)
    if value <= 0:
        raise InvalidInput(f"{name} must be positive: {value}")


def require_non_negative(name: str, value: int) -> None:
    require_int(name, value)
    if value < 0:
        raise InvalidInput(f"{name} must be non-negative: {value}")


def require_bps(name: str, value: int, *, hi: int = BPS_DENOM) -> None:
    require_int(name, value)
    if not (0 <= value <= hi):
        raise InvalidInput(f"{name} must be in [0, {hi}]: {value}")


def ceil_div(numerator: int, denominator: int) -> int:
    if denominator <= 0:
        raise ValueError("denominator must be positive")
    if numerator < 0:
        raise ValueError("numerator must be non-negative")
    return (numerator + denominator - 1) // denominator


def ratio(numerator: int, denominator: int) -> Decimal:
    """`numerator / denominator` as a Decimal (28 significant digits)."""
    if denominator == 0:
        raise ValueError("denominator must be non-zero")
    return RATIO_CONTEXT.divide(Decimal(numerator), Decimal(denominator))


def percent(numerator: int, denominator: int) -> Decimal:
    return ratio(numerator * 100, denominator)


def _validate_decimals(decimals: int) -> None:
    require_int("decimals", decimals)
    if not (0 <= decimals <= 18):
        raise InvalidInput(f"decimals must be in [0, 18]: {decimals}")


def to_base_units(value: DisplayAmount, decimals: int, *, rounding: Optional[str] = None) -> int:
    """
    Convert a display amount (e.g. `"1.5"` YES tokens) to smallest units.

    Values with more fractional digits than `decimals` are rejected unless a
    `decimal` rounding mode (e.g. `ROUND_DOWN`) is given.
    """
    _validate_decimals(decimals)
    if isinstance(value, bool) or not isinstance(value, (Decimal, str, int)):
        raise TypeError("value must be a Decimal, str or int")
    try:
        d = Decimal(value.strip()) if isinstance(value, str) else Decimal(value)
    except InvalidOperation as exc:
        raise InvalidInput(f"not a decimal amount: {value!r}") from exc
    if not d.is_finite():
        raise InvalidInput(f"amount must be finite: {value!r}")

    scaled = d.scaleb(decimals)
    integral = scaled.to_integral_value(rounding=rounding or ROUND_DOWN)
    if rounding is None and integral != scaled:
        raise InvalidInput(f"{value!r} has more than {decimals} decimal places")
    return int(integral)


def from_base_units(amount: int, decimals: int) -> Decimal:
    """Convert smallest units back to an exact display Decimal."""
    require_int("amount", amount)
    _validate_decimals(decimals)
    return Decimal(amount).scaleb(-decimals)
