"""
CPMM swap kernel for YES/NO outcome-token pools.

- Fee is charged on the gross input and rounded toward zero.
- Pricing uses `net_in = gross_in - fee_total`; the whole fee stays in the pool.
- The output paid to the trader rounds down, required inputs round up.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import InsufficientLiquidity, InvalidInput, InvariantViolation
from ..fixed_point import BPS_DENOM, ceil_div, require_bps, require_int, require_positive


@dataclass(frozen=True)
class SwapExactInResult:
    amount_out: int
    fee_total: int
    net_in: int
    gross_in: int
    new_reserve_in: int
    new_reserve_out: int
    k_before: int
    k_after: int


def _require_reserves(reserve_in: int, reserve_out: int) -> None:
    require_int("reserve_in", reserve_in)
    require_int("reserve_out", reserve_out)
    if reserve_in <= 0 or reserve_out <= 0:
        raise InvalidInput(f"reserves must be positive (pool not initialised): ({reserve_in}, {reserve_out})")


def compute_fee_total(*, gross_in: int, fee_bps: int) -> int:
    """
    Compute `fee_total = floor(gross_in * fee_bps / 10_000)`.
    """
    require_int("gross_in", gross_in)
    require_bps("fee_bps", fee_bps)
    if gross_in < 0:
        raise InvalidInput("gross_in must be non-negative")
    return (gross_in * fee_bps) // BPS_DENOM


def swap_exact_in(
    *,
    reserve_in: int,
    reserve_out: int,
    amount_in: int,
    fee_bps: int,
) -> SwapExactInResult:
    """
    Exact-in swap quote + post-state.

    Raises InvalidInput on invalid inputs or if the swap would produce a zero output.
    """
    _require_reserves(reserve_in, reserve_out)
    require_positive("amount_in", amount_in)
    require_bps("fee_bps", fee_bps)

    k_before = reserve_in * reserve_out

    fee_total = compute_fee_total(gross_in=amount_in, fee_bps=fee_bps)
    net_in = amount_in - fee_total

    # amount_out = floor(reserve_out * net_in / (reserve_in + net_in))
    amount_out = (reserve_out * net_in) // (reserve_in + net_in)
    if amount_out <= 0:
        raise InvalidInput(f"amount_out is zero (trade too small): amount_in={amount_in}")
    if amount_out >= reserve_out:
        raise InvariantViolation(f"amount_out ({amount_out}) would drain reserve_out ({reserve_out})")

    new_reserve_in = reserve_in + amount_in
    new_reserve_out = reserve_out - amount_out

    return SwapExactInResult(
        amount_out=amount_out,
        fee_total=fee_total,
        net_in=net_in,
        gross_in=amount_in,
        new_reserve_in=new_reserve_in,
        new_reserve_out=new_reserve_out,
        k_before=k_before,
        k_after=new_reserve_in * new_reserve_out,
    )


def required_net_in(*, reserve_in: int, reserve_out: int, amount_out: int) -> int:
    """
    Smallest `net_in` with `floor(reserve_out * net_in / (reserve_in + net_in)) >= amount_out`.

    That is `ceil(reserve_in * amount_out / (reserve_out - amount_out))`.
    """
    _require_reserves(reserve_in, reserve_out)
    require_positive("amount_out", amount_out)
    if amount_out >= reserve_out:
        raise InsufficientLiquidity(
            f"cannot drain full reserve: amount_out ({amount_out}) >= reserve_out ({reserve_out})"
        )
    return ceil_div(reserve_in * amount_out, reserve_out - amount_out)


def swap_exact_out(
    *,
    reserve_in: int,
    reserve_out: int,
    amount_out: int,
    fee_bps: int,
) -> int:
    """
    Smallest gross input whose exact-in quote pays at least `amount_out`.

    With a floor fee the net input is `gross - floor(gross * f / D) = ceil(gross * (D - f) / D)`,
    so the minimum gross is `floor((net_in - 1) * D / (D - f)) + 1`.
    """
    require_bps("fee_bps", fee_bps)
    net_in = required_net_in(reserve_in=reserve_in, reserve_out=reserve_out, amount_out=amount_out)
    if fee_bps == BPS_DENOM:
        raise InvalidInput("cannot compute a required input with a 100% fee")

    fee_denominator = BPS_DENOM - fee_bps
    amount_in = ((net_in - 1) * BPS_DENOM) // fee_denominator + 1

    net_in_actual = amount_in - compute_fee_total(gross_in=amount_in, fee_bps=fee_bps)
    if net_in_actual < net_in:
        raise InvariantViolation(
            f"computed amount_in ({amount_in}) insufficient for amount_out ({amount_out})"
        )
    return amount_in
