"""
Constant Product Market Maker (CPMM) swap calculator.

This module previews swaps between the two outcome tokens of a pool. The
ledger performs the authoritative computation at settlement; these previews
use the same integer formulas and never promise more than the ledger pays.

Algorithm Design:
- Type: Fixed-Point Integer Arithmetic / Deterministic Rounding
- Time Complexity: O(1) per swap operation
- Space Complexity: O(1) auxiliary
- Invariant: After each swap, x' * y' >= k (where k = x * y before swap)
"""

from __future__ import annotations

from decimal import Decimal

from ..errors import InvalidInput, InvariantViolation
from ..fixed_point import percent, ratio
from ..kernels.cpmm_swap import swap_exact_in as _kernel_swap_exact_in
from ..kernels.cpmm_swap import swap_exact_out as _kernel_swap_exact_out
from .invariant import assert_invariant_non_decreasing
from .types import SwapResult


DEFAULT_FEE_BPS = 30


def spot_price(reserve_a: int, reserve_b: int) -> Decimal:
    """
    Price of token A in units of token B: `reserve_b / reserve_a`.
    """
    if reserve_a <= 0 or reserve_b <= 0:
        raise InvalidInput(f"Reserves must be positive: ({reserve_a}, {reserve_b})")
    return ratio(reserve_b, reserve_a)


def compute_swap_output(
    input_amount: int,
    reserve_in: int,
    reserve_out: int,
    fee_bps: int = DEFAULT_FEE_BPS,
) -> SwapResult:
    """
    Compute output amount, fee, and price impact for an exact-in swap.

    This implements the CPMM formula:
        fee = floor(input_amount * fee_bps / 10_000)
        net_input = input_amount - fee
        output_amount = floor(reserve_out * net_input / (reserve_in + net_input))

    Post-swap reserves:
        new_reserve_in = reserve_in + input_amount  (fee stays in pool)
        new_reserve_out = reserve_out - output_amount

    Price impact is the relative gap between spot and effective price:
        impact = (input * reserve_out - output * reserve_in) / (input * reserve_out) * 100

    Args:
        input_amount: Exact input amount (smallest units)
        reserve_in: Current reserve of the token being sold
        reserve_out: Current reserve of the token being bought
        fee_bps: Fee in basis points (0-10000)

    Returns:
        SwapResult

    Raises:
        InvalidInput: Non-positive amount/reserves, fee out of range, or zero output
        InvariantViolation: A post-condition failed (calculation bug)
    """
    res = _kernel_swap_exact_in(
        reserve_in=reserve_in,
        reserve_out=reserve_out,
        amount_in=input_amount,
        fee_bps=fee_bps,
    )

    # spot - effective = reserve_out/reserve_in - out/in; compare with one common denominator.
    impact_denominator = input_amount * reserve_out
    impact_numerator = impact_denominator - res.amount_out * reserve_in
    if impact_numerator < 0:
        raise InvariantViolation(
            f"Negative price impact: effective price exceeds spot "
            f"(input={input_amount}, output={res.amount_out}, reserves=({reserve_in}, {reserve_out}))"
        )

    assert_invariant_non_decreasing(reserve_in, reserve_out, res.new_reserve_in, res.new_reserve_out)

    return SwapResult(
        input_amount=input_amount,
        output_amount=res.amount_out,
        fee_amount=res.fee_total,
        net_input=res.net_in,
        spot_price=ratio(reserve_out, reserve_in),
        effective_price=ratio(res.amount_out, input_amount),
        price_impact_pct=percent(impact_numerator, impact_denominator),
        new_reserve_in=res.new_reserve_in,
        new_reserve_out=res.new_reserve_out,
        k_before=res.k_before,
        k_after=res.k_after,
    )


def compute_swap_input(
    output_amount: int,
    reserve_in: int,
    reserve_out: int,
    fee_bps: int = DEFAULT_FEE_BPS,
) -> int:
    """
    Compute the input required to receive `output_amount` (inverse swap).

    Formula (rounded up, the amount is charged to the trader):
        input = reserve_in * output / ((reserve_out - output) * (1 - fee_bps / 10_000))

    The result is the smallest input for which `compute_swap_output` pays at
    least `output_amount`.

    Raises:
        InvalidInput: Non-positive amount/reserves or fee_bps == 10_000
        InsufficientLiquidity: output_amount >= reserve_out
    """
    return _kernel_swap_exact_out(
        reserve_in=reserve_in,
        reserve_out=reserve_out,
        amount_out=output_amount,
        fee_bps=fee_bps,
    )


def price_impact(
    input_amount: int,
    reserve_in: int,
    reserve_out: int,
    fee_bps: int = DEFAULT_FEE_BPS,
) -> Decimal:
    """Price impact (percent) of an exact-in swap."""
    return compute_swap_output(input_amount, reserve_in, reserve_out, fee_bps).price_impact_pct
