"""Result types returned by the calculators.

All types are frozen dataclasses (immutable) and never persisted.

Units/conventions:
- `*_amount`, `*_reserve*`, `lp_*` are ints in the token's smallest unit.
- `*_pct` values are percentages (0-100) as Decimal.
- `*_price` values are out-per-in ratios as Decimal.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class SwapResult:
    """Preview of an exact-input swap."""

    input_amount: int
    output_amount: int
    fee_amount: int
    net_input: int
    spot_price: Decimal
    effective_price: Decimal
    price_impact_pct: Decimal
    new_reserve_in: int
    new_reserve_out: int
    k_before: int
    k_after: int


@dataclass(frozen=True)
class AddLiquidityResult:
    """
    Preview of a deposit.

    `final_*` are the amounts the pool actually consumes. When the deposit
    ratio differs from the pool ratio they are smaller than the `requested_*`
    amounts and the caller must refund (or not submit) the `refund_*` difference.
    """

    lp_tokens_minted: int
    final_input_amount: int
    final_output_amount: int
    share_of_pool_pct: Decimal
    requested_input_amount: int
    requested_output_amount: int
    new_total_lp_supply: int
    bootstrap: bool

    @property
    def refund_input_amount(self) -> int:
        return self.requested_input_amount - self.final_input_amount

    @property
    def refund_output_amount(self) -> int:
        return self.requested_output_amount - self.final_output_amount


@dataclass(frozen=True)
class RemoveLiquidityResult:
    """Preview of a proportional withdrawal."""

    input_amount_out: int
    output_amount_out: int
    share_of_pool_pct: Decimal
    lp_tokens_burned: int
    new_total_lp_supply: int
