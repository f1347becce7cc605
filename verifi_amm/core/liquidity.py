"""
Liquidity calculator: LP minting for deposits, token amounts for withdrawals.
"""

from __future__ import annotations

from ..fixed_point import percent
from ..kernels.lp_math import MINIMUM_LIQUIDITY, burn_liquidity, mint_liquidity
from .types import AddLiquidityResult, RemoveLiquidityResult


def compute_add_liquidity(
    amount_in: int,
    amount_out: int,
    reserve_in: int,
    reserve_out: int,
    total_lp_supply: int,
    *,
    min_liquidity: int = MINIMUM_LIQUIDITY,
) -> AddLiquidityResult:
    """
    Compute LP tokens minted for a deposit of both outcome tokens.

    Bootstrap (total_lp_supply == 0 or an empty reserve):
        lp = isqrt(amount_in * amount_out) - MINIMUM_LIQUIDITY

    Seeded pool:
        lp = min(floor(supply * amount_in / reserve_in), floor(supply * amount_out / reserve_out))
        final_* = ceil(lp * reserve_* / supply)

    share_of_pool_pct = lp / (total_lp_supply + lp) * 100, so a first deposit
    reports 100% even though the pool also holds the locked minimum.

    The caller must refund `requested_* - final_*` to the depositor.

    Raises:
        InvalidInput: Non-positive deposit or negative reserves/supply
        InsufficientLiquidity: Deposit too small to mint any LP (or to clear the lock)
    """
    res = mint_liquidity(
        reserve0=reserve_in,
        reserve1=reserve_out,
        total_supply=total_lp_supply,
        amount0_desired=amount_in,
        amount1_desired=amount_out,
        min_lp_lock=min_liquidity,
    )
    return AddLiquidityResult(
        lp_tokens_minted=res.liquidity_minted,
        final_input_amount=res.amount0_used,
        final_output_amount=res.amount1_used,
        share_of_pool_pct=percent(res.liquidity_minted, total_lp_supply + res.liquidity_minted),
        requested_input_amount=amount_in,
        requested_output_amount=amount_out,
        new_total_lp_supply=res.new_total_supply,
        bootstrap=res.bootstrap,
    )


def compute_remove_liquidity(
    lp_tokens: int,
    reserve_in: int,
    reserve_out: int,
    total_lp_supply: int,
) -> RemoveLiquidityResult:
    """
    Compute token amounts returned for burning `lp_tokens`.

    Formula (round down, paid out):
        input_amount_out = floor(lp_tokens * reserve_in / total_lp_supply)
        output_amount_out = floor(lp_tokens * reserve_out / total_lp_supply)

    Raises:
        InvalidInput: Non-positive lp_tokens or reserves
        InsufficientLiquidity: lp_tokens > total_lp_supply
    """
    res = burn_liquidity(
        lp_amount=lp_tokens,
        reserve0=reserve_in,
        reserve1=reserve_out,
        total_supply=total_lp_supply,
    )
    return RemoveLiquidityResult(
        input_amount_out=res.amount0_out,
        output_amount_out=res.amount1_out,
        share_of_pool_pct=percent(lp_tokens, total_lp_supply),
        lp_tokens_burned=lp_tokens,
        new_total_lp_supply=res.new_total_supply,
    )
