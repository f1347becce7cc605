"""
Liquidity math kernel for YES/NO pools.

Pure functions with explicit rounding rules:
- LP tokens minted and tokens withdrawn round down,
- token amounts consumed from a depositor round up.

`total_supply` always includes the permanently locked `MINIMUM_LIQUIDITY`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from ..errors import InsufficientLiquidity, InvalidInput, InvariantViolation
from ..fixed_point import ceil_div, require_int, require_non_negative, require_positive


MINIMUM_LIQUIDITY = 1000


@dataclass(frozen=True)
class MintLiquidityResult:
    liquidity_minted: int
    amount0_used: int
    amount1_used: int
    amount0_refund: int
    amount1_refund: int
    new_reserve0: int
    new_reserve1: int
    new_total_supply: int
    bootstrap: bool


@dataclass(frozen=True)
class BurnLiquidityResult:
    amount0_out: int
    amount1_out: int
    new_reserve0: int
    new_reserve1: int
    new_total_supply: int


def is_bootstrap(*, reserve0: int, reserve1: int, total_supply: int) -> bool:
    """A pool with no LP supply or an empty reserve takes the initial-mint path."""
    return total_supply == 0 or reserve0 == 0 or reserve1 == 0


def mint_liquidity_initial(*, amount0: int, amount1: int, min_lp_lock: int = MINIMUM_LIQUIDITY) -> tuple[int, int]:
    """
    Initial liquidity mint (pool bootstrap).

    Returns (liquidity_minted_to_creator, total_supply_including_lock).
    """
    require_positive("amount0", amount0)
    require_positive("amount1", amount1)
    require_positive("min_lp_lock", min_lp_lock)

    sqrt_product = math.isqrt(amount0 * amount1)
    minted = sqrt_product - min_lp_lock
    if minted <= 0:
        raise InsufficientLiquidity(
            f"insufficient initial liquidity: isqrt(amount0*amount1)={sqrt_product} <= MINIMUM_LIQUIDITY={min_lp_lock}"
        )
    return minted, minted + min_lp_lock


def mint_liquidity(
    *,
    reserve0: int,
    reserve1: int,
    total_supply: int,
    amount0_desired: int,
    amount1_desired: int,
    min_lp_lock: int = MINIMUM_LIQUIDITY,
) -> MintLiquidityResult:
    """
    Mint LP tokens for a deposit (Uniswap-v2 style).

    Seeded pools mint `min(lp_from_0, lp_from_1)` so an imbalanced deposit can
    never dilute existing LPs; the consumed amounts are recomputed from the
    minted LP and the difference is reported as a refund.
    """
    require_non_negative("reserve0", reserve0)
    require_non_negative("reserve1", reserve1)
    require_non_negative("total_supply", total_supply)
    require_positive("amount0_desired", amount0_desired)
    require_positive("amount1_desired", amount1_desired)

    if is_bootstrap(reserve0=reserve0, reserve1=reserve1, total_supply=total_supply):
        minted, lock_supply = mint_liquidity_initial(
            amount0=amount0_desired, amount1=amount1_desired, min_lp_lock=min_lp_lock
        )
        # The lock is minted once. A drained pool with LP still outstanding keeps
        # its supply and only adds the new mint.
        new_total_supply = lock_supply if total_supply == 0 else total_supply + minted
        return MintLiquidityResult(
            liquidity_minted=minted,
            amount0_used=amount0_desired,
            amount1_used=amount1_desired,
            amount0_refund=0,
            amount1_refund=0,
            new_reserve0=reserve0 + amount0_desired,
            new_reserve1=reserve1 + amount1_desired,
            new_total_supply=new_total_supply,
            bootstrap=True,
        )

    liquidity0 = (total_supply * amount0_desired) // reserve0
    liquidity1 = (total_supply * amount1_desired) // reserve1
    minted = min(liquidity0, liquidity1)
    if minted <= 0:
        raise InsufficientLiquidity("liquidity_minted is zero (deposit too small)")

    amount0_used = ceil_div(minted * reserve0, total_supply)
    amount1_used = ceil_div(minted * reserve1, total_supply)
    if amount0_used > amount0_desired or amount1_used > amount1_desired:
        raise InvariantViolation("used amounts exceed desired amounts")

    return MintLiquidityResult(
        liquidity_minted=minted,
        amount0_used=amount0_used,
        amount1_used=amount1_used,
        amount0_refund=amount0_desired - amount0_used,
        amount1_refund=amount1_desired - amount1_used,
        new_reserve0=reserve0 + amount0_used,
        new_reserve1=reserve1 + amount1_used,
        new_total_supply=total_supply + minted,
        bootstrap=False,
    )


def burn_liquidity(*, lp_amount: int, reserve0: int, reserve1: int, total_supply: int) -> BurnLiquidityResult:
    """
    Burn LP tokens for underlying assets (floor rounding).
    """
    for name, v in (
        ("lp_amount", lp_amount),
        ("reserve0", reserve0),
        ("reserve1", reserve1),
        ("total_supply", total_supply),
    ):
        require_int(name, v)

    if lp_amount <= 0:
        raise InvalidInput(f"lp_amount must be positive: {lp_amount}")
    if reserve0 <= 0 or reserve1 <= 0:
        raise InvalidInput(f"reserves must be positive (pool not initialised): ({reserve0}, {reserve1})")
    if lp_amount > total_supply:
        raise InsufficientLiquidity(f"cannot burn more LP than supply: {lp_amount} > {total_supply}")

    amount0_out = (lp_amount * reserve0) // total_supply
    amount1_out = (lp_amount * reserve1) // total_supply
    return BurnLiquidityResult(
        amount0_out=amount0_out,
        amount1_out=amount1_out,
        new_reserve0=reserve0 - amount0_out,
        new_reserve1=reserve1 - amount1_out,
        new_total_supply=total_supply - lp_amount,
    )
