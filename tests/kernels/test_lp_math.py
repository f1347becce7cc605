# [TESTER] v1

from __future__ import annotations

import pytest

from verifi_amm.errors import InsufficientLiquidity, InvalidInput
from verifi_amm.kernels.lp_math import (
    MINIMUM_LIQUIDITY,
    burn_liquidity,
    is_bootstrap,
    mint_liquidity,
    mint_liquidity_initial,
)


def test_initial_mint_uses_integer_isqrt() -> None:
    # Pick values where float sqrt would be wrong due to precision loss.
    n = (1 << 70) + 12345
    minted, total = mint_liquidity_initial(amount0=n, amount1=n)
    assert minted == n - MINIMUM_LIQUIDITY
    assert total == n


def test_initial_mint_must_clear_lock() -> None:
    with pytest.raises(InsufficientLiquidity, match="MINIMUM_LIQUIDITY"):
        mint_liquidity_initial(amount0=1_000, amount1=1_000)
    minted, _ = mint_liquidity_initial(amount0=1_001, amount1=1_001)
    assert minted == 1


def test_bootstrap_detection() -> None:
    assert is_bootstrap(reserve0=0, reserve1=0, total_supply=0)
    assert is_bootstrap(reserve0=10, reserve1=10, total_supply=0)
    assert is_bootstrap(reserve0=0, reserve1=10, total_supply=5)
    assert not is_bootstrap(reserve0=10, reserve1=10, total_supply=5)


def test_bootstrap_mint_locks_minimum_once() -> None:
    fresh = mint_liquidity(reserve0=0, reserve1=0, total_supply=0, amount0_desired=40_000, amount1_desired=10_000)
    assert fresh.liquidity_minted == 20_000 - MINIMUM_LIQUIDITY
    assert fresh.new_total_supply == 20_000

    # One reserve drained while LP is still outstanding.
    drained = mint_liquidity(reserve0=0, reserve1=7, total_supply=300, amount0_desired=40_000, amount1_desired=10_000)
    assert drained.bootstrap
    assert drained.liquidity_minted == 20_000 - MINIMUM_LIQUIDITY
    assert drained.new_total_supply == 300 + 20_000 - MINIMUM_LIQUIDITY
    assert (drained.new_reserve0, drained.new_reserve1) == (40_000, 10_007)


def test_mint_takes_minimum_and_reports_refund() -> None:
    # Pool ratio 1:2, deposit 1:1 -> the NO side over-supplies.
    res = mint_liquidity(
        reserve0=1_000_000,
        reserve1=2_000_000,
        total_supply=1_000_000,
        amount0_desired=10_000,
        amount1_desired=10_000,
    )
    assert res.liquidity_minted == 5_000
    assert res.amount0_used == 5_000
    assert res.amount1_used == 10_000
    assert res.amount0_refund == 5_000
    assert res.amount1_refund == 0
    assert res.new_total_supply == 1_005_000
    assert not res.bootstrap


def test_mint_rounds_consumed_amounts_up() -> None:
    res = mint_liquidity(
        reserve0=3,
        reserve1=7,
        total_supply=2,
        amount0_desired=5,
        amount1_desired=11,
    )
    # lp = min(2*5//3, 2*11//7) = min(3, 3) = 3
    assert res.liquidity_minted == 3
    # ceil(3*3/2) = 5, ceil(3*7/2) = 11
    assert (res.amount0_used, res.amount1_used) == (5, 11)


def test_mint_rejects_dust_deposit() -> None:
    with pytest.raises(InsufficientLiquidity, match="too small"):
        mint_liquidity(
            reserve0=10**12,
            reserve1=10**12,
            total_supply=10**6,
            amount0_desired=1,
            amount1_desired=1,
        )


def test_burn_rejects_more_than_supply() -> None:
    with pytest.raises(InsufficientLiquidity):
        burn_liquidity(lp_amount=11, reserve0=100, reserve1=100, total_supply=10)


def test_burn_rejects_empty_pool() -> None:
    with pytest.raises(InvalidInput):
        burn_liquidity(lp_amount=1, reserve0=0, reserve1=100, total_supply=10)


def test_burn_rounds_down() -> None:
    res = burn_liquidity(lp_amount=1, reserve0=10, reserve1=20, total_supply=3)
    assert (res.amount0_out, res.amount1_out) == (3, 6)
    assert (res.new_reserve0, res.new_reserve1, res.new_total_supply) == (7, 14, 2)
