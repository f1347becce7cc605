# [TESTER] v1

from __future__ import annotations

import pytest

from verifi_amm.errors import InsufficientLiquidity, InvalidInput
from verifi_amm.kernels.cpmm_swap import compute_fee_total, required_net_in, swap_exact_in, swap_exact_out


def test_fee_rounds_toward_zero() -> None:
    assert compute_fee_total(gross_in=100_000_000, fee_bps=30) == 300_000
    # 333 * 30 / 10_000 = 0.999
    assert compute_fee_total(gross_in=333, fee_bps=30) == 0
    assert compute_fee_total(gross_in=334, fee_bps=30) == 1


def test_fee_rejects_out_of_range_bps() -> None:
    with pytest.raises(InvalidInput):
        compute_fee_total(gross_in=1, fee_bps=10_001)
    with pytest.raises(InvalidInput):
        compute_fee_total(gross_in=1, fee_bps=-1)


def test_swap_exact_in_keeps_fee_in_pool() -> None:
    res = swap_exact_in(reserve_in=1_000_000, reserve_out=1_000_000, amount_in=10_000, fee_bps=30)
    assert res.fee_total == 30
    assert res.net_in == 9_970
    assert res.new_reserve_in == 1_010_000
    assert res.new_reserve_out == 1_000_000 - res.amount_out
    assert res.k_after >= res.k_before


def test_swap_exact_in_rejects_empty_reserve() -> None:
    with pytest.raises(InvalidInput, match="not initialised"):
        swap_exact_in(reserve_in=0, reserve_out=1_000, amount_in=10, fee_bps=30)


def test_swap_exact_in_rejects_zero_output() -> None:
    with pytest.raises(InvalidInput, match="too small"):
        swap_exact_in(reserve_in=1_000_000, reserve_out=10, amount_in=1, fee_bps=0)


def test_swap_exact_in_full_fee_yields_no_output() -> None:
    with pytest.raises(InvalidInput):
        swap_exact_in(reserve_in=1_000, reserve_out=1_000, amount_in=100, fee_bps=10_000)


def test_swap_exact_in_rejects_bool_amount() -> None:
    with pytest.raises(TypeError):
        swap_exact_in(reserve_in=1_000, reserve_out=1_000, amount_in=True, fee_bps=0)


def test_required_net_in_is_minimal() -> None:
    # ceil(1000 * 100 / 900) = 112
    assert required_net_in(reserve_in=1_000, reserve_out=1_000, amount_out=100) == 112


def test_swap_exact_out_returns_minimal_gross_input() -> None:
    amount_in = swap_exact_out(reserve_in=1_000_000, reserve_out=1_000_000, amount_out=10_000, fee_bps=30)
    assert amount_in == 10_132

    ok = swap_exact_in(reserve_in=1_000_000, reserve_out=1_000_000, amount_in=amount_in, fee_bps=30)
    assert ok.amount_out >= 10_000
    short = swap_exact_in(reserve_in=1_000_000, reserve_out=1_000_000, amount_in=amount_in - 1, fee_bps=30)
    assert short.amount_out < 10_000


def test_swap_exact_out_rejects_draining_reserve() -> None:
    with pytest.raises(InsufficientLiquidity):
        swap_exact_out(reserve_in=1_000, reserve_out=1_000, amount_out=1_000, fee_bps=30)
    with pytest.raises(InsufficientLiquidity):
        swap_exact_out(reserve_in=1_000, reserve_out=1_000, amount_out=5_000, fee_bps=30)


def test_swap_exact_out_rejects_full_fee() -> None:
    with pytest.raises(InvalidInput, match="100% fee"):
        swap_exact_out(reserve_in=1_000, reserve_out=1_000, amount_out=10, fee_bps=10_000)
