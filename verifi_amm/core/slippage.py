"""
Slippage bounds for ledger submissions.

The ledger re-checks these bounds atomically at settlement, which is the
engine's only protection against reserves moving after a preview.
"""

from __future__ import annotations

from ..errors import InvalidInput
from ..fixed_point import BPS_DENOM, ceil_div, require_bps, require_non_negative


MAX_SLIPPAGE_BPS = 5000


def _require_tolerance(tolerance_bps: int) -> None:
    try:
        require_bps("tolerance_bps", tolerance_bps, hi=MAX_SLIPPAGE_BPS)
    except InvalidInput as exc:
        raise InvalidInput(f"{exc} (maximum slippage is {MAX_SLIPPAGE_BPS} bps)") from exc


def min_output_for_tolerance(expected_output: int, tolerance_bps: int) -> int:
    """
    `floor(expected_output * (1 - tolerance_bps / 10_000))`.

    Tolerances above MAX_SLIPPAGE_BPS are rejected, never clamped.
    """
    require_non_negative("expected_output", expected_output)
    _require_tolerance(tolerance_bps)
    return (expected_output * (BPS_DENOM - tolerance_bps)) // BPS_DENOM


def is_within_slippage(expected_output: int, candidate_min_output: int, tolerance_bps: int) -> bool:
    """True iff `candidate_min_output >= expected_output * (1 - tolerance_bps / 10_000)` (exact)."""
    require_non_negative("expected_output", expected_output)
    require_non_negative("candidate_min_output", candidate_min_output)
    _require_tolerance(tolerance_bps)
    return candidate_min_output * BPS_DENOM >= expected_output * (BPS_DENOM - tolerance_bps)


def min_lp_tokens_for_tolerance(lp_tokens: int, tolerance_bps: int) -> int:
    """Lower bound on LP tokens minted for a deposit."""
    return min_output_for_tolerance(lp_tokens, tolerance_bps)


def max_input_for_tolerance(expected_input: int, tolerance_bps: int) -> int:
    """Upper bound on the input charged for an exact-output swap (round up)."""
    require_non_negative("expected_input", expected_input)
    _require_tolerance(tolerance_bps)
    return ceil_div(expected_input * (BPS_DENOM + tolerance_bps), BPS_DENOM)
