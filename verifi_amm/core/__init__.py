"""
Core CPMM calculators
"""

from .cpmm import (
    DEFAULT_FEE_BPS,
    compute_swap_input,
    compute_swap_output,
    price_impact,
    spot_price,
)
from .invariant import (
    assert_invariant_non_decreasing,
    invariant,
    verify_invariant_non_decreasing,
)
from .liquidity import compute_add_liquidity, compute_remove_liquidity
from .slippage import (
    MAX_SLIPPAGE_BPS,
    is_within_slippage,
    max_input_for_tolerance,
    min_lp_tokens_for_tolerance,
    min_output_for_tolerance,
)
from .types import AddLiquidityResult, RemoveLiquidityResult, SwapResult

__all__ = [
    "DEFAULT_FEE_BPS",
    "MAX_SLIPPAGE_BPS",
    "compute_swap_output",
    "compute_swap_input",
    "price_impact",
    "spot_price",
    "compute_add_liquidity",
    "compute_remove_liquidity",
    "invariant",
    "verify_invariant_non_decreasing",
    "assert_invariant_non_decreasing",
    "min_output_for_tolerance",
    "is_within_slippage",
    "min_lp_tokens_for_tolerance",
    "max_input_for_tolerance",
    "SwapResult",
    "AddLiquidityResult",
    "RemoveLiquidityResult",
]
