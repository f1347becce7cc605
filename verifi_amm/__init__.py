"""
verifi-amm: client-side CPMM pricing engine for YES/NO outcome-token pools.

Public API:
- swaps: `compute_swap_output`, `compute_swap_input`
- liquidity: `compute_add_liquidity`, `compute_remove_liquidity`
- invariant: `invariant`, `verify_invariant_non_decreasing`
- slippage: `min_output_for_tolerance`, `is_within_slippage`
"""

from .core import (
    DEFAULT_FEE_BPS,
    MAX_SLIPPAGE_BPS,
    AddLiquidityResult,
    RemoveLiquidityResult,
    SwapResult,
    assert_invariant_non_decreasing,
    compute_add_liquidity,
    compute_remove_liquidity,
    compute_swap_input,
    compute_swap_output,
    invariant,
    is_within_slippage,
    max_input_for_tolerance,
    min_lp_tokens_for_tolerance,
    min_output_for_tolerance,
    price_impact,
    spot_price,
    verify_invariant_non_decreasing,
)
from .errors import AmmError, InsufficientLiquidity, InvalidInput, InvariantViolation
from .fixed_point import (
    BASE_ASSET_DECIMALS,
    LP_TOKEN_DECIMALS,
    OUTCOME_TOKEN_DECIMALS,
    from_base_units,
    to_base_units,
)
from .kernels.lp_math import MINIMUM_LIQUIDITY

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_FEE_BPS",
    "MAX_SLIPPAGE_BPS",
    "MINIMUM_LIQUIDITY",
    "OUTCOME_TOKEN_DECIMALS",
    "BASE_ASSET_DECIMALS",
    "LP_TOKEN_DECIMALS",
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
    "to_base_units",
    "from_base_units",
    "SwapResult",
    "AddLiquidityResult",
    "RemoveLiquidityResult",
    "AmmError",
    "InvalidInput",
    "InsufficientLiquidity",
    "InvariantViolation",
]
