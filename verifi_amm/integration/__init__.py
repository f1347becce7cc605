"""
Service layer: plain request/response quotes over pool snapshots.
"""

from .quote_service import (
    INVALID_TYPE,
    AddLiquidityQuoteRequest,
    PoolSnapshot,
    QuoteResponse,
    RemoveLiquidityQuoteRequest,
    SwapDirection,
    SwapInputQuote,
    SwapInputQuoteRequest,
    SwapQuoteRequest,
    quote_add_liquidity,
    quote_add_liquidity_or_raise,
    quote_remove_liquidity,
    quote_remove_liquidity_or_raise,
    quote_swap,
    quote_swap_input,
    quote_swap_input_or_raise,
    quote_swap_or_raise,
)

__all__ = [
    "INVALID_TYPE",
    "AddLiquidityQuoteRequest",
    "PoolSnapshot",
    "QuoteResponse",
    "RemoveLiquidityQuoteRequest",
    "SwapDirection",
    "SwapInputQuote",
    "SwapInputQuoteRequest",
    "SwapQuoteRequest",
    "quote_add_liquidity",
    "quote_add_liquidity_or_raise",
    "quote_remove_liquidity",
    "quote_remove_liquidity_or_raise",
    "quote_swap",
    "quote_swap_input",
    "quote_swap_input_or_raise",
    "quote_swap_or_raise",
]
