"""
Request/response quote service for YES/NO pools.

Callers (trading UI, relayers) pass a pool snapshot taken from the reserve
source and get back a preview plus the bound to submit with the ledger
instruction. Quotes are advisory: reserves may move before settlement, and
the ledger enforces the bound atomically.

Caching, retries and user-facing messages belong to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, unique
from typing import Any, Callable, Generic, Mapping, Optional, Tuple, TypeVar

from ..config import AmmConfig
from ..core.cpmm import DEFAULT_FEE_BPS, compute_swap_input, compute_swap_output
from ..core.liquidity import compute_add_liquidity, compute_remove_liquidity
from ..core.slippage import max_input_for_tolerance, min_lp_tokens_for_tolerance, min_output_for_tolerance
from ..core.types import AddLiquidityResult, RemoveLiquidityResult, SwapResult
from ..errors import AmmError, InsufficientLiquidity, InvalidInput, InvariantViolation
from ..fixed_point import require_bps, require_non_negative

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Code for rejections caused by a non-int amount; `*_or_raise` re-raises TypeError.
INVALID_TYPE = "INVALID_TYPE"


@unique
class SwapDirection(Enum):
    YES_TO_NO = "yes_to_no"
    NO_TO_YES = "no_to_yes"

    @classmethod
    def from_flag(cls, yes_to_no: bool) -> "SwapDirection":
        return cls.YES_TO_NO if yes_to_no else cls.NO_TO_YES


def _snapshot_int(obj: Mapping[str, Any], key: str, default: Optional[int] = None) -> int:
    if key not in obj:
        if default is None:
            raise InvalidInput(f"pool snapshot missing {key!r}")
        return default
    value = obj[key]
    if isinstance(value, str) and value.strip().isdigit():
        # Reserve sources serialise u64 values as strings.
        value = int(value.strip())
    require_non_negative(key, value)
    return int(value)


@dataclass(frozen=True)
class PoolSnapshot:
    """Reserves of a YES/NO pool as of a recent read, in smallest units."""

    yes_reserve: int
    no_reserve: int
    lp_supply: int
    fee_bps: int = DEFAULT_FEE_BPS

    def __post_init__(self) -> None:
        require_non_negative("yes_reserve", self.yes_reserve)
        require_non_negative("no_reserve", self.no_reserve)
        require_non_negative("lp_supply", self.lp_supply)
        require_bps("fee_bps", self.fee_bps)

    @classmethod
    def from_dict(cls, obj: Mapping[str, Any], *, default_fee_bps: int = DEFAULT_FEE_BPS) -> "PoolSnapshot":
        if not isinstance(obj, Mapping):
            raise TypeError("pool snapshot must be a mapping")
        return cls(
            yes_reserve=_snapshot_int(obj, "yes_reserve"),
            no_reserve=_snapshot_int(obj, "no_reserve"),
            lp_supply=_snapshot_int(obj, "lp_supply", 0),
            fee_bps=_snapshot_int(obj, "fee_bps", default_fee_bps),
        )

    def to_dict(self) -> dict[str, int]:
        return {
            "yes_reserve": self.yes_reserve,
            "no_reserve": self.no_reserve,
            "lp_supply": self.lp_supply,
            "fee_bps": self.fee_bps,
        }

    @property
    def initialized(self) -> bool:
        return self.yes_reserve > 0 and self.no_reserve > 0 and self.lp_supply > 0

    def reserves_for(self, direction: SwapDirection) -> Tuple[int, int]:
        """Return (reserve_in, reserve_out) for a swap in `direction`."""
        if direction is SwapDirection.YES_TO_NO:
            return self.yes_reserve, self.no_reserve
        return self.no_reserve, self.yes_reserve


@dataclass(frozen=True)
class SwapQuoteRequest:
    pool: PoolSnapshot
    direction: SwapDirection
    amount_in: int
    slippage_bps: Optional[int] = None


@dataclass(frozen=True)
class SwapInputQuoteRequest:
    pool: PoolSnapshot
    direction: SwapDirection
    amount_out: int
    slippage_bps: Optional[int] = None


@dataclass(frozen=True)
class AddLiquidityQuoteRequest:
    pool: PoolSnapshot
    yes_amount: int
    no_amount: int
    slippage_bps: Optional[int] = None


@dataclass(frozen=True)
class RemoveLiquidityQuoteRequest:
    pool: PoolSnapshot
    lp_tokens: int
    slippage_bps: Optional[int] = None


@dataclass(frozen=True)
class SwapInputQuote:
    amount_in: int
    swap: SwapResult


@dataclass(frozen=True)
class QuoteResponse(Generic[T]):
    """
    Outcome of a quote.

    `bound` is what the ledger instruction should carry:
    - swap: min_amount_out
    - swap-input: max_amount_in
    - add liquidity: min_lp_tokens
    - remove liquidity: (min_yes_out, min_no_out)
    """

    ok: bool
    result: Optional[T] = None
    bound: Any = None
    error: Optional[str] = None
    code: Optional[str] = None

    def unwrap(self) -> T:
        if not self.ok or self.result is None:
            raise InvalidInput(self.error or "quote rejected")
        return self.result


def _tolerance(slippage_bps: Optional[int], config: AmmConfig) -> int:
    return config.slippage_bps if slippage_bps is None else slippage_bps


def _run(name: str, compute: Callable[[], Tuple[T, Any]]) -> QuoteResponse[T]:
    try:
        result, bound = compute()
    except InvariantViolation:
        logger.exception("%s: invariant violation", name)
        raise
    except (AmmError, TypeError) as exc:
        code = exc.code if isinstance(exc, AmmError) else INVALID_TYPE
        logger.info("%s rejected (%s): %s", name, code, exc)
        return QuoteResponse(ok=False, error=str(exc), code=code)
    logger.debug("%s: result=%s bound=%s", name, result, bound)
    return QuoteResponse(ok=True, result=result, bound=bound)


def quote_swap(request: SwapQuoteRequest, config: Optional[AmmConfig] = None) -> QuoteResponse[SwapResult]:
    """Preview an exact-in swap and derive `min_amount_out`."""
    config = config or AmmConfig()

    def compute() -> Tuple[SwapResult, int]:
        reserve_in, reserve_out = request.pool.reserves_for(request.direction)
        swap = compute_swap_output(request.amount_in, reserve_in, reserve_out, request.pool.fee_bps)
        min_out = min_output_for_tolerance(swap.output_amount, _tolerance(request.slippage_bps, config))
        return swap, min_out

    return _run("quote_swap", compute)


def quote_swap_input(
    request: SwapInputQuoteRequest, config: Optional[AmmConfig] = None
) -> QuoteResponse[SwapInputQuote]:
    """Preview the input needed for an exact output and derive `max_amount_in`."""
    config = config or AmmConfig()

    def compute() -> Tuple[SwapInputQuote, int]:
        reserve_in, reserve_out = request.pool.reserves_for(request.direction)
        fee_bps = request.pool.fee_bps
        amount_in = compute_swap_input(request.amount_out, reserve_in, reserve_out, fee_bps)
        swap = compute_swap_output(amount_in, reserve_in, reserve_out, fee_bps)
        max_in = max_input_for_tolerance(amount_in, _tolerance(request.slippage_bps, config))
        return SwapInputQuote(amount_in=amount_in, swap=swap), max_in

    return _run("quote_swap_input", compute)


def quote_add_liquidity(
    request: AddLiquidityQuoteRequest, config: Optional[AmmConfig] = None
) -> QuoteResponse[AddLiquidityResult]:
    """Preview a deposit (YES as the input side) and derive `min_lp_tokens`."""
    config = config or AmmConfig()

    def compute() -> Tuple[AddLiquidityResult, int]:
        pool = request.pool
        res = compute_add_liquidity(
            request.yes_amount,
            request.no_amount,
            pool.yes_reserve,
            pool.no_reserve,
            pool.lp_supply,
            min_liquidity=config.min_liquidity,
        )
        min_lp = min_lp_tokens_for_tolerance(res.lp_tokens_minted, _tolerance(request.slippage_bps, config))
        return res, min_lp

    return _run("quote_add_liquidity", compute)


def quote_remove_liquidity(
    request: RemoveLiquidityQuoteRequest, config: Optional[AmmConfig] = None
) -> QuoteResponse[RemoveLiquidityResult]:
    """Preview a withdrawal and derive the minimum YES/NO amounts out."""
    config = config or AmmConfig()

    def compute() -> Tuple[RemoveLiquidityResult, Tuple[int, int]]:
        pool = request.pool
        res = compute_remove_liquidity(request.lp_tokens, pool.yes_reserve, pool.no_reserve, pool.lp_supply)
        tol = _tolerance(request.slippage_bps, config)
        bound = (
            min_output_for_tolerance(res.input_amount_out, tol),
            min_output_for_tolerance(res.output_amount_out, tol),
        )
        return res, bound

    return _run("quote_remove_liquidity", compute)


def _or_raise(response: QuoteResponse[T]) -> QuoteResponse[T]:
    if response.ok:
        return response
    exc_type = {
        InvalidInput.code: InvalidInput,
        InsufficientLiquidity.code: InsufficientLiquidity,
        INVALID_TYPE: TypeError,
    }.get(response.code or "", InvalidInput)
    raise exc_type(response.error or "quote rejected")


def quote_swap_or_raise(request: SwapQuoteRequest, config: Optional[AmmConfig] = None) -> QuoteResponse[SwapResult]:
    return _or_raise(quote_swap(request, config))


def quote_swap_input_or_raise(
    request: SwapInputQuoteRequest, config: Optional[AmmConfig] = None
) -> QuoteResponse[SwapInputQuote]:
    return _or_raise(quote_swap_input(request, config))


def quote_add_liquidity_or_raise(
    request: AddLiquidityQuoteRequest, config: Optional[AmmConfig] = None
) -> QuoteResponse[AddLiquidityResult]:
    return _or_raise(quote_add_liquidity(request, config))


def quote_remove_liquidity_or_raise(
    request: RemoveLiquidityQuoteRequest, config: Optional[AmmConfig] = None
) -> QuoteResponse[RemoveLiquidityResult]:
    return _or_raise(quote_remove_liquidity(request, config))
