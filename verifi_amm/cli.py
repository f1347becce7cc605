"""
Command-line quotes against a pool snapshot.

Amounts are given in display units (e.g. `--amount 12.5` YES tokens) and
converted with the configured token decimals. Output is JSON on stdout.

Exit codes: 0 ok, 1 quote rejected, 2 usage error.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from decimal import Decimal
from pathlib import Path
from typing import Any, Optional, Sequence

from .config import AmmConfig, load_config
from .core.slippage import is_within_slippage, min_output_for_tolerance
from .errors import AmmError, InvariantViolation
from .fixed_point import from_base_units, to_base_units
from .integration.quote_service import (
    AddLiquidityQuoteRequest,
    PoolSnapshot,
    QuoteResponse,
    RemoveLiquidityQuoteRequest,
    SwapDirection,
    SwapInputQuoteRequest,
    SwapQuoteRequest,
    quote_add_liquidity,
    quote_remove_liquidity,
    quote_swap,
    quote_swap_input,
)

logger = logging.getLogger(__name__)


def _jsonable(value: Any) -> Any:
    if isinstance(value, Decimal):
        return format(value.normalize(), "f")
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


def _pool_from_args(args: argparse.Namespace, cfg: AmmConfig) -> PoolSnapshot:
    d = cfg.outcome_decimals
    return PoolSnapshot(
        yes_reserve=to_base_units(args.yes_reserve, d),
        no_reserve=to_base_units(args.no_reserve, d),
        lp_supply=to_base_units(args.lp_supply, cfg.lp_decimals),
        fee_bps=cfg.fee_bps if args.fee_bps is None else args.fee_bps,
    )


def _direction(args: argparse.Namespace) -> SwapDirection:
    return SwapDirection(args.direction.replace("-", "_"))


def _emit(payload: dict[str, Any]) -> None:
    sys.stdout.write(json.dumps(_jsonable(payload), sort_keys=True) + "\n")


def _emit_response(resp: QuoteResponse[Any], body: dict[str, Any]) -> int:
    if not resp.ok:
        _emit({"ok": False, "code": resp.code, "error": resp.error})
        return 1
    _emit({"ok": True, **body})
    return 0


def _cmd_swap(args: argparse.Namespace, cfg: AmmConfig) -> int:
    d = cfg.outcome_decimals
    req = SwapQuoteRequest(
        pool=_pool_from_args(args, cfg),
        direction=_direction(args),
        amount_in=to_base_units(args.amount, d),
        slippage_bps=args.slippage_bps,
    )
    resp = quote_swap(req, cfg)
    if not resp.ok:
        return _emit_response(resp, {})
    swap = resp.unwrap()
    return _emit_response(
        resp,
        {
            "output_amount": from_base_units(swap.output_amount, d),
            "fee_amount": from_base_units(swap.fee_amount, d),
            "effective_price": swap.effective_price,
            "spot_price": swap.spot_price,
            "price_impact_pct": swap.price_impact_pct,
            "min_amount_out": from_base_units(resp.bound, d),
            "min_amount_out_units": resp.bound,
        },
    )


def _cmd_swap_input(args: argparse.Namespace, cfg: AmmConfig) -> int:
    d = cfg.outcome_decimals
    req = SwapInputQuoteRequest(
        pool=_pool_from_args(args, cfg),
        direction=_direction(args),
        amount_out=to_base_units(args.amount, d),
        slippage_bps=args.slippage_bps,
    )
    resp = quote_swap_input(req, cfg)
    if not resp.ok:
        return _emit_response(resp, {})
    quote = resp.unwrap()
    return _emit_response(
        resp,
        {
            "amount_in": from_base_units(quote.amount_in, d),
            "output_amount": from_base_units(quote.swap.output_amount, d),
            "price_impact_pct": quote.swap.price_impact_pct,
            "max_amount_in": from_base_units(resp.bound, d),
            "max_amount_in_units": resp.bound,
        },
    )


def _cmd_add(args: argparse.Namespace, cfg: AmmConfig) -> int:
    d = cfg.outcome_decimals
    req = AddLiquidityQuoteRequest(
        pool=_pool_from_args(args, cfg),
        yes_amount=to_base_units(args.yes_amount, d),
        no_amount=to_base_units(args.no_amount, d),
        slippage_bps=args.slippage_bps,
    )
    resp = quote_add_liquidity(req, cfg)
    if not resp.ok:
        return _emit_response(resp, {})
    res = resp.unwrap()
    lp = cfg.lp_decimals
    return _emit_response(
        resp,
        {
            "lp_tokens_minted": from_base_units(res.lp_tokens_minted, lp),
            "yes_used": from_base_units(res.final_input_amount, d),
            "no_used": from_base_units(res.final_output_amount, d),
            "yes_refund": from_base_units(res.refund_input_amount, d),
            "no_refund": from_base_units(res.refund_output_amount, d),
            "share_of_pool_pct": res.share_of_pool_pct,
            "bootstrap": res.bootstrap,
            "min_lp_tokens": from_base_units(resp.bound, lp),
            "min_lp_tokens_units": resp.bound,
        },
    )


def _cmd_remove(args: argparse.Namespace, cfg: AmmConfig) -> int:
    d = cfg.outcome_decimals
    req = RemoveLiquidityQuoteRequest(
        pool=_pool_from_args(args, cfg),
        lp_tokens=to_base_units(args.lp_tokens, cfg.lp_decimals),
        slippage_bps=args.slippage_bps,
    )
    resp = quote_remove_liquidity(req, cfg)
    if not resp.ok:
        return _emit_response(resp, {})
    res = resp.unwrap()
    min_yes, min_no = resp.bound
    return _emit_response(
        resp,
        {
            "yes_out": from_base_units(res.input_amount_out, d),
            "no_out": from_base_units(res.output_amount_out, d),
            "share_of_pool_pct": res.share_of_pool_pct,
            "min_yes_out": from_base_units(min_yes, d),
            "min_no_out": from_base_units(min_no, d),
        },
    )


def _cmd_min_output(args: argparse.Namespace, cfg: AmmConfig) -> int:
    d = cfg.outcome_decimals
    tol = cfg.slippage_bps if args.slippage_bps is None else args.slippage_bps
    expected = to_base_units(args.expected, d)
    candidate = None if args.candidate is None else to_base_units(args.candidate, d)
    try:
        body: dict[str, Any] = {"min_output": from_base_units(min_output_for_tolerance(expected, tol), d)}
        if candidate is not None:
            body["within_slippage"] = is_within_slippage(expected, candidate, tol)
    except AmmError as exc:
        logger.info("min-output rejected (%s): %s", exc.code, exc)
        _emit({"ok": False, "code": exc.code, "error": str(exc)})
        return 1
    _emit({"ok": True, **body})
    return 0


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="verifi-amm-quote", description="Preview CPMM swaps and liquidity operations.")
    ap.add_argument("--config", type=Path, default=None, help="YAML config file (default: $VERIFI_AMM_CONFIG)")
    ap.add_argument("--log-level", default="WARNING", help="Python logging level (default: WARNING)")

    pool = argparse.ArgumentParser(add_help=False)
    pool.add_argument("--yes-reserve", required=True, help="YES reserve (display units)")
    pool.add_argument("--no-reserve", required=True, help="NO reserve (display units)")
    pool.add_argument("--lp-supply", default="0", help="Total LP supply (display units)")
    pool.add_argument("--fee-bps", type=int, default=None, help="Pool fee override (basis points)")

    slip = argparse.ArgumentParser(add_help=False)
    slip.add_argument("--slippage-bps", type=int, default=None, help="Slippage tolerance (basis points)")

    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("swap", parents=[pool, slip], help="Exact-in swap preview")
    p.add_argument("--direction", choices=["yes-to-no", "no-to-yes"], default="yes-to-no")
    p.add_argument("--amount", required=True, help="Input amount (display units)")
    p.set_defaults(func=_cmd_swap)

    p = sub.add_parser("swap-input", parents=[pool, slip], help="Required input for an exact output")
    p.add_argument("--direction", choices=["yes-to-no", "no-to-yes"], default="yes-to-no")
    p.add_argument("--amount", required=True, help="Desired output amount (display units)")
    p.set_defaults(func=_cmd_swap_input)

    p = sub.add_parser("add", parents=[pool, slip], help="Add-liquidity preview")
    p.add_argument("--yes-amount", required=True)
    p.add_argument("--no-amount", required=True)
    p.set_defaults(func=_cmd_add)

    p = sub.add_parser("remove", parents=[pool, slip], help="Remove-liquidity preview")
    p.add_argument("--lp-tokens", required=True)
    p.set_defaults(func=_cmd_remove)

    p = sub.add_parser("min-output", parents=[slip], help="Slippage bound for an expected output")
    p.add_argument("--expected", required=True)
    p.add_argument("--candidate", default=None, help="Check a candidate minimum against the tolerance")
    p.set_defaults(func=_cmd_min_output)

    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = _build_parser()
    args = ap.parse_args(argv)

    logging.basicConfig(level=str(args.log_level).upper(), format="%(levelname)s %(name)s: %(message)s")

    try:
        cfg = load_config(args.config)
        return int(args.func(args, cfg))
    except InvariantViolation:
        raise
    except (AmmError, TypeError) as exc:
        # Raised while parsing amounts/config, before any quote is computed.
        logger.error("%s", exc)
        sys.stderr.write(f"error: {exc}\n")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
