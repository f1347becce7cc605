"""
Engine configuration.

Defaults match the deployed pools. Values may come from a YAML file and be
overridden by environment variables:

    VERIFI_AMM_CONFIG          path to a YAML mapping
    VERIFI_AMM_FEE_BPS         swap fee, basis points
    VERIFI_AMM_SLIPPAGE_BPS    default slippage tolerance, basis points
    VERIFI_AMM_MIN_LIQUIDITY   LP units locked on bootstrap
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from .core.cpmm import DEFAULT_FEE_BPS
from .core.slippage import MAX_SLIPPAGE_BPS
from .errors import InvalidInput
from .fixed_point import (
    BASE_ASSET_DECIMALS,
    BPS_DENOM,
    LP_TOKEN_DECIMALS,
    OUTCOME_TOKEN_DECIMALS,
)
from .kernels.lp_math import MINIMUM_LIQUIDITY

logger = logging.getLogger(__name__)

ENV_CONFIG_PATH = "VERIFI_AMM_CONFIG"

DEFAULT_SLIPPAGE_BPS = 50


def _env_int(env: Mapping[str, str], name: str, default: int, *, lo: int, hi: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return int(default)
    try:
        v = int(raw.strip())
    except ValueError:
        logger.warning("ignoring non-integer %s=%r", name, raw)
        return int(default)
    if v < lo:
        return int(lo)
    if v > hi:
        return int(hi)
    return int(v)


@dataclass(frozen=True)
class AmmConfig:
    fee_bps: int = DEFAULT_FEE_BPS
    slippage_bps: int = DEFAULT_SLIPPAGE_BPS
    min_liquidity: int = MINIMUM_LIQUIDITY
    outcome_decimals: int = OUTCOME_TOKEN_DECIMALS
    base_decimals: int = BASE_ASSET_DECIMALS
    lp_decimals: int = LP_TOKEN_DECIMALS

    def __post_init__(self) -> None:
        for f in fields(self):
            v = getattr(self, f.name)
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"{f.name} must be an int")
        if not (0 <= self.fee_bps < BPS_DENOM):
            raise InvalidInput(f"fee_bps must be in [0, {BPS_DENOM}): {self.fee_bps}")
        if not (0 <= self.slippage_bps <= MAX_SLIPPAGE_BPS):
            raise InvalidInput(f"slippage_bps must be in [0, {MAX_SLIPPAGE_BPS}]: {self.slippage_bps}")
        if self.min_liquidity <= 0:
            raise InvalidInput(f"min_liquidity must be positive: {self.min_liquidity}")
        for name in ("outcome_decimals", "base_decimals", "lp_decimals"):
            v = getattr(self, name)
            if not (0 <= v <= 18):
                raise InvalidInput(f"{name} must be in [0, 18]: {v}")


def config_from_mapping(obj: Mapping[str, Any]) -> AmmConfig:
    if not isinstance(obj, Mapping):
        raise TypeError("config must be a mapping")
    known = {f.name for f in fields(AmmConfig)}
    unknown = sorted(set(obj) - known)
    if unknown:
        raise InvalidInput(f"unknown config keys: {', '.join(map(str, unknown))}")
    return AmmConfig(**dict(obj))


def load_config_file(path: Path) -> AmmConfig:
    try:
        obj = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise InvalidInput(f"cannot read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise InvalidInput(f"malformed config file {path}: {exc}") from exc
    if obj is None:
        return AmmConfig()
    if not isinstance(obj, Mapping):
        raise TypeError("config YAML must be a mapping")
    return config_from_mapping(obj)


def load_config(path: Optional[Path] = None, env: Optional[Mapping[str, str]] = None) -> AmmConfig:
    """
    Build an AmmConfig from an optional YAML file plus environment overrides.
    """
    env = os.environ if env is None else env
    if path is None:
        raw_path = (env.get(ENV_CONFIG_PATH) or "").strip()
        path = Path(raw_path) if raw_path else None

    cfg = load_config_file(Path(path)) if path is not None else AmmConfig()

    cfg = replace(
        cfg,
        fee_bps=_env_int(env, "VERIFI_AMM_FEE_BPS", cfg.fee_bps, lo=0, hi=BPS_DENOM - 1),
        slippage_bps=_env_int(env, "VERIFI_AMM_SLIPPAGE_BPS", cfg.slippage_bps, lo=0, hi=MAX_SLIPPAGE_BPS),
        min_liquidity=_env_int(env, "VERIFI_AMM_MIN_LIQUIDITY", cfg.min_liquidity, lo=1, hi=10**18),
    )
    logger.debug("loaded config: %s", cfg)
    return cfg
