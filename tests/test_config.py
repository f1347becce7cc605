# [TESTER] v1

from __future__ import annotations

from pathlib import Path

import pytest

from verifi_amm.config import AmmConfig, config_from_mapping, load_config
from verifi_amm.errors import InvalidInput


def test_defaults() -> None:
    cfg = load_config(env={})
    assert cfg == AmmConfig()
    assert (cfg.fee_bps, cfg.slippage_bps, cfg.min_liquidity) == (30, 50, 1000)
    assert (cfg.outcome_decimals, cfg.base_decimals, cfg.lp_decimals) == (6, 8, 6)


def test_yaml_file(tmp_path: Path) -> None:
    path = tmp_path / "amm.yaml"
    path.write_text("fee_bps: 100\nslippage_bps: 25\n", encoding="utf-8")
    cfg = load_config(path, env={})
    assert cfg.fee_bps == 100
    assert cfg.slippage_bps == 25
    assert cfg.min_liquidity == 1000


def test_yaml_path_from_env(tmp_path: Path) -> None:
    path = tmp_path / "amm.yaml"
    path.write_text("min_liquidity: 10\n", encoding="utf-8")
    cfg = load_config(env={"VERIFI_AMM_CONFIG": str(path)})
    assert cfg.min_liquidity == 10


def test_empty_yaml_file(tmp_path: Path) -> None:
    path = tmp_path / "amm.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path, env={}) == AmmConfig()


def test_env_overrides_file(tmp_path: Path) -> None:
    path = tmp_path / "amm.yaml"
    path.write_text("fee_bps: 100\n", encoding="utf-8")
    cfg = load_config(path, env={"VERIFI_AMM_FEE_BPS": "5"})
    assert cfg.fee_bps == 5


def test_env_values_clamp_and_fall_back() -> None:
    cfg = load_config(env={"VERIFI_AMM_SLIPPAGE_BPS": "9000", "VERIFI_AMM_FEE_BPS": "lots"})
    assert cfg.slippage_bps == 5000
    assert cfg.fee_bps == 30


def test_unknown_key_rejected() -> None:
    with pytest.raises(InvalidInput, match="unknown config keys"):
        config_from_mapping({"fee": 30})


def test_yaml_must_be_mapping(tmp_path: Path) -> None:
    path = tmp_path / "amm.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(TypeError):
        load_config(path, env={})


@pytest.mark.parametrize(
    "kwargs",
    [
        {"fee_bps": 10_000},
        {"slippage_bps": 5001},
        {"min_liquidity": 0},
        {"outcome_decimals": 19},
    ],
)
def test_invalid_values_rejected(kwargs: dict) -> None:
    with pytest.raises(InvalidInput):
        AmmConfig(**kwargs)


def test_non_int_rejected() -> None:
    with pytest.raises(TypeError):
        AmmConfig(fee_bps="30")  # type: ignore[arg-type]


def test_missing_file_rejected(tmp_path: Path) -> None:
    with pytest.raises(InvalidInput, match="cannot read config file") as ei:
        load_config(tmp_path / "missing.yaml", env={})
    assert isinstance(ei.value.__cause__, FileNotFoundError)


def test_malformed_yaml_rejected(tmp_path: Path) -> None:
    path = tmp_path / "amm.yaml"
    path.write_text("fee_bps: [1,\n", encoding="utf-8")
    with pytest.raises(InvalidInput, match="malformed config file"):
        load_config(path, env={})
