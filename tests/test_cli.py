# [TESTER] v1

from __future__ import annotations

import json
from pathlib import Path

import pytest

from verifi_amm.cli import main


def _run(capsys: pytest.CaptureFixture[str], argv: list[str]) -> tuple[int, dict]:
    code = main(argv)
    out = capsys.readouterr().out.strip()
    return code, (json.loads(out) if out else {})


@pytest.fixture(autouse=True)
def _no_env_config(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("VERIFI_AMM_CONFIG", "VERIFI_AMM_FEE_BPS", "VERIFI_AMM_SLIPPAGE_BPS", "VERIFI_AMM_MIN_LIQUIDITY"):
        monkeypatch.delenv(name, raising=False)


def test_swap(capsys: pytest.CaptureFixture[str]) -> None:
    code, body = _run(
        capsys,
        ["swap", "--yes-reserve", "10000", "--no-reserve", "10000", "--lp-supply", "10000", "--amount", "100"],
    )
    assert code == 0
    assert body["ok"] is True
    assert body["output_amount"] == "98.715803"
    assert body["fee_amount"] == "0.3"
    assert body["price_impact_pct"] == "1.284197"
    assert body["min_amount_out_units"] == 98_715_803 * 9_950 // 10_000


def test_swap_rejected(capsys: pytest.CaptureFixture[str]) -> None:
    code, body = _run(capsys, ["swap", "--yes-reserve", "0", "--no-reserve", "10", "--amount", "1"])
    assert code == 1
    assert body == {"ok": False, "code": "INVALID_INPUT", "error": body["error"]}


def test_swap_input(capsys: pytest.CaptureFixture[str]) -> None:
    code, body = _run(
        capsys,
        ["swap-input", "--yes-reserve", "10000", "--no-reserve", "10000", "--amount", "10000"],
    )
    assert code == 1
    assert body["code"] == "INSUFFICIENT_LIQUIDITY"


def test_add_bootstrap(capsys: pytest.CaptureFixture[str]) -> None:
    code, body = _run(
        capsys,
        ["add", "--yes-reserve", "0", "--no-reserve", "0", "--yes-amount", "1000", "--no-amount", "1000"],
    )
    assert code == 0
    assert body["bootstrap"] is True
    assert body["lp_tokens_minted"] == "999.999"


def test_remove(capsys: pytest.CaptureFixture[str]) -> None:
    code, body = _run(
        capsys,
        ["remove", "--yes-reserve", "100", "--no-reserve", "300", "--lp-supply", "10", "--lp-tokens", "5"],
    )
    assert code == 0
    assert body["yes_out"] == "50"
    assert body["no_out"] == "150"
    assert body["share_of_pool_pct"] == "50"


def test_min_output(capsys: pytest.CaptureFixture[str]) -> None:
    code, body = _run(capsys, ["min-output", "--expected", "100", "--slippage-bps", "50", "--candidate", "99.4"])
    assert code == 0
    assert body["min_output"] == "99.5"
    assert body["within_slippage"] is False


def test_bad_amount_is_usage_error(capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["min-output", "--expected", "1.0000001"])
    assert code == 2
    assert "decimal places" in capsys.readouterr().err


def test_min_output_rejects_excess_tolerance(capsys: pytest.CaptureFixture[str]) -> None:
    code, body = _run(capsys, ["min-output", "--expected", "100", "--slippage-bps", "5001"])
    assert code == 1
    assert body["ok"] is False
    assert body["code"] == "INVALID_INPUT"


def test_missing_config_file_is_usage_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["--config", str(tmp_path / "missing.yaml"), "min-output", "--expected", "100"])
    assert code == 2
    assert "cannot read config file" in capsys.readouterr().err


def test_malformed_config_file_is_usage_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "amm.yaml"
    path.write_text("fee_bps: [1,\n", encoding="utf-8")
    code = main(["--config", str(path), "min-output", "--expected", "100"])
    assert code == 2
    assert "malformed config file" in capsys.readouterr().err
