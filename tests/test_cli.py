"""Tests for the command line interface."""

import argparse
import json

import pytest

from chartlab import cli
from chartlab.config import loader


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(loader, "CONFIG_PATHS", [])
    for var in (
        "CHARTLAB_LOG_LEVEL",
        "CHARTLAB_OUTPUT_FORMAT",
        "CHARTLAB_FLOAT_PRECISION",
        "CHARTLAB_PRESETS",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def bar_file(tmp_path):
    path = tmp_path / "bars.csv"
    rows = ["timestamp,open,high,low,close,volume"]
    for i in range(40):
        close = 100 + i
        rows.append(f"{1000 + i * 60},{close},{close + 1},{close - 1},{close},10")
    path.write_text("\n".join(rows) + "\n")
    return path


class TestParseParam:
    """KEY=VALUE parsing."""

    def test_numbers(self):
        assert cli.parse_param("period=20") == ("period", 20)
        assert cli.parse_param("standardDeviations=2.5") == ("standardDeviations", 2.5)

    def test_strings(self):
        assert cli.parse_param("source=hlc3") == ("source", "hlc3")

    def test_invalid(self):
        with pytest.raises(argparse.ArgumentTypeError):
            cli.parse_param("period")


class TestCommands:
    """End-to-end command runs."""

    def test_calc_json(self, bar_file, capsys):
        code = cli.main(["calc", "sma", "-i", str(bar_file), "-p", "period=5", "-f", "json"])
        assert code == 0

        data = json.loads(capsys.readouterr().out)
        assert data["params"]["period"] == 5
        points = data["lines"][0]["points"]
        assert len(points) == 36
        assert points[0] == {"x": 1240, "y": 102.0}

    def test_calc_full_table(self, bar_file, capsys):
        code = cli.main(["calc", "stochastic", "-i", str(bar_file), "--full", "-f", "table"])
        assert code == 0
        assert "| timestamp | k | d |" in capsys.readouterr().out

    def test_calc_uses_config_overrides(self, bar_file, tmp_path, capsys):
        config_path = tmp_path / "chartlab.toml"
        config_path.write_text("[indicators.ema]\nperiod = 10\n")
        code = cli.main(["-c", str(config_path), "calc", "ema", "-i", str(bar_file)])
        assert code == 0
        assert json.loads(capsys.readouterr().out)["params"]["period"] == 10

    @pytest.mark.parametrize(
        "config_key, flag_key",
        [("fastPeriod", "fast_period"), ("fast_period", "fastPeriod"), ("fastPeriod", "fastPeriod")],
    )
    def test_param_flag_beats_config(self, bar_file, tmp_path, capsys, config_key, flag_key):
        config_path = tmp_path / "chartlab.toml"
        config_path.write_text(f"[indicators.macd]\n{config_key} = 5\nslowPeriod = 20\n")
        code = cli.main([
            "-c", str(config_path),
            "calc", "macd", "-i", str(bar_file), "-p", f"{flag_key}=8", "-f", "json",
        ])
        assert code == 0

        params = json.loads(capsys.readouterr().out)["params"]
        assert params["fastPeriod"] == 8
        assert params["slowPeriod"] == 20

    def test_calc_output_file(self, bar_file, tmp_path):
        out = tmp_path / "out.json"
        code = cli.main(["calc", "rsi", "-i", str(bar_file), "-o", str(out)])
        assert code == 0
        assert json.loads(out.read_text())["id"] == "rsi"

    def test_unknown_indicator(self, bar_file, capsys):
        code = cli.main(["calc", "vwap", "-i", str(bar_file)])
        assert code == 1
        assert "Unknown indicator: vwap" in capsys.readouterr().err

    def test_invalid_param(self, bar_file, capsys):
        code = cli.main(["calc", "sma", "-i", str(bar_file), "-p", "period=0"])
        assert code == 1
        assert "period" in capsys.readouterr().err

    def test_bad_input_file(self, tmp_path, capsys):
        code = cli.main(["calc", "sma", "-i", str(tmp_path / "missing.csv")])
        assert code == 1
        assert "File not found" in capsys.readouterr().err

    def test_list(self, capsys):
        assert cli.main(["list", "--category", "oscillator"]) == 0
        out = capsys.readouterr().out
        assert "rsi" in out and "macd" in out and "bollinger" not in out

    def test_list_json(self, capsys):
        assert cli.main(["list", "-f", "json"]) == 0
        ids = [item["id"] for item in json.loads(capsys.readouterr().out)]
        assert ids == ["sma", "ema", "bollinger", "rsi", "macd", "stochastic"]

    def test_presets_enabled_from_env(self, monkeypatch, capsys):
        monkeypatch.setenv("CHARTLAB_PRESETS", "rsi14")
        assert cli.main(["presets", "--enabled"]) == 0
        out = capsys.readouterr().out.splitlines()
        assert len(out) == 1 and "rsi14" in out[0]

    def test_preset(self, bar_file, capsys):
        assert cli.main(["preset", "sma20", "-i", str(bar_file)]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["preset"] == "sma20"
        assert len(data["points"]) == 21
        assert data["points"][0]["x"] == 1000 + 19 * 60

    def test_unknown_preset(self, bar_file, capsys):
        assert cli.main(["preset", "nope", "-i", str(bar_file)]) == 1
        assert "Unknown preset" in capsys.readouterr().err

    def test_bad_config(self, tmp_path, capsys):
        config_path = tmp_path / "chartlab.toml"
        config_path.write_text('log_level = "LOUD"\n')
        assert cli.main(["-c", str(config_path), "list"]) == 1
        assert "Invalid configuration" in capsys.readouterr().err
