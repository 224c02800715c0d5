"""
Integration tests for the command line backtest runner.
"""

import importlib.util
import json
from pathlib import Path
from types import ModuleType

import pandas as pd
import pytest

from neuroquant.core.models.market import series_to_frame

SCRIPT_PATH = Path(__file__).resolve().parents[2] / "scripts" / "run_backtest.py"


@pytest.fixture(scope="module")
def script() -> ModuleType:
    """Load the script as a module without running it."""
    spec = importlib.util.spec_from_file_location("run_backtest", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestRunBacktestScript:
    """Integration tests for scripts/run_backtest.py."""

    @pytest.fixture
    def csv_path(self, tmp_path: Path, series_factory) -> Path:
        path = tmp_path / "bars.csv"
        series_to_frame(series_factory([10, 10, 10, 12, 14, 11, 8, 8])).to_csv(path, index=False)
        return path

    def run(self, script: ModuleType, monkeypatch: pytest.MonkeyPatch, *args: str) -> int:
        monkeypatch.setattr("sys.argv", ["run_backtest.py", *args])
        return script.main()

    def test_should_backtest_csv_and_save_result(
        self, script, monkeypatch, csv_path: Path, tmp_path: Path, capsys
    ) -> None:
        output = tmp_path / "result.json"

        exit_code = self.run(
            script,
            monkeypatch,
            "--csv", str(csv_path),
            "--initial-capital", "1000",
            "--short-window", "2",
            "--long-window", "3",
            "--rsi-period", "2",
            "--output", str(output),
        )  # fmt: skip

        assert exit_code == 0
        result = json.loads(output.read_text())
        assert [t["type"] for t in result["trades"]] == ["BUY", "SELL"]
        assert result["finalBalance"] == pytest.approx(670.0)
        assert "Trades        : 2 (1 buys, 1 sells)" in capsys.readouterr().out

    def test_should_replay_signal_file_in_ai_mode(
        self, script, monkeypatch, csv_path: Path, tmp_path: Path, capsys
    ) -> None:
        signals = tmp_path / "signals.json"
        signals.write_text(json.dumps({"signals": [{"date": "2024-01-02", "action": "BUY"}]}))

        exit_code = self.run(
            script, monkeypatch, "--csv", str(csv_path), "--mode", "AI", "--signals", str(signals)
        )

        assert exit_code == 0
        assert "(1 buys, 0 sells)" in capsys.readouterr().out

    def test_should_fail_on_invalid_config(self, script, monkeypatch, csv_path: Path) -> None:
        assert self.run(script, monkeypatch, "--csv", str(csv_path), "--short-window", "0") == 1

    def test_should_fail_on_missing_csv(self, script, monkeypatch, tmp_path: Path) -> None:
        assert self.run(script, monkeypatch, "--csv", str(tmp_path / "missing.csv")) == 1

    def test_should_fail_on_csv_without_ohlcv_columns(
        self, script, monkeypatch, tmp_path: Path
    ) -> None:
        path = tmp_path / "closes.csv"
        pd.DataFrame({"date": ["2024-01-01"], "close": [1.0]}).to_csv(path, index=False)

        assert self.run(script, monkeypatch, "--csv", str(path)) == 1
