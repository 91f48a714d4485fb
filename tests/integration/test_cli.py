"""
Integration tests for the command-line entry point.

Tests cover:
- Adding assets and reading them back across invocations
- Offline refresh with stub prices
- Snapshots, export and import through a SQLite file
- Error reporting and exit codes
"""

import json

import pytest

from portfolio_local.main import main


@pytest.fixture
def run(tmp_path, monkeypatch, capsys):
    """Run the CLI against a temporary data directory with stub prices."""
    monkeypatch.setenv("PORTFOLIO_USE_STUB_PRICES", "true")

    def _run(*args):
        code = main(["--data-dir", str(tmp_path), *args])
        captured = capsys.readouterr()
        return code, captured.out, captured.err

    return _run


class TestCli:
    """End-to-end CLI tests."""

    def test_add_refresh_and_summary(self, run):
        """
        GIVEN an empty data directory
        WHEN an asset is added, prices refreshed and the summary shown
        THEN the stub price is reflected in the combined total
        """
        code, out, _ = run("add", "--type", "stock", "--symbol", "AAPL", "--name", "Apple", "--p1", "2")
        assert code == 0
        assert "Added Apple" in out

        code, out, _ = run("refresh")
        assert code == 0
        assert "Priced 1 of 1 assets" in out

        code, out, _ = run("summary")
        assert code == 0
        assert "$371.00" in out
        assert "By person" in out

    def test_holdings_empty(self, run):
        code, out, _ = run("holdings")

        assert code == 0
        assert "No holdings" in out

    def test_snapshots(self, run):
        run("add", "--type", "savings", "--symbol", "USD", "--name", "Cash", "--p1", "100")
        run("refresh")

        code, out, _ = run("snapshot", "save")
        assert code == 0
        assert "$100.00" in out

        code, out, _ = run("snapshot", "list")
        assert "1 assets" in out

    def test_export_and_import(self, run, tmp_path):
        run("add", "--type", "metal", "--symbol", "gold", "--name", "Gold", "--p2", "1", "--unit", "toz")
        backup = tmp_path / "backup.json"

        code, _, _ = run("export", str(backup))
        assert code == 0
        assert json.loads(backup.read_text(encoding="utf-8"))["assets"][0]["unit"] == "toz"

        run("delete", json.loads(backup.read_text(encoding="utf-8"))["assets"][0]["id"])
        code, out, _ = run("import", str(backup))
        assert code == 0
        assert "Imported 1 assets" in out

    def test_bad_import_exits_with_error(self, run, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text('{"settings": {}}', encoding="utf-8")

        code, _, err = run("import", str(bad))

        assert code == 1
        assert "missing assets array" in err

    def test_validation_error_exits_with_error(self, run):
        code, _, err = run("add", "--type", "bond", "--symbol", "X", "--name", "X")

        assert code == 1
        assert "Unknown asset type" in err

    def test_charts(self, run, tmp_path):
        out_dir = tmp_path / "charts"

        run("add", "--type", "stock", "--symbol", "AAPL", "--name", "Apple", "--p1", "2")
        run("add", "--type", "savings", "--symbol", "USD", "--name", "Cash", "--p2", "100")
        run("refresh")

        code, out, _ = run("charts", "--out", str(out_dir))

        assert code == 0
        assert (out_dir / "allocation.png").exists()
        assert (out_dir / "daily_change.png").exists()
        assert (out_dir / "person_comparison.png").exists()
        assert (out_dir / "savings_vs_invested.png").exists()
        assert (out_dir / "scatter.png").exists()

    def test_log_file_written_to_data_dir(self, run, tmp_path):
        code, _, _ = run("--verbose", "--log-file", "holdings")

        assert code == 0
        assert (tmp_path / "portfolio.log").exists()

    @pytest.mark.parametrize("qty", ["nan", "Infinity"])
    def test_non_finite_quantity_rejected(self, run, qty):
        with pytest.raises(SystemExit) as exc_info:
            run("add", "--type", "stock", "--symbol", "X", "--name", "X", "--p1", qty)

        assert exc_info.value.code == 2
        code, out, _ = run("holdings")
        assert code == 0
        assert "No holdings" in out
