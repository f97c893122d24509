"""Unit tests for the softassert CLI."""

import json
from pathlib import Path

from typer.testing import CliRunner

from softassert import __version__
from softassert.cli import app
from softassert.diagnostics import FailureReport, write_failure_report
from softassert.errors import MultiAssertionError

runner = CliRunner()


def _write_report(reports_dir: Path) -> Path:
    error = MultiAssertionError([AssertionError("expected true"), AssertionError("expected 5")])
    return write_failure_report(FailureReport.from_error(error, "test_cli_case"), reports_dir)


class TestVersion:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout


class TestConfigCommand:
    """Test the config command."""

    def test_config_json(self, tmp_path):
        config_file = tmp_path / ".softassert.json"
        config_file.write_text(json.dumps({"collection": {"defaultMode": "deferred"}}))

        result = runner.invoke(app, ["config", "--path", str(config_file), "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["collection"]["defaultMode"] == "deferred"
        assert data["reports"]["maxReports"] == 100

    def test_config_table(self, tmp_path):
        result = runner.invoke(app, ["config", "--path", str(tmp_path / "missing.json")])

        assert result.exit_code == 0
        assert "immediate" in result.stdout

    def test_config_invalid(self, tmp_path):
        config_file = tmp_path / ".softassert.json"
        config_file.write_text("{broken")

        result = runner.invoke(app, ["config", "--path", str(config_file)])

        assert result.exit_code == 1
        assert "Error" in result.stdout


class TestReportCommands:
    """Test report show and report list."""

    def test_show_json(self, tmp_path):
        report_file = _write_report(tmp_path)

        result = runner.invoke(app, ["report", "show", str(report_file), "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["total_failures"] == 2
        assert [f["message"] for f in data["failures"]] == ["expected true", "expected 5"]

    def test_show_table(self, tmp_path):
        report_file = _write_report(tmp_path)

        result = runner.invoke(app, ["report", "show", str(report_file)])

        assert result.exit_code == 0
        assert "expected true" in result.stdout

    def test_show_missing(self, tmp_path):
        result = runner.invoke(app, ["report", "show", str(tmp_path / "absent.json")])

        assert result.exit_code == 1
        assert "Report not found" in result.stdout

    def test_list(self, tmp_path):
        _write_report(tmp_path)

        result = runner.invoke(app, ["report", "list", "--dir", str(tmp_path)])

        assert result.exit_code == 0
        assert "Failure Reports (1)" in result.stdout

    def test_list_empty(self, tmp_path):
        result = runner.invoke(app, ["report", "list", "--dir", str(tmp_path)])

        assert result.exit_code == 0
        assert "No failure reports found" in result.stdout
