"""Unit tests for failure reports."""

import json

import pytest

from softassert.config import ReportConfig, SoftAssertConfig
from softassert.diagnostics import (
    FailureReport,
    load_failure_report,
    load_report_index,
    save_failure_report,
    write_failure_report,
)
from softassert.errors import MultiAssertionError


def _raised(message: str) -> AssertionError:
    try:
        raise AssertionError(message)
    except AssertionError as e:
        return e


class TestFailureReport:
    """Test report construction."""

    def test_from_multi_error_flattens(self):
        error = MultiAssertionError([_raised("F1"), AssertionError("F2")])

        report = FailureReport.from_error(error, "test_checkout")

        assert report.name == "test_checkout"
        assert report.total_failures == 2
        assert [f.message for f in report.failures] == ["F1", "F2"]
        assert [f.index for f in report.failures] == [1, 2]
        assert report.failures[0].location is not None
        assert report.failures[0].traceback_lines
        assert report.failures[1].location is None
        assert report.report_id.startswith("report-")

    def test_from_single_error(self):
        report = FailureReport.from_error(AssertionError("only"), "single")

        assert report.total_failures == 1
        assert report.failures[0].error_type == "AssertionError"

    def test_dict_round_trip(self):
        report = FailureReport.from_error(MultiAssertionError([_raised("a"), _raised("b")]), "rt")

        data = report.to_dict()
        assert data["schema_version"] == "1.0.0"
        assert data["total_failures"] == 2
        assert FailureReport.from_dict(data) == report


class TestWriteFailureReport:
    """Test writing reports and maintaining the index."""

    def test_write_and_load(self, tmp_path):
        report = FailureReport.from_error(AssertionError("boom"), "t")

        path = write_failure_report(report, tmp_path)

        assert path == tmp_path / f"{report.report_id}.json"
        assert load_failure_report(path) == report

        index = load_report_index(tmp_path)
        assert index["total_reports"] == 1
        assert index["reports"][0]["report_id"] == report.report_id

    def test_index_is_capped(self, tmp_path):
        reports = []
        for i in range(3):
            report = FailureReport.from_error(AssertionError(str(i)), f"t{i}")
            report.report_id = f"report-{i}"
            report.created_at = f"2026-01-0{i + 1}T00:00:00+00:00"
            write_failure_report(report, tmp_path, max_reports=2)
            reports.append(report)

        index = load_report_index(tmp_path)
        assert [r["report_id"] for r in index["reports"]] == ["report-2", "report-1"]
        assert index["total_reports"] == 2
        assert not (tmp_path / "report-0.json").exists()
        assert (tmp_path / "report-2.json").exists()

    def test_corrupt_index_is_replaced(self, tmp_path):
        (tmp_path / "index.json").write_text("{not json")
        report = FailureReport.from_error(AssertionError("boom"), "t")

        write_failure_report(report, tmp_path)

        assert load_report_index(tmp_path)["total_reports"] == 1

    def test_index_without_reports_list_is_replaced(self, tmp_path):
        (tmp_path / "index.json").write_text(json.dumps({"schema_version": "1.0.0"}))
        report = FailureReport.from_error(AssertionError("boom"), "t")

        write_failure_report(report, tmp_path)

        index = load_report_index(tmp_path)
        assert index["total_reports"] == 1
        assert index["reports"][0]["report_id"] == report.report_id

    def test_index_that_is_not_an_object(self, tmp_path):
        (tmp_path / "index.json").write_text(json.dumps(["report-1"]))

        assert load_report_index(tmp_path)["reports"] == []

    def test_missing_index(self, tmp_path):
        assert load_report_index(tmp_path / "nowhere")["reports"] == []

    def test_save_uses_configured_dir(self, tmp_path):
        config = SoftAssertConfig(reports=ReportConfig(dir=str(tmp_path / "reports")))

        path = save_failure_report(AssertionError("boom"), "cfg", config)

        assert path.parent == tmp_path / "reports"
        assert json.loads(path.read_text())["name"] == "cfg"


class TestLoadFailureReport:
    """Test error handling when loading reports."""

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{oops")
        with pytest.raises(ValueError, match="Invalid JSON"):
            load_failure_report(path)

    def test_missing_fields(self, tmp_path):
        path = tmp_path / "partial.json"
        path.write_text(json.dumps({"report_id": "x"}))
        with pytest.raises(ValueError, match="Malformed report"):
            load_failure_report(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_failure_report(tmp_path / "absent.json")
