"""Failure reports for aggregated assertion errors.

Turns the error produced at context end into a JSON report and keeps an
index of recent reports in a reports directory.
"""

import json
import logging
import traceback
import uuid
from dataclasses import dataclass, field
from datetime import datetime, UTC
from pathlib import Path
from typing import Any

from ..config import SoftAssertConfig
from ..context import get_active_config
from ..errors import MultiAssertionError, failure_message
from ..stacktraces import throwable_location

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "1.0.0"
INDEX_FILE_NAME = "index.json"


@dataclass
class FailureRecord:
    """A single failure as stored in a report."""
    index: int                       # 1-based position in the aggregate
    error_type: str                  # Exception class name
    message: str                     # Failure message
    location: str | None = None      # file:line of the innermost frame
    traceback_lines: list[str] = field(default_factory=list)

    @classmethod
    def from_exception(cls, index: int, error: BaseException) -> "FailureRecord":
        lines = []
        if error.__traceback__ is not None:
            lines = "".join(traceback.format_tb(error.__traceback__)).splitlines()
        return cls(
            index=index,
            error_type=type(error).__name__,
            message=failure_message(error),
            location=throwable_location(error),
            traceback_lines=lines,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "index": self.index,
            "error_type": self.error_type,
            "message": self.message,
            "location": self.location,
            "traceback_lines": self.traceback_lines,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FailureRecord":
        return cls(
            index=data["index"],
            error_type=data["error_type"],
            message=data["message"],
            location=data.get("location"),
            traceback_lines=list(data.get("traceback_lines", [])),
        )


@dataclass
class FailureReport:
    """All failures aggregated at the end of one execution context."""
    report_id: str                   # report-YYYYMMDD-HHMMSS-{short_uuid}
    name: str                        # Context name, e.g. a test node id
    created_at: str                  # ISO timestamp
    failures: list[FailureRecord] = field(default_factory=list)

    @property
    def total_failures(self) -> int:
        return len(self.failures)

    @classmethod
    def from_error(cls, error: BaseException, name: str) -> "FailureReport":
        """Build a report from an aggregate error.

        A MultiAssertionError is flattened into its individual failures;
        any other error becomes a single-failure report.
        """
        if isinstance(error, MultiAssertionError):
            errors = error.errors
        else:
            errors = (error,)

        created = datetime.now(UTC)
        return cls(
            report_id=_generate_report_id(created),
            name=name,
            created_at=created.isoformat(),
            failures=[FailureRecord.from_exception(i, e) for i, e in enumerate(errors, start=1)],
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "schema_version": SCHEMA_VERSION,
            "report_id": self.report_id,
            "name": self.name,
            "created_at": self.created_at,
            "total_failures": self.total_failures,
            "failures": [failure.to_dict() for failure in self.failures],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FailureReport":
        return cls(
            report_id=data["report_id"],
            name=data["name"],
            created_at=data["created_at"],
            failures=[FailureRecord.from_dict(f) for f in data.get("failures", [])],
        )


def write_failure_report(report: FailureReport, reports_dir: Path, max_reports: int = 100) -> Path:
    """Write a report and register it in the reports index.

    Args:
        report: Report to write
        reports_dir: Directory holding reports and index.json
        max_reports: Number of reports kept; older report files are removed

    Returns:
        Path to the written report file
    """
    reports_dir = Path(reports_dir)
    reports_dir.mkdir(parents=True, exist_ok=True)

    report_file = reports_dir / f"{report.report_id}.json"
    with open(report_file, "w", encoding="utf-8") as f:
        json.dump(report.to_dict(), f, indent=2, ensure_ascii=False)

    _update_index(reports_dir, report, max_reports)

    logger.info(f"Wrote {report.total_failures} failure(s) to: {report_file}")
    return report_file


def save_failure_report(error: BaseException, name: str, config: SoftAssertConfig | None = None) -> Path:
    """Write a report for an aggregate error into the configured reports dir.

    Args:
        error: Error returned by ``collective_error``
        name: Context name recorded in the report
        config: Configuration to use (default: the active configuration)

    Returns:
        Path to the written report file
    """
    config = config or get_active_config()
    report = FailureReport.from_error(error, name)
    return write_failure_report(report, Path(config.reports.dir), config.reports.max_reports)


def load_failure_report(path: Path) -> FailureReport:
    """Load a report written by ``write_failure_report``.

    Raises:
        FileNotFoundError: If the report does not exist
        ValueError: If the report is not valid JSON or misses fields
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in report {path}: {e}")
    try:
        return FailureReport.from_dict(data)
    except (KeyError, TypeError) as e:
        raise ValueError(f"Malformed report {path}: missing {e}")


def load_report_index(reports_dir: Path) -> dict[str, Any]:
    """Load the reports index, or an empty one if none exists yet."""
    index_file = Path(reports_dir) / INDEX_FILE_NAME
    if not index_file.exists():
        return _create_empty_index()
    try:
        with open(index_file, encoding="utf-8") as f:
            index_data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Failed to read reports index, using an empty one: {e}")
        return _create_empty_index()

    if not isinstance(index_data, dict) or not isinstance(index_data.get("reports"), list):
        logger.warning(f"Reports index {index_file} has no reports list, using an empty one")
        return _create_empty_index()
    return index_data


def _update_index(reports_dir: Path, report: FailureReport, max_reports: int) -> None:
    index_data = load_report_index(reports_dir)

    entry = {
        "report_id": report.report_id,
        "name": report.name,
        "created_at": report.created_at,
        "total_failures": report.total_failures,
        "report_file": f"{report.report_id}.json",
    }

    index_data["reports"] = [r for r in index_data["reports"] if r["report_id"] != report.report_id]
    index_data["reports"].append(entry)
    index_data["reports"].sort(key=lambda r: r["created_at"], reverse=True)

    if len(index_data["reports"]) > max_reports:
        for old in index_data["reports"][max_reports:]:
            old_file = reports_dir / old["report_file"]
            if old_file.exists():
                old_file.unlink()
        index_data["reports"] = index_data["reports"][:max_reports]

    index_data["total_reports"] = len(index_data["reports"])
    index_data["last_updated"] = datetime.now(UTC).isoformat()

    with open(reports_dir / INDEX_FILE_NAME, "w", encoding="utf-8") as f:
        json.dump(index_data, f, indent=2, ensure_ascii=False)


def _create_empty_index() -> dict[str, Any]:
    now = datetime.now(UTC).isoformat()
    return {
        "schema_version": SCHEMA_VERSION,
        "created_at": now,
        "last_updated": now,
        "total_reports": 0,
        "reports": [],
    }


def _generate_report_id(created: datetime) -> str:
    timestamp_part = created.strftime("report-%Y%m%d-%H%M%S")
    uuid_part = str(uuid.uuid4())[:8]
    return f"{timestamp_part}-{uuid_part}"
