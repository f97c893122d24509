"""Failure reports for softassert.

Persists aggregated failures as JSON reports with an index of recent
reports, and renders them on the console.
"""

from .formatter import ReportFormatter
from .report import (
    FailureRecord,
    FailureReport,
    load_failure_report,
    load_report_index,
    save_failure_report,
    write_failure_report,
)

__all__ = [
    "FailureRecord",
    "FailureReport",
    "ReportFormatter",
    "load_failure_report",
    "load_report_index",
    "save_failure_report",
    "write_failure_report",
]
