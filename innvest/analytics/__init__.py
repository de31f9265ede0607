"""Performance analytics engine.

Nine read-only reports over the hotel star schema, each a pure function of
its parameters and a point-in-time ``StarSnapshot``.
"""

from innvest.analytics.engine import REPORTS, PerformanceAnalyticsEngine, get_report, run_report
from innvest.analytics.errors import (
    ReportError,
    ReportExecutionError,
    ReportInputError,
    UnknownReportError,
)
from innvest.analytics.numeric import null_safe_avg, null_safe_sum, safe_ratio
from innvest.analytics.snapshot import StarSnapshot, load_snapshot

__all__ = [
    "REPORTS",
    "PerformanceAnalyticsEngine",
    "ReportError",
    "ReportExecutionError",
    "ReportInputError",
    "StarSnapshot",
    "UnknownReportError",
    "get_report",
    "load_snapshot",
    "null_safe_avg",
    "null_safe_sum",
    "run_report",
    "safe_ratio",
]
