"""Exceptions raised at the analytics engine boundary."""

from __future__ import annotations

from typing import Any


class ReportError(Exception):
    """Base class for report failures."""

    def __init__(self, report: str, message: str):
        self.report = report
        super().__init__(f"{report}: {message}")


class UnknownReportError(ReportError):
    """No report is registered under the requested name."""

    def __init__(self, report: str):
        super().__init__(report, "unknown report")


class ReportInputError(ReportError):
    """A required parameter is missing or a parameter has the wrong type.

    Raised before any store access, so no partial computation happens.
    """

    def __init__(self, report: str, errors: list[dict[str, Any]]):
        self.errors = errors
        details = "; ".join(
            f"{'.'.join(str(p) for p in err.get('loc', ())) or 'params'}: {err.get('msg')}"
            for err in errors
        )
        super().__init__(report, f"invalid parameters ({details})")


class ReportExecutionError(ReportError):
    """The store could not be read; the whole invocation failed."""
