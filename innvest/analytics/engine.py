"""Report registry and the async engine that runs reports against the store.

Each report is a pure function of ``(snapshot, **params)``. The engine
validates the parameter record, loads one snapshot covering the years the
report reads, runs the function and logs the outcome. It never writes and
never retries.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Iterable

import structlog
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from innvest.analytics import params as p
from innvest.analytics import rows as r
from innvest.analytics.budget import budget_vs_actual
from innvest.analytics.department_expenses import expenses_by_department
from innvest.analytics.errors import (
    ReportExecutionError,
    ReportInputError,
    UnknownReportError,
)
from innvest.analytics.market_reports import market_comparison, market_dashboard, market_trends
from innvest.analytics.portfolio_reports import brand_performance, performance_by_region
from innvest.analytics.property_reports import (
    occupancy_by_property,
    quarterly_performance,
    revenue_by_property,
)
from innvest.analytics.snapshot import StarSnapshot, load_snapshot

logger = structlog.get_logger(__name__)

DEFAULT_SLOW_REPORT_MS = 2000


def _same_year(params: Any) -> list[int]:
    return [params.year]


@dataclass(frozen=True)
class ReportSpec:
    """Registry entry binding a report name to its contract."""

    name: str
    description: str
    params_model: type[p.ReportParams]
    row_type: type
    func: Callable[..., list]
    years: Callable[[Any], Iterable[int]] = _same_year


REPORTS: dict[str, ReportSpec] = {
    spec.name: spec
    for spec in (
        ReportSpec(
            name="revenue",
            description="Monthly revenue per property with market RevPAR, ADR and occupancy",
            params_model=p.RevenueByPropertyParams,
            row_type=r.RevenueByPropertyRow,
            func=revenue_by_property,
        ),
        ReportSpec(
            name="regional-performance",
            description="Revenue and market KPIs rolled up by region",
            params_model=p.RegionPerformanceParams,
            row_type=r.RegionPerformanceRow,
            func=performance_by_region,
        ),
        ReportSpec(
            name="department-expenses",
            description="Expenses per department with share of total and year-over-year change",
            params_model=p.DepartmentExpenseParams,
            row_type=r.DepartmentExpenseRow,
            func=expenses_by_department,
            years=lambda params: [params.year - 1, params.year],
        ),
        ReportSpec(
            name="quarterly-performance",
            description="Quarterly revenue, expenses and profit per property",
            params_model=p.QuarterlyPerformanceParams,
            row_type=r.QuarterlyPerformanceRow,
            func=quarterly_performance,
        ),
        ReportSpec(
            name="brand-performance",
            description="Revenue, market KPIs and property count per brand",
            params_model=p.BrandPerformanceParams,
            row_type=r.BrandPerformanceRow,
            func=brand_performance,
        ),
        ReportSpec(
            name="occupancy",
            description="Monthly property occupancy against its market (occupancy index)",
            params_model=p.OccupancyParams,
            row_type=r.OccupancyIndexRow,
            func=occupancy_by_property,
        ),
        ReportSpec(
            name="market-trends",
            description="Yearly market KPI averages over a range of years",
            params_model=p.MarketTrendsParams,
            row_type=r.MarketTrendRow,
            func=market_trends,
            years=lambda params: range(params.start_year, params.end_year + 1),
        ),
        ReportSpec(
            name="market-comparison",
            description="Markets ranked by average RevPAR",
            params_model=p.MarketComparisonParams,
            row_type=r.MarketComparisonRow,
            func=market_comparison,
        ),
        ReportSpec(
            name="market-dashboard",
            description="Top markets by RevPAR alongside industry-wide averages",
            params_model=p.MarketDashboardParams,
            row_type=r.MarketDashboardRow,
            func=market_dashboard,
        ),
        ReportSpec(
            name="budget-vs-actual",
            description="Monthly actual vs budget revenue and expense variance",
            params_model=p.BudgetVsActualParams,
            row_type=r.BudgetVarianceRow,
            func=budget_vs_actual,
        ),
    )
}


def get_report(name: str) -> ReportSpec:
    try:
        return REPORTS[name]
    except KeyError:
        raise UnknownReportError(name) from None


def validate_params(spec: ReportSpec, params: dict[str, Any]) -> p.ReportParams:
    """Build the report's parameter record or raise ``ReportInputError``."""
    try:
        return spec.params_model(**params)
    except ValidationError as exc:
        raise ReportInputError(spec.name, exc.errors(include_url=False)) from exc


def run_report(snapshot: StarSnapshot, name: str, **params: Any) -> list:
    """Validate parameters and run a report against an in-memory snapshot."""
    spec = get_report(name)
    validated = validate_params(spec, params)
    return spec.func(snapshot, **validated.model_dump())


class PerformanceAnalyticsEngine:
    """Runs registered reports against the database behind ``session``."""

    def __init__(self, session: AsyncSession, slow_report_ms: int | None = None):
        self.session = session
        self.slow_report_ms = (
            slow_report_ms if slow_report_ms is not None else DEFAULT_SLOW_REPORT_MS
        )

    async def run(self, name: str, **params: Any) -> list:
        """Run one report.

        Raises:
            UnknownReportError: If ``name`` is not registered
            ReportInputError: If the parameters are invalid (nothing is read)
            ReportExecutionError: If the store cannot be read
        """
        spec = get_report(name)
        validated = validate_params(spec, params)
        log = logger.bind(report=name, **validated.model_dump())

        started = time.perf_counter()
        log.info("report_started")
        try:
            snapshot = await load_snapshot(self.session, years=spec.years(validated))
        except (SQLAlchemyError, OSError) as exc:
            # asyncpg surfaces refused connections as a bare OSError
            log.error("report_failed", error=str(exc))
            raise ReportExecutionError(name, str(exc)) from exc

        result = spec.func(snapshot, **validated.model_dump())

        duration_ms = round((time.perf_counter() - started) * 1000, 1)
        if duration_ms > self.slow_report_ms:
            log.warning("report_slow", rows=len(result), duration_ms=duration_ms)
        else:
            log.info("report_completed", rows=len(result), duration_ms=duration_ms)
        return result
