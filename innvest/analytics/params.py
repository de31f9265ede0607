"""Typed parameter records for the analytics reports.

Optional filters are ``None`` when unset; no report uses 0, "" or -1 as a
stand-in for "all". Strict integer fields reject strings and booleans, so a
non-integer year is an input error rather than a silent coercion.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

Year = StrictInt
Quarter = Annotated[StrictInt, Field(ge=1, le=4)]


class ReportParams(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class RevenueByPropertyParams(ReportParams):
    year: Year


class RegionPerformanceParams(ReportParams):
    year: Year
    hotel_type: StrictStr | None = None


class DepartmentExpenseParams(ReportParams):
    year: Year
    property_name: StrictStr | None = None


class QuarterlyPerformanceParams(ReportParams):
    # Older callers passed quarter > 4 to mean "all quarters"; that is now an
    # input error and all quarters are requested by leaving quarter unset.
    year: Year
    quarter: Quarter | None = None


class BrandPerformanceParams(ReportParams):
    year: Year


class OccupancyParams(ReportParams):
    year: Year
    property_name: StrictStr | None = None


class MarketTrendsParams(ReportParams):
    start_year: Year
    end_year: Year
    market_name: StrictStr | None = None


class MarketComparisonParams(ReportParams):
    year: Year
    top_n: StrictInt | None = Field(
        default=None, description="Keep the first N ranked markets; None or <= 0 keeps all"
    )


class BudgetVsActualParams(ReportParams):
    year: Year
    property_name: StrictStr | None = None


class MarketDashboardParams(ReportParams):
    year: Year
    top_n: StrictInt = Field(
        default=5, description="Number of top markets listed; <= 0 lists every market"
    )
