"""Result row types.

Every numeric field is always populated; aggregates over no data are 0.
Occupancy and growth values are fractions, never percentages.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class RevenueByPropertyRow:
    property_id: int
    property_name: str
    month: int
    revenue: Decimal
    revpar: Decimal
    adr: Decimal
    occupancy: Decimal


@dataclass(frozen=True)
class RegionPerformanceRow:
    region_id: int
    region_name: str
    total_revenue: Decimal
    avg_revpar: Decimal
    avg_occupancy: Decimal
    growth_rate: Decimal  # average market demand growth


@dataclass(frozen=True)
class DepartmentExpenseRow:
    department_id: int
    department_name: str
    total_expenses: Decimal
    percentage_of_total: Decimal
    year_over_year_change: Decimal


@dataclass(frozen=True)
class QuarterlyPerformanceRow:
    property_id: int
    property_name: str
    quarter: int
    revenue: Decimal
    expenses: Decimal
    profit: Decimal
    occupancy: Decimal
    adr: Decimal
    revpar: Decimal


@dataclass(frozen=True)
class BrandPerformanceRow:
    brand_id: int
    brand_name: str
    total_revenue: Decimal
    avg_revpar: Decimal
    avg_occupancy: Decimal
    property_count: int


@dataclass(frozen=True)
class OccupancyIndexRow:
    property_id: int
    property_name: str
    month: int
    occupancy: Decimal
    market_occupancy: Decimal
    occupancy_index: Decimal


@dataclass(frozen=True)
class MarketTrendRow:
    year: int
    revpar: Decimal
    adr: Decimal
    occupancy: Decimal
    supply_growth: Decimal
    demand_growth: Decimal


@dataclass(frozen=True)
class MarketComparisonRow:
    market_id: int
    market_name: str
    avg_revpar: Decimal
    avg_adr: Decimal
    avg_occupancy: Decimal
    revpar_growth: Decimal  # average demand growth
    rank: int


@dataclass(frozen=True)
class MarketDashboardRow:
    """One dashboard line: the industry-wide averages or a single top market."""

    scope: str  # "industry" | "market"
    market_id: int | None
    market_name: str
    revpar: Decimal
    adr: Decimal
    occupancy: Decimal
    growth: Decimal  # average demand growth


@dataclass(frozen=True)
class BudgetVarianceRow:
    month: int
    actual_revenue: Decimal
    budget_revenue: Decimal
    variance_revenue: Decimal
    variance_pct_revenue: Decimal
    actual_expense: Decimal
    budget_expense: Decimal
    variance_expense: Decimal
    variance_pct_expense: Decimal
