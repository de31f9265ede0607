"""Per-property reports: monthly revenue, quarterly P&L and occupancy index.

Each report cross-joins properties with the calendar buckets it covers, so
every (property, bucket) pair yields a row even with no activity.
"""

from __future__ import annotations

from collections import defaultdict
from decimal import Decimal

from innvest.analytics.numeric import ZERO, null_safe_avg, safe_ratio, to_decimal
from innvest.analytics.rows import (
    OccupancyIndexRow,
    QuarterlyPerformanceRow,
    RevenueByPropertyRow,
)
from innvest.analytics.snapshot import StarSnapshot
from innvest.db.models import ACCOUNT_TYPE_EXPENSE, ACCOUNT_TYPE_REVENUE

MONTHS = tuple(range(1, 13))
QUARTERS = (1, 2, 3, 4)


def revenue_by_property(snapshot: StarSnapshot, year: int) -> list[RevenueByPropertyRow]:
    """Monthly revenue per property alongside its market's KPIs.

    Revenue sums every financial fact of the property regardless of account
    type or budget flag (gross activity).
    """
    revenue: dict[tuple[int | None, int], Decimal] = defaultdict(lambda: ZERO)
    for fact, period in snapshot.financial_facts_in(year):
        if fact.amount is not None:
            revenue[(fact.property_id, period.month)] += to_decimal(fact.amount)

    readings = snapshot.market_readings_by(year, "month")

    rows = []
    for prop in snapshot.sorted_properties():
        market_id = snapshot.market_id_of(prop)
        for month in MONTHS:
            market = readings.get((market_id, month), []) if market_id is not None else []
            rows.append(
                RevenueByPropertyRow(
                    property_id=prop.property_id,
                    property_name=prop.property_name,
                    month=month,
                    revenue=revenue[(prop.property_id, month)],
                    revpar=null_safe_avg(r.revpar for r in market),
                    adr=null_safe_avg(r.adr for r in market),
                    occupancy=null_safe_avg(r.occupancy for r in market),
                )
            )
    return rows


def profit_contribution(account_type: str | None, amount: Decimal) -> Decimal:
    """Signed contribution of one posting to profit.

    Revenue adds, Expense subtracts, anything else contributes nothing.
    """
    if account_type == ACCOUNT_TYPE_REVENUE:
        return amount
    if account_type == ACCOUNT_TYPE_EXPENSE:
        return -amount
    return ZERO


def quarterly_performance(
    snapshot: StarSnapshot, year: int, quarter: int | None = None
) -> list[QuarterlyPerformanceRow]:
    """Quarterly revenue, expenses and profit per property.

    ``quarter=None`` reports all four quarters, each aggregated separately.
    """
    quarters = (quarter,) if quarter is not None else QUARTERS

    revenue: dict[tuple[int | None, int], Decimal] = defaultdict(lambda: ZERO)
    expenses: dict[tuple[int | None, int], Decimal] = defaultdict(lambda: ZERO)
    profit: dict[tuple[int | None, int], Decimal] = defaultdict(lambda: ZERO)

    for fact, period in snapshot.financial_facts_in(year):
        if period.quarter not in quarters or fact.amount is None:
            continue
        key = (fact.property_id, period.quarter)
        amount = to_decimal(fact.amount)
        account_type = snapshot.account_type_of(fact)
        if account_type == ACCOUNT_TYPE_REVENUE:
            revenue[key] += amount
        elif account_type == ACCOUNT_TYPE_EXPENSE:
            expenses[key] += amount
        profit[key] += profit_contribution(account_type, amount)

    readings = snapshot.market_readings_by(year, "quarter")

    rows = []
    for prop in snapshot.sorted_properties():
        market_id = snapshot.market_id_of(prop)
        for q in quarters:
            key = (prop.property_id, q)
            market = readings.get((market_id, q), []) if market_id is not None else []
            rows.append(
                QuarterlyPerformanceRow(
                    property_id=prop.property_id,
                    property_name=prop.property_name,
                    quarter=q,
                    revenue=revenue[key],
                    expenses=expenses[key],
                    profit=profit[key],
                    occupancy=null_safe_avg(r.occupancy for r in market),
                    adr=null_safe_avg(r.adr for r in market),
                    revpar=null_safe_avg(r.revpar for r in market),
                )
            )
    return rows


def occupancy_index(property_occupancy: Decimal, market_occupancy: Decimal) -> Decimal:
    """Property occupancy relative to its market; 0 when the market is 0."""
    return safe_ratio(property_occupancy, market_occupancy)


def occupancy_by_property(
    snapshot: StarSnapshot, year: int, property_name: str | None = None
) -> list[OccupancyIndexRow]:
    """Monthly occupancy index per property.

    Only properties assigned to an existing market are reported. There is
    no property-grain occupancy fact, so the property figure is read from
    the feed of the market the property is assigned to and the comparison
    figure from the market dimension row it resolves to.
    """
    readings = snapshot.market_readings_by(year, "month")

    rows = []
    for prop in snapshot.properties_named(property_name):
        market_id = snapshot.market_id_of(prop)
        if market_id is None:
            continue
        for month in MONTHS:
            property_feed = readings.get((prop.market_id, month), [])
            market_feed = readings.get((market_id, month), [])
            property_occupancy = null_safe_avg(r.occupancy for r in property_feed)
            market_occupancy = null_safe_avg(r.occupancy for r in market_feed)
            rows.append(
                OccupancyIndexRow(
                    property_id=prop.property_id,
                    property_name=prop.property_name,
                    month=month,
                    occupancy=property_occupancy,
                    market_occupancy=market_occupancy,
                    occupancy_index=occupancy_index(property_occupancy, market_occupancy),
                )
            )
    return rows
