"""Portfolio roll-ups by region and by brand."""

from __future__ import annotations

from collections import defaultdict
from decimal import Decimal

from innvest.analytics.numeric import ZERO, null_safe_avg, null_safe_sum, to_decimal
from innvest.analytics.rows import BrandPerformanceRow, RegionPerformanceRow
from innvest.analytics.snapshot import MarketReading, Property, StarSnapshot
from innvest.db.models import ACCOUNT_TYPE_REVENUE


def _readings_for(
    snapshot: StarSnapshot,
    properties: list[Property],
    readings: dict[tuple[int | None, int | None], list[MarketReading]],
) -> list[MarketReading]:
    # One copy of the market feed per property, so markets shared by several
    # properties weigh in proportion to the number of properties.
    collected: list[MarketReading] = []
    for prop in properties:
        market_id = snapshot.market_id_of(prop)
        if market_id is not None:
            collected.extend(readings.get((market_id, None), []))
    return collected


def performance_by_region(
    snapshot: StarSnapshot, year: int, hotel_type: str | None = None
) -> list[RegionPerformanceRow]:
    """Revenue and market KPIs rolled up to region.

    Total revenue includes every financial fact regardless of account type.
    With a hotel-type filter only regions holding at least one property of
    that type are returned.
    """
    revenue: dict[int | None, Decimal] = defaultdict(lambda: ZERO)
    for fact, _ in snapshot.financial_facts_in(year):
        if fact.amount is not None:
            revenue[fact.property_id] += to_decimal(fact.amount)

    readings = snapshot.market_readings_by(year)

    members: dict[int, list[Property]] = defaultdict(list)
    for prop in snapshot.properties.values():
        if prop.region_id is None:
            continue
        if hotel_type is not None and snapshot.hotel_type_name_of(prop) != hotel_type:
            continue
        members[prop.region_id].append(prop)

    rows = []
    for region in snapshot.regions.values():
        properties = members.get(region.region_id, [])
        if hotel_type is not None and not properties:
            continue
        market = _readings_for(snapshot, properties, readings)
        rows.append(
            RegionPerformanceRow(
                region_id=region.region_id,
                region_name=region.region_name,
                total_revenue=null_safe_sum(revenue[p.property_id] for p in properties),
                avg_revpar=null_safe_avg(r.revpar for r in market),
                avg_occupancy=null_safe_avg(r.occupancy for r in market),
                growth_rate=null_safe_avg(r.demand_growth for r in market),
            )
        )

    rows.sort(key=lambda r: (-r.total_revenue, r.region_name, r.region_id))
    return rows


def brand_performance(snapshot: StarSnapshot, year: int) -> list[BrandPerformanceRow]:
    """Revenue-account totals and market KPIs per brand, highest revenue first."""
    revenue: dict[int | None, Decimal] = defaultdict(lambda: ZERO)
    for fact, _ in snapshot.financial_facts_in(year):
        if fact.amount is None or snapshot.account_type_of(fact) != ACCOUNT_TYPE_REVENUE:
            continue
        revenue[fact.property_id] += to_decimal(fact.amount)

    readings = snapshot.market_readings_by(year)

    members: dict[int, list[Property]] = defaultdict(list)
    for prop in snapshot.properties.values():
        if prop.brand_id is not None:
            members[prop.brand_id].append(prop)

    rows = []
    for brand in snapshot.brands.values():
        properties = members.get(brand.brand_id, [])
        market = _readings_for(snapshot, properties, readings)
        rows.append(
            BrandPerformanceRow(
                brand_id=brand.brand_id,
                brand_name=brand.brand_name,
                total_revenue=null_safe_sum(revenue[p.property_id] for p in properties),
                avg_revpar=null_safe_avg(r.revpar for r in market),
                avg_occupancy=null_safe_avg(r.occupancy for r in market),
                property_count=len({p.property_id for p in properties}),
            )
        )

    rows.sort(key=lambda r: (-r.total_revenue, r.brand_name, r.brand_id))
    return rows
