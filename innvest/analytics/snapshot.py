"""Point-in-time, in-memory view of the star schema.

Reports never talk to the database directly. The engine loads a
``StarSnapshot`` (dimension tables keyed by surrogate id plus the fact rows
of the years a report needs) and hands it to a pure report function, which
performs its joins as explicit dictionary lookups. A foreign key that does
not resolve simply finds nothing, which gives left-outer-join semantics
without relying on a query planner.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field, fields
from datetime import date
from decimal import Decimal
from typing import Iterable, Iterator, Mapping, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from innvest.db.models import (
    AccountModel,
    BrandModel,
    DepartmentModel,
    FinancialFactModel,
    HotelTypeModel,
    MarketDataFactModel,
    MarketModel,
    PropertyModel,
    RegionModel,
    TimeModel,
)


@dataclass(frozen=True)
class HotelType:
    hotel_type_id: int
    hotel_type_name: str


@dataclass(frozen=True)
class Market:
    market_id: int
    market_name: str


@dataclass(frozen=True)
class Region:
    region_id: int
    region_name: str
    country_id: int | None = None


@dataclass(frozen=True)
class Brand:
    brand_id: int
    brand_name: str


@dataclass(frozen=True)
class Department:
    department_id: int
    department_name: str


@dataclass(frozen=True)
class Account:
    account_id: int
    account_name: str
    account_type: str | None = None


@dataclass(frozen=True)
class Property:
    property_id: int
    property_name: str
    hotel_type_id: int | None = None
    market_id: int | None = None
    region_id: int | None = None
    brand_id: int | None = None


@dataclass(frozen=True)
class TimePeriod:
    time_id: int
    date: date
    day: int
    month: int
    quarter: int
    year: int
    is_weekend: bool = False
    day_of_week: int = 1
    week_of_year: int = 1


@dataclass(frozen=True)
class FinancialFact:
    financial_id: int
    property_id: int | None = None
    time_id: int | None = None
    department_id: int | None = None
    account_id: int | None = None
    amount: Decimal | None = None
    is_budget: bool = False
    is_forecast: bool = False


@dataclass(frozen=True)
class MarketReading:
    market_data_id: int
    market_id: int | None = None
    time_id: int | None = None
    revpar: Decimal | None = None
    adr: Decimal | None = None
    occupancy: Decimal | None = None
    supply: int | None = None
    demand: int | None = None
    supply_growth: Decimal | None = None
    demand_growth: Decimal | None = None


@dataclass(frozen=True)
class StarSnapshot:
    """Immutable reference tables and fact rows for one report invocation."""

    properties: Mapping[int, Property] = field(default_factory=dict)
    markets: Mapping[int, Market] = field(default_factory=dict)
    regions: Mapping[int, Region] = field(default_factory=dict)
    brands: Mapping[int, Brand] = field(default_factory=dict)
    departments: Mapping[int, Department] = field(default_factory=dict)
    accounts: Mapping[int, Account] = field(default_factory=dict)
    hotel_types: Mapping[int, HotelType] = field(default_factory=dict)
    times: Mapping[int, TimePeriod] = field(default_factory=dict)
    financial_facts: tuple[FinancialFact, ...] = ()
    market_facts: tuple[MarketReading, ...] = ()

    # -- lookups ------------------------------------------------------------

    def time_of(self, time_id: int | None) -> TimePeriod | None:
        return self.times.get(time_id) if time_id is not None else None

    def account_type_of(self, fact: FinancialFact) -> str | None:
        account = self.accounts.get(fact.account_id) if fact.account_id is not None else None
        return account.account_type if account else None

    def market_id_of(self, prop: Property) -> int | None:
        """The property's market id, or None when it does not resolve."""
        if prop.market_id is not None and prop.market_id in self.markets:
            return prop.market_id
        return None

    def hotel_type_name_of(self, prop: Property) -> str | None:
        if prop.hotel_type_id is None:
            return None
        hotel_type = self.hotel_types.get(prop.hotel_type_id)
        return hotel_type.hotel_type_name if hotel_type else None

    def sorted_properties(self) -> list[Property]:
        return sorted(self.properties.values(), key=lambda p: (p.property_name, p.property_id))

    def properties_named(self, property_name: str | None) -> list[Property]:
        """Properties matching an optional exact-name filter, in name order."""
        return [
            p
            for p in self.sorted_properties()
            if property_name is None or p.property_name == property_name
        ]

    def months_of_year(self, year: int) -> list[int]:
        """Distinct months that have at least one Time row in ``year``."""
        return sorted({t.month for t in self.times.values() if t.year == year})

    # -- fact scans ---------------------------------------------------------

    def financial_facts_in(self, year: int) -> Iterator[tuple[FinancialFact, TimePeriod]]:
        """Financial facts whose time key resolves to ``year``."""
        for fact in self.financial_facts:
            period = self.time_of(fact.time_id)
            if period is not None and period.year == year:
                yield fact, period

    def market_facts_in(self, year: int) -> Iterator[tuple[MarketReading, TimePeriod]]:
        """Market readings whose time key resolves to ``year``."""
        for reading in self.market_facts:
            period = self.time_of(reading.time_id)
            if period is not None and period.year == year:
                yield reading, period

    def market_readings_by(
        self, year: int, grain: str | None = None
    ) -> dict[tuple[int | None, int | None], list[MarketReading]]:
        """Group a year's market readings by ``(market_id, month|quarter)``.

        ``grain`` is ``"month"``, ``"quarter"`` or None (whole year, key
        period is None). Readings for unknown markets are dropped.
        """
        grouped: dict[tuple[int | None, int | None], list[MarketReading]] = defaultdict(list)
        for reading, period in self.market_facts_in(year):
            if reading.market_id not in self.markets:
                continue
            bucket = getattr(period, grain) if grain else None
            grouped[(reading.market_id, bucket)].append(reading)
        return grouped


T = TypeVar("T")


def _from_model(cls: type[T], obj: object) -> T:
    return cls(**{f.name: getattr(obj, f.name) for f in fields(cls)})  # type: ignore[arg-type]


async def _load_dimension(
    session: AsyncSession, model: type, cls: type[T], key: str
) -> dict[int, T]:
    result = await session.execute(select(model))
    rows = {}
    for obj in result.scalars().all():
        rows[getattr(obj, key)] = _from_model(cls, obj)
    return rows


async def load_snapshot(
    session: AsyncSession, years: Iterable[int] | None = None
) -> StarSnapshot:
    """Read dimensions and facts into a ``StarSnapshot``.

    Args:
        session: Database session; all reads happen inside its transaction
        years: Restrict facts to these calendar years (every report filters
            on Time.year, so facts outside them could never contribute).
            None loads every fact row.

    Raises:
        SQLAlchemyError: If the store cannot be read
    """
    times = await _load_dimension(session, TimeModel, TimePeriod, "time_id")

    financial_stmt = select(FinancialFactModel)
    market_stmt = select(MarketDataFactModel)
    if years is not None:
        year_list = sorted(set(years))
        times = {tid: t for tid, t in times.items() if t.year in year_list}
        time_ids = select(TimeModel.time_id).where(TimeModel.year.in_(year_list))
        financial_stmt = financial_stmt.where(FinancialFactModel.time_id.in_(time_ids))
        market_stmt = market_stmt.where(MarketDataFactModel.time_id.in_(time_ids))

    financial_facts = tuple(
        _from_model(FinancialFact, obj)
        for obj in (await session.execute(financial_stmt)).scalars().all()
    )
    market_facts = tuple(
        _from_model(MarketReading, obj)
        for obj in (await session.execute(market_stmt)).scalars().all()
    )

    return StarSnapshot(
        properties=await _load_dimension(session, PropertyModel, Property, "property_id"),
        markets=await _load_dimension(session, MarketModel, Market, "market_id"),
        regions=await _load_dimension(session, RegionModel, Region, "region_id"),
        brands=await _load_dimension(session, BrandModel, Brand, "brand_id"),
        departments=await _load_dimension(session, DepartmentModel, Department, "department_id"),
        accounts=await _load_dimension(session, AccountModel, Account, "account_id"),
        hotel_types=await _load_dimension(session, HotelTypeModel, HotelType, "hotel_type_id"),
        times=times,
        financial_facts=financial_facts,
        market_facts=market_facts,
    )
