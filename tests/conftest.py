"""Pytest configuration and fixtures for InnVest tests.

Provides a throwaway environment and a terse builder for star-schema
snapshots used by the report tests.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from innvest.analytics.snapshot import (
    Account,
    Brand,
    Department,
    FinancialFact,
    HotelType,
    Market,
    MarketReading,
    Property,
    Region,
    StarSnapshot,
    TimePeriod,
)
from innvest.config import reset_config


@pytest.fixture(autouse=True)
def test_env(monkeypatch):
    """Point configuration at an in-memory database for every test."""
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
    monkeypatch.delenv("ANALYTICS_DEFAULT_TOP_N", raising=False)
    monkeypatch.delenv("ANALYTICS_SLOW_REPORT_MS", raising=False)
    reset_config()
    yield
    reset_config()


def _dec(value) -> Decimal | None:
    return None if value is None else Decimal(str(value))


class StarBuilder:
    """Assembles a StarSnapshot from terse test data.

    Calendar rows are one per month, keyed ``year * 100 + month``.
    """

    def __init__(self):
        self.properties: dict[int, Property] = {}
        self.markets: dict[int, Market] = {}
        self.regions: dict[int, Region] = {}
        self.brands: dict[int, Brand] = {}
        self.departments: dict[int, Department] = {}
        self.accounts: dict[int, Account] = {}
        self.hotel_types: dict[int, HotelType] = {}
        self.times: dict[int, TimePeriod] = {}
        self.financial: list[FinancialFact] = []
        self.readings: list[MarketReading] = []

    @staticmethod
    def time_id(year: int, month: int) -> int:
        return year * 100 + month

    def calendar(self, *years: int, months=range(1, 13)) -> StarBuilder:
        for year in years:
            for month in months:
                self.times[self.time_id(year, month)] = TimePeriod(
                    time_id=self.time_id(year, month),
                    date=date(year, month, 1),
                    day=1,
                    month=month,
                    quarter=(month - 1) // 3 + 1,
                    year=year,
                )
        return self

    def market(self, market_id: int, name: str) -> StarBuilder:
        self.markets[market_id] = Market(market_id, name)
        return self

    def region(self, region_id: int, name: str) -> StarBuilder:
        self.regions[region_id] = Region(region_id, name)
        return self

    def brand(self, brand_id: int, name: str) -> StarBuilder:
        self.brands[brand_id] = Brand(brand_id, name)
        return self

    def hotel_type(self, hotel_type_id: int, name: str) -> StarBuilder:
        self.hotel_types[hotel_type_id] = HotelType(hotel_type_id, name)
        return self

    def department(self, department_id: int, name: str) -> StarBuilder:
        self.departments[department_id] = Department(department_id, name)
        return self

    def account(self, account_id: int, name: str, account_type: str | None) -> StarBuilder:
        self.accounts[account_id] = Account(account_id, name, account_type)
        return self

    def property(self, property_id: int, name: str, **keys) -> StarBuilder:
        self.properties[property_id] = Property(property_id, name, **keys)
        return self

    def post(
        self,
        property_id: int | None,
        year: int,
        month: int,
        amount,
        account_id: int | None = None,
        department_id: int | None = None,
        is_budget: bool = False,
        is_forecast: bool = False,
    ) -> StarBuilder:
        self.financial.append(
            FinancialFact(
                financial_id=len(self.financial) + 1,
                property_id=property_id,
                time_id=self.time_id(year, month),
                department_id=department_id,
                account_id=account_id,
                amount=_dec(amount),
                is_budget=is_budget,
                is_forecast=is_forecast,
            )
        )
        return self

    def reading(
        self,
        market_id: int | None,
        year: int,
        month: int,
        revpar=None,
        adr=None,
        occupancy=None,
        supply_growth=None,
        demand_growth=None,
    ) -> StarBuilder:
        self.readings.append(
            MarketReading(
                market_data_id=len(self.readings) + 1,
                market_id=market_id,
                time_id=self.time_id(year, month),
                revpar=_dec(revpar),
                adr=_dec(adr),
                occupancy=_dec(occupancy),
                supply_growth=_dec(supply_growth),
                demand_growth=_dec(demand_growth),
            )
        )
        return self

    def build(self) -> StarSnapshot:
        return StarSnapshot(
            properties=dict(self.properties),
            markets=dict(self.markets),
            regions=dict(self.regions),
            brands=dict(self.brands),
            departments=dict(self.departments),
            accounts=dict(self.accounts),
            hotel_types=dict(self.hotel_types),
            times=dict(self.times),
            financial_facts=tuple(self.financial),
            market_facts=tuple(self.readings),
        )


REVENUE = 1
EXPENSE = 2
UNTYPED = 3


@pytest.fixture
def star() -> StarBuilder:
    """Empty builder with the three standard accounts."""
    return (
        StarBuilder()
        .account(REVENUE, "Room Revenue", "Revenue")
        .account(EXPENSE, "Payroll", "Expense")
        .account(UNTYPED, "Statistics", None)
    )
