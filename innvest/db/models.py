"""SQLAlchemy async database models for InnVest.

Star schema: reference dimensions keyed by integer surrogate ids and two fact
tables (financial postings and market readings). Foreign-key columns are plain
nullable integers; a key that does not resolve is a referential gap, not an
error, so no database-level constraints are declared.
"""

from __future__ import annotations

from datetime import date as date_type
from datetime import datetime
from decimal import Decimal

from sqlalchemy import Boolean, Date, DateTime, Index, Integer, Numeric, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func

ACCOUNT_TYPE_REVENUE = "Revenue"
ACCOUNT_TYPE_EXPENSE = "Expense"


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class AuditMixin:
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


# ---------------------------------------------------------------------------
# Dimensions
# ---------------------------------------------------------------------------


class HotelTypeModel(AuditMixin, Base):
    __tablename__ = "dim_hotel_type"

    hotel_type_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    hotel_type_name: Mapped[str] = mapped_column(String(100), nullable=False)


class MarketModel(AuditMixin, Base):
    __tablename__ = "dim_market"

    market_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    market_name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)


class CountryModel(AuditMixin, Base):
    __tablename__ = "dim_country"

    country_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    country_name: Mapped[str] = mapped_column(String(100), nullable=False)


class RegionModel(AuditMixin, Base):
    __tablename__ = "dim_region"

    region_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    region_name: Mapped[str] = mapped_column(String(100), nullable=False)
    country_id: Mapped[int | None] = mapped_column(Integer)


class StateModel(AuditMixin, Base):
    __tablename__ = "dim_state"

    state_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    state_name: Mapped[str] = mapped_column(String(100), nullable=False)
    country_id: Mapped[int | None] = mapped_column(Integer)
    region_id: Mapped[int | None] = mapped_column(Integer)


class CityModel(AuditMixin, Base):
    __tablename__ = "dim_city"

    city_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    city_name: Mapped[str] = mapped_column(String(100), nullable=False)
    state_id: Mapped[int | None] = mapped_column(Integer)


class BrandModel(AuditMixin, Base):
    __tablename__ = "dim_brand"

    brand_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    brand_name: Mapped[str] = mapped_column(String(100), nullable=False)


class ChainScaleModel(AuditMixin, Base):
    __tablename__ = "dim_chain_scale"

    chain_scale_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    chain_scale_name: Mapped[str] = mapped_column(String(100), nullable=False)


class DepartmentModel(AuditMixin, Base):
    __tablename__ = "dim_department"

    department_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    department_name: Mapped[str] = mapped_column(String(100), nullable=False)


class AccountModel(AuditMixin, Base):
    """Chart-of-accounts entry; account_type classifies every financial fact."""

    __tablename__ = "dim_account"

    account_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    account_name: Mapped[str] = mapped_column(String(100), nullable=False)
    account_type: Mapped[str | None] = mapped_column(String(50))  # Revenue | Expense


class PropertyModel(AuditMixin, Base):
    """Hotel property; each dimension reference may be unset."""

    __tablename__ = "dim_property"

    property_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    property_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    hotel_type_id: Mapped[int | None] = mapped_column(Integer)
    market_id: Mapped[int | None] = mapped_column(Integer)
    country_id: Mapped[int | None] = mapped_column(Integer)
    region_id: Mapped[int | None] = mapped_column(Integer)
    state_id: Mapped[int | None] = mapped_column(Integer)
    city_id: Mapped[int | None] = mapped_column(Integer)
    brand_id: Mapped[int | None] = mapped_column(Integer)
    chain_scale_id: Mapped[int | None] = mapped_column(Integer)


class TimeModel(AuditMixin, Base):
    """One row per calendar date with denormalized calendar attributes."""

    __tablename__ = "dim_time"

    time_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    date: Mapped[date_type] = mapped_column(Date, nullable=False, unique=True)
    day: Mapped[int] = mapped_column(Integer, nullable=False)
    month: Mapped[int] = mapped_column(Integer, nullable=False)
    quarter: Mapped[int] = mapped_column(Integer, nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    is_weekend: Mapped[bool] = mapped_column(Boolean, nullable=False)
    day_of_week: Mapped[int] = mapped_column(Integer, nullable=False)
    week_of_year: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (Index("idx_dim_time_year_month", "year", "month"),)


# ---------------------------------------------------------------------------
# Facts
# ---------------------------------------------------------------------------


class FinancialFactModel(AuditMixin, Base):
    """Financial posting.

    Budget and actual amounts for the same (property, time, department,
    account) coexist as separate rows distinguished by the flags.
    """

    __tablename__ = "fact_financial"

    financial_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    property_id: Mapped[int | None] = mapped_column(Integer)
    time_id: Mapped[int | None] = mapped_column(Integer)
    department_id: Mapped[int | None] = mapped_column(Integer)
    account_id: Mapped[int | None] = mapped_column(Integer)
    amount: Mapped[Decimal | None] = mapped_column(Numeric(15, 2))
    is_budget: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_forecast: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (
        Index("idx_fact_financial_property_time", "property_id", "time_id"),
        Index("idx_fact_financial_department", "department_id"),
    )


class MarketDataFactModel(AuditMixin, Base):
    """Market-level KPI reading; occupancy and growth columns are fractions."""

    __tablename__ = "fact_market_data"

    market_data_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    market_id: Mapped[int | None] = mapped_column(Integer)
    time_id: Mapped[int | None] = mapped_column(Integer)
    revpar: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    adr: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    occupancy: Mapped[Decimal | None] = mapped_column(Numeric(5, 4))
    supply: Mapped[int | None] = mapped_column(Integer)
    demand: Mapped[int | None] = mapped_column(Integer)
    supply_growth: Mapped[Decimal | None] = mapped_column(Numeric(5, 4))
    demand_growth: Mapped[Decimal | None] = mapped_column(Numeric(5, 4))

    __table_args__ = (Index("idx_fact_market_data_market_time", "market_id", "time_id"),)
