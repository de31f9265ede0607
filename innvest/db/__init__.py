"""Database layer for InnVest with async SQLAlchemy."""

from innvest.db.connection import get_db, get_session, init_db
from innvest.db.models import (
    AccountModel,
    Base,
    BrandModel,
    ChainScaleModel,
    CityModel,
    CountryModel,
    DepartmentModel,
    FinancialFactModel,
    HotelTypeModel,
    MarketDataFactModel,
    MarketModel,
    PropertyModel,
    RegionModel,
    StateModel,
    TimeModel,
)

__all__ = [
    "Base",
    "AccountModel",
    "BrandModel",
    "ChainScaleModel",
    "CityModel",
    "CountryModel",
    "DepartmentModel",
    "HotelTypeModel",
    "MarketModel",
    "PropertyModel",
    "RegionModel",
    "StateModel",
    "TimeModel",
    "FinancialFactModel",
    "MarketDataFactModel",
    "get_db",
    "get_session",
    "init_db",
]
