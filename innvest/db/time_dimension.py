"""Calendar rows for the ``dim_time`` dimension.

Every time-based filter in the analytics engine resolves through this table,
so a year with no rows here is invisible to the reports.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Iterator

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from innvest.db.models import TimeModel


def time_attributes(day: date) -> dict[str, Any]:
    """Denormalized calendar attributes for a single date."""
    iso_year, iso_week, iso_weekday = day.isocalendar()
    return {
        "date": day,
        "day": day.day,
        "month": day.month,
        "quarter": (day.month - 1) // 3 + 1,
        "year": day.year,
        "day_of_week": iso_weekday,  # Monday = 1
        "week_of_year": iso_week,
        "is_weekend": iso_weekday >= 6,
    }


def build_time_rows(start: date, end: date) -> Iterator[dict[str, Any]]:
    """Yield attribute dicts for every date in ``[start, end]``."""
    current = start
    while current <= end:
        yield time_attributes(current)
        current += timedelta(days=1)


async def seed_time_dimension(session: AsyncSession, start_year: int, end_year: int) -> int:
    """Insert missing ``dim_time`` rows for whole calendar years.

    Returns:
        Number of rows inserted (dates already present are skipped)
    """
    start = date(start_year, 1, 1)
    end = date(end_year, 12, 31)

    existing = await session.execute(
        select(TimeModel.date).where(TimeModel.date >= start, TimeModel.date <= end)
    )
    present = {row[0] for row in existing.all()}

    new_rows = [
        TimeModel(**attrs) for attrs in build_time_rows(start, end) if attrs["date"] not in present
    ]
    session.add_all(new_rows)
    await session.flush()
    return len(new_rows)
