"""Market-level reports: multi-year trends and ranked comparison."""

from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from innvest.analytics.numeric import null_safe_avg
from innvest.analytics.rows import MarketComparisonRow, MarketDashboardRow, MarketTrendRow
from innvest.analytics.snapshot import StarSnapshot


def market_trends(
    snapshot: StarSnapshot,
    start_year: int,
    end_year: int,
    market_name: str | None = None,
) -> list[MarketTrendRow]:
    """Yearly market KPI averages for ``start_year..end_year`` inclusive.

    ``market_name=None`` averages across all markets. Years without data
    still appear with zeros; an inverted range yields no rows.
    """
    market_ids = {
        m.market_id
        for m in snapshot.markets.values()
        if market_name is None or m.market_name == market_name
    }

    rows = []
    for year in range(start_year, end_year + 1):
        readings = [r for r, _ in snapshot.market_facts_in(year) if r.market_id in market_ids]
        rows.append(
            MarketTrendRow(
                year=year,
                revpar=null_safe_avg(r.revpar for r in readings),
                adr=null_safe_avg(r.adr for r in readings),
                occupancy=null_safe_avg(r.occupancy for r in readings),
                supply_growth=null_safe_avg(r.supply_growth for r in readings),
                demand_growth=null_safe_avg(r.demand_growth for r in readings),
            )
        )
    return rows


def competition_ranks(values: Sequence[Decimal]) -> list[int]:
    """Standard competition ranks for values sorted in descending order.

    rank = 1 + number of strictly larger values, so ties share a rank and
    the following rank skips: [100, 100, 90] -> [1, 1, 3].
    """
    ranks: list[int] = []
    for position, value in enumerate(values):
        if position > 0 and value == values[position - 1]:
            ranks.append(ranks[-1])
        else:
            ranks.append(position + 1)
    return ranks


def market_comparison(
    snapshot: StarSnapshot, year: int, top_n: int | None = None
) -> list[MarketComparisonRow]:
    """Markets ranked by average RevPAR for the year.

    The result is truncated to ``top_n`` after ranking; None or a value
    <= 0 returns every market.
    """
    readings = snapshot.market_readings_by(year)

    metrics = []
    for market in snapshot.markets.values():
        feed = readings.get((market.market_id, None), [])
        metrics.append(
            (
                market,
                null_safe_avg(r.revpar for r in feed),
                null_safe_avg(r.adr for r in feed),
                null_safe_avg(r.occupancy for r in feed),
                null_safe_avg(r.demand_growth for r in feed),
            )
        )

    metrics.sort(key=lambda m: (-m[1], m[0].market_name, m[0].market_id))
    ranks = competition_ranks([m[1] for m in metrics])

    rows = [
        MarketComparisonRow(
            market_id=market.market_id,
            market_name=market.market_name,
            avg_revpar=avg_revpar,
            avg_adr=avg_adr,
            avg_occupancy=avg_occupancy,
            revpar_growth=growth,
            rank=rank,
        )
        for (market, avg_revpar, avg_adr, avg_occupancy, growth), rank in zip(metrics, ranks)
    ]

    if top_n is not None and top_n > 0:
        rows = rows[:top_n]
    return rows


INDUSTRY_SCOPE = "industry"
MARKET_SCOPE = "market"


def market_dashboard(
    snapshot: StarSnapshot, year: int, top_n: int = 5
) -> list[MarketDashboardRow]:
    """Industry-wide averages followed by the top markets by average RevPAR.

    The first row is always the industry line, averaged over every market
    reading of the year (including readings whose market does not resolve),
    so an empty year still yields one all-zero row. Market lines cover only
    markets with readings that year; ``top_n <= 0`` lists them all.
    """
    industry = [r for r, _ in snapshot.market_facts_in(year)]
    rows = [
        MarketDashboardRow(
            scope=INDUSTRY_SCOPE,
            market_id=None,
            market_name="All markets",
            revpar=null_safe_avg(r.revpar for r in industry),
            adr=null_safe_avg(r.adr for r in industry),
            occupancy=null_safe_avg(r.occupancy for r in industry),
            growth=null_safe_avg(r.demand_growth for r in industry),
        )
    ]

    readings = snapshot.market_readings_by(year)
    markets = []
    for (market_id, _), feed in readings.items():
        market = snapshot.markets[market_id]
        markets.append(
            MarketDashboardRow(
                scope=MARKET_SCOPE,
                market_id=market.market_id,
                market_name=market.market_name,
                revpar=null_safe_avg(r.revpar for r in feed),
                adr=null_safe_avg(r.adr for r in feed),
                occupancy=null_safe_avg(r.occupancy for r in feed),
                growth=null_safe_avg(r.demand_growth for r in feed),
            )
        )
    markets.sort(key=lambda m: (-m.revpar, m.market_name, m.market_id))

    if top_n > 0:
        markets = markets[:top_n]
    return rows + markets
