"""Unit tests for market trends and the ranked market comparison."""

from __future__ import annotations

from decimal import Decimal

import pytest

from innvest.analytics.market_reports import (
    competition_ranks,
    market_comparison,
    market_dashboard,
    market_trends,
)


@pytest.fixture
def snapshot(star):
    return (
        star.calendar(2022, 2023, 2024)
        .market(1, "Austin")
        .market(2, "Boston")
        .market(3, "Chicago")
        .market(4, "Denver")
        .reading(1, 2022, 6, revpar="80", adr="120", occupancy="0.66")
        .reading(1, 2024, 1, revpar="90", adr="140", occupancy="0.60", demand_growth="0.01")
        .reading(1, 2024, 2, revpar="110", adr="160", occupancy="0.80", demand_growth="0.03")
        .reading(2, 2024, 1, revpar="100", adr="150", occupancy="0.70")
        .reading(3, 2024, 1, revpar="90", adr="130", occupancy="0.69")
        .reading(99, 2024, 1, revpar="10000")
        .build()
    )


class TestCompetitionRanks:
    def test_ties_share_rank_and_next_rank_skips(self):
        assert competition_ranks([Decimal("100"), Decimal("100"), Decimal("90")]) == [1, 1, 3]

    def test_longer_tie(self):
        values = [Decimal(v) for v in ("5", "4", "4", "4", "1")]
        assert competition_ranks(values) == [1, 2, 2, 2, 5]

    def test_empty(self):
        assert competition_ranks([]) == []


class TestMarketComparison:
    def test_ranked_by_average_revpar(self, snapshot):
        rows = market_comparison(snapshot, 2024)

        assert [(r.market_name, r.avg_revpar, r.rank) for r in rows] == [
            ("Austin", Decimal("100"), 1),
            ("Boston", Decimal("100"), 1),
            ("Chicago", Decimal("90"), 3),
            ("Denver", Decimal("0"), 4),
        ]

    def test_averages(self, snapshot):
        austin = market_comparison(snapshot, 2024)[0]

        assert austin.avg_adr == Decimal("150")
        assert austin.avg_occupancy == Decimal("0.70")
        assert austin.revpar_growth == Decimal("0.02")

    def test_truncated_after_ranking(self, snapshot):
        rows = market_comparison(snapshot, 2024, top_n=3)

        assert [r.rank for r in rows] == [1, 1, 3]

    @pytest.mark.parametrize("top_n", [None, 0, -1, 10])
    def test_no_limit(self, snapshot, top_n):
        assert len(market_comparison(snapshot, 2024, top_n=top_n)) == 4

    def test_ranks_are_non_decreasing(self, snapshot):
        ranks = [r.rank for r in market_comparison(snapshot, 2024)]
        assert ranks == sorted(ranks)


class TestMarketTrends:
    def test_one_row_per_year_including_empty_years(self, snapshot):
        rows = market_trends(snapshot, 2022, 2024, market_name="Austin")

        assert [r.year for r in rows] == [2022, 2023, 2024]
        assert rows[0].revpar == Decimal("80")
        assert rows[1].revpar == Decimal("0")
        assert rows[1].occupancy == Decimal("0")
        assert rows[2].revpar == Decimal("100")
        assert rows[2].demand_growth == Decimal("0.02")

    def test_all_markets_ignores_unknown_market_keys(self, snapshot):
        (row,) = market_trends(snapshot, 2024, 2024)

        assert row.revpar == Decimal("97.5")

    def test_inverted_range(self, snapshot):
        assert market_trends(snapshot, 2024, 2022) == []

    def test_unknown_market_yields_zero_rows(self, snapshot):
        rows = market_trends(snapshot, 2022, 2023, market_name="Nowhere")

        assert [(r.year, r.revpar, r.adr) for r in rows] == [
            (2022, Decimal("0"), Decimal("0")),
            (2023, Decimal("0"), Decimal("0")),
        ]


class TestMarketDashboard:
    def test_industry_line_comes_first(self, snapshot):
        industry = market_dashboard(snapshot, 2024)[0]

        assert industry.scope == "industry"
        assert industry.market_id is None
        assert industry.revpar == Decimal("2078")
        assert industry.adr == Decimal("145")
        assert industry.occupancy == Decimal("0.6975")
        assert industry.growth == Decimal("0.02")

    def test_top_markets_by_average_revpar(self, snapshot):
        markets = market_dashboard(snapshot, 2024)[1:]

        assert [(m.market_name, m.revpar) for m in markets] == [
            ("Austin", Decimal("100")),
            ("Boston", Decimal("100")),
            ("Chicago", Decimal("90")),
        ]
        assert all(m.scope == "market" for m in markets)
        assert markets[0].growth == Decimal("0.02")

    @pytest.mark.parametrize("top_n,count", [(1, 1), (2, 2), (0, 3), (-1, 3)])
    def test_top_n(self, snapshot, top_n, count):
        assert len(market_dashboard(snapshot, 2024, top_n=top_n)) == 1 + count

    def test_year_without_readings_still_has_industry_line(self, snapshot):
        (industry,) = market_dashboard(snapshot, 2023)

        assert industry.scope == "industry"
        assert (industry.revpar, industry.adr, industry.occupancy, industry.growth) == (
            Decimal("0"),
            Decimal("0"),
            Decimal("0"),
            Decimal("0"),
        )
