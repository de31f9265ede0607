"""Unit tests for budget-vs-actual variance."""

from __future__ import annotations

from decimal import Decimal

import pytest

from innvest.analytics.budget import budget_vs_actual

REVENUE, EXPENSE, UNTYPED = 1, 2, 3


@pytest.fixture
def snapshot(star):
    return (
        star.calendar(2024, months=range(1, 4))
        .property(1, "Harbor")
        .property(2, "Commons")
        .post(1, 2024, 1, "950", REVENUE)
        .post(1, 2024, 1, "50", REVENUE, is_forecast=True)
        .post(1, 2024, 1, "800", REVENUE, is_budget=True)
        .post(1, 2024, 1, "300", EXPENSE)
        .post(1, 2024, 1, "400", EXPENSE, is_budget=True)
        .post(1, 2024, 1, "999", UNTYPED)
        .post(2, 2024, 1, "500", REVENUE)
        .post(1, 2024, 2, "100", REVENUE)
        .build()
    )


def test_only_months_with_calendar_rows(snapshot):
    assert [r.month for r in budget_vs_actual(snapshot, 2024)] == [1, 2, 3]


def test_portfolio_variance(snapshot):
    jan = budget_vs_actual(snapshot, 2024)[0]

    assert jan.actual_revenue == Decimal("1500")
    assert jan.budget_revenue == Decimal("800")
    assert jan.variance_revenue == Decimal("700")
    assert jan.variance_pct_revenue == Decimal("0.875")
    assert jan.actual_expense == Decimal("300")
    assert jan.budget_expense == Decimal("400")
    assert jan.variance_expense == Decimal("-100")
    assert jan.variance_pct_expense == Decimal("-0.25")


def test_missing_budget_gives_zero_percentage(snapshot):
    feb = budget_vs_actual(snapshot, 2024)[1]

    assert feb.variance_revenue == Decimal("100")
    assert feb.variance_pct_revenue == Decimal("0")


def test_variance_is_actual_minus_budget(snapshot):
    for row in budget_vs_actual(snapshot, 2024):
        assert row.variance_revenue == row.actual_revenue - row.budget_revenue
        assert row.variance_expense == row.actual_expense - row.budget_expense


def test_property_filter(snapshot):
    jan = budget_vs_actual(snapshot, 2024, property_name="Harbor")[0]

    assert jan.actual_revenue == Decimal("1000")
    assert jan.variance_pct_revenue == Decimal("0.25")


def test_unmatched_property_filter(snapshot):
    assert budget_vs_actual(snapshot, 2024, property_name="Nowhere Inn") == []


def test_year_without_calendar_rows(snapshot):
    assert budget_vs_actual(snapshot, 2025) == []
