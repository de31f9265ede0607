"""Unit tests for the department expense breakdown."""

from __future__ import annotations

from decimal import Decimal

import pytest

from innvest.analytics.department_expenses import (
    department_expense_totals,
    expenses_by_department,
    merge_department_expenses,
)

REVENUE, EXPENSE, UNTYPED = 1, 2, 3


@pytest.fixture
def snapshot(star):
    return (
        star.calendar(2023, 2024)
        .department(1, "Rooms")
        .department(2, "F&B")
        .department(3, "Spa")
        .department(4, "Admin")
        .property(1, "Harbor")
        .property(2, "Commons")
        # prior year
        .post(1, 2023, 6, "400", EXPENSE, department_id=1)
        .post(1, 2023, 6, "500", EXPENSE, department_id=2)
        # current year
        .post(1, 2024, 2, "600", EXPENSE, department_id=1)
        .post(2, 2024, 3, "200", EXPENSE, department_id=1)
        .post(1, 2024, 4, "250", EXPENSE, department_id=2)
        .post(1, 2024, 4, "9000", REVENUE, department_id=2)
        .post(1, 2024, 5, "200", EXPENSE, department_id=3)
        .post(1, 2024, 5, "300", REVENUE, department_id=4)
        .post(1, 2024, 5, "75", EXPENSE, department_id=99)
        .post(1, 2024, 5, "75", EXPENSE)
        .build()
    )


def test_rows_sorted_by_expense(snapshot):
    rows = expenses_by_department(snapshot, 2024)

    assert [(r.department_name, r.total_expenses) for r in rows] == [
        ("Rooms", Decimal("800")),
        ("F&B", Decimal("250")),
        ("Spa", Decimal("200")),
        ("Admin", Decimal("0")),
    ]


def test_percentage_of_total(snapshot):
    pct = {r.department_name: r.percentage_of_total for r in expenses_by_department(snapshot, 2024)}

    assert pct == {
        "Rooms": Decimal("0.64"),
        "F&B": Decimal("0.2"),
        "Spa": Decimal("0.16"),
        "Admin": Decimal("0"),
    }
    assert sum(pct.values()) == Decimal("1")


def test_year_over_year_change(snapshot):
    yoy = {r.department_name: r.year_over_year_change for r in expenses_by_department(snapshot, 2024)}

    assert yoy["Rooms"] == Decimal("1")
    assert yoy["F&B"] == Decimal("-0.5")


def test_department_first_seen_this_year_has_zero_change(snapshot):
    yoy = {r.department_name: r.year_over_year_change for r in expenses_by_department(snapshot, 2024)}

    assert yoy["Spa"] == Decimal("0")
    assert yoy["Admin"] == Decimal("0")


def test_property_filter(snapshot):
    rows = expenses_by_department(snapshot, 2024, property_name="Commons")

    assert len(rows) == 1
    assert rows[0].department_name == "Rooms"
    assert rows[0].total_expenses == Decimal("200")
    assert rows[0].percentage_of_total == Decimal("1")
    assert rows[0].year_over_year_change == Decimal("0")


def test_year_without_facts(snapshot):
    assert expenses_by_department(snapshot, 2030) == []


class TestPasses:
    def test_single_year_totals(self, snapshot):
        assert department_expense_totals(snapshot, 2023) == {1: Decimal("400"), 2: Decimal("500")}

    def test_unresolved_departments_are_ignored(self, snapshot):
        assert 99 not in department_expense_totals(snapshot, 2024)

    def test_merge_is_independent_of_the_snapshot_facts(self, snapshot):
        rows = merge_department_expenses(snapshot, {3: Decimal("50")}, {3: Decimal("25")})

        assert len(rows) == 1
        assert rows[0].department_name == "Spa"
        assert rows[0].percentage_of_total == Decimal("1")
        assert rows[0].year_over_year_change == Decimal("1")
