"""Department expense breakdown with year-over-year change.

Computed in two independent passes (current year, prior year), each
producing a department -> expense map, followed by a pure merge. The passes
share no intermediate state and can be tested on their own.
"""

from __future__ import annotations

from decimal import Decimal

from innvest.analytics.numeric import ZERO, null_safe_sum, safe_ratio, to_decimal
from innvest.analytics.rows import DepartmentExpenseRow
from innvest.analytics.snapshot import StarSnapshot
from innvest.db.models import ACCOUNT_TYPE_EXPENSE


def department_expense_totals(
    snapshot: StarSnapshot, year: int, property_name: str | None = None
) -> dict[int, Decimal]:
    """Expense-account total per department for one year.

    A department is present when it has at least one financial fact in the
    year (after the property filter); its total is 0 when none of those
    facts are Expense-tagged. Facts whose department does not resolve are
    ignored.
    """
    totals: dict[int, Decimal] = {}
    for fact, _ in snapshot.financial_facts_in(year):
        if fact.department_id not in snapshot.departments:
            continue
        if property_name is not None:
            prop = snapshot.properties.get(fact.property_id) if fact.property_id is not None else None
            if prop is None or prop.property_name != property_name:
                continue
        total = totals.setdefault(fact.department_id, ZERO)
        if snapshot.account_type_of(fact) == ACCOUNT_TYPE_EXPENSE and fact.amount is not None:
            totals[fact.department_id] = total + to_decimal(fact.amount)
    return totals


def merge_department_expenses(
    snapshot: StarSnapshot,
    current: dict[int, Decimal],
    previous: dict[int, Decimal],
) -> list[DepartmentExpenseRow]:
    """Combine the two passes into report rows, largest expense first.

    A department absent from ``previous`` reports a change of 0.
    """
    grand_total = null_safe_sum(current.values())

    rows = []
    for department_id, expenses in current.items():
        department = snapshot.departments[department_id]
        prior = previous.get(department_id, ZERO)
        rows.append(
            DepartmentExpenseRow(
                department_id=department_id,
                department_name=department.department_name,
                total_expenses=expenses,
                percentage_of_total=safe_ratio(expenses, grand_total),
                year_over_year_change=safe_ratio(expenses - prior, prior),
            )
        )

    rows.sort(key=lambda r: (-r.total_expenses, r.department_name, r.department_id))
    return rows


def expenses_by_department(
    snapshot: StarSnapshot, year: int, property_name: str | None = None
) -> list[DepartmentExpenseRow]:
    current = department_expense_totals(snapshot, year, property_name)
    previous = department_expense_totals(snapshot, year - 1, property_name)
    return merge_department_expenses(snapshot, current, previous)
