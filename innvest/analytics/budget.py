"""Monthly budget-vs-actual variance for revenue and expense accounts."""

from __future__ import annotations

from collections import defaultdict
from decimal import Decimal

from innvest.analytics.numeric import ZERO, safe_ratio, to_decimal
from innvest.analytics.rows import BudgetVarianceRow
from innvest.analytics.snapshot import StarSnapshot
from innvest.db.models import ACCOUNT_TYPE_EXPENSE, ACCOUNT_TYPE_REVENUE


def budget_vs_actual(
    snapshot: StarSnapshot, year: int, property_name: str | None = None
) -> list[BudgetVarianceRow]:
    """Actual vs budget per month.

    Only months that have Time rows for ``year`` appear (no zero-filling of
    missing months). When a property filter matches no property the result
    is empty. Forecast flags are not considered.
    """
    property_ids = {p.property_id for p in snapshot.properties_named(property_name)}
    if not property_ids:
        return []

    # (month, account_type, is_budget) -> amount
    sums: dict[tuple[int, str, bool], Decimal] = defaultdict(lambda: ZERO)
    for fact, period in snapshot.financial_facts_in(year):
        if fact.property_id not in property_ids or fact.amount is None:
            continue
        account_type = snapshot.account_type_of(fact)
        if account_type not in (ACCOUNT_TYPE_REVENUE, ACCOUNT_TYPE_EXPENSE):
            continue
        sums[(period.month, account_type, bool(fact.is_budget))] += to_decimal(fact.amount)

    rows = []
    for month in snapshot.months_of_year(year):
        actual_revenue = sums[(month, ACCOUNT_TYPE_REVENUE, False)]
        budget_revenue = sums[(month, ACCOUNT_TYPE_REVENUE, True)]
        actual_expense = sums[(month, ACCOUNT_TYPE_EXPENSE, False)]
        budget_expense = sums[(month, ACCOUNT_TYPE_EXPENSE, True)]
        variance_revenue = actual_revenue - budget_revenue
        variance_expense = actual_expense - budget_expense
        rows.append(
            BudgetVarianceRow(
                month=month,
                actual_revenue=actual_revenue,
                budget_revenue=budget_revenue,
                variance_revenue=variance_revenue,
                variance_pct_revenue=safe_ratio(variance_revenue, budget_revenue),
                actual_expense=actual_expense,
                budget_expense=budget_expense,
                variance_expense=variance_expense,
                variance_pct_expense=safe_ratio(variance_expense, budget_expense),
            )
        )
    return rows
