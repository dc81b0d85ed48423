"""Yearly expense reports: distribution by main tag and budget progress per tag."""

from __future__ import annotations

from decimal import Decimal

from forfettario.models.enums import TransactionType
from forfettario.schemas.fiscal import Transaction
from forfettario.schemas.stats import ExpenseGoalRow, ExpenseTagRow

UNTAGGED = "non categorizzato"


def _main_tag(transaction: Transaction) -> str:
    """First comma-separated entry, lower-cased; UNTAGGED when it is blank."""
    return (transaction.tags or "").split(",")[0].strip().lower() or UNTAGGED


def _label(tag: str) -> str:
    return tag[:1].upper() + tag[1:]


def expense_distribution(
    transactions: list[Transaction],
    view_year: int,
    expense_goals: dict[str, Decimal] | None = None,
) -> list[ExpenseTagRow]:
    """Expenses of view_year grouped by main tag, largest first.

    Budgets are matched to tags case-insensitively. Scheduled expenses are
    included: the report shows where the year's money goes, not only what
    already left the account.
    """
    goals = {k.lower(): v for k, v in (expense_goals or {}).items()}

    totals: dict[str, Decimal] = {}
    for t in transactions:
        if t.type != TransactionType.EXPENSE or t.date.year != view_year:
            continue
        tag = _main_tag(t)
        totals[tag] = totals.get(tag, Decimal("0")) + t.amount

    grand_total = sum(totals.values(), start=Decimal("0"))

    rows: list[ExpenseTagRow] = []
    for tag, amount in totals.items():
        budget = goals.get(tag, Decimal("0"))
        has_budget = budget > 0
        rows.append(
            ExpenseTagRow(
                tag=_label(tag),
                amount=amount,
                percentage=amount / grand_total * 100 if grand_total > 0 else Decimal("0"),
                budget=budget,
                budget_percentage=amount / budget * 100 if has_budget else Decimal("0"),
                over_budget=has_budget and amount > budget,
            )
        )
    rows.sort(key=lambda r: r.amount, reverse=True)
    return rows


def tag_goal_progress(
    transactions: list[Transaction],
    view_year: int,
    expense_goals: dict[str, Decimal] | None = None,
) -> list[ExpenseGoalRow]:
    """Spending per tag in view_year and the year before, against expense_goals.

    Every tag of an expense counts, so a transaction tagged "casa,bollette"
    adds its full amount to both. Tags are matched to budgets exactly as
    written. Tags with a budget but no spending still get a row. Sorted by tag.
    """
    goals = expense_goals or {}
    current: dict[str, Decimal] = {}
    previous: dict[str, Decimal] = {}

    for t in transactions:
        if t.type != TransactionType.EXPENSE:
            continue
        if t.date.year == view_year:
            bucket = current
        elif t.date.year == view_year - 1:
            bucket = previous
        else:
            continue
        for tag in t.tag_list:
            bucket[tag] = bucket.get(tag, Decimal("0")) + t.amount

    rows: list[ExpenseGoalRow] = []
    for tag in sorted(set(goals) | set(current) | set(previous)):
        spent = current.get(tag, Decimal("0"))
        budget = goals.get(tag, Decimal("0"))
        has_budget = budget > 0
        rows.append(
            ExpenseGoalRow(
                tag=tag,
                current=spent,
                previous=previous.get(tag, Decimal("0")),
                budget=budget,
                percentage=spent / budget * 100 if has_budget else Decimal("0"),
                over_budget=has_budget and spent > budget,
            )
        )
    return rows
