"""Recurring fixed debts: yearly estimate and current-month installments."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from forfettario.calculators.periods import is_debt_effective
from forfettario.schemas.fiscal import FixedDebt, Transaction
from forfettario.schemas.stats import UpcomingPayment


def debt_annual_estimate(debt: FixedDebt, view_year: int) -> Decimal:
    """Installments a debt is expected to charge over the whole view year.

    Suspended debts and debts starting after the view year contribute 0.
    A debt started in an earlier year runs all 12 months.
    """
    if debt.is_suspended or debt.start_year > view_year:
        return Decimal("0")
    first_month = 1 if debt.start_year < view_year else debt.start_month
    active_months = max(0, 12 - first_month + 1)
    return debt.installment * active_months


def total_fixed_debt_estimate(fixed_debts: list[FixedDebt], view_year: int) -> Decimal:
    """Sum of debt_annual_estimate over all debts."""
    return sum(
        (debt_annual_estimate(debt, view_year) for debt in fixed_debts),
        start=Decimal("0"),
    )


def payment_tag(debt_id: int, year: int, month: int) -> str:
    """Tag stamped on the transaction that settles one installment."""
    return f"debito-fisso-{debt_id}-{year}-{month}"


def upcoming_payments(
    fixed_debts: list[FixedDebt],
    transactions: list[Transaction],
    view_year: int,
    today: date,
) -> list[UpcomingPayment]:
    """Installments due in today's month, sorted by due date.

    Only meaningful while viewing the current year; any other view year
    yields an empty list.
    """
    if view_year != today.year:
        return []

    payments: list[UpcomingPayment] = []
    for debt in fixed_debts:
        if not is_debt_effective(debt, today.year, today.month):
            continue
        tag = payment_tag(debt.id, today.year, today.month)
        payments.append(
            UpcomingPayment(
                debt_id=debt.id,
                name=debt.name,
                installment=debt.installment,
                due_date=date(today.year, today.month, debt.debit_day),
                is_paid=any(tag in t.tag_list for t in transactions),
            )
        )
    payments.sort(key=lambda p: p.due_date)
    return payments
