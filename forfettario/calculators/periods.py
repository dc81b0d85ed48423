"""Calendar helpers: elapsed months and "is this record in effect" checks.

Every function takes the reference date explicitly; nothing here reads the
wall clock.
"""

from __future__ import annotations

from datetime import date

from forfettario.models.enums import TransactionStatus
from forfettario.schemas.fiscal import FixedDebt, Transaction


def months_elapsed(start_year: int, start_month: int, end_year: int, end_month: int) -> int:
    """Inclusive number of months from start to end, 0 if end precedes start.

    months_elapsed(2024, 3, 2024, 3) == 1
    months_elapsed(2023, 11, 2024, 2) == 4
    """
    if end_year < start_year:
        return 0
    if end_year == start_year and end_month < start_month:
        return 0
    return (end_year - start_year) * 12 + (end_month - start_month) + 1


def months_elapsed_in_year(view_year: int, today: date) -> int:
    """Months of view_year already behind us, used to annualize run rates.

    Past years count as complete (12). A future year counts as 1 so that
    projections stay finite.
    """
    if view_year < today.year:
        return 12
    if view_year == today.year:
        return max(1, today.month)
    return 1


def is_transaction_active(transaction: Transaction, today: date) -> bool:
    """True if the transaction counts towards realized totals.

    A missing status means active. Scheduled transactions become active
    once their date is reached.
    """
    if transaction.status is None or transaction.status == TransactionStatus.ACTIVE:
        return True
    return transaction.date <= today


def is_debt_effective(debt: FixedDebt, year: int, month: int) -> bool:
    """True if the debt is running (not suspended, already started) in year/month."""
    if debt.is_suspended:
        return False
    return months_elapsed(debt.start_year, debt.start_month, year, month) > 0
