"""Fiscal calculators — taxes, break-even, deadlines, debts, reports."""

from forfettario.calculators.break_even import solve_break_even
from forfettario.calculators.deadlines import build_deadlines, deadline_statuses
from forfettario.calculators.debts import total_fixed_debt_estimate, upcoming_payments
from forfettario.calculators.engine import calculate_fiscal_stats, calculate_from_snapshot
from forfettario.calculators.expenses import expense_distribution, tag_goal_progress
from forfettario.calculators.periods import is_transaction_active, months_elapsed
from forfettario.calculators.taxes import estimate_taxes, tax_rate_for

__all__ = [
    "build_deadlines",
    "calculate_fiscal_stats",
    "calculate_from_snapshot",
    "deadline_statuses",
    "estimate_taxes",
    "expense_distribution",
    "is_transaction_active",
    "months_elapsed",
    "solve_break_even",
    "tag_goal_progress",
    "tax_rate_for",
    "total_fixed_debt_estimate",
    "upcoming_payments",
]
