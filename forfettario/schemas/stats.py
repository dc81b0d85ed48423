"""Pydantic schemas for the engine outputs.

Stats is recomputed from scratch on every call and never updated in place.
Values are unrounded Decimals; use Stats.rounded() for presentation.
"""

from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from pydantic import BaseModel, ConfigDict

from forfettario.models.enums import DeadlineStatus


_RATIO_FIELDS = frozenset({"tax_rate_applied", "weighted_coefficient"})


def _to_euro(value: Decimal) -> Decimal:
    """Round to 2 decimal places."""
    return value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


# ---------------------------------------------------------------------------
# Building blocks
# ---------------------------------------------------------------------------


class TaxEstimate(BaseModel):
    """Imposta sostitutiva and INPS due on a given taxable income."""

    model_config = ConfigDict(frozen=True)

    reddito_imponibile: Decimal
    tax_rate: Decimal
    flat_tax: Decimal
    inps: Decimal

    @property
    def total(self) -> Decimal:
        return self.flat_tax + self.inps


class BreakEvenResult(BaseModel):
    """Gross-up solution for the break-even turnover.

    branch is one of "separata", "artigiani_low", "artigiani_high" or
    "unreachable"; an unreachable solve keeps turnover at 0.
    """

    model_config = ConfigDict(frozen=True)

    turnover: Decimal
    branch: str
    target_net_income: Decimal
    weighted_coefficient: Decimal

    @property
    def reachable(self) -> bool:
        return self.branch != "unreachable"


class FiscalDeadline(BaseModel):
    """One tax payment date (F24) with its split between tax and INPS."""

    model_config = ConfigDict(frozen=True)

    tax: Decimal
    inps: Decimal
    total: Decimal
    label: str
    date: date


class DeadlineState(BaseModel):
    """A deadline paired with its payment state."""

    deadline: FiscalDeadline
    status: DeadlineStatus
    cumulative_due: Decimal


class ExpenseTagRow(BaseModel):
    """One row of the yearly expense report grouped by main tag."""

    tag: str
    amount: Decimal
    percentage: Decimal
    budget: Decimal = Decimal("0")
    budget_percentage: Decimal = Decimal("0")
    over_budget: bool = False

    @property
    def has_budget(self) -> bool:
        return self.budget > 0


class ExpenseGoalRow(BaseModel):
    """Spending on one tag against its budget, with last year for comparison."""

    tag: str
    current: Decimal
    previous: Decimal
    budget: Decimal = Decimal("0")
    percentage: Decimal = Decimal("0")  # of budget
    over_budget: bool = False

    @property
    def has_budget(self) -> bool:
        return self.budget > 0


class UpcomingPayment(BaseModel):
    """A fixed debt installment due in the current month."""

    debt_id: int
    name: str
    installment: Decimal
    due_date: date
    is_paid: bool


# ---------------------------------------------------------------------------
# Engine output
# ---------------------------------------------------------------------------


class Stats(BaseModel):
    """Derived fiscal snapshot for one view year."""

    model_config = ConfigDict(frozen=True)

    # Cash
    income: Decimal
    business_income: Decimal
    extra_income: Decimal
    real_expenses: Decimal
    taxes_paid: Decimal
    inps_paid: Decimal
    real_net_income: Decimal
    opening_balance: Decimal
    current_liquidity: Decimal
    scheduled_expenses: Decimal

    # Tax estimate
    gross_taxable_income: Decimal
    reddito_imponibile: Decimal
    flat_tax: Decimal
    inps: Decimal
    total_tax_estimate: Decimal
    tax_rate_applied: Decimal
    remaining_tax_due: Decimal
    percentuale_soglia: Decimal

    # Disposable income
    total_fixed_debt_estimate: Decimal
    estimated_net_income: Decimal
    net_available_income: Decimal
    monthly_net_income: Decimal

    # Deadlines
    deadlines: list[FiscalDeadline]

    # Forecasting
    months_elapsed: int
    weighted_coefficient: Decimal
    projected_annual_variable_expenses: Decimal
    break_even_target: Decimal
    break_even_turnover: Decimal
    break_even_reachable: bool
    break_even_branch: str
    tax_efficiency_per_1000: Decimal

    # Goal
    goal_percentage: Decimal
    gap_to_goal: Decimal

    # Pipeline
    forecasted_business_income: Decimal
    forecasted_tax_total: Decimal
    forecasted_net_income: Decimal
    forecasted_liquidity: Decimal

    def rounded(self) -> Stats:
        """Copy with every monetary figure rounded to cents."""
        updates: dict[str, object] = {}
        for name, value in self:
            if isinstance(value, Decimal) and name not in _RATIO_FIELDS:
                updates[name] = _to_euro(value)
        updates["deadlines"] = [
            d.model_copy(update={"tax": _to_euro(d.tax), "inps": _to_euro(d.inps), "total": _to_euro(d.total)})
            for d in self.deadlines
        ]
        return self.model_copy(update=updates)
