"""Break-even turnover: the gross revenue that leaves enough after tax.

Solves for revenue R such that

    R − flat_tax(R) − inps(R) = target_net_income

where taxable income is R × c (c = weighted ATECO coefficient) and INPS is
deducted from the flat-tax base. Each regime is a linear piece:

  separata        margin = 1 − c·r − c·(1 − r)·t          R = N / margin
  artigiani low   margin = 1 − c·t                        R = (N + F·(1 − t)) / margin
  artigiani high  margin = 1 − c·e − c·(1 − e)·t          R = (N + F) / margin

(r = separata rate, t = flat-tax rate, F = artigiani fixed cost,
e = artigiani exceed rate). The artigiani low piece is only valid while
R × c stays within the minimale; otherwise the high piece applies.
A non-positive margin has no finite solution and is reported as
"unreachable" with turnover 0.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from decimal import Decimal

from forfettario.calculators.taxes import InpsParameters
from forfettario.models.enums import InpsType
from forfettario.schemas.stats import BreakEvenResult

logger = logging.getLogger(__name__)

SEPARATA = "separata"
ARTIGIANI_LOW = "artigiani_low"
ARTIGIANI_HIGH = "artigiani_high"
UNREACHABLE = "unreachable"

_ONE = Decimal("1")

# (target_net_income, coefficient, tax_rate, params) -> turnover or None
Solver = Callable[[Decimal, Decimal, Decimal, InpsParameters], Decimal | None]


# ---------------------------------------------------------------------------
# Branch solvers — each returns None when it has no valid solution
# ---------------------------------------------------------------------------


def solve_separata(target: Decimal, coeff: Decimal, tax_rate: Decimal, params: InpsParameters) -> Decimal | None:
    rate = params.separata_rate
    margin = _ONE - coeff * rate - coeff * (_ONE - rate) * tax_rate
    if margin <= 0:
        return None
    return target / margin


def solve_artigiani_low(target: Decimal, coeff: Decimal, tax_rate: Decimal, params: InpsParameters) -> Decimal | None:
    """Below-minimale piece; rejects a solution whose taxable base exceeds it."""
    margin = _ONE - coeff * tax_rate
    if margin <= 0:
        return None
    turnover = (target + params.fixed_cost * (_ONE - tax_rate)) / margin
    if turnover * coeff > params.fixed_income:
        return None
    return turnover


def solve_artigiani_high(target: Decimal, coeff: Decimal, tax_rate: Decimal, params: InpsParameters) -> Decimal | None:
    rate = params.exceed_rate
    margin = _ONE - coeff * rate - coeff * (_ONE - rate) * tax_rate
    if margin <= 0:
        return None
    return (target + params.fixed_cost) / margin


# Pieces are tried in order; the first self-consistent solution wins.
BRANCHES: dict[InpsType, tuple[tuple[str, Solver], ...]] = {
    InpsType.SEPARATA: ((SEPARATA, solve_separata),),
    InpsType.ARTIGIANI: (
        (ARTIGIANI_LOW, solve_artigiani_low),
        (ARTIGIANI_HIGH, solve_artigiani_high),
    ),
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def projected_annual_variable_expenses(
    non_tax_expenses: Decimal,
    fixed_debt_estimate: Decimal,
    months_elapsed: int,
) -> Decimal:
    """Annualized lifestyle spending, net of the fixed-debt share already paid.

    When the fixed-debt share exceeds what was actually spent (debts never
    recorded as transactions), all non-tax spending counts as variable.
    """
    months = max(1, months_elapsed)
    fixed_paid = fixed_debt_estimate / 12 * months
    variable = non_tax_expenses - fixed_paid
    if variable < 0:
        variable = non_tax_expenses
    return variable / months * 12


def solve_break_even(
    target_net_income: Decimal,
    coefficient: Decimal,
    tax_rate: Decimal,
    params: InpsParameters,
) -> BreakEvenResult:
    """Gross turnover needed to net target_net_income after flat tax and INPS.

    Args:
        target_net_income: Yearly fixed debts plus projected variable spending.
        coefficient: Revenue-weighted ATECO coefficient.
        tax_rate: Imposta sostitutiva rate.
        params: Resolved INPS constants (selects the branches to try).

    Returns:
        BreakEvenResult naming the branch that produced the turnover.
    """
    for branch, solver in BRANCHES[params.inps_type]:
        turnover = solver(target_net_income, coefficient, tax_rate, params)
        if turnover is not None:
            return BreakEvenResult(
                turnover=turnover,
                branch=branch,
                target_net_income=target_net_income,
                weighted_coefficient=coefficient,
            )

    logger.debug(
        "Break-even unreachable (regime=%s, coefficient=%s, tax_rate=%s)",
        params.inps_type.value,
        coefficient,
        tax_rate,
    )
    return BreakEvenResult(
        turnover=Decimal("0"),
        branch=UNREACHABLE,
        target_net_income=target_net_income,
        weighted_coefficient=coefficient,
    )
