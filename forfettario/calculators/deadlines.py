"""F24 payment calendar for the regime forfettario (metodo previsionale).

Gestione Separata (two deadlines):
  30 June      saldo of the previous year + 1st acconto (40% of tax and INPS)
  30 November  2nd acconto (60% of tax and INPS)

Artigiani/Commercianti (three deadlines):
  16 June      saldo + 1st acconto (40% of tax and of INPS above the
               minimale) + one third of the fixed contribution
  20 August    fixed contribution installment only
  30 November  2nd acconto (60% of tax and of INPS above the minimale)
               + the remaining fixed contribution

The manual saldo (previous year's balance) is split evenly between tax and
INPS on the June deadline.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from forfettario.calculators.taxes import InpsParameters
from forfettario.models.enums import DeadlineStatus, InpsType
from forfettario.schemas.stats import DeadlineState, FiscalDeadline, TaxEstimate

_FIRST_ACCONTO = Decimal("0.4")
_SECOND_ACCONTO = Decimal("0.6")
_HALF = Decimal("0.5")

LABEL_JUNE = "Saldo + 1° Acconto"
LABEL_AUGUST = "Rata Contributi Fissi"
LABEL_NOVEMBER = "2° Acconto"


def _deadline(tax: Decimal, inps: Decimal, label: str, due: date) -> FiscalDeadline:
    return FiscalDeadline(tax=tax, inps=inps, total=tax + inps, label=label, date=due)


def _separata_deadlines(estimate: TaxEstimate, saldo: Decimal, year: int) -> list[FiscalDeadline]:
    return [
        _deadline(
            estimate.flat_tax * _FIRST_ACCONTO + saldo * _HALF,
            estimate.inps * _FIRST_ACCONTO + saldo * _HALF,
            LABEL_JUNE,
            date(year, 6, 30),
        ),
        _deadline(
            estimate.flat_tax * _SECOND_ACCONTO,
            estimate.inps * _SECOND_ACCONTO,
            LABEL_NOVEMBER,
            date(year, 11, 30),
        ),
    ]


def _artigiani_deadlines(
    estimate: TaxEstimate,
    params: InpsParameters,
    saldo: Decimal,
    year: int,
) -> list[FiscalDeadline]:
    fixed = min(estimate.inps, params.fixed_cost)
    exceed = estimate.inps - fixed
    fixed_share = fixed / 3
    # November takes the remainder so the three shares add up exactly
    fixed_last = fixed - fixed_share * 2

    return [
        _deadline(
            estimate.flat_tax * _FIRST_ACCONTO + saldo * _HALF,
            exceed * _FIRST_ACCONTO + fixed_share + saldo * _HALF,
            LABEL_JUNE,
            date(year, 6, 16),
        ),
        _deadline(Decimal("0"), fixed_share, LABEL_AUGUST, date(year, 8, 20)),
        _deadline(
            estimate.flat_tax * _SECOND_ACCONTO,
            exceed * _SECOND_ACCONTO + fixed_last,
            LABEL_NOVEMBER,
            date(year, 11, 30),
        ),
    ]


def build_deadlines(
    estimate: TaxEstimate,
    params: InpsParameters,
    manual_saldo: Decimal | None,
    view_year: int,
) -> list[FiscalDeadline]:
    """Ordered payment deadlines for the view year."""
    saldo = manual_saldo or Decimal("0")
    if params.inps_type == InpsType.SEPARATA:
        return _separata_deadlines(estimate, saldo, view_year)
    return _artigiani_deadlines(estimate, params, saldo, view_year)


def deadline_statuses(
    deadlines: list[FiscalDeadline],
    taxes_paid: Decimal,
    today: date,
    tolerance: Decimal = Decimal("5"),
) -> list[DeadlineState]:
    """Mark each deadline paid, overdue or pending.

    A deadline is paid when taxes_paid covers it together with every
    earlier deadline, within tolerance euros of rounding slack.
    """
    states: list[DeadlineState] = []
    cumulative = Decimal("0")
    for deadline in deadlines:
        cumulative += deadline.total
        if taxes_paid >= cumulative - tolerance:
            status = DeadlineStatus.PAID
        elif deadline.date < today:
            status = DeadlineStatus.OVERDUE
        else:
            status = DeadlineStatus.PENDING
        states.append(DeadlineState(deadline=deadline, status=status, cumulative_due=cumulative))
    return states
