"""Fiscal calculation engine — derives Stats for one view year.

Pure orchestrator. No I/O, no wall clock: `today` is always passed in.
Identical inputs give identical output, so callers may cache freely.
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

from forfettario.calculators.break_even import projected_annual_variable_expenses, solve_break_even
from forfettario.calculators.deadlines import build_deadlines
from forfettario.calculators.debts import total_fixed_debt_estimate
from forfettario.calculators.periods import is_transaction_active, months_elapsed_in_year
from forfettario.calculators.taxes import (
    InpsParameters,
    estimate_taxes,
    tax_efficiency_per_1000,
    tax_rate_for,
)
from forfettario.config import FiscalSettings, settings
from forfettario.decoders.ateco import resolve_coefficient
from forfettario.models.enums import (
    ContractStatus,
    TransactionCategory,
    TransactionStatus,
    TransactionType,
)
from forfettario.schemas.fiscal import AtecoCode, Contract, FiscalSnapshot, FixedDebt, Transaction, UserSettings
from forfettario.schemas.stats import Stats

logger = logging.getLogger(__name__)

_ZERO = Decimal("0")
_TAX_CATEGORIES = (TransactionCategory.TAX, TransactionCategory.INPS)


def _ratio(numerator: Decimal, denominator: Decimal, fallback: Decimal = _ZERO) -> Decimal:
    """numerator / denominator, or fallback when the denominator is not positive."""
    if denominator > 0:
        return numerator / denominator
    return fallback


def _eligible_contracts(contracts: list[Contract], view_year: int) -> list[Contract]:
    """Pipeline items not yet invoiced and expected by the end of view_year."""
    return [
        c for c in contracts
        if c.status != ContractStatus.COMPLETED and c.expected_date.year <= view_year
    ]


def calculate_fiscal_stats(
    transactions: list[Transaction],
    fixed_debts: list[FixedDebt],
    contracts: list[Contract],
    user_settings: UserSettings,
    view_year: int,
    ateco_codes: list[AtecoCode],
    *,
    today: date,
    fiscal: FiscalSettings | None = None,
) -> Stats:
    """Compute the fiscal snapshot for view_year.

    Args:
        transactions: All transactions of the user (any year).
        fixed_debts: Recurring monthly obligations.
        contracts: Pipeline items; completed ones are ignored.
        user_settings: Tax regime configuration.
        view_year: Calendar year to analyse.
        ateco_codes: The user's ATECO codes (coefficients).
        today: Reference date for scheduled transactions and run rates.
        fiscal: Statutory constants; defaults to the application settings.

    Returns:
        Stats with every derived figure, unrounded.
    """
    fiscal = fiscal or settings.fiscal
    logger.debug(
        "Calculating fiscal stats: year=%s transactions=%d debts=%d contracts=%d",
        view_year,
        len(transactions),
        len(fixed_debts),
        len(contracts),
    )
    if not ateco_codes:
        logger.debug("No ATECO codes configured, using coefficient %s", fiscal.default_coefficient)

    def coefficient(ateco_code_id: str | None) -> Decimal:
        return resolve_coefficient(ateco_code_id, ateco_codes, fiscal.default_coefficient)

    # 1. Fixed debts, forward estimate for the whole year
    fixed_debt_estimate = total_fixed_debt_estimate(fixed_debts, view_year)

    # 2. Transactions of the view year: realized vs still scheduled
    year_transactions = [t for t in transactions if t.date.year == view_year]
    active = [t for t in year_transactions if is_transaction_active(t, today)]
    scheduled_expenses = sum(
        (
            t.amount for t in year_transactions
            if t.status == TransactionStatus.SCHEDULED
            and t.type == TransactionType.EXPENSE
            and not is_transaction_active(t, today)
        ),
        start=_ZERO,
    )

    # 3. Income
    total_income = _ZERO
    business_income = _ZERO
    extra_income = _ZERO
    gross_taxable_income = _ZERO
    for t in active:
        if t.type != TransactionType.INCOME:
            continue
        total_income += t.amount
        if t.category == TransactionCategory.EXTRA:
            extra_income += t.amount
        else:
            business_income += t.amount
            gross_taxable_income += t.amount * coefficient(t.ateco_code_id)

    # 4. Cash outflows (tax and INPS payments included: this is a cash view)
    expenses = [t for t in active if t.type == TransactionType.EXPENSE]
    real_expenses = sum((t.amount for t in expenses), start=_ZERO)
    taxes_paid = sum((t.amount for t in expenses if t.category in _TAX_CATEGORIES), start=_ZERO)
    inps_paid = sum((t.amount for t in expenses if t.category == TransactionCategory.INPS), start=_ZERO)

    # 5-7. Reddito imponibile, flat tax, INPS
    tax_rate = tax_rate_for(user_settings.tax_rate_type)
    params = InpsParameters.resolve(user_settings, fiscal)
    estimate = estimate_taxes(gross_taxable_income, inps_paid, tax_rate, params)
    total_tax_estimate = estimate.total

    # 8. Cash position
    opening_balance = user_settings.opening_history.get(view_year, _ZERO)
    real_net_income = total_income - real_expenses
    current_liquidity = opening_balance + real_net_income

    # 9. Disposable income
    estimated_net_income = business_income - total_tax_estimate
    net_available_income = estimated_net_income - fixed_debt_estimate
    remaining_tax_due = total_tax_estimate - taxes_paid

    # 10. Break-even turnover
    months = months_elapsed_in_year(view_year, today)
    projected_variable = projected_annual_variable_expenses(real_expenses - taxes_paid, fixed_debt_estimate, months)
    weighted_coefficient = _ratio(gross_taxable_income, business_income, fiscal.default_coefficient)
    break_even = solve_break_even(fixed_debt_estimate + projected_variable, weighted_coefficient, tax_rate, params)

    # 11. Value of the next €1000
    efficiency = tax_efficiency_per_1000(business_income, weighted_coefficient, months, tax_rate, params)

    # 12. Deadlines
    deadlines = build_deadlines(estimate, params, user_settings.manual_saldo, view_year)

    # 13. Pipeline overlay
    pipeline = _eligible_contracts(contracts, view_year)
    forecasted_business_income = business_income + sum((c.amount for c in pipeline), start=_ZERO)
    forecasted_gross_taxable = gross_taxable_income + sum(
        (c.amount * coefficient(c.ateco_code_id) for c in pipeline),
        start=_ZERO,
    )
    forecast = estimate_taxes(forecasted_gross_taxable, inps_paid, tax_rate, params)
    forecasted_tax_total = forecast.total
    forecasted_net_income = forecasted_business_income - forecasted_tax_total - fixed_debt_estimate
    forecasted_liquidity = (
        current_liquidity
        + (forecasted_business_income - business_income)
        - (forecasted_tax_total - total_tax_estimate)
    )

    # 14. Goals
    annual_goal = user_settings.annual_goal
    goal_percentage = _ratio(business_income, annual_goal) * 100
    gap_to_goal = max(_ZERO, annual_goal - business_income)
    percentuale_soglia = _ratio(business_income, fiscal.forfettario_limit) * 100

    return Stats(
        income=total_income,
        business_income=business_income,
        extra_income=extra_income,
        real_expenses=real_expenses,
        taxes_paid=taxes_paid,
        inps_paid=inps_paid,
        real_net_income=real_net_income,
        opening_balance=opening_balance,
        current_liquidity=current_liquidity,
        scheduled_expenses=scheduled_expenses,
        gross_taxable_income=gross_taxable_income,
        reddito_imponibile=estimate.reddito_imponibile,
        flat_tax=estimate.flat_tax,
        inps=estimate.inps,
        total_tax_estimate=total_tax_estimate,
        tax_rate_applied=tax_rate,
        remaining_tax_due=remaining_tax_due,
        percentuale_soglia=percentuale_soglia,
        total_fixed_debt_estimate=fixed_debt_estimate,
        estimated_net_income=estimated_net_income,
        net_available_income=net_available_income,
        monthly_net_income=net_available_income / 12,
        deadlines=deadlines,
        months_elapsed=months,
        weighted_coefficient=weighted_coefficient,
        projected_annual_variable_expenses=projected_variable,
        break_even_target=break_even.target_net_income,
        break_even_turnover=break_even.turnover,
        break_even_reachable=break_even.reachable,
        break_even_branch=break_even.branch,
        tax_efficiency_per_1000=efficiency,
        goal_percentage=goal_percentage,
        gap_to_goal=gap_to_goal,
        forecasted_business_income=forecasted_business_income,
        forecasted_tax_total=forecasted_tax_total,
        forecasted_net_income=forecasted_net_income,
        forecasted_liquidity=forecasted_liquidity,
    )


def calculate_from_snapshot(
    snapshot: FiscalSnapshot,
    today: date,
    fiscal: FiscalSettings | None = None,
) -> Stats:
    """calculate_fiscal_stats over a FiscalSnapshot; snapshot.today wins over today."""
    return calculate_fiscal_stats(
        snapshot.transactions,
        snapshot.fixed_debts,
        snapshot.contracts,
        snapshot.settings,
        snapshot.view_year,
        snapshot.ateco_codes,
        today=snapshot.today or today,
        fiscal=fiscal,
    )
