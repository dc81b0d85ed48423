"""Imposta sostitutiva and INPS contributions for the regime forfettario.

Pure Python, Decimal arithmetic. Implements:
- Flat tax: reddito imponibile × 5% (start-up) or 15%
- INPS Gestione Separata: flat percentage of reddito imponibile
- INPS Artigiani/Commercianti: fixed minimum + rate on the excess over
  the minimale
- Marginal efficiency: how much of the next €1000 invoiced stays in hand
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from forfettario.config import FiscalSettings
from forfettario.models.enums import InpsType, TaxRateType
from forfettario.schemas.fiscal import UserSettings
from forfettario.schemas.stats import TaxEstimate

logger = logging.getLogger(__name__)

_ZERO = Decimal("0")
_RATES: dict[TaxRateType, Decimal] = {
    TaxRateType.FIVE: Decimal("0.05"),
    TaxRateType.FIFTEEN: Decimal("0.15"),
}


@dataclass(frozen=True)
class InpsParameters:
    """Contribution constants resolved for one engine run."""

    inps_type: InpsType
    separata_rate: Decimal
    fixed_income: Decimal  # artigiani minimale
    fixed_cost: Decimal
    exceed_rate: Decimal

    @classmethod
    def resolve(cls, user: UserSettings, fiscal: FiscalSettings) -> InpsParameters:
        """Merge user values over the statutory defaults.

        A missing or zero user value means "not configured".
        """
        def pick(name: str, value: Decimal | None, default: Decimal) -> Decimal:
            if value:
                return value
            if user.inps_type == InpsType.ARTIGIANI:
                logger.debug("Using default %s=%s", name, default)
            return default

        return cls(
            inps_type=user.inps_type,
            separata_rate=fiscal.separata_rate,
            fixed_income=pick("artigiani_fixed_income", user.artigiani_fixed_income, fiscal.artigiani_fixed_income),
            fixed_cost=pick("artigiani_fixed_cost", user.artigiani_fixed_cost, fiscal.artigiani_fixed_cost),
            exceed_rate=pick("artigiani_exceed_rate", user.artigiani_exceed_rate, fiscal.artigiani_exceed_rate),
        )


def tax_rate_for(tax_rate_type: TaxRateType) -> Decimal:
    """Imposta sostitutiva rate: 0.05 for the 5% regime, 0.15 otherwise."""
    return _RATES.get(tax_rate_type, Decimal("0.15"))


def calculate_inps(reddito_imponibile: Decimal, params: InpsParameters) -> Decimal:
    """INPS due on a yearly reddito imponibile.

    Artigiani pay the fixed cost even at zero income; the excess rate only
    applies strictly above the minimale.
    """
    if params.inps_type == InpsType.SEPARATA:
        return reddito_imponibile * params.separata_rate

    inps = params.fixed_cost
    if reddito_imponibile > params.fixed_income:
        inps += (reddito_imponibile - params.fixed_income) * params.exceed_rate
    return inps


def estimate_taxes(
    gross_taxable_income: Decimal,
    inps_paid: Decimal,
    tax_rate: Decimal,
    params: InpsParameters,
) -> TaxEstimate:
    """Flat tax and INPS on gross taxable income net of deductible INPS paid.

    Args:
        gross_taxable_income: Revenue already multiplied by ATECO coefficients.
        inps_paid: INPS contributions paid in the year (deductible).
        tax_rate: Imposta sostitutiva rate.
        params: Resolved INPS constants.

    Returns:
        TaxEstimate; reddito_imponibile is floored at zero.
    """
    reddito_imponibile = max(_ZERO, gross_taxable_income - inps_paid)
    return TaxEstimate(
        reddito_imponibile=reddito_imponibile,
        tax_rate=tax_rate,
        flat_tax=reddito_imponibile * tax_rate,
        inps=calculate_inps(reddito_imponibile, params),
    )


def tax_efficiency_per_1000(
    business_income: Decimal,
    coefficient: Decimal,
    months_elapsed: int,
    tax_rate: Decimal,
    params: InpsParameters,
) -> Decimal:
    """Net euros left from an extra €1000 invoice.

    For artigiani the extra income only attracts INPS if the yearly run
    rate already puts taxable income above the minimale; below it the
    fixed cost is sunk and the margin is INPS-free.
    """
    marginal_taxable = Decimal("1000") * coefficient

    if params.inps_type == InpsType.SEPARATA:
        marginal_inps = marginal_taxable * params.separata_rate
    else:
        projected_income = business_income / max(1, months_elapsed) * 12
        if projected_income * coefficient > params.fixed_income:
            marginal_inps = marginal_taxable * params.exceed_rate
        else:
            marginal_inps = _ZERO

    marginal_tax = (marginal_taxable - marginal_inps) * tax_rate
    return Decimal("1000") - marginal_inps - marginal_tax
