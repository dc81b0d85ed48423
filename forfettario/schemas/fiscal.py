"""Pydantic schemas for the engine inputs.

Pure data classes — no business logic. The persistence layer maps its rows
into these shapes; validation failures surface here, at the boundary, and
never inside the calculators.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from forfettario.models.enums import (
    ContractCategory,
    ContractStatus,
    DebtType,
    InpsType,
    PaymentMode,
    TaxRateType,
    TransactionCategory,
    TransactionStatus,
    TransactionType,
)


class AtecoCode(BaseModel):
    """An ATECO activity code with its coefficiente di redditività."""

    model_config = ConfigDict(frozen=True)

    id: str
    code: str
    description: str = ""
    coefficient: Decimal = Field(gt=0, le=1)


class Transaction(BaseModel):
    """A single cash movement."""

    model_config = ConfigDict(frozen=True)

    id: int
    date: date
    type: TransactionType
    category: TransactionCategory
    amount: Decimal = Field(ge=0)
    description: str = ""
    client: str | None = None
    tags: str | None = None  # comma-joined
    ateco_code_id: str | None = None  # income only
    status: TransactionStatus | None = None  # None means active

    @property
    def tag_list(self) -> list[str]:
        """Tags split on commas, stripped, empties removed."""
        return [t.strip() for t in (self.tags or "").split(",") if t.strip()]


class FixedDebt(BaseModel):
    """A recurring monthly obligation (loan installment or subscription)."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    total_due: Decimal = Field(default=Decimal("0"), ge=0)  # 0 for open-ended subscriptions
    installment: Decimal = Field(ge=0)
    debit_day: int = Field(default=1, ge=1, le=28)
    is_suspended: bool = False
    type: DebtType = DebtType.DEBT
    start_month: int = Field(default=1, ge=1, le=12)
    start_year: int
    payment_mode: PaymentMode = PaymentMode.MANUAL


class Contract(BaseModel):
    """A pipeline item: signed or pending work not yet invoiced."""

    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    client_name: str = ""
    amount: Decimal = Field(ge=0)
    category: ContractCategory = ContractCategory.BUSINESS
    ateco_code_id: str | None = None
    status: ContractStatus = ContractStatus.PENDING
    expected_date: date
    notes: str | None = None


class UserSettings(BaseModel):
    """Tax-regime configuration of one user.

    A bare UserSettings() carries the defaults given to a new account.
    Artigiani constants set to None or 0 fall back to the configured
    statutory defaults inside the engine.
    """

    model_config = ConfigDict(frozen=True)

    opening_history: dict[int, Decimal] = Field(default_factory=dict)  # year → balance at 1 January
    tax_rate_type: TaxRateType = TaxRateType.FIVE
    inps_type: InpsType = InpsType.SEPARATA
    artigiani_fixed_income: Decimal | None = Decimal("18415")
    artigiani_fixed_cost: Decimal | None = Decimal("4515")
    artigiani_exceed_rate: Decimal | None = Decimal("0.24")
    annual_goal: Decimal = Decimal("0")
    expense_goals: dict[str, Decimal] = Field(default_factory=dict)  # tag → yearly budget
    saved_tags: list[str] = Field(default_factory=list)
    manual_saldo: Decimal | None = None  # previous year balance still due
    locked_years: list[int] = Field(default_factory=list)  # enforced by the data store


class FiscalSnapshot(BaseModel):
    """Everything the engine needs for one view year, loaded at the same instant."""

    transactions: list[Transaction] = Field(default_factory=list)
    fixed_debts: list[FixedDebt] = Field(default_factory=list)
    contracts: list[Contract] = Field(default_factory=list)
    settings: UserSettings = Field(default_factory=UserSettings)
    view_year: int
    ateco_codes: list[AtecoCode] = Field(default_factory=list)
    today: date | None = None  # defaults to the server date at the HTTP boundary
