"""Domain enums for the fiscal engine.

All enums use str mixin so they serialize to the same strings the data
store and the web client already use.
"""

from __future__ import annotations

from enum import Enum


class TransactionType(str, Enum):
    """Direction of a cash movement."""

    INCOME = "income"
    EXPENSE = "expense"


class TransactionCategory(str, Enum):
    """What a cash movement is for."""

    BUSINESS = "business"
    PERSONAL = "personal"
    TAX = "tax"      # imposta sostitutiva payments
    INPS = "inps"    # social security payments, deductible
    EXTRA = "extra"  # non-taxable income


class TransactionStatus(str, Enum):
    """Whether a transaction already happened or is planned."""

    ACTIVE = "active"
    SCHEDULED = "scheduled"


class DebtType(str, Enum):
    """Kind of recurring monthly obligation."""

    DEBT = "debt"
    SUBSCRIPTION = "subscription"


class PaymentMode(str, Enum):
    """How installments of a fixed debt are registered."""

    MANUAL = "manual"
    AUTO = "auto"


class ContractCategory(str, Enum):
    """Whether pipeline revenue is taxable business income."""

    BUSINESS = "business"
    EXTRA = "extra"


class ContractStatus(str, Enum):
    """Pipeline stage of a contract."""

    PENDING = "pending"
    SIGNED = "signed"
    COMPLETED = "completed"  # already invoiced, reflected in transactions


class TaxRateType(str, Enum):
    """Imposta sostitutiva rate: 5% start-up rate or the ordinary 15%."""

    FIVE = "5%"
    FIFTEEN = "15%"


class InpsType(str, Enum):
    """INPS contribution regime."""

    SEPARATA = "separata"
    ARTIGIANI = "artigiani"


class DeadlineStatus(str, Enum):
    """Payment state of a fiscal deadline."""

    PAID = "paid"
    OVERDUE = "overdue"
    PENDING = "pending"
