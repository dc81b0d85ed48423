"""Domain enums shared by input schemas, output schemas and calculators."""

from forfettario.models.enums import (
    ContractCategory,
    ContractStatus,
    DeadlineStatus,
    DebtType,
    InpsType,
    PaymentMode,
    TaxRateType,
    TransactionCategory,
    TransactionStatus,
    TransactionType,
)

__all__ = [
    "ContractCategory",
    "ContractStatus",
    "DeadlineStatus",
    "DebtType",
    "InpsType",
    "PaymentMode",
    "TaxRateType",
    "TransactionCategory",
    "TransactionStatus",
    "TransactionType",
]
