"""Entry validation package."""

from expense_ledger.validation.validator import (
    AMOUNT_NOT_POSITIVE,
    DESCRIPTION_REQUIRED,
    ExpenseValidationError,
    ExpenseValidator,
    parse_amount,
)

__all__ = [
    "AMOUNT_NOT_POSITIVE",
    "DESCRIPTION_REQUIRED",
    "ExpenseValidationError",
    "ExpenseValidator",
    "parse_amount",
]
