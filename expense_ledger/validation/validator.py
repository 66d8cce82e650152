"""
Entry Validation

DESIGN DECISION: Validation happens at the boundary, once.
The entry form hands over an ExpenseDraft; the validator either turns it
into an ExpenseRecord or reports why it cannot. Aggregation code never
sees an invalid expense.

Checks:
- Description present (error)
- Amount numeric and positive after rounding to the cent (error)
- Date not after today (warning only; the form normally prevents it)

IMPORTANT: Validation NEVER silently fixes issues.
It reports them for the user to correct.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Optional

from expense_ledger.aggregation.window import local_midnight
from expense_ledger.models.expense import (
    ExpenseDraft,
    ExpenseRecord,
    ValidationIssue,
    ValidationResult,
    round_to_cents,
    to_local,
)


DESCRIPTION_REQUIRED = "Please add a short description."
AMOUNT_NOT_POSITIVE = "Amount must be greater than 0."


class ExpenseValidationError(ValueError):
    """A draft could not be turned into an expense."""

    def __init__(self, result: ValidationResult):
        self.result = result
        super().__init__(result.first_error or "Invalid expense")

    @property
    def issues(self) -> list[ValidationIssue]:
        return self.result.issues


def parse_amount(text: str) -> Optional[Decimal]:
    """Parse a typed amount, rounded to the cent. None if not a number."""
    if not text:
        return None
    try:
        return round_to_cents(text)
    except ValueError:
        return None


class ExpenseValidator:
    """Validates entry-form drafts and builds expenses from them."""

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        """
        Args:
            clock: Supplies "now" for the future-date check.
                   Defaults to the local wall clock.
        """
        self._clock = clock or (lambda: datetime.now().astimezone())

    def _today(self) -> date:
        return to_local(self._clock()).date()

    def validate(self, draft: ExpenseDraft) -> ValidationResult:
        issues = []

        if not draft.description:
            issues.append(ValidationIssue(
                field="description",
                issue_type="missing",
                message=DESCRIPTION_REQUIRED,
                severity="error",
            ))

        amount = parse_amount(draft.amount)
        if amount is None or amount <= 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="missing" if not draft.amount else "invalid_value",
                message=AMOUNT_NOT_POSITIVE,
                severity="error",
            ))

        if draft.date is not None and draft.date > self._today():
            issues.append(ValidationIssue(
                field="date",
                issue_type="future_date",
                message=f"Date ({draft.date}) is in the future",
                severity="warning",
            ))

        return ValidationResult(
            is_valid=not any(issue.severity == "error" for issue in issues),
            issues=issues,
        )

    def build_expense(self, draft: ExpenseDraft, expense_id: str) -> ExpenseRecord:
        """
        Validate a draft and build the expense it describes.

        The expense is dated at local midnight of the chosen day.

        Raises:
            ExpenseValidationError: If the draft has error-level issues
        """
        result = self.validate(draft)
        if not result.is_valid:
            raise ExpenseValidationError(result)

        day = draft.date or self._today()
        return ExpenseRecord(
            id=expense_id,
            description=draft.description,
            amount=parse_amount(draft.amount),
            category=draft.category,
            date=local_midnight(day),
            payment_method=draft.payment_method,
            note=draft.note or None,
        )
