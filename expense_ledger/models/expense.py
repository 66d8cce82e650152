"""
Core Data Models for Expense Ledger

These models define the schemas for everything the ledger stores
and everything the dashboard derives from it. They are designed to:
1. Keep amounts exact (Decimal, rounded to the cent at creation)
2. Keep categories and payment methods a closed set
3. Serialize to the same JSON shape the local blob store holds

DESIGN DECISION: Records are frozen Pydantic v2 models.
An edit replaces the record wholesale; nothing mutates in place.
"""

from datetime import date as date_type, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
)


CENT = Decimal("0.01")


def round_to_cents(value) -> Decimal:
    """Round a monetary value half-up to the nearest cent."""
    if isinstance(value, float):
        value = str(value)
    try:
        amount = Decimal(value)
        if not amount.is_finite():
            raise ValueError(f"Not a valid amount: {value!r}")
        # Raises InvalidOperation past the context precision (28 digits)
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except (InvalidOperation, TypeError):
        raise ValueError(f"Not a valid amount: {value!r}")


def to_local(moment: datetime) -> datetime:
    """
    Normalize a timestamp to an aware datetime in the local zone.

    Naive datetimes are taken to already be local time.
    """
    return moment.astimezone()


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class ExpenseCategory(str, Enum):
    """
    Supported expense categories.

    The declaration order is significant: breakdowns are listed in
    this order and ties for the top category resolve to the earlier one.
    """
    HOUSING = "Housing"
    FOOD = "Food"
    TRANSPORTATION = "Transportation"
    UTILITIES = "Utilities"
    HEALTH = "Health"
    ENTERTAINMENT = "Entertainment"
    SHOPPING = "Shopping"
    TRAVEL = "Travel"
    MISCELLANEOUS = "Miscellaneous"


class PaymentMethod(str, Enum):
    """How an expense was paid."""
    CARD = "Card"
    CASH = "Cash"
    TRANSFER = "Transfer"
    OTHER = "Other"


class TimeRange(str, Enum):
    """Lookback windows offered by the dashboard."""
    LAST_7_DAYS = "7"
    LAST_30_DAYS = "30"
    LAST_90_DAYS = "90"
    LAST_365_DAYS = "365"
    ALL = "all"

    @property
    def days(self) -> Optional[int]:
        """Number of calendar days covered, None for all time."""
        if self is TimeRange.ALL:
            return None
        return int(self.value)

    @property
    def label(self) -> str:
        return _TIME_RANGE_LABELS[self]


_TIME_RANGE_LABELS = {
    TimeRange.LAST_7_DAYS: "Last 7 days",
    TimeRange.LAST_30_DAYS: "Last 30 days",
    TimeRange.LAST_90_DAYS: "Last 90 days",
    TimeRange.LAST_365_DAYS: "This year",
    TimeRange.ALL: "All time",
}


# =============================================================================
# CORE EXPENSE MODEL
# =============================================================================

class ExpenseRecord(BaseModel):
    """
    A single expense.

    CRITICAL: Construction is the validation boundary. Aggregation code
    assumes every record it sees has a positive, cent-rounded amount
    and a non-empty description.

    Field names serialize (by alias) to the persisted JSON shape:
    id, description, amount, category, date, paymentMethod, note.
    """
    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        populate_by_name=True,
    )

    id: str = Field(
        ...,
        min_length=1,
        description="Opaque unique identifier"
    )
    description: str = Field(
        ...,
        min_length=1,
        description="What the money was spent on"
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        decimal_places=2,
        description="Amount spent, rounded to the cent"
    )
    category: ExpenseCategory
    date: datetime = Field(
        ...,
        description="When the expense occurred (local, timezone-aware)"
    )
    payment_method: PaymentMethod = Field(
        default=PaymentMethod.CARD,
        alias="paymentMethod",
    )
    note: Optional[str] = Field(
        default=None,
        description="Optional free text"
    )

    @field_validator("amount", mode="before")
    @classmethod
    def round_amount(cls, v):
        """Round to the nearest cent before the positivity check."""
        return round_to_cents(v)

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v: datetime) -> datetime:
        return to_local(v)

    @field_validator("note")
    @classmethod
    def blank_note_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None

    @field_serializer("amount", when_used="json")
    def serialize_amount(self, amount: Decimal) -> float:
        # Persisted as a JSON number
        return float(amount)

    def to_storage_dict(self) -> dict:
        """Convert to the JSON-ready dict the blob store persists."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# =============================================================================
# SELECTION AND DERIVED VIEW MODELS
# =============================================================================

class FilterSelection(BaseModel):
    """
    What the user has selected on the dashboard.

    Recreated per query. `category=None` means all categories; the
    string "all" is accepted on input for convenience.
    """
    model_config = ConfigDict(frozen=True)

    time_range: TimeRange = TimeRange.LAST_30_DAYS
    category: Optional[ExpenseCategory] = None
    search_text: str = ""

    @field_validator("category", mode="before")
    @classmethod
    def all_means_none(cls, v):
        if isinstance(v, str) and v.lower() == "all":
            return None
        return v


class CategoryShare(BaseModel):
    """One row of the category breakdown."""
    model_config = ConfigDict(frozen=True)

    category: ExpenseCategory
    value: Decimal = Field(ge=0)
    percentage: int = Field(
        ge=0,
        description="Independently rounded share of the breakdown total"
    )


class MonthlyBucket(BaseModel):
    """Total spend in one calendar month."""
    model_config = ConfigDict(frozen=True)

    month: str = Field(
        ...,
        pattern=r"^\d{4}-\d{2}$",
        description="Bucket key, YYYY-MM"
    )
    value: Decimal
    label: str = Field(
        ...,
        description="Short month + 2-digit year, e.g. 'Oct 26'"
    )


class MonthlyTrend(BaseModel):
    """Trailing monthly series plus its peak for chart scaling."""
    model_config = ConfigDict(frozen=True)

    series: list[MonthlyBucket] = Field(default_factory=list)
    peak: Decimal = Decimal("0")


class SpendingSummary(BaseModel):
    """Totals derived from the filtered expense set."""
    model_config = ConfigDict(frozen=True)

    total: Decimal = Decimal("0")
    daily_average: Decimal = Decimal("0")
    breakdown: list[CategoryShare] = Field(default_factory=list)
    top_category: Optional[CategoryShare] = None


class DashboardView(BaseModel):
    """
    Everything the dashboard renders.

    Never persisted; purely a function of (records, selection, now).
    """
    model_config = ConfigDict(frozen=True)

    selection: FilterSelection
    generated_at: datetime
    expenses: list[ExpenseRecord] = Field(
        default_factory=list,
        description="Filtered expenses, newest first"
    )
    recent: list[ExpenseRecord] = Field(
        default_factory=list,
        description="The first few filtered expenses"
    )
    summary: SpendingSummary
    trend: MonthlyTrend


# =============================================================================
# ENTRY FORM AND VALIDATION MODELS
# =============================================================================

class ExpenseDraft(BaseModel):
    """
    Raw entry-form input, before validation.

    Nothing here is trusted: the amount is whatever the user typed.
    An ExpenseRecord is only built from a draft that passed validation.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    description: str = ""
    amount: str = Field(
        default="",
        description="Amount as typed"
    )
    date: Optional[date_type] = Field(
        default=None,
        description="Calendar day of the expense; today if not given"
    )
    category: ExpenseCategory = ExpenseCategory.FOOD
    payment_method: PaymentMethod = PaymentMethod.CARD
    note: str = ""

    @field_validator("amount", mode="before")
    @classmethod
    def amount_as_text(cls, v):
        if v is None:
            return ""
        if isinstance(v, (int, float, Decimal)) and not isinstance(v, bool):
            return str(v)
        return v


class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_value', 'future_date')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """Result of validating an ExpenseDraft."""

    is_valid: bool
    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def warnings(self) -> list[str]:
        return [issue.message for issue in self.issues if issue.severity == "warning"]

    @property
    def first_error(self) -> Optional[str]:
        """The message an entry form shows inline, if any."""
        for issue in self.issues:
            if issue.severity == "error":
                return issue.message
        return None
