"""
Tests for Expense Ledger models

Test strategy:
1. Unit tests for individual components (models, aggregation, validation)
2. Flow tests for the orchestrator with in-memory storage
3. No real filesystem outside pytest's tmp_path
"""

import pytest
from datetime import datetime
from decimal import Decimal

from pydantic import ValidationError

from expense_ledger.models.expense import (
    ExpenseCategory,
    ExpenseDraft,
    ExpenseRecord,
    FilterSelection,
    PaymentMethod,
    TimeRange,
    ValidationIssue,
    ValidationResult,
)
from expense_ledger.models.activity import (
    ActivityEvent,
    ActivityEventBuilder,
    ActivityEventType,
    ActivitySeverity,
)


class TestExpenseRecord:
    """Tests for the ExpenseRecord model."""

    def test_expense_creation(self):
        """Test ExpenseRecord model creation."""
        expense = ExpenseRecord(
            id="e1",
            description="Coffee",
            amount=Decimal("4.50"),
            category=ExpenseCategory.FOOD,
            date=datetime(2026, 10, 1, 9, 0),
            payment_method=PaymentMethod.CASH,
        )
        assert expense.description == "Coffee"
        assert expense.amount == Decimal("4.50")
        assert expense.note is None

    def test_amount_rounded_half_up_to_cents(self):
        """Test that amounts are rounded to the nearest cent at creation."""
        expense = ExpenseRecord(
            id="e1",
            description="Rounding",
            amount="12.345",
            category=ExpenseCategory.FOOD,
            date=datetime(2026, 10, 1),
        )
        assert expense.amount == Decimal("12.35")

    def test_float_amount_keeps_its_decimal_value(self):
        """Test that a float amount is read by its shortest repr."""
        expense = ExpenseRecord(
            id="e1",
            description="Float",
            amount=86.42,
            category=ExpenseCategory.FOOD,
            date=datetime(2026, 10, 1),
        )
        assert expense.amount == Decimal("86.42")

    @pytest.mark.parametrize("amount", ["0", "-5", "0.004"])
    def test_rejects_non_positive_amount(self, amount):
        """Test that zero, negative and round-to-zero amounts are rejected."""
        with pytest.raises(ValidationError):
            ExpenseRecord(
                id="e1",
                description="Test",
                amount=amount,
                category=ExpenseCategory.FOOD,
                date=datetime(2026, 10, 1),
            )

    @pytest.mark.parametrize("amount", ["1e26", 1e30, "NaN"])
    def test_rejects_amount_that_cannot_be_rounded(self, amount):
        """Test that non-finite or oversized amounts fail validation cleanly."""
        with pytest.raises(ValidationError):
            ExpenseRecord(
                id="e1",
                description="Test",
                amount=amount,
                category=ExpenseCategory.FOOD,
                date=datetime(2026, 10, 1),
            )

    def test_rejects_blank_description(self):
        """Test that a whitespace-only description is rejected."""
        with pytest.raises(ValidationError):
            ExpenseRecord(
                id="e1",
                description="   ",
                amount="1",
                category=ExpenseCategory.FOOD,
                date=datetime(2026, 10, 1),
            )

    def test_rejects_unknown_category(self):
        """Test that categories are a closed set."""
        with pytest.raises(ValidationError):
            ExpenseRecord(
                id="e1",
                description="Test",
                amount="1",
                category="Gambling",
                date=datetime(2026, 10, 1),
            )

    def test_naive_date_becomes_aware_local(self):
        """Test that naive timestamps are read as local time."""
        naive = datetime(2026, 10, 1, 9, 0)
        expense = ExpenseRecord(
            id="e1",
            description="Test",
            amount="1",
            category=ExpenseCategory.FOOD,
            date=naive,
        )
        assert expense.date.tzinfo is not None
        assert expense.date == naive.astimezone()

    def test_expense_is_frozen(self, make_expense):
        """Test that expenses cannot be mutated."""
        expense = make_expense()
        with pytest.raises(ValidationError):
            expense.amount = Decimal("99")

    def test_payment_method_alias(self):
        """Test that the persisted field name populates payment_method."""
        expense = ExpenseRecord.model_validate({
            "id": "e1",
            "description": "Bus",
            "amount": 2.5,
            "category": "Transportation",
            "date": "2026-10-01T08:00:00+00:00",
            "paymentMethod": "Cash",
        })
        assert expense.payment_method == PaymentMethod.CASH

    def test_to_storage_dict(self, make_expense):
        """Test conversion to the persisted JSON shape."""
        expense = make_expense(amount="86.42", note="weekly shop")
        data = expense.to_storage_dict()
        assert set(data) == {
            "id", "description", "amount", "category", "date", "paymentMethod", "note",
        }
        assert data["amount"] == 86.42
        assert data["category"] == "Food"
        assert data["paymentMethod"] == "Card"

    def test_to_storage_dict_omits_missing_note(self, make_expense):
        """Test that an absent note is left out of storage."""
        assert "note" not in make_expense(note="  ").to_storage_dict()

    def test_expenses_are_hashable(self, make_expense):
        """Test that equal expenses collapse in a set."""
        expense = make_expense(expense_id="same")
        clone = ExpenseRecord.model_validate(expense.to_storage_dict())
        assert {expense, clone} == {expense}


class TestFilterSelection:
    """Tests for FilterSelection."""

    def test_defaults(self):
        """Test the default selection."""
        selection = FilterSelection()
        assert selection.time_range == TimeRange.LAST_30_DAYS
        assert selection.category is None
        assert selection.search_text == ""

    def test_all_category_means_none(self):
        """Test that 'all' selects every category."""
        selection = FilterSelection(time_range="7", category="all")
        assert selection.category is None
        assert selection.time_range == TimeRange.LAST_7_DAYS

    def test_category_from_string(self):
        """Test that a category name parses to the enum."""
        assert FilterSelection(category="Travel").category == ExpenseCategory.TRAVEL

    def test_rejects_unknown_time_range(self):
        """Test that only the offered ranges are accepted."""
        with pytest.raises(ValidationError):
            FilterSelection(time_range="14")


class TestEnums:
    """Tests for the closed enumerations."""

    def test_category_order(self):
        """Test that categories keep their declaration order."""
        assert [c.value for c in ExpenseCategory] == [
            "Housing", "Food", "Transportation", "Utilities", "Health",
            "Entertainment", "Shopping", "Travel", "Miscellaneous",
        ]

    def test_payment_methods(self):
        """Test payment method values."""
        assert [m.value for m in PaymentMethod] == ["Card", "Cash", "Transfer", "Other"]

    def test_time_range_days(self):
        """Test day counts of time ranges."""
        assert TimeRange.LAST_7_DAYS.days == 7
        assert TimeRange.LAST_365_DAYS.days == 365
        assert TimeRange.ALL.days is None

    def test_time_range_labels(self):
        """Test display labels of time ranges."""
        assert TimeRange.LAST_30_DAYS.label == "Last 30 days"
        assert TimeRange.LAST_365_DAYS.label == "This year"
        assert TimeRange.ALL.label == "All time"


class TestExpenseDraft:
    """Tests for the raw entry-form model."""

    def test_numeric_amount_becomes_text(self):
        """Test that a numeric amount is kept as typed text."""
        assert ExpenseDraft(amount=12.5).amount == "12.5"

    def test_defaults(self):
        """Test entry form defaults."""
        draft = ExpenseDraft()
        assert draft.category == ExpenseCategory.FOOD
        assert draft.payment_method == PaymentMethod.CARD
        assert draft.date is None


class TestValidationResult:
    """Tests for ValidationResult model."""

    def test_validation_result_has_errors(self):
        """Test has_errors property."""
        result = ValidationResult(
            is_valid=False,
            issues=[
                ValidationIssue(
                    field="amount",
                    issue_type="invalid_value",
                    message="Amount must be greater than 0.",
                    severity="error",
                ),
            ],
        )
        assert result.has_errors is True
        assert result.error_count == 1
        assert result.first_error == "Amount must be greater than 0."

    def test_validation_result_warnings_only(self):
        """Test that warnings don't count as errors."""
        result = ValidationResult(
            is_valid=True,
            issues=[
                ValidationIssue(
                    field="date",
                    issue_type="future_date",
                    message="Date in future",
                    severity="warning",
                ),
            ],
        )
        assert result.has_errors is False
        assert result.error_count == 0
        assert result.first_error is None
        assert result.warnings == ["Date in future"]


class TestActivityModels:
    """Tests for activity event models."""

    def test_activity_event_creation(self):
        """Test ActivityEvent model creation."""
        event = ActivityEvent(
            event_type=ActivityEventType.LEDGER_LOADED,
            description="Loaded",
        )
        assert event.severity == ActivitySeverity.INFO
        assert event.timestamp.tzinfo is not None

    def test_activity_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = ActivityEventBuilder.expense_added("e1", "Coffee", "4.50")
        log_dict = event.to_log_dict()
        assert log_dict["event_type"] == "expense_added"
        assert log_dict["entity_id"] == "e1"
        assert log_dict["details"]["amount"] == "4.50"
        assert log_dict["is_user_action"] is True

    def test_save_failed_is_error(self):
        """Test that failed saves are error severity."""
        event = ActivityEventBuilder.save_failed("disk full", record_count=3)
        assert event.severity == ActivitySeverity.ERROR
        assert event.error_message == "disk full"
        assert event.details == {"record_count": 3}

    def test_load_failed_is_warning(self):
        """Test that failed loads are warnings carrying the error type."""
        event = ActivityEventBuilder.load_failed("MalformedDataError", "bad json")
        assert event.severity == ActivitySeverity.WARNING
        assert event.error_code == "MalformedDataError"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
