"""
Activity Models for Expense Ledger

Every significant ledger action is emitted as a structured log event.
This provides:
1. Debugging information when storage misbehaves
2. A visible trace of silent fallbacks (e.g. seed data after a bad blob)
3. Operator visibility of failed saves

DESIGN DECISION: Activity events are log records, not history.
They are written to the structured log only; the ledger keeps no
edit history of its own.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class ActivityEventType(str, Enum):
    """Types of events the ledger emits."""
    # Loading
    LEDGER_LOADED = "ledger_loaded"
    LEDGER_SEEDED = "ledger_seeded"
    LOAD_FAILED = "load_failed"

    # Entry
    VALIDATION_FAILED = "validation_failed"
    EXPENSE_ADDED = "expense_added"
    EXPENSE_REMOVED = "expense_removed"

    # Persistence
    SAVE_FAILED = "save_failed"


class ActivitySeverity(str, Enum):
    """Severity level for activity events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ActivityEvent(BaseModel):
    """A single activity event."""

    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )
    event_type: ActivityEventType
    severity: ActivitySeverity = ActivitySeverity.INFO

    # What expense is this about, if any
    entity_id: Optional[str] = None

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)

    error_code: Optional[str] = None
    error_message: Optional[str] = None

    is_user_action: bool = False

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class ActivityEventBuilder:
    """
    Helper class to build activity events with common patterns.

    Usage:
        event = ActivityEventBuilder.expense_added(expense_id, "Coffee", "4.50")
        event = ActivityEventBuilder.save_failed("disk full", record_count=12)
    """

    @staticmethod
    def ledger_loaded(record_count: int) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.LEDGER_LOADED,
            description=f"Loaded {record_count} expenses from storage",
            details={"record_count": record_count},
        )

    @staticmethod
    def ledger_seeded(record_count: int, reason: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.LEDGER_SEEDED,
            description=f"Started with {record_count} default expenses ({reason})",
            details={"record_count": record_count, "reason": reason},
        )

    @staticmethod
    def load_failed(error_type: str, error_message: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.LOAD_FAILED,
            severity=ActivitySeverity.WARNING,
            description="Stored expenses could not be read; using defaults",
            error_code=error_type,
            error_message=error_message,
        )

    @staticmethod
    def validation_failed(issues: list[dict]) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.VALIDATION_FAILED,
            severity=ActivitySeverity.WARNING,
            description=f"Expense rejected with {len(issues)} issues",
            details={"issues": issues},
            is_user_action=True,
        )

    @staticmethod
    def expense_added(expense_id: str, description: str, amount: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.EXPENSE_ADDED,
            entity_id=expense_id,
            description=f"Expense added: {description}",
            details={"amount": amount},
            is_user_action=True,
        )

    @staticmethod
    def expense_removed(expense_id: str, removed_count: int) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.EXPENSE_REMOVED,
            entity_id=expense_id,
            description=f"Removed {removed_count} expense(s)",
            details={"removed_count": removed_count},
            is_user_action=True,
        )

    @staticmethod
    def save_failed(error_message: str, record_count: int) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.SAVE_FAILED,
            severity=ActivitySeverity.ERROR,
            description="Failed to save expenses; changes are kept in memory only",
            details={"record_count": record_count},
            error_message=error_message,
        )
