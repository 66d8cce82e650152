"""
Activity Logger

DESIGN DECISION: Every significant ledger action is logged.
This provides:
1. Traceability of adds, removes and fallbacks
2. Debugging capability when the blob store misbehaves
3. An operator-visible record of failed saves

The activity logger:
- Never raises; a logging problem must not break the ledger
- Writes structured JSON through structlog
- Logs at the level matching the event severity
"""

import logging
from typing import Any, Optional

import structlog

from expense_ledger.models.activity import (
    ActivityEvent,
    ActivityEventBuilder,
    ActivitySeverity,
)


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(debug_mode: bool = False) -> None:
    """Route structlog output through the stdlib root logger."""
    logging.basicConfig(
        format="%(message)s",
        level=logging.DEBUG if debug_mode else logging.INFO,
    )


class ActivityLogger:
    """
    Central activity logging service.

    Wraps a structlog logger; a different logger can be injected,
    which is how tests observe emitted events.
    """

    def __init__(self, logger: Optional[Any] = None):
        self._logger = logger or structlog.get_logger("expense_ledger")

    def log(self, event: ActivityEvent) -> bool:
        """
        Log an activity event.

        Returns True if the event was written.
        """
        log_dict = event.to_log_dict()

        try:
            if event.severity == ActivitySeverity.ERROR:
                self._logger.error("activity_event", **log_dict)
            elif event.severity == ActivitySeverity.WARNING:
                self._logger.warning("activity_event", **log_dict)
            elif event.severity == ActivitySeverity.DEBUG:
                self._logger.debug("activity_event", **log_dict)
            else:
                self._logger.info("activity_event", **log_dict)
        except (OSError, ValueError, TypeError):
            return False

        return True

    def log_ledger_loaded(self, record_count: int) -> None:
        self.log(ActivityEventBuilder.ledger_loaded(record_count))

    def log_ledger_seeded(self, record_count: int, reason: str) -> None:
        self.log(ActivityEventBuilder.ledger_seeded(record_count, reason))

    def log_load_failed(self, error: Exception) -> None:
        """Log a failed load that fell back to the default expenses."""
        self.log(ActivityEventBuilder.load_failed(
            error_type=type(error).__name__,
            error_message=str(error),
        ))

    def log_validation_failed(self, issues: list[dict]) -> None:
        self.log(ActivityEventBuilder.validation_failed(issues))

    def log_expense_added(self, expense_id: str, description: str, amount: str) -> None:
        self.log(ActivityEventBuilder.expense_added(expense_id, description, amount))

    def log_expense_removed(self, expense_id: str, removed_count: int) -> None:
        self.log(ActivityEventBuilder.expense_removed(expense_id, removed_count))

    def log_save_failed(self, error: Exception, record_count: int) -> None:
        self.log(ActivityEventBuilder.save_failed(str(error), record_count))
