"""
Activity Logger

Every command the session manager runs is logged as one structured event.
The logger:
- Is local only (events are never persisted)
- Never raises, a logging problem must not break a command
- Tags events with the acting username
"""

import logging
import sys
from typing import Callable, Optional

import structlog

from freelancer_dashboard.models.activity import (
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


def configure_logging(level: str = "INFO") -> None:
    """Route structlog output to stderr at the given stdlib level."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
    )


class ActivityLogger:
    """Central activity logging service."""

    def __init__(self, name: str = "freelancer_dashboard"):
        self._logger = structlog.get_logger(name)

    def log(self, event: ActivityEvent) -> None:
        """Log an activity event at the level matching its severity."""
        try:
            log_dict = event.to_log_dict()
            if event.severity == ActivitySeverity.ERROR:
                self._logger.error("activity_event", **log_dict)
            elif event.severity == ActivitySeverity.WARNING:
                self._logger.warning("activity_event", **log_dict)
            elif event.severity == ActivitySeverity.DEBUG:
                self._logger.debug("activity_event", **log_dict)
            else:
                self._logger.info("activity_event", **log_dict)
        except Exception as e:
            # Log failure but don't raise
            print(f"WARNING: Failed to write activity event: {e}", file=sys.stderr)

    def _build_and_log(self, build: Callable[..., ActivityEvent], *args, **kwargs) -> None:
        """Build an event and log it. A failure while building is reported, not raised."""
        try:
            event = build(*args, **kwargs)
        except Exception as e:
            print(f"WARNING: Failed to build activity event: {e}", file=sys.stderr)
            return
        self.log(event)

    def log_user_registered(self, username: str) -> None:
        self._build_and_log(ActivityEventBuilder.user_registered, username)

    def log_login(self, username: str, resumed: bool = False) -> None:
        self._build_and_log(ActivityEventBuilder.login_succeeded, username, resumed=resumed)

    def log_login_failed(self, username: str) -> None:
        self._build_and_log(ActivityEventBuilder.login_failed, username)

    def log_logout(self, username: str) -> None:
        self._build_and_log(ActivityEventBuilder.logged_out, username)

    def log_record_created(self, username: str, entity_type: str, entity_id: int) -> None:
        self._build_and_log(ActivityEventBuilder.record_created, username, entity_type, entity_id)

    def log_record_updated(
        self,
        username: str,
        entity_type: str,
        entity_id: int,
        found: bool,
    ) -> None:
        self._build_and_log(
            ActivityEventBuilder.record_updated, username, entity_type, entity_id, found
        )

    def log_record_deleted(
        self,
        username: str,
        entity_type: str,
        entity_id: int,
        found: bool,
    ) -> None:
        self._build_and_log(
            ActivityEventBuilder.record_deleted, username, entity_type, entity_id, found
        )

    def log_project_status_toggled(
        self,
        username: str,
        project_id: int,
        new_status: str,
    ) -> None:
        self._build_and_log(
            ActivityEventBuilder.project_status_toggled, username, project_id, new_status
        )

    def log_stored_data_malformed(self, key: str, error_message: str) -> None:
        self._build_and_log(ActivityEventBuilder.stored_data_malformed, key, error_message)

    def log_stored_record_skipped(
        self,
        key: str,
        entity_type: str,
        error_message: str,
    ) -> None:
        self._build_and_log(
            ActivityEventBuilder.stored_record_skipped, key, entity_type, error_message
        )

    def log_storage_write_failed(
        self,
        username: Optional[str],
        key: str,
        error_message: str,
    ) -> None:
        self._build_and_log(ActivityEventBuilder.storage_write_failed, username, key, error_message)
