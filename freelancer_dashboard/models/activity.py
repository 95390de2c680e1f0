"""
Activity Models for Freelancer Dashboard

Every command the dashboard runs is described by an ActivityEvent and
written to the structured log. Events exist for diagnostics only: they
are never stored, so there is no edit history to browse.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class ActivityEventType(str, Enum):
    """Types of events we log."""
    # Identity
    USER_REGISTERED = "user_registered"
    LOGIN_SUCCEEDED = "login_succeeded"
    LOGIN_FAILED = "login_failed"
    SESSION_RESUMED = "session_resumed"
    LOGGED_OUT = "logged_out"

    # Records
    RECORD_CREATED = "record_created"
    RECORD_UPDATED = "record_updated"
    RECORD_DELETED = "record_deleted"
    PROJECT_STATUS_TOGGLED = "project_status_toggled"

    # Storage
    STORED_DATA_MALFORMED = "stored_data_malformed"
    STORED_RECORD_SKIPPED = "stored_record_skipped"
    STORAGE_WRITE_FAILED = "storage_write_failed"


class ActivitySeverity(str, Enum):
    """Severity level for activity events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class ActivityEvent(BaseModel):
    """A single activity event."""

    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )
    event_type: ActivityEventType
    severity: ActivitySeverity = ActivitySeverity.INFO

    username: Optional[str] = None
    entity_type: Optional[str] = Field(
        default=None,
        description="'client' or 'project' for record events"
    )
    entity_id: Optional[int] = None

    description: str
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "username": self.username,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class ActivityEventBuilder:
    """
    Helper class to build activity events with common patterns.

    Usage:
        event = ActivityEventBuilder.login_failed("alice")
        event = ActivityEventBuilder.record_created("alice", "client", 3)
    """

    @staticmethod
    def user_registered(username: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.USER_REGISTERED,
            username=username,
            description=f"New user registered on first login: {username}",
        )

    @staticmethod
    def login_succeeded(username: str, resumed: bool = False) -> ActivityEvent:
        if resumed:
            return ActivityEvent(
                event_type=ActivityEventType.SESSION_RESUMED,
                username=username,
                description=f"Session resumed for {username}",
            )
        return ActivityEvent(
            event_type=ActivityEventType.LOGIN_SUCCEEDED,
            username=username,
            description=f"User logged in: {username}",
        )

    @staticmethod
    def login_failed(username: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.LOGIN_FAILED,
            severity=ActivitySeverity.WARNING,
            username=username,
            description=f"Incorrect password for {username}",
        )

    @staticmethod
    def logged_out(username: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.LOGGED_OUT,
            username=username,
            description=f"User logged out: {username}",
        )

    @staticmethod
    def record_created(username: str, entity_type: str, entity_id: int) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.RECORD_CREATED,
            username=username,
            entity_type=entity_type,
            entity_id=entity_id,
            description=f"Created {entity_type} {entity_id}",
        )

    @staticmethod
    def record_updated(
        username: str,
        entity_type: str,
        entity_id: int,
        found: bool,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.RECORD_UPDATED,
            username=username,
            entity_type=entity_type,
            entity_id=entity_id,
            description=f"Updated {entity_type} {entity_id}",
            details={"found": found},
        )

    @staticmethod
    def record_deleted(
        username: str,
        entity_type: str,
        entity_id: int,
        found: bool,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.RECORD_DELETED,
            username=username,
            entity_type=entity_type,
            entity_id=entity_id,
            description=f"Deleted {entity_type} {entity_id}",
            details={"found": found},
        )

    @staticmethod
    def project_status_toggled(
        username: str,
        project_id: int,
        new_status: str,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.PROJECT_STATUS_TOGGLED,
            username=username,
            entity_type="project",
            entity_id=project_id,
            description=f"Project {project_id} is now {new_status}",
            details={"status": new_status},
        )

    @staticmethod
    def stored_data_malformed(key: str, error_message: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.STORED_DATA_MALFORMED,
            severity=ActivitySeverity.WARNING,
            description=f"Stored value under '{key}' is malformed, using empty default",
            details={"key": key},
            error_message=error_message,
        )

    @staticmethod
    def stored_record_skipped(
        key: str,
        entity_type: str,
        error_message: str,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.STORED_RECORD_SKIPPED,
            severity=ActivitySeverity.WARNING,
            entity_type=entity_type,
            description=f"Skipped malformed {entity_type} under '{key}'",
            details={"key": key},
            error_message=error_message,
        )

    @staticmethod
    def storage_write_failed(
        username: Optional[str],
        key: str,
        error_message: str,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.STORAGE_WRITE_FAILED,
            severity=ActivitySeverity.ERROR,
            username=username,
            description=f"Could not write '{key}', change rolled back",
            details={"key": key},
            error_message=error_message,
        )
