"""
Data Models Package

This package contains all Pydantic models used in the Freelancer Dashboard.
All data flowing through the system must conform to these schemas.
"""

from freelancer_dashboard.models.activity import (
    ActivityEvent,
    ActivityEventBuilder,
    ActivityEventType,
    ActivitySeverity,
)
from freelancer_dashboard.models.client import (
    Client,
    ClientDraft,
    LeadSource,
)
from freelancer_dashboard.models.project import (
    Project,
    ProjectDraft,
    ProjectFilters,
    ProjectStatus,
)
from freelancer_dashboard.models.statistics import (
    DashboardStats,
    EarningsRow,
    TimeFilter,
)
from freelancer_dashboard.models.user_data import Session, UserData
from freelancer_dashboard.models.validation import (
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    # Activity models
    "ActivityEvent",
    "ActivityEventBuilder",
    "ActivityEventType",
    "ActivitySeverity",
    # Record models
    "Client",
    "ClientDraft",
    "LeadSource",
    "Project",
    "ProjectDraft",
    "ProjectFilters",
    "ProjectStatus",
    # Statistics models
    "DashboardStats",
    "EarningsRow",
    "TimeFilter",
    # User data
    "Session",
    "UserData",
    # Validation
    "ValidationIssue",
    "ValidationResult",
]
