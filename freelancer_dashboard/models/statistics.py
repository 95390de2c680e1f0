"""
Statistics Models

Results of the statistics engine. They are recomputed on every render
and never stored.
"""

import calendar
from enum import Enum

from pydantic import BaseModel, Field


class TimeFilter(str, Enum):
    """Reporting window for the earnings breakdown."""
    ALL = "all"
    YEAR = "year"
    QUARTER = "quarter"
    MONTH = "month"


class DashboardStats(BaseModel):
    """Headline figures for the statistics page."""

    total_earnings: float = Field(
        default=0.0,
        description="Sum of fees over Completed projects"
    )
    projects_completed: int = Field(
        default=0,
        ge=0,
        description="Number of Completed projects"
    )
    total_clients: int = Field(
        default=0,
        ge=0,
        description="Number of client records"
    )
    average_project_value: float = Field(
        default=0.0,
        description="total_earnings / projects_completed, 0 without completed projects"
    )
    # Distinct client ids referenced by projects. Informational only,
    # total_clients stays the headline figure.
    active_clients: int = Field(
        default=0,
        ge=0,
        description="Distinct clients that have at least one project"
    )


class EarningsRow(BaseModel):
    """One Completed project's earnings, placed in its deadline month."""

    year: int
    month: int = Field(ge=1, le=12)
    earnings: float

    @property
    def period_label(self) -> str:
        """Short label such as 'Mar 2024'."""
        return f"{calendar.month_abbr[self.month]} {self.year}"
