"""
Project Models

A project is a piece of paid work for a client. The client link is a bare
id: nothing checks that the client exists, and a project whose client was
deleted simply shows an empty client name.
"""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProjectStatus(str, Enum):
    """Project lifecycle status."""
    PLANNING = "Planning"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class ProjectDraft(BaseModel):
    """Project details as entered in the form, before an id is assigned."""
    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    name: str = Field(
        ...,
        description="Project name"
    )
    client_id: int = Field(
        ...,
        alias="clientId",
        description="Id of the client this project is for (not enforced)"
    )
    status: ProjectStatus = Field(
        default=ProjectStatus.PLANNING,
        description="Current status"
    )
    deadline: date = Field(
        ...,
        description="Deadline, stored as an ISO date"
    )
    # Negative fees are not rejected
    fee: float = Field(
        default=0.0,
        description="Agreed project fee"
    )

    @property
    def is_completed(self) -> bool:
        return self.status == ProjectStatus.COMPLETED


class Project(ProjectDraft):
    """A stored project."""

    id: int = Field(
        ...,
        description="Unique within the owning user's projects"
    )


class ProjectFilters(BaseModel):
    """
    Filters for the project list.

    Every filter is optional; None means "all". The literal strings "all"
    and "" (what the filter widgets send) are accepted as None too.
    All set filters must match (AND).
    """
    model_config = ConfigDict(populate_by_name=True)

    status: Optional[ProjectStatus] = None
    client_id: Optional[int] = Field(default=None, alias="clientId")
    min_fee: Optional[float] = Field(default=None, alias="minFee")
    max_fee: Optional[float] = Field(default=None, alias="maxFee")

    @field_validator('status', 'client_id', 'min_fee', 'max_fee', mode='before')
    @classmethod
    def all_means_unset(cls, v):
        if isinstance(v, str) and v.strip().lower() in ("", "all"):
            return None
        return v

    def matches(self, project: Project) -> bool:
        """Check a single project against every set filter."""
        if self.status is not None and project.status != self.status:
            return False
        if self.client_id is not None and project.client_id != self.client_id:
            return False
        if self.min_fee is not None and project.fee < self.min_fee:
            return False
        if self.max_fee is not None and project.fee > self.max_fee:
            return False
        return True
