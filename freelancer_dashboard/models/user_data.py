"""
User Data and Session Models

The user data blob is the unit of persistence: one per user, always
written whole. Sessions are never stored beyond the current-user marker.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field

from freelancer_dashboard.models.client import Client
from freelancer_dashboard.models.project import Project


class UserData(BaseModel):
    """Everything stored for one user."""

    clients: list[Client] = Field(default_factory=list)
    projects: list[Project] = Field(default_factory=list)

    def to_storage_dict(self) -> dict:
        """Wire form: camelCase keys, ISO dates, enum display values."""
        return self.model_dump(mode="json", by_alias=True)


class Session(BaseModel):
    """An established login."""

    username: str = Field(
        ...,
        min_length=1,
        description="The logged-in user"
    )
    started_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When this session was established"
    )
    registered: bool = Field(
        default=False,
        description="True when this login created the account"
    )
    resumed: bool = Field(
        default=False,
        description="True when restored from the current-user marker"
    )
