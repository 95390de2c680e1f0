"""
Client Models

A client is a person or company the freelancer works for. Clients are
owned by exactly one user and live inside that user's data blob.

DESIGN DECISION: A draft (no id) and a stored record (with id) are two
separate models. Only the collection hands out ids, so a caller can never
invent one.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LeadSource(str, Enum):
    """Where a client relationship came from."""
    LINKEDIN = "LinkedIn"
    WEBSITE = "Website"
    DIRECT_EMAIL = "Direct Email"
    REFERRAL = "Referral"
    OTHER = "Other"


class ClientDraft(BaseModel):
    """
    Client details as entered in the form, before an id is assigned.

    Only the presence of the text fields is checked (by the form
    validator); email and phone formats are deliberately left alone.
    """
    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    name: str = Field(
        ...,
        description="Client name"
    )
    email: str = Field(
        default="",
        description="Contact email"
    )
    phone: str = Field(
        default="",
        description="Contact phone number"
    )
    lead: Optional[LeadSource] = Field(
        default=None,
        description="Lead source, empty on records saved without one"
    )

    @field_validator('lead', mode='before')
    @classmethod
    def empty_lead_is_none(cls, v):
        if v == "":
            return None
        return v


class Client(ClientDraft):
    """A stored client."""

    id: int = Field(
        ...,
        description="Unique within the owning user's clients"
    )
