"""Domain collections package."""

from freelancer_dashboard.domain.collections import (
    ClientCollection,
    ProjectCollection,
    RecordCollection,
)

__all__ = ["ClientCollection", "ProjectCollection", "RecordCollection"]
