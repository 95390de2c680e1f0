"""
Record Collections

Ordered in-memory lists of a user's clients and projects. The list order
is the display order: new records go to the front.

Ids are assigned as max(existing ids) + 1, or 1 for an empty collection.
Update and delete of an unknown id are silent no-ops.
"""

from typing import Generic, Iterable, Optional, TypeVar

from freelancer_dashboard.models.client import Client, ClientDraft
from freelancer_dashboard.models.project import (
    Project,
    ProjectDraft,
    ProjectFilters,
    ProjectStatus,
)


RecordT = TypeVar("RecordT", Client, Project)
DraftT = TypeVar("DraftT", ClientDraft, ProjectDraft)


class RecordCollection(Generic[RecordT, DraftT]):
    """Base class for an id-keyed, ordered record list."""

    record_type: type
    entity_type: str = "record"

    def __init__(self, records: Iterable[RecordT] = ()):
        self._records: list[RecordT] = list(records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self):
        return iter(self.records)

    @property
    def records(self) -> list[RecordT]:
        """Copies of the records in display order."""
        return [record.model_copy() for record in self._records]

    def replace_all(self, records: Iterable[RecordT]) -> None:
        """Swap in a whole new record list (load, logout, rollback)."""
        self._records = [record.model_copy() for record in records]

    def clear(self) -> None:
        self._records = []

    def next_id(self) -> int:
        return max((record.id for record in self._records), default=0) + 1

    def get(self, record_id: int) -> Optional[RecordT]:
        for record in self._records:
            if record.id == record_id:
                return record.model_copy()
        return None

    def create(self, draft: DraftT) -> RecordT:
        """Assign the next id and put the new record first."""
        record = self.record_type(id=self.next_id(), **draft.model_dump(exclude={"id"}))
        self._records.insert(0, record)
        return record.model_copy()

    def update(self, record: RecordT) -> bool:
        """
        Replace the record with the same id.

        Returns:
            True if a record was replaced, False if the id is unknown
        """
        for index, existing in enumerate(self._records):
            if existing.id == record.id:
                self._records[index] = record.model_copy()
                return True
        return False

    def delete(self, record_id: int) -> bool:
        """
        Remove the record with this id.

        Returns:
            True if a record was removed, False if the id is unknown
        """
        remaining = [record for record in self._records if record.id != record_id]
        found = len(remaining) != len(self._records)
        self._records = remaining
        return found

    def list(self) -> list[RecordT]:
        return self.records


class ClientCollection(RecordCollection[Client, ClientDraft]):
    record_type = Client
    entity_type = "client"


class ProjectCollection(RecordCollection[Project, ProjectDraft]):
    record_type = Project
    entity_type = "project"

    def list(self, filters: Optional[ProjectFilters] = None) -> list[Project]:
        """Projects matching every set filter, in display order."""
        if filters is None:
            return self.records
        return [project for project in self.records if filters.matches(project)]

    def toggle_completion(self, project_id: int) -> Optional[Project]:
        """
        Flip a project between Completed and not.

        A Completed project is reopened as In Progress; any other status
        becomes Completed.

        Returns:
            The updated project, or None if the id is unknown
        """
        project = self.get(project_id)
        if project is None:
            return None
        if project.status == ProjectStatus.COMPLETED:
            new_status = ProjectStatus.IN_PROGRESS
        else:
            new_status = ProjectStatus.COMPLETED
        toggled = project.model_copy(update={"status": new_status})
        self.update(toggled)
        return toggled
