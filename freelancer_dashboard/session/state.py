"""Application state held for the logged-in user."""

from typing import Optional

from freelancer_dashboard.domain.collections import ClientCollection, ProjectCollection
from freelancer_dashboard.models.user_data import UserData


class AppState:
    """
    The current user and their in-memory collections.

    Owned by SessionManager. Nothing else mutates it, so every change goes
    through a named command and is saved.
    """

    def __init__(self):
        self.current_user: Optional[str] = None
        self.clients = ClientCollection()
        self.projects = ProjectCollection()

    def load(self, username: str, data: UserData) -> None:
        """Replace everything in memory with the given user's data."""
        self.current_user = username
        self.restore(data)

    def clear(self) -> None:
        self.current_user = None
        self.clients.clear()
        self.projects.clear()

    def to_user_data(self) -> UserData:
        return UserData(clients=self.clients.records, projects=self.projects.records)

    def restore(self, data: UserData) -> None:
        """Put collections back to a previous snapshot."""
        self.clients.replace_all(data.clients)
        self.projects.replace_all(data.projects)
