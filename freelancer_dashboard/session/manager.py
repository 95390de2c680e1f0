"""
Session and Identity Manager

Resolves who the current user is, loads their data on login and saves it
after every change.

DESIGN DECISIONS:
- Open registration: logging in with an unknown username creates the
  account with the given password. There is no separate sign-up step.
- Passwords are stored and compared in plain text. This is an identity
  switch for a single-user tool, not a credential system.
- A stored current-user marker restores the session on startup without
  asking for the password again. It never expires.
- Every mutating command rewrites the user's whole data blob. If that
  write fails, the in-memory change is rolled back and StorageWriteError
  propagates so the UI can show it.
"""

from contextlib import contextmanager
from datetime import date
from typing import Iterator, Optional

from freelancer_dashboard.activity import ActivityLogger
from freelancer_dashboard.models.client import Client, ClientDraft
from freelancer_dashboard.models.project import Project, ProjectDraft, ProjectFilters
from freelancer_dashboard.models.statistics import DashboardStats, EarningsRow, TimeFilter
from freelancer_dashboard.models.user_data import Session
from freelancer_dashboard.queries.statistics import compute_dashboard_stats, earnings_by_period
from freelancer_dashboard.services.storage import (
    CURRENT_USER_KEY,
    USERS_KEY,
    StorageError,
    UserStore,
    user_data_key,
)
from freelancer_dashboard.session.state import AppState


class AuthError(Exception):
    """Base exception for identity problems."""
    pass


class IncorrectPasswordError(AuthError):
    """Known username, wrong password."""

    def __init__(self, username: str):
        self.username = username
        super().__init__("Incorrect password")


class NoActiveSessionError(AuthError):
    """A data command was issued while nobody is logged in."""

    def __init__(self):
        super().__init__("Not logged in")


class SessionManager:
    """
    Owns the AppState and exposes every command the dashboard can run.

    Usage:
        manager = SessionManager(UserStore(InMemoryKeyValueStore()))
        manager.login("alice", "secret")
        client = manager.create_client(ClientDraft(name="Bob", ...))
    """

    def __init__(
        self,
        user_store: UserStore,
        activity_logger: Optional[ActivityLogger] = None,
        state: Optional[AppState] = None,
    ):
        self._user_store = user_store
        self._activity_logger = activity_logger or ActivityLogger()
        self._state = state or AppState()
        self._session: Optional[Session] = None

    @property
    def state(self) -> AppState:
        return self._state

    @property
    def session(self) -> Optional[Session]:
        return self._session

    @property
    def current_user(self) -> Optional[str]:
        return self._state.current_user

    @property
    def is_logged_in(self) -> bool:
        return self._state.current_user is not None

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    def login(self, username: str, password: str) -> Session:
        """
        Log in, registering the username first if it is unknown.

        Raises:
            IncorrectPasswordError: If the username exists with another password
            StorageWriteError: If the registry or marker could not be written.
                A registration that was written before the marker failed
                is kept, so retrying with the same password logs in.
        """
        registry = self._user_store.load_registry()
        registered = False

        if username not in registry:
            self._write_login(USERS_KEY, username, self._user_store.register_user, password)
            self._activity_logger.log_user_registered(username)
            registered = True
        elif registry[username] != password:
            self._activity_logger.log_login_failed(username)
            raise IncorrectPasswordError(username)

        self._write_login(CURRENT_USER_KEY, username, self._user_store.set_current_user)
        return self._establish(username, registered=registered, resumed=False)

    def _write_login(self, key: str, username: str, write, *args) -> None:
        try:
            write(username, *args)
        except StorageError as e:
            self._activity_logger.log_storage_write_failed(username, key, str(e))
            raise

    def resume(self) -> Optional[Session]:
        """Restore the session named by the stored current-user marker, if any."""
        username = self._user_store.get_current_user()
        if username is None:
            return None
        return self._establish(username, registered=False, resumed=True)

    def logout(self) -> None:
        """Forget the current user. Their stored data stays untouched."""
        username = self._state.current_user
        self._state.clear()
        self._session = None
        self._user_store.clear_current_user()
        if username is not None:
            self._activity_logger.log_logout(username)

    def _establish(self, username: str, registered: bool, resumed: bool) -> Session:
        data = self._user_store.load_user_data(username)
        self._state.load(username, data)
        self._session = Session(username=username, registered=registered, resumed=resumed)
        self._activity_logger.log_login(username, resumed=resumed)
        return self._session

    def _require_user(self) -> str:
        if self._state.current_user is None:
            raise NoActiveSessionError()
        return self._state.current_user

    @contextmanager
    def _mutation(self) -> Iterator[str]:
        """
        Run a change against the collections, then save the whole blob.

        On a failed save the collections are restored to what they were
        before the change.
        """
        username = self._require_user()
        snapshot = self._state.to_user_data()
        yield username
        try:
            self._user_store.save_user_data(username, self._state.to_user_data())
        except StorageError as e:
            self._state.restore(snapshot)
            self._activity_logger.log_storage_write_failed(
                username, user_data_key(username), str(e)
            )
            raise

    # ------------------------------------------------------------------
    # Clients
    # ------------------------------------------------------------------

    def list_clients(self) -> list[Client]:
        return self._state.clients.list()

    def get_client(self, client_id: int) -> Optional[Client]:
        return self._state.clients.get(client_id)

    def create_client(self, draft: ClientDraft) -> Client:
        with self._mutation() as username:
            client = self._state.clients.create(draft)
        self._activity_logger.log_record_created(
            username, self._state.clients.entity_type, client.id
        )
        return client

    def update_client(self, client: Client) -> bool:
        """Replace the client with the same id; False if there is none."""
        with self._mutation() as username:
            found = self._state.clients.update(client)
        self._activity_logger.log_record_updated(
            username, self._state.clients.entity_type, client.id, found
        )
        return found

    def delete_client(self, client_id: int) -> bool:
        """
        Remove a client. Projects pointing at it are left as they are.
        """
        with self._mutation() as username:
            found = self._state.clients.delete(client_id)
        self._activity_logger.log_record_deleted(
            username, self._state.clients.entity_type, client_id, found
        )
        return found

    # ------------------------------------------------------------------
    # Projects
    # ------------------------------------------------------------------

    def list_projects(self, filters: Optional[ProjectFilters] = None) -> list[Project]:
        return self._state.projects.list(filters)

    def get_project(self, project_id: int) -> Optional[Project]:
        return self._state.projects.get(project_id)

    def create_project(self, draft: ProjectDraft) -> Project:
        with self._mutation() as username:
            project = self._state.projects.create(draft)
        self._activity_logger.log_record_created(
            username, self._state.projects.entity_type, project.id
        )
        return project

    def update_project(self, project: Project) -> bool:
        """Replace the project with the same id; False if there is none."""
        with self._mutation() as username:
            found = self._state.projects.update(project)
        self._activity_logger.log_record_updated(
            username, self._state.projects.entity_type, project.id, found
        )
        return found

    def delete_project(self, project_id: int) -> bool:
        with self._mutation() as username:
            found = self._state.projects.delete(project_id)
        self._activity_logger.log_record_deleted(
            username, self._state.projects.entity_type, project_id, found
        )
        return found

    def toggle_project_completion(self, project_id: int) -> Optional[Project]:
        """Complete an open project or reopen a completed one."""
        with self._mutation() as username:
            project = self._state.projects.toggle_completion(project_id)
        if project is not None:
            self._activity_logger.log_project_status_toggled(
                username, project.id, project.status.value
            )
        return project

    def client_name_for(self, project: Project) -> str:
        """Name of the project's client, empty when the client is gone."""
        client = self._state.clients.get(project.client_id)
        return client.name if client else ""

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    def dashboard_stats(self) -> DashboardStats:
        return compute_dashboard_stats(self._state.clients, self._state.projects)

    def earnings(
        self,
        time_filter: TimeFilter | str = TimeFilter.ALL,
        today: Optional[date] = None,
    ) -> list[EarningsRow]:
        return earnings_by_period(self._state.projects, time_filter, today=today)
