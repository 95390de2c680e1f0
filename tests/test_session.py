"""Integration tests for the session manager over an in-memory store."""

import json
from datetime import date

import pytest

from freelancer_dashboard.activity import ActivityLogger
from freelancer_dashboard.models.client import Client, ClientDraft, LeadSource
from freelancer_dashboard.models.project import (
    ProjectDraft,
    ProjectFilters,
    ProjectStatus,
)
from freelancer_dashboard.orchestrator import create_app_components, create_store
from freelancer_dashboard.services.storage import (
    CURRENT_USER_KEY,
    USERS_KEY,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    StorageWriteError,
    UserStore,
)
from freelancer_dashboard.session import (
    IncorrectPasswordError,
    NoActiveSessionError,
    SessionManager,
)


class FailingStore(InMemoryKeyValueStore):
    """Store whose writes to keys with a given prefix can be switched to fail."""

    def __init__(self, failing_prefix: str = "userData_"):
        super().__init__()
        self.failing_prefix = failing_prefix
        self.fail_writes = False

    def set_item(self, key: str, value: str) -> None:
        if self.fail_writes and key.startswith(self.failing_prefix):
            raise StorageWriteError(key, "quota exceeded")
        super().set_item(key, value)


class RecordingActivityLogger(ActivityLogger):
    """Keeps every record event it is asked to log."""

    def __init__(self):
        super().__init__()
        self.record_events = []

    def log_record_created(self, username, entity_type, entity_id):
        self.record_events.append(("created", entity_type, entity_id))
        super().log_record_created(username, entity_type, entity_id)

    def log_record_deleted(self, username, entity_type, entity_id, found):
        self.record_events.append(("deleted", entity_type, entity_id))
        super().log_record_deleted(username, entity_type, entity_id, found)


def bob() -> ClientDraft:
    return ClientDraft(name="Bob", email="b@x.com", phone="555", lead=LeadSource.REFERRAL)


def site(client_id: int, **overrides) -> ProjectDraft:
    fields = dict(
        name="Site",
        client_id=client_id,
        status=ProjectStatus.COMPLETED,
        deadline=date(2024, 3, 15),
        fee=1000,
    )
    fields.update(overrides)
    return ProjectDraft(**fields)


@pytest.fixture
def kv() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def manager(kv) -> SessionManager:
    return SessionManager(UserStore(kv))


def stored_blob(kv, username: str) -> dict:
    return json.loads(kv.get_item(f"userData_{username}"))


class TestLogin:
    """Tests for login, registration and logout."""

    def test_unknown_user_is_registered(self, kv, manager):
        """Test that a first login creates the account."""
        session = manager.login("alice", "pw1")
        assert session.registered is True
        assert json.loads(kv.get_item(USERS_KEY)) == {"alice": "pw1"}
        assert kv.get_item(CURRENT_USER_KEY) == "alice"
        assert manager.current_user == "alice"
        assert manager.list_clients() == []
        assert manager.list_projects() == []

    def test_wrong_password_rejected(self, kv, manager):
        """Test that a known user with another password is refused."""
        manager.login("alice", "pw1")
        manager.logout()
        with pytest.raises(IncorrectPasswordError, match="Incorrect password"):
            manager.login("alice", "wrong")
        assert manager.is_logged_in is False
        assert kv.get_item(CURRENT_USER_KEY) is None
        assert json.loads(kv.get_item(USERS_KEY)) == {"alice": "pw1"}

    def test_correct_password_after_failure(self, manager):
        """Test that a failed attempt does not lock the account."""
        manager.login("alice", "pw1")
        manager.logout()
        with pytest.raises(IncorrectPasswordError):
            manager.login("alice", "wrong")
        session = manager.login("alice", "pw1")
        assert session.registered is False
        assert manager.current_user == "alice"

    def test_login_loads_stored_data(self, manager):
        """Test that data created earlier is there after logging in again."""
        manager.login("alice", "pw1")
        manager.create_client(bob())
        manager.logout()
        assert manager.list_clients() == []

        manager.login("alice", "pw1")
        assert [c.name for c in manager.list_clients()] == ["Bob"]

    def test_users_are_isolated(self, manager):
        """Test that one user never sees another user's records."""
        manager.login("alice", "pw1")
        manager.create_client(bob())
        manager.logout()

        manager.login("carol", "pw2")
        assert manager.list_clients() == []

    def test_very_long_username(self, kv, manager):
        """Test that any new username logs in, however long."""
        username = "a" * 600
        session = manager.login(username, "pw")
        assert session.registered is True
        assert manager.current_user == username
        assert kv.get_item(CURRENT_USER_KEY) == username
        manager.create_client(bob())
        assert len(stored_blob(kv, username)["clients"]) == 1

    def test_failed_marker_write_keeps_registration(self):
        """Test that a login whose marker write fails can be retried."""
        store = FailingStore(failing_prefix=CURRENT_USER_KEY)
        manager = SessionManager(UserStore(store))

        store.fail_writes = True
        with pytest.raises(StorageWriteError):
            manager.login("alice", "pw1")
        assert manager.is_logged_in is False
        assert json.loads(store.get_item(USERS_KEY)) == {"alice": "pw1"}

        store.fail_writes = False
        session = manager.login("alice", "pw1")
        assert session.registered is False
        assert manager.current_user == "alice"

    def test_logout_keeps_data(self, kv, manager):
        """Test that logging out only clears the marker."""
        manager.login("alice", "pw1")
        manager.create_client(bob())
        manager.logout()
        assert manager.is_logged_in is False
        assert manager.session is None
        assert CURRENT_USER_KEY not in kv.keys()
        assert len(stored_blob(kv, "alice")["clients"]) == 1


class TestResume:
    """Tests for restoring a session from the current-user marker."""

    def test_resume_with_marker(self, kv):
        """Test that a new manager picks up the stored session."""
        first = SessionManager(UserStore(kv))
        first.login("alice", "pw1")
        first.create_client(bob())

        second = SessionManager(UserStore(kv))
        session = second.resume()
        assert session.username == "alice"
        assert session.resumed is True
        assert [c.name for c in second.list_clients()] == ["Bob"]

    def test_resume_without_marker(self, manager):
        """Test that nothing is restored when nobody was logged in."""
        assert manager.resume() is None
        assert manager.is_logged_in is False

    def test_resume_after_logout(self, kv, manager):
        """Test that logout prevents the next resume."""
        manager.login("alice", "pw1")
        manager.logout()
        assert SessionManager(UserStore(kv)).resume() is None


class TestCommands:
    """Tests for data commands and their persistence."""

    def test_commands_require_login(self, manager):
        """Test that mutations without a session are refused."""
        with pytest.raises(NoActiveSessionError):
            manager.create_client(bob())
        with pytest.raises(NoActiveSessionError):
            manager.toggle_project_completion(1)

    def test_every_command_saves(self, kv, manager):
        """Test that the stored blob always matches memory after a command."""
        manager.login("alice", "pw1")
        client = manager.create_client(bob())
        assert stored_blob(kv, "alice")["clients"][0]["name"] == "Bob"

        manager.update_client(client.model_copy(update={"phone": "777"}))
        assert stored_blob(kv, "alice")["clients"][0]["phone"] == "777"

        project = manager.create_project(site(client.id, status=ProjectStatus.PLANNING))
        assert stored_blob(kv, "alice")["projects"][0]["status"] == "Planning"

        manager.toggle_project_completion(project.id)
        assert stored_blob(kv, "alice")["projects"][0]["status"] == "Completed"

        manager.delete_project(project.id)
        manager.delete_client(client.id)
        assert stored_blob(kv, "alice") == {"clients": [], "projects": []}

    def test_update_unknown_id(self, manager):
        """Test that updating a missing record reports False."""
        manager.login("alice", "pw1")
        assert manager.update_client(Client(id=9, name="Ghost")) is False
        assert manager.delete_project(9) is False

    def test_toggle_twice_reopens(self, manager):
        """Test the Completed / In Progress round trip."""
        manager.login("alice", "pw1")
        project = manager.create_project(site(1))
        assert manager.toggle_project_completion(project.id).status == ProjectStatus.IN_PROGRESS
        assert manager.toggle_project_completion(project.id).status == ProjectStatus.COMPLETED

    def test_deleting_client_leaves_projects(self, manager):
        """Test that projects of a deleted client survive with a blank client name."""
        manager.login("alice", "pw1")
        client = manager.create_client(bob())
        project = manager.create_project(site(client.id))
        assert manager.client_name_for(project) == "Bob"

        manager.delete_client(client.id)
        assert manager.get_project(project.id) is not None
        assert manager.client_name_for(project) == ""

    def test_record_events_name_the_collection(self, kv):
        """Test that record events carry the collection's entity type."""
        activity = RecordingActivityLogger()
        manager = SessionManager(UserStore(kv), activity_logger=activity)
        manager.login("alice", "pw1")
        client = manager.create_client(bob())
        project = manager.create_project(site(client.id))
        manager.delete_project(project.id)
        assert activity.record_events == [
            ("created", "client", client.id),
            ("created", "project", project.id),
            ("deleted", "project", project.id),
        ]

    def test_list_projects_with_filters(self, manager):
        """Test that filters pass through to the collection."""
        manager.login("alice", "pw1")
        manager.create_project(site(1, name="cheap", fee=50))
        manager.create_project(site(1, name="ok", fee=200))
        filters = ProjectFilters(status="Completed", min_fee=100, max_fee=500)
        assert [p.name for p in manager.list_projects(filters)] == ["ok"]


class TestWriteFailure:
    """Tests for rollback when the data blob cannot be saved."""

    def test_failed_create_is_rolled_back(self):
        """Test that memory and storage stay in step after a failed write."""
        store = FailingStore()
        manager = SessionManager(UserStore(store))
        manager.login("alice", "pw1")
        manager.create_client(bob())

        store.fail_writes = True
        with pytest.raises(StorageWriteError):
            manager.create_client(ClientDraft(name="Dana"))

        assert [c.name for c in manager.list_clients()] == ["Bob"]
        assert len(stored_blob(store, "alice")["clients"]) == 1

    def test_unreadable_data_file_is_rolled_back(self, tmp_path):
        """Test that a data file which can no longer be read undoes the change."""
        path = tmp_path / "storage.json"
        manager = SessionManager(UserStore(JsonFileKeyValueStore(path)))
        manager.login("alice", "pw1")

        path.unlink()
        path.mkdir()
        with pytest.raises(StorageWriteError):
            manager.create_client(bob())
        assert manager.list_clients() == []

    def test_failed_toggle_is_rolled_back(self):
        """Test that a failed status change leaves the old status."""
        store = FailingStore()
        manager = SessionManager(UserStore(store))
        manager.login("alice", "pw1")
        project = manager.create_project(site(1))

        store.fail_writes = True
        with pytest.raises(StorageWriteError):
            manager.toggle_project_completion(project.id)
        assert manager.get_project(project.id).status == ProjectStatus.COMPLETED

        store.fail_writes = False
        manager.create_client(bob())
        assert manager.get_project(project.id).status == ProjectStatus.COMPLETED


class TestStatistics:
    """Tests for statistics through the manager."""

    def test_bob_site_example(self, manager):
        """Test headline figures and the quarter breakdown for one completed project."""
        manager.login("alice", "pw1")
        client = manager.create_client(bob())
        manager.create_project(site(client.id))

        stats = manager.dashboard_stats()
        assert stats.total_earnings == 1000
        assert stats.projects_completed == 1
        assert stats.total_clients == 1
        assert stats.average_project_value == 1000

        rows = manager.earnings("quarter", today=date(2024, 3, 20))
        assert [(r.period_label, r.earnings) for r in rows] == [("Mar 2024", 1000)]


class TestFactory:
    """Tests for building components from settings."""

    def test_memory_backend(self):
        """Test that the memory backend gives an in-memory store."""
        assert isinstance(create_store("memory"), InMemoryKeyValueStore)

    def test_json_file_backend(self, tmp_path):
        """Test that the file backend honours an explicit path."""
        store = create_store("json_file", data_file=tmp_path / "data.json")
        assert isinstance(store, JsonFileKeyValueStore)
        assert store.path == tmp_path / "data.json"

    def test_unknown_backend(self):
        """Test that an unknown backend name is rejected."""
        with pytest.raises(ValueError, match="Unknown storage backend"):
            create_store("sqlite")

    def test_create_app_components(self):
        """Test that the factory wires a working manager."""
        manager, user_store = create_app_components(store=InMemoryKeyValueStore())
        manager.login("alice", "pw1")
        assert user_store.get_current_user() == "alice"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
