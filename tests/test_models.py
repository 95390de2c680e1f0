"""
Tests for Freelancer Dashboard

Test strategy:
1. Unit tests for individual components (models, collections, statistics)
2. Integration tests for the session manager over an in-memory store
3. File storage tests against pytest's tmp_path
"""

from datetime import date, timedelta

import pytest

from freelancer_dashboard.activity import ActivityLogger
from freelancer_dashboard.models.activity import (
    ActivityEventBuilder,
    ActivityEventType,
    ActivitySeverity,
)
from freelancer_dashboard.models.client import Client, ClientDraft, LeadSource
from freelancer_dashboard.models.project import (
    Project,
    ProjectDraft,
    ProjectFilters,
    ProjectStatus,
)
from freelancer_dashboard.models.statistics import EarningsRow, TimeFilter
from freelancer_dashboard.models.user_data import Session, UserData
from freelancer_dashboard.models.validation import ValidationIssue, ValidationResult


def make_project(**overrides) -> Project:
    fields = dict(
        id=1,
        name="Site",
        client_id=1,
        status=ProjectStatus.COMPLETED,
        deadline=date(2024, 3, 15),
        fee=1000,
    )
    fields.update(overrides)
    return Project(**fields)


class TestClientModels:
    """Tests for client models."""

    def test_client_creation(self):
        """Test Client model creation."""
        client = Client(id=1, name="Bob", email="b@x.com", phone="555", lead="Referral")
        assert client.name == "Bob"
        assert client.lead == LeadSource.REFERRAL

    def test_client_strips_whitespace(self):
        """Test that whitespace is stripped from text fields."""
        draft = ClientDraft(name="  Bob  ", email=" b@x.com ")
        assert draft.name == "Bob"
        assert draft.email == "b@x.com"

    def test_empty_lead_is_none(self):
        """Test that a record saved without a lead source still loads."""
        client = Client.model_validate(
            {"id": 2, "name": "Ann", "email": "", "phone": "", "lead": ""}
        )
        assert client.lead is None

    def test_unknown_lead_rejected(self):
        """Test that lead must be one of the known sources."""
        with pytest.raises(ValueError):
            ClientDraft(name="Bob", lead="Billboard")

    def test_lead_values(self):
        """Test lead source display values."""
        assert [lead.value for lead in LeadSource] == [
            "LinkedIn", "Website", "Direct Email", "Referral", "Other",
        ]


class TestProjectModels:
    """Tests for project models."""

    def test_project_accepts_wire_names(self):
        """Test that stored camelCase keys are understood."""
        project = Project.model_validate({
            "id": 4,
            "name": "Logo",
            "clientId": 2,
            "status": "In Progress",
            "deadline": "2024-06-01",
            "fee": 250,
        })
        assert project.client_id == 2
        assert project.status == ProjectStatus.IN_PROGRESS
        assert project.deadline == date(2024, 6, 1)

    def test_project_dumps_wire_names(self):
        """Test that storage form uses camelCase and ISO dates."""
        data = UserData(projects=[make_project()]).to_storage_dict()
        stored = data["projects"][0]
        assert stored["clientId"] == 1
        assert stored["deadline"] == "2024-03-15"
        assert stored["status"] == "Completed"
        assert "client_id" not in stored

    def test_negative_fee_allowed(self):
        """Test that fee sign is not enforced."""
        assert make_project(fee=-10).fee == -10

    def test_invalid_status_rejected(self):
        """Test that status must be a known value."""
        with pytest.raises(ValueError):
            ProjectDraft(name="X", client_id=1, status="Paused", deadline=date(2024, 1, 1))

    def test_is_completed(self):
        """Test the is_completed helper."""
        assert make_project().is_completed is True
        assert make_project(status=ProjectStatus.PLANNING).is_completed is False


class TestProjectFilters:
    """Tests for project filter matching."""

    def test_all_strings_mean_unset(self):
        """Test that 'all' and '' are treated as no filter."""
        filters = ProjectFilters(status="all", clientId="all", minFee="", maxFee="")
        assert filters.status is None
        assert filters.client_id is None
        assert filters.min_fee is None
        assert filters.max_fee is None
        assert filters.matches(make_project())

    def test_fee_bounds_are_inclusive(self):
        """Test that both fee bounds include their edge values."""
        filters = ProjectFilters(min_fee=100, max_fee=500)
        assert filters.matches(make_project(fee=100))
        assert filters.matches(make_project(fee=500))
        assert not filters.matches(make_project(fee=99.99))
        assert not filters.matches(make_project(fee=500.01))

    def test_filters_are_anded(self):
        """Test that every set filter must match."""
        filters = ProjectFilters(status=ProjectStatus.COMPLETED, client_id=2)
        assert not filters.matches(make_project(client_id=1))
        assert not filters.matches(make_project(client_id=2, status=ProjectStatus.PLANNING))
        assert filters.matches(make_project(client_id=2))

    def test_fee_strings_are_parsed(self):
        """Test that numeric strings from text inputs are accepted."""
        filters = ProjectFilters(min_fee="100", max_fee="500")
        assert filters.min_fee == 100.0
        assert filters.max_fee == 500.0

    def test_non_numeric_fee_rejected(self):
        """Test that garbage in a fee filter is an error."""
        with pytest.raises(ValueError):
            ProjectFilters(min_fee="cheap")


class TestStatisticsModels:
    """Tests for statistics models."""

    def test_period_label(self):
        """Test month/year label formatting."""
        assert EarningsRow(year=2024, month=3, earnings=1000).period_label == "Mar 2024"

    def test_month_bounds(self):
        """Test that month must be 1-12."""
        with pytest.raises(ValueError):
            EarningsRow(year=2024, month=13, earnings=0)

    def test_time_filter_values(self):
        """Test time filter string values."""
        assert TimeFilter("quarter") == TimeFilter.QUARTER
        assert TimeFilter.ALL.value == "all"


class TestActivityModels:
    """Tests for activity event models."""

    def test_login_failed_is_warning(self):
        """Test that failed logins are logged as warnings."""
        event = ActivityEventBuilder.login_failed("alice")
        assert event.event_type == ActivityEventType.LOGIN_FAILED
        assert event.severity == ActivitySeverity.WARNING
        assert event.username == "alice"

    def test_resumed_login_event(self):
        """Test that a resumed session gets its own event type."""
        event = ActivityEventBuilder.login_succeeded("alice", resumed=True)
        assert event.event_type == ActivityEventType.SESSION_RESUMED

    def test_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = ActivityEventBuilder.record_deleted("alice", "client", 3, found=False)
        log_dict = event.to_log_dict()
        assert log_dict["event_type"] == "record_deleted"
        assert log_dict["entity_type"] == "client"
        assert log_dict["entity_id"] == 3
        assert log_dict["details"]["found"] is False

    def test_long_username_description(self):
        """Test that a description of any length is accepted."""
        event = ActivityEventBuilder.user_registered("a" * 600)
        assert event.username == "a" * 600
        assert "a" * 600 in event.description

    def test_timestamp_is_utc_aware(self):
        """Test that event timestamps carry the UTC offset."""
        event = ActivityEventBuilder.logged_out("alice")
        assert event.timestamp.utcoffset() == timedelta(0)
        assert Session(username="alice").started_at.tzinfo is not None

    def test_logger_never_raises_on_bad_event(self):
        """Test that an event which fails to build is dropped quietly."""
        ActivityLogger().log_record_created("alice", "client", "not a number")


class TestValidationResult:
    """Tests for ValidationResult model."""

    def test_validation_result_has_errors(self):
        """Test has_errors property."""
        result = ValidationResult(
            form="client",
            issues=[ValidationIssue(field="name", issue_type="missing", message="Client name is required")],
        )
        assert result.has_errors is True
        assert result.is_valid is False
        assert result.error_count == 1

    def test_validation_result_warnings_only(self):
        """Test that warnings don't count as errors."""
        result = ValidationResult(
            form="project",
            issues=[ValidationIssue(
                field="client_id",
                issue_type="missing",
                message="No client selected",
                severity="warning",
            )],
        )
        assert result.is_valid is True
        assert result.error_count == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
