"""
Required-Field Form Validation

DESIGN DECISION: Validation stops at "is every required field filled in".
Formats (email, phone), fee sign and deadline plausibility are not
checked. The validator reports issues for the form to show, it never
fixes or rejects data on its own, and the session commands do not call it.
"""

from datetime import date
from typing import Any, Optional

from freelancer_dashboard.models.validation import ValidationIssue, ValidationResult


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


class FormValidator:
    """Checks the login, client and project forms for missing fields."""

    def _required(self, fields: dict[str, tuple[Any, str]]) -> list[ValidationIssue]:
        issues = []
        for field, (value, label) in fields.items():
            if _is_blank(value):
                issues.append(ValidationIssue(
                    field=field,
                    issue_type="missing",
                    message=f"{label} is required",
                    suggested_fix=f"Please fill in {label.lower()}",
                ))
        return issues

    def validate_login(self, username: str, password: str) -> ValidationResult:
        return ValidationResult(
            form="login",
            issues=self._required({
                "username": (username, "Username"),
                "password": (password, "Password"),
            }),
        )

    def validate_client(
        self,
        name: str,
        email: str,
        phone: str,
    ) -> ValidationResult:
        """Name, email and phone are required; lead source is optional."""
        return ValidationResult(
            form="client",
            issues=self._required({
                "name": (name, "Client name"),
                "email": (email, "Email"),
                "phone": (phone, "Phone"),
            }),
        )

    def validate_project(
        self,
        name: str,
        deadline: Optional[date],
        fee: Optional[float],
        client_id: Optional[int] = None,
    ) -> ValidationResult:
        """
        Name, deadline and fee are required.

        A missing client only produces a warning: a project may point at
        no client, or at one that no longer exists.
        """
        issues = self._required({
            "name": (name, "Project name"),
            "deadline": (deadline, "Deadline"),
            "fee": (fee, "Project fee"),
        })
        if client_id is None:
            issues.append(ValidationIssue(
                field="client_id",
                issue_type="missing",
                message="No client selected",
                severity="warning",
            ))
        return ValidationResult(form="project", issues=issues)
