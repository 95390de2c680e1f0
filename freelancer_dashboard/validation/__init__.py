"""Form validation package."""

from freelancer_dashboard.validation.validator import FormValidator

__all__ = ["FormValidator"]
