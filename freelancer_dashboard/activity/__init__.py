"""Activity logging package."""

from freelancer_dashboard.activity.logger import ActivityLogger, configure_logging

__all__ = ["ActivityLogger", "configure_logging"]
