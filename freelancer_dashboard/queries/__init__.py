"""Statistics package."""

from freelancer_dashboard.queries.statistics import (
    compute_dashboard_stats,
    earnings_by_period,
    format_currency,
)

__all__ = ["compute_dashboard_stats", "earnings_by_period", "format_currency"]
