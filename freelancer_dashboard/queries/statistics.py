"""
Statistics Engine

DESIGN DECISION: Statistics are DETERMINISTIC and stateless.
Every figure is recomputed from the full client and project lists each
time it is asked for. Nothing is cached and nothing is stored, so the
numbers can never drift from the records they describe.

Only Completed projects count as earnings. A project's deadline is the
date its earnings are booked on.
"""

from datetime import date
from typing import Iterable, Optional

from freelancer_dashboard.models.client import Client
from freelancer_dashboard.models.project import Project, ProjectStatus
from freelancer_dashboard.models.statistics import (
    DashboardStats,
    EarningsRow,
    TimeFilter,
)


def completed_projects(projects: Iterable[Project]) -> list[Project]:
    return [project for project in projects if project.status == ProjectStatus.COMPLETED]


def compute_dashboard_stats(
    clients: Iterable[Client],
    projects: Iterable[Project],
) -> DashboardStats:
    """
    Compute the headline figures.

    total_clients counts client records. active_clients (distinct client
    ids referenced by any project) is reported alongside it and does not
    replace it.
    """
    clients = list(clients)
    projects = list(projects)

    completed = completed_projects(projects)
    total_earnings = sum(project.fee for project in completed)
    projects_completed = len(completed)

    if projects_completed > 0:
        average_project_value = total_earnings / projects_completed
    else:
        average_project_value = 0

    return DashboardStats(
        total_earnings=total_earnings,
        projects_completed=projects_completed,
        total_clients=len(clients),
        average_project_value=average_project_value,
        active_clients=len({project.client_id for project in projects}),
    )


def quarter_months(month: int) -> range:
    """The three months of the calendar quarter containing `month`."""
    first = (month - 1) // 3 * 3 + 1
    return range(first, first + 3)


def in_time_window(deadline: date, time_filter: TimeFilter, today: date) -> bool:
    """Check whether a deadline falls in the window relative to today."""
    if time_filter == TimeFilter.ALL:
        return True
    if deadline.year != today.year:
        return False
    if time_filter == TimeFilter.YEAR:
        return True
    if time_filter == TimeFilter.QUARTER:
        return deadline.month in quarter_months(today.month)
    if time_filter == TimeFilter.MONTH:
        return deadline.month == today.month
    return False


def earnings_by_period(
    projects: Iterable[Project],
    time_filter: TimeFilter | str = TimeFilter.ALL,
    today: Optional[date] = None,
) -> list[EarningsRow]:
    """
    List the earnings of each Completed project inside the time window.

    Rows are not aggregated: two projects due in the same month give two
    rows. Order follows the project list.

    Args:
        projects: Projects to report on
        time_filter: all, year, quarter or month
        today: Reference date for the window, defaults to date.today()
    """
    time_filter = TimeFilter(time_filter)
    today = today or date.today()

    return [
        EarningsRow(
            year=project.deadline.year,
            month=project.deadline.month,
            earnings=project.fee,
        )
        for project in completed_projects(projects)
        if in_time_window(project.deadline, time_filter, today)
    ]


def format_currency(amount: float, symbol: str = "$", decimals: int = 0) -> str:
    """Format money with thousands separators, e.g. 1234.5 -> '$1,235'."""
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.{decimals}f}"
