"""Session and identity package."""

from freelancer_dashboard.session.manager import (
    AuthError,
    IncorrectPasswordError,
    NoActiveSessionError,
    SessionManager,
)
from freelancer_dashboard.session.state import AppState

__all__ = [
    "AppState",
    "AuthError",
    "IncorrectPasswordError",
    "NoActiveSessionError",
    "SessionManager",
]
