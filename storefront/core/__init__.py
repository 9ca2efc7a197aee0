# Core modules

from .config import settings, get_settings
from .notifications import NotificationChannel
from .session import SessionManager, ViewSession, ViewKind

__all__ = [
    "settings",
    "get_settings",
    "NotificationChannel",
    "SessionManager",
    "ViewSession",
    "ViewKind",
]
