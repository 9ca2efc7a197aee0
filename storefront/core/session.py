"""View session management"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional, TYPE_CHECKING
from dataclasses import dataclass, field
from enum import Enum

from .config import settings
from .notifications import NotificationChannel

if TYPE_CHECKING:
    from ..services.cart_store import CartStore
    from ..services.checkout import CheckoutController

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ViewKind(str, Enum):
    """Which view a session backs"""
    CATALOG = "catalog"
    CHECKOUT = "checkout"


@dataclass
class ViewSession:
    """
    State owned by one live view.

    A view stays live until it is closed. Anything that completes after
    that (a catalog fetch, a payment call) must check ``live`` before
    touching the session.
    """
    session_id: str
    kind: ViewKind
    created_at: datetime
    updated_at: datetime
    notifications: NotificationChannel = field(default_factory=NotificationChannel)
    cart: Optional["CartStore"] = None
    checkout: Optional["CheckoutController"] = None
    live: bool = True
    load_generation: int = 0

    def touch(self) -> None:
        self.updated_at = _now()

    def begin_load(self) -> int:
        """Start a new catalog load and return its token"""
        self.load_generation += 1
        return self.load_generation

    def is_current(self, token: int) -> bool:
        """True if a load started with ``token`` may still be applied"""
        return self.live and token == self.load_generation

    def close(self) -> None:
        """Tear the view down"""
        self.live = False
        self.notifications.dismiss()


class SessionManager:
    """Manages view sessions"""

    def __init__(self, max_idle_seconds: Optional[float] = None):
        self.sessions: dict[str, ViewSession] = {}
        self.max_idle_seconds = max_idle_seconds

    def create_session(
        self,
        kind: ViewKind,
        notification_ttl: float = 1.0,
    ) -> ViewSession:
        """Create a new view session, closing idle ones first"""
        self.cleanup_old_sessions()
        now = _now()
        session = ViewSession(
            session_id=str(uuid.uuid4()),
            kind=kind,
            created_at=now,
            updated_at=now,
            notifications=NotificationChannel(ttl=notification_ttl),
        )
        self.sessions[session.session_id] = session
        return session

    def get_session(
        self,
        session_id: str,
        kind: Optional[ViewKind] = None,
    ) -> Optional[ViewSession]:
        """Get a live session by ID, optionally of a given kind"""
        session = self.sessions.get(session_id)
        if session is None or (kind is not None and session.kind != kind):
            return None
        return session

    def delete_session(self, session_id: str) -> bool:
        """Close and forget a session"""
        session = self.sessions.pop(session_id, None)
        if session is None:
            return False
        session.close()
        return True

    def cleanup_old_sessions(self) -> int:
        """Close sessions idle for longer than max_idle_seconds"""
        if self.max_idle_seconds is None:
            return 0
        now = _now()
        old_sessions = [
            sid for sid, session in self.sessions.items()
            if (now - session.updated_at).total_seconds() > self.max_idle_seconds
        ]
        for sid in old_sessions:
            self.delete_session(sid)
        if old_sessions:
            logger.info(f"Closed {len(old_sessions)} idle sessions")
        return len(old_sessions)


# Singleton instance
session_manager = SessionManager(max_idle_seconds=settings.session_max_idle_seconds)
