"""Transient user-facing notifications"""

import asyncio
import logging
from collections import deque
from typing import Optional

logger = logging.getLogger(__name__)

HISTORY_SIZE = 20


class NotificationChannel:
    """
    Holds the single message currently shown to the user.

    Each message is dismissed automatically after ``ttl`` seconds. A new
    message cancels the pending dismissal of the previous one, so the old
    timer can never clear the newer message.
    """

    def __init__(self, ttl: float = 1.0):
        self.ttl = ttl
        self.message: Optional[str] = None
        self.history: deque[str] = deque(maxlen=HISTORY_SIZE)
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def pending(self) -> bool:
        """True while an auto-dismiss timer is scheduled"""
        return self._handle is not None

    def notify(self, message: str, ttl: Optional[float] = None) -> None:
        """Show a message, superseding any current one"""
        self._cancel_timer()
        self.message = message
        self.history.append(message)
        logger.debug(f"Notification: {message}")

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No event loop: the message stays until dismissed explicitly
            return

        self._handle = loop.call_later(
            self.ttl if ttl is None else ttl,
            self._expire,
        )

    def dismiss(self) -> None:
        """Clear the current message and cancel its timer"""
        self._cancel_timer()
        self.message = None

    def _expire(self) -> None:
        self._handle = None
        self.message = None

    def _cancel_timer(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
