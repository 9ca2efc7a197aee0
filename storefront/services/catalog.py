"""Catalog loading into a view session"""

import logging
from typing import Callable, Optional, Protocol

from ..core.errors import CatalogUnavailable, StaleResponse
from ..core.session import ViewSession
from ..models.product import CatalogEntry
from .cart_store import CartStore

logger = logging.getLogger(__name__)

CATALOG_UNAVAILABLE = "Could not load products"


class CatalogSource(Protocol):
    async def fetch_catalog(self) -> list[CatalogEntry]: ...


class CatalogLoader:
    """
    Fetches the catalog and installs it as the session's cart store.

    A response is only applied if its view is still live and no newer
    load was started for it in the meantime.
    """

    def __init__(
        self,
        source: CatalogSource,
        image_url_for: Callable[[int], str] = lambda product_id: "",
    ):
        self.source = source
        self.image_url_for = image_url_for

    async def load(self, session: ViewSession) -> Optional[CartStore]:
        """
        Load the catalog into ``session``.

        Returns the new cart store, or None if the response was stale and
        dropped. A failed fetch leaves the view with an empty catalog.
        """
        token = session.begin_load()
        try:
            entries = await self._fetch(session, token)
        except StaleResponse:
            logger.debug(f"Dropped stale catalog response for session {session.session_id}")
            return None
        except CatalogUnavailable:
            return self._empty(session)

        try:
            store = CartStore(
                entry.to_product(image_url=self.image_url_for(entry.id))
                for entry in entries
            )
        except ValueError as e:
            logger.error(f"Rejected catalog for session {session.session_id}: {e}")
            return self._empty(session)

        session.cart = store
        session.touch()
        logger.info(f"Loaded {len(entries)} products into session {session.session_id}")
        return session.cart

    def _empty(self, session: ViewSession) -> CartStore:
        session.cart = CartStore()
        session.notifications.notify(CATALOG_UNAVAILABLE)
        return session.cart

    async def _fetch(self, session: ViewSession, token: int) -> list[CatalogEntry]:
        try:
            entries = await self.source.fetch_catalog()
        except CatalogUnavailable:
            if not session.is_current(token):
                raise StaleResponse(session.session_id)
            raise
        if not session.is_current(token):
            raise StaleResponse(session.session_id)
        return entries
