"""Shared route dependencies"""

from typing import Optional

from fastapi import Depends, HTTPException

from ..core.config import settings
from ..core.session import session_manager, SessionManager, ViewSession, ViewKind
from ..core.storage import FileKeyValueStore, InMemoryKeyValueStore, KeyValueStore
from ..services.handoff import CartHandoff
from ..services.shop_client import ShopClient

# Initialize services (would be dependency injected in production)
shop_client: Optional[ShopClient] = None
handoff_store: Optional[KeyValueStore] = None


def get_shop_client() -> ShopClient:
    """Get or create the shop backend client"""
    global shop_client
    if shop_client is None:
        shop_client = ShopClient(
            base_url=settings.shop_api_base_url,
            catalog_path=settings.catalog_path,
            preference_path=settings.preference_path,
            timeout=settings.request_timeout,
        )
    return shop_client


def get_handoff() -> CartHandoff:
    """Get the cart hand-off over the configured store"""
    global handoff_store
    if handoff_store is None:
        if settings.handoff_store_path:
            handoff_store = FileKeyValueStore(settings.handoff_store_path)
        else:
            handoff_store = InMemoryKeyValueStore()
    return CartHandoff(handoff_store)


def get_session_manager() -> SessionManager:
    return session_manager


def _require_session(
    session_id: str,
    manager: SessionManager,
    kind: ViewKind,
) -> ViewSession:
    session = manager.get_session(session_id, kind=kind)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    session.touch()
    return session


def catalog_session(
    session_id: str,
    manager: SessionManager = Depends(get_session_manager),
) -> ViewSession:
    """Resolve a live catalog view"""
    return _require_session(session_id, manager, ViewKind.CATALOG)


def checkout_session(
    session_id: str,
    manager: SessionManager = Depends(get_session_manager),
) -> ViewSession:
    """Resolve a live checkout view"""
    return _require_session(session_id, manager, ViewKind.CHECKOUT)
