"""Catalog view routes"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from ..core.config import settings
from ..core.session import SessionManager, ViewSession, ViewKind
from ..models.cart import CartView
from ..services.cart_store import CartStore
from ..services.catalog import CatalogLoader
from ..services.shop_client import ShopClient
from .deps import catalog_session, get_session_manager, get_shop_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/sessions", tags=["Catalog"])


def require_cart(session: ViewSession) -> CartStore:
    if session.cart is None:
        raise HTTPException(status_code=409, detail="Catalog not loaded")
    return session.cart


def catalog_view(session: ViewSession, message: Optional[str] = None) -> CartView:
    """Render the catalog view state"""
    store = require_cart(session)
    return CartView(
        session_id=session.session_id,
        products=store.products,
        lines=store.snapshot(),
        item_count=store.item_count,
        total=store.total,
        message=message if message is not None else session.notifications.message,
    )


@router.post("", response_model=CartView)
async def open_catalog(
    manager: SessionManager = Depends(get_session_manager),
    client: ShopClient = Depends(get_shop_client),
):
    """Open a catalog view and load the products"""
    session = manager.create_session(
        ViewKind.CATALOG,
        notification_ttl=settings.catalog_notification_seconds,
    )
    loader = CatalogLoader(client, image_url_for=settings.image_url_for)
    store = await loader.load(session)
    if store is None:
        raise HTTPException(status_code=404, detail="Session closed")
    return catalog_view(session)


@router.get("/{session_id}", response_model=CartView)
async def get_catalog(session: ViewSession = Depends(catalog_session)):
    """Get the catalog view"""
    return catalog_view(session)


@router.get("/{session_id}/notification")
async def get_notification(session: ViewSession = Depends(catalog_session)):
    """Current notification of the view"""
    return {"message": session.notifications.message}


@router.delete("/{session_id}")
async def close_catalog(
    session_id: str,
    manager: SessionManager = Depends(get_session_manager),
):
    """Close a catalog view"""
    if manager.get_session(session_id, kind=ViewKind.CATALOG) and manager.delete_session(session_id):
        return {"message": "Session closed"}
    raise HTTPException(status_code=404, detail="Session not found")
