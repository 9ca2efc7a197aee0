"""Cart routes for the catalog view"""

import logging
from typing import Callable

from fastapi import APIRouter, HTTPException, Depends

from ..core.errors import OutOfStock, ProductNotFound
from ..core.session import ViewSession
from ..models.cart import CartView
from ..services.cart_store import CartStore
from ..services.handoff import CartHandoff
from .catalog import catalog_view, require_cart
from .deps import catalog_session, get_handoff

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/sessions/{session_id}", tags=["Cart"])

EMPTY_CART = "Your cart is empty"


def _reserve(
    session: ViewSession,
    product_id: int,
    action: Callable[[CartStore, int], object],
) -> CartView:
    """Run add/increment and report the outcome through the view's notifications"""
    store = require_cart(session)
    try:
        action(store, product_id)
    except ProductNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except OutOfStock as e:
        session.notifications.notify(e.message)
        raise HTTPException(status_code=409, detail=e.message)

    product = store.get_product(product_id)
    session.notifications.notify(f"{product.name} added to cart")
    return catalog_view(session)


@router.post("/cart/items/{product_id}", response_model=CartView)
async def add_to_cart(
    product_id: int,
    session: ViewSession = Depends(catalog_session),
):
    """Add one unit of a product to the cart"""
    return _reserve(session, product_id, CartStore.add_item)


@router.post("/cart/items/{product_id}/increment", response_model=CartView)
async def increment_item(
    product_id: int,
    session: ViewSession = Depends(catalog_session),
):
    """Add one more unit of a cart line"""
    return _reserve(session, product_id, CartStore.increment)


@router.post("/cart/items/{product_id}/decrement", response_model=CartView)
async def decrement_item(
    product_id: int,
    session: ViewSession = Depends(catalog_session),
):
    """Return one unit of a cart line to stock"""
    require_cart(session).decrement(product_id)
    return catalog_view(session)


@router.delete("/cart/items/{product_id}", response_model=CartView)
async def remove_from_cart(
    product_id: int,
    session: ViewSession = Depends(catalog_session),
):
    """Remove a whole line from the cart"""
    require_cart(session).remove_item(product_id)
    return catalog_view(session)


@router.delete("/cart", response_model=CartView)
async def clear_cart(session: ViewSession = Depends(catalog_session)):
    """Empty the cart"""
    require_cart(session).clear()
    return catalog_view(session)


@router.post("/handoff")
async def hand_off_cart(
    session: ViewSession = Depends(catalog_session),
    handoff: CartHandoff = Depends(get_handoff),
):
    """Persist the cart for the checkout view"""
    store = require_cart(session)
    if store.is_empty:
        session.notifications.notify(EMPTY_CART)
        raise HTTPException(status_code=422, detail=EMPTY_CART)

    handoff.save(store.snapshot())
    return {"message": "Cart handed off", "checkout": "/api/checkout"}
