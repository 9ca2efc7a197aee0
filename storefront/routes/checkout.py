"""Checkout view routes"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Depends, Response

from ..core.config import settings
from ..core.session import SessionManager, ViewSession, ViewKind
from ..models.checkout import CheckoutState, CheckoutView, FormUpdateRequest
from ..services.checkout import CheckoutController, GATEWAY_UNREACHABLE, MISSING_REDIRECT
from ..services.handoff import CartHandoff
from ..services.shop_client import ShopClient
from .deps import checkout_session, get_handoff, get_session_manager, get_shop_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/checkout", tags=["Checkout"])


def require_controller(session: ViewSession) -> CheckoutController:
    if session.checkout is None:
        raise HTTPException(status_code=409, detail="Checkout not initialized")
    return session.checkout


def checkout_view(
    session: ViewSession,
    rejected_fields: Optional[list[str]] = None,
) -> CheckoutView:
    """Render the checkout view state"""
    controller = require_controller(session)
    return CheckoutView(
        session_id=session.session_id,
        state=controller.state,
        form=controller.form,
        lines=controller.lines,
        item_count=controller.item_count,
        total=controller.total,
        can_submit=controller.can_submit,
        redirect_url=controller.redirect_url,
        rejected_fields=rejected_fields or [],
        message=session.notifications.message,
    )


@router.post("", response_model=CheckoutView)
async def open_checkout(
    manager: SessionManager = Depends(get_session_manager),
    client: ShopClient = Depends(get_shop_client),
    handoff: CartHandoff = Depends(get_handoff),
):
    """Open a checkout view over the handed-off cart"""
    session = manager.create_session(
        ViewKind.CHECKOUT,
        notification_ttl=settings.checkout_notification_seconds,
    )
    session.checkout = CheckoutController(
        lines=handoff.load(),
        gateway=client,
        notifications=session.notifications,
        is_live=lambda: session.live,
    )
    return checkout_view(session)


@router.get("/{session_id}", response_model=CheckoutView)
async def get_checkout(session: ViewSession = Depends(checkout_session)):
    """Get the checkout view"""
    return checkout_view(session)


@router.put("/{session_id}/form", response_model=CheckoutView)
async def update_form(
    request: FormUpdateRequest,
    session: ViewSession = Depends(checkout_session),
):
    """
    Update customer fields.

    Names containing anything other than letters and spaces are rejected
    and keep their previous value.
    """
    controller = require_controller(session)
    setters = {
        "first_name": controller.set_first_name,
        "last_name": controller.set_last_name,
        "email": controller.set_email,
    }

    rejected = [
        field
        for field, value in request.model_dump(exclude_none=True).items()
        if not setters[field](value)
    ]
    return checkout_view(session, rejected_fields=rejected)


@router.post("/{session_id}/submit", response_model=CheckoutView)
async def submit_checkout(
    response: Response,
    session: ViewSession = Depends(checkout_session),
):
    """
    Submit the order to the payment provider.

    On success the view carries the provider's redirect URL.
    """
    controller = require_controller(session)
    outcome = await controller.submit()

    if outcome == CheckoutState.FAILED:
        if controller.last_error in (GATEWAY_UNREACHABLE, MISSING_REDIRECT):
            response.status_code = 502
        else:
            response.status_code = 422
    elif outcome == CheckoutState.SUBMITTING:
        response.status_code = 409

    return checkout_view(session)


@router.delete("/{session_id}")
async def close_checkout(
    session_id: str,
    manager: SessionManager = Depends(get_session_manager),
):
    """Close a checkout view"""
    if manager.get_session(session_id, kind=ViewKind.CHECKOUT) and manager.delete_session(session_id):
        return {"message": "Session closed"}
    raise HTTPException(status_code=404, detail="Session not found")
