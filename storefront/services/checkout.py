"""
Checkout Controller

Drives one checkout attempt:
1. Filters customer input as it is entered
2. Validates the form and cart on submit
3. Builds the order request and calls the payment gateway
4. Hands the returned redirect URL to the navigator
"""

import asyncio
import logging
from typing import Callable, Optional, Protocol

from ..core.errors import CheckoutValidationError, GatewayError
from ..core.notifications import NotificationChannel
from ..models.cart import HandoffLine
from ..models.checkout import (
    CheckoutForm,
    CheckoutState,
    OrderItem,
    OrderRequest,
    PaymentPreference,
)
from .validation import accepts_name_input, is_submittable, validate_checkout

logger = logging.getLogger(__name__)

GATEWAY_UNREACHABLE = "Could not connect to the payment provider"
MISSING_REDIRECT = "The payment provider did not return a payment link"


class PaymentGateway(Protocol):
    async def create_preference(self, order: OrderRequest) -> PaymentPreference: ...


def build_order(form: CheckoutForm, lines: list[HandoffLine]) -> OrderRequest:
    """Snapshot the form and cart into a payment request"""
    return OrderRequest(
        cliente=form.full_name,
        email=form.email,
        items=[
            OrderItem(
                producto_id=line.id,
                name=line.name,
                price=line.price,
                cantidad=line.quantity,
            )
            for line in lines
        ],
    )


class CheckoutController:
    """
    Checkout submission state machine.

    EDITING -> VALIDATING -> SUBMITTING -> REDIRECTING, with FAILED as a
    transient state on the way back to EDITING. The cart and form are
    never cleared by a failure.
    """

    def __init__(
        self,
        lines: list[HandoffLine],
        gateway: PaymentGateway,
        notifications: NotificationChannel,
        navigate: Optional[Callable[[str], None]] = None,
        is_live: Callable[[], bool] = lambda: True,
    ):
        self.lines = lines
        self.gateway = gateway
        self.notifications = notifications
        self.navigate = navigate
        self.is_live = is_live
        self.form = CheckoutForm()
        self.state = CheckoutState.EDITING
        self.redirect_url: Optional[str] = None
        self.last_error: Optional[str] = None

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    @property
    def total(self) -> float:
        return sum(line.subtotal for line in self.lines)

    @property
    def can_submit(self) -> bool:
        """Whether the submit trigger is enabled"""
        return self.state == CheckoutState.EDITING and is_submittable(self.form, self.lines)

    # ==================== Input ====================

    def set_first_name(self, value: str) -> bool:
        """Take the typed value unless it contains a disallowed character"""
        return self._set_name("first_name", value)

    def set_last_name(self, value: str) -> bool:
        return self._set_name("last_name", value)

    def set_email(self, value: str) -> bool:
        if not self._editable():
            return False
        self.form = self.form.model_copy(update={"email": value})
        return True

    def _set_name(self, field: str, value: str) -> bool:
        if not self._editable() or not accepts_name_input(value):
            return False
        self.form = self.form.model_copy(update={field: value})
        return True

    def _editable(self) -> bool:
        return self.state == CheckoutState.EDITING

    # ==================== Submission ====================

    async def submit(self) -> CheckoutState:
        """
        Run one submission attempt.

        Returns REDIRECTING or FAILED for a completed attempt. A submit
        while another is in flight (or after redirecting) is ignored and
        the current state is returned. If the view closed while the gateway
        call was pending, the response is dropped and SUBMITTING is
        returned.
        """
        if self.state != CheckoutState.EDITING:
            logger.info(f"Ignoring submit while {self.state.value}")
            return self.state

        self.state = CheckoutState.VALIDATING
        self.last_error = None
        try:
            validate_checkout(self.form, self.lines)
        except CheckoutValidationError as e:
            logger.info(f"Checkout validation failed on {e.field}: {e.message}")
            return self._fail(e.message)

        order = build_order(self.form, self.lines)
        self.state = CheckoutState.SUBMITTING
        logger.info(f"Submitting order with {len(order.items)} items")

        try:
            preference = await self.gateway.create_preference(order)
        except asyncio.CancelledError:
            self.state = CheckoutState.EDITING
            raise
        except GatewayError as e:
            if not self.is_live():
                logger.debug("Dropping gateway failure for a closed checkout view")
                return self.state
            logger.error(f"Payment gateway failed: {e}")
            return self._fail(GATEWAY_UNREACHABLE)
        except Exception as e:
            if not self.is_live():
                logger.debug("Dropping gateway failure for a closed checkout view")
                return self.state
            logger.error(f"Unexpected payment gateway error: {e}", exc_info=True)
            return self._fail(GATEWAY_UNREACHABLE)

        if not self.is_live():
            logger.debug("Dropping gateway response for a closed checkout view")
            return self.state

        if not preference.init_point:
            logger.error("Payment gateway response has no init_point")
            return self._fail(MISSING_REDIRECT)

        self.state = CheckoutState.REDIRECTING
        self.redirect_url = preference.init_point
        logger.info(f"Redirecting to payment provider: {self.redirect_url}")
        if self.navigate:
            self.navigate(self.redirect_url)
        return self.state

    def _fail(self, reason: str) -> CheckoutState:
        self.state = CheckoutState.FAILED
        self.last_error = reason
        self.notifications.notify(reason)
        self.state = CheckoutState.EDITING
        return CheckoutState.FAILED
