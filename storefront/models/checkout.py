"""Checkout models"""

from pydantic import BaseModel
from typing import Optional
from enum import Enum

from .cart import HandoffLine


class CheckoutState(str, Enum):
    EDITING = "editing"
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    REDIRECTING = "redirecting"
    FAILED = "failed"


class CheckoutForm(BaseModel):
    """Customer details entered on the checkout view"""
    first_name: str = ""
    last_name: str = ""
    email: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class OrderItem(BaseModel):
    """Item sent to the payment gateway"""
    producto_id: int
    name: str
    price: float
    cantidad: int


class OrderRequest(BaseModel):
    """Payment preference request"""
    cliente: str
    email: str
    items: list[OrderItem]

    class Config:
        frozen = True


class PaymentPreference(BaseModel):
    """Payment gateway response"""
    init_point: Optional[str] = None


class FormUpdateRequest(BaseModel):
    """Request to change checkout form fields"""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None


class CheckoutView(BaseModel):
    """Checkout view API response"""
    session_id: str
    state: CheckoutState
    form: CheckoutForm
    lines: list[HandoffLine]
    item_count: int
    total: float
    can_submit: bool
    redirect_url: Optional[str] = None
    rejected_fields: list[str] = []
    message: Optional[str] = None
