# Storefront Models

from .product import Product, CatalogEntry
from .cart import CartLine, HandoffLine, CartView
from .checkout import (
    CheckoutState,
    CheckoutForm,
    OrderItem,
    OrderRequest,
    PaymentPreference,
    FormUpdateRequest,
    CheckoutView,
)

__all__ = [
    "Product",
    "CatalogEntry",
    "CartLine",
    "HandoffLine",
    "CartView",
    "CheckoutState",
    "CheckoutForm",
    "OrderItem",
    "OrderRequest",
    "PaymentPreference",
    "FormUpdateRequest",
    "CheckoutView",
]
