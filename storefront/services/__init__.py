# Storefront services

from .cart_store import CartStore
from .catalog import CatalogLoader
from .checkout import CheckoutController, PaymentGateway, build_order
from .handoff import CartHandoff, dump_cart, load_cart
from .shop_client import ShopClient

__all__ = [
    "CartStore",
    "CatalogLoader",
    "CheckoutController",
    "PaymentGateway",
    "build_order",
    "CartHandoff",
    "dump_cart",
    "load_cart",
    "ShopClient",
]
