# API Routes

from .catalog import router as catalog_router
from .cart import router as cart_router
from .checkout import router as checkout_router

__all__ = ["catalog_router", "cart_router", "checkout_router"]
