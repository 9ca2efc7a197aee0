"""Storefront exceptions"""

from typing import Optional


class StorefrontError(Exception):
    """Base exception for storefront errors"""
    pass


class ProductNotFound(StorefrontError):
    """Cart operation referenced a product missing from the catalog"""

    def __init__(self, product_id: int):
        super().__init__(f"Product {product_id} not found")
        self.product_id = product_id


class OutOfStock(StorefrontError):
    """Cart mutation would take more units than are available"""

    message = "No stock available"

    def __init__(self, product_id: int, name: Optional[str] = None):
        super().__init__(self.message)
        self.product_id = product_id
        self.name = name


class CheckoutValidationError(StorefrontError):
    """Checkout form or cart failed validation"""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


class GatewayError(StorefrontError):
    """Payment gateway call failed or returned no redirect URL"""
    pass


class CatalogUnavailable(StorefrontError):
    """Catalog fetch failed"""
    pass


class StaleResponse(StorefrontError):
    """A response arrived after its view stopped being live"""
    pass
