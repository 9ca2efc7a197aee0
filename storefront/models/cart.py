"""Cart models"""

from typing import Optional
from pydantic import BaseModel, Field

from .product import Product


class CartLine(BaseModel):
    """Line in a shopping cart"""
    product_id: int
    quantity: int = Field(gt=0)


class HandoffLine(Product):
    """Cart line denormalized with its product, as handed to checkout"""
    quantity: int = Field(gt=0)

    @property
    def subtotal(self) -> float:
        return self.price * self.quantity


class CartView(BaseModel):
    """Catalog view API response"""
    session_id: str
    products: list[Product]
    lines: list[HandoffLine]
    item_count: int
    total: float
    message: Optional[str] = None
