"""Cart store with stock reconciliation"""

import logging
from typing import Iterable, Optional

from ..core.errors import OutOfStock, ProductNotFound
from ..models.cart import CartLine, HandoffLine
from ..models.product import Product

logger = logging.getLogger(__name__)


class CartStore:
    """
    Owns the cart lines and the catalog's stock view together.

    Stock and cart quantity are two views of one quantity: for every product
    ``stock + quantity in cart`` equals the stock at catalog load. Every
    mutator updates both or neither.
    """

    def __init__(self, products: Iterable[Product] = ()):
        self._products: dict[int, Product] = {}
        self._baseline: dict[int, int] = {}
        self._lines: dict[int, CartLine] = {}

        for product in products:
            if product.id in self._products:
                raise ValueError(f"Duplicate product id {product.id}")
            self._products[product.id] = product
            self._baseline[product.id] = product.stock

    # ==================== Reads ====================

    @property
    def products(self) -> list[Product]:
        return list(self._products.values())

    @property
    def lines(self) -> list[CartLine]:
        return list(self._lines.values())

    @property
    def is_empty(self) -> bool:
        return not self._lines

    @property
    def item_count(self) -> int:
        """Units in the cart (the badge count)"""
        return sum(line.quantity for line in self._lines.values())

    @property
    def total(self) -> float:
        return sum(
            self._products[line.product_id].price * line.quantity
            for line in self._lines.values()
        )

    def get_product(self, product_id: int) -> Product:
        product = self._products.get(product_id)
        if product is None:
            raise ProductNotFound(product_id)
        return product

    def quantity_of(self, product_id: int) -> int:
        line = self._lines.get(product_id)
        return line.quantity if line else 0

    def baseline_stock(self, product_id: int) -> int:
        """Stock of a product when the catalog was loaded"""
        self.get_product(product_id)
        return self._baseline[product_id]

    def snapshot(self) -> list[HandoffLine]:
        """Cart lines denormalized with current product data"""
        return [
            HandoffLine(
                **self._products[line.product_id].model_dump(),
                quantity=line.quantity,
            )
            for line in self._lines.values()
        ]

    # ==================== Mutators ====================

    def add_item(self, product_id: int) -> CartLine:
        """Put one unit in the cart, creating the line if needed"""
        return self._reserve(product_id)

    def increment(self, product_id: int) -> CartLine:
        """Put one more unit of a product in the cart"""
        return self._reserve(product_id)

    def decrement(self, product_id: int) -> Optional[CartLine]:
        """
        Return one unit to stock.

        Removes the line when its last unit is returned and gives back
        ``None``. Decrementing a product not in the cart does nothing.
        """
        line = self._lines.get(product_id)
        if line is None:
            return None

        product = self._products[product_id]
        if line.quantity == 1:
            del self._lines[product_id]
            line = None
        else:
            line.quantity -= 1
        product.stock += 1
        return line

    def remove_item(self, product_id: int) -> None:
        """Return a whole line to stock"""
        line = self._lines.pop(product_id, None)
        if line is None:
            return
        self._products[product_id].stock += line.quantity

    def clear(self) -> None:
        """Return every line to stock and empty the cart"""
        for product_id, line in self._lines.items():
            self._products[product_id].stock += line.quantity
        self._lines.clear()

    def _reserve(self, product_id: int) -> CartLine:
        product = self.get_product(product_id)
        if product.stock <= 0:
            logger.debug(f"Product {product_id} is out of stock")
            raise OutOfStock(product_id, product.name)

        line = self._lines.get(product_id)
        if line is None:
            line = CartLine(product_id=product_id, quantity=1)
            self._lines[product_id] = line
        else:
            line.quantity += 1
        product.stock -= 1
        return line
