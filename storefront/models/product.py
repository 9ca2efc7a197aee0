"""Product models"""

from pydantic import BaseModel, Field


class Product(BaseModel):
    """
    Product in the catalog.

    ``stock`` counts units not currently reserved by the cart and is only
    changed through the cart store.
    """
    id: int
    name: str
    description: str = ""
    price: float = Field(ge=0)
    stock: int = Field(ge=0)
    image_url: str = ""


class CatalogEntry(BaseModel):
    """Product as returned by the shop backend"""
    id: int
    nombre: str
    descripcion: str = ""
    precio: float = Field(ge=0)
    stock: int = Field(ge=0)

    def to_product(self, image_url: str = "") -> Product:
        return Product(
            id=self.id,
            name=self.nombre,
            description=self.descripcion,
            price=self.precio,
            stock=self.stock,
            image_url=image_url,
        )
