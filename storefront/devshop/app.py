"""
Development Shop Backend

A stand-in for the real shop backend: serves the product catalog and
answers payment preference requests with a fake provider link.
"""

import uuid
import logging

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from ..models.product import CatalogEntry

logger = logging.getLogger(__name__)

# Mock product catalog
PRODUCTS: list[CatalogEntry] = [
    CatalogEntry(id=1, nombre="Florero de cerámica", descripcion="Florero artesanal esmaltado.", precio=4500, stock=5),
    CatalogEntry(id=2, nombre="Vela aromática", descripcion="Vela de soja con aroma a lavanda.", precio=1800, stock=12),
    CatalogEntry(id=3, nombre="Almohadón bordado", descripcion="Funda de lino con bordado floral.", precio=6200, stock=3),
    CatalogEntry(id=4, nombre="Cuadro botánico", descripcion="Lámina enmarcada 30x40.", precio=8900, stock=0),
]


class PreferenceItem(BaseModel):
    producto_id: int
    name: str
    price: float = Field(ge=0)
    cantidad: int = Field(gt=0)


class PreferenceRequest(BaseModel):
    cliente: str
    email: str
    items: list[PreferenceItem]


app = FastAPI(
    title="Development Shop",
    description="Catalog and payment preference stand-in for local development",
    version="1.0.0",
)


@app.get("/productos/tienda", response_model=list[CatalogEntry])
async def list_products():
    """Catalog listing"""
    return PRODUCTS


@app.post("/mercadopago/preferencia")
async def create_preference(request: PreferenceRequest):
    """Create a fake payment preference"""
    if not request.items:
        raise HTTPException(status_code=400, detail="No items")

    total = sum(item.price * item.cantidad for item in request.items)
    preference_id = uuid.uuid4().hex[:12]
    logger.info(f"Preference {preference_id} for {request.cliente}: ${total}")
    return {
        "id": preference_id,
        "init_point": f"https://sandbox.example.com/checkout?pref_id={preference_id}",
    }
