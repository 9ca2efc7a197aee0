from typing import Optional

import pytest
from fastapi.testclient import TestClient

from storefront.core.notifications import NotificationChannel
from storefront.core.session import SessionManager
from storefront.core.storage import InMemoryKeyValueStore
from storefront.models import CatalogEntry, PaymentPreference, Product
from storefront.services import CartHandoff, CartStore


class FakeShop:
    """Catalog source and payment gateway double"""

    def __init__(
        self,
        catalog: Optional[list[CatalogEntry]] = None,
        preference: Optional[dict] = None,
        error: Optional[Exception] = None,
    ):
        self.catalog = catalog if catalog is not None else []
        self.preference = {"init_point": "https://pay.example.com/p/1"} if preference is None else preference
        self.error = error
        self.catalog_error: Optional[Exception] = None
        self.orders = []

    async def fetch_catalog(self) -> list[CatalogEntry]:
        if self.catalog_error:
            raise self.catalog_error
        return [entry.model_copy() for entry in self.catalog]

    async def create_preference(self, order) -> PaymentPreference:
        self.orders.append(order)
        if self.error:
            raise self.error
        return PaymentPreference(init_point=self.preference.get("init_point"))


def make_products() -> list[Product]:
    return [
        Product(id=1, name="Vase", description="Ceramic vase", price=10, stock=5),
        Product(id=2, name="Candle", description="Soy candle", price=4.5, stock=1),
        Product(id=3, name="Print", description="Botanical print", price=25, stock=0),
    ]


def make_catalog() -> list[CatalogEntry]:
    return [
        CatalogEntry(id=p.id, nombre=p.name, descripcion=p.description, precio=p.price, stock=p.stock)
        for p in make_products()
    ]


@pytest.fixture
def products():
    return make_products()


@pytest.fixture
def store(products):
    return CartStore(products)


@pytest.fixture
def notifications():
    return NotificationChannel(ttl=3.0)


@pytest.fixture
def shop():
    return FakeShop(catalog=make_catalog())


@pytest.fixture
def handoff_lines(store):
    store.add_item(1)
    store.add_item(1)
    store.add_item(2)
    return store.snapshot()


@pytest.fixture
def app_client(shop):
    """Storefront app wired to a fake shop, fresh sessions and hand-off store"""
    from storefront.main import app
    from storefront.routes import deps

    handoff = CartHandoff(InMemoryKeyValueStore())
    manager = SessionManager()

    app.dependency_overrides[deps.get_shop_client] = lambda: shop
    app.dependency_overrides[deps.get_handoff] = lambda: handoff
    app.dependency_overrides[deps.get_session_manager] = lambda: manager

    with TestClient(app) as client:
        client.handoff = handoff
        client.manager = manager
        yield client

    app.dependency_overrides.clear()
