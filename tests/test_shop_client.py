import json

import httpx
import pytest

from storefront.core.errors import CatalogUnavailable, GatewayError
from storefront.devshop import app as devshop_app
from storefront.models import OrderItem, OrderRequest
from storefront.services import ShopClient

ORDER = OrderRequest(
    cliente="Elizabeth Gómez",
    email="eli@example.com",
    items=[OrderItem(producto_id=1, name="Vase", price=10, cantidad=3)],
)


def client_for(handler) -> ShopClient:
    return ShopClient(base_url="http://shop.test/", transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_fetch_catalog_maps_backend_fields():
    def handler(request):
        assert request.method == "GET"
        assert request.url.path == "/productos/tienda"
        return httpx.Response(200, json=[
            {"id": 1, "nombre": "Vase", "descripcion": "Ceramic", "precio": 10, "stock": 5},
        ])

    client = client_for(handler)
    [entry] = await client.fetch_catalog()
    await client.close()

    product = entry.to_product(image_url="https://picsum.photos/400?1")
    assert (product.id, product.name, product.description, product.price, product.stock) == (
        1, "Vase", "Ceramic", 10, 5,
    )
    assert product.image_url == "https://picsum.photos/400?1"


@pytest.mark.asyncio
@pytest.mark.parametrize("response", [
    httpx.Response(500, text="boom"),
    httpx.Response(200, text="<html>"),
    httpx.Response(200, json=[{"id": 1}]),
])
async def test_fetch_catalog_failures(response):
    client = client_for(lambda request: response)

    with pytest.raises(CatalogUnavailable):
        await client.fetch_catalog()


@pytest.mark.asyncio
async def test_create_preference_posts_order_body():
    seen = {}

    def handler(request):
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"init_point": "https://pay.example.com/p/9"})

    client = client_for(handler)
    preference = await client.create_preference(ORDER)

    assert preference.init_point == "https://pay.example.com/p/9"
    assert seen["path"] == "/mercadopago/preferencia"
    assert seen["body"] == {
        "cliente": "Elizabeth Gómez",
        "email": "eli@example.com",
        "items": [{"producto_id": 1, "name": "Vase", "price": 10.0, "cantidad": 3}],
    }


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{}, {"init_point": None}, {"init_point": 3}, []])
async def test_create_preference_without_init_point(body):
    client = client_for(lambda request: httpx.Response(200, json=body))

    preference = await client.create_preference(ORDER)

    assert preference.init_point is None


@pytest.mark.asyncio
async def test_create_preference_network_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = client_for(handler)

    with pytest.raises(GatewayError):
        await client.create_preference(ORDER)


@pytest.mark.asyncio
async def test_create_preference_http_error():
    client = client_for(lambda request: httpx.Response(502, json={"detail": "bad gateway"}))

    with pytest.raises(GatewayError):
        await client.create_preference(ORDER)


@pytest.mark.asyncio
async def test_against_development_shop():
    client = ShopClient(
        base_url="http://devshop",
        transport=httpx.ASGITransport(app=devshop_app),
    )

    entries = await client.fetch_catalog()
    preference = await client.create_preference(ORDER)
    await client.close()

    assert [entry.id for entry in entries] == [1, 2, 3, 4]
    assert preference.init_point.startswith("https://sandbox.example.com/checkout?pref_id=")
