"""
Shop API Client

HTTP client for the shop backend: the product catalog and the payment
preference endpoint that yields the provider's redirect URL.
"""

import logging
from typing import Optional, Any

import httpx
from pydantic import TypeAdapter, ValidationError

from ..core.errors import CatalogUnavailable, GatewayError
from ..models.checkout import OrderRequest, PaymentPreference
from ..models.product import CatalogEntry

logger = logging.getLogger(__name__)

_catalog_adapter = TypeAdapter(list[CatalogEntry])


class ShopClient:
    """
    Client for the shop backend.

    Acts as both the catalog source and the payment gateway.
    """

    def __init__(
        self,
        base_url: str,
        catalog_path: str = "/productos/tienda",
        preference_path: str = "/mercadopago/preferencia",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize shop client.

        Args:
            base_url: Base URL of the shop backend
            catalog_path: Path of the catalog listing
            preference_path: Path that creates a payment preference
            timeout: Transport timeout in seconds
            transport: Optional httpx transport, mainly for tests
        """
        self.base_url = base_url.rstrip("/")
        self.catalog_path = catalog_path
        self.preference_path = preference_path
        self._http_client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        body: Optional[dict] = None,
    ) -> Any:
        """Make an HTTP request and decode the JSON body"""
        url = f"{self.base_url}{path}"

        response = await self._http_client.request(
            method=method,
            url=url,
            headers={"Accept": "application/json"},
            json=body,
        )

        if response.status_code >= 400:
            logger.error(f"Request failed: {response.status_code} - {response.text}")
            response.raise_for_status()

        return response.json()

    # ==================== Catalog ====================

    async def fetch_catalog(self) -> list[CatalogEntry]:
        """
        Fetch the product catalog.

        Raises:
            CatalogUnavailable: on transport, HTTP or decoding errors
        """
        try:
            data = await self._request("GET", self.catalog_path)
            return _catalog_adapter.validate_python(data)
        except (httpx.HTTPError, ValueError, ValidationError) as e:
            logger.error(f"Catalog fetch failed: {e}")
            raise CatalogUnavailable(str(e)) from e

    # ==================== Payment ====================

    async def create_preference(self, order: OrderRequest) -> PaymentPreference:
        """
        Ask the payment provider for a checkout preference.

        A response without ``init_point`` is returned as is; deciding what
        that means is up to the caller.

        Raises:
            GatewayError: on transport, HTTP or decoding errors
        """
        try:
            data = await self._request(
                "POST",
                self.preference_path,
                body=order.model_dump(),
            )
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Payment preference request failed: {e}")
            raise GatewayError(str(e)) from e

        if not isinstance(data, dict):
            logger.error(f"Unexpected payment preference response: {data!r}")
            return PaymentPreference()

        init_point = data.get("init_point")
        return PaymentPreference(init_point=init_point if isinstance(init_point, str) else None)
