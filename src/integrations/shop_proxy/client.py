"""
HTTP client for the shop proxy server.
"""

import logging
from typing import Any, Optional, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from src.config import settings
from src.core.errors import PlatformSwitchError, ServerRejection, TransportFailure
from src.integrations.shop_proxy.base import BaseShopProxy
from src.integrations.shop_proxy.schemas import (
    AddToCartRequest,
    AddToCartResponse,
    CartUrlResponse,
    HealthResponse,
    SwitchPlatformRequest,
    SwitchPlatformResponse,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class HttpShopProxy(BaseShopProxy):
    """Shop proxy over HTTP/JSON."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.shop_proxy_url).rstrip("/")
        self.timeout = timeout or settings.request_timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
                headers={"Content-Type": "application/json"},
            )
        return self._client

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send a request, turning network errors into TransportFailure."""
        try:
            return await self.client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            message = str(e) or e.__class__.__name__
            logger.warning(f"Shop proxy {method} {path} failed: {message}")
            raise TransportFailure(message) from e

    @staticmethod
    def _json(response: httpx.Response) -> dict[str, Any]:
        """Decode a JSON object body."""
        try:
            data = response.json()
        except ValueError as e:
            raise TransportFailure(
                f"Invalid JSON from shop proxy (HTTP {response.status_code})",
                status_code=response.status_code,
            ) from e

        if not isinstance(data, dict):
            raise TransportFailure(
                f"Unexpected payload from shop proxy (HTTP {response.status_code})",
                status_code=response.status_code,
            )
        return data

    @classmethod
    def _parse(cls, model: type[ModelT], response: httpx.Response) -> ModelT:
        """Decode and validate a response body."""
        data = cls._json(response)
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise TransportFailure(
                f"Malformed {model.__name__} from shop proxy: {e.error_count()} error(s)",
                status_code=response.status_code,
            ) from e

    async def health(self) -> HealthResponse:
        response = await self._request("GET", "/health")

        if not response.is_success:
            raise TransportFailure(
                f"Server responded with status: {response.status_code}",
                status_code=response.status_code,
            )

        return self._parse(HealthResponse, response)

    async def switch_platform(self, platform: str) -> str:
        body = SwitchPlatformRequest(platform=platform).model_dump()
        response = await self._request("POST", "/api/switch-platform", json=body)

        if not response.is_success:
            raise PlatformSwitchError(f"Failed to switch platform: {response.status_code}")

        return self._parse(SwitchPlatformResponse, response).current_platform

    async def add_to_cart(self, product_id: str, quantity: int) -> None:
        body = AddToCartRequest(product_id=product_id, quantity=quantity).model_dump(by_alias=True)
        response = await self._request("POST", "/api/add-to-cart", json=body)

        data = self._json(response)
        try:
            result = AddToCartResponse.model_validate(data)
        except ValidationError as e:
            raise TransportFailure(
                f"Malformed AddToCartResponse from shop proxy: {e.error_count()} error(s)",
                status_code=response.status_code,
            ) from e

        if response.is_success and result.success:
            return

        raise ServerRejection(
            result.error or f"Add to cart failed (HTTP {response.status_code})",
            payload=data,
        )

    async def cart_url(self, platform: str) -> str:
        response = await self._request("GET", "/api/cart/url", params={"platform": platform})

        if not response.is_success:
            raise TransportFailure(
                f"Failed to fetch cart URL: {response.status_code}",
                status_code=response.status_code,
            )

        return self._parse(CartUrlResponse, response).cart_url

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
