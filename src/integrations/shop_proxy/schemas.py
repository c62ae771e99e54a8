"""
Wire models for the shop proxy API.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ProxyModel(BaseModel):
    """Base for proxy payloads: camelCase on the wire, extra keys kept."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class HealthResponse(ProxyModel):
    """GET /health"""

    current_platform: Optional[str] = Field(default=None, alias="currentPlatform")
    cookie_status: dict[str, bool] = Field(default_factory=dict, alias="cookieStatus")


class SwitchPlatformRequest(ProxyModel):
    """POST /api/switch-platform"""

    platform: str


class SwitchPlatformResponse(ProxyModel):
    current_platform: str = Field(alias="currentPlatform")


class AddToCartRequest(ProxyModel):
    """POST /api/add-to-cart"""

    product_id: str = Field(alias="productId")
    quantity: int


class AddToCartResponse(ProxyModel):
    success: bool = False
    error: Optional[str] = None


class CartUrlResponse(ProxyModel):
    """GET /api/cart/url"""

    cart_url: str = Field(alias="cartUrl")
