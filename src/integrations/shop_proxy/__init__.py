"""
Shop proxy client factory.
"""

from functools import lru_cache

from src.integrations.shop_proxy.base import BaseShopProxy
from src.integrations.shop_proxy.client import HttpShopProxy
from src.integrations.shop_proxy.schemas import HealthResponse


@lru_cache(maxsize=1)
def get_default_shop_proxy() -> BaseShopProxy:
    """Get cached shop proxy client configured from settings."""
    return HttpShopProxy()


__all__ = [
    "BaseShopProxy",
    "HttpShopProxy",
    "HealthResponse",
    "get_default_shop_proxy",
]
