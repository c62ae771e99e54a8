"""
Base interface for the shop proxy.
The proxy holds the retailer session and performs the real cart mutation.
"""

from abc import ABC, abstractmethod

from src.integrations.shop_proxy.schemas import HealthResponse


class BaseShopProxy(ABC):
    """Abstract base class for shop proxy clients."""

    @abstractmethod
    async def health(self) -> HealthResponse:
        """
        Probe the proxy.

        Raises:
            TransportFailure: proxy unreachable or unhealthy
        """
        pass

    @abstractmethod
    async def switch_platform(self, platform: str) -> str:
        """
        Make `platform` the active retailer.

        Returns:
            Platform the proxy reports as current after the switch

        Raises:
            PlatformSwitchError: proxy refused the switch
            TransportFailure: proxy unreachable
        """
        pass

    @abstractmethod
    async def add_to_cart(self, product_id: str, quantity: int) -> None:
        """
        Add a product to the retailer cart.

        Raises:
            ServerRejection: proxy answered but the add failed
            TransportFailure: proxy unreachable or answer undecodable
        """
        pass

    @abstractmethod
    async def cart_url(self, platform: str) -> str:
        """Retailer cart page for `platform`."""
        pass

    async def close(self) -> None:
        """Release network resources."""
        return None
