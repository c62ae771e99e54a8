"""
Configuration management for the cart chat bot.
Loads settings from environment variables with validation.
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Telegram
    telegram_bot_token: str = Field(..., description="Telegram Bot API token")

    # Shop proxy API
    shop_proxy_url: str = Field(
        default="http://localhost:3000",
        description="Base URL of the shop proxy server",
    )
    request_timeout: float = Field(
        default=10.0, description="Timeout for shop proxy requests, seconds"
    )

    # Platforms
    default_platform: str = Field(
        default="motonet", description="Platform assumed before the first probe"
    )
    platforms: list[str] = Field(
        default=["motonet", "rusta"], description="Platforms offered in the store picker"
    )
    platform_cart_pages: dict[str, str] = Field(
        default={
            "motonet": "https://www.motonet.fi/fi/ostoskori",
            "rusta": "https://www.rusta.com/fi/cart",
        },
        description="Default cart page per platform",
    )

    # Connectivity
    health_check_interval: float = Field(
        default=30.0, description="Seconds between scheduled health probes"
    )
    retry_delay: float = Field(
        default=2.0, description="Seconds between retries of a failed probe"
    )
    max_retries: int = Field(
        default=3, description="Retries after a failed probe before waiting for the next tick"
    )

    # Add-to-cart fallback
    cart_page_fallback: bool = Field(
        default=True,
        description="Offer the platform cart page after a failed add-to-cart",
    )

    # Diagnostics
    operator_chat_id: Optional[int] = Field(
        default=None, description="Telegram chat that receives copies of error reports"
    )

    # Debug
    debug: bool = Field(default=False, description="Debug mode")

    @field_validator("shop_proxy_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        """Remove trailing slash so paths join cleanly."""
        return value.rstrip("/")


# Global settings instance
settings = Settings()
