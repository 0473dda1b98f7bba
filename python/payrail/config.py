"""SDK settings with environment variable support.

All settings can be configured via environment variables with the PAYRAIL_
prefix. Example: PAYRAIL_WEBHOOK_TOLERANCE=600 widens the replay window to
ten minutes.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_WEBHOOK_TOLERANCE = 300


class PayrailSettings(BaseSettings):
    """Payrail SDK settings.

    All settings can be overridden via environment variables:
    - PAYRAIL_API_KEY: Secret API key
    - PAYRAIL_WEBHOOK_TOLERANCE: Maximum webhook age in seconds (0 disables)
    - PAYRAIL_CRYPTO_PROVIDER: ``hmac`` or ``cryptography``
    """

    model_config = SettingsConfigDict(
        env_prefix="PAYRAIL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_key: str | None = Field(
        default=None,
        description="Secret API key used by PayrailClient when none is passed.",
    )
    webhook_tolerance: int = Field(
        default=DEFAULT_WEBHOOK_TOLERANCE,
        description="Maximum allowed webhook age in seconds. Default 5 minutes.",
    )
    crypto_provider: Literal["hmac", "cryptography"] = Field(
        default="hmac",
        description="Crypto provider used to compute webhook signatures.",
    )


_settings: PayrailSettings | None = None


def get_settings() -> PayrailSettings:
    """Get the global settings instance.

    Settings are loaded from environment variables on first access. To reload
    them (e.g., in tests), call clear_settings() first.
    """
    global _settings
    if _settings is None:
        _settings = PayrailSettings()
    return _settings


def clear_settings() -> None:
    """Clear the cached settings so the next get_settings() call reloads them."""
    global _settings
    _settings = None
