"""
Main client object for the Payrail SDK.

Example::

    from payrail import PayrailClient

    client = PayrailClient(api_key="sk_live_...")
    event = client.webhooks.construct_event(
        request.body,
        request.headers["payrail-signature"],
        "whsec_...",
    )
"""

from __future__ import annotations

import structlog

from .config import PayrailSettings, get_settings
from .crypto import (
    CryptoProvider,
    create_crypto_provider,
    create_cryptography_crypto_provider,
    create_hmac_crypto_provider,
)
from .errors import AuthenticationError
from .webhook import Webhooks

SDK_VERSION = "0.1.0"

logger = structlog.get_logger()


class PayrailClient:
    """Main client for the Payrail API.

    Args:
        api_key: API key for authentication. Falls back to PAYRAIL_API_KEY.
        crypto_provider: Provider used for webhook signatures. Defaults to the
            one named by PAYRAIL_CRYPTO_PROVIDER.
        webhook_tolerance: Default maximum webhook age in seconds. Defaults to
            PAYRAIL_WEBHOOK_TOLERANCE.
        settings: Settings to read defaults from instead of the environment.
    """

    VERSION = SDK_VERSION

    create_hmac_crypto_provider = staticmethod(create_hmac_crypto_provider)
    create_cryptography_crypto_provider = staticmethod(create_cryptography_crypto_provider)

    def __init__(
        self,
        api_key: str | None = None,
        *,
        crypto_provider: CryptoProvider | None = None,
        webhook_tolerance: int | None = None,
        settings: PayrailSettings | None = None,
    ) -> None:
        settings = settings or get_settings()
        api_key = api_key or settings.api_key

        if not api_key:
            raise AuthenticationError(
                "API key is required. Pass it as `api_key` or set the "
                "PAYRAIL_API_KEY environment variable."
            )

        self._api_key = api_key

        if crypto_provider is None:
            crypto_provider = create_crypto_provider(settings.crypto_provider)
        if webhook_tolerance is None:
            webhook_tolerance = settings.webhook_tolerance

        self.webhooks = Webhooks(crypto_provider, tolerance=webhook_tolerance)

        logger.debug(
            "Payrail client initialized",
            crypto_provider=type(crypto_provider).__name__,
            webhook_tolerance=webhook_tolerance,
        )

    @property
    def api_key(self) -> str:
        return self._api_key
