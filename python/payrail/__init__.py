"""
Payrail SDK — Official Python client library.

Verify and decode webhook events delivered by the Payrail payments API.

Example::

    import os
    from payrail import PayrailClient, SignatureVerificationError

    client = PayrailClient(api_key=os.environ["PAYRAIL_API_KEY"])

    try:
        event = client.webhooks.construct_event(
            request.body,
            request.headers["payrail-signature"],
            os.environ["PAYRAIL_WEBHOOK_SECRET"],
        )
    except SignatureVerificationError:
        ...  # respond with HTTP 400
"""

from __future__ import annotations

from .client import PayrailClient
from .config import PayrailSettings, clear_settings, get_settings
from .crypto import (
    CryptographyCryptoProvider,
    CryptoProvider,
    HmacCryptoProvider,
    create_crypto_provider,
    create_cryptography_crypto_provider,
    create_hmac_crypto_provider,
    secure_compare,
)
from .errors import (
    AuthenticationError,
    InvalidOptionsError,
    InvalidPayloadError,
    MalformedSignatureHeaderError,
    NoSignaturesForSchemeError,
    PayrailError,
    SignatureHeaderShapeError,
    SignatureMismatchError,
    SignatureVerificationError,
    TimestampOutsideToleranceError,
)
from .header import parse_header
from .types import ParsedHeader, TestHeaderOptions, WebhookEvent
from .webhook import (
    DEFAULT_TOLERANCE,
    EXPECTED_SCHEME,
    Webhooks,
    construct_event,
    construct_event_async,
    generate_test_header_string,
    verify_header,
    verify_header_async,
)

__all__ = [
    # Client
    "PayrailClient",
    # Config
    "PayrailSettings",
    "get_settings",
    "clear_settings",
    # Errors
    "PayrailError",
    "AuthenticationError",
    "InvalidOptionsError",
    "InvalidPayloadError",
    "SignatureVerificationError",
    "SignatureHeaderShapeError",
    "MalformedSignatureHeaderError",
    "NoSignaturesForSchemeError",
    "SignatureMismatchError",
    "TimestampOutsideToleranceError",
    # Types
    "ParsedHeader",
    "TestHeaderOptions",
    "WebhookEvent",
    # Crypto
    "CryptoProvider",
    "HmacCryptoProvider",
    "CryptographyCryptoProvider",
    "create_crypto_provider",
    "create_hmac_crypto_provider",
    "create_cryptography_crypto_provider",
    "secure_compare",
    # Webhook
    "DEFAULT_TOLERANCE",
    "EXPECTED_SCHEME",
    "Webhooks",
    "parse_header",
    "verify_header",
    "verify_header_async",
    "construct_event",
    "construct_event_async",
    "generate_test_header_string",
]
