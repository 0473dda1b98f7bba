"""Tests for PayrailClient wiring."""

from __future__ import annotations

import pytest

from payrail import PayrailClient
from payrail.config import PayrailSettings
from payrail.crypto import CryptographyCryptoProvider, HmacCryptoProvider
from payrail.errors import AuthenticationError
from payrail.webhook import Webhooks


class TestPayrailClient:
    """Test PayrailClient construction."""

    def test_requires_api_key(self) -> None:
        """Test a missing API key is rejected."""
        with pytest.raises(AuthenticationError, match="PAYRAIL_API_KEY"):
            PayrailClient(settings=PayrailSettings(api_key=None))

    def test_api_key_from_settings(self) -> None:
        """Test the API key falls back to settings."""
        client = PayrailClient(settings=PayrailSettings(api_key="sk_test_settings"))
        assert client.api_key == "sk_test_settings"

    def test_webhooks_from_settings(self) -> None:
        """Test the webhooks object follows the configured provider and tolerance."""
        settings = PayrailSettings(crypto_provider="cryptography", webhook_tolerance=42)
        client = PayrailClient("sk_test", settings=settings)
        assert isinstance(client.webhooks, Webhooks)
        assert isinstance(client.webhooks.crypto_provider, CryptographyCryptoProvider)
        assert client.webhooks.tolerance == 42

    def test_explicit_arguments_win(self) -> None:
        """Test constructor arguments override settings."""
        provider = HmacCryptoProvider()
        settings = PayrailSettings(crypto_provider="cryptography", webhook_tolerance=42)
        client = PayrailClient(
            "sk_test", crypto_provider=provider, webhook_tolerance=0, settings=settings
        )
        assert client.webhooks.crypto_provider is provider
        assert client.webhooks.tolerance == 0

    def test_provider_factories(self) -> None:
        """Test the static provider factories."""
        assert isinstance(PayrailClient.create_hmac_crypto_provider(), HmacCryptoProvider)
        assert isinstance(
            PayrailClient.create_cryptography_crypto_provider(), CryptographyCryptoProvider
        )

    def test_end_to_end(self) -> None:
        """Test generating and verifying a header through the client."""
        client = PayrailClient("sk_test", settings=PayrailSettings())
        payload = '{"id": "evt_1", "type": "charge.succeeded"}'
        header = client.webhooks.generate_test_header_string(payload=payload, secret="whsec_1")
        event = client.webhooks.construct_event(payload, header, "whsec_1")
        assert event.type == "charge.succeeded"
