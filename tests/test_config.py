"""Tests for settings loading from environment variables."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from payrail.config import PayrailSettings, clear_settings, get_settings


@pytest.fixture(autouse=True)
def _reset_settings():
    clear_settings()
    yield
    clear_settings()


class TestPayrailSettings:
    """Test PayrailSettings."""

    def test_default_values(self) -> None:
        """Test default values."""
        with patch.dict(os.environ, {}, clear=True):
            settings = PayrailSettings()
        assert settings.api_key is None
        assert settings.webhook_tolerance == 300
        assert settings.crypto_provider == "hmac"

    def test_env_override_webhook_tolerance(self) -> None:
        """Test PAYRAIL_WEBHOOK_TOLERANCE env var."""
        with patch.dict(os.environ, {"PAYRAIL_WEBHOOK_TOLERANCE": "600"}):
            assert PayrailSettings().webhook_tolerance == 600

    def test_env_override_crypto_provider(self) -> None:
        """Test PAYRAIL_CRYPTO_PROVIDER env var."""
        with patch.dict(os.environ, {"PAYRAIL_CRYPTO_PROVIDER": "cryptography"}):
            assert PayrailSettings().crypto_provider == "cryptography"

    def test_invalid_crypto_provider(self) -> None:
        """Test unknown provider names fail validation."""
        with patch.dict(os.environ, {"PAYRAIL_CRYPTO_PROVIDER": "subtle"}):
            with pytest.raises(ValidationError):
                PayrailSettings()

    def test_env_override_api_key(self) -> None:
        """Test PAYRAIL_API_KEY env var."""
        with patch.dict(os.environ, {"PAYRAIL_API_KEY": "sk_test_env"}):
            assert PayrailSettings().api_key == "sk_test_env"


class TestGlobalSettings:
    """Test the cached settings accessors."""

    def test_get_settings_cached(self) -> None:
        """Test get_settings returns the same instance."""
        assert get_settings() is get_settings()

    def test_clear_settings_reloads(self) -> None:
        """Test clear_settings picks up environment changes."""
        with patch.dict(os.environ, {"PAYRAIL_WEBHOOK_TOLERANCE": "120"}):
            clear_settings()
            assert get_settings().webhook_tolerance == 120
        clear_settings()
        with patch.dict(os.environ, {"PAYRAIL_WEBHOOK_TOLERANCE": "30"}):
            assert get_settings().webhook_tolerance == 30
