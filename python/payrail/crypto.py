"""
Crypto providers used to compute webhook signatures.

A provider exposes a blocking and an awaitable HMAC-SHA256 method that both
return the hex-encoded digest. Two implementations ship with the SDK:

- ``HmacCryptoProvider`` uses the standard library ``hmac`` module. It is the
  default everywhere a provider is optional.
- ``CryptographyCryptoProvider`` uses the ``cryptography`` package, for
  runtimes where OpenSSL-backed primitives are preferred or required.

Any object with the same two methods can be passed wherever a provider is
accepted.
"""

from __future__ import annotations

import asyncio
import hashlib
import hmac
from typing import Protocol, runtime_checkable

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives import hmac as crypto_hmac

from .errors import InvalidOptionsError


@runtime_checkable
class CryptoProvider(Protocol):
    """Capability for computing HMAC-SHA256 webhook signatures."""

    def compute_hmac_signature(self, data: str, secret: str) -> str:
        """Return the hex-encoded HMAC-SHA256 of ``data`` keyed with ``secret``."""
        ...

    async def compute_hmac_signature_async(self, data: str, secret: str) -> str:
        """Awaitable form of :meth:`compute_hmac_signature`."""
        ...


class HmacCryptoProvider:
    """Crypto provider backed by the standard library ``hmac`` module."""

    def compute_hmac_signature(self, data: str, secret: str) -> str:
        return hmac.new(
            secret.encode("utf-8"),
            data.encode("utf-8"),
            hashlib.sha256,
        ).hexdigest()

    async def compute_hmac_signature_async(self, data: str, secret: str) -> str:
        return self.compute_hmac_signature(data, secret)


class CryptographyCryptoProvider:
    """Crypto provider backed by the ``cryptography`` package.

    The async variant runs the digest in a worker thread.
    """

    def compute_hmac_signature(self, data: str, secret: str) -> str:
        mac = crypto_hmac.HMAC(secret.encode("utf-8"), hashes.SHA256())
        mac.update(data.encode("utf-8"))
        return mac.finalize().hex()

    async def compute_hmac_signature_async(self, data: str, secret: str) -> str:
        return await asyncio.to_thread(self.compute_hmac_signature, data, secret)


def create_hmac_crypto_provider() -> HmacCryptoProvider:
    """Create a provider that uses the standard library ``hmac`` module."""
    return HmacCryptoProvider()


def create_cryptography_crypto_provider() -> CryptographyCryptoProvider:
    """Create a provider that uses the ``cryptography`` package."""
    return CryptographyCryptoProvider()


_PROVIDER_FACTORIES = {
    "hmac": create_hmac_crypto_provider,
    "cryptography": create_cryptography_crypto_provider,
}


def create_crypto_provider(name: str) -> CryptoProvider:
    """Create a crypto provider by name.

    Args:
        name: Either ``"hmac"`` or ``"cryptography"``.

    Raises:
        InvalidOptionsError: If ``name`` is not a known provider.
    """
    try:
        factory = _PROVIDER_FACTORIES[name]
    except KeyError:
        known = ", ".join(sorted(_PROVIDER_FACTORIES))
        raise InvalidOptionsError(
            f"Unknown crypto provider {name!r}. Expected one of: {known}"
        ) from None
    return factory()


# Stateless, so one shared instance serves every call that omits a provider.
DEFAULT_CRYPTO_PROVIDER: CryptoProvider = HmacCryptoProvider()


def secure_compare(a: str, b: str) -> bool:
    """Compare two signatures in constant time.

    Strings of different lengths compare unequal. Both values are compared as
    UTF-8 bytes so non-ASCII input is handled rather than rejected.
    """
    return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))
