"""
Error hierarchy for the Payrail SDK.

All SDK-specific errors inherit from PayrailError, making it easy to catch
any Payrail-related error in a single except block. Webhook verification
failures share the SignatureVerificationError base so a webhook handler can
reject every kind of bad delivery with one ``except`` clause.
"""

from __future__ import annotations

from typing import Any


class PayrailError(Exception):
    """Base error class for all Payrail SDK errors.

    Attributes:
        message: Human-readable error description.
        status_code: HTTP status code from the API response, if applicable.
        request_id: Unique request identifier for support and debugging.
        body: Raw error response body from the API.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        request_id: str | None = None,
        body: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.request_id = request_id
        self.body = body


class AuthenticationError(PayrailError):
    """Raised when the API key is missing, invalid, or revoked."""


class InvalidOptionsError(PayrailError):
    """Raised when required arguments are missing or invalid."""


class InvalidPayloadError(PayrailError):
    """Raised when a verified webhook body cannot be decoded into an event."""


class SignatureVerificationError(PayrailError):
    """Raised when a webhook delivery fails signature verification.

    Attributes:
        header: The decoded signature header that was checked.
        payload: The decoded request body that was checked.
    """

    def __init__(
        self,
        message: str,
        *,
        header: str | None = None,
        payload: str | None = None,
    ) -> None:
        super().__init__(message)
        self.header = header
        self.payload = payload


class SignatureHeaderShapeError(SignatureVerificationError):
    """Raised when the signature header is multi-valued (a list or tuple)."""


class MalformedSignatureHeaderError(SignatureVerificationError):
    """Raised when no timestamp could be extracted from the signature header."""


class NoSignaturesForSchemeError(SignatureVerificationError):
    """Raised when the header carries no signature under the expected scheme."""


class SignatureMismatchError(SignatureVerificationError):
    """Raised when none of the header's signatures match the payload."""


class TimestampOutsideToleranceError(SignatureVerificationError):
    """Raised on a valid signature whose timestamp is older than the tolerance."""
