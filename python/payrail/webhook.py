"""
Webhook signature verification for Payrail.

Payrail signs webhook payloads using HMAC-SHA256 with a per-endpoint webhook
secret. The signature header includes a timestamp to prevent replay attacks.

Signature header format: ``t=<unix-timestamp>,v1=<hex-encoded HMAC>``
Signed payload format: ``<timestamp>.<raw-body>``

Verification always checks the signature before the timestamp, so a request
that is both forged and stale is reported as a signature mismatch.

Example::

    from payrail import construct_event, SignatureVerificationError

    try:
        event = construct_event(
            request.body,
            request.headers["payrail-signature"],
            os.environ["PAYRAIL_WEBHOOK_SECRET"],
        )
    except SignatureVerificationError:
        return Response(status=400)
"""

from __future__ import annotations

import dataclasses
import math
import time
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal

import pydantic
import structlog

from .config import DEFAULT_WEBHOOK_TOLERANCE
from .crypto import DEFAULT_CRYPTO_PROVIDER, CryptoProvider, secure_compare
from .errors import (
    InvalidOptionsError,
    InvalidPayloadError,
    MalformedSignatureHeaderError,
    NoSignaturesForSchemeError,
    SignatureHeaderShapeError,
    SignatureMismatchError,
    TimestampOutsideToleranceError,
)
from .header import parse_header
from .types import ParsedHeader, TestHeaderOptions, WebhookEvent

logger = structlog.get_logger()

EXPECTED_SCHEME = "v1"
DEFAULT_TOLERANCE = DEFAULT_WEBHOOK_TOLERANCE

WebhookPayload = str | bytes
WebhookHeader = str | bytes


@dataclass(frozen=True)
class VerificationContext:
    """Decoded inputs of a single verification call."""

    payload: str
    header: str
    details: ParsedHeader


def _now() -> int:
    return int(time.time())


def _decode(value: object, errors: str = "strict") -> object:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8", errors)
    return value


def _parse_event_details(
    encoded_payload: WebhookPayload,
    encoded_header: WebhookHeader,
    expected_scheme: str,
) -> VerificationContext:
    """Decode the inputs and parse the header, failing before any HMAC work."""
    # Repeated headers arrive as lists; the signature header is single-valued.
    if isinstance(encoded_header, (list, tuple)):
        logger.warning("Webhook signature header rejected", reason="multi_valued_header")
        raise SignatureHeaderShapeError(
            "Unexpected: a list was passed as the signature header. The "
            "signature header is a single comma-separated string."
        )

    # Bodies decode leniently; invalid UTF-8 then fails as a signature mismatch.
    payload = _decode(encoded_payload, errors="replace")

    try:
        header = _decode(encoded_header)
    except UnicodeDecodeError as exc:
        logger.warning("Webhook signature verification failed", reason="undecodable_header")
        raise MalformedSignatureHeaderError(
            "Unable to decode signature header as UTF-8",
            payload=payload if isinstance(payload, str) else None,
        ) from exc

    details = parse_header(header, expected_scheme)

    if details is None or details.timestamp == -1:
        logger.warning("Webhook signature verification failed", reason="malformed_header")
        raise MalformedSignatureHeaderError(
            "Unable to extract timestamp and signatures from header",
            header=header if isinstance(header, str) else None,
            payload=payload if isinstance(payload, str) else None,
        )

    if not details.signatures:
        logger.warning(
            "Webhook signature verification failed",
            reason="no_signatures_for_scheme",
            scheme=expected_scheme,
            timestamp=details.timestamp,
        )
        raise NoSignaturesForSchemeError(
            "No signatures found with expected scheme",
            header=header,
            payload=payload if isinstance(payload, str) else None,
        )

    return VerificationContext(payload=f"{payload}", header=header, details=details)


def _make_hmac_content(context: VerificationContext) -> str:
    return f"{context.details.timestamp}.{context.payload}"


def _validate_computed_signature(
    context: VerificationContext,
    expected_signature: str,
    tolerance: int,
) -> Literal[True]:
    """Match the expected signature against every candidate, then check age."""
    # Compare against every candidate, no early exit on the first match.
    matches = [
        secure_compare(expected_signature, candidate)
        for candidate in context.details.signatures
    ]

    if not any(matches):
        logger.warning(
            "Webhook signature verification failed",
            reason="signature_mismatch",
            timestamp=context.details.timestamp,
            candidates=len(matches),
        )
        raise SignatureMismatchError(
            "No signatures found matching the expected signature for payload. "
            "Are you passing the raw request body you received from Payrail? "
            "Re-serialized JSON (for example a parsed and re-dumped body) does "
            "not match the bytes that were signed.",
            header=context.header,
            payload=context.payload,
        )

    timestamp_age = _now() - context.details.timestamp

    if tolerance > 0 and timestamp_age > tolerance:
        logger.warning(
            "Webhook signature verification failed",
            reason="timestamp_outside_tolerance",
            timestamp=context.details.timestamp,
            age=timestamp_age,
            tolerance=tolerance,
        )
        raise TimestampOutsideToleranceError(
            "Timestamp outside the tolerance zone",
            header=context.header,
            payload=context.payload,
        )

    logger.debug("Webhook signature verified", timestamp=context.details.timestamp)
    return True


def verify_header(
    payload: WebhookPayload,
    header: WebhookHeader,
    secret: str,
    tolerance: int,
    crypto_provider: CryptoProvider | None = None,
) -> Literal[True]:
    """Verify the signature header of a webhook delivery.

    This function:
    1. Parses the timestamp and ``v1`` signatures from the header.
    2. Recomputes the HMAC-SHA256 of ``<timestamp>.<payload>`` with the secret.
    3. Compares it against each listed signature in constant time.
    4. Rejects timestamps older than the tolerance window.

    Args:
        payload: The raw request body. Must be the exact bytes received, not a
            re-serialized JSON object.
        header: The value of the signature header.
        secret: The webhook signing secret.
        tolerance: Maximum age of the signature in seconds. Zero or a negative
            value disables the age check.
        crypto_provider: Provider used to compute the HMAC. Defaults to the
            standard library provider.

    Returns:
        True if the header is valid.

    Raises:
        SignatureVerificationError: A subclass describing why verification failed.
    """
    context = _parse_event_details(payload, header, EXPECTED_SCHEME)

    provider = crypto_provider or DEFAULT_CRYPTO_PROVIDER
    expected_signature = provider.compute_hmac_signature(
        _make_hmac_content(context), secret
    )

    return _validate_computed_signature(context, expected_signature, tolerance)


async def verify_header_async(
    payload: WebhookPayload,
    header: WebhookHeader,
    secret: str,
    tolerance: int,
    crypto_provider: CryptoProvider | None = None,
) -> Literal[True]:
    """Verify the signature header of a webhook delivery (asynchronous).

    Same parameters and behavior as :func:`verify_header`, but awaits the
    provider's asynchronous HMAC method.
    """
    context = _parse_event_details(payload, header, EXPECTED_SCHEME)

    provider = crypto_provider or DEFAULT_CRYPTO_PROVIDER
    expected_signature = await provider.compute_hmac_signature_async(
        _make_hmac_content(context), secret
    )

    return _validate_computed_signature(context, expected_signature, tolerance)


def _decode_event(payload: WebhookPayload) -> WebhookEvent:
    try:
        return WebhookEvent.model_validate_json(payload)
    except pydantic.ValidationError as exc:
        raise InvalidPayloadError(f"Webhook payload is not a valid event: {exc}") from exc


def construct_event(
    payload: WebhookPayload,
    header: WebhookHeader,
    secret: str,
    tolerance: int | None = None,
    crypto_provider: CryptoProvider | None = None,
) -> WebhookEvent:
    """Verify a webhook delivery and decode its body into an event.

    Args:
        payload: The raw request body.
        header: The value of the signature header.
        secret: The webhook signing secret.
        tolerance: Maximum age in seconds. ``None`` or 0 uses DEFAULT_TOLERANCE;
            call :func:`verify_header` directly to disable the age check.
        crypto_provider: Provider used to compute the HMAC.

    Returns:
        The decoded WebhookEvent.

    Raises:
        SignatureVerificationError: If verification fails.
        InvalidPayloadError: If the verified body is not a valid event.
    """
    verify_header(
        payload,
        header,
        secret,
        tolerance or DEFAULT_TOLERANCE,
        crypto_provider,
    )
    return _decode_event(payload)


async def construct_event_async(
    payload: WebhookPayload,
    header: WebhookHeader,
    secret: str,
    tolerance: int | None = None,
    crypto_provider: CryptoProvider | None = None,
) -> WebhookEvent:
    """Verify a webhook delivery and decode its body (asynchronous).

    Same parameters and behavior as :func:`construct_event`.
    """
    await verify_header_async(
        payload,
        header,
        secret,
        tolerance or DEFAULT_TOLERANCE,
        crypto_provider,
    )
    return _decode_event(payload)


def _coerce_options(
    opts: TestHeaderOptions | Mapping[str, Any] | None,
    overrides: Mapping[str, Any],
) -> TestHeaderOptions:
    if not opts and not overrides:
        raise InvalidOptionsError("Options are required")

    if opts is None:
        values: dict[str, Any] = {}
    elif isinstance(opts, TestHeaderOptions):
        values = {f.name: getattr(opts, f.name) for f in dataclasses.fields(opts)}
    elif isinstance(opts, Mapping):
        values = dict(opts)
    else:
        raise InvalidOptionsError(
            f"Options must be a mapping or TestHeaderOptions, got {type(opts).__name__}"
        )
    values.update(overrides)

    try:
        return TestHeaderOptions(**values)
    except TypeError as exc:
        raise InvalidOptionsError(f"Invalid options: {exc}") from exc


def generate_test_header_string(
    opts: TestHeaderOptions | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> str:
    """Generate a signature header for a payload, for use in tests.

    Do NOT use this in production. It is the inverse of :func:`verify_header`
    and exists for writing fixtures.

    Args:
        opts: Header options (see :class:`~payrail.types.TestHeaderOptions`),
            as a dataclass or a mapping. Keyword arguments override entries.

    Returns:
        The header string in the format ``t=<timestamp>,<scheme>=<signature>``.

    Raises:
        InvalidOptionsError: If no options are given, an option is unknown, or
            no secret is available to compute the signature.

    Example::

        header = generate_test_header_string(payload=body, secret="whsec_test")
    """
    options = _coerce_options(opts, overrides)

    timestamp = math.floor(options.timestamp) if options.timestamp else 0
    timestamp = timestamp or _now()
    scheme = options.scheme or EXPECTED_SCHEME
    provider = options.crypto_provider or DEFAULT_CRYPTO_PROVIDER

    signature = options.signature
    if not signature:
        if options.secret is None:
            raise InvalidOptionsError("A secret is required to compute the signature")
        signature = provider.compute_hmac_signature(
            f"{timestamp}.{options.payload}", options.secret
        )

    return f"t={timestamp},{scheme}={signature}"


class Webhooks:
    """Webhook helpers bound to a crypto provider and a default tolerance.

    Accessed via ``client.webhooks``, or constructed directly.

    Args:
        crypto_provider: Provider used for every signature computation.
        tolerance: Default maximum age in seconds. Zero disables the age check
            in verify_header; construct_event then uses DEFAULT_TOLERANCE.
    """

    EXPECTED_SCHEME = EXPECTED_SCHEME
    DEFAULT_TOLERANCE = DEFAULT_TOLERANCE

    def __init__(
        self,
        crypto_provider: CryptoProvider | None = None,
        *,
        tolerance: int = DEFAULT_TOLERANCE,
    ) -> None:
        self.crypto_provider = crypto_provider or DEFAULT_CRYPTO_PROVIDER
        self.tolerance = tolerance

    def _tolerance(self, tolerance: int | None) -> int:
        return self.tolerance if tolerance is None else tolerance

    def _event_tolerance(self, tolerance: int | None) -> int:
        return tolerance or self.tolerance or DEFAULT_TOLERANCE

    def verify_header(
        self,
        payload: WebhookPayload,
        header: WebhookHeader,
        secret: str,
        tolerance: int | None = None,
    ) -> Literal[True]:
        """Verify a signature header. See :func:`verify_header`."""
        return verify_header(
            payload, header, secret, self._tolerance(tolerance), self.crypto_provider
        )

    async def verify_header_async(
        self,
        payload: WebhookPayload,
        header: WebhookHeader,
        secret: str,
        tolerance: int | None = None,
    ) -> Literal[True]:
        """Verify a signature header (asynchronous). See :func:`verify_header`."""
        return await verify_header_async(
            payload, header, secret, self._tolerance(tolerance), self.crypto_provider
        )

    def construct_event(
        self,
        payload: WebhookPayload,
        header: WebhookHeader,
        secret: str,
        tolerance: int | None = None,
    ) -> WebhookEvent:
        """Verify a delivery and decode its body. See :func:`construct_event`.

        A falsy ``tolerance`` falls back to this object's tolerance, then to
        DEFAULT_TOLERANCE. Use :meth:`verify_header` to disable the age check.
        """
        self.verify_header(payload, header, secret, self._event_tolerance(tolerance))
        return _decode_event(payload)

    async def construct_event_async(
        self,
        payload: WebhookPayload,
        header: WebhookHeader,
        secret: str,
        tolerance: int | None = None,
    ) -> WebhookEvent:
        """Verify a delivery and decode its body (asynchronous)."""
        await self.verify_header_async(
            payload, header, secret, self._event_tolerance(tolerance)
        )
        return _decode_event(payload)

    def generate_test_header_string(
        self,
        opts: TestHeaderOptions | Mapping[str, Any] | None = None,
        **overrides: Any,
    ) -> str:
        """Generate a test header, defaulting to this object's crypto provider."""
        options = _coerce_options(opts, overrides)
        if options.crypto_provider is None:
            options.crypto_provider = self.crypto_provider
        return generate_test_header_string(options)
