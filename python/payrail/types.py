"""
Types for Payrail webhook handling.

``ParsedHeader`` and ``TestHeaderOptions`` are plain containers used while
verifying or synthesizing a signature header. ``WebhookEvent`` is the pydantic
model a verified request body is decoded into.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from .crypto import CryptoProvider


@dataclass(frozen=True)
class ParsedHeader:
    """Structured form of a signature header.

    Attributes:
        timestamp: Unix timestamp from the ``t`` pair, or -1 if none was found.
        signatures: Signatures listed under the expected scheme, in header order.
    """

    timestamp: int = -1
    signatures: tuple[str, ...] = ()


@dataclass
class TestHeaderOptions:
    """Inputs for :func:`payrail.webhook.generate_test_header_string`.

    Attributes:
        payload: Raw JSON body the header should sign.
        secret: Webhook signing secret used when ``signature`` is not given.
        timestamp: Unix timestamp to embed. Defaults to now.
        scheme: Signature scheme tag. Defaults to ``v1``.
        signature: Precomputed signature to embed instead of computing one.
        crypto_provider: Provider used to compute the signature.
    """

    __test__ = False

    payload: str = ""
    secret: str | None = None
    timestamp: int | float | None = None
    scheme: str | None = None
    signature: str | None = None
    crypto_provider: CryptoProvider | None = field(default=None, repr=False)


class WebhookEvent(BaseModel):
    """An event delivered to a webhook endpoint."""

    id: str | None = None
    """Unique event identifier."""

    object: str = "event"
    """Object type, always 'event'."""

    type: str | None = None
    """Event type (e.g., 'payment_intent.succeeded')."""

    created: int | None = None
    """Unix timestamp of event creation."""

    api_version: str | None = None
    """API version used to render ``data``."""

    livemode: bool = False
    """Whether the event was produced in live mode."""

    data: dict[str, Any] = Field(default_factory=dict)
    """The object the event is about, under ``data['object']``."""

    model_config = {"extra": "allow"}
