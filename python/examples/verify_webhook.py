"""
Webhook Verification Example

Demonstrates what a webhook handler does with an incoming delivery: verify
the signature header against the raw body, decode the event, and map
verification failures to an HTTP 400.

The delivery here is simulated with generate_test_header_string so the
example runs without a server.

Run with: python examples/verify_webhook.py
"""

from __future__ import annotations

import json
import os

from payrail import PayrailClient, SignatureVerificationError


def handle_webhook(client: PayrailClient, body: bytes, signature_header: str, secret: str) -> int:
    """Return the HTTP status a webhook endpoint would respond with."""
    try:
        # Pass the raw bytes exactly as received, never a re-serialized body
        event = client.webhooks.construct_event(body, signature_header, secret)
    except SignatureVerificationError as exc:
        print(f"Rejected delivery: {exc.message}")
        return 400

    print(f"Received {event.type} ({event.id})")
    return 200


def main() -> None:
    client = PayrailClient(api_key=os.environ.get("PAYRAIL_API_KEY", "sk_test_demo"))
    secret = os.environ.get("PAYRAIL_WEBHOOK_SECRET", "whsec_demo")

    body = json.dumps(
        {
            "id": "evt_demo_001",
            "object": "event",
            "type": "payment_intent.succeeded",
            "data": {"object": {"id": "pi_demo", "amount": 2000, "currency": "usd"}},
        }
    ).encode("utf-8")

    header = client.webhooks.generate_test_header_string(
        payload=body.decode("utf-8"), secret=secret
    )

    # A genuine delivery
    assert handle_webhook(client, body, header, secret) == 200

    # Same header, body re-encoded with different whitespace
    reencoded = json.dumps(json.loads(body), indent=2).encode("utf-8")
    assert handle_webhook(client, reencoded, header, secret) == 400

    # Signed with the wrong secret
    assert handle_webhook(client, body, header, "whsec_wrong") == 400


if __name__ == "__main__":
    main()
