"""
Parser for the webhook signature header.

Header format: ``t=<unix-timestamp>,<scheme>=<hex-signature>[,...]``

The ``t`` pair may appear once (the last occurrence wins if repeated). Any
number of signatures may be listed under the same scheme, which is how secret
rotation is expressed. Pairs under other schemes are ignored so that headers
carrying newer schemes still verify.
"""

from __future__ import annotations

from .types import ParsedHeader

TIMESTAMP_KEY = "t"


def parse_header(header: object, scheme: str) -> ParsedHeader | None:
    """Parse a signature header into its timestamp and scheme signatures.

    Args:
        header: The decoded header value.
        scheme: Signature scheme whose values should be collected (e.g. ``v1``).

    Returns:
        The parsed header, or None if ``header`` is not a string. A missing or
        non-integer timestamp is reported as ``timestamp == -1``.
    """
    if not isinstance(header, str):
        return None

    timestamp = -1
    signatures: list[str] = []

    for item in header.split(","):
        key, sep, value = item.partition("=")
        if not sep:
            continue

        if key == TIMESTAMP_KEY:
            value = value.strip()
            # Only plain base-10 digits; int() alone would also accept "+1_0".
            timestamp = int(value) if value.isascii() and value.isdigit() else -1

        if key == scheme:
            signatures.append(value)

    return ParsedHeader(timestamp=timestamp, signatures=tuple(signatures))
