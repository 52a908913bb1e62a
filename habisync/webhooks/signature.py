"""GitHub webhook HMAC-SHA256 signature verification.

See https://docs.github.com/en/webhooks/using-webhooks/validating-webhook-deliveries
"""

from __future__ import annotations

import hashlib
import hmac

from habisync.errors import ConfigurationError, SignatureMismatch

SIGNATURE_PREFIX = "sha256="


def compute_signature(body: bytes, secret: str) -> str:
    """Return the ``sha256=<hex>`` signature GitHub sends for ``body``."""
    digest = hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()
    return SIGNATURE_PREFIX + digest


def verify_signature(body: bytes, signature: str, secret: str) -> None:
    """Check ``signature`` against the HMAC of the raw request ``body``.

    ``body`` must be the bytes exactly as received. Raises
    ``ConfigurationError`` when no secret is configured and
    ``SignatureMismatch`` when the signature is absent, malformed or wrong.
    """
    if not secret:
        raise ConfigurationError("Missing webhook secret")
    if not signature or not signature.startswith(SIGNATURE_PREFIX):
        raise SignatureMismatch("Missing or malformed webhook signature")

    expected = compute_signature(body, secret).encode()
    try:
        # aiohttp decodes non-UTF-8 header bytes with surrogateescape
        received = signature.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        raise SignatureMismatch("Malformed webhook signature") from None
    if len(received) != len(expected) or not hmac.compare_digest(expected, received):
        raise SignatureMismatch("Invalid webhook signature")
