"""Exception types raised by habisync.

Network failures talking to Habitica are not wrapped: they surface as
``httpx.TransportError`` (and its subclasses such as ``httpx.TimeoutException``)
exactly as httpx raises them.
"""

from __future__ import annotations


class HabisyncError(Exception):
    """Base class for all habisync errors."""


class ConfigurationError(HabisyncError):
    """A required credential or secret is not configured."""


class SignatureMismatch(HabisyncError):
    """A webhook delivery's signature does not match its body."""


class PayloadError(HabisyncError):
    """A verified webhook payload is missing fields the mapper needs."""


class UnexpectedResponse(HabisyncError):
    """Habitica answered with a status the calling operation does not expect."""

    def __init__(self, status_code: int, url: str) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(f"Unexpected response {status_code} from: {url}")
