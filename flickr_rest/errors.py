"""Exception hierarchy raised by the Flickr REST client."""
from __future__ import annotations

from typing import Optional


class FlickrError(Exception):
    """Base exception for all client errors."""


class InvalidRequest(FlickrError, ValueError):
    """Raised before any network I/O when a request lacks its API key or method."""


class TransportError(FlickrError):
    """Raised when the HTTP round-trip cannot be completed."""


class DecodeError(FlickrError):
    """Raised when a response body is not well-formed XML or does not fit its schema."""


class APIError(FlickrError):
    """Failure payload returned by the service itself (``stat="fail"``).

    Never raised by the connection; callers opt in through
    ``raise_for_status()`` on a decoded response.
    """

    def __init__(self, code: Optional[int], message: str) -> None:
        super().__init__(f"{code} : {message}")
        self.code = code
        self.message = message
