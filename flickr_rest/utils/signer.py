"""Flickr API request signer using the MD5 ``api_sig`` scheme."""
from __future__ import annotations

import hashlib
from typing import TYPE_CHECKING, Dict, Mapping

if TYPE_CHECKING:
    from flickr_rest.models.request import Request

SIGNATURE_KEY = "api_sig"


def sign(parameters: Mapping[str, str], method: str, api_key: str, secret: str) -> str:
    """Compute the ``api_sig`` for a set of request parameters.

    The service recomputes the signature by sorting every parameter name
    (including ``api_key`` and ``method``) byte-wise and hashing the secret
    followed by each ``name`` + ``value`` pair. Parameters whose value is the
    empty string are left out of the hashed string.

    Args:
        parameters: Method arguments; an existing ``api_sig`` is ignored
        method: Remote method name, e.g. ``flickr.photos.search``
        api_key: Application API key
        secret: Shared secret paired with the key

    Returns:
        Lowercase hex MD5 digest
    """
    args = {name: value for name, value in parameters.items() if name != SIGNATURE_KEY}
    args["api_key"] = api_key
    args["method"] = method

    # Sorting str keys orders by code point, which matches byte order for UTF-8.
    payload = secret + "".join(
        f"{name}{args[name]}" for name in sorted(args) if args[name] != ""
    )
    # MD5 is mandated by the wire protocol.
    return hashlib.md5(payload.encode("utf-8")).hexdigest()


def signed_parameters(
    parameters: Mapping[str, str], method: str, api_key: str, secret: str
) -> Dict[str, str]:
    """Return a copy of ``parameters`` carrying a fresh ``api_sig``."""

    signed = {name: value for name, value in parameters.items() if name != SIGNATURE_KEY}
    signed[SIGNATURE_KEY] = sign(parameters, method, api_key, secret)
    return signed


class FlickrSigner:
    """Signs Flickr API requests with a key/secret pair."""

    def __init__(self, api_key: str, api_secret: str) -> None:
        """Initialize signer with API credentials.

        Args:
            api_key: Flickr API key
            api_secret: Flickr API shared secret
        """
        self.api_key = api_key
        self.api_secret = api_secret

    def sign_request(self, request: "Request") -> "Request":
        """Return ``request`` with its arguments signed under this signer's secret.

        The request's own API key is the one signed, so a request built for a
        different key is still signed consistently with what will be sent.
        """
        return request.signed(self.api_secret)
