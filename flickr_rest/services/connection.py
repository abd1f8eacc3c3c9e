"""Signed, synchronous connection to the Flickr REST endpoint."""
from __future__ import annotations

import logging
from threading import Lock
from typing import Any, Mapping, Optional, Protocol, Type, TypeVar

import httpx

from flickr_rest.errors import DecodeError, InvalidRequest, TransportError
from flickr_rest.models.photos import PhotosGetSizesResponse, PhotosSearchResponse
from flickr_rest.models.request import Request
from flickr_rest.settings import DEFAULT_REST_ENDPOINT, Settings
from flickr_rest.utils.log import structured_log
from flickr_rest.utils.signer import FlickrSigner

METHOD_PHOTOS_SEARCH = "flickr.photos.search"
METHOD_PHOTOS_GET_SIZES = "flickr.photos.getSizes"


class XmlResponse(Protocol):
    @classmethod
    def from_xml(cls, body: bytes) -> Any: ...


ResponseT = TypeVar("ResponseT", bound=XmlResponse)


class Connection:
    """Holds API credentials and a reusable HTTP client.

    Calls are synchronous. The credentials are read-only after construction,
    so one connection can be shared between threads; the HTTP client is
    created on first use unless one is injected.
    """

    def __init__(
        self,
        api_key: str,
        api_secret: str,
        client: Optional[httpx.Client] = None,
        *,
        endpoint: str = DEFAULT_REST_ENDPOINT,
        timeout: float = 30.0,
    ) -> None:
        self._signer = FlickrSigner(api_key, api_secret)
        self.endpoint = endpoint
        self.timeout = timeout
        self.logger = logging.getLogger("services.connection")

        self._client = client
        self._owns_client = client is None
        self._lock = Lock()

    @classmethod
    def from_settings(
        cls, settings: Settings, client: Optional[httpx.Client] = None
    ) -> "Connection":
        if not settings.has_credentials:
            raise InvalidRequest("FLICKR_API_KEY and FLICKR_API_SECRET must both be set")
        return cls(
            settings.api_key,
            settings.api_secret,
            client,
            endpoint=settings.rest_endpoint,
            timeout=settings.http_timeout,
        )

    @property
    def api_key(self) -> str:
        return self._signer.api_key

    @property
    def api_secret(self) -> str:
        return self._signer.api_secret

    @property
    def client(self) -> httpx.Client:
        """HTTP client, created exactly once on first access."""

        if self._client is None:
            with self._lock:
                if self._client is None:
                    self._client = httpx.Client(timeout=self.timeout)
                    structured_log(self.logger, "flickr_client_created", timeout=self.timeout)
        return self._client

    def close(self) -> None:
        """Close the HTTP client if this connection created it."""

        with self._lock:
            if self._client is not None and self._owns_client:
                self._client.close()
                self._client = None

    def __enter__(self) -> "Connection":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def execute(self, request: Request) -> bytes:
        """Perform a GET for ``request`` and return the raw response body.

        HTTP status codes are not inspected; the body is returned as-is.

        Raises:
            InvalidRequest: the request has no API key or no method
            TransportError: the connection failed or the body could not be read
        """
        if not request.api_key or not request.method:
            raise InvalidRequest("Need both API key and method")

        url = request.url(self.endpoint)
        structured_log(
            self.logger,
            "flickr_request",
            method=request.method,
            args=len(request.args),
        )
        try:
            with self.client.stream("GET", url) as response:
                body = response.read()
        except httpx.HTTPError as exc:
            structured_log(
                self.logger,
                "flickr_transport_error",
                level=logging.WARNING,
                method=request.method,
                error=str(exc),
            )
            raise TransportError(f"{request.method} request failed: {exc}") from exc

        structured_log(
            self.logger,
            "flickr_response",
            method=request.method,
            status_code=response.status_code,
            size=len(body),
        )
        return body

    def call(
        self, method: str, params: Mapping[str, str], response_type: Type[ResponseT]
    ) -> ResponseT:
        """Sign and execute ``method`` and decode the body as ``response_type``.

        The embedded ``stat`` of the response is not checked; callers use
        ``response.ok`` or ``response.raise_for_status()``.
        """
        request = self._signer.sign_request(Request(self.api_key, method, dict(params)))
        body = self.execute(request)
        try:
            return response_type.from_xml(body)
        except DecodeError as exc:
            structured_log(
                self.logger,
                "flickr_decode_error",
                level=logging.WARNING,
                method=method,
                error=str(exc),
            )
            raise

    def photos_search(self, params: Mapping[str, str]) -> PhotosSearchResponse:
        """Call ``flickr.photos.search`` with the given query arguments."""

        return self.call(METHOD_PHOTOS_SEARCH, params, PhotosSearchResponse)

    def photos_get_sizes(self, params: Mapping[str, str]) -> PhotosGetSizesResponse:
        """Call ``flickr.photos.getSizes``; ``params`` usually holds ``photo_id``."""

        return self.call(METHOD_PHOTOS_GET_SIZES, params, PhotosGetSizesResponse)
