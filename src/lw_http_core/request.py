"""
HTTP request lifecycle for lw_http_core.

This module implements the Request class that owns one transport handle
bound to a URI, configures it, executes it and reads headers and cookies
back from it.
"""

import logging
from typing import Any, Optional

from .collector import ResponseCollector
from .cookies import CookieMatch, extract_cookie
from .exceptions import (
    CookieNotFoundError,
    HeaderNotFoundError,
    HTTPCoreError,
    InvalidArgumentError,
    TransportError,
)
from .headers import DEFAULT_HEADERS
from .http_primitives import Response
from .transport.base import Transport
from .transport.h11_transport import H11Transport

logger = logging.getLogger(__name__)


class Request:
    """
    A single HTTP GET request.

    The request exclusively owns its transport handle from construction
    until ``close``. It can be used as a context manager.
    """

    METHOD = "GET"
    SET_COOKIE = "Set-Cookie"

    def __init__(
        self,
        uri: str,
        transport: Optional[Transport] = None,
        *,
        strict_headers: bool = False,
        cookie_match: CookieMatch = CookieMatch.SUBSTRING,
        cookie_header_capacity: Optional[int] = None,
        default_headers: bool = False,
    ):
        """
        Create a request bound to a URI.

        Args:
            uri: The target URI
            transport: Transport performing the exchange, H11Transport if None
            strict_headers: Raise on invalid ``set_header`` input instead of
                ignoring it
            cookie_match: How ``get_cookie`` locates a cookie name
            cookie_header_capacity: Truncate the Set-Cookie text to
                capacity - 1 characters before parsing, None to keep it whole
            default_headers: Apply the default browser headers right away

        Raises:
            InvalidArgumentError: If uri is empty or an option is invalid
            TransportError: If the transport cannot create or configure
                the handle
        """
        if not uri:
            raise InvalidArgumentError("uri must not be empty")
        if cookie_header_capacity is not None and cookie_header_capacity <= 0:
            raise InvalidArgumentError(
                f"cookie_header_capacity must be positive, got {cookie_header_capacity}"
            )

        self._uri = uri
        self._transport = transport if transport is not None else H11Transport()
        self._strict_headers = strict_headers
        self._cookie_match = cookie_match
        self._cookie_header_capacity = cookie_header_capacity
        self._handle: Optional[Any] = None

        handle = self._transport.create_handle()
        if handle is None:
            raise TransportError("failed to create request handle")

        try:
            if not self._transport.set_uri(handle, uri):
                logger.warning(f"Invalid uri: {uri}")
                raise TransportError(f"invalid uri: {uri}")
            if not self._transport.set_method(handle, self.METHOD):
                logger.warning("Set request type error")
                raise TransportError(f"failed to set method {self.METHOD}")
        except Exception:
            self._transport.destroy_handle(handle)
            raise

        self._handle = handle
        logger.debug(f"Created request for {uri}")

        if default_headers:
            self.apply_default_headers()

    @property
    def uri(self) -> str:
        """The target URI."""
        return self._uri

    @property
    def method(self) -> str:
        """The request method."""
        return self.METHOD

    @property
    def transport(self) -> Transport:
        """The transport performing the exchange."""
        return self._transport

    @property
    def handle(self) -> Optional[Any]:
        """The transport handle, None once the request is closed."""
        return self._handle

    @property
    def is_closed(self) -> bool:
        """Check if the request has been closed."""
        return self._handle is None

    def execute(self) -> Response:
        """
        Send the request and collect the complete response.

        Returns:
            The response with status code and terminated body

        Raises:
            InvalidArgumentError: If the request is closed
            PrepareFailedError: If the transport cannot prepare the request
            TransportError: If the exchange fails
        """
        if self._handle is None:
            raise InvalidArgumentError("request is closed")

        collector = ResponseCollector(self._transport, self._handle, self._uri)
        return collector.collect()

    def set_header(self, name: Optional[str], value: Optional[str]) -> None:
        """
        Set a request header.

        Invalid input is ignored unless the request was created with
        ``strict_headers=True``.

        Args:
            name: Header name
            value: Header value

        Raises:
            InvalidArgumentError: In strict mode, if the request is closed or
                name or value is None
        """
        if self._handle is None or name is None or value is None:
            if self._strict_headers:
                raise InvalidArgumentError(
                    f"cannot set header {name!r} (closed: {self.is_closed})"
                )
            logger.debug(f"Skipping header {name!r}")
            return

        self._transport.set_header(self._handle, name, value)

    def apply_default_headers(self) -> None:
        """Set the default browser headers, in order."""
        for name, value in DEFAULT_HEADERS:
            self.set_header(name, value)

    def get_header(self, name: str, max_len: Optional[int] = None) -> str:
        """
        Get a header value.

        Args:
            name: Header name (case-insensitive)
            max_len: Output capacity including the terminator slot; the value
                is cut to max_len - 1 characters. None keeps it whole.

        Returns:
            The header value

        Raises:
            InvalidArgumentError: If name or max_len is invalid
            HeaderNotFoundError: If the header is not present
        """
        self._check_lookup(name, max_len)

        value = self._transport.get_header(self._handle, name)
        if value is None:
            logger.warning(f"Cant get http header {name}")
            raise HeaderNotFoundError(name)

        return _truncate(value, max_len)

    def get_cookie(self, name: str, max_len: Optional[int] = None) -> str:
        """
        Get a cookie value from the Set-Cookie header.

        Args:
            name: Cookie name (case-sensitive)
            max_len: Output capacity including the terminator slot, as in
                ``get_header``

        Returns:
            The cookie value

        Raises:
            InvalidArgumentError: If name or max_len is invalid
            HeaderNotFoundError: If there is no Set-Cookie header
            CookieNotFoundError: If the cookie is not in the header
        """
        self._check_lookup(name, max_len)

        raw = self.get_header(self.SET_COOKIE, self._cookie_header_capacity)

        value = extract_cookie(raw, name, self._cookie_match)
        if value is None:
            logger.warning(f"No cookie: {name}")
            raise CookieNotFoundError(name)

        value = _truncate(value, max_len)
        logger.debug(f"Parse Cookie: {name}={value}")
        return value

    def close(self) -> None:
        """Release the transport handle. Closing twice is a no-op."""
        if self._handle is None:
            return

        handle, self._handle = self._handle, None
        self._transport.destroy_handle(handle)
        logger.debug(f"Closed request for {self._uri}")

    def _check_lookup(self, name: Optional[str], max_len: Optional[int]) -> None:
        if not name or (max_len is not None and max_len <= 0):
            logger.error(f"Invalid parameter: name={name!r}, max_len={max_len}")
            raise InvalidArgumentError(f"name={name!r}, max_len={max_len}")
        if self._handle is None:
            logger.error("Invalid parameter: request is closed")
            raise InvalidArgumentError("request is closed")

    def __enter__(self) -> "Request":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.is_closed else "open"
        return f"<Request {self.METHOD} {self._uri} ({state})>"


def _truncate(value: str, max_len: Optional[int]) -> str:
    """Cut a value to fit an output of max_len slots, one kept for the terminator."""
    if max_len is None:
        return value
    return value[: max_len - 1]


def request_new(
    uri: Optional[str],
    transport: Optional[Transport] = None,
    **options: Any,
) -> Optional[Request]:
    """
    Create a request, returning None instead of raising.

    Args:
        uri: The target URI
        transport: Transport performing the exchange
        **options: Keyword options accepted by ``Request``

    Returns:
        The new request, or None if it could not be created
    """
    try:
        return Request(uri, transport, **options)
    except HTTPCoreError as e:
        logger.warning(f"Failed to create request for {uri!r}: {e}")
        return None


def request_free(request: Optional[Request]) -> None:
    """Close a request. None is accepted and ignored."""
    if request is None:
        return
    request.close()
