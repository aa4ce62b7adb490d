"""
HTTP/1.1 socket transport for lw_http_core.

This module implements the Transport interface on top of a blocking
socket and the h11 protocol state machine. Each processing step advances
the exchange by one h11 event, so body data reaches the caller chunk by
chunk as the server sends it.
"""

import logging
import socket
import ssl
from typing import Callable, List, Optional, Tuple

import h11

from .base import StepStatus, Transport
from .utils import create_connection, format_host_header, parse_url

logger = logging.getLogger(__name__)


ConnectionFactory = Callable[
    [str, str, int, Optional[float], Optional[ssl.SSLContext]], socket.socket
]


class H11Handle:
    """State of one HTTP/1.1 exchange."""

    def __init__(self) -> None:
        self.uri: Optional[str] = None
        self.scheme = "http"
        self.host = ""
        self.port = 80
        self.target = "/"
        self.method: Optional[str] = None
        self.request_headers: List[Tuple[str, str]] = []

        self.sock: Optional[socket.socket] = None
        self.connection: Optional[h11.Connection] = None
        self.request_sent = False

        self.status_code = 0
        self.response_headers: List[Tuple[bytes, bytes]] = []
        self.chunk: Optional[bytes] = None

    def close(self) -> None:
        """Close the socket, if any."""
        if self.sock is not None:
            try:
                self.sock.close()
            finally:
                self.sock = None
        self.connection = None


class H11Transport(Transport):
    """
    Blocking HTTP/1.1 transport.

    ``prepare`` opens the connection, the first ``process`` step sends the
    request and every following step consumes one h11 event from the
    response.
    """

    # Default configuration
    DEFAULT_CONNECT_TIMEOUT = 30.0  # 30 seconds
    DEFAULT_READ_TIMEOUT = 30.0  # 30 seconds
    DEFAULT_READ_SIZE = 65536  # 64KB reads

    SUPPORTED_METHODS = ("GET",)

    def __init__(
        self,
        connect_timeout: Optional[float] = None,
        read_timeout: Optional[float] = None,
        read_size: Optional[int] = None,
        ssl_context: Optional[ssl.SSLContext] = None,
        connection_factory: Optional[ConnectionFactory] = None,
    ):
        """
        Initialize the transport.

        Args:
            connect_timeout: Timeout for establishing connections in seconds
            read_timeout: Timeout for each socket read in seconds
            read_size: Maximum number of bytes per socket read
            ssl_context: SSL context used for https URIs
            connection_factory: Callable opening the socket, defaults to
                ``create_connection``
        """
        self._connect_timeout = connect_timeout or self.DEFAULT_CONNECT_TIMEOUT
        self._read_timeout = read_timeout or self.DEFAULT_READ_TIMEOUT
        self._read_size = read_size or self.DEFAULT_READ_SIZE
        self._ssl_context = ssl_context
        self._connection_factory = connection_factory or create_connection

    def create_handle(self) -> H11Handle:
        return H11Handle()

    def destroy_handle(self, handle: H11Handle) -> None:
        handle.close()

    def set_uri(self, handle: H11Handle, uri: str) -> bool:
        try:
            scheme, host, port, target = parse_url(uri)
        except ValueError as e:
            logger.warning(f"Rejected uri {uri}: {e}")
            return False

        handle.uri = uri
        handle.scheme = scheme
        handle.host = host
        handle.port = port
        handle.target = target
        return True

    def set_method(self, handle: H11Handle, method: str) -> bool:
        if method not in self.SUPPORTED_METHODS:
            logger.warning(f"Unsupported method: {method}")
            return False
        handle.method = method
        return True

    def set_header(self, handle: H11Handle, name: str, value: str) -> None:
        lowered = name.lower()
        handle.request_headers = [
            (n, v) for n, v in handle.request_headers if n.lower() != lowered
        ]
        handle.request_headers.append((name, value))

    def get_header(self, handle: H11Handle, name: str) -> Optional[str]:
        lowered = name.lower().encode("latin-1")
        values = [
            value.decode("latin-1")
            for header_name, value in handle.response_headers
            if header_name.lower() == lowered
        ]
        if not values:
            return None
        return "; ".join(values)

    def prepare(self, handle: H11Handle) -> bool:
        if handle.uri is None or handle.method is None:
            logger.error("Cannot prepare a request without uri and method")
            return False

        # Preparing again starts a fresh exchange
        handle.close()
        handle.request_sent = False
        handle.status_code = 0
        handle.response_headers = []
        handle.chunk = None

        try:
            sock = self._connection_factory(
                handle.scheme,
                handle.host,
                handle.port,
                self._connect_timeout,
                self._ssl_context,
            )
        except OSError as e:
            logger.error(f"Failed to connect to {handle.host}:{handle.port}: {e}")
            return False

        try:
            sock.settimeout(self._read_timeout)
        except OSError as e:
            sock.close()
            logger.error(f"Failed to connect to {handle.host}:{handle.port}: {e}")
            return False

        handle.sock = sock
        handle.connection = h11.Connection(h11.CLIENT)
        logger.debug(f"Connected to {handle.host}:{handle.port} ({handle.scheme})")
        return True

    def process(self, handle: H11Handle) -> StepStatus:
        handle.chunk = None
        if handle.connection is None or handle.sock is None:
            logger.error("Request has not been prepared")
            return StepStatus.ERROR

        try:
            if not handle.request_sent:
                self._send_request(handle)
                handle.request_sent = True
                return StepStatus.PENDING

            event = self._next_event(handle)
        except (OSError, ValueError, h11.ProtocolError) as e:
            # ValueError covers header text h11 cannot encode as ASCII
            logger.error(f"{handle.method} {handle.uri} failed: {e}")
            return StepStatus.ERROR

        if isinstance(event, h11.Response):
            handle.status_code = event.status_code
            handle.response_headers = list(event.headers)
            return StepStatus.PENDING

        if isinstance(event, h11.Data):
            handle.chunk = bytes(event.data)
            return StepStatus.PENDING

        if isinstance(event, h11.EndOfMessage):
            return StepStatus.DONE

        if isinstance(event, h11.ConnectionClosed):
            logger.error("Connection closed by server before response completed")
            return StepStatus.ERROR

        # InformationalResponse and anything else carries no body
        return StepStatus.PENDING

    def get_body(self, handle: H11Handle) -> Optional[bytes]:
        return handle.chunk

    def get_body_len(self, handle: H11Handle) -> int:
        return len(handle.chunk) if handle.chunk is not None else 0

    def get_status_code(self, handle: H11Handle) -> int:
        return handle.status_code

    def _send_request(self, handle: H11Handle) -> None:
        """
        Send the request head and end of message.

        Args:
            handle: The prepared handle
        """
        headers = list(handle.request_headers)
        if not any(name.lower() == "host" for name, _ in headers):
            headers.insert(
                0, ("Host", format_host_header(handle.host, handle.port, handle.scheme))
            )

        data = handle.connection.send(
            h11.Request(method=handle.method, target=handle.target, headers=headers)
        )
        data += handle.connection.send(h11.EndOfMessage())
        handle.sock.sendall(data)
        logger.debug(f"Sent {len(data)} bytes to {handle.host}:{handle.port}")

    def _next_event(self, handle: H11Handle) -> h11.Event:
        """
        Read from the socket until h11 produces an event.

        Args:
            handle: The prepared handle

        Returns:
            The next h11 event
        """
        while True:
            event = handle.connection.next_event()
            if event is not h11.NEED_DATA:
                return event

            # An empty read tells h11 the peer closed the connection
            data = handle.sock.recv(self._read_size)
            handle.connection.receive_data(data)
