"""
Network utilities for lw_http_core.

This module provides helper functions used by the socket transport:
URL parsing, Host header formatting, SSL context setup and blocking
connection establishment.
"""

import socket
import ssl
from typing import Optional, Tuple, Union
from urllib.parse import urlparse


SUPPORTED_SCHEMES = ("http", "https")


def parse_url(url: str) -> Tuple[str, str, int, str]:
    """
    Parse URL into components.

    Args:
        url: URL string to parse

    Returns:
        Tuple of (scheme, host, port, target)

    Raises:
        ValueError: If URL is malformed or uses an unsupported scheme
    """
    parsed = urlparse(url)

    scheme = (parsed.scheme or "http").lower()
    if scheme not in SUPPORTED_SCHEMES:
        raise ValueError(f"Unsupported scheme: {scheme}")

    host = parsed.hostname or ""
    if not host:
        raise ValueError("No hostname found in URL")

    # urlparse raises ValueError itself for out-of-range ports
    port = parsed.port
    if port is None:
        port = 443 if scheme == "https" else 80
    port = validate_port(port)

    # Fragments never go on the wire
    target = parsed.path or "/"
    if parsed.query:
        target += "?" + parsed.query

    return scheme, host, port, target


def format_host_header(host: str, port: int, scheme: str) -> str:
    """
    Format host header for HTTP requests.

    Args:
        host: Hostname
        port: Port number
        scheme: URL scheme

    Returns:
        Formatted host header string
    """
    if ":" in host:
        host = f"[{host}]"
    if (scheme == "https" and port == 443) or (scheme == "http" and port == 80):
        return host
    return f"{host}:{port}"


def validate_port(port: Union[int, str]) -> int:
    """
    Validate and convert port to integer.

    Args:
        port: Port number (int or string)

    Returns:
        Port as integer

    Raises:
        ValueError: If port is invalid
    """
    try:
        port_int = int(port)
    except (ValueError, TypeError):
        raise ValueError(f"Invalid port: {port}")

    if not (1 <= port_int <= 65535):
        raise ValueError(f"Port must be between 1 and 65535, got {port_int}")

    return port_int


def create_ssl_context(
    verify_mode: int = ssl.CERT_REQUIRED,
    check_hostname: bool = True,
) -> ssl.SSLContext:
    """
    Create an SSL context for HTTPS requests.

    Args:
        verify_mode: SSL verification mode
        check_hostname: Whether to verify hostname

    Returns:
        Configured SSL context
    """
    context = ssl.create_default_context()
    context.check_hostname = check_hostname
    context.verify_mode = verify_mode
    context.set_alpn_protocols(["http/1.1"])
    context.options |= ssl.OP_NO_COMPRESSION
    context.minimum_version = ssl.TLSVersion.TLSv1_2
    return context


def create_connection(
    scheme: str,
    host: str,
    port: int,
    timeout: Optional[float] = None,
    ssl_context: Optional[ssl.SSLContext] = None,
) -> socket.socket:
    """
    Open a blocking connection to a host, wrapped in TLS for https.

    Args:
        scheme: URL scheme ("http" or "https")
        host: Hostname or IP address
        port: Port number
        timeout: Connect timeout in seconds (None for blocking)
        ssl_context: Context used for https (a default one is created if None)

    Returns:
        Connected socket

    Raises:
        OSError: If the connection or TLS handshake fails
    """
    sock = socket.create_connection((host, port), timeout=timeout)
    try:
        sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
        if scheme == "https":
            context = ssl_context or create_ssl_context()
            sock = context.wrap_socket(sock, server_hostname=host)
    except Exception:
        sock.close()
        raise
    return sock
