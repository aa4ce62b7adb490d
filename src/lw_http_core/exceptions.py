"""
Custom exceptions for lw_http_core.

This module defines the exception hierarchy used throughout
the library for error handling and debugging.
"""

from typing import Optional


class HTTPCoreError(Exception):
    """Base exception for all lw_http_core errors."""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class InvalidArgumentError(HTTPCoreError):
    """Raised when an argument is absent or malformed."""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"Invalid argument: {message}", cause)


class TransportError(HTTPCoreError):
    """Raised when the transport fails to create, configure or drive a request."""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"Transport error: {message}", cause)


class PrepareFailedError(TransportError):
    """Raised when the transport cannot prepare a request for processing."""

    def __init__(self, uri: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"prepare failed for {uri}", cause)
        self.uri = uri


class HeaderNotFoundError(HTTPCoreError):
    """Raised when the transport has no value for a header."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Header not found: {name}")
        self.name = name


class CookieNotFoundError(HTTPCoreError):
    """Raised when a cookie is missing from the Set-Cookie header."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Cookie not found: {name}")
        self.name = name
