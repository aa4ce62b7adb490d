"""
lw_http_core - Lightweight synchronous HTTP request core

A small blocking HTTP GET client: create a request for a URI, set
headers, execute it step by step over a pluggable transport and read
the status, body, headers and cookies back.
"""

__version__ = "0.1.0"
__author__ = "Developer"
__email__ = "dev@example.com"

# Import main components for easy access
from .http_primitives import Response
from .request import Request, request_new, request_free
from .collector import ResponseCollector, CollectorState
from .buffer import BodyBuffer
from .cookies import CookieMatch, extract_cookie
from .headers import DEFAULT_HEADERS, DEFAULT_USER_AGENT
from .transport import StepStatus, Transport, H11Transport, MockTransport
from .exceptions import (
    HTTPCoreError,
    InvalidArgumentError,
    TransportError,
    PrepareFailedError,
    HeaderNotFoundError,
    CookieNotFoundError,
)

__all__ = [
    "Response",
    "Request",
    "request_new",
    "request_free",
    "ResponseCollector",
    "CollectorState",
    "BodyBuffer",
    "CookieMatch",
    "extract_cookie",
    "DEFAULT_HEADERS",
    "DEFAULT_USER_AGENT",
    "StepStatus",
    "Transport",
    "H11Transport",
    "MockTransport",
    "HTTPCoreError",
    "InvalidArgumentError",
    "TransportError",
    "PrepareFailedError",
    "HeaderNotFoundError",
    "CookieNotFoundError",
]
