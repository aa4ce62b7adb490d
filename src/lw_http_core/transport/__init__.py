"""
Transport components for lw_http_core.

This module provides the Transport interface that drives an HTTP
exchange step by step, together with its h11 and mock implementations.
"""

from .base import StepStatus, Transport
from .h11_transport import H11Handle, H11Transport
from .mock import MockHandle, MockTransport
from .utils import (
    create_connection,
    create_ssl_context,
    format_host_header,
    parse_url,
    validate_port,
)

__all__ = [
    "StepStatus",
    "Transport",
    "H11Handle",
    "H11Transport",
    "MockHandle",
    "MockTransport",
    "create_connection",
    "create_ssl_context",
    "format_host_header",
    "parse_url",
    "validate_port",
]
