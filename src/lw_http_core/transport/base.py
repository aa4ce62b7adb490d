"""
Transport interface for lw_http_core.

This module defines the Transport interface that performs the actual
HTTP exchange. A Request only ever talks to its transport through these
operations; handles are opaque objects owned by the transport.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Optional


class StepStatus(Enum):
    """Outcome of a single processing step."""
    PENDING = "pending"   # More data may follow
    DONE = "done"         # Exchange finished
    ERROR = "error"       # Exchange failed, stop processing


class Transport(ABC):
    """
    Interface for transport implementations.

    The exchange is driven one step at a time: after ``prepare`` the
    caller invokes ``process`` repeatedly and, after each non-error step,
    reads whatever partial body the step made available.
    """

    @abstractmethod
    def create_handle(self) -> Optional[Any]:
        """
        Create a handle for one exchange.

        Returns:
            A new handle, or None if the transport cannot create one.
        """
        pass

    @abstractmethod
    def destroy_handle(self, handle: Any) -> None:
        """
        Release a handle and every resource attached to it.

        Args:
            handle: A handle returned by ``create_handle``.
        """
        pass

    @abstractmethod
    def set_uri(self, handle: Any, uri: str) -> bool:
        """
        Bind the target URI to a handle.

        Returns:
            True on success, False if the URI is rejected.
        """
        pass

    @abstractmethod
    def set_method(self, handle: Any, method: str) -> bool:
        """
        Set the request method.

        Returns:
            True on success, False if the method is not supported.
        """
        pass

    @abstractmethod
    def set_header(self, handle: Any, name: str, value: str) -> None:
        """Set a request header, replacing any previous value."""
        pass

    @abstractmethod
    def get_header(self, handle: Any, name: str) -> Optional[str]:
        """
        Look up a header by name (case-insensitive).

        Returns:
            The header value, or None if the header is not present.
        """
        pass

    @abstractmethod
    def prepare(self, handle: Any) -> bool:
        """
        Prepare the handle for processing.

        Returns:
            True if the exchange can start, False otherwise.
        """
        pass

    @abstractmethod
    def process(self, handle: Any) -> StepStatus:
        """
        Run a single processing step.

        Returns:
            The status of the exchange after this step.
        """
        pass

    @abstractmethod
    def get_body(self, handle: Any) -> Optional[bytes]:
        """
        Get the body chunk made available by the last step.

        Returns:
            The chunk, or None if the step produced no data.
        """
        pass

    @abstractmethod
    def get_body_len(self, handle: Any) -> int:
        """Get the length of the chunk returned by ``get_body``."""
        pass

    @abstractmethod
    def get_status_code(self, handle: Any) -> int:
        """Get the response status code, or 0 if none was received."""
        pass
