"""
HTTP primitives for lw_http_core.

This module defines the immutable Response produced by executing a
Request.
"""

from dataclasses import dataclass

from .buffer import TERMINATOR, BodyBuffer


StatusCode = int


@dataclass(frozen=True)
class Response:
    """
    Immutable HTTP response representation.

    ``raw`` holds the complete body followed by a single NUL terminator;
    ``length`` is the exact body length and never counts the terminator.
    """

    status_code: StatusCode
    raw: bytes
    length: int

    def __post_init__(self) -> None:
        """Validate response data after initialization."""
        if not isinstance(self.status_code, int):
            raise ValueError("status_code must be int")

        if not isinstance(self.raw, bytes):
            raise ValueError("raw must be bytes")

        if not isinstance(self.length, int) or self.length < 0:
            raise ValueError("length must be a non-negative int")

        if len(self.raw) != self.length + 1 or self.raw[self.length:] != TERMINATOR:
            raise ValueError("raw must be the body followed by exactly one terminator")

    @classmethod
    def from_buffer(cls, status_code: StatusCode, buffer: BodyBuffer) -> "Response":
        """
        Create a Response from a collected body buffer.

        Args:
            status_code: HTTP status code
            buffer: The accumulated body, terminated if not already

        Returns:
            New Response instance
        """
        raw = buffer.terminate()
        return cls(status_code=status_code, raw=raw, length=buffer.length)

    @property
    def body(self) -> bytes:
        """The response body without terminator."""
        return self.raw[: self.length]

    @property
    def is_success(self) -> bool:
        """Check if the status code is 2xx."""
        return 200 <= self.status_code < 300

    def text(self, encoding: str = "utf-8", errors: str = "replace") -> str:
        """Decode the body to text."""
        return self.body.decode(encoding, errors)
