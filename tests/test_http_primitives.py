"""
Unit tests for HTTP primitives.

Tests the Response class to ensure it validates its invariants
and stays immutable.
"""

import dataclasses

import pytest

from lw_http_core.buffer import BodyBuffer
from lw_http_core.http_primitives import Response


class TestResponse:
    """Test Response class functionality."""

    def test_from_buffer(self) -> None:
        """Test creating a Response from a buffer."""
        buffer = BodyBuffer()
        buffer.append(b"Hello")
        response = Response.from_buffer(200, buffer)

        assert response.status_code == 200
        assert response.length == 5
        assert response.raw == b"Hello\x00"
        assert response.body == b"Hello"

    def test_empty_body(self) -> None:
        """Test a response without body still carries the terminator."""
        response = Response.from_buffer(204, BodyBuffer())
        assert response.length == 0
        assert response.raw == b"\x00"
        assert response.body == b""

    def test_body_with_nul_bytes(self) -> None:
        """Test the body may contain NUL bytes itself."""
        response = Response(status_code=200, raw=b"a\x00b\x00", length=3)
        assert response.body == b"a\x00b"

    def test_missing_terminator(self) -> None:
        """Test raw without terminator is rejected."""
        with pytest.raises(ValueError):
            Response(status_code=200, raw=b"Hello", length=5)

    def test_length_mismatch(self) -> None:
        """Test a length that does not match raw is rejected."""
        with pytest.raises(ValueError):
            Response(status_code=200, raw=b"Hello\x00", length=3)

    def test_invalid_status_code(self) -> None:
        """Test a non-int status code is rejected."""
        with pytest.raises(ValueError):
            Response(status_code="200", raw=b"\x00", length=0)

    def test_is_success(self) -> None:
        """Test the 2xx check."""
        assert Response(status_code=200, raw=b"\x00", length=0).is_success
        assert not Response(status_code=404, raw=b"\x00", length=0).is_success

    def test_text(self) -> None:
        """Test decoding the body."""
        response = Response(status_code=200, raw="héllo".encode() + b"\x00", length=6)
        assert response.text() == "héllo"

    def test_immutable(self) -> None:
        """Test Response cannot be modified."""
        response = Response(status_code=200, raw=b"\x00", length=0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            response.status_code = 500
