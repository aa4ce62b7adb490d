"""
Unit tests for BodyBuffer.
"""

import pytest

from lw_http_core.buffer import BodyBuffer, TERMINATOR
from lw_http_core.exceptions import InvalidArgumentError


class TestBodyBuffer:
    """Test BodyBuffer functionality."""

    def test_empty_buffer(self) -> None:
        """Test a fresh buffer."""
        buffer = BodyBuffer()
        assert buffer.length == 0
        assert len(buffer) == 0
        assert not buffer.terminated
        assert buffer.getvalue() == b""

    def test_append_preserves_order(self, sample_stream_data) -> None:
        """Test chunks are concatenated in append order."""
        buffer = BodyBuffer()
        for chunk in sample_stream_data:
            buffer.append(chunk)

        assert buffer.getvalue() == b"Hello, World!"
        assert buffer.length == sum(len(c) for c in sample_stream_data)

    def test_append_none(self) -> None:
        """Test appending None adds nothing."""
        buffer = BodyBuffer()
        assert buffer.append(None) == 0
        assert buffer.length == 0

    def test_append_with_size(self) -> None:
        """Test appending a prefix of a chunk."""
        buffer = BodyBuffer()
        assert buffer.append(b"abcdef", 3) == 3
        assert buffer.getvalue() == b"abc"

    @pytest.mark.parametrize("size", [-1, 7])
    def test_append_invalid_size(self, size) -> None:
        """Test sizes outside the chunk are rejected."""
        buffer = BodyBuffer()
        with pytest.raises(InvalidArgumentError):
            buffer.append(b"abcdef", size)

    def test_binary_data(self) -> None:
        """Test NUL and high bytes survive accumulation."""
        buffer = BodyBuffer()
        buffer.append(b"\x00\xff")
        buffer.append(b"\x00")
        assert buffer.getvalue() == b"\x00\xff\x00"
        assert buffer.length == 3

    def test_terminate(self) -> None:
        """Test terminate adds one uncounted NUL byte."""
        buffer = BodyBuffer()
        buffer.append(b"body")
        raw = buffer.terminate()

        assert raw == b"body" + TERMINATOR
        assert buffer.length == 4
        assert buffer.terminated

    def test_terminate_twice(self) -> None:
        """Test terminating again does not add another byte."""
        buffer = BodyBuffer()
        buffer.append(b"x")
        assert buffer.terminate() == buffer.terminate() == b"x\x00"

    def test_append_after_terminate(self) -> None:
        """Test a terminated buffer rejects more data."""
        buffer = BodyBuffer()
        buffer.terminate()
        with pytest.raises(InvalidArgumentError):
            buffer.append(b"late")

    def test_clear(self) -> None:
        """Test clear releases the accumulated bytes."""
        buffer = BodyBuffer()
        buffer.append(b"partial")
        buffer.clear()

        assert buffer.length == 0
        assert buffer.getvalue() == b""
        assert not buffer.terminated

    def test_large_accumulation(self, sample_large_stream_data) -> None:
        """Test many appends keep every byte in place."""
        buffer = BodyBuffer()
        for chunk in sample_large_stream_data:
            buffer.append(chunk)

        data = buffer.getvalue()
        assert len(data) == 100 * 1024
        for i in range(100):
            assert data[i * 1024:(i + 1) * 1024] == bytes([i]) * 1024
