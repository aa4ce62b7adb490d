"""
Pytest configuration for lw_http_core tests.

This file contains shared fixtures and configuration
for all tests in the project.
"""

import socket
from typing import Callable, List, Optional

import pytest

from lw_http_core.transport import MockTransport, StepStatus


@pytest.fixture
def hello_world_steps():
    """Steps producing "Hello, World!" in two chunks."""
    return [
        (StepStatus.PENDING, b"Hello, "),
        (StepStatus.PENDING, b"World!"),
        (StepStatus.DONE, None),
    ]


@pytest.fixture
def sample_set_cookie():
    """Raw Set-Cookie header text with two cookies and an attribute."""
    return "a=1; sess=abc123; path=/"


@pytest.fixture
def sample_stream_data():
    """Sample chunks for testing, including an empty one."""
    return [
        b"Hello",
        b", ",
        b"",
        b"World",
        b"!",
    ]


@pytest.fixture
def sample_large_stream_data():
    """Sample large chunk data for testing."""
    return [bytes([i]) * 1024 for i in range(100)]  # 100KB of data


@pytest.fixture
def mock_transport():
    """Create a MockTransport factory."""
    def _create_transport(**kwargs) -> MockTransport:
        return MockTransport(**kwargs)
    return _create_transport


@pytest.fixture
def steps_from_chunks():
    """Turn a list of chunks into PENDING steps followed by DONE."""
    def _steps(chunks: List[Optional[bytes]]):
        steps = [(StepStatus.PENDING, chunk) for chunk in chunks]
        steps.append((StepStatus.DONE, None))
        return steps
    return _steps


@pytest.fixture
def socket_pair():
    """Create a connected socket pair, closed after the test."""
    client, server = socket.socketpair()
    yield client, server
    client.close()
    server.close()


@pytest.fixture
def connection_factory(socket_pair) -> Callable:
    """
    Connection factory for H11Transport returning the client end of a
    socket pair. Calls are recorded on the factory.
    """
    client, _ = socket_pair

    def _factory(scheme, host, port, timeout, ssl_context):
        _factory.calls.append((scheme, host, port))
        return client

    _factory.calls = []
    return _factory
