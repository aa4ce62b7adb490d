"""
Mock transport implementation for testing.

This module provides a scripted Transport that can be used for unit
testing without requiring actual network connections. Every handle it
creates is counted so tests can verify that nothing leaks.
"""

from typing import Any, Dict, Iterable, List, Optional, Tuple

from .base import StepStatus, Transport


# One scripted processing step: the status it reports and the chunk it exposes
Step = Tuple[StepStatus, Optional[bytes]]


class MockHandle:
    """In-memory state of one mock exchange."""

    def __init__(self, steps: Iterable[Step]):
        """
        Initialize the mock handle.

        Args:
            steps: Processing steps to replay, in order.
        """
        self.uri: Optional[str] = None
        self.method: Optional[str] = None
        self.request_headers: List[Tuple[str, str]] = []
        self.chunk: Optional[bytes] = None
        self.prepared = False
        self.destroyed = False
        self._steps = list(steps)
        self._position = 0

    def next_step(self) -> Step:
        """Return the next scripted step, or DONE once the script runs out."""
        if self._position >= len(self._steps):
            return StepStatus.DONE, None
        step = self._steps[self._position]
        self._position += 1
        return step


class MockTransport(Transport):
    """
    Mock transport for testing.

    The transport replays a fixed sequence of processing steps and serves
    response headers from a dictionary. Request headers can be echoed back
    through ``get_header`` so a set/get round trip can be observed.
    """

    def __init__(
        self,
        steps: Optional[Iterable[Step]] = None,
        status_code: int = 200,
        response_headers: Optional[Dict[str, str]] = None,
        echo_headers: bool = True,
        fail_create: bool = False,
        fail_set_uri: bool = False,
        fail_set_method: bool = False,
        fail_prepare: bool = False,
    ):
        """
        Initialize the mock transport.

        Args:
            steps: Processing steps replayed by every handle
            status_code: Status code reported after processing
            response_headers: Headers returned by ``get_header``
            echo_headers: Whether request headers are visible to ``get_header``
            fail_create: Make ``create_handle`` return None
            fail_set_uri: Make ``set_uri`` fail
            fail_set_method: Make ``set_method`` fail
            fail_prepare: Make ``prepare`` fail
        """
        self._steps: List[Step] = list(steps or [])
        self._status_code = status_code
        self._response_headers = dict(response_headers or {})
        self._echo_headers = echo_headers
        self._fail_create = fail_create
        self._fail_set_uri = fail_set_uri
        self._fail_set_method = fail_set_method
        self._fail_prepare = fail_prepare

        self.handles: List[MockHandle] = []
        self.handles_created = 0
        self.handles_destroyed = 0
        self.prepare_calls = 0
        self.process_calls = 0
        self.get_header_calls = 0

    @property
    def open_handles(self) -> int:
        """Number of handles created and not yet destroyed."""
        return self.handles_created - self.handles_destroyed

    def create_handle(self) -> Optional[MockHandle]:
        if self._fail_create:
            return None
        handle = MockHandle(self._steps)
        self.handles.append(handle)
        self.handles_created += 1
        return handle

    def destroy_handle(self, handle: MockHandle) -> None:
        if handle.destroyed:
            raise RuntimeError("Handle already destroyed")
        handle.destroyed = True
        self.handles_destroyed += 1

    def set_uri(self, handle: MockHandle, uri: str) -> bool:
        if self._fail_set_uri:
            return False
        handle.uri = uri
        return True

    def set_method(self, handle: MockHandle, method: str) -> bool:
        if self._fail_set_method:
            return False
        handle.method = method
        return True

    def set_header(self, handle: MockHandle, name: str, value: str) -> None:
        lowered = name.lower()
        handle.request_headers = [
            (n, v) for n, v in handle.request_headers if n.lower() != lowered
        ]
        handle.request_headers.append((name, value))

    def get_header(self, handle: MockHandle, name: str) -> Optional[str]:
        self.get_header_calls += 1
        lowered = name.lower()
        for header_name, header_value in self._response_headers.items():
            if header_name.lower() == lowered:
                return header_value
        if self._echo_headers:
            for header_name, header_value in handle.request_headers:
                if header_name.lower() == lowered:
                    return header_value
        return None

    def prepare(self, handle: MockHandle) -> bool:
        self.prepare_calls += 1
        if self._fail_prepare:
            return False
        handle.prepared = True
        return True

    def process(self, handle: MockHandle) -> StepStatus:
        self.process_calls += 1
        status, chunk = handle.next_step()
        handle.chunk = chunk
        return status

    def get_body(self, handle: MockHandle) -> Optional[bytes]:
        return handle.chunk

    def get_body_len(self, handle: MockHandle) -> int:
        return len(handle.chunk) if handle.chunk is not None else 0

    def get_status_code(self, handle: MockHandle) -> int:
        return self._status_code
