"""
Streaming response collector for lw_http_core.

This module drives a prepared transport handle to completion, one
processing step at a time, and accumulates the body chunks each step
makes available.
"""

import logging
from enum import Enum
from typing import Any, Dict, Optional

from .buffer import BodyBuffer
from .exceptions import InvalidArgumentError, PrepareFailedError, TransportError
from .http_primitives import Response
from .transport.base import StepStatus, Transport

logger = logging.getLogger(__name__)


class CollectorState(Enum):
    """States of a response collection."""
    NEW = "new"                 # Not started yet
    PREPARING = "preparing"     # Waiting for the transport to prepare
    PROCESSING = "processing"   # Stepping through the exchange
    DONE = "done"               # Body complete, response returned
    ERROR = "error"             # Exchange failed, nothing returned


class ResponseCollector:
    """
    Collects one complete response from a transport handle.

    A collector is single use: ``collect`` runs the exchange from
    PREPARING to DONE or ERROR and either returns the Response or raises.
    """

    def __init__(self, transport: Transport, handle: Any, uri: str = ""):
        """
        Initialize the collector.

        Args:
            transport: The transport driving the exchange
            handle: The transport handle of the request
            uri: Request URI, used in log and error messages
        """
        if transport is None or handle is None:
            raise InvalidArgumentError("collector needs a transport and a handle")

        self._transport = transport
        self._handle = handle
        self._uri = uri
        self._state = CollectorState.NEW
        self._buffer = BodyBuffer()

        # Metrics
        self._steps = 0
        self._chunks = 0

    @property
    def state(self) -> CollectorState:
        """Current collection state."""
        return self._state

    @property
    def metrics(self) -> Dict[str, Any]:
        """
        Get collection metrics.

        Returns:
            Dictionary with collection metrics
        """
        return {
            "state": self._state.value,
            "steps": self._steps,
            "chunks": self._chunks,
            "bytes_received": self._buffer.length,
        }

    def collect(self) -> Response:
        """
        Run the exchange to completion.

        Returns:
            The complete response

        Raises:
            InvalidArgumentError: If the collector was already used
            PrepareFailedError: If the transport cannot prepare the handle
            TransportError: If a processing step fails
        """
        if self._state is not CollectorState.NEW:
            raise InvalidArgumentError(
                f"collector already used (state: {self._state.value})"
            )

        self._state = CollectorState.PREPARING
        if not self._transport.prepare(self._handle):
            self._state = CollectorState.ERROR
            logger.error(f"Failed to prepare request for {self._uri}")
            raise PrepareFailedError(self._uri)

        self._state = CollectorState.PROCESSING
        while True:
            status = self._transport.process(self._handle)
            self._steps += 1

            if status is StepStatus.ERROR:
                self._fail()

            self._read_chunk()

            if status is StepStatus.DONE:
                break

        status_code = self._transport.get_status_code(self._handle)
        response = Response.from_buffer(status_code, self._buffer)
        self._state = CollectorState.DONE

        logger.debug(
            f"GET {self._uri} -> {status_code} "
            f"({response.length} bytes in {self._chunks} chunks, {self._steps} steps)"
        )
        return response

    def _read_chunk(self) -> None:
        """Append the chunk made available by the last step, if any."""
        chunk: Optional[bytes] = self._transport.get_body(self._handle)
        if chunk is None:
            return

        size = self._transport.get_body_len(self._handle)
        self._buffer.append(chunk, size)
        self._chunks += 1
        logger.debug(f"Received chunk of {size} bytes ({self._buffer.length} total)")

    def _fail(self) -> None:
        """Discard the partial body and raise."""
        self._state = CollectorState.ERROR
        received = self._buffer.length
        self._buffer.clear()
        logger.error(
            f"Processing failed for {self._uri} after {self._steps} steps "
            f"({received} bytes discarded)"
        )
        raise TransportError(f"processing failed for {self._uri}")
