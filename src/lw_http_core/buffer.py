"""
Growable body buffer for lw_http_core.

The collector appends every body chunk it receives to a BodyBuffer and
terminates the buffer once the exchange is done.
"""

import logging
from typing import Optional

from .exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)


TERMINATOR = b"\x00"


class BodyBuffer:
    """
    Append-only byte buffer with an explicit terminator.

    Chunks are copied to the end of the buffer in the order they are
    appended. ``terminate`` adds a single NUL byte that is not counted
    in ``length``.
    """

    def __init__(self) -> None:
        self._data = bytearray()
        self._length = 0
        self._terminated = False

    def append(self, chunk: Optional[bytes], size: Optional[int] = None) -> int:
        """
        Append a chunk to the end of the buffer.

        Args:
            chunk: The bytes to append. None is accepted and ignored.
            size: Number of bytes of ``chunk`` to take, defaults to all of it

        Returns:
            The number of bytes appended

        Raises:
            InvalidArgumentError: If the buffer is terminated or size is invalid
        """
        if self._terminated:
            raise InvalidArgumentError("cannot append to a terminated buffer")
        if chunk is None:
            return 0

        if size is None:
            size = len(chunk)
        if size < 0 or size > len(chunk):
            raise InvalidArgumentError(
                f"chunk size {size} outside of 0..{len(chunk)}"
            )

        self._data += memoryview(chunk)[:size]
        self._length += size
        return size

    def terminate(self) -> bytes:
        """
        Append the terminator and return the buffer contents.

        Returns:
            The body followed by one NUL byte
        """
        if not self._terminated:
            self._data += TERMINATOR
            self._terminated = True
        return bytes(self._data)

    def clear(self) -> None:
        """Release every accumulated byte."""
        if self._length:
            logger.debug(f"Discarding {self._length} buffered bytes")
        self._data = bytearray()
        self._length = 0
        self._terminated = False

    @property
    def length(self) -> int:
        """Number of body bytes, terminator excluded."""
        return self._length

    @property
    def terminated(self) -> bool:
        """Whether ``terminate`` has been called."""
        return self._terminated

    def getvalue(self) -> bytes:
        """Return the body bytes accumulated so far, without terminator."""
        return bytes(self._data[: self._length])

    def __len__(self) -> int:
        return self._length
