"""
Reusable byte buffer pool.

Part bodies and the root output buffer of an export are ``bytearray`` objects
borrowed from a :class:`BufferPool`. A pool is passed explicitly to each
message; there is no process-wide pool.
"""

import threading
from typing import List, Optional

import structlog

from .config import settings
from .exceptions import BufferPoolError

logger = structlog.get_logger(__name__)


class BufferPool:
    """
    Free list of ``bytearray`` buffers with acquire/release semantics.

    Ownership of a buffer passes to the caller on :meth:`acquire` and back to
    the pool on :meth:`release`. Released buffers are emptied, so a stale
    reference held by the caller reads as empty rather than leaking content
    into the next message.
    """

    def __init__(self, max_size: Optional[int] = None):
        """
        Initialize buffer pool.

        Args:
            max_size: Maximum number of free buffers kept (default: settings)
        """
        self.max_size = settings.buffer_pool_max_size if max_size is None else max_size
        self._free: List[bytearray] = []
        self._lock = threading.Lock()

    @property
    def available(self) -> int:
        """Number of free buffers ready for reuse."""
        with self._lock:
            return len(self._free)

    def acquire(self) -> bytearray:
        """
        Take an empty buffer from the pool, allocating one if none is free.

        Returns:
            Empty bytearray owned by the caller
        """
        with self._lock:
            if self._free:
                return self._free.pop()
        return bytearray()

    def release(self, buf: bytearray) -> None:
        """
        Return a buffer to the pool.

        Args:
            buf: Buffer previously obtained from :meth:`acquire`

        Raises:
            BufferPoolError: If the buffer is already in the free list
        """
        with self._lock:
            if any(free is buf for free in self._free):
                raise BufferPoolError("Buffer released twice")

            del buf[:]
            if len(self._free) < self.max_size:
                self._free.append(buf)
            else:
                logger.debug("buffer_discarded", pool_size=len(self._free))
