"""
Byte sink abstractions shared by the writers.
"""

from typing import Protocol


class ByteSink(Protocol):
    """Anything bytes can be written to."""

    def write(self, data: bytes) -> int:
        ...


class BufferWriter:
    """Append-only writer over a ``bytearray``."""

    def __init__(self, buf: bytearray):
        self.buf = buf

    def write(self, data: bytes) -> int:
        self.buf += data
        return len(data)
