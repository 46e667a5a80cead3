"""
Exported message: the header map and body produced by an export.
"""

from dataclasses import dataclass
from typing import BinaryIO, Dict, List

from ..exceptions import SinkWriteError

CRLF = b"\r\n"


@dataclass
class ExportedMessage:
    """
    Result of exporting a message.

    ``body`` is the root output buffer borrowed from the message's buffer
    pool. It stays valid until the originating message is reset; use
    :meth:`as_bytes` to keep a copy beyond that point.
    """

    header: Dict[str, List[str]]
    body: bytearray

    def header_bytes(self) -> bytes:
        """Render the header block, including the blank separator line."""
        lines = []
        for field, values in self.header.items():
            for value in values:
                lines.append(f"{field}: {value}".encode("utf-8") + CRLF)
        lines.append(CRLF)
        return b"".join(lines)

    def as_bytes(self) -> bytes:
        """Render the full RFC 5322 message as an independent bytes copy."""
        return self.header_bytes() + bytes(self.body)

    def write_to(self, sink: BinaryIO) -> int:
        """
        Write the rendered message to a binary sink.

        Args:
            sink: Any object with a ``write(bytes)`` method

        Returns:
            Number of bytes written

        Raises:
            SinkWriteError: If the sink raises, or stops accepting bytes
        """
        written = 0
        for chunk in (self.header_bytes(), bytes(self.body)):
            offset = 0
            # Sinks may accept only part of a chunk per call
            while offset < len(chunk):
                pending = chunk[offset:] if offset else chunk
                try:
                    result = sink.write(pending)
                except Exception as e:
                    raise SinkWriteError(f"Failed to write message: {e}", written=written) from e
                if result is None:
                    result = len(pending)
                if result <= 0:
                    raise SinkWriteError("Sink accepted no bytes", written=written)
                written += result
                offset += result
        return written
