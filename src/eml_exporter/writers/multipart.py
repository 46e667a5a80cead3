"""
Boundary-delimited multipart writers.

:class:`SectionWriter` renders one ``multipart/*`` body (RFC 2046, 5.1) into a
shared buffer. :class:`MultipartWriter` keeps a bounded stack of open sections
(mixed, related, alternative) and streams part bodies through the encoder
matching their transfer encoding.
"""

import base64
import secrets
from typing import Dict, List, Optional

import structlog

from ..exceptions import StructureError
from ..models.encoding import Encoding
from .buffer import BufferWriter, ByteSink
from .line_wrappers import CRLF, Base64LineWriter, QuotedPrintableLineWriter
from .quoted_printable import encode_quoted_printable

logger = structlog.get_logger(__name__)

# One section per wrapper kind: mixed > related > alternative
MAX_DEPTH = 3

Header = Dict[str, List[str]]


def generate_boundary() -> str:
    """
    Generate a random multipart boundary.

    Returns:
        60 hex characters from 30 random bytes
    """
    return secrets.token_hex(30)


class PartWriter:
    """Writer for the body of one part inside a section."""

    def __init__(self, section: "SectionWriter"):
        self._section = section

    def write(self, data: bytes) -> int:
        if self._section.closed:
            raise StructureError("Cannot write to a part of a closed multipart section")
        return self._section.sink.write(data)


class SectionWriter:
    """
    A single ``multipart/*`` section.

    The first part opens with the dash-boundary line; every following part is
    preceded by CRLF so the line break before a delimiter belongs to the
    delimiter, not to the previous part's body.
    """

    def __init__(self, sink: ByteSink, boundary: Optional[str] = None):
        self.sink = sink
        self.boundary = boundary or generate_boundary()
        self.closed = False
        self._parts = 0

    @property
    def parts(self) -> int:
        """Number of parts created so far."""
        return self._parts

    def create_part(self, header: Header) -> PartWriter:
        """
        Start a new part and write its header block.

        Args:
            header: Part header fields (written with sorted keys)

        Returns:
            Writer for the part body

        Raises:
            StructureError: If the section is already closed
        """
        if self.closed:
            raise StructureError("Cannot create a part in a closed multipart section")

        lines = [CRLF if self._parts else b"", b"--", self.boundary.encode("ascii"), CRLF]
        for field in sorted(header):
            for value in header[field]:
                lines.append(f"{field}: {value}".encode("utf-8") + CRLF)
        lines.append(CRLF)

        self.sink.write(b"".join(lines))
        self._parts += 1
        return PartWriter(self)

    def close(self) -> None:
        """Write the closing delimiter. Closing twice is a no-op."""
        if self.closed:
            return
        prefix = CRLF if self._parts else b""
        self.sink.write(prefix + b"--" + self.boundary.encode("ascii") + b"--" + CRLF)
        self.closed = True


def write_encoded(sink: ByteSink, body: bytes, encoding: Encoding) -> None:
    """
    Stream a body through the encoder for its transfer encoding.

    Args:
        sink: Destination writer
        body: Raw body (or base64 text for BASE64_PRE_ENCODED)
        encoding: Transfer encoding to apply
    """
    if encoding == Encoding.BASE64:
        Base64LineWriter(sink).write(base64.b64encode(body))
    elif encoding == Encoding.BASE64_PRE_ENCODED:
        Base64LineWriter(sink).write(bytes(body))
    elif encoding == Encoding.UNENCODED:
        sink.write(bytes(body))
    else:
        QuotedPrintableLineWriter(sink).write(encode_quoted_printable(body))


class MultipartWriter:
    """
    Bounded stack of open multipart sections over one output buffer.

    At depth 0 parts are not wrapped at all: their headers merge into the
    top-level header map and the body goes straight into the buffer.
    """

    def __init__(self, header: Header, buf: bytearray):
        """
        Initialize multipart writer.

        Args:
            header: Top-level header map, updated in place
            buf: Root output buffer
        """
        self.header = header
        self.buf = buf
        self._root = BufferWriter(buf)
        self._sections: List[SectionWriter] = []

    @property
    def depth(self) -> int:
        """Number of currently open sections."""
        return len(self._sections)

    def open(self, kind: str) -> str:
        """
        Open a ``multipart/<kind>`` section.

        Args:
            kind: Multipart subtype ("mixed", "related" or "alternative")

        Returns:
            The new section's boundary

        Raises:
            StructureError: If MAX_DEPTH sections are already open
        """
        if len(self._sections) >= MAX_DEPTH:
            raise StructureError(
                f"Cannot open multipart/{kind}: maximum nesting depth {MAX_DEPTH} reached"
            )

        section = SectionWriter(self._root)
        content_type = f"multipart/{kind}; boundary={section.boundary}"

        if not self._sections:
            self.header["Content-Type"] = [content_type]
        else:
            self._create_part({"Content-Type": [content_type]})

        self._sections.append(section)
        logger.debug("multipart_opened", kind=kind, depth=self.depth)
        return section.boundary

    def write_part(self, header: Header, body: bytes, encoding: Encoding) -> None:
        """
        Write one part: its headers, then its encoded body.

        Args:
            header: Part header fields
            body: Raw part body
            encoding: Transfer encoding for the body
        """
        if not self._sections:
            self.header.update(header)
            sink: ByteSink = self._root
        else:
            sink = self._create_part(header)

        write_encoded(sink, body, encoding)

    def close(self) -> None:
        """Close the innermost open section. No-op when nothing is open."""
        if not self._sections:
            return
        section = self._sections.pop()
        section.close()
        logger.debug("multipart_closed", depth=self.depth, parts=section.parts)

    def _create_part(self, header: Header) -> PartWriter:
        return self._sections[-1].create_part(header)
