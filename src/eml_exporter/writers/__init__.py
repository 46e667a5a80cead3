# Byte-level writers: line wrapping, quoted-printable escaping, multipart sections

from .buffer import BufferWriter, ByteSink
from .line_wrappers import (
    CRLF,
    MAX_LINE_LENGTH,
    SOFT_LINE_BREAK,
    Base64LineWriter,
    QuotedPrintableLineWriter,
)
from .multipart import MAX_DEPTH, MultipartWriter, SectionWriter, generate_boundary, write_encoded
from .quoted_printable import encode_quoted_printable

__all__ = [
    "BufferWriter",
    "ByteSink",
    "CRLF",
    "MAX_LINE_LENGTH",
    "SOFT_LINE_BREAK",
    "Base64LineWriter",
    "QuotedPrintableLineWriter",
    "encode_quoted_printable",
    "MAX_DEPTH",
    "MultipartWriter",
    "SectionWriter",
    "generate_boundary",
    "write_encoded",
]
