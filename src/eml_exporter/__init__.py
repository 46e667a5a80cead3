"""
MIME message exporter.

Serializes an in-memory e-mail message (headers, text/HTML parts, inline
files and attachments) into a transport-ready MIME byte stream.
"""

from .buffer_pool import BufferPool
from .exceptions import (
    BufferPoolError,
    MimeExportError,
    SinkWriteError,
    StructureError,
)
from .message import Message
from .models import Encoding, ExportedMessage, File, Part
from .version import __version__

__all__ = [
    "BufferPool",
    "Encoding",
    "ExportedMessage",
    "File",
    "Message",
    "Part",
    "MimeExportError",
    "StructureError",
    "BufferPoolError",
    "SinkWriteError",
    "__version__",
]
