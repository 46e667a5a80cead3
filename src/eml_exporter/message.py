"""
Message composition.

:class:`Message` collects headers, body parts, inline files and attachments,
and renders them through :class:`~eml_exporter.export.Exporter`. A message can
be reset and reused; its body buffers go back to its buffer pool.
"""

from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Union

import structlog

from .buffer_pool import BufferPool
from .config import settings
from .export.exporter import Exporter
from .models.encoding import Encoding
from .models.exported import ExportedMessage
from .models.parts import File, Part

logger = structlog.get_logger(__name__)

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Message:
    """
    An e-mail message under composition.

    Charset, transfer encoding, buffer pool and clock are fixed at
    construction and survive :meth:`reset`; everything else is per-message.

    Examples:
        >>> msg = Message()
        >>> msg.set_header("Subject", "Hello")
        >>> msg.set_body("text/plain", "Hi there")
        >>> raw = msg.as_bytes()
    """

    def __init__(
        self,
        charset: Optional[str] = None,
        encoding: Union[Encoding, str, None] = None,
        pool: Optional[BufferPool] = None,
        clock: Optional[Clock] = None,
    ):
        """
        Initialize message.

        Args:
            charset: Charset declared on text parts (default: settings)
            encoding: Transfer encoding for body parts (default: settings)
            pool: Buffer pool for body buffers (default: a private pool)
            clock: Callable returning the current time, used for the Date header

        Raises:
            ValueError: If encoding is not a known transfer encoding
        """
        self.charset = charset or settings.default_charset
        self.encoding = Encoding(encoding or settings.default_encoding)
        self.pool = pool if pool is not None else BufferPool()
        self.clock: Clock = clock or _utc_now

        self.header: Dict[str, List[str]] = {}
        self.parts: List[Part] = []
        self.embedded: List[File] = []
        self.attachments: List[File] = []
        self._export_buffers: List[bytearray] = []

    # ------------------------------------------------------------------
    # Headers
    # ------------------------------------------------------------------

    def set_header(self, field: str, *values: str) -> None:
        """Set a header field, replacing any previous values."""
        self.header[field] = list(values)

    def set_headers(self, headers: Mapping[str, Iterable[str]]) -> None:
        """Set several header fields at once."""
        for field, values in headers.items():
            self.header[field] = list(values)

    def get_header(self, field: str) -> List[str]:
        """Values of a header field (empty if unset)."""
        return self.header.get(field, [])

    def set_date_header(self, field: str, date: datetime) -> None:
        """Set a header field to an RFC 5322 formatted date."""
        self.header[field] = [self.format_date(date)]

    @staticmethod
    def format_date(date: datetime) -> str:
        """
        Format a datetime for use in a header.

        Args:
            date: Datetime to format (naive datetimes render as -0000)

        Returns:
            RFC 5322 date string, e.g. "Thu, 12 Feb 2026 10:30:00 +0100"
        """
        return format_datetime(date)

    # ------------------------------------------------------------------
    # Content
    # ------------------------------------------------------------------

    def set_body(self, content_type: str, body: Union[str, bytes]) -> None:
        """
        Replace all body parts with a single one.

        Args:
            content_type: Part content type, e.g. "text/plain"
            body: Part body; str is encoded with the message charset
        """
        self._release_parts()
        self.add_alternative(content_type, body)

    def add_alternative(self, content_type: str, body: Union[str, bytes]) -> None:
        """
        Append an alternative body part, e.g. text/html after text/plain.

        Args:
            content_type: Part content type
            body: Part body; str is encoded with the message charset
        """
        buf = self.pool.acquire()
        buf += body.encode(self.charset) if isinstance(body, str) else body
        self.parts.append(Part(content_type=content_type, body=buf))

    def attach(self, *files: File) -> None:
        """Add files as attachments."""
        self.attachments.extend(files)

    def embed(self, *files: File) -> None:
        """Add files as inline resources, referenced by Content-ID."""
        self.embedded.extend(files)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export(self) -> ExportedMessage:
        """
        Render the message into a header map and MIME body.

        The returned body buffer belongs to this message's pool and remains
        valid until :meth:`reset`.

        Returns:
            ExportedMessage
        """
        exporter = Exporter(self)
        try:
            return exporter.export()
        finally:
            if exporter.buffer is not None:
                self._export_buffers.append(exporter.buffer)

    def as_bytes(self) -> bytes:
        """Export and render the complete message as bytes."""
        return self.export().as_bytes()

    def reset(self) -> None:
        """
        Return all buffers to the pool and clear per-message state.

        Charset, encoding, pool and clock are preserved, so the instance can
        compose the next message.
        """
        released = len(self.parts) + len(self._export_buffers)
        self._release_parts()
        for buf in self._export_buffers:
            self.pool.release(buf)
        self._export_buffers = []

        self.header = {}
        self.attachments = []
        self.embedded = []
        logger.debug("message_reset", buffers_released=released)

    def _release_parts(self) -> None:
        for part in self.parts:
            self.pool.release(part.body)
        self.parts = []
