"""
Message exporter.

Turns a composed :class:`~eml_exporter.message.Message` into an
:class:`~eml_exporter.models.ExportedMessage`: decides the multipart layout,
opens the wrappers outermost first, writes body parts, inline files and
attachments, then closes the wrappers in reverse order.
"""

import time
from typing import TYPE_CHECKING, Dict, List, Optional

import structlog

from ..exceptions import StructureError
from ..models.encoding import Encoding
from ..models.exported import ExportedMessage
from ..models.parts import File
from ..writers.multipart import MultipartWriter
from .structure import StructurePlan, classify_structure

if TYPE_CHECKING:
    from ..message import Message

logger = structlog.get_logger(__name__)


class Exporter:
    """
    Single-use exporter bound to one message.

    The root output buffer is acquired from the message's pool; after
    :meth:`export` it is available as :attr:`buffer` so the message can return
    it to the pool on reset.
    """

    def __init__(self, message: "Message"):
        """
        Initialize exporter.

        Args:
            message: Message to export (read-only during export)
        """
        self.message = message
        self.writer: Optional[MultipartWriter] = None

    @property
    def buffer(self) -> Optional[bytearray]:
        """Root output buffer, once export has started."""
        return self.writer.buf if self.writer else None

    def export(self) -> ExportedMessage:
        """
        Export the message.

        Returns:
            ExportedMessage with the top-level header map and rendered body

        Raises:
            StructureError: If the writer stack is not balanced at the end
        """
        start_time = time.time()
        msg = self.message

        header = self._build_header()
        self.writer = MultipartWriter(header, msg.pool.acquire())
        w = self.writer

        plan = classify_structure(len(msg.parts), len(msg.embedded), len(msg.attachments))

        if plan.needs_mixed:
            w.open("mixed")
        if plan.needs_related:
            w.open("related")
        if plan.needs_alternative:
            w.open("alternative")

        for part in msg.parts:
            w.write_part(
                {
                    "Mime-Version": ["1.0"],
                    "Content-Type": [f"{part.content_type}; charset={msg.charset}"],
                    "Content-Transfer-Encoding": [msg.encoding.header_value],
                },
                part.body,
                msg.encoding,
            )
        if plan.needs_alternative:
            w.close()

        self._write_files(msg.embedded, attachment=False)
        if plan.needs_related:
            w.close()

        self._write_files(msg.attachments, attachment=True)
        if plan.needs_mixed:
            w.close()

        if w.depth != 0:
            raise StructureError(f"Export finished with {w.depth} multipart section(s) open")

        logger.debug(
            "message_exported",
            structure=_describe(plan),
            parts=len(msg.parts),
            embedded=len(msg.embedded),
            attachments=len(msg.attachments),
            body_bytes=len(w.buf),
            processing_time_ms=round((time.time() - start_time) * 1000, 3),
        )

        return ExportedMessage(header=w.header, body=w.buf)

    def _build_header(self) -> Dict[str, List[str]]:
        # Copy so export leaves the message's own header map untouched
        header = {field: list(values) for field, values in self.message.header.items()}
        if "Mime-Version" not in header:
            header["Mime-Version"] = ["1.0"]
        if "Date" not in header:
            header["Date"] = [self.message.format_date(self.message.clock())]
        return header

    def _write_files(self, files: List[File], attachment: bool) -> None:
        for f in files:
            header = {
                "Content-Type": [f'{f.mime_type}; name="{f.name}"'],
                # Files only ever carry one of the two base64 variants
                "Content-Transfer-Encoding": [Encoding.BASE64.value],
            }
            if attachment:
                header["Content-Disposition"] = [f'attachment; filename="{f.name}"']
            else:
                header["Content-Disposition"] = [f'inline; filename="{f.name}"']
                header["Content-ID"] = [f"<{f.content_id or f.name}>"]

            self.writer.write_part(header, f.content, f.encoding)


def _describe(plan: StructurePlan) -> str:
    return ">".join(plan.kinds) or "single"
