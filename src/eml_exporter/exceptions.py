"""Specialized exceptions raised by the eml_exporter package.

Exception hierarchy::

    MimeExportError
        StructureError (multipart nesting misuse, also RuntimeError)
        BufferPoolError (buffer returned to the pool twice)
        SinkWriteError (output sink failed while rendering)
"""


class MimeExportError(Exception):
    """Base exception for all eml_exporter errors."""


class StructureError(MimeExportError, RuntimeError):
    """Multipart writer was driven out of its open/close discipline.

    Raised when opening a section would exceed the maximum nesting depth,
    when a closed section is written to, or when an export finishes with
    sections still open. These are programming errors, not runtime conditions.
    """


class BufferPoolError(MimeExportError):
    """A buffer was released to a pool that already holds it."""


class SinkWriteError(MimeExportError):
    """Writing the rendered message to an output sink failed.

    The original exception is chained as ``__cause__``.

    Attributes:
        written: Number of bytes successfully handed to the sink before failure.
    """

    def __init__(self, message: str, written: int = 0) -> None:
        """Initialize SinkWriteError.

        Args:
            message: Description of the failure.
            written: Bytes written before the sink failed.
        """
        super().__init__(message)
        self.written = written
