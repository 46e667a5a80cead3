"""
Message content models: body parts and files.

A :class:`Part` is a text body whose buffer is borrowed from a buffer pool.
A :class:`File` is an attachment or an inline resource; its encoding is
restricted to the two base64 variants at construction time.
"""

import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator

from .encoding import FILE_ENCODINGS, Encoding

DEFAULT_MIME_TYPE = "application/octet-stream"


@dataclass
class Part:
    """
    A single body part (e.g. text/plain or text/html).

    The body buffer belongs to the message's buffer pool and is returned to
    it when the message is reset.
    """

    content_type: str
    body: bytearray


class File(BaseModel):
    """File carried by a message, either embedded inline or attached."""

    name: str = Field(description="File name used in name= and filename= parameters")
    mime_type: str = Field(default=DEFAULT_MIME_TYPE, description="MIME type")
    content: bytes = Field(default=b"", description="Raw (or pre-encoded base64) content")
    content_id: Optional[str] = Field(
        None, description="Content-ID for inline files (defaults to name)"
    )
    encoding: Encoding = Field(default=Encoding.BASE64, description="Transfer encoding")

    @field_validator("encoding")
    @classmethod
    def _only_base64(cls, value: Encoding) -> Encoding:
        if value not in FILE_ENCODINGS:
            raise ValueError(
                f"File encoding must be one of {sorted(e.value for e in FILE_ENCODINGS)}, "
                f"got '{value.value}'"
            )
        return value

    @classmethod
    def from_path(
        cls,
        path: Union[str, Path],
        name: Optional[str] = None,
        mime_type: Optional[str] = None,
        content_id: Optional[str] = None,
        encoding: Encoding = Encoding.BASE64,
    ) -> "File":
        """
        Build a file from disk.

        Args:
            path: Path of the file to read
            name: Name override (default: the path's file name)
            mime_type: MIME type override (default: guessed from the extension)
            content_id: Optional Content-ID for inline use
            encoding: Base64 or Base64 pre-encoded

        Returns:
            File instance with the file's bytes

        Raises:
            FileNotFoundError: If the path does not exist
        """
        path = Path(path)
        if mime_type is None:
            guessed, _ = mimetypes.guess_type(path.name)
            mime_type = guessed or DEFAULT_MIME_TYPE

        return cls(
            name=name or path.name,
            mime_type=mime_type,
            content=path.read_bytes(),
            content_id=content_id,
            encoding=encoding,
        )
