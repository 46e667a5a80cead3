# Data models for message export

from .encoding import FILE_ENCODINGS, Encoding
from .exported import ExportedMessage
from .parts import DEFAULT_MIME_TYPE, File, Part

__all__ = [
    "Encoding",
    "FILE_ENCODINGS",
    "ExportedMessage",
    "File",
    "Part",
    "DEFAULT_MIME_TYPE",
]
