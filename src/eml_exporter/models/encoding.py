"""
Content-Transfer-Encoding values understood by the exporter.
"""

from enum import Enum


class Encoding(str, Enum):
    """Byte-level transfer encodings for part and file bodies."""

    QUOTED_PRINTABLE = "quoted-printable"
    BASE64 = "base64"
    UNENCODED = "8bit"
    BASE64_PRE_ENCODED = "base64-pre-encoded"  # Already base64, only folded

    @property
    def header_value(self) -> str:
        """Value written to the Content-Transfer-Encoding header."""
        if self is Encoding.BASE64_PRE_ENCODED:
            return Encoding.BASE64.value
        return self.value


# Encodings a File may carry
FILE_ENCODINGS = frozenset({Encoding.BASE64, Encoding.BASE64_PRE_ENCODED})
