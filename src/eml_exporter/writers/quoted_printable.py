"""
Quoted-printable byte encoding (RFC 2045, section 6.7) without line wrapping.

Line length is handled separately by
:class:`~eml_exporter.writers.line_wrappers.QuotedPrintableLineWriter`, so the
encoder here only applies escapes. Hard line breaks in the input are kept and
normalized to CRLF.
"""

_HEX = b"0123456789ABCDEF"
_CR = ord("\r")
_NEWLINE = ord("\n")
_SPACE = ord(" ")
_TAB = ord("\t")
_EQUALS = ord("=")
_CRLF = b"\r\n"


def _is_literal(byte: int) -> bool:
    return (33 <= byte <= 126 and byte != _EQUALS) or byte in (_SPACE, _TAB)


def encode_quoted_printable(data: bytes) -> bytes:
    """
    Escape bytes for quoted-printable transport.

    Rules:
    1. Printable ASCII (33-126) except "=" is copied, as are space and tab
    2. Line breaks (CRLF, bare LF, bare CR) are written as CRLF
    3. Space or tab right before a line break or the end of input is escaped
    4. Everything else becomes "=XX" with uppercase hex digits

    Args:
        data: Raw body bytes

    Returns:
        Escaped bytes, not wrapped

    Examples:
        >>> encode_quoted_printable("café = 1".encode("utf-8"))
        b'caf=C3=A9 =3D 1'
        >>> encode_quoted_printable(b"one\\ntwo")
        b'one\\r\\ntwo'
    """
    out = bytearray()
    last = len(data) - 1

    for i, byte in enumerate(data):
        if byte == _CR:
            out += _CRLF
            continue
        if byte == _NEWLINE:
            # Second half of a CRLF pair was already written with the CR
            if i == 0 or data[i - 1] != _CR:
                out += _CRLF
            continue

        trailing_space = byte in (_SPACE, _TAB) and (
            i == last or data[i + 1] in (_CR, _NEWLINE)
        )
        if _is_literal(byte) and not trailing_space:
            out.append(byte)
        else:
            out.append(_EQUALS)
            out.append(_HEX[byte >> 4])
            out.append(_HEX[byte & 0xF])

    return bytes(out)
