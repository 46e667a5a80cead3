"""
Line-wrapping writers for base64 and quoted-printable bodies.

Both writers enforce the RFC 2045 line-length ceiling (section 6.7 for
quoted-printable, section 6.8 for base64) on whatever is written through them,
keeping a running column counter across calls.
"""

from .buffer import ByteSink

# RFC 2045, 6.7 (page 21) and 6.8 (page 25)
MAX_LINE_LENGTH = 76
CRLF = b"\r\n"
SOFT_LINE_BREAK = b"=\r\n"

_NEWLINE = ord("\n")
_CR = ord("\r")
_EQUALS = ord("=")


class Base64LineWriter:
    """
    Folds base64 text into lines of at most 76 characters.

    The writer does not transform its input: callers pass base64 text (either
    freshly encoded or pre-encoded) and get it back split by CRLF. The final
    line is left open so a following write continues it.
    """

    def __init__(self, sink: ByteSink):
        self.sink = sink
        self._line_length = 0

    @property
    def line_length(self) -> int:
        """Bytes written since the last line break."""
        return self._line_length

    def write(self, data: bytes) -> int:
        """
        Write base64 text, inserting CRLF every 76 characters.

        Args:
            data: Base64 text

        Returns:
            Number of input bytes consumed
        """
        written = 0
        while len(data) + self._line_length > MAX_LINE_LENGTH:
            cut = MAX_LINE_LENGTH - self._line_length
            self.sink.write(data[:cut])
            self.sink.write(CRLF)
            data = data[cut:]
            written += cut
            self._line_length = 0

        self.sink.write(data)
        self._line_length += len(data)
        return written + len(data)


class QuotedPrintableLineWriter:
    """
    Folds quoted-printable text into lines of at most 76 characters.

    Hard line breaks already present in the input are copied through and
    restart the column. Long lines are cut with a soft line break (``=`` CRLF)
    placed so that no ``=XX`` escape is split and the line, including the
    trailing ``=``, stays within 76 characters.
    """

    def __init__(self, sink: ByteSink):
        self.sink = sink
        self._line_length = 0

    @property
    def line_length(self) -> int:
        """Bytes written since the last line break."""
        return self._line_length

    def write(self, data: bytes) -> int:
        """
        Write quoted-printable text, inserting soft line breaks as needed.

        Args:
            data: Quoted-printable encoded text (escapes already applied)

        Returns:
            Number of input bytes consumed
        """
        written = 0
        while data:
            remaining = MAX_LINE_LENGTH - self._line_length

            # Fits on the current line
            if len(data) < remaining:
                self.sink.write(data)
                last_newline = data.rfind(_NEWLINE)
                if last_newline == -1:
                    self._line_length += len(data)
                else:
                    self._line_length = len(data) - last_newline - 1
                return written + len(data)

            # A hard line break within reach ends the line as-is. A newline at
            # index ``remaining + 1`` only fits when preceded by CR.
            i = data.find(_NEWLINE, 0, remaining + 2)
            if i != -1 and (i != remaining + 1 or data[i - 1] == _CR):
                self.sink.write(data[: i + 1])
                data = data[i + 1 :]
                written += i + 1
                self._line_length = 0
                continue

            # One column is reserved for the soft break "="; never cut
            # between an "=" and its two hex digits.
            cut = remaining - 1
            if cut >= 2 and data[cut - 2] == _EQUALS:
                cut -= 2
            elif cut >= 1 and data[cut - 1] == _EQUALS:
                cut -= 1

            self.sink.write(data[:cut])
            self.sink.write(SOFT_LINE_BREAK)
            data = data[cut:]
            written += cut
            self._line_length = 0

        return written
