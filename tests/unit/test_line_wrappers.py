"""
Unit tests for line-wrapping writers (line_wrappers.py).

Tests cover:
- Base64 folding at 76 characters, including column carry-over between writes
- Quoted-printable soft line breaks that never split "=XX" escapes
- Hard line breaks copied through and resetting the column
- Round-trip decoding of wrapped output
"""

import base64
import binascii

import pytest

from eml_exporter.writers.buffer import BufferWriter
from eml_exporter.writers.line_wrappers import (
    MAX_LINE_LENGTH,
    Base64LineWriter,
    QuotedPrintableLineWriter,
)
from eml_exporter.writers.quoted_printable import encode_quoted_printable
from tests.fixtures.assertions import assert_lines_within, assert_qp_lines_valid, split_lines
from tests.fixtures.messages import ACCENTED_TEXT, MULTILINE_TEXT


def _wrap_base64(data: bytes) -> bytes:
    buf = bytearray()
    Base64LineWriter(BufferWriter(buf)).write(data)
    return bytes(buf)


def _wrap_qp(data: bytes) -> bytes:
    buf = bytearray()
    QuotedPrintableLineWriter(BufferWriter(buf)).write(data)
    return bytes(buf)


class TestBase64LineWriter:
    """Tests for Base64LineWriter."""

    @pytest.mark.unit
    def test_short_input_unchanged(self):
        """Test input under the limit is written without a line break."""
        assert _wrap_base64(b"QUJD") == b"QUJD"

    @pytest.mark.unit
    def test_hundred_identical_bytes(self):
        """Test 100 repeated bytes give one full line and a shorter remainder."""
        encoded = base64.b64encode(b"a" * 100)
        result = _wrap_base64(encoded)

        lines = split_lines(result)
        assert [len(line) for line in lines] == [76, 60]
        assert result == encoded[:76] + b"\r\n" + encoded[76:]

    @pytest.mark.unit
    def test_exact_line_has_no_trailing_break(self):
        """Test exactly 76 characters stay on one open line."""
        buf = bytearray()
        writer = Base64LineWriter(BufferWriter(buf))
        writer.write(b"A" * 76)

        assert bytes(buf) == b"A" * 76
        assert writer.line_length == 76

    @pytest.mark.unit
    def test_column_carries_across_writes(self):
        """Test the column counter continues from the previous write."""
        buf = bytearray()
        writer = Base64LineWriter(BufferWriter(buf))
        writer.write(b"A" * 50)
        writer.write(b"B" * 50)

        assert bytes(buf) == b"A" * 50 + b"B" * 26 + b"\r\n" + b"B" * 24
        assert writer.line_length == 24

    @pytest.mark.unit
    def test_returns_consumed_count(self):
        """Test write reports input bytes, not output bytes."""
        writer = Base64LineWriter(BufferWriter(bytearray()))
        assert writer.write(b"A" * 200) == 200

    @pytest.mark.unit
    @pytest.mark.parametrize("size", [0, 1, 56, 57, 58, 114, 1000, 4096])
    def test_lines_never_exceed_limit(self, size):
        """Test every folded line is at most 76 characters and decodes back."""
        raw = bytes((i * 7) % 256 for i in range(size))
        result = _wrap_base64(base64.b64encode(raw))

        assert_lines_within(result, MAX_LINE_LENGTH)
        assert all(len(line) == 76 for line in split_lines(result)[:-1])
        assert base64.b64decode(result.replace(b"\r\n", b"")) == raw


class TestQuotedPrintableLineWriter:
    """Tests for QuotedPrintableLineWriter."""

    @pytest.mark.unit
    def test_short_input_unchanged(self):
        """Test text under the limit is written as-is."""
        assert _wrap_qp(b"Hello world") == b"Hello world"

    @pytest.mark.unit
    def test_long_line_soft_breaks(self):
        """Test long lines are cut at 75 characters plus the soft break."""
        result = _wrap_qp(b"a" * 200)

        assert result == b"a" * 75 + b"=\r\n" + b"a" * 75 + b"=\r\n" + b"a" * 50

    @pytest.mark.unit
    def test_escape_at_last_column_moves_to_next_line(self):
        """Test an escape starting just before the cut is not split."""
        data = b"a" * 74 + b"=C3=A9" + b"b" * 10
        result = _wrap_qp(data)

        assert result == b"a" * 74 + b"=\r\n" + b"=C3=A9" + b"b" * 10

    @pytest.mark.unit
    def test_escape_two_before_cut_moves_to_next_line(self):
        """Test an escape starting two columns before the cut is not split."""
        data = b"a" * 73 + b"=C3" + b"b" * 10
        result = _wrap_qp(data)

        assert result == b"a" * 73 + b"=\r\n" + b"=C3" + b"b" * 10

    @pytest.mark.unit
    def test_hard_line_break_restarts_column(self):
        """Test an existing CRLF ends the line and the next line wraps from 0."""
        data = b"a" * 70 + b"\r\n" + b"b" * 80
        result = _wrap_qp(data)

        assert result == b"a" * 70 + b"\r\n" + b"b" * 75 + b"=\r\n" + b"b" * 5

    @pytest.mark.unit
    def test_full_length_hard_line_kept(self):
        """Test a 76-character line followed by CRLF is not soft-broken."""
        data = b"a" * 76 + b"\r\n" + b"b" * 10
        assert _wrap_qp(data) == data

    @pytest.mark.unit
    def test_overlong_bare_newline_line_is_wrapped(self):
        """Test a 77-character line ending in a bare LF still gets a soft break."""
        data = b"a" * 77 + b"\n" + b"b" * 10
        result = _wrap_qp(data)

        assert result.startswith(b"a" * 75 + b"=\r\n")
        assert all(len(line) <= 76 for line in result.replace(b"\r\n", b"\n").split(b"\n"))

    @pytest.mark.unit
    def test_line_length_after_newline(self):
        """Test the column counts only bytes after the last line break."""
        writer = QuotedPrintableLineWriter(BufferWriter(bytearray()))
        writer.write(b"abc\r\nde")

        assert writer.line_length == 2

    @pytest.mark.unit
    def test_column_carries_across_writes(self):
        """Test a second write wraps relative to the open line."""
        buf = bytearray()
        writer = QuotedPrintableLineWriter(BufferWriter(buf))
        writer.write(b"a" * 70)
        writer.write(b"b" * 10)

        assert bytes(buf) == b"a" * 70 + b"b" * 5 + b"=\r\n" + b"b" * 5
        assert writer.line_length == 5

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "raw",
        [
            ACCENTED_TEXT,
            MULTILINE_TEXT,
            "€".encode("utf-8") * 60,
            b"=" * 120,
            bytes(b for b in range(256) if b not in (10, 13)) * 2,
        ],
    )
    def test_encoded_output_valid_and_round_trips(self, raw):
        """Test wrapped output respects line rules and decodes to the input."""
        result = _wrap_qp(encode_quoted_printable(raw))

        assert_qp_lines_valid(result)
        assert binascii.a2b_qp(result) == raw
