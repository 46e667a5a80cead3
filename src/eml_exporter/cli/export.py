"""
Command-line interface for building .eml files.

Composes a message from text/HTML body files, inline files and attachments,
and writes the rendered MIME message to a file or stdout.

Usage:
    # Plain text message
    python -m eml_exporter.cli.export --from a@example.com --to b@example.com \\
        --subject "Report" --text body.txt --output report.eml

    # HTML with derived plain-text alternative, inline logo and attachment
    python -m eml_exporter.cli.export --from a@example.com --to b@example.com \\
        --html body.html --derive-text --embed logo.png=logo --attach report.pdf
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import charset_normalizer
import html2text
import structlog

from eml_exporter.config import settings
from eml_exporter.exceptions import MimeExportError
from eml_exporter.logging_config import setup_logging
from eml_exporter.message import Message
from eml_exporter.models.encoding import Encoding
from eml_exporter.models.parts import File
from eml_exporter.version import __version__, get_component_versions

logger = structlog.get_logger(__name__)


# ============================================================================
# HELPERS
# ============================================================================

def detect_charset(data: bytes) -> Optional[str]:
    """
    Detect the charset of a body file with charset-normalizer.

    The result only labels the part; the bytes are sent as they are.

    Args:
        data: Raw file bytes

    Returns:
        Charset name (e.g., 'utf-8', 'cp1252'), or None if undetectable
    """
    if not data:
        return None
    detected = charset_normalizer.from_bytes(data).best()
    if detected is None:
        return None
    return detected.encoding.replace("_", "-")


def html_to_text(html: str) -> str:
    """
    Convert an HTML body to a plain-text alternative using html2text.

    Args:
        html: HTML content

    Returns:
        Plain text representation (links kept as markdown)
    """
    if not html:
        return ""

    h = html2text.HTML2Text()
    h.ignore_images = True
    h.ignore_emphasis = True
    h.body_width = 0  # Line length is handled by the transfer encoding
    h.unicode_snob = True
    return h.handle(html).strip()


def parse_header_option(value: str) -> Tuple[str, str]:
    """
    Parse a ``--header`` value of the form "Name: value".

    Raises:
        argparse.ArgumentTypeError: If the value has no field name
    """
    field, sep, content = value.partition(":")
    if not sep or not field.strip():
        raise argparse.ArgumentTypeError(f"Invalid header '{value}', expected 'Name: value'")
    return field.strip(), content.strip()


def parse_embed_option(value: str) -> Tuple[Path, Optional[str]]:
    """
    Parse an ``--embed`` value of the form "PATH" or "PATH=CID".
    """
    if Path(value).exists() or "=" not in value:
        return Path(value), None
    path, _, cid = value.rpartition("=")
    return Path(path), cid or None


def build_message(args: argparse.Namespace) -> Message:
    """
    Compose a message from parsed command-line arguments.

    Args:
        args: Parsed arguments

    Returns:
        Message ready for export

    Raises:
        FileNotFoundError: If a body, inline or attachment file is missing
        ValueError: If neither a body nor a file is given
    """
    text = args.text.read_bytes() if args.text else None
    html = args.html.read_bytes() if args.html else None

    charset = args.charset
    if charset is None:
        for body in (text, html):
            charset = detect_charset(body) if body else None
            if charset:
                break

    msg = Message(charset=charset or settings.default_charset, encoding=args.encoding)

    if args.sender:
        msg.set_header("From", args.sender)
    if args.to:
        msg.set_header("To", ", ".join(args.to))
    if args.subject:
        msg.set_header("Subject", args.subject)
    for field, value in args.header:
        msg.set_header(field, *msg.get_header(field), value)

    if text is None and html is not None and args.derive_text:
        derived = html_to_text(html.decode(msg.charset, errors="replace"))
        text = derived.encode(msg.charset, errors="replace")

    if text is not None:
        msg.add_alternative("text/plain", text)
    if html is not None:
        msg.add_alternative("text/html", html)

    for path, cid in args.embed:
        msg.embed(File.from_path(path, content_id=cid))
    for path in args.attach:
        msg.attach(File.from_path(path))

    if not (msg.parts or msg.embedded or msg.attachments):
        raise ValueError("Nothing to export: give --text, --html, --embed or --attach")

    return msg


def write_output(data: bytes, output_path: Optional[Path]) -> None:
    """
    Write the rendered message to a file, or stdout when no path is given.
    """
    if not output_path:
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()
        return

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(data)
    logger.info("output_written", path=str(output_path), size_bytes=len(data))


# ============================================================================
# MAIN CLI
# ============================================================================

def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Build a MIME .eml message from body files and attachments",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Plain text message to a file
  %(prog)s --from a@example.com --to b@example.com --text body.txt -o out.eml

  # HTML with derived text alternative and an inline image
  %(prog)s --to b@example.com --html body.html --derive-text --embed logo.png=logo

  # Base64 bodies, two attachments, written to stdout
  %(prog)s --text body.txt --encoding base64 --attach a.pdf --attach b.csv
        """
    )

    parser.add_argument("--from", dest="sender", type=str, default=None, help="From address")
    parser.add_argument("--to", action="append", default=[], help="Recipient (repeatable)")
    parser.add_argument("--subject", "-s", type=str, default=None, help="Subject line")
    parser.add_argument(
        "--header",
        "-H",
        action="append",
        type=parse_header_option,
        default=[],
        help="Extra header 'Name: value' (repeatable)"
    )

    parser.add_argument("--text", type=Path, default=None, help="Plain-text body file")
    parser.add_argument("--html", type=Path, default=None, help="HTML body file")
    parser.add_argument(
        "--derive-text",
        action="store_true",
        help="Generate the plain-text alternative from --html when --text is absent"
    )

    parser.add_argument(
        "--attach", "-a", action="append", type=Path, default=[], help="Attachment (repeatable)"
    )
    parser.add_argument(
        "--embed",
        "-e",
        action="append",
        type=parse_embed_option,
        default=[],
        help="Inline file PATH or PATH=CID (repeatable)"
    )

    parser.add_argument(
        "--encoding",
        choices=[Encoding.QUOTED_PRINTABLE.value, Encoding.BASE64.value, Encoding.UNENCODED.value],
        default=settings.default_encoding,
        help=f"Transfer encoding for body parts (default: {settings.default_encoding})"
    )
    parser.add_argument(
        "--charset",
        type=str,
        default=None,
        help="Charset of the body files (default: detected)"
    )

    parser.add_argument(
        "--output", "-o", type=Path, default=None, help="Output .eml path (default: stdout)"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Args:
        argv: Argument list (default: sys.argv[1:])

    Returns:
        Process exit code
    """
    setup_logging()
    args = create_parser().parse_args(argv)

    try:
        msg = build_message(args)
        data = msg.as_bytes()
        write_output(data, args.output)

        details = {"versions": get_component_versions()} if args.verbose else {}
        logger.info(
            "export_completed",
            parts=len(msg.parts),
            embedded=len(msg.embedded),
            attachments=len(msg.attachments),
            size_bytes=len(data),
            charset=msg.charset,
            encoding=msg.encoding.value,
            **details,
        )
        msg.reset()

    except (OSError, ValueError, MimeExportError) as e:
        logger.error("export_failed", error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
