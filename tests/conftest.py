"""
Global pytest fixtures and configuration for test suite.

This module provides reusable fixtures for:
- Deterministic clock and buffer pools
- Sample messages and files
- Mock settings/configuration
"""

import os
from datetime import datetime
from typing import Callable

import pytest

from eml_exporter.buffer_pool import BufferPool
from eml_exporter.config import Settings
from eml_exporter.logging_config import setup_logging
from eml_exporter.message import Message
from eml_exporter.models.parts import File
from .fixtures.messages import FIXED_DATE, HTML_BODY, PDF_BYTES, PLAIN_TEXT, PNG_BYTES

# Filter debug events emitted during export
setup_logging()


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    """
    Provide a clock frozen at a fixed instant for reproducible Date headers.

    Returns:
        Callable returning FIXED_DATE
    """
    return lambda: FIXED_DATE


@pytest.fixture
def buffer_pool() -> BufferPool:
    """
    Create an empty buffer pool.

    Returns:
        BufferPool instance
    """
    return BufferPool(max_size=8)


@pytest.fixture
def make_message(buffer_pool, fixed_clock) -> Callable[..., Message]:
    """
    Factory for messages sharing the test pool and fixed clock.

    Returns:
        Callable building a Message (keyword arguments forwarded)
    """
    def _make(**kwargs) -> Message:
        kwargs.setdefault("pool", buffer_pool)
        kwargs.setdefault("clock", fixed_clock)
        return Message(**kwargs)

    return _make


@pytest.fixture
def plain_message(make_message) -> Message:
    """
    Get a message with a single plain-text part.

    Returns:
        Message with From/To/Subject and one text/plain part
    """
    msg = make_message()
    msg.set_header("From", "sender@example.com")
    msg.set_header("To", "recipient@example.com")
    msg.set_header("Subject", "Test Email")
    msg.set_body("text/plain", PLAIN_TEXT)
    return msg


@pytest.fixture
def html_body() -> bytes:
    """HTML alternative body."""
    return HTML_BODY


@pytest.fixture
def logo_file() -> File:
    """
    Get an inline image with an explicit Content-ID.

    Returns:
        File for embedding
    """
    return File(name="logo.png", mime_type="image/png", content=PNG_BYTES, content_id="logo")


@pytest.fixture
def report_file() -> File:
    """
    Get a PDF attachment.

    Returns:
        File for attaching
    """
    return File(name="report.pdf", mime_type="application/pdf", content=PDF_BYTES)


@pytest.fixture
def mock_settings() -> Settings:
    """
    Create mock settings for testing with safe defaults.

    Returns:
        Settings instance with test configuration
    """
    return Settings(
        log_level="INFO",
        log_json=False,  # Easier to read in tests
        default_charset="UTF-8",
        default_encoding="quoted-printable",
        buffer_pool_max_size=4,
    )


@pytest.fixture(autouse=True)
def reset_env_vars():
    """
    Reset environment variables before each test.

    This prevents test pollution from env var changes.
    """
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


# Configuration for pytest
def pytest_configure(config):
    """
    Configure pytest with custom markers and settings.
    """
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (end-to-end export and CLI)"
    )
