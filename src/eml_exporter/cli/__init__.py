"""
CLI module for message export.

Provides command-line tools for building .eml files.
"""

from eml_exporter.cli.export import main as export_main

__all__ = ["export_main"]
