"""Utilities for scope-grep: report formatting and console output."""

from .console_logger import ConsoleLogger, console
from .formatters import format_block, format_matches_as_text, format_report_line

__all__ = [
    "ConsoleLogger",
    "console",
    "format_block",
    "format_matches_as_text",
    "format_report_line",
]
