"""Utility modules for the magic calculator."""

from .formatting import format_with_thousands_separator, parse_number, seconds_text

__all__ = [
    "format_with_thousands_separator",
    "parse_number",
    "seconds_text",
]
