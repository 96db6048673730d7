"""
CLI display modules.
"""

from cli.display.tables import (
    listing_lines,
    voice_detail_lines,
    operator_table,
    issues_table,
)
from cli.display.hex_view import format_hex_line
from cli.display.formatters import print_plain, print_lines

__all__ = [
    "listing_lines",
    "voice_detail_lines",
    "operator_table",
    "issues_table",
    "format_hex_line",
    "print_plain",
    "print_lines",
]
