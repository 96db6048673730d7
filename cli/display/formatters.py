"""
Display formatting utilities for CLI output.

Turns raw parameter values into display text, substituting an
out-of-range marker where a value is outside its valid range.
"""

from typing import Iterable, Optional

from rich.console import Console

OUT_OF_RANGE = "*out of range*"
TABLE_OUT_OF_RANGE = "~~~"


def marker(compact: bool = False) -> str:
    """Out-of-range marker for detail text or table cells."""
    return TABLE_OUT_OF_RANGE if compact else OUT_OF_RANGE


def checked(value: int, maximum: Optional[int], compact: bool = False) -> str:
    """
    Format a raw value, or the out-of-range marker if it exceeds maximum.

    Args:
        value: Raw parameter value
        maximum: Highest valid value (None = no limit)
        compact: Use the short table marker

    Returns:
        Formatted value like "99" or "*out of range*"
    """
    if maximum is not None and not 0 <= value <= maximum:
        return marker(compact)
    return str(value)


def or_marker(text: Optional[str], compact: bool = False) -> str:
    """Derived value text, or the marker when the calculator returned None."""
    return marker(compact) if text is None else text


def signed(value: int) -> str:
    """Signed number like "+0", "-7"."""
    return f"{value:+d}"


def hex_bytes(data: Iterable[int]) -> str:
    """Bytes as space separated upper case hex, e.g. "49 4E 49 54"."""
    return " ".join(f"{b:02X}" for b in data)


def print_plain(console: Console, text: str = "", style: Optional[str] = None) -> None:
    """
    Print text without rich markup, highlighting or emoji processing.

    Voice names may contain "[" and other characters rich would
    otherwise interpret.
    """
    console.print(
        text, style=style, markup=False, highlight=False, emoji=False, soft_wrap=True
    )


def print_lines(console: Console, lines: Iterable[str]) -> None:
    for line in lines:
        print_plain(console, line)
