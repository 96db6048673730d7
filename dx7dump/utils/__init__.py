"""Utility functions for dx7dump."""

from dx7dump.utils.checksum import calculate_checksum, verify_checksum
from dx7dump.utils.lcd_charset import Charset, decode_name

__all__ = [
    "calculate_checksum",
    "verify_checksum",
    "Charset",
    "decode_name",
]
