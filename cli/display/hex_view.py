"""
Hex dump display utilities.
"""

from typing import Optional

from rich.text import Text

from dx7dump.formats.sysex import SYSEX_END, SYSEX_START
from dx7dump.utils.lcd_charset import Charset, lcd_char


def lcd_text(data: bytes, charset: Charset = Charset.UNICODE) -> Text:
    """Bytes rendered through the DX7 LCD character set."""
    text = Text()
    for byte in data:
        if byte & 0x80:
            text.append(".", style="red")
        elif 0x20 <= byte < 0x7F:
            text.append(lcd_char(byte, charset), style="green")
        else:
            text.append(".", style="dim")
    return text


def format_hex_line(
    data: bytes,
    offset: int,
    region: str,
    color: str,
    bytes_per_line: int = 16,
    charset: Charset = Charset.UNICODE,
    checksum: Optional[int] = None,
) -> Text:
    """
    Format one line of a dump with its region tag and LCD rendering.

    Bytes with bit 7 set are shown in red unless they are sysex framing.

    Args:
        data: Bytes of this line
        offset: File offset of the first byte
        region: Region tag, e.g. "VOICE 01"
        color: Rich style of the tag
        bytes_per_line: Line width the hex column is padded to
        charset: LCD table for the text column
        checksum: Expected checksum, highlights a mismatching checksum byte

    Returns:
        Rich Text for the line
    """
    text = Text()
    text.append(f"0x{offset:04X} ", style="dim")
    text.append(f"[{region:10s}] ", style=color)

    for byte in data:
        if byte in (SYSEX_START, SYSEX_END):
            style = "bold blue"
        elif checksum is not None and byte != checksum:
            style = "bold red"
        elif byte & 0x80:
            style = "red"
        elif byte == 0x00:
            style = "dim"
        else:
            style = "bold white"
        text.append(f"{byte:02X}", style=style)
        text.append(" ")

    if len(data) < bytes_per_line:
        text.append("   " * (bytes_per_line - len(data)))

    text.append(" ")
    text.append_text(lcd_text(data, charset))
    return text
