"""
dx7dump - Yamaha DX7 voice bank decoder, verifier and repair tool.

This library provides tools to:
- Read DX7 bank dumps (.syx, 4104 bytes) and headerless banks (4096 bytes)
- Read single voice dumps (163 bytes)
- Verify framing and checksum, and rewrite damaged framing in place

Example usage:
    from dx7dump import DX7Reader, DX7Writer

    dump = DX7Reader.read("rom1a.syx")
    for number, voice in enumerate(dump.voices, start=1):
        print(number, voice.display_name())

    if dump.fix_needed:
        DX7Writer.repair(dump, "rom1a.syx")
"""

__version__ = "1.0.0"

from dx7dump.models.voice import Operator, Voice, Bank
from dx7dump.models.dump import DumpShape, Anomaly, FramingIssue, FramingInfo, DecodedDump
from dx7dump.formats.reader import DX7Reader, decode_dump
from dx7dump.formats.writer import DX7Writer
from dx7dump.context import FileContext
from dx7dump.utils.validation import DumpError, WrongSizeError, FatalFramingError, RepairError

__all__ = [
    "Operator",
    "Voice",
    "Bank",
    "DumpShape",
    "Anomaly",
    "FramingIssue",
    "FramingInfo",
    "DecodedDump",
    "DX7Reader",
    "DX7Writer",
    "decode_dump",
    "FileContext",
    "DumpError",
    "WrongSizeError",
    "FatalFramingError",
    "RepairError",
]
