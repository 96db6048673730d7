"""Format handlers for DX7 voice dumps."""

from dx7dump.formats.sysex import classify, verify
from dx7dump.formats.reader import DX7Reader, decode_dump
from dx7dump.formats.writer import DX7Writer, RepairResult, canonical_frame

__all__ = [
    "classify",
    "verify",
    "DX7Reader",
    "decode_dump",
    "DX7Writer",
    "RepairResult",
    "canonical_frame",
]
