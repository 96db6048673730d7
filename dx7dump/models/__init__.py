"""Data models for DX7 voice and dump representation."""

from dx7dump.models.voice import Operator, Voice, Bank, OPERATOR_COUNT, VOICES_PER_BANK
from dx7dump.models.dump import DumpShape, Anomaly, FramingIssue, FramingInfo, DecodedDump

__all__ = [
    "Operator",
    "Voice",
    "Bank",
    "OPERATOR_COUNT",
    "VOICES_PER_BANK",
    "DumpShape",
    "Anomaly",
    "FramingIssue",
    "FramingInfo",
    "DecodedDump",
]
