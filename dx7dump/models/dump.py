"""
Decoded dump model: file shapes, framing information and anomalies.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from dx7dump.models.voice import Bank, Voice


class DumpShape(Enum):
    """
    The file shapes dx7dump understands.

    Each shape has a unique file size, so the size alone decides it.
    """

    BANK_SYSEX = "bank_sysex"  # 4104 bytes: F0 43 0n 09 20 00 [4096] CS F7
    BANK_RAW = "bank_raw"  # 4096 bytes: packed voice data only
    SINGLE_SYSEX = "single_sysex"  # 163 bytes: F0 43 0n 00 01 1B [155] CS F7

    @property
    def is_bank(self) -> bool:
        return self is not DumpShape.SINGLE_SYSEX

    @property
    def is_sysex(self) -> bool:
        return self is not DumpShape.BANK_RAW


class Anomaly(Enum):
    """
    Recoverable problems found while verifying a dump.

    The value is a short label used in diagnostics.
    """

    SUB_STATUS = "Sub-status"
    FORMAT = "Format"
    BYTE_COUNT = "Byte count"
    CHECKSUM = "Checksum"
    HEADERLESS = "Headerless"
    DATA_HIGH_BIT = "Data bytes"

    @property
    def fixable(self) -> bool:
        """Whether rewriting the framing and checksum clears this anomaly."""
        return self is not Anomaly.DATA_HIGH_BIT


@dataclass(frozen=True)
class FramingIssue:
    """A single recoverable anomaly with its location and values."""

    anomaly: Anomaly
    offset: int
    message: str
    expected: str = ""
    actual: str = ""


@dataclass(frozen=True)
class FramingInfo:
    """
    Framing bytes of a sysex dump and what the verifier found in them.

    Attributes:
        sub_status_channel: Byte 2 (high nibble sub-status, low nibble MIDI channel)
        format_number: Byte 3 (9 = 32 voices, 0 = single voice)
        byte_count: Declared size bytes 4-5 (MSB, LSB; 7 bits each)
        stored_checksum: Checksum byte found in the file
        computed_checksum: Checksum recomputed from the payload
        issues: Recoverable anomalies in detection order
    """

    sub_status_channel: int
    format_number: int
    byte_count: Tuple[int, int]
    stored_checksum: int
    computed_checksum: int
    issues: Tuple[FramingIssue, ...] = ()

    @property
    def sub_status(self) -> int:
        return (self.sub_status_channel & 0xF0) >> 4

    @property
    def channel(self) -> int:
        """MIDI channel 1-16 from the low nibble of byte 2."""
        return (self.sub_status_channel & 0x0F) + 1

    @property
    def declared_size(self) -> int:
        return (self.byte_count[0] << 7) | self.byte_count[1]

    @property
    def checksum_valid(self) -> bool:
        return self.stored_checksum == self.computed_checksum

    @property
    def anomalies(self) -> List[Anomaly]:
        return [issue.anomaly for issue in self.issues]


@dataclass(frozen=True)
class DecodedDump:
    """
    Result of decoding a dump file.

    Exactly one of bank/voice is set, depending on the shape. Raw banks
    have no framing. The payload is kept byte-for-byte so the repair
    writer can reframe it without re-encoding any voice data.

    Attributes:
        shape: Which kind of file this is
        payload: Voice data between header and checksum (4096 or 155 bytes)
        bank: Decoded bank for bank shapes
        voice: Decoded voice for single-voice dumps
        framing: Framing information for sysex shapes
        issues: All recoverable anomalies, including the headerless marker for raw banks
    """

    shape: DumpShape
    payload: bytes = field(repr=False)
    bank: Optional[Bank] = None
    voice: Optional[Voice] = None
    framing: Optional[FramingInfo] = None
    issues: Tuple[FramingIssue, ...] = ()

    @property
    def fix_needed(self) -> bool:
        """
        True when repairing the framing would change the file.

        Only banks are repaired; a single voice dump is reported but
        never rewritten.
        """
        if not self.shape.is_bank:
            return False
        return any(issue.anomaly.fixable for issue in self.issues)

    @property
    def is_single_voice(self) -> bool:
        return self.shape is DumpShape.SINGLE_SYSEX

    @property
    def voices(self) -> Tuple[Voice, ...]:
        """All voices of the dump (32 for a bank, 1 for a single voice)."""
        if self.bank is not None:
            return self.bank.voices
        return (self.voice,) if self.voice is not None else ()
