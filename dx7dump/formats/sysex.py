"""
DX7 SysEx dump classification and verification.

DX7 voice dumps come in three shapes, told apart by size alone:

Bank dump (4104 bytes):
    F0 43 0n 09 20 00 [4096 bytes packed voice data] CS F7

Headerless bank (4096 bytes):
    [4096 bytes packed voice data]

Single voice dump (163 bytes):
    F0 43 0n 00 01 1B [155 bytes unpacked voice data] CS F7

Where:
    - 0n: Sub-status (high nibble, must be 0) and MIDI channel (low nibble)
    - 09/00: Format number (32 voices / 1 voice)
    - 20 00 / 01 1B: Declared byte count (7 bits per byte)
    - CS: Checksum over the voice data

A missing F0, Yamaha ID or F7 is fatal. Everything else (sub-status,
format, byte count, checksum) is recoverable: dumps captured in the
field often carry garbage there while the voice data is intact.
"""

import logging
from typing import List, Tuple

from dx7dump.models.dump import Anomaly, DumpShape, FramingInfo, FramingIssue
from dx7dump.utils.checksum import calculate_checksum, verify_checksum
from dx7dump.utils.validation import FatalFramingError, WrongSizeError

logger = logging.getLogger(__name__)

SYSEX_START = 0xF0
SYSEX_END = 0xF7
YAMAHA_ID = 0x43

HEADER_SIZE = 6

BANK_SYSEX_SIZE = 4104
BANK_RAW_SIZE = 4096
SINGLE_SYSEX_SIZE = 163
SINGLE_PAYLOAD_SIZE = 155

BANK_FORMAT = 0x09
SINGLE_FORMAT = 0x00
BANK_BYTE_COUNT = (0x20, 0x00)  # 4096
SINGLE_BYTE_COUNT = (0x01, 0x1B)  # 155

SHAPE_SIZES = {
    BANK_SYSEX_SIZE: DumpShape.BANK_SYSEX,
    BANK_RAW_SIZE: DumpShape.BANK_RAW,
    SINGLE_SYSEX_SIZE: DumpShape.SINGLE_SYSEX,
}


def classify(data: bytes) -> DumpShape:
    """
    Decide the dump shape from the data length.

    No content is inspected. Every length maps to a shape or raises.

    Args:
        data: Complete file contents

    Returns:
        The dump shape

    Raises:
        WrongSizeError: If the length matches no shape
    """
    size = len(data)
    shape = SHAPE_SIZES.get(size)
    if shape is None:
        raise WrongSizeError(size, too_large=size > BANK_SYSEX_SIZE)

    logger.debug("Classified %d bytes as %s", size, shape.value)
    return shape


def payload_of(data: bytes, shape: DumpShape) -> bytes:
    """Return the voice data of a dump (everything but framing and checksum)."""
    if shape is DumpShape.BANK_RAW:
        return bytes(data)
    return bytes(data[HEADER_SIZE:-2])


def _expected_framing(shape: DumpShape) -> Tuple[int, Tuple[int, int], str]:
    if shape is DumpShape.BANK_SYSEX:
        return BANK_FORMAT, BANK_BYTE_COUNT, "format 9 (32 voices)"
    return SINGLE_FORMAT, SINGLE_BYTE_COUNT, "format 0 (1 voice)"


def verify(data: bytes, shape: DumpShape) -> FramingInfo:
    """
    Verify the framing and checksum of a sysex dump.

    Args:
        data: Complete file contents, already classified
        shape: BANK_SYSEX or SINGLE_SYSEX

    Returns:
        FramingInfo with every recoverable anomaly, in detection order

    Raises:
        FatalFramingError: If F0, the Yamaha ID or F7 is missing
    """
    if not shape.is_sysex:
        raise ValueError(f"Cannot verify framing of a {shape.value} dump")

    if data[0] != SYSEX_START:
        raise FatalFramingError("Did not find sysex start F0", 0, SYSEX_START, data[0])
    if data[1] != YAMAHA_ID:
        raise FatalFramingError("Did not find Yamaha ID 0x43", 1, YAMAHA_ID, data[1])
    if data[-1] != SYSEX_END:
        raise FatalFramingError("Did not find sysex end F7", len(data) - 1, SYSEX_END, data[-1])

    issues: List[FramingIssue] = []
    format_number, byte_count, format_label = _expected_framing(shape)

    # Only the sub-status nibble is checked, the channel nibble may be anything.
    # Note the parentheses: `x & 0xF0 != 0` would test bit 0 instead.
    sub_status = data[2]
    if (sub_status & 0xF0) != 0:
        issues.append(
            FramingIssue(
                Anomaly.SUB_STATUS,
                2,
                f"Did not find substatus 0. (substatus={(sub_status & 0xF0) >> 4})",
                "0x0n",
                f"0x{sub_status:02X}",
            )
        )

    if data[3] != format_number:
        issues.append(
            FramingIssue(
                Anomaly.FORMAT,
                3,
                f"Did not find {format_label}",
                f"0x{format_number:02X}",
                f"0x{data[3]:02X}",
            )
        )

    declared = (data[4], data[5])
    if declared != byte_count:
        expected_size = (byte_count[0] << 7) | byte_count[1]
        issues.append(
            FramingIssue(
                Anomaly.BYTE_COUNT,
                4,
                f"Declared data byte count is not {expected_size}. "
                f"(sizeMSB=0x{declared[0]:X}, sizeLSB=0x{declared[1]:X})",
                f"0x{byte_count[0]:02X} 0x{byte_count[1]:02X}",
                f"0x{declared[0]:02X} 0x{declared[1]:02X}",
            )
        )

    payload = payload_of(data, shape)
    stored = data[-2]
    computed = calculate_checksum(payload)
    if not verify_checksum(payload, stored):
        issues.append(
            FramingIssue(
                Anomaly.CHECKSUM,
                len(data) - 2,
                f"CHECKSUM FAILED: Should have been 0x{computed:X}",
                f"0x{computed:02X}",
                f"0x{stored:02X}",
            )
        )

    high_bytes = sum(1 for b in payload if b & 0x80)
    if high_bytes:
        issues.append(
            FramingIssue(
                Anomaly.DATA_HIGH_BIT,
                HEADER_SIZE,
                f"{high_bytes} data bytes have bit 7 set",
                "0x00-0x7F",
                f"{high_bytes} bytes",
            )
        )

    for issue in issues:
        logger.debug("Recoverable anomaly at 0x%04X: %s", issue.offset, issue.message)

    return FramingInfo(
        sub_status_channel=sub_status,
        format_number=data[3],
        byte_count=declared,
        stored_checksum=stored,
        computed_checksum=computed,
        issues=tuple(issues),
    )
