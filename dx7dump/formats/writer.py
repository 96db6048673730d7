"""
DX7 bank repair writer.

Rewrites the framing (header, checksum, end byte) of a bank dump and
saves it as a 4104-byte bank sysex. Voice data is written back byte for
byte as it was read; only the framing and checksum change. Single voice
dumps are never rewritten.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dx7dump.models.dump import DecodedDump
from dx7dump.formats.sysex import (
    BANK_BYTE_COUNT,
    BANK_FORMAT,
    BANK_RAW_SIZE,
    SYSEX_END,
    SYSEX_START,
    YAMAHA_ID,
)
from dx7dump.utils.checksum import calculate_checksum
from dx7dump.utils.validation import RepairError

logger = logging.getLogger(__name__)


def canonical_frame(payload: bytes) -> bytes:
    """
    Wrap a bank payload in canonical DX7 bank sysex framing.

    Format: F0 43 00 09 20 00 [payload] CS F7

    Args:
        payload: 4096-byte packed bank payload

    Returns:
        Complete 4104-byte bank dump
    """
    if len(payload) != BANK_RAW_SIZE:
        raise ValueError(f"Payload must be {BANK_RAW_SIZE} bytes, got {len(payload)}")

    msg = bytearray(
        [
            SYSEX_START,
            YAMAHA_ID,
            0x00,  # Sub-status 0, channel 1
            BANK_FORMAT,
            BANK_BYTE_COUNT[0],
            BANK_BYTE_COUNT[1],
        ]
    )
    msg.extend(payload)
    msg.append(calculate_checksum(payload))
    msg.append(SYSEX_END)

    return bytes(msg)


@dataclass
class RepairResult:
    """Outcome of a successful repair."""

    path: Path
    backup_path: Optional[Path]
    size: int
    checksum: int


class DX7Writer:
    """
    Writer for repaired DX7 dump files.

    By default the original file is renamed to <name>.ORIG before the
    repaired dump is written in its place.

    Example:
        dump = DX7Reader.read("bank.syx")
        if dump.fix_needed:
            DX7Writer.repair(dump, "bank.syx")
    """

    BACKUP_SUFFIX = ".ORIG"

    @classmethod
    def backup_path_for(cls, filepath: Union[str, Path]) -> Path:
        filepath = Path(filepath)
        return filepath.with_name(filepath.name + cls.BACKUP_SUFFIX)

    @classmethod
    def repair(
        cls, dump: DecodedDump, filepath: Union[str, Path], backup: bool = True
    ) -> RepairResult:
        """
        Write a bank with canonical framing and a recomputed checksum.

        The rewritten file is always a 4104-byte bank sysex, also for
        headerless banks.

        Args:
            dump: Decoded bank dump whose payload is written
            filepath: File to replace (normally the file the dump came from)
            backup: Rename the existing file to <name>.ORIG first

        Returns:
            RepairResult describing what was written

        Raises:
            RepairError: If the dump is not a bank, or if the backup rename,
                the open or the write fails. An OSError is chained as __cause__.
        """
        filepath = Path(filepath)
        if not dump.shape.is_bank:
            raise RepairError(f"Only bank dumps can be fixed: {filepath} is a single voice dump")
        data = canonical_frame(dump.payload)

        backup_path = None
        if backup:
            backup_path = cls.backup_path_for(filepath)
            try:
                filepath.rename(backup_path)
            except OSError as err:
                raise RepairError(
                    f"File could not be renamed for backup. File-fix aborted. {err.strerror}"
                ) from err
            logger.debug("Renamed %s to %s", filepath, backup_path)

        try:
            f = open(filepath, "wb")
        except OSError as err:
            raise RepairError(
                f"Can't open the file for writing: {filepath}. {err.strerror}"
            ) from err

        with f:
            try:
                written = f.write(data)
            except OSError as err:
                raise RepairError(f"Error writing to file: {filepath}. {err.strerror}") from err

        if written != len(data):
            raise RepairError(
                f"Error writing to file: {filepath}. Short write ({written} of {len(data)} bytes)"
            )

        logger.debug("Wrote %d bytes to %s", len(data), filepath)
        return RepairResult(
            path=filepath,
            backup_path=backup_path,
            size=len(data),
            checksum=data[-2],
        )
