"""
DX7 dump file reader.

Reads .syx bank dumps, headerless banks and single voice dumps and
converts them to the common Voice/Bank model.
"""

import logging
from pathlib import Path
from typing import Union

from dx7dump.models.dump import Anomaly, DecodedDump, DumpShape, FramingIssue
from dx7dump.formats.packed import decode_packed_bank
from dx7dump.formats.sysex import BANK_SYSEX_SIZE, classify, payload_of, verify
from dx7dump.formats.unpacked import decode_unpacked_voice
from dx7dump.utils.validation import WrongSizeError

logger = logging.getLogger(__name__)


HEADERLESS_ISSUE = FramingIssue(
    Anomaly.HEADERLESS,
    0,
    "File seems to be a headerless dump (4096 Bytes)",
    "F0 43 0n 09 20 00 ... CS F7",
    "no framing",
)


def decode_dump(data: bytes) -> DecodedDump:
    """
    Classify, verify and decode a dump.

    Raw banks skip verification (they have no framing and no checksum)
    and are marked HEADERLESS so a repair can wrap them.

    Args:
        data: Complete file contents

    Returns:
        DecodedDump for the detected shape

    Raises:
        WrongSizeError: If the size matches no dump shape
        FatalFramingError: If a sysex dump lacks F0, 0x43 or F7
    """
    shape = classify(data)
    payload = payload_of(data, shape)

    if shape is DumpShape.BANK_RAW:
        return DecodedDump(
            shape=shape,
            payload=payload,
            bank=decode_packed_bank(payload),
            issues=(HEADERLESS_ISSUE,),
        )

    framing = verify(data, shape)

    if shape is DumpShape.BANK_SYSEX:
        return DecodedDump(
            shape=shape,
            payload=payload,
            bank=decode_packed_bank(payload),
            framing=framing,
            issues=framing.issues,
        )

    return DecodedDump(
        shape=shape,
        payload=payload,
        voice=decode_unpacked_voice(payload),
        framing=framing,
        issues=framing.issues,
    )


class DX7Reader:
    """
    Reader for DX7 voice dump files.

    Example:
        dump = DX7Reader.read("rom1a.syx")
        for number, voice in enumerate(dump.voices, start=1):
            print(number, voice.display_name())
    """

    @classmethod
    def read(cls, filepath: Union[str, Path]) -> DecodedDump:
        """
        Read and decode a dump file.

        Args:
            filepath: Path to .syx file

        Returns:
            Decoded dump
        """
        return decode_dump(cls.read_bytes(filepath))

    @classmethod
    def read_bytes(cls, filepath: Union[str, Path]) -> bytes:
        """
        Read the raw contents of a dump file.

        Files larger than a bank dump are rejected from their size
        without reading them.

        Raises:
            OSError: If the file cannot be opened or read
            WrongSizeError: If the file is larger than any dump
        """
        filepath = Path(filepath)

        size = filepath.stat().st_size
        if size > BANK_SYSEX_SIZE:
            raise WrongSizeError(size, too_large=True)

        with open(filepath, "rb") as f:
            data = f.read()

        logger.debug("Read %d bytes from %s", len(data), filepath)
        return data
