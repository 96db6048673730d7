"""
Per-file processing state.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from dx7dump.models.dump import DecodedDump, FramingIssue
from dx7dump.formats.reader import DX7Reader, decode_dump
from dx7dump.formats.writer import DX7Writer, RepairResult

logger = logging.getLogger(__name__)


def display_path(path: Union[str, Path]) -> str:
    """Path as shown to the user, without a leading "./"."""
    text = str(path)
    return text[2:] if text.startswith("./") else text


@dataclass
class FileContext:
    """
    Everything known about one dump file while it is processed.

    A new context is created for every file, so nothing carries over
    from one file to the next.

    Attributes:
        path: File being processed
        data: Raw file contents
        dump: Decoded dump
        repaired: Result of a repair, once one was written
    """

    path: Path
    data: bytes = field(repr=False)
    dump: DecodedDump
    repaired: Optional[RepairResult] = None

    @classmethod
    def load(cls, filepath: Union[str, Path]) -> "FileContext":
        """
        Read, classify, verify and decode a file.

        Raises:
            OSError: If the file cannot be read
            DumpError: If the file is not a decodable DX7 dump
        """
        path = Path(filepath)
        data = DX7Reader.read_bytes(path)
        logger.debug("Loading %s", path)
        return cls(path=path, data=data, dump=decode_dump(data))

    @property
    def issues(self) -> List[FramingIssue]:
        return list(self.dump.issues)

    @property
    def fix_needed(self) -> bool:
        return self.dump.fix_needed and self.repaired is None

    def repair(self, backup: bool = True) -> RepairResult:
        """Write the dump back with canonical framing."""
        self.repaired = DX7Writer.repair(self.dump, self.path, backup=backup)
        return self.repaired
