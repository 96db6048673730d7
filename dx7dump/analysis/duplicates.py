"""
Duplicate voice detection within a bank.
"""

import logging
from dataclasses import dataclass
from typing import List

from dx7dump.models.voice import Bank
from dx7dump.formats.packed import NAME_SIZE, split_packed_bank

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DuplicatePair:
    """Two voices with identical parameters (1-based bank positions)."""

    first: int
    second: int


def find_duplicates(bank: Bank, by_fields: bool = False) -> List[DuplicatePair]:
    """
    Find every pair of voices that differ at most in their name.

    By default the packed voice bytes are compared, leaving out the
    10 name bytes. Noise in unused packed bits makes such voices look
    different; by_fields compares the decoded parameters instead.

    Args:
        bank: Bank to search
        by_fields: Compare decoded values instead of packed bytes

    Returns:
        All pairs (i, j) with i < j, in ascending order
    """
    if by_fields or not bank.payload:
        keys = [voice.without_name() for voice in bank.voices]
    else:
        keys = [chunk[:-NAME_SIZE] for chunk in split_packed_bank(bank.payload)]

    pairs = []
    for i in range(len(keys) - 1):
        for j in range(i + 1, len(keys)):
            if keys[i] == keys[j]:
                pairs.append(DuplicatePair(i + 1, j + 1))

    logger.debug("Found %d duplicate pairs", len(pairs))
    return pairs
