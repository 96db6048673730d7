"""
Voice analysis module.

Derived parameter values, duplicate detection and bank comparison.
"""

from dx7dump.analysis.duplicates import DuplicatePair, find_duplicates
from dx7dump.analysis.bank_diff import BankDiff, VoiceDiff, FieldDiff, diff_banks, diff_voices

__all__ = [
    "DuplicatePair",
    "find_duplicates",
    "BankDiff",
    "VoiceDiff",
    "FieldDiff",
    "diff_banks",
    "diff_voices",
]
