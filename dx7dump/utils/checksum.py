"""
DX7 SysEx checksum calculation utilities.

DX7 bulk dumps end with a checksum byte calculated as:
1. Sum the payload bytes (voice data only), each masked to 7 bits
2. Take the two's complement of the sum
3. Keep the lower 7 bits

The header (F0 43 0n ff bb bb), the checksum itself and the closing F7
are not part of the sum. Payload bytes should never have bit 7 set;
masking each byte keeps the result stable if they do.
"""

from typing import List, Union


def calculate_checksum(data: Union[bytes, List[int]]) -> int:
    """
    Calculate the DX7 checksum for a voice payload.

    Args:
        data: 4096-byte bank payload or 155-byte single-voice payload

    Returns:
        Checksum value (0-127)

    Example:
        >>> calculate_checksum(bytes([0x01, 0x02]))
        125
    """
    if isinstance(data, list):
        data = bytes(data)

    total = sum(b & 0x7F for b in data)

    # Two's complement, masked to 7 bits
    return (-total) & 0x7F


def verify_checksum(data: Union[bytes, List[int]], expected_checksum: int) -> bool:
    """
    Verify a DX7 checksum.

    Args:
        data: Payload the checksum was calculated over
        expected_checksum: The checksum byte from the file

    Returns:
        True if checksum is valid, False otherwise
    """
    return calculate_checksum(data) == expected_checksum
