"""Tests for DX7 checksum calculation."""

import random
import sys
from pathlib import Path

import pytest

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from dx7dump.formats.sysex import verify
from dx7dump.models.dump import Anomaly, DumpShape
from dx7dump.utils.checksum import calculate_checksum, verify_checksum

from conftest import frame_bank


class TestChecksum:
    """Test cases for the 7-bit two's complement checksum."""

    def test_empty(self):
        assert calculate_checksum(b"") == 0

    def test_known_value(self):
        assert calculate_checksum(bytes([0x01, 0x02])) == 125

    def test_accepts_list(self):
        assert calculate_checksum([0x01, 0x02]) == 125

    def test_sum_with_checksum_is_multiple_of_128(self):
        """Payload plus checksum always sums to 0 mod 128."""
        rng = random.Random(7)
        for _ in range(20):
            payload = bytes(rng.randrange(128) for _ in range(4096))
            assert (sum(payload) + calculate_checksum(payload)) % 128 == 0

    def test_high_bit_ignored(self):
        assert calculate_checksum(bytes([0x81])) == calculate_checksum(bytes([0x01]))

    def test_verify_checksum(self):
        payload = bytes(range(100))
        assert verify_checksum(payload, calculate_checksum(payload))
        assert not verify_checksum(payload, (calculate_checksum(payload) + 1) & 0x7F)


class TestChecksumRoundTrip:
    """A canonical frame verifies; any flipped payload bit breaks the checksum."""

    @pytest.fixture
    def payload(self):
        rng = random.Random(42)
        return bytes(rng.randrange(128) for _ in range(4096))

    def test_canonical_frame_verifies(self, payload):
        info = verify(frame_bank(payload), DumpShape.BANK_SYSEX)
        assert info.issues == ()
        assert info.checksum_valid

    @pytest.mark.parametrize("index", [0, 1, 127, 2048, 4095])
    @pytest.mark.parametrize("bit", range(7))
    def test_flipped_bit_fails_checksum(self, payload, index, bit):
        data = bytearray(frame_bank(payload))
        data[6 + index] ^= 1 << bit

        info = verify(bytes(data), DumpShape.BANK_SYSEX)

        assert info.anomalies == [Anomaly.CHECKSUM]
        assert not info.checksum_valid
