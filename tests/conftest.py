"""Test configuration and fixtures.

Dumps are built byte by byte here rather than with the library's own
encoders, so the decoder tests compare against independent data.
"""

import sys
from pathlib import Path

import pytest

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


def packed_operator(output_level: int = 0) -> bytes:
    """17 packed bytes of an INIT VOICE operator."""
    return bytes(
        [
            99, 99, 99, 99,  # EG rates
            99, 99, 99, 0,  # EG levels
            39,  # break point C3
            0, 0,  # left/right depth
            0x00,  # curves -LIN/-LIN
            0x38,  # rate scale 0, detune 7
            0x00,  # AMS 0, KVS 0
            output_level,
            0x02,  # ratio mode, coarse 1
            0,  # fine
        ]
    )


def init_voice_packed(name: bytes = b"INIT VOICE") -> bytes:
    """128 packed bytes of the DX7 INIT VOICE (only operator 1 audible)."""
    data = bytearray()
    for i in range(6):
        # Operator 6 is stored first, operator 1 last
        data.extend(packed_operator(99 if i == 5 else 0))
    data.extend([99, 99, 99, 99, 50, 50, 50, 50])  # pitch EG
    data.append(0)  # algorithm 1
    data.append(0x08)  # feedback 0, osc key sync on
    data.extend([35, 0, 0, 0])  # LFO speed, delay, PMD, AMD
    data.append(0x31)  # LFO sync on, triangle, PMS 3
    data.append(24)  # transpose C3
    data.extend(name.ljust(10, b" "))
    assert len(data) == 128
    return bytes(data)


def init_voice_unpacked(name: bytes = b"INIT VOICE") -> bytes:
    """155 unpacked bytes of the DX7 INIT VOICE."""
    data = bytearray()
    for i in range(6):
        data.extend([99, 99, 99, 99, 99, 99, 99, 0])  # EG
        data.extend([39, 0, 0, 0, 0])  # BP, LD, RD, LC, RC
        data.extend([0, 0, 0])  # RS, AMS, KVS
        data.append(99 if i == 5 else 0)  # OL
        data.extend([0, 1, 0, 7])  # mode, coarse, fine, detune
    data.extend([99, 99, 99, 99, 50, 50, 50, 50])
    data.extend([0, 0, 1])  # algorithm, feedback, osc key sync
    data.extend([35, 0, 0, 0, 1, 0, 3])  # LFO
    data.append(24)
    data.extend(name.ljust(10, b" "))
    assert len(data) == 155
    return bytes(data)


def checksum(payload: bytes) -> int:
    return (128 - sum(payload) % 128) % 128


def frame_bank(payload: bytes, channel: int = 0) -> bytes:
    header = bytes([0xF0, 0x43, channel, 0x09, 0x20, 0x00])
    return header + payload + bytes([checksum(payload), 0xF7])


def frame_single(payload: bytes, channel: int = 0) -> bytes:
    header = bytes([0xF0, 0x43, channel, 0x00, 0x01, 0x1B])
    return header + payload + bytes([checksum(payload), 0xF7])


def distinct_bank_payload() -> bytes:
    """32 INIT VOICEs that differ in algorithm (0-31)."""
    voices = []
    for i in range(32):
        voice = bytearray(init_voice_packed(f"VOICE {i + 1:02d}".encode("ascii")))
        voice[110] = i
        voices.append(bytes(voice))
    return b"".join(voices)


@pytest.fixture
def init_voice():
    """Packed INIT VOICE."""
    return init_voice_packed()


@pytest.fixture
def bank_payload():
    """4096-byte payload of 32 INIT VOICEs."""
    return init_voice_packed() * 32


@pytest.fixture
def bank_sysex(bank_payload):
    """Canonical 4104-byte bank dump."""
    return frame_bank(bank_payload)


@pytest.fixture
def single_sysex():
    """Canonical 163-byte single voice dump."""
    return frame_single(init_voice_unpacked())


@pytest.fixture
def bank_file(tmp_path, bank_sysex):
    """Canonical bank dump on disk."""
    path = tmp_path / "init.syx"
    path.write_bytes(bank_sysex)
    return path


@pytest.fixture
def bad_checksum_file(tmp_path, bank_sysex):
    """Bank dump with the checksum byte off by one."""
    data = bytearray(bank_sysex)
    data[-2] = (data[-2] + 1) & 0x7F
    path = tmp_path / "broken.syx"
    path.write_bytes(bytes(data))
    return path


@pytest.fixture
def raw_bank_file(tmp_path, bank_payload):
    """Headerless 4096-byte bank on disk."""
    path = tmp_path / "raw.syx"
    path.write_bytes(bank_payload)
    return path


@pytest.fixture
def single_voice_file(tmp_path, single_sysex):
    """Single voice dump on disk."""
    path = tmp_path / "single.syx"
    path.write_bytes(single_sysex)
    return path
