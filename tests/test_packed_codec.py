"""Tests for the 128-byte packed voice format."""

import random
import sys
from pathlib import Path

import pytest

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from dx7dump.formats.packed import (
    decode_packed_bank,
    decode_packed_voice,
    encode_packed_voice,
    split_packed_bank,
)
from dx7dump.models.voice import Voice

from conftest import distinct_bank_payload, init_voice_packed


class TestDecodeInitVoice:
    """Test decoding of the INIT VOICE."""

    def test_name(self, init_voice):
        voice = decode_packed_voice(init_voice)
        assert voice.name == b"INIT VOICE"
        assert voice.display_name() == "INIT VOICE"

    def test_voice_parameters(self, init_voice):
        voice = decode_packed_voice(init_voice)
        assert voice.algorithm == 0
        assert voice.feedback == 0
        assert voice.osc_key_sync == 1
        assert voice.pitch_eg_rates == (99, 99, 99, 99)
        assert voice.pitch_eg_levels == (50, 50, 50, 50)
        assert voice.lfo_speed == 35
        assert voice.lfo_sync == 1
        assert voice.lfo_wave == 0
        assert voice.lfo_pitch_mod_sensitivity == 3
        assert voice.transpose == 24

    def test_operator_order(self, init_voice):
        """Operator 1 is stored last; only it has output level 99."""
        voice = decode_packed_voice(init_voice)
        assert voice.operator(1).output_level == 99
        assert voice.operators[5].output_level == 99
        for number in range(2, 7):
            assert voice.operator(number).output_level == 0

    def test_operator_parameters(self, init_voice):
        op = decode_packed_voice(init_voice).operator(1)
        assert op.eg_rates == (99, 99, 99, 99)
        assert op.eg_levels == (99, 99, 99, 0)
        assert op.level_scaling_break_point == 39
        assert op.detune == 7
        assert op.frequency_coarse == 1
        assert op.frequency_fine == 0
        assert op.oscillator_mode == 0

    def test_wrong_size(self):
        with pytest.raises(ValueError):
            decode_packed_voice(bytes(127))


class TestBitfields:
    """Shared bytes are split by masking; unused bits are ignored."""

    def test_algorithm_31(self, init_voice):
        data = bytearray(init_voice)
        data[110] = 31
        assert decode_packed_voice(bytes(data)).algorithm == 31

    def test_algorithm_noise_bits(self, init_voice):
        """Noise above the 5 algorithm bits does not leak into the value."""
        data = bytearray(init_voice)
        data[110] = 0x60 | 31
        assert decode_packed_voice(bytes(data)).algorithm == 31

        data[110] = 0x60 | 30
        assert decode_packed_voice(bytes(data)).algorithm == 30

    def test_feedback_and_key_sync(self, init_voice):
        data = bytearray(init_voice)
        data[111] = 0x07  # feedback 7, key sync off
        voice = decode_packed_voice(bytes(data))
        assert voice.feedback == 7
        assert voice.osc_key_sync == 0

        data[111] = 0x70 | 0x0D  # noise + key sync + feedback 5
        voice = decode_packed_voice(bytes(data))
        assert voice.feedback == 5
        assert voice.osc_key_sync == 1

    def test_lfo_flags(self, init_voice):
        data = bytearray(init_voice)
        # sync 0, wave 5 (S&H), PMS 7
        data[116] = (5 << 1) | (7 << 4)
        voice = decode_packed_voice(bytes(data))
        assert voice.lfo_sync == 0
        assert voice.lfo_wave == 5
        assert voice.lfo_pitch_mod_sensitivity == 7

    def test_operator_shared_bytes(self, init_voice):
        data = bytearray(init_voice)
        base = 5 * 17  # operator 1
        data[base + 11] = 0x0E  # left curve 2, right curve 3
        data[base + 12] = (14 << 3) | 5  # detune 14, rate scale 5
        data[base + 13] = (6 << 2) | 3  # KVS 6, AMS 3
        data[base + 15] = (31 << 1) | 1  # coarse 31, fixed mode
        op = decode_packed_voice(bytes(data)).operator(1)
        assert op.scale_left_curve == 2
        assert op.scale_right_curve == 3
        assert op.detune == 14
        assert op.rate_scale == 5
        assert op.key_velocity_sensitivity == 6
        assert op.amp_mod_sensitivity == 3
        assert op.frequency_coarse == 31
        assert op.oscillator_mode == 1

    def test_operator_noise_bits(self, init_voice):
        data = bytearray(init_voice)
        base = 5 * 17
        data[base + 11] |= 0x70
        data[base + 13] |= 0x60
        data[base + 15] |= 0x40
        op = decode_packed_voice(bytes(data)).operator(1)
        assert op.scale_left_curve == 0
        assert op.scale_right_curve == 0
        assert op.amp_mod_sensitivity == 0
        assert op.key_velocity_sensitivity == 0
        assert op.frequency_coarse == 1
        assert op.oscillator_mode == 0


class TestEncode:
    """Test encoding back to packed bytes."""

    def test_init_voice_round_trip(self, init_voice):
        assert encode_packed_voice(decode_packed_voice(init_voice)) == init_voice

    def test_noise_dropped(self, init_voice):
        data = bytearray(init_voice)
        data[110] |= 0x60
        encoded = encode_packed_voice(decode_packed_voice(bytes(data)))
        assert encoded == init_voice

    def test_default_voice_name_padded(self):
        voice = Voice(name=b"ABC")
        assert encode_packed_voice(voice)[118:] == b"ABC       "

    def test_random_voices_stable(self):
        """Decode then encode is idempotent after the first pass."""
        rng = random.Random(3)
        for _ in range(50):
            data = bytes(rng.randrange(128) for _ in range(128))
            once = encode_packed_voice(decode_packed_voice(data))
            twice = encode_packed_voice(decode_packed_voice(once))
            assert once == twice


class TestBank:
    """Test bank splitting and decoding."""

    def test_split(self, bank_payload):
        chunks = split_packed_bank(bank_payload)
        assert len(chunks) == 32
        assert all(chunk == init_voice_packed() for chunk in chunks)

    def test_decode_bank(self):
        bank = decode_packed_bank(distinct_bank_payload())
        assert len(bank) == 32
        assert bank.voice(1).display_name() == "VOICE 01  "
        assert bank.voice(32).algorithm == 31
        assert [v.algorithm for v in bank] == list(range(32))

    def test_wrong_size(self):
        with pytest.raises(ValueError):
            split_packed_bank(bytes(4095))
