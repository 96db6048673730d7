"""
DX7 packed voice format (32-voice bulk dump).

Each voice takes 128 bytes: six 17-byte operators (operator 6 first)
followed by a 26-byte voice trailer. Several parameters share a byte;
bits are numbered LSB-first.

Packed operator (17 bytes):
    0-7   EG R1 R2 R3 R4 L1 L2 L3 L4
    8     level scaling break point
    9     scale left depth
    10    scale right depth
    11    bits 0-1 left curve, bits 2-3 right curve
    12    bits 0-2 rate scale, bits 3-6 detune
    13    bits 0-1 amp mod sensitivity, bits 2-4 key velocity sensitivity
    14    output level
    15    bit 0 oscillator mode, bits 1-5 frequency coarse
    16    frequency fine

Packed voice trailer (offsets within the voice):
    102-109 pitch EG R1-R4, L1-L4
    110     bits 0-4 algorithm
    111     bits 0-2 feedback, bit 3 oscillator key sync
    112-115 LFO speed, delay, pitch mod depth, amp mod depth
    116     bit 0 LFO sync, bits 1-3 LFO wave, bits 4-6 pitch mod sensitivity
    117     transpose
    118-127 name

Unused bits are ignored when reading; dumps in the wild often carry
noise there. Every field is extracted by explicit masking and shifting.
"""

import logging
from typing import List

from dx7dump.models.voice import Bank, Operator, Voice, OPERATOR_COUNT, VOICES_PER_BANK

logger = logging.getLogger(__name__)

PACKED_OPERATOR_SIZE = 17
PACKED_VOICE_SIZE = 128
PACKED_BANK_SIZE = PACKED_VOICE_SIZE * VOICES_PER_BANK  # 4096
NAME_OFFSET = 118
NAME_SIZE = 10

# Trailer offsets within a packed voice
_PITCH_EG = PACKED_OPERATOR_SIZE * OPERATOR_COUNT  # 102
_ALGORITHM = 110
_FEEDBACK_KEYSYNC = 111
_LFO = 112
_LFO_FLAGS = 116
_TRANSPOSE = 117


def _bits(byte: int, shift: int, width: int) -> int:
    """Extract `width` bits starting at bit `shift` (LSB = bit 0)."""
    return (byte >> shift) & ((1 << width) - 1)


def decode_packed_operator(data: bytes) -> Operator:
    """
    Decode one 17-byte packed operator.

    Args:
        data: Packed operator bytes

    Returns:
        Decoded Operator
    """
    if len(data) != PACKED_OPERATOR_SIZE:
        raise ValueError(f"Packed operator must be {PACKED_OPERATOR_SIZE} bytes, got {len(data)}")

    return Operator(
        eg_rates=(data[0], data[1], data[2], data[3]),
        eg_levels=(data[4], data[5], data[6], data[7]),
        level_scaling_break_point=data[8],
        scale_left_depth=data[9],
        scale_right_depth=data[10],
        scale_left_curve=_bits(data[11], 0, 2),
        scale_right_curve=_bits(data[11], 2, 2),
        rate_scale=_bits(data[12], 0, 3),
        detune=_bits(data[12], 3, 4),
        amp_mod_sensitivity=_bits(data[13], 0, 2),
        key_velocity_sensitivity=_bits(data[13], 2, 3),
        output_level=data[14],
        oscillator_mode=_bits(data[15], 0, 1),
        frequency_coarse=_bits(data[15], 1, 5),
        frequency_fine=data[16],
    )


def decode_packed_voice(data: bytes) -> Voice:
    """
    Decode one 128-byte packed voice.

    Args:
        data: Packed voice bytes

    Returns:
        Decoded Voice (operators in storage order, operator 6 first)
    """
    if len(data) != PACKED_VOICE_SIZE:
        raise ValueError(f"Packed voice must be {PACKED_VOICE_SIZE} bytes, got {len(data)}")

    operators = tuple(
        decode_packed_operator(data[i * PACKED_OPERATOR_SIZE : (i + 1) * PACKED_OPERATOR_SIZE])
        for i in range(OPERATOR_COUNT)
    )

    p = _PITCH_EG
    lfo_flags = data[_LFO_FLAGS]

    return Voice(
        operators=operators,
        pitch_eg_rates=(data[p], data[p + 1], data[p + 2], data[p + 3]),
        pitch_eg_levels=(data[p + 4], data[p + 5], data[p + 6], data[p + 7]),
        algorithm=_bits(data[_ALGORITHM], 0, 5),
        feedback=_bits(data[_FEEDBACK_KEYSYNC], 0, 3),
        osc_key_sync=_bits(data[_FEEDBACK_KEYSYNC], 3, 1),
        lfo_speed=data[_LFO],
        lfo_delay=data[_LFO + 1],
        lfo_pitch_mod_depth=data[_LFO + 2],
        lfo_amp_mod_depth=data[_LFO + 3],
        lfo_sync=_bits(lfo_flags, 0, 1),
        lfo_wave=_bits(lfo_flags, 1, 3),
        # Some references list this field as 4 bits wide; the DX7 only uses 3.
        lfo_pitch_mod_sensitivity=_bits(lfo_flags, 4, 3),
        transpose=data[_TRANSPOSE],
        name=bytes(data[NAME_OFFSET : NAME_OFFSET + NAME_SIZE]),
    )


def encode_packed_operator(op: Operator) -> bytes:
    """Encode an operator to 17 packed bytes. Bitfield values are masked to their widths."""
    return bytes(
        [
            *op.eg_rates,
            *op.eg_levels,
            op.level_scaling_break_point,
            op.scale_left_depth,
            op.scale_right_depth,
            (op.scale_left_curve & 0x03) | ((op.scale_right_curve & 0x03) << 2),
            (op.rate_scale & 0x07) | ((op.detune & 0x0F) << 3),
            (op.amp_mod_sensitivity & 0x03) | ((op.key_velocity_sensitivity & 0x07) << 2),
            op.output_level,
            (op.oscillator_mode & 0x01) | ((op.frequency_coarse & 0x1F) << 1),
            op.frequency_fine,
        ]
    )


def encode_packed_voice(voice: Voice) -> bytes:
    """
    Encode a voice to 128 packed bytes.

    Args:
        voice: Voice to encode

    Returns:
        Packed voice bytes
    """
    data = bytearray()
    for op in voice.operators:
        data.extend(encode_packed_operator(op))

    data.extend(voice.pitch_eg_rates)
    data.extend(voice.pitch_eg_levels)
    data.append(voice.algorithm & 0x1F)
    data.append((voice.feedback & 0x07) | ((voice.osc_key_sync & 0x01) << 3))
    data.append(voice.lfo_speed)
    data.append(voice.lfo_delay)
    data.append(voice.lfo_pitch_mod_depth)
    data.append(voice.lfo_amp_mod_depth)
    data.append(
        (voice.lfo_sync & 0x01)
        | ((voice.lfo_wave & 0x07) << 1)
        | ((voice.lfo_pitch_mod_sensitivity & 0x07) << 4)
    )
    data.append(voice.transpose)
    data.extend(voice.name[:NAME_SIZE].ljust(NAME_SIZE, b" "))

    return bytes(data)


def split_packed_bank(payload: bytes) -> List[bytes]:
    """Split a 4096-byte bank payload into 32 packed voices."""
    if len(payload) != PACKED_BANK_SIZE:
        raise ValueError(f"Bank payload must be {PACKED_BANK_SIZE} bytes, got {len(payload)}")
    return [
        bytes(payload[i * PACKED_VOICE_SIZE : (i + 1) * PACKED_VOICE_SIZE])
        for i in range(VOICES_PER_BANK)
    ]


def decode_packed_bank(payload: bytes) -> Bank:
    """
    Decode a 4096-byte bank payload.

    Args:
        payload: 32 packed voices back to back

    Returns:
        Bank with 32 voices; the payload is kept on the bank
    """
    voices = tuple(decode_packed_voice(chunk) for chunk in split_packed_bank(payload))
    logger.debug("Decoded %d packed voices", len(voices))
    return Bank(voices=voices, payload=bytes(payload))
