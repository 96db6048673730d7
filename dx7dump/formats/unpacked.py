"""
DX7 unpacked voice format (single voice dump).

The single voice layout stores one parameter per byte, 155 bytes in
total. Operators come first, six blocks of 21 bytes with operator 6
first, then the voice parameters.

Unpacked operator (21 bytes):
    0-7   EG R1 R2 R3 R4 L1 L2 L3 L4
    8     level scaling break point
    9-10  scale left depth, scale right depth
    11-12 scale left curve, scale right curve
    13    rate scale
    14    amp mod sensitivity
    15    key velocity sensitivity
    16    output level
    17    oscillator mode
    18    frequency coarse
    19    frequency fine
    20    detune

Voice parameters (offsets within the voice):
    126-133 pitch EG R1-R4, L1-L4
    134     algorithm
    135     feedback
    136     oscillator key sync
    137-140 LFO speed, delay, pitch mod depth, amp mod depth
    141     LFO sync
    142     LFO wave
    143     LFO pitch mod sensitivity
    144     transpose
    145-154 name

Single voice dumps carry this layout directly. Bank voices are
unpacked to it for the hex view and for single voice checksums.
"""

from dx7dump.models.voice import Operator, Voice, OPERATOR_COUNT
from dx7dump.formats.packed import decode_packed_voice, encode_packed_voice

UNPACKED_OPERATOR_SIZE = 21
UNPACKED_VOICE_SIZE = 155
NAME_OFFSET = 145
NAME_SIZE = 10

_PITCH_EG = UNPACKED_OPERATOR_SIZE * OPERATOR_COUNT  # 126


def decode_unpacked_operator(data: bytes) -> Operator:
    """Decode one 21-byte unpacked operator. No masking is applied."""
    if len(data) != UNPACKED_OPERATOR_SIZE:
        raise ValueError(
            f"Unpacked operator must be {UNPACKED_OPERATOR_SIZE} bytes, got {len(data)}"
        )

    return Operator(
        eg_rates=(data[0], data[1], data[2], data[3]),
        eg_levels=(data[4], data[5], data[6], data[7]),
        level_scaling_break_point=data[8],
        scale_left_depth=data[9],
        scale_right_depth=data[10],
        scale_left_curve=data[11],
        scale_right_curve=data[12],
        rate_scale=data[13],
        amp_mod_sensitivity=data[14],
        key_velocity_sensitivity=data[15],
        output_level=data[16],
        oscillator_mode=data[17],
        frequency_coarse=data[18],
        frequency_fine=data[19],
        detune=data[20],
    )


def decode_unpacked_voice(data: bytes) -> Voice:
    """
    Decode a 155-byte unpacked voice.

    Args:
        data: Unpacked voice bytes

    Returns:
        Decoded Voice (operators in storage order, operator 6 first)
    """
    if len(data) != UNPACKED_VOICE_SIZE:
        raise ValueError(f"Unpacked voice must be {UNPACKED_VOICE_SIZE} bytes, got {len(data)}")

    operators = tuple(
        decode_unpacked_operator(
            data[i * UNPACKED_OPERATOR_SIZE : (i + 1) * UNPACKED_OPERATOR_SIZE]
        )
        for i in range(OPERATOR_COUNT)
    )

    p = _PITCH_EG
    return Voice(
        operators=operators,
        pitch_eg_rates=(data[p], data[p + 1], data[p + 2], data[p + 3]),
        pitch_eg_levels=(data[p + 4], data[p + 5], data[p + 6], data[p + 7]),
        algorithm=data[134],
        feedback=data[135],
        osc_key_sync=data[136],
        lfo_speed=data[137],
        lfo_delay=data[138],
        lfo_pitch_mod_depth=data[139],
        lfo_amp_mod_depth=data[140],
        lfo_sync=data[141],
        lfo_wave=data[142],
        lfo_pitch_mod_sensitivity=data[143],
        transpose=data[144],
        name=bytes(data[NAME_OFFSET : NAME_OFFSET + NAME_SIZE]),
    )


def encode_unpacked_operator(op: Operator) -> bytes:
    """Encode an operator to 21 unpacked bytes."""
    return bytes(
        [
            *op.eg_rates,
            *op.eg_levels,
            op.level_scaling_break_point,
            op.scale_left_depth,
            op.scale_right_depth,
            op.scale_left_curve,
            op.scale_right_curve,
            op.rate_scale,
            op.amp_mod_sensitivity,
            op.key_velocity_sensitivity,
            op.output_level,
            op.oscillator_mode,
            op.frequency_coarse,
            op.frequency_fine,
            op.detune,
        ]
    )


def encode_unpacked_voice(voice: Voice) -> bytes:
    """
    Encode a voice to the 155-byte unpacked layout.

    Args:
        voice: Voice to encode

    Returns:
        Unpacked voice bytes
    """
    data = bytearray()
    for op in voice.operators:
        data.extend(encode_unpacked_operator(op))

    data.extend(voice.pitch_eg_rates)
    data.extend(voice.pitch_eg_levels)
    data.extend(
        [
            voice.algorithm,
            voice.feedback,
            voice.osc_key_sync,
            voice.lfo_speed,
            voice.lfo_delay,
            voice.lfo_pitch_mod_depth,
            voice.lfo_amp_mod_depth,
            voice.lfo_sync,
            voice.lfo_wave,
            voice.lfo_pitch_mod_sensitivity,
            voice.transpose,
        ]
    )
    data.extend(voice.name[:NAME_SIZE].ljust(NAME_SIZE, b" "))

    return bytes(data)


def unpack_voice(packed: bytes) -> bytes:
    """
    Convert a 128-byte packed voice to the 155-byte unpacked layout.

    Unused bits of the packed bytes are dropped.
    """
    return encode_unpacked_voice(decode_packed_voice(packed))


def pack_voice(unpacked: bytes) -> bytes:
    """
    Convert a 155-byte unpacked voice to the 128-byte packed layout.

    Values wider than their packed field are truncated to the field width.
    """
    return encode_packed_voice(decode_unpacked_voice(unpacked))
