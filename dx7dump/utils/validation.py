"""
Error types and parameter range checks for DX7 voice data.

Decoding never rejects a voice because a parameter is out of range;
those values are kept as-is and reported by out_of_range_fields() so
the presentation layer can mark them.
"""

from typing import Dict, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from dx7dump.models.voice import Operator, Voice


class DumpError(Exception):
    """Base class for files that cannot be decoded at all."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class WrongSizeError(DumpError):
    """Raised when the file length matches none of the known dump shapes."""

    def __init__(self, size: int, too_large: bool):
        if too_large:
            reason = f"File too big ({size} Bytes)"
        else:
            reason = f"File too small ({size} Bytes)"
        super().__init__(reason)
        self.size = size
        self.too_large = too_large


class FatalFramingError(DumpError):
    """Raised when a sysex frame is missing F0, the Yamaha ID or F7."""

    def __init__(self, reason: str, offset: int, expected: int, actual: int):
        super().__init__(reason)
        self.offset = offset
        self.expected = expected
        self.actual = actual


class RepairError(DumpError):
    """Raised when a repaired file cannot be written."""

    pass


# Highest valid raw value per operator parameter
OPERATOR_LIMITS: Dict[str, int] = {
    "eg_rates": 99,
    "eg_levels": 99,
    "level_scaling_break_point": 99,
    "scale_left_depth": 99,
    "scale_right_depth": 99,
    "scale_left_curve": 3,
    "scale_right_curve": 3,
    "rate_scale": 7,
    "amp_mod_sensitivity": 3,
    "key_velocity_sensitivity": 7,
    "output_level": 99,
    "oscillator_mode": 1,
    "frequency_coarse": 31,
    "frequency_fine": 99,
    "detune": 14,
}

# Highest valid raw value per voice-level parameter
VOICE_LIMITS: Dict[str, int] = {
    "pitch_eg_rates": 99,
    "pitch_eg_levels": 99,
    "algorithm": 31,
    "feedback": 7,
    "osc_key_sync": 1,
    "lfo_speed": 99,
    "lfo_delay": 99,
    "lfo_pitch_mod_depth": 99,
    "lfo_amp_mod_depth": 99,
    "lfo_sync": 1,
    "lfo_wave": 5,
    "lfo_pitch_mod_sensitivity": 7,
    "transpose": 48,
}


def in_range(value: int, maximum: int) -> bool:
    """Check a raw parameter value against its upper limit (lower is always 0)."""
    return 0 <= value <= maximum


def limit_for(name: str) -> Optional[int]:
    """Look up the limit for an operator or voice parameter name."""
    if name in OPERATOR_LIMITS:
        return OPERATOR_LIMITS[name]
    return VOICE_LIMITS.get(name)


def _check(prefix: str, obj: object, limits: Dict[str, int]) -> List[str]:
    bad = []
    for name, maximum in limits.items():
        value = getattr(obj, name)
        if isinstance(value, tuple):
            for i, item in enumerate(value):
                if not in_range(item, maximum):
                    bad.append(f"{prefix}{name}[{i + 1}]")
        elif not in_range(value, maximum):
            bad.append(f"{prefix}{name}")
    return bad


def operator_out_of_range(op: "Operator", prefix: str = "") -> List[str]:
    """Return the names of operator parameters outside their valid range."""
    return _check(prefix, op, OPERATOR_LIMITS)


def out_of_range_fields(voice: "Voice") -> List[str]:
    """
    Return every out-of-range parameter of a voice.

    Operator parameters are prefixed with their display number,
    e.g. "op1.detune" for the operator shown as operator 1.

    Args:
        voice: Decoded voice

    Returns:
        Parameter paths in display order (voice fields first)
    """
    bad = _check("", voice, VOICE_LIMITS)
    for number, op in voice.display_operators():
        bad.extend(operator_out_of_range(op, prefix=f"op{number}."))
    return bad
