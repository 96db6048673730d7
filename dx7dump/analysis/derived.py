"""
Derived values for DX7 voice parameters.

Turns raw parameter values into what the DX7 shows: operator
frequencies, signed detune and transpose, note names for keyboard
break points and transpose settings.

Calculators never raise for odd input. Where a raw value has no
meaning they return None and the caller shows an out-of-range marker.
"""

from typing import Optional

from dx7dump.models.voice import CURVE_NAMES, LFO_WAVE_NAMES, Operator

NOTE_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

MODE_NAMES = ("Frequency (Ratio)", "Fixed Frequency (Hz)")
MODE_NAMES_COMPACT = ("Freq. Ratio", "Fixed Freq.")
ON_OFF = ("Off", "On")


def note_name(value: int) -> str:
    """Note name for a semitone number (0 = C)."""
    return NOTE_NAMES[value % 12]


def ratio_frequency(coarse: int, fine: int) -> float:
    """
    Frequency ratio of an operator in ratio mode.

    A coarse value of 0 means half speed (0.5). Fine adds up to 99%
    of the coarse value.

    Example:
        >>> ratio_frequency(0, 50)
        0.75
    """
    base = coarse if coarse != 0 else 0.5
    return base + fine * base / 100


def fixed_frequency(coarse: int, fine: int) -> float:
    """
    Frequency in Hz of an operator in fixed mode.

    Only the lowest two bits of coarse count: 1, 10, 100 or 1000 Hz,
    scaled up by fine in 1/100 decade steps.

    Example:
        >>> fixed_frequency(1, 0)
        10.0
    """
    return 10 ** ((coarse % 4) + fine / 100)


def operator_frequency(op: Operator) -> Optional[float]:
    """
    Frequency of an operator: a ratio in ratio mode, Hz in fixed mode.

    Returns:
        The frequency, or None if the oscillator mode is invalid
    """
    if op.oscillator_mode == 0:
        return ratio_frequency(op.frequency_coarse, op.frequency_fine)
    if op.oscillator_mode == 1:
        return fixed_frequency(op.frequency_coarse, op.frequency_fine)
    return None


def format_frequency(op: Operator) -> Optional[str]:
    """Frequency as text, "1" for a ratio or "10 Hz" in fixed mode."""
    freq = operator_frequency(op)
    if freq is None:
        return None
    if op.is_fixed:
        return f"{freq:g} Hz"
    return f"{freq:g}"


def display_detune(raw: int) -> int:
    """Detune as shown on the DX7 (-7..+7)."""
    return raw - 7


def display_transpose(raw: int) -> int:
    """Transpose in semitones relative to middle C (-24..+24)."""
    return raw - 24


def display_algorithm(raw: int) -> int:
    """Algorithm number as shown on the DX7 (1-32)."""
    return raw + 1


def transpose_note(raw: int) -> Optional[str]:
    """
    Key that plays middle C for a transpose value, e.g. 24 -> "C3".

    Returns:
        Note name with octave, or None if raw is above 48
    """
    if not 0 <= raw <= 48:
        return None
    return f"{note_name(raw)}{raw // 12 + 1}"


def breakpoint_note(raw: int) -> Optional[str]:
    """
    Note name of a keyboard level scaling break point.

    Break point 0 is A-1 and 39 is C3 (middle C). Adding 12 before the
    division and subtracting an octave after it keeps the dividend
    non-negative, so the first three values land in octave -1.

    Returns:
        Note name with octave, or None if raw is above 99
    """
    if not 0 <= raw <= 99:
        return None
    octave = (raw - 3 + 12) // 12 - 1
    return f"{note_name(raw + 9)}{octave}"


def curve_name(raw: int) -> Optional[str]:
    """Keyboard scaling curve name (-LIN, -EXP, +EXP, +LIN)."""
    return CURVE_NAMES[raw] if 0 <= raw < len(CURVE_NAMES) else None


def lfo_wave_name(raw: int) -> Optional[str]:
    """LFO waveform name."""
    return LFO_WAVE_NAMES[raw] if 0 <= raw < len(LFO_WAVE_NAMES) else None


def mode_name(raw: int, compact: bool = False) -> Optional[str]:
    """Oscillator mode name."""
    names = MODE_NAMES_COMPACT if compact else MODE_NAMES
    return names[raw] if 0 <= raw < len(names) else None


def on_off(raw: int) -> Optional[str]:
    """On/Off for switch parameters."""
    return ON_OFF[raw] if 0 <= raw < len(ON_OFF) else None
