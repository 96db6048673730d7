"""
Voice data model for DX7 patches.
"""

from dataclasses import dataclass, field, replace
from typing import Iterator, Tuple

from dx7dump.utils.lcd_charset import Charset, decode_name

OPERATOR_COUNT = 6
VOICES_PER_BANK = 32

CURVE_NAMES = ("-LIN", "-EXP", "+EXP", "+LIN")
LFO_WAVE_NAMES = ("Triangle", "Saw Down", "Saw Up", "Square", "Sine", "Sample & Hold")


@dataclass(frozen=True)
class Operator:
    """
    One of the six FM operators of a voice.

    All values are raw parameter values as stored in the dump. Values
    outside the documented ranges are kept unchanged; see
    dx7dump.utils.validation for the limits.

    Attributes:
        eg_rates: Envelope rates R1-R4 (0-99)
        eg_levels: Envelope levels L1-L4 (0-99)
        level_scaling_break_point: Keyboard level scaling break point (0-99, 39 = C3)
        scale_left_depth: Left scaling depth (0-99)
        scale_right_depth: Right scaling depth (0-99)
        scale_left_curve: Left curve (0-3: -LIN, -EXP, +EXP, +LIN)
        scale_right_curve: Right curve (0-3)
        rate_scale: Keyboard rate scaling (0-7)
        amp_mod_sensitivity: Amplitude modulation sensitivity (0-3)
        key_velocity_sensitivity: Key velocity sensitivity (0-7)
        output_level: Output level (0-99)
        oscillator_mode: 0 = frequency ratio, 1 = fixed frequency
        frequency_coarse: Coarse frequency (0-31)
        frequency_fine: Fine frequency (0-99)
        detune: Detune (0-14, 7 = no detune)
    """

    eg_rates: Tuple[int, int, int, int] = (99, 99, 99, 99)
    eg_levels: Tuple[int, int, int, int] = (99, 99, 99, 0)
    level_scaling_break_point: int = 39
    scale_left_depth: int = 0
    scale_right_depth: int = 0
    scale_left_curve: int = 0
    scale_right_curve: int = 0
    rate_scale: int = 0
    amp_mod_sensitivity: int = 0
    key_velocity_sensitivity: int = 0
    output_level: int = 0
    oscillator_mode: int = 0
    frequency_coarse: int = 1
    frequency_fine: int = 0
    detune: int = 7

    @property
    def is_fixed(self) -> bool:
        """Check if the operator runs at a fixed frequency."""
        return self.oscillator_mode == 1


@dataclass(frozen=True)
class Voice:
    """
    A single DX7 voice (patch).

    Operators are kept in storage order: operators[0] is operator 6 and
    operators[5] is operator 1. Use display_operators() or operator()
    to work with the numbering shown on the synthesizer.

    Attributes:
        operators: Six operators, operator 6 first
        pitch_eg_rates: Pitch envelope rates R1-R4 (0-99)
        pitch_eg_levels: Pitch envelope levels L1-L4 (0-99)
        algorithm: Algorithm (0-31, shown as 1-32)
        feedback: Feedback level (0-7)
        osc_key_sync: Oscillator key sync (0-1)
        lfo_speed: LFO speed (0-99)
        lfo_delay: LFO delay (0-99)
        lfo_pitch_mod_depth: LFO pitch modulation depth (0-99)
        lfo_amp_mod_depth: LFO amplitude modulation depth (0-99)
        lfo_sync: LFO key sync (0-1)
        lfo_wave: LFO waveform (0-5)
        lfo_pitch_mod_sensitivity: Pitch modulation sensitivity (0-7)
        transpose: Transpose (0-48, 24 = no transpose)
        name: Raw 10-byte name in the DX7 LCD character set
    """

    operators: Tuple[Operator, ...] = field(
        default_factory=lambda: tuple(Operator() for _ in range(OPERATOR_COUNT))
    )
    pitch_eg_rates: Tuple[int, int, int, int] = (99, 99, 99, 99)
    pitch_eg_levels: Tuple[int, int, int, int] = (50, 50, 50, 50)
    algorithm: int = 0
    feedback: int = 0
    osc_key_sync: int = 1
    lfo_speed: int = 35
    lfo_delay: int = 0
    lfo_pitch_mod_depth: int = 0
    lfo_amp_mod_depth: int = 0
    lfo_sync: int = 1
    lfo_wave: int = 0
    lfo_pitch_mod_sensitivity: int = 3
    transpose: int = 24
    name: bytes = b"INIT VOICE"

    def __post_init__(self):
        if len(self.operators) != OPERATOR_COUNT:
            raise ValueError(f"A voice has {OPERATOR_COUNT} operators, got {len(self.operators)}")

    def operator(self, number: int) -> Operator:
        """
        Get an operator by its display number.

        Args:
            number: Operator number as shown on the DX7 (1-6)

        Returns:
            The operator
        """
        if not 1 <= number <= OPERATOR_COUNT:
            raise ValueError(f"Operator number must be 1-{OPERATOR_COUNT}, got {number}")
        return self.operators[OPERATOR_COUNT - number]

    def display_operators(self) -> Iterator[Tuple[int, Operator]]:
        """Yield (number, operator) pairs from operator 1 to operator 6."""
        for number in range(1, OPERATOR_COUNT + 1):
            yield number, self.operator(number)

    def display_name(self, charset: Charset = Charset.UNICODE) -> str:
        """Voice name translated from the LCD character set."""
        return decode_name(self.name, charset)

    def without_name(self) -> "Voice":
        """Copy of this voice with the name cleared, for name-blind comparison."""
        return replace(self, name=b"")


@dataclass(frozen=True)
class Bank:
    """
    A 32-voice bank.

    Attributes:
        voices: Exactly 32 voices in bank order
        payload: The 4096 packed bytes the bank was decoded from
    """

    voices: Tuple[Voice, ...]
    payload: bytes = field(default=b"", repr=False, compare=False)

    def __post_init__(self):
        if len(self.voices) != VOICES_PER_BANK:
            raise ValueError(f"A bank has {VOICES_PER_BANK} voices, got {len(self.voices)}")

    def __len__(self) -> int:
        return len(self.voices)

    def __iter__(self) -> Iterator[Voice]:
        return iter(self.voices)

    def __getitem__(self, index: int) -> Voice:
        return self.voices[index]

    def voice(self, number: int) -> Voice:
        """Get a voice by its 1-based bank position."""
        if not 1 <= number <= VOICES_PER_BANK:
            raise ValueError(f"Voice number must be 1-{VOICES_PER_BANK}, got {number}")
        return self.voices[number - 1]
