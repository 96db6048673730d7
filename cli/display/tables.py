"""
Voice listings, parameter detail and operator tables.

Listings and the detail view are plain text lines (they are meant to be
grepped and diffed); the compact operator table and the diagnostics
are rich tables.
"""

from typing import List, Sequence

from rich.table import Table

from dx7dump.models.dump import FramingIssue
from dx7dump.models.voice import Operator, Voice
from dx7dump.analysis.derived import (
    breakpoint_note,
    curve_name,
    display_algorithm,
    display_detune,
    display_transpose,
    format_frequency,
    lfo_wave_name,
    mode_name,
    on_off,
    transpose_note,
)
from dx7dump.formats.unpacked import encode_unpacked_voice
from dx7dump.utils.checksum import calculate_checksum
from dx7dump.utils.validation import OPERATOR_LIMITS, VOICE_LIMITS, in_range, limit_for

from cli.display.formatters import checked, hex_bytes, marker, or_marker, signed
from cli.options import RenderOptions

VOICE_SEPARATOR = "-" * 49


# =============================================================================
# Name listings
# =============================================================================


def listing_entry(number: int, voice: Voice, options: RenderOptions) -> str:
    """One listing cell: "NN | NAME |", followed by the name bytes with --hex."""
    entry = f"{number:2d} | {voice.display_name(options.charset)} |"
    if options.hex:
        entry += " " + hex_bytes(voice.name)
    return entry


def listing_lines(voices: Sequence[Voice], options: RenderOptions) -> List[str]:
    """
    Voice name listing.

    One voice per line, or with --compact a grid filled column by
    column: 8 rows x 4 columns, or 16 rows x 2 columns with --hex.
    """
    entries = [listing_entry(n, v, options) for n, v in enumerate(voices, start=1)]

    if not options.compact or len(entries) <= 1:
        return entries

    rows = 16 if options.hex else 8
    lines = []
    for row in range(rows):
        cells = entries[row::rows]
        lines.append("    ".join(cells))
    return lines


# =============================================================================
# Voice detail
# =============================================================================


def _voice_value(voice: Voice, name: str) -> str:
    return checked(getattr(voice, name), VOICE_LIMITS.get(name))


def _eg_value(values: tuple, index: int, limit_name: str, compact: bool = False) -> str:
    maximum = limit_for(limit_name)
    return checked(values[index], maximum, compact)


def voice_header_lines(number: int, voice: Voice, options: RenderOptions) -> List[str]:
    """Voice number and name, plus the name bytes and voice data in hex with --hex."""
    lines = [f"Voice-#: {number}"]
    name_line = f'Name: "{voice.display_name(options.charset)}"'
    if options.hex:
        name_line += " | " + hex_bytes(voice.name)
        lines.append(name_line)
        lines.append("")
        lines.append(voice_data_line(voice))
    else:
        lines.append(name_line)
    return lines


def voice_data_line(voice: Voice) -> str:
    """The 155 unpacked voice bytes followed by their single voice checksum."""
    data = encode_unpacked_voice(voice)
    return f"Voice Data: {hex_bytes(data)} {calculate_checksum(data):02X} [last byte = checksum]"


def transpose_text(raw: int) -> str:
    note = transpose_note(raw)
    if note is None:
        return marker()
    return f"{signed(display_transpose(raw))} ({note})"


def voice_lines(voice: Voice, options: RenderOptions) -> List[str]:
    """Voice-level parameters: algorithm, feedback, LFO, pitch EG, transpose."""
    algorithm = (
        str(display_algorithm(voice.algorithm))
        if in_range(voice.algorithm, VOICE_LIMITS["algorithm"])
        else marker()
    )
    lines = [
        f"Algorithm: {algorithm}",
        f"Feedback: {_voice_value(voice, 'feedback')}",
        "LFO",
        f"  Wave: {or_marker(lfo_wave_name(voice.lfo_wave))}",
        f"  Speed: {_voice_value(voice, 'lfo_speed')}",
        f"  Delay: {_voice_value(voice, 'lfo_delay')}",
        f"  Pitch Mod Depth: {_voice_value(voice, 'lfo_pitch_mod_depth')}",
        f"  Amplitude Mod Depth: {_voice_value(voice, 'lfo_amp_mod_depth')}",
        f"  Key Sync: {or_marker(on_off(voice.lfo_sync))}",
        f"  Pitch Mod Sensitivity: {_voice_value(voice, 'lfo_pitch_mod_sensitivity')}",
        f"Oscillator Key Sync: {or_marker(on_off(voice.osc_key_sync))}",
        "Pitch Envelope Generator",
    ]

    rates = [_eg_value(voice.pitch_eg_rates, i, "pitch_eg_rates") for i in range(4)]
    levels = [_eg_value(voice.pitch_eg_levels, i, "pitch_eg_levels") for i in range(4)]
    if options.compact:
        for i in range(4):
            lines.append(f"  Rate {i + 1}: {rates[i]:<3}   Level {i + 1}: {levels[i]}")
    else:
        lines.extend(f"  Rate {i + 1}: {rates[i]}" for i in range(4))
        lines.extend(f"  Level {i + 1}: {levels[i]}" for i in range(4))

    lines.append(f"Transpose: {transpose_text(voice.transpose)}")
    return lines


def _op_value(op: Operator, name: str, compact: bool = False) -> str:
    return checked(getattr(op, name), OPERATOR_LIMITS.get(name), compact)


def _detune_text(op: Operator, compact: bool = False) -> str:
    if not in_range(op.detune, OPERATOR_LIMITS["detune"]):
        return marker(compact)
    return signed(display_detune(op.detune))


def _frequency_text(op: Operator, compact: bool = False) -> str:
    if not (
        in_range(op.frequency_coarse, OPERATOR_LIMITS["frequency_coarse"])
        and in_range(op.frequency_fine, OPERATOR_LIMITS["frequency_fine"])
    ):
        return marker(compact)
    return or_marker(format_frequency(op), compact)


def operator_lines(number: int, op: Operator) -> List[str]:
    """Full parameter listing of one operator."""
    lines = [
        f"Operator: {number}",
        f"  Amp Mod Sensitivity: {_op_value(op, 'amp_mod_sensitivity')}",
        f"  Oscillator Mode: {or_marker(mode_name(op.oscillator_mode))}",
        f"  Frequency: {_frequency_text(op)}",
        f"  Detune: {_detune_text(op)}",
        "  Envelope Generator",
    ]
    lines.extend(f"    Rate {i + 1}: {_eg_value(op.eg_rates, i, 'eg_rates')}" for i in range(4))
    lines.extend(f"    Level {i + 1}: {_eg_value(op.eg_levels, i, 'eg_levels')}" for i in range(4))
    lines.extend(
        [
            "  Keyboard Level Scaling",
            f"    Breakpoint: {or_marker(breakpoint_note(op.level_scaling_break_point))}",
            f"    Left Curve: {or_marker(curve_name(op.scale_left_curve))}",
            f"    Right Curve: {or_marker(curve_name(op.scale_right_curve))}",
            f"    Left Depth: {_op_value(op, 'scale_left_depth')}",
            f"    Right Depth: {_op_value(op, 'scale_right_depth')}",
            f"  Keyboard Rate Scaling: {_op_value(op, 'rate_scale')}",
            f"  Output Level: {_op_value(op, 'output_level')}",
            f"  Key Velocity Sensitivity: {_op_value(op, 'key_velocity_sensitivity')}",
        ]
    )
    return lines


def voice_detail_lines(number: int, voice: Voice, options: RenderOptions) -> List[str]:
    """
    Complete detail text of a voice.

    Operators are listed 1 to 6 unless compact is set, in which case the
    caller renders operator_table() after these lines.
    """
    lines = voice_header_lines(number, voice, options)
    lines.append("")
    lines.extend(voice_lines(voice, options))
    if not options.compact:
        for op_number, op in voice.display_operators():
            lines.append("")
            lines.extend(operator_lines(op_number, op))
    return lines


# =============================================================================
# Compact operator table
# =============================================================================


def _eg_pair(op: Operator, index: int) -> str:
    rate = _eg_value(op.eg_rates, index, "eg_rates", compact=True)
    level = _eg_value(op.eg_levels, index, "eg_levels", compact=True)
    return f"{rate:>3} : {level:<3}"


def operator_table(voice: Voice, options: RenderOptions) -> Table:
    """
    Six-column table with every operator parameter.

    Out-of-range values show as "~~~".
    """
    table = Table(box=options.table_box, show_header=True, header_style="bold cyan")
    table.add_column("", style="cyan", no_wrap=True)
    ops = [op for _, op in voice.display_operators()]
    for number in range(1, len(ops) + 1):
        table.add_column(f"Operator {number}", justify="right", no_wrap=True)

    def row(label: str, cells: List[str], end_section: bool = False) -> None:
        table.add_row(label, *cells, end_section=end_section)

    row("Amplitude Mod Sens", [_op_value(op, "amp_mod_sensitivity", True) for op in ops])
    row(
        "Oscillator Mode",
        [or_marker(mode_name(op.oscillator_mode, compact=True), True) for op in ops],
    )
    row("Frequency", [_frequency_text(op, True) for op in ops])
    row("Detune", [_detune_text(op, True) for op in ops], end_section=True)

    row("Envelope Generator", [""] * len(ops))
    for i in range(4):
        row(
            f"  Rate {i + 1} : Level {i + 1}",
            [_eg_pair(op, i) for op in ops],
            end_section=i == 3,
        )

    row("Keyboard Level Scaling", [""] * len(ops))
    row(
        "  Breakpoint",
        [or_marker(breakpoint_note(op.level_scaling_break_point), True) for op in ops],
    )
    row("  Left Curve", [or_marker(curve_name(op.scale_left_curve), True) for op in ops])
    row("  Right Curve", [or_marker(curve_name(op.scale_right_curve), True) for op in ops])
    row("  Left Depth", [_op_value(op, "scale_left_depth", True) for op in ops])
    row(
        "  Right Depth",
        [_op_value(op, "scale_right_depth", True) for op in ops],
        end_section=True,
    )

    row("Keyboard Rate Scaling", [_op_value(op, "rate_scale", True) for op in ops])
    row("Output Level", [_op_value(op, "output_level", True) for op in ops])
    row("Key Velocity Sens", [_op_value(op, "key_velocity_sensitivity", True) for op in ops])

    return table


# =============================================================================
# Diagnostics
# =============================================================================


def issues_table(issues: Sequence[FramingIssue], options: RenderOptions) -> Table:
    """Table of recoverable anomalies with offsets and expected/actual values."""
    table = Table(title="Issues", box=options.table_box, show_header=True, header_style="bold cyan")
    table.add_column("Area", style="cyan", no_wrap=True)
    table.add_column("Offset", style="dim", no_wrap=True)
    table.add_column("Expected")
    table.add_column("Actual")
    table.add_column("Fixable", justify="center")

    for issue in issues:
        table.add_row(
            issue.anomaly.value,
            f"0x{issue.offset:04X}",
            issue.expected,
            issue.actual,
            "yes" if issue.anomaly.fixable else "no",
        )

    return table
