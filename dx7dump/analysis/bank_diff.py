"""
Field-level comparison of voices and banks.
"""

from dataclasses import dataclass, field, fields
from typing import Dict, List, Sequence, Union

from dx7dump.models.voice import Operator, Voice
from dx7dump.utils.lcd_charset import Charset, decode_name

FieldValue = Union[int, str]


@dataclass
class FieldDiff:
    """A single parameter that differs between two voices."""

    name: str
    value_a: FieldValue
    value_b: FieldValue


@dataclass
class VoiceDiff:
    """Differences between the voices at one bank position."""

    number: int
    name_a: str
    name_b: str
    fields: List[FieldDiff] = field(default_factory=list)

    @property
    def identical(self) -> bool:
        return not self.fields


@dataclass
class BankDiff:
    """Result of comparing two dumps voice by voice."""

    voices: List[VoiceDiff]
    count_a: int
    count_b: int

    @property
    def changed(self) -> List[VoiceDiff]:
        return [v for v in self.voices if not v.identical]

    @property
    def identical(self) -> bool:
        return self.count_a == self.count_b and not self.changed


def _flatten(prefix: str, obj: object, out: Dict[str, FieldValue]) -> None:
    for f in fields(obj):
        if f.name in ("operators", "name"):
            continue
        value = getattr(obj, f.name)
        if isinstance(value, tuple):
            for i, item in enumerate(value, start=1):
                out[f"{prefix}{f.name}[{i}]"] = item
        else:
            out[f"{prefix}{f.name}"] = value


def operator_fields(op: Operator, prefix: str = "") -> Dict[str, FieldValue]:
    """Flatten an operator to parameter name -> raw value."""
    out: Dict[str, FieldValue] = {}
    _flatten(prefix, op, out)
    return out


def voice_fields(voice: Voice, charset: Charset = Charset.UNICODE) -> Dict[str, FieldValue]:
    """
    Flatten a voice to an ordered parameter name -> value mapping.

    Operators appear in display order as "op1.output_level" etc.
    The name is included as text.
    """
    out: Dict[str, FieldValue] = {"name": decode_name(voice.name, charset)}
    _flatten("", voice, out)
    for number, op in voice.display_operators():
        out.update(operator_fields(op, prefix=f"op{number}."))
    return out


def diff_voices(a: Voice, b: Voice, charset: Charset = Charset.UNICODE) -> List[FieldDiff]:
    """List every parameter that differs between two voices."""
    fields_a = voice_fields(a, charset)
    fields_b = voice_fields(b, charset)
    return [
        FieldDiff(name, fields_a[name], fields_b[name])
        for name in fields_a
        if fields_a[name] != fields_b[name]
    ]


def diff_banks(
    voices_a: Sequence[Voice], voices_b: Sequence[Voice], charset: Charset = Charset.UNICODE
) -> BankDiff:
    """
    Compare two voice lists position by position.

    Positions beyond the shorter list are not compared; the counts are
    reported so the caller can mention them.
    """
    result = []
    for number, (a, b) in enumerate(zip(voices_a, voices_b), start=1):
        result.append(
            VoiceDiff(
                number=number,
                name_a=a.display_name(charset),
                name_b=b.display_name(charset),
                fields=diff_voices(a, b, charset),
            )
        )
    return BankDiff(voices=result, count_a=len(voices_a), count_b=len(voices_b))
