"""
Validate command - check DX7 dump framing, checksum and parameter ranges.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List

import typer
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box
from rich.markup import escape

from dx7dump.formats.packed import PACKED_VOICE_SIZE
from dx7dump.formats.reader import DX7Reader, decode_dump
from dx7dump.formats.sysex import HEADER_SIZE
from dx7dump.models.dump import DecodedDump
from dx7dump.utils.validation import DumpError, FatalFramingError, out_of_range_fields

from cli.display.formatters import print_plain

console = Console()
err_console = Console(stderr=True)
app = typer.Typer()


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"
    OK = "ok"


# label, style
SEVERITY_STYLES = {
    Severity.ERROR: ("ERROR", "red"),
    Severity.WARNING: ("WARN", "yellow"),
    Severity.OK: ("OK", "green"),
}


@dataclass
class Check:
    """Outcome of one check on a dump."""

    severity: Severity
    area: str
    offset: int
    message: str
    expected: str = ""
    actual: str = ""


@dataclass
class ValidationResult:
    """
    All checks run on a dump.

    Attributes:
        filepath: File that was checked
        checks: Every check in the order it was run
        strict: Count warnings as failures
    """

    filepath: str
    checks: List[Check] = field(default_factory=list)
    strict: bool = False

    def _with(self, severity: Severity) -> List[Check]:
        return [c for c in self.checks if c.severity is severity]

    @property
    def errors(self) -> List[Check]:
        return self._with(Severity.ERROR)

    @property
    def warnings(self) -> List[Check]:
        return self._with(Severity.WARNING)

    @property
    def passed(self) -> List[Check]:
        return self._with(Severity.OK)

    @property
    def valid(self) -> bool:
        return not self.errors and not (self.strict and self.warnings)


def voice_offset(dump: DecodedDump, number: int) -> int:
    """File offset of voice `number` (1-based)."""
    start = HEADER_SIZE if dump.shape.is_sysex else 0
    if dump.is_single_voice:
        return start
    return start + (number - 1) * PACKED_VOICE_SIZE


class DX7Validator:
    """
    Validate a DX7 dump.

    Fatal framing problems and unknown sizes are errors. Recoverable
    framing anomalies and out-of-range parameter values are warnings.
    """

    SHAPE_LABELS = {
        "bank_sysex": "32 voice bank dump",
        "bank_raw": "headerless 32 voice bank",
        "single_sysex": "single voice dump",
    }

    def __init__(self, data: bytes, filepath: str, strict: bool = False):
        self.data = data
        self.result = ValidationResult(filepath=filepath, strict=strict)

    def validate(self) -> ValidationResult:
        """Run every check that applies to the file."""
        try:
            dump = decode_dump(self.data)
        except FatalFramingError as err:
            self._record(
                Severity.ERROR,
                "Framing",
                err.offset,
                err.reason,
                f"0x{err.expected:02X}",
                f"0x{err.actual:02X}",
            )
        except DumpError as err:
            self._record(
                Severity.ERROR,
                "File Size",
                0,
                err.reason,
                "163, 4096 or 4104 bytes",
                f"{len(self.data)} bytes",
            )
        else:
            label = self.SHAPE_LABELS[dump.shape.value]
            self._record(Severity.OK, "File Size", 0, f"{label} ({len(self.data)} bytes)")
            self._check_framing(dump)
            self._check_ranges(dump)

        return self.result

    def _record(
        self,
        severity: Severity,
        area: str,
        offset: int,
        message: str,
        expected: str = "",
        actual: str = "",
    ) -> None:
        self.result.checks.append(Check(severity, area, offset, message, expected, actual))

    def _check_framing(self, dump: DecodedDump) -> None:
        for issue in dump.issues:
            self._record(
                Severity.WARNING,
                issue.anomaly.value,
                issue.offset,
                issue.message,
                issue.expected,
                issue.actual,
            )

        framing = dump.framing
        if framing is None:
            return
        if framing.checksum_valid:
            self._record(
                Severity.OK,
                "Checksum",
                len(self.data) - 2,
                f"Checksum 0x{framing.stored_checksum:02X} is valid",
            )
        self._record(Severity.OK, "Channel", 2, f"MIDI channel {framing.channel}")

    def _check_ranges(self, dump: DecodedDump) -> None:
        clean = True
        for number, voice in enumerate(dump.voices, start=1):
            bad = out_of_range_fields(voice)
            if not bad:
                continue
            clean = False
            self._record(
                Severity.WARNING,
                f"Voice {number}",
                voice_offset(dump, number),
                f"{len(bad)} value(s) out of range: {', '.join(bad)}",
            )

        if clean:
            self._record(Severity.OK, "Parameters", 0, f"All {len(dump.voices)} voice(s) in range")


def display_validation(result: ValidationResult) -> None:
    """Print the verdict panel, then the failed checks or the passed ones."""
    verdict, border = ("VALID", "green") if result.valid else ("INVALID", "red")

    console.print(
        Panel(
            f"[bold]File:[/bold] {escape(result.filepath)}\n"
            f"[bold]Status:[/bold] [bold {border}]{verdict}[/bold {border}]\n\n"
            f"Errors: [red]{len(result.errors)}[/red]  "
            f"Warnings: [yellow]{len(result.warnings)}[/yellow]  "
            f"Passed: [green]{len(result.passed)}[/green]",
            title="[bold]DX7 Dump Check[/bold]",
            border_style=border,
        )
    )

    failed = result.errors + result.warnings
    if not failed:
        passed = Table(box=box.SIMPLE, show_header=False)
        passed.add_column("Check", width=60)
        for check in result.passed:
            passed.add_row(f"[green]OK[/green] {escape(check.area)}: {escape(check.message)}")
        console.print(passed)
        return

    table = Table(box=box.ROUNDED, show_header=True, header_style="bold cyan")
    table.add_column("", no_wrap=True)
    table.add_column("Area", style="cyan", no_wrap=True)
    table.add_column("Offset", style="dim", no_wrap=True)
    table.add_column("Message")
    table.add_column("Expected")
    table.add_column("Actual")

    for check in failed:
        label, style = SEVERITY_STYLES[check.severity]
        table.add_row(
            f"[{style}]{label}[/{style}]",
            escape(check.area),
            f"0x{check.offset:04X}",
            escape(check.message),
            escape(check.expected),
            escape(check.actual),
        )

    console.print(table)


@app.command()
def validate(
    file: Path = typer.Argument(..., help="DX7 dump to validate"),
    strict: bool = typer.Option(False, "--strict", "-s", help="Fail on warnings too"),
) -> None:
    """
    Validate a DX7 voice dump.

    Checks for:

    - Known file size (163, 4096 or 4104 bytes)
    - Sysex start, Yamaha ID and end byte
    - Sub-status, format and declared byte count
    - Checksum and 7-bit voice data
    - Parameter values within their ranges

    Examples:

        dx7dump validate rom1a.syx

        dx7dump validate rom1a.syx --strict
    """
    try:
        data = DX7Reader.read_bytes(file)
    except DumpError as err:
        result = ValidationResult(filepath=str(file), strict=strict)
        result.checks.append(Check(Severity.ERROR, "File Size", 0, err.reason))
    except OSError as err:
        print_plain(err_console, f"Error: {err.strerror or err}: {file}", style="red")
        raise typer.Exit(1)
    else:
        result = DX7Validator(data, str(file), strict=strict).validate()

    display_validation(result)

    if not result.valid:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
