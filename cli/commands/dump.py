"""
Dump command - annotated hex dump of a DX7 voice dump.
"""

from pathlib import Path
from typing import List, Optional, Tuple

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich import box

from dx7dump.formats.packed import PACKED_VOICE_SIZE
from dx7dump.formats.reader import DX7Reader
from dx7dump.formats.sysex import HEADER_SIZE, classify, payload_of
from dx7dump.models.dump import DumpShape
from dx7dump.models.voice import VOICES_PER_BANK
from dx7dump.utils.checksum import calculate_checksum
from dx7dump.utils.lcd_charset import Charset
from dx7dump.utils.validation import DumpError

from cli.commands.show import print_error
from cli.display.hex_view import format_hex_line

console = Console()
app = typer.Typer()

# start, end, name, description, color
Region = Tuple[int, int, str, str, str]

VOICE_COLORS = ("green", "cyan")


def build_regions(shape: DumpShape, size: int) -> List[Region]:
    """
    File regions for a dump shape.

    Bank payloads are split into 32 regions of 128 bytes, one per voice.
    """
    regions: List[Region] = []
    offset = 0

    if shape.is_sysex:
        regions.append((0, HEADER_SIZE, "HEADER", "F0 43 0n format count count", "bright_blue"))
        offset = HEADER_SIZE

    if shape.is_bank:
        for i in range(VOICES_PER_BANK):
            start = offset + i * PACKED_VOICE_SIZE
            regions.append(
                (
                    start,
                    start + PACKED_VOICE_SIZE,
                    f"VOICE {i + 1:02d}",
                    "Packed voice",
                    VOICE_COLORS[i % 2],
                )
            )
    else:
        regions.append((offset, size - 2, "VOICE 01", "Unpacked voice", VOICE_COLORS[0]))

    if shape.is_sysex:
        regions.append((size - 2, size - 1, "CHECKSUM", "Checksum of voice data", "yellow"))
        regions.append((size - 1, size, "END", "F7", "bright_blue"))

    return regions


def create_legend(regions: List[Region]) -> Table:
    """Create a legend for the region tags."""
    table = Table(title="Legend", box=box.SIMPLE, show_header=False, expand=False)
    table.add_column("Region", width=12)
    table.add_column("Description", width=44)

    shown_voice = False
    for start, end, name, desc, color in regions:
        if name.startswith("VOICE"):
            if shown_voice:
                continue
            shown_voice = True
            voices = sum(1 for r in regions if r[2].startswith("VOICE"))
            name = "VOICE NN" if voices > 1 else name
            desc = f"{desc} ({end - start} bytes each)" if voices > 1 else desc
            table.add_row(Text(name, style=color), desc)
            continue
        table.add_row(
            Text(name, style=color),
            f"{desc} ({end - start} bytes, 0x{start:04X}-0x{end - 1:04X})",
        )

    return table


@app.command()
def dump(
    file: Path = typer.Argument(..., help="DX7 dump to show"),
    voice: Optional[int] = typer.Option(
        None, "--voice", "-p", min=1, max=VOICES_PER_BANK, help="Show only voice NUM"
    ),
    width: int = typer.Option(16, "--width", "-w", min=4, max=32, help="Bytes per line"),
    no_legend: bool = typer.Option(False, "--no-legend", help="Hide the legend"),
    ascii_flag: bool = typer.Option(False, "--ascii", "-a", help="ASCII text column"),
) -> None:
    """
    Annotated hex dump of a DX7 voice dump.

    Every line is tagged with its region (header, voice, checksum, end)
    and the bytes are rendered through the DX7 LCD character set.
    Bytes with bit 7 set inside voice data are red; a wrong checksum
    byte is bold red.

    Examples:

        dx7dump dump rom1a.syx

        dx7dump dump rom1a.syx --voice 3

        dx7dump dump rom1a.syx --width 32 --no-legend
    """
    try:
        data = DX7Reader.read_bytes(file)
        shape = classify(data)
    except (OSError, DumpError) as err:
        print_error(file, err)
        raise typer.Exit(1)

    charset = Charset.ASCII if ascii_flag else Charset.UNICODE
    regions = build_regions(shape, len(data))
    expected_checksum = calculate_checksum(payload_of(data, shape))

    if voice is not None:
        name = f"VOICE {voice:02d}"
        regions = [r for r in regions if r[2] == name]
        if not regions:
            console.print(f"[red]Error: Voice {voice} not in this file[/red]")
            raise typer.Exit(1)

    if not no_legend and voice is None:
        console.print(create_legend(regions))
        console.print()

    start, end = regions[0][0], regions[-1][1]
    console.print(
        Panel(
            f"[bold]File:[/bold] {escape(str(file))}\n"
            f"[bold]Size:[/bold] {len(data)} bytes ({shape.value})\n"
            f"[bold]Showing:[/bold] 0x{start:04X} - 0x{end - 1:04X} ({end - start} bytes)",
            title="[bold]DX7 Hex Dump[/bold]",
            border_style="blue",
        )
    )
    console.print()

    header = Text()
    header.append("OFFSET ", style="dim")
    header.append(f"{'REGION':12s} ", style="dim")
    header.append(" ".join(f"{i:02X}" for i in range(width)), style="dim")
    header.append("  LCD", style="dim")
    console.print(header, soft_wrap=True)

    lines_shown = 0
    for r_start, r_end, r_name, _, r_color in regions:
        checksum = expected_checksum if r_name == "CHECKSUM" else None
        for offset in range(r_start, r_end, width):
            chunk = data[offset : min(offset + width, r_end)]
            line = format_hex_line(chunk, offset, r_name, r_color, width, charset, checksum)
            console.print(line, soft_wrap=True)
            lines_shown += 1

    console.print()
    console.print(f"[dim]Total: {lines_shown} lines displayed[/dim]")


if __name__ == "__main__":
    app()
