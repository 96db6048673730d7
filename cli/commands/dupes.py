"""
Dupes command - find voices that differ only in their name.
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table
from rich import box
from rich.text import Text

from dx7dump.analysis.duplicates import find_duplicates
from dx7dump.context import FileContext
from dx7dump.utils.validation import DumpError

from cli.commands.show import print_error, print_file_name
from cli.display.formatters import print_plain

console = Console()
app = typer.Typer()


@app.command()
def dupes(
    file: Path = typer.Argument(..., help="DX7 bank dump"),
    by_fields: bool = typer.Option(
        False,
        "--by-fields",
        "-f",
        help="Compare decoded parameters instead of packed bytes (ignores unused bits)",
    ),
) -> None:
    """
    Find duplicate voices in a bank.

    Two voices are duplicates when everything but their name is equal.

    Examples:

        dx7dump dupes rom1a.syx

        dx7dump dupes rom1a.syx --by-fields
    """
    try:
        ctx = FileContext.load(file)
    except (OSError, DumpError) as err:
        print_error(file, err)
        raise typer.Exit(1)

    print_file_name(ctx.path)
    bank = ctx.dump.bank
    if bank is None:
        print_plain(console, "Single voice dump, no duplicates to look for")
        return

    pairs = find_duplicates(bank, by_fields=by_fields)
    if not pairs:
        print_plain(console, "No duplicates found", style="green")
        return

    table = Table(box=box.SIMPLE, show_header=True, header_style="bold cyan")
    table.add_column("Voice", justify="right")
    table.add_column("Name")
    table.add_column("Duplicate", justify="right")
    table.add_column("Name")

    for pair in pairs:
        table.add_row(
            str(pair.first),
            Text(bank.voice(pair.first).display_name()),
            str(pair.second),
            Text(bank.voice(pair.second).display_name()),
        )

    console.print(table)
    print_plain(console, f"Found {len(pairs)} duplicate pair(s)")


if __name__ == "__main__":
    app()
