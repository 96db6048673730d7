"""
Diff command - compare two DX7 dumps voice by voice.
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.panel import Panel
from rich.text import Text
from rich import box

from dx7dump.analysis.bank_diff import BankDiff, diff_banks
from dx7dump.context import FileContext
from dx7dump.utils.validation import DumpError

from cli.commands.show import print_error

console = Console()
app = typer.Typer()


def display_diff(result: BankDiff, file_a: str, file_b: str, verbose: bool = False) -> None:
    """Display diff result with Rich formatting."""
    files = f"File A: {escape(file_a)}\nFile B: {escape(file_b)}"

    if result.identical:
        console.print(
            Panel(
                f"[green]Voices are identical[/green]\n\n{files}",
                title="[bold green]No Differences[/bold green]",
                border_style="green",
            )
        )
        return

    changed = result.changed
    summary = f"{len(changed)} of {len(result.voices)} voice(s) differ"
    if result.count_a != result.count_b:
        summary += f"; voice count {result.count_a} vs {result.count_b}"

    console.print(
        Panel(
            f"{files}\n\n[yellow]{summary}[/yellow]",
            title="[bold red]Differences Found[/bold red]",
            border_style="red",
        )
    )

    if not changed:
        return

    table = Table(
        title="Voice Differences",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Voice", justify="right", width=5)
    table.add_column("Name A", width=12)
    table.add_column("Name B", width=12)
    table.add_column("Parameter", style="cyan", width=30)
    table.add_column("A", justify="right", width=12)
    table.add_column("B", justify="right", width=12)

    for voice in changed:
        fields = voice.fields if verbose else voice.fields[:8]
        for i, field in enumerate(fields):
            first = i == 0
            table.add_row(
                str(voice.number) if first else "",
                Text(voice.name_a) if first else "",
                Text(voice.name_b) if first else "",
                field.name,
                Text(str(field.value_a)),
                Text(str(field.value_b)),
                end_section=i == len(fields) - 1,
            )
        hidden = len(voice.fields) - len(fields)
        if hidden:
            table.add_row("", "", "", f"[dim]... {hidden} more[/dim]", "", "", end_section=True)

    console.print(table, width=110)


@app.command()
def diff(
    file_a: Path = typer.Argument(..., help="First DX7 dump to compare"),
    file_b: Path = typer.Argument(..., help="Second DX7 dump to compare"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="List every differing parameter"),
) -> None:
    """
    Compare two DX7 dumps and show differing voice parameters.

    Voices are compared position by position on their decoded values,
    so noise in unused packed bits is ignored. Banks and single voice
    dumps can be mixed; only common positions are compared.

    Examples:

        dx7dump diff rom1a.syx rom1a-edited.syx

        dx7dump diff rom1a.syx rom1b.syx --verbose
    """
    contexts = []
    for f in [file_a, file_b]:
        try:
            contexts.append(FileContext.load(f))
        except (OSError, DumpError) as err:
            print_error(f, err)
            raise typer.Exit(1)

    result = diff_banks(contexts[0].dump.voices, contexts[1].dump.voices)

    display_diff(result, str(file_a), str(file_b), verbose=verbose)

    if not result.identical:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
