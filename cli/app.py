"""
dx7dump - Decode, verify and repair Yamaha DX7 voice dumps.

A CLI tool for listing and checking DX7 sysex voice banks.
"""

import typer
from rich.console import Console

from dx7dump import __version__
from cli.commands.show import show
from cli.commands.validate import validate
from cli.commands.fix import fix
from cli.commands.dupes import dupes
from cli.commands.dump import dump
from cli.commands.diff import diff
from cli.commands.scan import scan

console = Console()

# Main app
app = typer.Typer(
    name="dx7dump",
    help="Decode, verify and repair Yamaha DX7 voice dumps.",
    add_completion=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command(name="show")(show)
app.command(name="validate")(validate)
app.command(name="fix")(fix)
app.command(name="dupes")(dupes)
app.command(name="dump")(dump)
app.command(name="diff")(diff)
app.command(name="scan")(scan)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]dx7dump[/bold] version {__version__}")
    console.print("[dim]Yamaha DX7 Sysex Dump[/dim]")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version_flag: bool = typer.Option(False, "--version", "-v", help="Show version"),
) -> None:
    """
    dx7dump - Decode, verify and repair Yamaha DX7 voice dumps.

    Reads 32 voice bank dumps ([cyan].syx[/cyan], 4104 bytes), headerless
    banks (4096 bytes) and single voice dumps (163 bytes).

    [bold]Quick Start:[/bold]

        dx7dump show rom1a.syx          # Voice names
        dx7dump show rom1a.syx -l -p 1  # All parameters of voice 1
        dx7dump show rom1a.syx -l -c    # Operator tables

    [bold]Checking and Repair:[/bold]

        dx7dump validate rom1a.syx      # Framing, checksum, ranges
        dx7dump fix broken.syx          # Rewrite framing and checksum
        dx7dump scan ~/banks -e --fix   # Check a whole collection

    [bold]Analysis Commands:[/bold]

        dx7dump dupes rom1a.syx         # Duplicate voices
        dx7dump diff A.syx B.syx        # Compare voice parameters
        dx7dump dump rom1a.syx          # Annotated hex dump

    Use --help with any command for more details.
    """
    if version_flag:
        version()
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
