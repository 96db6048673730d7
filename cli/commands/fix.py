"""
Fix command - rewrite the framing and checksum of a damaged dump.
"""

from pathlib import Path

import typer
from rich.console import Console

from dx7dump.context import FileContext
from dx7dump.utils.validation import DumpError

from cli.commands.show import SINGLE_VOICE_NOT_FIXED, print_error, print_file_name, repair_file
from cli.display.formatters import print_plain
from cli.display.tables import issues_table
from cli.options import RenderOptions

console = Console()
app = typer.Typer()


@app.command()
def fix(
    file: Path = typer.Argument(..., help="DX7 dump to repair"),
    no_backup: bool = typer.Option(
        False, "--no-backup", help="Don't keep the original as *.ORIG. Might lose data!"
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Fix without asking"),
) -> None:
    """
    Repair the framing of a DX7 bank dump.

    Rewrites header, checksum and end byte; the voice data is kept
    byte for byte. Headerless banks are wrapped into a 4104 byte dump;
    single voice dumps are reported but left unchanged.
    The original is renamed to <file>.ORIG unless --no-backup is given.

    Examples:

        dx7dump fix broken.syx

        dx7dump fix broken.syx -y --no-backup
    """
    try:
        ctx = FileContext.load(file)
    except (OSError, DumpError) as err:
        print_error(file, err)
        raise typer.Exit(1)

    print_file_name(ctx.path)
    if ctx.dump.is_single_voice and ctx.issues:
        console.print(issues_table(ctx.issues, RenderOptions()))
        print_plain(console, SINGLE_VOICE_NOT_FIXED, style="yellow")
        return

    if not ctx.fix_needed:
        print_plain(console, "Nothing to fix", style="green")
        return

    console.print(issues_table(ctx.issues, RenderOptions()))

    if not repair_file(ctx, backup=not no_backup, assume_yes=yes):
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
