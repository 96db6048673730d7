"""
Scan command - show every DX7 dump below a directory.
"""

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from dx7dump.models.voice import VOICES_PER_BANK
from dx7dump.utils.lcd_charset import Charset

from cli.commands.show import resolve_charset, show_file
from cli.display.formatters import print_plain
from cli.options import CHARSET_ENVVAR, RenderOptions, configure_logging

console = Console()
app = typer.Typer()


def find_sysex_files(directory: Path) -> List[Path]:
    """All *.syx files below directory (any case), sorted by path."""
    return sorted(
        p for p in directory.rglob("*") if p.is_file() and p.suffix.lower() == ".syx"
    )


@app.command()
def scan(
    directory: Path = typer.Argument(Path("."), help="Directory to search"),
    long: bool = typer.Option(False, "--long", "-l", help="Show parameter values"),
    compact: bool = typer.Option(False, "--compact", "-c", help="Compact listing"),
    patch: Optional[int] = typer.Option(
        None, "--patch", "-p", min=1, max=VOICES_PER_BANK, help="Show only voice NUM"
    ),
    hex_: bool = typer.Option(False, "--hex", "-x", help="Show names as hex"),
    errors_only: bool = typer.Option(
        False, "--errors", "-e", help="Only report files with errors"
    ),
    ascii_flag: bool = typer.Option(False, "--ascii", "-a", help="ASCII output"),
    unicode_flag: bool = typer.Option(False, "--unicode", "-u", help="Unicode output"),
    charset: Charset = typer.Option(
        Charset.UNICODE, "--charset", envvar=CHARSET_ENVVAR, case_sensitive=False
    ),
    find_dupes: bool = typer.Option(False, "--find-dupes", "-d", help="Find duplicate voices"),
    fix: bool = typer.Option(False, "--fix", help="Fix corrupt files (originals kept as *.ORIG)"),
    no_backup: bool = typer.Option(False, "--no-backup", help="Don't keep originals when fixing"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Fix without asking"),
    debug: bool = typer.Option(False, "--debug", help="Log decoding steps to stderr"),
) -> None:
    """
    Run show on every .syx file below a directory.

    Files are processed in path order, each on its own. The command
    fails if any file could not be processed.

    Examples:

        dx7dump scan ~/dx7/banks -e

        dx7dump scan ~/dx7/banks -e --fix
    """
    configure_logging(debug)

    if not directory.is_dir():
        print_plain(console, f"Error: Not a directory: {directory}", style="red")
        raise typer.Exit(1)

    options = RenderOptions(
        long=long,
        compact=compact,
        patch=patch,
        hex=hex_,
        errors_only=errors_only,
        charset=resolve_charset(charset, ascii_flag, unicode_flag),
        find_dupes=find_dupes,
        fix=fix,
        backup=not no_backup,
        assume_yes=yes,
    )

    files = find_sysex_files(directory)
    failed = []
    for path in files:
        if not show_file(path, options):
            failed.append(path)

    if not errors_only or failed:
        print_plain(console, f"{len(files)} file(s) scanned, {len(failed)} failed")

    if failed:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
