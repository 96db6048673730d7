"""
Show command - list, detail and repair DX7 voice dumps.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from dx7dump.context import FileContext, display_path
from dx7dump.analysis.duplicates import find_duplicates
from dx7dump.models.voice import VOICES_PER_BANK
from dx7dump.utils.lcd_charset import Charset
from dx7dump.utils.validation import DumpError, RepairError

from cli.display.formatters import print_lines, print_plain
from cli.display.tables import VOICE_SEPARATOR, listing_lines, operator_table, voice_detail_lines
from cli.options import CHARSET_ENVVAR, RenderOptions, configure_logging

console = Console()
err_console = Console(stderr=True)
app = typer.Typer()

TABLE_WIDTH = 120

SINGLE_VOICE_NOT_FIXED = "Single voice dumps are not fixed, file left unchanged"


def resolve_charset(charset: Charset, ascii_flag: bool, unicode_flag: bool) -> Charset:
    """-a and -u override --charset and the environment."""
    if ascii_flag:
        return Charset.ASCII
    if unicode_flag:
        return Charset.UNICODE
    return charset


def print_file_name(path: Path, to_stderr: bool = False) -> None:
    print_plain(err_console if to_stderr else console, f'File: "{display_path(path)}"')


def print_error(path: Path, err: Exception) -> None:
    """Report a fatal problem with a file on stderr."""
    print_file_name(path, to_stderr=True)
    reason = err.reason if isinstance(err, DumpError) else (err.strerror or str(err))
    print_plain(err_console, f"Error: {reason}", style="red")


def render_dump(ctx: FileContext, options: RenderOptions) -> bool:
    """
    Print the listing or voice detail of a decoded file.

    Returns:
        False if the selected patch does not exist in the file
    """
    voices = ctx.dump.voices

    if not options.detail:
        print_lines(console, listing_lines(voices, options))
        print_plain(console)
        return True

    selected = [(n, v) for n, v in enumerate(voices, start=1) if options.selects(n)]
    if not selected:
        print_plain(
            err_console,
            f"Error: Voice {options.patch} not found ({len(voices)} voice(s) in file)",
            style="red",
        )
        return False

    for number, voice in selected:
        print_file_name(ctx.path)
        print_lines(console, voice_detail_lines(number, voice, options))
        if options.compact:
            console.print(operator_table(voice, options), width=TABLE_WIDTH)
        if options.patch is None:
            print_plain(console, VOICE_SEPARATOR)
        print_plain(console)

    return True


def report_duplicates(ctx: FileContext) -> None:
    if ctx.dump.bank is None:
        print_plain(console, "Single voice dump, no duplicates to look for")
        return

    pairs = find_duplicates(ctx.dump.bank)
    for pair in pairs:
        print_plain(console, f"Found duplicate: {pair.first} = {pair.second}")
    if not pairs:
        print_plain(console, "No duplicates found")


def repair_file(ctx: FileContext, backup: bool, assume_yes: bool) -> bool:
    """
    Ask for confirmation and rewrite the framing of a file.

    Returns:
        False if the repair was attempted and failed
    """
    if not assume_yes and not typer.confirm("Fix this file?", default=True):
        return True

    try:
        result = ctx.repair(backup=backup)
    except RepairError as err:
        print_plain(err_console, f"Error: {err.reason}", style="red")
        return False

    message = f"Fixed: {result.path} ({result.size} bytes, checksum 0x{result.checksum:02X})"
    if result.backup_path is not None:
        message += f", original saved as {result.backup_path}"
    print_plain(console, message, style="green")
    return True


def show_file(path: Path, options: RenderOptions) -> bool:
    """
    Process one file: verify, report anomalies, render, fix and find duplicates.

    Returns:
        True if the file was processed without a fatal error
    """
    try:
        ctx = FileContext.load(path)
    except (OSError, DumpError) as err:
        print_error(path, err)
        return False

    if ctx.dump.issues:
        print_file_name(ctx.path)
        for issue in ctx.dump.issues:
            print_plain(console, f"WARNING: {issue.message}", style="yellow")
        print_plain(console)
    elif options.errors_only:
        return True

    if ctx.dump.is_single_voice:
        name = ctx.dump.voice.display_name(options.charset)
        print_plain(console, f'File is a Single Voice Dump: "{name}"')

    ok = True
    if not options.errors_only:
        if not options.detail and not ctx.dump.issues:
            print_file_name(ctx.path)
        ok = render_dump(ctx, options)

    if options.fix and ctx.fix_needed:
        ok = repair_file(ctx, options.backup, options.assume_yes) and ok
    elif options.fix and ctx.dump.is_single_voice and ctx.dump.issues:
        print_plain(console, SINGLE_VOICE_NOT_FIXED, style="yellow")

    if options.find_dupes:
        report_duplicates(ctx)

    return ok


@app.command()
def show(
    file: Path = typer.Argument(..., help="DX7 sysex file (.syx) or headerless bank"),
    long: bool = typer.Option(False, "--long", "-l", help="Show parameter values"),
    compact: bool = typer.Option(
        False, "--compact", "-c", help="Compact listing (combine with -l for an operator table)"
    ),
    patch: Optional[int] = typer.Option(
        None, "--patch", "-p", min=1, max=VOICES_PER_BANK, help="Show only voice NUM (implies -l)"
    ),
    hex_: bool = typer.Option(False, "--hex", "-x", help="Show names and voice data as hex"),
    errors_only: bool = typer.Option(
        False, "--errors", "-e", help="Only report files with errors"
    ),
    ascii_flag: bool = typer.Option(False, "--ascii", "-a", help="ASCII output"),
    unicode_flag: bool = typer.Option(False, "--unicode", "-u", help="Unicode output"),
    charset: Charset = typer.Option(
        Charset.UNICODE,
        "--charset",
        envvar=CHARSET_ENVVAR,
        case_sensitive=False,
        help="Default character set for names",
    ),
    find_dupes: bool = typer.Option(False, "--find-dupes", "-d", help="Find duplicate voices"),
    fix: bool = typer.Option(False, "--fix", help="Fix corrupt files (original kept as *.ORIG)"),
    no_backup: bool = typer.Option(
        False, "--no-backup", help="Don't keep the original when fixing. Might lose data!"
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Fix without asking"),
    debug: bool = typer.Option(False, "--debug", help="Log decoding steps to stderr"),
) -> None:
    """
    List or show the voices of a DX7 voice dump.

    Without options every voice name is listed. Framing problems
    (sub-status, format, byte count, checksum) are reported as warnings
    and can be repaired with --fix.

    Examples:

        dx7dump show rom1a.syx

        dx7dump show rom1a.syx -l -p 10

        dx7dump show rom1a.syx -l -c -p 10

        dx7dump show broken.syx --fix -y
    """
    configure_logging(debug)

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

    if not show_file(file, options):
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
