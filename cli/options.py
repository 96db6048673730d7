"""
Rendering options shared by the CLI commands.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler

from dx7dump.utils.lcd_charset import Charset

CHARSET_ENVVAR = "DX7DUMP_CHARSET"


@dataclass(frozen=True)
class RenderOptions:
    """
    What to show and how, collected from the command line.

    Attributes:
        long: Per-voice parameter detail instead of a name listing
        compact: Name grid, or the operator table in detail view
        patch: Only this voice (1-32) in detail view
        hex: Add name bytes, and in detail view the voice data, in hex
        errors_only: Only report files with diagnostics
        charset: LCD translation table for names and table borders
        find_dupes: Report duplicate voices after the listing
        fix: Offer to repair files that need it
        backup: Keep the original as <name>.ORIG when repairing
        assume_yes: Repair without asking
    """

    long: bool = False
    compact: bool = False
    patch: Optional[int] = None
    hex: bool = False
    errors_only: bool = False
    charset: Charset = Charset.UNICODE
    find_dupes: bool = False
    fix: bool = False
    backup: bool = True
    assume_yes: bool = False

    @property
    def detail(self) -> bool:
        return self.long or self.patch is not None

    @property
    def ascii(self) -> bool:
        return self.charset is Charset.ASCII

    @property
    def table_box(self) -> box.Box:
        """Table border style matching the output charset."""
        return box.ASCII if self.ascii else box.ROUNDED

    def selects(self, number: int) -> bool:
        """Whether voice `number` (1-based) is shown in detail view."""
        return self.patch is None or self.patch == number


def configure_logging(debug: bool) -> None:
    """Send library debug records to stderr through rich when --debug is given."""
    if not debug:
        return

    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
