# topmark:header:start
#
#   project      : LicenseMark
#   file         : version.py
#   file_relpath : src/licensemark/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""LicenseMark ``version`` command.

Prints the LicenseMark version as installed in the active Python environment.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from licensemark.cli.cmd_common import get_console, get_effective_verbosity
from licensemark.constants import LICENSEMARK_VERSION

if TYPE_CHECKING:
    from licensemark.cli.console import ConsoleLike


@click.command(
    name="version",
    help="Show the current version of LicenseMark.",
)
def version_command() -> None:
    """Show the current version of LicenseMark."""
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = get_console(ctx)

    if get_effective_verbosity(ctx) > 0:
        console.print(console.styled("LicenseMark version:", bold=True, underline=True))
        console.print(f"    {console.styled(LICENSEMARK_VERSION, bold=True)}")
    else:
        console.print(console.styled(LICENSEMARK_VERSION, bold=True))
