# spanmark:header:start
#
#   project      : SpanMark
#   file         : version.py
#   file_relpath : src/spanmark/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# spanmark:header:end

"""SpanMark `version` command.

Prints the SpanMark version installed in the active Python environment.
"""

from __future__ import annotations

import json

import click

from spanmark.cli.cmd_common import get_console, get_effective_verbosity
from spanmark.constants import SPANMARK_VERSION


@click.command(
    name="version",
    help="Show the current version of SpanMark.",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Print the version as a JSON object.",
)
def version_command(*, as_json: bool = False) -> None:
    """Show the current version of SpanMark.

    Args:
        as_json (bool): Emit ``{"version": ...}`` instead of plain text.
    """
    ctx = click.get_current_context()
    console = get_console(ctx)

    if as_json:
        console.print(json.dumps({"version": SPANMARK_VERSION}))
        return

    if get_effective_verbosity(ctx) > 0:
        console.print(console.styled("SpanMark version:", bold=True, underline=True))
        console.print(f"    {console.styled(SPANMARK_VERSION, bold=True)}")
    else:
        console.print(console.styled(SPANMARK_VERSION, bold=True))
