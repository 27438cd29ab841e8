# spanmark:header:start
#
#   project      : SpanMark
#   file         : show_defaults.py
#   file_relpath : src/spanmark/cli/commands/show_defaults.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# spanmark:header:end

"""SpanMark `show-defaults` command.

Displays the default render configuration bundled with the package, as a
reference for users writing their own ``spanmark.toml`` or
``[tool.spanmark]`` table.
"""

from __future__ import annotations

import click

from spanmark.cli.cmd_common import get_console, get_effective_verbosity
from spanmark.cli.errors import SpanmarkConfigError
from spanmark.config.io import load_defaults_text


@click.command(
    name="show-defaults",
    help="Display the built-in default SpanMark configuration file.",
)
def show_defaults_command() -> None:
    """Display the built-in default configuration."""
    ctx = click.get_current_context()
    console = get_console(ctx)
    vlevel = get_effective_verbosity(ctx)

    try:
        text = load_defaults_text()
    except OSError as exc:
        raise SpanmarkConfigError(str(exc)) from exc

    if vlevel > 0:
        console.print(
            console.styled("Default SpanMark Configuration (TOML):", bold=True, underline=True)
        )
        console.print(console.styled("# === BEGIN ===", fg="cyan", dim=True))

    console.print(console.styled(text.rstrip("\n"), fg="cyan"))

    if vlevel > 0:
        console.print(console.styled("# === END ===", fg="cyan", dim=True))
