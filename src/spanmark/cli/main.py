# spanmark:header:start
#
#   project      : SpanMark
#   file         : main.py
#   file_relpath : src/spanmark/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# spanmark:header:end

"""SpanMark command line entry point.

Key ideas:
- Group-level options (verbosity, color) are initialized once and placed into
  ``ctx.obj`` together with the program-output console.
- Subcommands read that state through `spanmark.cli.cmd_common`.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

import click

from spanmark.cli.commands.dump_config import dump_config_command
from spanmark.cli.commands.render import render_command
from spanmark.cli.commands.show_defaults import show_defaults_command
from spanmark.cli.commands.version import version_command
from spanmark.cli.console import ClickConsole
from spanmark.cli.options import (
    common_color_options,
    common_verbose_options,
    resolve_verbosity,
    verbosity_to_level,
)
from spanmark.config.logging import get_logger, resolve_env_log_level, setup_logging
from spanmark.rendering.color import ColorMode, resolve_color_mode, sink_isatty

if TYPE_CHECKING:
    from spanmark.cli.console import ConsoleLike

logger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Initialize shared state (verbosity, logging, color) on the Click context.

    Args:
        ctx (click.Context): Current Click context; ``obj`` and ``color`` are set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        color_mode (ColorMode | None): Explicit color mode from ``--color`` (or ``None``).
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
    """
    ctx.obj = ctx.obj or {}

    level_cli = resolve_verbosity(verbose, quiet)
    ctx.obj["verbosity_level"] = verbosity_to_level(level_cli)

    # Internal logging is driven by SPANMARK_LOG_LEVEL, or by -vvv for TRACE
    level_env = resolve_env_log_level()
    if level_env is None and verbose >= 3:
        level_env = level_cli
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    effective_mode = ColorMode.NEVER if no_color else color_mode
    ctx.obj["color_mode"] = effective_mode
    enable_color = resolve_color_mode(
        color_mode_override=effective_mode,
        output_isatty=sink_isatty(sys.stdout),
    )
    console = ClickConsole(enable_color=enable_color)
    ctx.color = console.enable_color
    ctx.obj["console"] = console
    logger.debug("CLI state: verbosity=%s color=%s", ctx.obj["verbosity_level"], effective_mode)


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="SpanMark: render compiler-style diagnostics.",
)
@common_verbose_options
@common_color_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Entry point for the SpanMark CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=color_mode,
        no_color=no_color,
    )
    console: ConsoleLike = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'spanmark render DOC.toml' to render a diagnostic document.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(version_command)

cli.add_command(show_defaults_command)

cli.add_command(dump_config_command)

cli.add_command(render_command)

if __name__ == "__main__":
    cli()
