# spanmark:header:start
#
#   project      : SpanMark
#   file         : dump_config.py
#   file_relpath : src/spanmark/cli/commands/dump_config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# spanmark:header:end

"""SpanMark `dump-config` command.

Emits the effective render configuration as TOML after applying the packaged
defaults, an optional ``--config`` file and the CLI overrides. The output is
wrapped between `# === BEGIN ===` and `# === END ===` markers for easy parsing
in tests or tooling.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from spanmark.cli.cmd_common import build_config_common, get_console
from spanmark.cli.options import common_config_options, common_render_options
from spanmark.config.io import to_toml
from spanmark.config.logging import get_logger

if TYPE_CHECKING:
    from spanmark.config.logging import SpanmarkLogger
    from spanmark.config.model import RenderStyle

logger: SpanmarkLogger = get_logger(__name__)


@click.command(
    name="dump-config",
    help="Dump the final merged SpanMark render configuration as TOML.",
    epilog="Output is wrapped between '# === BEGIN ===' and '# === END ===' markers.",
)
@common_config_options
@common_render_options
def dump_config_command(
    *,
    config_path: str | None,
    no_config: bool,
    style: RenderStyle | None,
    tab_width: int | None,
) -> None:
    """Dump the final merged configuration as TOML.

    Args:
        config_path (str | None): Optional config file merged over the defaults.
        no_config (bool): Skip discovery of local config files.
        style (RenderStyle | None): Output style override.
        tab_width (int | None): Tab stop override.
    """
    ctx = click.get_current_context()
    console = get_console(ctx)

    config = build_config_common(
        ctx,
        config_path=config_path,
        no_config=no_config,
        style=style,
        tab_width=tab_width,
    )
    logger.trace("Config after merging CLI and config files: %s", config)

    header = "\n".join(
        ["Merged SpanMark config (TOML)", *(f"source: {f}" for f in config.config_files)]
    )
    console.print("# === BEGIN ===")
    console.print(to_toml(config.to_toml_dict(), header=header), nl=False)
    console.print("# === END ===")
