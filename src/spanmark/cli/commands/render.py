# spanmark:header:start
#
#   project      : SpanMark
#   file         : render.py
#   file_relpath : src/spanmark/cli/commands/render.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# spanmark:header:end

"""SpanMark `render` command.

Loads a TOML diagnostic document and renders every diagnostic in it, in
document order, separated by one blank line. The exit code is ``FAILURE``
when at least one ERROR or INTERNAL_ERROR diagnostic was rendered, which lets
build scripts use ``spanmark render`` as a gate.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from spanmark.cli.cmd_common import (
    build_config_common,
    get_console,
    get_effective_verbosity,
    resolve_output_color,
)
from spanmark.cli.errors import SpanmarkDataError, SpanmarkFileNotFoundError, SpanmarkIOError
from spanmark.cli.exit_codes import ExitCode
from spanmark.cli.options import common_config_options, common_render_options
from spanmark.config.logging import get_logger
from spanmark.diagnostic.loader import DocumentError, load_diagnostics
from spanmark.diagnostic.reporter import Reporter

if TYPE_CHECKING:
    from spanmark.config.logging import SpanmarkLogger
    from spanmark.config.model import RenderStyle

logger: SpanmarkLogger = get_logger(__name__)


@click.command(
    name="render",
    help="Render the diagnostics described in a TOML document.",
)
@click.argument("document", type=click.Path(dir_okay=False, path_type=str))
@common_config_options
@common_render_options
def render_command(
    *,
    document: str,
    config_path: str | None,
    no_config: bool,
    style: RenderStyle | None,
    tab_width: int | None,
) -> None:
    """Render every diagnostic of DOCUMENT.

    Args:
        document (str): Path to the TOML diagnostic document.
        config_path (str | None): Optional config file.
        no_config (bool): Skip discovery of local config files.
        style (RenderStyle | None): Output style override.
        tab_width (int | None): Tab stop override.
    """
    ctx = click.get_current_context()
    console = get_console(ctx)
    vlevel = get_effective_verbosity(ctx)

    path = Path(document)
    if not path.is_file():
        raise SpanmarkFileNotFoundError(f"Document not found: {document}")

    config = build_config_common(
        ctx,
        config_path=config_path,
        no_config=no_config,
        style=style,
        tab_width=tab_width,
    )
    try:
        diagnostics = load_diagnostics(path)
    except DocumentError as exc:
        raise SpanmarkDataError(f"{document}: {exc}") from exc
    except OSError as exc:
        raise SpanmarkIOError(f"Cannot read {document}: {exc}") from exc

    reporter = Reporter(config=config, echo=False)
    for diagnostic in diagnostics:
        reporter.report(diagnostic)

    color = resolve_output_color(ctx, config)
    for n, diagnostic in enumerate(reporter):
        if n:
            console.print()
        console.print(diagnostic.render(config, color=color), nl=False)

    if vlevel > 0:
        stats = reporter.stats()
        console.print()
        console.print(
            console.styled(
                f"{stats.total} diagnostic(s): {stats.n_failures} error(s), "
                f"{stats.n_warning} warning(s)",
                bold=True,
            )
        )

    if reporter.has_errors():
        ctx.exit(ExitCode.FAILURE)
