# spanmark:header:start
#
#   project      : SpanMark
#   file         : cmd_common.py
#   file_relpath : src/spanmark/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# spanmark:header:end

"""Helpers shared by SpanMark subcommands.

Commands read the shared state that `init_common_state` placed on
``ctx.obj`` (console, verbosity, color mode) and build their effective
`RenderConfig` from layered sources:

1. the packaged defaults;
2. a config file: the ``--config`` path, or else the first of
   ``spanmark.toml`` and ``pyproject.toml`` found in the current directory
   (``[tool.spanmark]`` table), unless ``--no-config`` is given;
3. CLI overrides (``--style``, ``--tab-width``, ``--color``).
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from spanmark.cli.errors import SpanmarkConfigError, SpanmarkFileNotFoundError
from spanmark.config.logging import get_logger
from spanmark.config.model import MutableRenderConfig
from spanmark.constants import LOCAL_CONFIG_NAMES
from spanmark.rendering.color import resolve_color_mode, sink_isatty

if TYPE_CHECKING:
    from spanmark.cli.console import ConsoleLike
    from spanmark.config.logging import SpanmarkLogger
    from spanmark.config.model import RenderConfig, RenderStyle
    from spanmark.rendering.color import ColorMode

logger: SpanmarkLogger = get_logger(__name__)


def get_console(ctx: click.Context) -> ConsoleLike:
    """Return the console stored on the Click context."""
    ctx.ensure_object(dict)
    return ctx.obj["console"]


def get_effective_verbosity(ctx: click.Context) -> int:
    """Return the program-output verbosity (0 = terse, > 0 = verbose, < 0 = quiet)."""
    ctx.ensure_object(dict)
    return int(ctx.obj.get("verbosity_level", 0))


def discover_config(cwd: Path) -> Path | None:
    """Return the first local config file found in ``cwd``, if any."""
    for name in LOCAL_CONFIG_NAMES:
        candidate = cwd / name
        if candidate.is_file():
            logger.debug("Discovered config file %s", candidate)
            return candidate
    return None


def build_config_common(
    ctx: click.Context,
    *,
    config_path: str | None,
    no_config: bool = False,
    style: RenderStyle | None = None,
    tab_width: int | None = None,
) -> RenderConfig:
    """Build the effective `RenderConfig` for a command.

    Args:
        ctx (click.Context): Current Click context (reads the global color mode).
        config_path (str | None): Optional ``--config`` file.
        no_config (bool): Skip discovery of local config files.
        style (RenderStyle | None): ``--style`` override.
        tab_width (int | None): ``--tab-width`` override.

    Returns:
        RenderConfig: The frozen, sanitized configuration.

    Raises:
        SpanmarkFileNotFoundError: If ``config_path`` does not exist.
        SpanmarkConfigError: If the packaged defaults cannot be loaded.
    """
    ctx.ensure_object(dict)
    path: Path | None = None
    if config_path is not None:
        path = Path(config_path)
        if not path.is_file():
            raise SpanmarkFileNotFoundError(f"Config file not found: {config_path}")
    elif not no_config:
        path = discover_config(Path.cwd())

    try:
        draft = MutableRenderConfig.load_merged(path)
    except RuntimeError as exc:
        raise SpanmarkConfigError(str(exc)) from exc

    if config_path is not None and str(path) not in draft.config_files:
        get_console(ctx).warn(f"No SpanMark configuration found in {path}; using defaults.")

    color_mode: ColorMode | None = ctx.obj.get("color_mode")
    draft.apply_overrides(style=style, tab_width=tab_width, color_mode=color_mode)
    config = draft.freeze()
    logger.debug("Effective config from %s", ", ".join(config.config_files))
    return config


def resolve_output_color(ctx: click.Context, config: RenderConfig) -> bool:
    """Return whether rendered diagnostics should carry ANSI styles."""
    console = get_console(ctx)
    out = getattr(console, "out", None)
    return resolve_color_mode(
        color_mode_override=config.color_mode,
        output_isatty=sink_isatty(out),
    )
