# spanmark:header:start
#
#   project      : SpanMark
#   file         : options.py
#   file_relpath : src/spanmark/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# spanmark:header:end

"""Common CLI option utilities.

This module centralizes reusable options (verbosity, color, config, render
overrides) and their resolution logic, so the group and commands stay thin.
"""

from __future__ import annotations

import logging
from typing import Callable, ParamSpec, TypeVar

import click

from spanmark.cli.cli_types import EnumChoiceParam
from spanmark.cli.errors import SpanmarkUsageError
from spanmark.config.logging import TRACE_LEVEL, get_logger
from spanmark.config.model import RenderStyle
from spanmark.rendering.color import ColorMode

P = ParamSpec("P")
R = TypeVar("R")

LOG_LEVELS = {
    "TRACE": TRACE_LEVEL,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

logger = get_logger(__name__)


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the program-output verbosity from ``-v``/``-q`` counts.

    Args:
        verbose_count: Number of times ``-v`` was passed.
        quiet_count: Number of times ``-q`` was passed.

    Returns:
        The verbosity expressed as a logging level.

    Raises:
        SpanmarkUsageError: If both flags are used.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise SpanmarkUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")

    if verbose_count >= 3:
        return LOG_LEVELS["TRACE"]
    if verbose_count == 2:
        return LOG_LEVELS["DEBUG"]
    if verbose_count == 1:
        return LOG_LEVELS["INFO"]
    if quiet_count >= 1:
        return LOG_LEVELS["ERROR"]
    return LOG_LEVELS["WARNING"]


def verbosity_to_level(level: int) -> int:
    """Map a logging-level verbosity to the 0 (terse) / 1+ (verbose) program scale."""
    if level <= logging.DEBUG:
        return 2
    if level <= logging.INFO:
        return 1
    if level >= logging.ERROR:
        return -1
    return 0


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``-v/--verbose`` and ``-q/--quiet`` counting options."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase verbosity. Specify up to three times for more detail.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Suppress banners and summaries.",
    )(f)
    return f


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--color`` and ``--no-color`` options."""
    f = click.option(
        "--color",
        "color_mode",
        type=EnumChoiceParam(ColorMode),
        default=None,
        help="Color output: auto (default), always, or never.",
    )(f)
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Disable color output (equivalent to --color=never).",
    )(f)
    return f


def common_config_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--config PATH`` and ``--no-config``."""
    f = click.option(
        "--config",
        "config_path",
        type=click.Path(dir_okay=False, path_type=str),
        default=None,
        help="Read render settings from this spanmark.toml or pyproject.toml ([tool.spanmark]).",
    )(f)
    f = click.option(
        "--no-config",
        "no_config",
        is_flag=True,
        help="Ignore spanmark.toml / pyproject.toml in the current directory.",
    )(f)
    return f


def common_render_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add render overrides: ``--style`` and ``--tab-width``."""
    f = click.option(
        "--style",
        "style",
        type=EnumChoiceParam(RenderStyle),
        default=None,
        help=f"Output style ({', '.join(s.value for s in RenderStyle)}).",
    )(f)
    f = click.option(
        "--tab-width",
        "tab_width",
        type=click.IntRange(min=1),
        default=None,
        help="Tab stop distance used to align markers under tabbed code.",
    )(f)
    return f
