# spanmark:header:start
#
#   project      : SpanMark
#   file         : color.py
#   file_relpath : src/spanmark/rendering/color.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# spanmark:header:end

"""Click-independent color helpers for SpanMark.

This module provides:

- The `ColorMode` enum.
- Color-mode resolution based on explicit intent, environment and the output sink.
- The set of color names a theme may reference.

These helpers are deliberately kept Click-free so they can be used by the
render entry point (`Diagnostic.print`) as well as by the CLI.
"""

from __future__ import annotations

import os
from enum import Enum
from typing import TYPE_CHECKING, Final

from spanmark.config.logging import get_logger

if TYPE_CHECKING:
    from typing import TextIO

    from spanmark.config.logging import SpanmarkLogger


logger: SpanmarkLogger = get_logger(__name__)

# Marker a theme uses to say "use the color of the diagnostic's severity".
INHERIT: Final[str] = "inherit"

# Foreground color names a theme may use; `Styler` maps them onto yachalk.
COLOR_NAMES: Final[frozenset[str]] = frozenset(
    {
        "black",
        "red",
        "green",
        "yellow",
        "blue",
        "magenta",
        "cyan",
        "white",
        "reset",
        "bright_black",
        "bright_red",
        "bright_green",
        "bright_yellow",
        "bright_blue",
        "bright_magenta",
        "bright_cyan",
        "bright_white",
    }
)


class ColorMode(str, Enum):
    """User intent for colorized terminal output.

    Attributes:
        AUTO: Enable color only when the output sink is a TTY.
        ALWAYS: Force-enable color regardless of TTY status.
        NEVER: Disable color entirely.
    """

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


def is_known_color(name: str | None) -> bool:
    """Return True if ``name`` is empty, the inherit marker, or a known color name."""
    return not name or name == INHERIT or name in COLOR_NAMES


def sink_isatty(sink: TextIO | None) -> bool:
    """Return True if ``sink`` reports itself as a TTY (False on any error)."""
    if sink is None:
        return False
    isatty = getattr(sink, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except (OSError, ValueError):
        return False


def resolve_color_mode(
    *,
    color_mode_override: ColorMode | None,
    output_isatty: bool | None = None,
) -> bool:
    """Determine whether color output should be enabled.

    Decision precedence:
        1. **Override**: ``ALWAYS`` → True; ``NEVER`` → False.
        2. **Environment**:
            - `FORCE_COLOR` (set and not equal to `"0"`) → True
            - `NO_COLOR` (set to any value) → False
        3. **Auto**: return ``output_isatty`` (False when unknown).

    Args:
        color_mode_override: Explicit `ColorMode`; `None` means "not provided".
        output_isatty: Whether the output sink is a TTY.

    Returns:
        True if ANSI color should be enabled; False otherwise.
    """
    if color_mode_override == ColorMode.ALWAYS:
        return True
    if color_mode_override == ColorMode.NEVER:
        return False

    force_color: str | None = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        return True
    if os.getenv("NO_COLOR") is not None:
        return False

    return bool(output_isatty)
