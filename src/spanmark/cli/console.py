# spanmark:header:start
#
#   project      : SpanMark
#   file         : console.py
#   file_relpath : src/spanmark/cli/console.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# spanmark:header:end

"""Console used by CLI commands for rendered diagnostics and status text.

Rendered diagnostics and command output go to stdout through the console;
warnings about the run (for example an empty ``--config`` file) go to stderr.
`logging` stays separate and is only used for internal tracing.
"""

from __future__ import annotations

import sys
from typing import Protocol, TextIO

import click


class ConsoleLike(Protocol):
    """What CLI commands need from the console stored on the Click context."""

    enable_color: bool

    def print(self, text: str = "", *, nl: bool = True) -> None: ...

    def warn(self, text: str) -> None: ...

    def styled(
        self,
        text: str,
        *,
        fg: str | None = None,
        bold: bool = False,
        dim: bool = False,
        underline: bool = False,
    ) -> str: ...


class ClickConsole:
    """Console writing through `click.echo`.

    Args:
        enable_color (bool): Emit ANSI styles. Diagnostics are already painted by
            the render core, so this also keeps Click from stripping them.
        out (TextIO | None): Stream for diagnostics and status. Defaults to `sys.stdout`.
        err (TextIO | None): Stream for warnings. Defaults to `sys.stderr`.
    """

    def __init__(
        self,
        *,
        enable_color: bool = True,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.enable_color = enable_color
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    def print(self, text: str = "", *, nl: bool = True) -> None:
        """Write ``text`` to stdout; rendered diagnostics pass ``nl=False``."""
        click.echo(text, nl=nl, file=self.out, color=self.enable_color)

    def warn(self, text: str) -> None:
        """Write a yellow warning line to stderr."""
        click.echo(self.styled(text, fg="yellow"), file=self.err, color=self.enable_color)

    def styled(
        self,
        text: str,
        *,
        fg: str | None = None,
        bold: bool = False,
        dim: bool = False,
        underline: bool = False,
    ) -> str:
        """Return ``text`` styled for status output, or unchanged when color is off."""
        if not self.enable_color:
            return text
        return click.style(text, fg=fg, bold=bold, dim=dim, underline=underline)
