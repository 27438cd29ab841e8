# spanmark:header:start
#
#   project      : SpanMark
#   file         : styling.py
#   file_relpath : src/spanmark/rendering/styling.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# spanmark:header:end

"""Styled text segments and the styler that turns them into terminal strings.

Layout code never emits ANSI codes directly. It produces rows of `Segment`s
(text + semantic color + bold flag); a `Styler` joins them, resolving the
`INHERIT` marker against the severity color of the diagnostic being drawn.
A disabled styler returns the plain text, which is what non-terminal sinks get.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from yachalk import ChalkFactory, ColorMode

from spanmark.rendering.color import COLOR_NAMES, INHERIT

if TYPE_CHECKING:
    from collections.abc import Iterable

    from yachalk.chalk_builder import ChalkBuilder


@dataclass(frozen=True, slots=True)
class Segment:
    """A run of text drawn with a single style.

    Attributes:
        text (str): The text of the run.
        color (str | None): A color name, `INHERIT`, or None for unstyled text.
        bold (bool): Whether to render the run in bold.
    """

    text: str
    color: str | None = None
    bold: bool = False

    @property
    def is_blank(self) -> bool:
        """Return True if the segment is only spaces."""
        return not self.text.strip(" ")


Row = list[Segment]


def trim_row(row: Row) -> Row:
    """Drop trailing blank segments and trailing spaces of the last segment."""
    out = list(row)
    while out and out[-1].is_blank:
        out.pop()
    if out:
        last = out[-1]
        stripped = last.text.rstrip(" ")
        if stripped != last.text:
            out[-1] = Segment(stripped, last.color, last.bold)
    return out


def row_text(row: Iterable[Segment]) -> str:
    """Return the plain text of a row (no styling)."""
    return "".join(seg.text for seg in row)


class Styler:
    """Paint segments with yachalk.

    The styler owns its own chalk factory in 16-color mode. Whether to color is
    decided by the caller (`resolve_color_mode`), not by yachalk's terminal
    detection, so ``--color always`` still colors piped output.

    Args:
        enabled (bool): When False, all painting is a no-op.
    """

    def __init__(self, enabled: bool = False) -> None:
        self.enabled = enabled
        self.chalk = ChalkFactory(ColorMode.Basic16 if enabled else ColorMode.AllOff)

    def builder(self, color: str | None, bold: bool) -> ChalkBuilder | None:
        """Return the chalk builder for a theme color name, or None for plain text.

        Theme names use the ``bright_red`` spelling; chalk calls it ``red_bright``.
        ``reset`` means the terminal's default color.
        """
        if color == "reset":
            color = None
        elif color is not None and color.startswith("bright_"):
            color = color[len("bright_") :] + "_bright"
        if color is None:
            return self.chalk.bold if bold else None
        style: ChalkBuilder = getattr(self.chalk, color)
        return style.bold if bold else style

    def paint(
        self,
        text: str,
        color: str | None = None,
        *,
        bold: bool = False,
        inherit: str | None = None,
    ) -> str:
        """Return ``text`` styled with ``color``.

        Args:
            text (str): Text to style.
            color (str | None): Color name or `INHERIT`.
            bold (bool): Whether to make the text bold.
            inherit (str | None): Color substituted for `INHERIT`.

        Returns:
            str: The styled text, or ``text`` unchanged when disabled.
        """
        if not self.enabled or not text:
            return text
        fg = inherit if color == INHERIT else color
        style = self.builder(fg if fg in COLOR_NAMES else None, bold)
        return text if style is None else style(text)

    def join(self, row: Iterable[Segment], *, inherit: str | None = None) -> str:
        """Render a row of segments into a single string."""
        return "".join(
            self.paint(seg.text, seg.color, bold=seg.bold, inherit=inherit) for seg in row
        )
