# spanmark:header:start
#
#   project      : SpanMark
#   file         : snippet.py
#   file_relpath : src/spanmark/rendering/snippet.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# spanmark:header:end

"""Source line access and tab-aware column mapping.

Span columns are character indices into the raw line. Output is laid out in
visual cells: a tab at visual column ``c`` occupies ``tab_width - c % tab_width``
cells. Every helper here works on the per-character cell widths so that code
rows and the marker rows under them stay aligned.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from spanmark.config.logging import get_logger

if TYPE_CHECKING:
    from spanmark.config.logging import SpanmarkLogger
    from spanmark.diagnostic.location import SourceRef

logger: SpanmarkLogger = get_logger(__name__)


def fetch_line(source: SourceRef | None, n: int) -> str:
    """Return line ``n`` of ``source``; never raises.

    Missing sources, lines past end-of-file and failing `SourceRef`
    implementations all yield ``""``.
    """
    if source is None:
        return ""
    try:
        text = source.get_line(n)
    except Exception as exc:  # any SourceRef failure renders as an empty line
        logger.warning("Cannot read line %d of %s: %s", n, source.name, exc)
        return ""
    logger.trace("Fetched %s:%d (%d chars)", source.name, n, len(text))
    return text.rstrip("\r\n")


def cell_widths(text: str, tab_width: int, upto: int = 0) -> list[int]:
    """Return the visual width of each raw column.

    Args:
        text (str): The raw source line.
        tab_width (int): Tab stop distance (>= 1).
        upto (int): Minimum number of columns to describe; columns past the end
            of ``text`` have width 1.

    Returns:
        list[int]: One width per column, ``max(len(text), upto)`` entries.
    """
    widths: list[int] = []
    visual = 0
    for ch in text:
        width = tab_width - visual % tab_width if ch == "\t" else 1
        widths.append(width)
        visual += width
    widths.extend([1] * (upto - len(text)))
    return widths


def visual_column(text: str, index: int, tab_width: int) -> int:
    """Return the visual column at which raw column ``index`` starts."""
    return sum(cell_widths(text, tab_width, index)[:index])


def expand_tabs(text: str, tab_width: int) -> str:
    """Return ``text`` with every tab replaced by spaces up to the next tab stop."""
    if "\t" not in text:
        return text
    widths = cell_widths(text, tab_width)
    return "".join(" " * w if ch == "\t" else ch for ch, w in zip(text, widths, strict=True))


def fill(glyph: str, width: int) -> str:
    """Repeat ``glyph`` to cover ``width`` cells."""
    return glyph * width
