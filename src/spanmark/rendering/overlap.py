# spanmark:header:start
#
#   project      : SpanMark
#   file         : overlap.py
#   file_relpath : src/spanmark/rendering/overlap.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# spanmark:header:end

"""Stacked underline rows for secondaries sharing one source line.

Input is a contiguous run of annotations in render order (descending start,
then ascending end). Output is a list of rows: first the underline rows, then
one message row per annotation (plus continuation rows for multi-line messages).

Row assignment walks the run back-to-front, i.e. by ascending start. An
annotation whose start column falls inside an already placed annotation's
``[start, end)`` must sit below it, because the connector that links the
placed annotation to its message passes through that column. So each
annotation lands one row below the deepest placed annotation covering its
start, or on row 0 when nothing covers it. Equal starts resolve by the
render order: the longer span is placed first and ends up shallower.

Example for ``A = [2, 4)`` and ``B = [3, 6)``::

    ab(cd)ef
      ~~          row 0: A
      │~~~        row 1: connector for A, underline for B
      │╰ B        messages in render order (B starts further right)
      ╰ A
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from spanmark.config.logging import get_logger
from spanmark.rendering.snippet import cell_widths, fill
from spanmark.rendering.styling import Segment, trim_row

if TYPE_CHECKING:
    from collections.abc import Sequence

    from spanmark.config.logging import SpanmarkLogger
    from spanmark.config.model import Glyphs
    from spanmark.rendering.styling import Row

logger: SpanmarkLogger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Annotation:
    """One underlined column range with its message.

    Attributes:
        start (int): First raw column (inclusive).
        end (int): Last raw column (exclusive); always greater than ``start``.
        lines (tuple[str, ...]): Message lines (at least one, possibly empty).
        color (str | None): Color used for the underline, connectors and message.
    """

    start: int
    end: int
    lines: tuple[str, ...]
    color: str | None = None

    @classmethod
    def from_text(cls, start: int, end: int, text: str, color: str | None = None) -> Annotation:
        """Build an annotation, splitting ``text`` on newlines."""
        return cls(start, max(end, start + 1), tuple(text.split("\n")), color)


def coalesce(annotations: Sequence[Annotation]) -> list[Annotation]:
    """Merge annotations with identical column ranges into one.

    The merged annotation keeps the first entry's position in the run and its
    color; messages are stacked in run order.
    """
    merged: dict[tuple[int, int], int] = {}
    out: list[Annotation] = []
    for ann in annotations:
        key = (ann.start, ann.end)
        pos = merged.get(key)
        if pos is None:
            merged[key] = len(out)
            out.append(ann)
        else:
            first = out[pos]
            out[pos] = Annotation(first.start, first.end, first.lines + ann.lines, first.color)
    return out


def assign_rows(annotations: Sequence[Annotation]) -> list[int]:
    """Return the underline row of each annotation (same order as the input).

    Args:
        annotations (Sequence[Annotation]): A run in render order.

    Returns:
        list[int]: Row index per annotation; row 0 is drawn first.
    """
    rows: list[int] = [0] * len(annotations)
    placed: list[int] = []
    for i in reversed(range(len(annotations))):
        ann = annotations[i]
        row = 0
        for j in placed:
            other = annotations[j]
            if other.start <= ann.start < other.end:
                row = max(row, rows[j] + 1)
        rows[i] = row
        placed.append(i)
    logger.trace("Overlap rows: %s", [(a.start, a.end, r) for a, r in zip(annotations, rows)])
    return rows


def _underline_rows(
    annotations: Sequence[Annotation],
    rows: Sequence[int],
    widths: Sequence[int],
    glyphs: Glyphs,
) -> list[Row]:
    out: list[Row] = []
    columns = len(widths)
    for depth in range(max(rows) + 1):
        row: Row = []
        for col in range(columns):
            width = widths[col]
            owner = next(
                (a for a, r in zip(annotations, rows) if r == depth and a.start <= col < a.end),
                None,
            )
            if owner is not None:
                row.append(Segment(fill(glyphs.underline, width), owner.color))
                continue
            above = next(
                (a for a, r in zip(annotations, rows) if r < depth and a.start == col),
                None,
            )
            if above is not None:
                row.append(Segment(fill(glyphs.connector, width), above.color))
            else:
                row.append(Segment(" " * width))
        out.append(trim_row(row))
    return out


def _lead(pending: Sequence[Annotation], upto: int, widths: Sequence[int], glyphs: Glyphs) -> Row:
    """Return the cells left of column ``upto``: connectors for pending annotations."""
    row: Row = []
    for col in range(upto):
        width = widths[col]
        waiting = next((a for a in pending if a.start == col), None)
        if waiting is not None:
            row.append(Segment(fill(glyphs.connector, width), waiting.color))
        else:
            row.append(Segment(" " * width))
    return row


def _message_rows(
    annotations: Sequence[Annotation],
    widths: Sequence[int],
    glyphs: Glyphs,
) -> list[Row]:
    out: list[Row] = []
    for i, ann in enumerate(annotations):
        lead = _lead(annotations[i + 1 :], ann.start, widths, glyphs)
        for n, line in enumerate(ann.lines):
            marker = glyphs.corner if n == 0 else " "
            row = [*lead, Segment(marker, ann.color), Segment(f" {line}", ann.color)]
            out.append(trim_row(row))
    return out


def _inline_rows(ann: Annotation, widths: Sequence[int], glyphs: Glyphs) -> list[Row]:
    before = sum(widths[: ann.start])
    under = sum(widths[ann.start : ann.end])
    out: list[Row] = []
    for n, line in enumerate(ann.lines):
        if n == 0:
            row: Row = [
                Segment(" " * before),
                Segment(fill(glyphs.underline, under), ann.color),
                Segment(f" {line}", ann.color),
            ]
        else:
            row = [Segment(" " * (before + under)), Segment(f" {line}", ann.color)]
        out.append(trim_row(row))
    return out


def resolve_overlaps(
    annotations: Sequence[Annotation],
    text: str,
    glyphs: Glyphs,
    tab_width: int,
    *,
    coalesce_identical: bool = False,
    inline_single: bool = True,
) -> list[Row]:
    """Lay out the annotations of one source line.

    Args:
        annotations (Sequence[Annotation]): A run in render order.
        text (str): The raw source line (used for tab widths).
        glyphs (Glyphs): Drawing characters.
        tab_width (int): Tab stop distance.
        coalesce_identical (bool): Merge annotations with identical ranges first.
        inline_single (bool): Put a lone annotation's message on its underline row.

    Returns:
        list[Row]: Underline rows followed by message rows, without gutter.
    """
    if not annotations:
        return []
    run = coalesce(annotations) if coalesce_identical else list(annotations)
    widths = cell_widths(text, tab_width, max(a.end for a in run))
    if len(run) == 1 and inline_single:
        return _inline_rows(run[0], widths, glyphs)
    rows = assign_rows(run)
    return _underline_rows(run, rows, widths, glyphs) + _message_rows(run, widths, glyphs)
