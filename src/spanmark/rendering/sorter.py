# spanmark:header:start
#
#   project      : SpanMark
#   file         : sorter.py
#   file_relpath : src/spanmark/rendering/sorter.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# spanmark:header:end

"""Deterministic render order for secondary diagnostics.

The layout engine consumes secondaries in one linear pass, so the order is a
contract:

1. secondaries on the primary's source come first;
2. secondaries on other sources follow, grouped by source display name
   (sources sharing a name keep their first-appearance order);
3. secondaries without a source come last;
4. within one source: ascending line;
5. on one line: descending start column, then ascending end column.

Rule 5 keeps same-line entries contiguous and makes the rightmost annotation
come first, which is what the overlap resolver relies on when drawing
connectors. The sort is stable, so sorting an already-sorted list is a no-op.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from spanmark.diagnostic.location import SourceRef, Span


class HasSpan(Protocol):
    """Anything carrying an optional span (diagnostic handles, annotations)."""

    @property
    def span(self) -> Span | None:
        """Return the span, if any."""
        ...


T = TypeVar("T", bound=HasSpan)

SortKey = tuple[int, str, int, int, int, int]

_PRIMARY_SOURCE = 0
_OTHER_SOURCE = 1
_NO_SOURCE = 2


def secondary_sort_key(
    primary_source: SourceRef | None,
    items: Sequence[HasSpan],
) -> Callable[[HasSpan], SortKey]:
    """Return a key function implementing the secondary render order.

    Args:
        primary_source (SourceRef | None): Source of the primary span.
        items (Sequence[HasSpan]): The items to be sorted; used to rank sources
            that share a display name by first appearance.

    Returns:
        Callable[[HasSpan], SortKey]: A key for `sorted` / `list.sort`.
    """
    first_seen: dict[int, int] = {}
    for item in items:
        span = item.span
        if span is not None and span.source is not None:
            first_seen.setdefault(id(span.source), len(first_seen))

    def key(item: HasSpan) -> SortKey:
        span = item.span
        if span is None or span.source is None:
            return (_NO_SOURCE, "", 0, 0, 0, 0)
        if span.source is primary_source:
            return (_PRIMARY_SOURCE, "", 0, span.line, -span.start, span.stop)
        return (
            _OTHER_SOURCE,
            span.source.name,
            first_seen[id(span.source)],
            span.line,
            -span.start,
            span.stop,
        )

    return key


def sort_secondaries(primary_span: Span | None, items: Sequence[T]) -> list[T]:
    """Return ``items`` in render order (see module docstring).

    Args:
        primary_span (Span | None): Span of the primary diagnostic.
        items (Sequence[T]): Secondary diagnostics (or anything with a ``span``).

    Returns:
        list[T]: A new, stably sorted list.
    """
    primary_source = primary_span.source if primary_span is not None else None
    return sorted(items, key=secondary_sort_key(primary_source, items))
