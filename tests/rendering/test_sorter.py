# spanmark:header:start
#
#   project      : SpanMark
#   file         : test_sorter.py
#   file_relpath : tests/rendering/test_sorter.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# spanmark:header:end

"""Render order of secondary diagnostics."""

from __future__ import annotations

from dataclasses import dataclass

from spanmark.diagnostic.location import Span, TextSource
from spanmark.rendering.sorter import sort_secondaries
from tests.conftest import mark_rendering


@dataclass
class Item:
    tag: str
    span: Span | None = None


def tags(items: list[Item]) -> list[str]:
    return [item.tag for item in items]


@mark_rendering
def test_primary_source_first_then_others_then_none() -> None:
    """Groups come out as primary source, other sources by name, no source."""
    main = TextSource("main", "")
    alpha = TextSource("alpha", "")
    zeta = TextSource("zeta", "")
    items = [
        Item("none"),
        Item("zeta", Span(1, 0, 1, zeta)),
        Item("main", Span(9, 0, 1, main)),
        Item("alpha", Span(5, 0, 1, alpha)),
        Item("no-source", Span(1, 0, 1)),
    ]

    ordered = sort_secondaries(Span(3, 0, 1, main), items)
    assert tags(ordered) == ["main", "alpha", "zeta", "none", "no-source"]


@mark_rendering
def test_lines_ascend_and_columns_descend() -> None:
    """Within a source lines ascend; on one line start descends, end ascends."""
    src = TextSource("f", "")
    items = [
        Item("l2-c0", Span(2, 0, 1, src)),
        Item("l1-c1-wide", Span(1, 1, 5, src)),
        Item("l1-c4", Span(1, 4, 5, src)),
        Item("l1-c1-narrow", Span(1, 1, 2, src)),
    ]

    ordered = sort_secondaries(Span(1, 0, 1, src), items)
    assert tags(ordered) == ["l1-c4", "l1-c1-narrow", "l1-c1-wide", "l2-c0"]


@mark_rendering
def test_same_name_sources_keep_first_appearance() -> None:
    """Distinct sources with one display name stay grouped, in first-seen order."""
    first = TextSource("dup", "")
    second = TextSource("dup", "")
    items = [
        Item("second-a", Span(1, 0, 1, second)),
        Item("first-a", Span(2, 0, 1, first)),
        Item("second-b", Span(3, 0, 1, second)),
        Item("first-b", Span(1, 0, 1, first)),
    ]

    ordered = sort_secondaries(None, items)
    assert tags(ordered) == ["second-a", "second-b", "first-b", "first-a"]


@mark_rendering
def test_sort_is_stable_and_idempotent() -> None:
    """Equal keys keep their input order and resorting changes nothing."""
    src = TextSource("f", "")
    items = [
        Item("a", Span(1, 2, 3, src)),
        Item("b", Span(1, 2, 3, src)),
        Item("c"),
        Item("d"),
    ]

    once = sort_secondaries(Span(1, 0, 1, src), items)
    twice = sort_secondaries(Span(1, 0, 1, src), once)
    assert tags(once) == ["a", "b", "c", "d"]
    assert tags(twice) == tags(once)


@mark_rendering
def test_spanless_primary_treats_all_sources_as_other() -> None:
    """Without a primary source every located item is ordered by name."""
    b = TextSource("b", "")
    a = TextSource("a", "")
    items = [Item("b", Span(1, 0, 1, b)), Item("a", Span(1, 0, 1, a))]

    assert tags(sort_secondaries(None, items)) == ["a", "b"]
