# spanmark:header:start
#
#   project      : SpanMark
#   file         : test_overlap.py
#   file_relpath : tests/rendering/test_overlap.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# spanmark:header:end

"""Overlap resolver: row assignment, connectors and message rows."""

from __future__ import annotations

from spanmark.config.model import Glyphs
from spanmark.rendering.overlap import Annotation, assign_rows, coalesce, resolve_overlaps
from spanmark.rendering.styling import row_text
from tests.conftest import mark_rendering

GLYPHS = Glyphs()


def rows_text(annotations: list[Annotation], text: str, **kwargs: bool) -> list[str]:
    return [row_text(r) for r in resolve_overlaps(annotations, text, GLYPHS, 4, **kwargs)]


@mark_rendering
def test_staggered_pair_uses_two_rows() -> None:
    """B starts inside A, so B sits one row deeper with a connector for A."""
    a = Annotation.from_text(2, 4, "A")
    b = Annotation.from_text(3, 6, "B")
    run = [b, a]  # render order: descending start

    assert assign_rows(run) == [1, 0]
    assert rows_text(run, "ab(cd)ef") == [
        "  ~~",
        "  │~~~",
        "  │╰ B",
        "  ╰ A",
    ]


@mark_rendering
def test_disjoint_annotations_share_row_zero() -> None:
    """Non-overlapping ranges stay on one row."""
    left = Annotation.from_text(0, 2, "left")
    right = Annotation.from_text(4, 6, "right")
    run = [right, left]

    assert assign_rows(run) == [0, 0]
    assert rows_text(run, "abcdefgh") == [
        "~~  ~~",
        "│   ╰ right",
        "╰ left",
    ]


@mark_rendering
def test_three_staggered_annotations_stack_deeper() -> None:
    """Each start inside the previous range pushes one row further down."""
    a = Annotation.from_text(0, 3, "a")
    b = Annotation.from_text(1, 4, "b")
    c = Annotation.from_text(2, 5, "c")

    assert assign_rows([c, b, a]) == [2, 1, 0]


@mark_rendering
def test_nested_range_goes_below_its_container() -> None:
    """A range starting inside a longer one is drawn below it."""
    outer = Annotation.from_text(0, 6, "outer")
    inner = Annotation.from_text(2, 3, "inner")

    assert assign_rows([inner, outer]) == [1, 0]


@mark_rendering
def test_equal_starts_put_longer_span_first() -> None:
    """On equal starts the run order (ascending end) decides the nesting."""
    short = Annotation.from_text(1, 2, "short")
    long = Annotation.from_text(1, 5, "long")

    assert assign_rows([short, long]) == [1, 0]


@mark_rendering
def test_single_annotation_is_inline() -> None:
    """A lone annotation puts its message on the underline row."""
    ann = Annotation.from_text(2, 4, "msg\nmore")
    assert rows_text([ann], "abcdef") == ["  ~~ msg", "     more"]
    assert rows_text([ann], "abcdef", inline_single=False) == ["  ~~", "  ╰ msg", "    more"]


@mark_rendering
def test_underline_repeats_under_tabs() -> None:
    """A glyph under a tab covers the tab's visual width."""
    ann = Annotation.from_text(0, 2, "t")
    assert rows_text([ann], "\tab") == ["~~~~~ t"]


@mark_rendering
def test_multiline_message_keeps_connectors() -> None:
    """Continuation rows repeat the lead connectors without a corner."""
    a = Annotation.from_text(0, 1, "a")
    b = Annotation.from_text(3, 4, "b1\nb2")
    assert rows_text([b, a], "abcd") == [
        "~  ~",
        "│  ╰ b1",
        "│    b2",
        "╰ a",
    ]


@mark_rendering
def test_coalesce_merges_identical_ranges() -> None:
    """Identical ranges merge into one annotation with stacked messages."""
    first = Annotation.from_text(1, 3, "first")
    second = Annotation.from_text(1, 3, "second")
    other = Annotation.from_text(0, 1, "other")

    merged = coalesce([first, second, other])
    assert [m.lines for m in merged] == [("first", "second"), ("other",)]
    assert rows_text([first, second], "abcd", coalesce_identical=True) == [
        " ~~ first",
        "    second",
    ]


@mark_rendering
def test_empty_run_yields_no_rows() -> None:
    """Nothing to draw means no rows."""
    assert resolve_overlaps([], "abc", GLYPHS, 4) == []
