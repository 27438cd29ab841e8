# spanmark:header:start
#
#   project      : SpanMark
#   file         : test_location.py
#   file_relpath : tests/diagnostic/test_location.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# spanmark:header:end

"""Spans, sources and severities."""

from __future__ import annotations

from pathlib import Path

import pytest

from spanmark.diagnostic.location import FileSource, Severity, SourceRef, Span, TextSource
from tests.conftest import mark_diagnostic, parametrize


@mark_diagnostic
def test_span_normalizes_end() -> None:
    """A missing or non-increasing end becomes ``start + 1``."""
    assert Span(3, 5).end == 6
    assert Span(3, 5, 5).end == 6
    assert Span(3, 5, 2).end == 6
    assert Span(3, 5, 9).end == 9
    assert Span.at(1, 4).width == 1


@mark_diagnostic
def test_span_clamps_negative_values() -> None:
    """Negative lines and columns clamp to zero."""
    span = Span(-1, -3, -2)
    assert (span.line, span.start, span.stop) == (0, 0, 1)


@mark_diagnostic
def test_span_identity_uses_source_object() -> None:
    """Equal text but distinct source objects never compare as the same location."""
    a = TextSource("f", "x")
    b = TextSource("f", "x")

    assert Span(1, 0, 1, a) == Span(1, 0, 1, a)
    assert Span(1, 0, 1, a) != Span(1, 0, 1, b)
    assert Span(1, 0, 1, a).same_line(Span(1, 3, 4, a))
    assert not Span(1, 0, 1, a).same_line(Span(1, 0, 1, b))
    assert Span(1, 0, 1, a).same_span(Span(1, 0, None, a))
    assert not Span(2, 0, 1).has_location


@mark_diagnostic
def test_text_source_lines() -> None:
    """Lines are 1-based and out-of-range lines are empty."""
    src = TextSource("t", "first\nsecond")
    assert isinstance(src, SourceRef)
    assert src.name == "t"
    assert src.get_line(1) == "first"
    assert src.get_line(2) == "second"
    assert src.get_line(3) == ""
    assert src.get_line(0) == ""


@mark_diagnostic
def test_file_source_reads_once(tmp_path: Path) -> None:
    """The file is cached on first access."""
    path = tmp_path / "code.txt"
    path.write_text("alpha\nbeta\n", encoding="utf-8")
    src = FileSource(path, display_name="code.txt")

    assert src.name == "code.txt"
    assert src.get_line(2) == "beta"
    path.write_text("changed\n", encoding="utf-8")
    assert src.get_line(1) == "alpha"


@mark_diagnostic
def test_file_source_missing_file_is_empty(tmp_path: Path) -> None:
    """An unreadable file behaves like an empty one."""
    src = FileSource(tmp_path / "missing.txt")
    assert src.name == str(tmp_path / "missing.txt")
    assert src.get_line(1) == ""


@mark_diagnostic
@parametrize(
    "text,expected",
    [
        ("error", Severity.ERROR),
        ("Warning", Severity.WARNING),
        ("NOTE", Severity.NOTE),
        ("help", Severity.HELP),
        ("internal", Severity.INTERNAL_ERROR),
        ("Internal Error", Severity.INTERNAL_ERROR),
        ("internal-error", Severity.INTERNAL_ERROR),
    ],
)
def test_severity_parse(text: str, expected: Severity) -> None:
    """Severity names parse case-insensitively."""
    assert Severity.parse(text) is expected


@mark_diagnostic
def test_severity_parse_rejects_unknown() -> None:
    """Unknown names raise ValueError."""
    with pytest.raises(ValueError, match="Unknown severity"):
        Severity.parse("fatal")


@mark_diagnostic
def test_severity_is_error() -> None:
    """Only ERROR and INTERNAL_ERROR count as failures."""
    assert [s for s in Severity if s.is_error] == [Severity.INTERNAL_ERROR, Severity.ERROR]
