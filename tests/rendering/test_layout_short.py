# spanmark:header:start
#
#   project      : SpanMark
#   file         : test_layout_short.py
#   file_relpath : tests/rendering/test_layout_short.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# spanmark:header:end

"""Short layout: one ``name:line:start:end: Label: message`` line per diagnostic."""

from __future__ import annotations

from spanmark.config.model import RenderStyle
from spanmark.diagnostic.location import Severity, Span, TextSource
from spanmark.diagnostic.model import Diagnostic
from tests.conftest import mark_rendering, plain_config

SHORT = plain_config(style=RenderStyle.SHORT)


@mark_rendering
def test_short_mode_single_line() -> None:
    """A childless diagnostic renders exactly one line."""
    src = TextSource("F", 'let x = "hi";\n')
    diag = Diagnostic.error(
        "type mismatch", "expected int, got string", code="E010", span=Span(4, 9, 13, src)
    )
    assert diag.render(SHORT) == "F:4:9:13: Error(E010): type mismatch\n"


@mark_rendering
def test_short_mode_flattens_and_sorts_secondaries() -> None:
    """Secondaries follow the primary in render order, nesting ignored."""
    src = TextSource("F", "x\n")
    other = TextSource("G", "y\n")
    diag = (
        Diagnostic.error("boom", span=Span(3, 0, 2, src))
        .with_note("no location")
        .with_child(Diagnostic.help("elsewhere", span=Span(1, 0, 1, other)))
        .with_note("earlier", Span(1, 4, 5, src))
    )
    assert diag.render(SHORT).splitlines() == [
        "F:3:0:2: Error: boom",
        "F:1:4:5: Note: earlier",
        "G:1:0:1: Help: elsewhere",
        "Note: no location",
    ]


@mark_rendering
def test_short_mode_without_span_omits_location() -> None:
    """Spans without a source drop the location prefix."""
    assert Diagnostic.warning("careful").render(SHORT) == "Warning: careful\n"


@mark_rendering
def test_short_mode_replaces_newlines_with_separator() -> None:
    """Embedded newlines become the configured separator."""
    diag = Diagnostic.error("one\ntwo")
    assert diag.render(SHORT) == "Error: one two\n"
    assert diag.render(plain_config(style=RenderStyle.SHORT, short_separator=" | ")) == (
        "Error: one | two\n"
    )


@mark_rendering
def test_short_mode_falls_back_to_submessage() -> None:
    """A secondary with only a submessage still shows text."""
    src = TextSource("F", "x\n")
    diag = Diagnostic.error("e", span=Span(1, 0, 1, src)).with_child(
        Diagnostic(Severity.NOTE, "", "only sub", span=Span(1, 0, 1, src))
    )
    assert diag.render(SHORT).splitlines()[1] == "F:1:0:1: Note: only sub"


@mark_rendering
def test_short_mode_empty_text_prints_label_only() -> None:
    """No message at all leaves just the severity label."""
    assert Diagnostic.help("").render(SHORT) == "Help\n"
