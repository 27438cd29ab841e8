# spanmark:header:start
#
#   project      : SpanMark
#   file         : test_styling.py
#   file_relpath : tests/rendering/test_styling.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# spanmark:header:end

"""Segments, row trimming, the styler and color-mode resolution."""

from __future__ import annotations

import io

import pytest

from spanmark.rendering.color import (
    INHERIT,
    ColorMode,
    is_known_color,
    resolve_color_mode,
    sink_isatty,
)
from spanmark.rendering.styling import Segment, Styler, row_text, trim_row
from tests.conftest import mark_rendering


@mark_rendering
def test_trim_row_drops_trailing_blanks() -> None:
    """Trailing blank segments go, and the last kept segment is right-stripped."""
    row = [Segment("ab"), Segment("cd  ", "red"), Segment("   ")]
    trimmed = trim_row(row)
    assert row_text(trimmed) == "abcd"
    assert trimmed[-1].color == "red"
    assert trim_row([Segment("  ")]) == []


@mark_rendering
def test_disabled_styler_returns_plain_text() -> None:
    """Without color the joined row is exactly the concatenated text."""
    styler = Styler(enabled=False)
    row = [Segment("Error:", INHERIT, bold=True), Segment(" boom")]
    assert styler.join(row, inherit="red") == "Error: boom"


@mark_rendering
def test_enabled_styler_resolves_inherit_and_bright_names() -> None:
    """`INHERIT` takes the caller's color, and ``bright_*`` names paint as bright colors."""
    styler = Styler(enabled=True)
    painted = styler.paint("x", INHERIT, inherit="red")
    assert painted == "\x1b[31mx\x1b[39m"
    assert styler.paint("x", "bright_black", bold=True, inherit="red") == (
        "\x1b[90m\x1b[1mx\x1b[39m\x1b[22m"
    )


@mark_rendering
def test_enabled_styler_ignores_unknown_colors() -> None:
    """Unknown colors degrade to unstyled text (or bold only)."""
    styler = Styler(enabled=True)
    assert styler.paint("x", "mauve") == "x"
    assert styler.paint("x", "mauve", bold=True) == "\x1b[1mx\x1b[22m"
    assert styler.paint("x", "reset") == "x"
    assert styler.paint("", "red") == ""


@mark_rendering
def test_is_known_color() -> None:
    """Empty, inherit and click color names are accepted."""
    assert is_known_color(None)
    assert is_known_color(INHERIT)
    assert is_known_color("bright_black")
    assert not is_known_color("mauve")


@mark_rendering
def test_sink_isatty() -> None:
    """Plain buffers are not terminals; missing sinks neither."""
    assert sink_isatty(io.StringIO()) is False
    assert sink_isatty(None) is False


@mark_rendering
def test_resolve_color_mode_override_wins(monkeypatch: pytest.MonkeyPatch) -> None:
    """Explicit ALWAYS / NEVER beat the environment."""
    monkeypatch.setenv("NO_COLOR", "1")
    assert resolve_color_mode(color_mode_override=ColorMode.ALWAYS) is True
    monkeypatch.setenv("FORCE_COLOR", "1")
    assert resolve_color_mode(color_mode_override=ColorMode.NEVER, output_isatty=True) is False


@mark_rendering
def test_resolve_color_mode_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """FORCE_COLOR enables, NO_COLOR disables, otherwise the TTY decides."""
    assert resolve_color_mode(color_mode_override=ColorMode.AUTO, output_isatty=True) is True
    assert resolve_color_mode(color_mode_override=None) is False

    monkeypatch.setenv("NO_COLOR", "")
    assert resolve_color_mode(color_mode_override=ColorMode.AUTO, output_isatty=True) is False

    monkeypatch.setenv("FORCE_COLOR", "1")
    assert resolve_color_mode(color_mode_override=None, output_isatty=False) is True

    monkeypatch.setenv("FORCE_COLOR", "0")
    assert resolve_color_mode(color_mode_override=None, output_isatty=True) is False
