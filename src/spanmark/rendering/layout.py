# spanmark:header:start
#
#   project      : SpanMark
#   file         : layout.py
#   file_relpath : src/spanmark/rendering/layout.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# spanmark:header:end

"""Layout engine: turns one diagnostic tree into output lines.

Rich mode runs a linear stage sequence:

1. header (``Error(E010): message``), skipped when the message is empty;
2. stop here when the primary has no location;
3. top border with the source name, then blank padding rows;
4. secondaries on the primary's source above the primary line;
5. the primary line with its marker (above or below the code);
6. other secondaries on the primary line;
7. remaining located secondaries, opening a new bordered block per source;
8. bottom border;
9. secondaries without location as bulleted notes.

Between two displayed lines of one block, a single skipped line is shown
verbatim and a larger gap collapses into an ellipsis row.

Short mode prints one ``name:line:start:end: Label: message`` line per
diagnostic (primary first, then every descendant in render order).

The engine is total: unreadable lines render as empty, every style lookup has
a default, and no stage raises for a well-formed diagnostic.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from spanmark.config.logging import get_logger
from spanmark.config.model import RenderStyle
from spanmark.rendering.color import INHERIT
from spanmark.rendering.overlap import Annotation, resolve_overlaps
from spanmark.rendering.snippet import cell_widths, expand_tabs, fetch_line, fill
from spanmark.rendering.sorter import sort_secondaries
from spanmark.rendering.styling import Segment, trim_row

if TYPE_CHECKING:
    from collections.abc import Sequence

    from spanmark.config.logging import SpanmarkLogger
    from spanmark.config.model import RenderConfig
    from spanmark.diagnostic.location import SourceRef, Span
    from spanmark.diagnostic.model import Diagnostic
    from spanmark.rendering.styling import Row, Styler

logger: SpanmarkLogger = get_logger(__name__)


def digit_count(n: int) -> int:
    """Return the number of decimal digits of ``n`` (at least 1)."""
    return len(str(max(n, 0)))


def max_line(primary: Diagnostic, secondaries: Sequence[Diagnostic]) -> int:
    """Return the largest line number among the primary and all secondaries."""
    lines = [d.span.line for d in (primary, *secondaries) if d.span is not None]
    return max(lines, default=0)


class LayoutEngine:
    """Render diagnostics under a fixed `RenderConfig`.

    Args:
        config (RenderConfig): Immutable render configuration.
        styler (Styler): Styling capability (plain text when disabled).
    """

    def __init__(self, config: RenderConfig, styler: Styler) -> None:
        self.config = config
        self.styler = styler

    def render(self, diagnostic: Diagnostic) -> list[str]:
        """Render ``diagnostic`` according to the configured style."""
        if self.config.style == RenderStyle.SHORT:
            return self.render_short(diagnostic)
        return self.render_rich(diagnostic)

    # ------------------------------ Short ---------------------------------
    def render_short(self, diagnostic: Diagnostic) -> list[str]:
        """Render one line per diagnostic, flattening the tree."""
        diagnostic.sort_children()
        secondaries = sort_secondaries(diagnostic.span, list(diagnostic.walk()))
        sep = self.config.short_separator
        out: list[str] = []
        for item in (diagnostic, *secondaries):
            color = self.config.severity_style(item.severity).color
            label = self.config.severity_label(item.severity, item.code)
            row: Row = []
            span = item.span
            if span is not None and span.source is not None:
                row.append(Segment(f"{span.source.name}:{span.line}:{span.start}:{span.stop}: "))
            row.append(Segment(f"{label}:" if item.note_text else label, color, bold=True))
            if item.note_text:
                row.append(Segment(" " + item.note_text.replace("\n", sep)))
            out.append(self.styler.join(row))
        return out

    # ------------------------------ Rich ----------------------------------
    def render_rich(self, diagnostic: Diagnostic) -> list[str]:
        """Render the bordered, annotated listing for ``diagnostic``."""
        return _RichLayout(self, diagnostic).run()


class _RichLayout:
    """Mutable state of one rich render (one diagnostic, one call)."""

    def __init__(self, engine: LayoutEngine, primary: Diagnostic) -> None:
        self.config = engine.config
        self.styler = engine.styler
        self.glyphs = engine.config.glyphs
        self.primary = primary
        primary.sort_children()
        self.secondaries: list[Diagnostic] = sort_secondaries(primary.span, list(primary.walk()))
        self.primary_color = self.config.severity_style(primary.severity).color
        self.border_color = self.config.border_color
        self.digits = digit_count(max_line(primary, self.secondaries))
        self.width = self.digits + self.config.gutter_padding
        self.last_line: int | None = None
        self.out: list[str] = []

    # ----------------------------- Emission -------------------------------
    def emit(self, row: Row) -> None:
        self.out.append(self.styler.join(trim_row(row), inherit=self.primary_color))

    def gutter(self, line: int | None = None) -> Row:
        """Return the gutter cells followed by the bar and one space."""
        if line is None:
            cell = Segment(" " * self.width)
        else:
            number = str(line).rjust(self.digits) + " " * self.config.gutter_padding
            cell = Segment(number, self.border_color)
        return [cell, Segment(self.glyphs.bar, self.border_color), Segment(" ")]

    def emit_blank(self) -> None:
        self.emit(self.gutter())

    def emit_code(self, line: int, text: str) -> None:
        self.emit([*self.gutter(line), Segment(expand_tabs(text, self.config.tab_width))])

    def emit_top_border(self, source: SourceRef) -> None:
        self.emit(
            [
                Segment(" " * self.width),
                Segment(f"{self.glyphs.top_open} ", self.border_color),
                Segment(source.name),
                Segment(f" {self.glyphs.top_close}", self.border_color),
            ]
        )
        for _ in range(self.config.top_padding):
            self.emit_blank()
        self.last_line = None

    def emit_bottom_border(self) -> None:
        rule = fill(self.glyphs.bottom_rule, self.width) + self.glyphs.bottom_corner
        self.emit([Segment(rule, self.border_color)])

    def emit_gap(self, source: SourceRef, line: int) -> None:
        """Bridge from the previously displayed line to ``line``."""
        if self.last_line is not None:
            gap = line - self.last_line
            if gap == 2:
                self.emit_code(line - 1, fetch_line(source, line - 1))
            elif gap > 2:
                self.emit([Segment(self.glyphs.ellipsis.rjust(self.digits), self.border_color)])
        self.last_line = line

    # ----------------------------- Stages ---------------------------------
    def run(self) -> list[str]:
        primary = self.primary
        self.stage_header()
        span = primary.span
        if span is None or span.source is None:
            return self.out

        source = span.source
        self.emit_top_border(source)
        i = self.stage_pre_lines(source, span)
        i = self.stage_primary_line(source, span, i)
        i = self.stage_remaining_lines(source, i)
        self.emit_bottom_border()
        self.stage_trailing_notes(i)
        return self.out

    def stage_header(self) -> None:
        message = self.primary.message
        if not message:
            return
        label = self.config.severity_label(self.primary.severity, self.primary.code)
        lines = message.split("\n")
        self.emit(
            [
                Segment(f"{label}:", INHERIT, bold=True),
                Segment(" "),
                Segment(lines[0], bold=True),
            ]
        )
        indent = " " * (len(label) + 2)
        for line in lines[1:]:
            self.emit([Segment(indent), Segment(line, bold=True)])

    def run_end(self, i: int) -> int:
        """Return the end index of the same-line run starting at ``i``."""
        first = self.secondaries[i].span
        assert first is not None
        j = i + 1
        while j < len(self.secondaries):
            span = self.secondaries[j].span
            if span is None or not span.same_line(first):
                break
            j += 1
        return j

    def emit_line_block(self, source: SourceRef, i: int) -> int:
        """Render the source line of secondary ``i`` and every secondary on it."""
        span = self.secondaries[i].span
        assert span is not None
        j = self.run_end(i)
        self.emit_gap(source, span.line)
        text = fetch_line(source, span.line)
        self.emit_code(span.line, text)
        self.emit_annotations(text, self.secondaries[i:j])
        return j

    def emit_annotations(self, text: str, run: Sequence[Diagnostic]) -> None:
        annotations = [self.annotation(d) for d in run]
        rows = resolve_overlaps(
            annotations,
            text,
            self.glyphs,
            self.config.tab_width,
            coalesce_identical=self.config.coalesce_identical_spans,
            inline_single=self.config.inline_single_annotation,
        )
        for row in rows:
            self.emit([*self.gutter(), *row])

    def annotation(self, diagnostic: Diagnostic) -> Annotation:
        span = diagnostic.span
        assert span is not None
        color = self.config.severity_style(diagnostic.severity).color
        return Annotation.from_text(span.start, span.stop, diagnostic.annotation_text, color)

    def stage_pre_lines(self, source: SourceRef, primary_span: Span) -> int:
        i = 0
        while i < len(self.secondaries):
            span = self.secondaries[i].span
            if span is None or span.source is not source or span.line >= primary_span.line:
                break
            i = self.emit_line_block(source, i)
        return i

    def stage_primary_line(self, source: SourceRef, primary_span: Span, i: int) -> int:
        j = i
        while j < len(self.secondaries):
            span = self.secondaries[j].span
            if span is None or not span.same_line(primary_span):
                break
            j += 1
        same_line = self.secondaries[i:j]
        print_above = bool(same_line)

        self.emit_gap(source, primary_span.line)
        text = fetch_line(source, primary_span.line)
        widths = cell_widths(text, self.config.tab_width, primary_span.stop)
        indent = " " * sum(widths[: primary_span.start])
        marker_width = sum(widths[primary_span.start : primary_span.stop])
        submessage = self.primary.submessage
        sub_lines = submessage.split("\n") if submessage else []

        if print_above:
            for line in sub_lines:
                self.emit([*self.gutter(), Segment(indent), Segment(line, INHERIT, bold=True)])
            self.emit(
                [
                    *self.gutter(),
                    Segment(indent),
                    Segment(fill(self.glyphs.arrow_down, marker_width), INHERIT, bold=True),
                ]
            )
            self.emit_code(primary_span.line, text)
            self.emit_annotations(text, same_line)
            return j

        self.emit_code(primary_span.line, text)
        first = sub_lines[0] if sub_lines else ""
        self.emit(
            [
                *self.gutter(),
                Segment(indent),
                Segment(fill(self.glyphs.arrow_up, marker_width), INHERIT, bold=True),
                Segment(f" {first}", INHERIT, bold=True),
            ]
        )
        hang = " " * (len(indent) + marker_width + 1)
        for line in sub_lines[1:]:
            self.emit([*self.gutter(), Segment(hang), Segment(line, INHERIT, bold=True)])
        return j

    def stage_remaining_lines(self, primary_source: SourceRef, i: int) -> int:
        current = primary_source
        while i < len(self.secondaries):
            span = self.secondaries[i].span
            if span is None or span.source is None:
                break
            if span.source is not current:
                self.emit_bottom_border()
                current = span.source
                self.emit_top_border(current)
            i = self.emit_line_block(current, i)
        return i

    def stage_trailing_notes(self, i: int) -> None:
        pad = Segment(" " * self.width)
        for diagnostic in self.secondaries[i:]:
            label = self.config.severity_label(diagnostic.severity, diagnostic.code)
            color = self.config.severity_style(diagnostic.severity).color
            lines = diagnostic.note_text.split("\n")
            self.emit(
                [
                    pad,
                    Segment(f"{self.glyphs.bullet} {label}:", color, bold=True),
                    Segment(f" {lines[0]}"),
                ]
            )
            hang = " " * (len(label) + 4)
            for line in lines[1:]:
                self.emit([pad, Segment(hang), Segment(line)])
