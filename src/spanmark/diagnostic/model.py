# spanmark:header:start
#
#   project      : SpanMark
#   file         : model.py
#   file_relpath : src/spanmark/diagnostic/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# spanmark:header:end

"""Arena-backed diagnostic tree.

A diagnostic is a primary message with an optional span plus an ordered list of
secondary diagnostics (notes, help, nested diagnostics), each with its own
optional span, possibly in another source.

Sections:
    * DiagnosticNode: plain record stored in an arena.
    * DiagnosticArena: owns the nodes of one tree; children are index lists.
    * Diagnostic: lightweight handle ``(arena, index)`` exposing the builder
      surface and the render entry points.

Lifecycle:
    A diagnostic is built once through append-only calls (``with_note``,
    ``with_help``, ``with_child``), then rendered any number of times. The only
    mutation performed by rendering is the in-place, stable, idempotent sort of
    the primary's child list.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from spanmark.config.logging import get_logger
from spanmark.config.model import DEFAULT_SEVERITY_STYLES, get_default_config
from spanmark.diagnostic.location import Severity
from spanmark.rendering.color import resolve_color_mode, sink_isatty
from spanmark.rendering.layout import LayoutEngine
from spanmark.rendering.sorter import sort_secondaries
from spanmark.rendering.styling import Styler

if TYPE_CHECKING:
    from collections.abc import Iterator
    from typing import TextIO

    from spanmark.config.logging import SpanmarkLogger
    from spanmark.config.model import RenderConfig
    from spanmark.diagnostic.location import Span


logger: SpanmarkLogger = get_logger(__name__)


@dataclass
class DiagnosticNode:
    """One diagnostic record inside a `DiagnosticArena`."""

    severity: Severity
    message: str = ""
    submessage: str = ""
    code: str | None = None
    span: Span | None = None
    children: list[int] = field(default_factory=lambda: [])


class DiagnosticArena:
    """Flat storage for the nodes of one diagnostic tree."""

    def __init__(self) -> None:
        self.nodes: list[DiagnosticNode] = []

    def add(self, node: DiagnosticNode) -> int:
        """Store ``node`` and return its index."""
        self.nodes.append(node)
        return len(self.nodes) - 1

    def node(self, index: int) -> DiagnosticNode:
        """Return the node stored at ``index``."""
        return self.nodes[index]

    def copy_subtree(self, other: DiagnosticArena, index: int) -> int:
        """Copy the subtree rooted at ``other.nodes[index]`` into this arena.

        Args:
            other (DiagnosticArena): Arena holding the subtree.
            index (int): Root of the subtree in ``other``.

        Returns:
            int: Index of the copied root in this arena.
        """
        src = other.node(index)
        root = self.add(
            DiagnosticNode(src.severity, src.message, src.submessage, src.code, src.span)
        )
        stack: list[tuple[int, int]] = [(index, root)]
        while stack:
            src_index, dst_index = stack.pop()
            for child_index in other.node(src_index).children:
                child = other.node(child_index)
                copied = self.add(
                    DiagnosticNode(
                        child.severity, child.message, child.submessage, child.code, child.span
                    )
                )
                self.node(dst_index).children.append(copied)
                stack.append((child_index, copied))
        return root

    def __len__(self) -> int:
        return len(self.nodes)


class Diagnostic:
    """Handle on one node of a diagnostic tree.

    Args:
        severity (Severity): Severity of the diagnostic.
        message (str): Headline message (printed in the header line).
        submessage (str): Span-specific message (printed next to the marker).
        code (str | None): Optional diagnostic code, shown as ``Error(E010)``.
        span (Span | None): Optional location; a span without source means
            "no location".

    Example:
        ```python
        src = TextSource("main.txt", text)
        Diagnostic.error("type mismatch", "expected int", code="E010", span=Span(4, 9, 13, src))
            .with_note("declared here", Span(2, 4, 5, src))
            .print()
        ```
    """

    __slots__ = ("arena", "index")

    def __init__(
        self,
        severity: Severity,
        message: str = "",
        submessage: str = "",
        *,
        code: str | None = None,
        span: Span | None = None,
    ) -> None:
        self.arena = DiagnosticArena()
        self.index = self.arena.add(DiagnosticNode(severity, message, submessage, code, span))

    @classmethod
    def _handle(cls, arena: DiagnosticArena, index: int) -> Diagnostic:
        obj = cls.__new__(cls)
        obj.arena = arena
        obj.index = index
        return obj

    # ----------------------------- Factories ------------------------------
    @classmethod
    def error(
        cls, message: str, submessage: str = "", *, code: str | None = None, span: Span | None = None
    ) -> Diagnostic:
        """Create an ``Error`` diagnostic."""
        return cls(Severity.ERROR, message, submessage, code=code, span=span)

    @classmethod
    def warning(
        cls, message: str, submessage: str = "", *, code: str | None = None, span: Span | None = None
    ) -> Diagnostic:
        """Create a ``Warning`` diagnostic."""
        return cls(Severity.WARNING, message, submessage, code=code, span=span)

    @classmethod
    def note(
        cls, message: str, submessage: str = "", *, code: str | None = None, span: Span | None = None
    ) -> Diagnostic:
        """Create a ``Note`` diagnostic."""
        return cls(Severity.NOTE, message, submessage, code=code, span=span)

    @classmethod
    def help(
        cls, message: str, submessage: str = "", *, code: str | None = None, span: Span | None = None
    ) -> Diagnostic:
        """Create a ``Help`` diagnostic."""
        return cls(Severity.HELP, message, submessage, code=code, span=span)

    @classmethod
    def internal(
        cls, message: str, submessage: str = "", *, code: str | None = None, span: Span | None = None
    ) -> Diagnostic:
        """Create an ``Internal Error`` diagnostic."""
        return cls(Severity.INTERNAL_ERROR, message, submessage, code=code, span=span)

    # ----------------------------- Accessors ------------------------------
    @property
    def node(self) -> DiagnosticNode:
        """Return the underlying arena record."""
        return self.arena.node(self.index)

    @property
    def severity(self) -> Severity:
        """Return the severity."""
        return self.node.severity

    @property
    def message(self) -> str:
        """Return the headline message."""
        return self.node.message

    @property
    def submessage(self) -> str:
        """Return the span-specific message."""
        return self.node.submessage

    @property
    def code(self) -> str | None:
        """Return the diagnostic code, if any."""
        return self.node.code

    @property
    def span(self) -> Span | None:
        """Return the span, if any."""
        return self.node.span

    @property
    def has_location(self) -> bool:
        """Return True if the span references a source."""
        span = self.node.span
        return span is not None and span.has_location

    @property
    def children(self) -> list[Diagnostic]:
        """Return handles on the direct children, in current order."""
        return [Diagnostic._handle(self.arena, i) for i in self.node.children]

    @property
    def label(self) -> str:
        """Return the default severity label, e.g. ``"Error(E010)"``."""
        name = DEFAULT_SEVERITY_STYLES[self.severity].name
        return f"{name}({self.code})" if self.code else name

    @property
    def annotation_text(self) -> str:
        """Return the text drawn next to this diagnostic's span marker."""
        return self.node.submessage or self.node.message

    @property
    def note_text(self) -> str:
        """Return the text used for bulleted notes and short-mode lines."""
        return self.node.message or self.node.submessage

    def walk(self) -> Iterator[Diagnostic]:
        """Yield every descendant depth-first, in current child order."""
        stack = list(reversed(self.node.children))
        while stack:
            index = stack.pop()
            yield Diagnostic._handle(self.arena, index)
            stack.extend(reversed(self.arena.node(index).children))

    # ------------------------------ Builder -------------------------------
    def with_secondary(
        self,
        severity: Severity,
        message: str,
        span: Span | None = None,
        *,
        code: str | None = None,
    ) -> Diagnostic:
        """Append a child diagnostic and return ``self``."""
        child = self.arena.add(DiagnosticNode(severity, message, "", code, span))
        self.node.children.append(child)
        return self

    def with_note(self, message: str, span: Span | None = None) -> Diagnostic:
        """Append a ``Note`` child and return ``self``."""
        return self.with_secondary(Severity.NOTE, message, span)

    def with_help(self, message: str, span: Span | None = None) -> Diagnostic:
        """Append a ``Help`` child and return ``self``."""
        return self.with_secondary(Severity.HELP, message, span)

    def with_child(self, diagnostic: Diagnostic) -> Diagnostic:
        """Adopt ``diagnostic`` (and its subtree) as a child and return ``self``.

        A diagnostic from another arena is copied, so later changes to it do not
        leak into this tree.
        """
        if diagnostic.arena is self.arena:
            index = diagnostic.index
        else:
            index = self.arena.copy_subtree(diagnostic.arena, diagnostic.index)
        self.node.children.append(index)
        return self

    def sort_children(self) -> Diagnostic:
        """Sort the direct children in place into render order and return ``self``."""
        node = self.node
        ordered = sort_secondaries(node.span, self.children)
        node.children[:] = [child.index for child in ordered]
        return self

    # ------------------------------ Render --------------------------------
    def render(self, config: RenderConfig | None = None, *, color: bool = False) -> str:
        """Render this diagnostic to a string (newline-terminated).

        Args:
            config (RenderConfig | None): Render configuration; the process
                default applies when omitted.
            color (bool): Whether to emit ANSI styles.

        Returns:
            str: The rendered text.
        """
        engine = LayoutEngine(config or get_default_config(), Styler(enabled=color))
        lines = engine.render(self)
        return "".join(f"{line}\n" for line in lines)

    def print(self, sink: TextIO | None = None, config: RenderConfig | None = None) -> Diagnostic:
        """Render this diagnostic to ``sink`` and return ``self``.

        Args:
            sink (TextIO | None): Output stream; defaults to ``sys.stdout``.
            config (RenderConfig | None): Render configuration; the process
                default applies when omitted.

        Returns:
            Diagnostic: ``self``, for chaining.
        """
        out = sink if sink is not None else sys.stdout
        cfg = config or get_default_config()
        color = resolve_color_mode(color_mode_override=cfg.color_mode, output_isatty=sink_isatty(out))
        out.write(self.render(cfg, color=color))
        return self

    # ------------------------------ Dunders -------------------------------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Diagnostic):
            return NotImplemented
        return self.arena is other.arena and self.index == other.index

    def __hash__(self) -> int:
        return hash((id(self.arena), self.index))

    def __repr__(self) -> str:
        return f"Diagnostic({self.severity.value}, {self.message!r}, span={self.span!r})"
