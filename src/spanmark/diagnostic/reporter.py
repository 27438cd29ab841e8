# spanmark:header:start
#
#   project      : SpanMark
#   file         : reporter.py
#   file_relpath : src/spanmark/diagnostic/reporter.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# spanmark:header:end

"""Caller-owned collection of reported diagnostics.

A `Reporter` is created once by the embedding program (a compiler front end,
the ``spanmark render`` command, a test) and passed by reference to whatever
emits diagnostics. It stores every reported diagnostic, optionally echoes it to
its sink as it arrives, and answers "did anything fail?" at the end.

Counts are per *reported* diagnostic: children of a reported diagnostic are part
of its rendering, not separate reports.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from spanmark.config.logging import get_logger
from spanmark.config.model import get_default_config
from spanmark.constants import ABORT_MESSAGE
from spanmark.diagnostic.location import Severity
from spanmark.diagnostic.model import Diagnostic

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from typing import TextIO

    from spanmark.config.logging import SpanmarkLogger
    from spanmark.config.model import RenderConfig
    from spanmark.diagnostic.location import Span

logger: SpanmarkLogger = get_logger(__name__)


@dataclass(frozen=True)
class ReportStats:
    """Aggregated counts of reported diagnostics by severity."""

    n_internal_error: int = 0
    n_error: int = 0
    n_warning: int = 0
    n_note: int = 0
    n_help: int = 0

    @property
    def total(self) -> int:
        """Return the total count of reported diagnostics."""
        return self.n_internal_error + self.n_error + self.n_warning + self.n_note + self.n_help

    @property
    def n_failures(self) -> int:
        """Return the number of ERROR and INTERNAL_ERROR reports."""
        return self.n_internal_error + self.n_error


def compute_report_stats(diagnostics: Iterable[Diagnostic]) -> ReportStats:
    """Return per-severity counts for ``diagnostics`` (top-level only)."""
    counts: dict[Severity, int] = dict.fromkeys(Severity, 0)
    for diagnostic in diagnostics:
        counts[diagnostic.severity] += 1
    return ReportStats(
        n_internal_error=counts[Severity.INTERNAL_ERROR],
        n_error=counts[Severity.ERROR],
        n_warning=counts[Severity.WARNING],
        n_note=counts[Severity.NOTE],
        n_help=counts[Severity.HELP],
    )


@dataclass
class Reporter:
    """Explicit session object collecting the diagnostics of one run.

    Attributes:
        sink (TextIO | None): Output stream; ``sys.stdout`` when None.
        config (RenderConfig | None): Render configuration; the process default
            when None.
        echo (bool): Print each diagnostic as it is reported.
        items (list[Diagnostic]): Reported diagnostics, in report order.
    """

    sink: TextIO | None = None
    config: RenderConfig | None = None
    echo: bool = field(default=True, kw_only=True)
    items: list[Diagnostic] = field(default_factory=lambda: [], kw_only=True)

    @property
    def out(self) -> TextIO:
        """Return the effective output stream."""
        return self.sink if self.sink is not None else sys.stdout

    @property
    def render_config(self) -> RenderConfig:
        """Return the effective render configuration."""
        return self.config if self.config is not None else get_default_config()

    def _add(self, diagnostic: Diagnostic) -> None:
        self.items.append(diagnostic)
        logger.trace("Reporting [%s]: %r", diagnostic.severity.value, diagnostic.message)

    def report(self, diagnostic: Diagnostic) -> Diagnostic:
        """Store ``diagnostic`` (printing it when echoing) and return it.

        Args:
            diagnostic (Diagnostic): A fully built diagnostic.

        Returns:
            Diagnostic: The same diagnostic, for chaining.
        """
        self._add(diagnostic)
        if self.echo:
            diagnostic.print(self.out, self.render_config)
        return diagnostic

    def report_message(
        self,
        severity: Severity,
        message: str,
        submessage: str = "",
        span: Span | None = None,
        code: str | None = None,
    ) -> Diagnostic:
        """Build a childless diagnostic from parts and report it."""
        return self.report(Diagnostic(severity, message, submessage, code=code, span=span))

    def report_internal(self, message: str, span: Span | None = None) -> Diagnostic:
        """Report an internal error; it is printed immediately, then a blank line."""
        diagnostic = Diagnostic.internal(message, span=span)
        self._add(diagnostic)
        diagnostic.print(self.out, self.render_config)
        self.out.write("\n")
        return diagnostic

    def report_abort(self) -> Diagnostic:
        """Report the final "aborting" note."""
        return self.report(Diagnostic.note(ABORT_MESSAGE))

    def print_all(self, sink: TextIO | None = None) -> None:
        """Print every stored diagnostic, separated by one blank line."""
        out = sink if sink is not None else self.out
        for n, diagnostic in enumerate(self.items):
            if n:
                out.write("\n")
            diagnostic.print(out, self.render_config)

    def stats(self) -> ReportStats:
        """Return per-severity counts of the reported diagnostics."""
        return compute_report_stats(self.items)

    def has_errors(self) -> bool:
        """Return True if an ERROR or INTERNAL_ERROR was reported."""
        return any(d.severity.is_error for d in self.items)

    def to_dict(self) -> dict[str, int]:
        """Return a JSON-friendly mapping of counts by severity (plus ``total``)."""
        stats = self.stats()
        return {
            Severity.INTERNAL_ERROR.value: stats.n_internal_error,
            Severity.ERROR.value: stats.n_error,
            Severity.WARNING.value: stats.n_warning,
            Severity.NOTE.value: stats.n_note,
            Severity.HELP.value: stats.n_help,
            "total": stats.total,
        }

    def clear(self) -> None:
        """Forget every stored diagnostic."""
        logger.debug("Clearing %d reported diagnostic(s)", len(self.items))
        self.items.clear()

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)
