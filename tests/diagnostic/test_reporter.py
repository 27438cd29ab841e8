# spanmark:header:start
#
#   project      : SpanMark
#   file         : test_reporter.py
#   file_relpath : tests/diagnostic/test_reporter.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# spanmark:header:end

"""Reporter: collecting, echoing and counting diagnostics."""

from __future__ import annotations

import io

from spanmark.constants import ABORT_MESSAGE
from spanmark.diagnostic.location import Severity
from spanmark.diagnostic.model import Diagnostic
from spanmark.diagnostic.reporter import Reporter, ReportStats, compute_report_stats
from tests.conftest import mark_diagnostic, plain_config


def make_reporter(*, echo: bool = True) -> tuple[Reporter, io.StringIO]:
    sink = io.StringIO()
    return Reporter(sink, plain_config(), echo=echo), sink


@mark_diagnostic
def test_report_echoes_and_stores() -> None:
    """Reported diagnostics are printed immediately and kept in order."""
    reporter, sink = make_reporter()
    first = reporter.report(Diagnostic.warning("w"))
    reporter.report_message(Severity.NOTE, "n")

    assert first.message == "w"
    assert sink.getvalue() == "Warning: w\nNote: n\n"
    assert [d.message for d in reporter] == ["w", "n"]
    assert len(reporter) == 2


@mark_diagnostic
def test_report_without_echo_is_silent() -> None:
    """With echo off nothing is printed until ``print_all``."""
    reporter, sink = make_reporter(echo=False)
    reporter.report(Diagnostic.error("a"))
    reporter.report(Diagnostic.error("b"))
    assert sink.getvalue() == ""

    reporter.print_all()
    assert sink.getvalue() == "Error: a\n\nError: b\n"


@mark_diagnostic
def test_report_internal_prints_even_without_echo() -> None:
    """Internal errors always print, followed by a blank line."""
    reporter, sink = make_reporter(echo=False)
    reporter.report_internal("compiler bug")
    assert sink.getvalue() == "Internal Error: compiler bug\n\n"
    assert reporter.has_errors()


@mark_diagnostic
def test_report_abort() -> None:
    """The abort note uses the fixed abort message."""
    reporter, sink = make_reporter()
    reporter.report_abort()
    assert sink.getvalue() == f"Note: {ABORT_MESSAGE}\n"
    assert not reporter.has_errors()


@mark_diagnostic
def test_stats_count_top_level_reports_only() -> None:
    """Children of a reported diagnostic are not counted separately."""
    reporter, _ = make_reporter(echo=False)
    reporter.report(Diagnostic.error("e").with_note("n").with_help("h"))
    reporter.report_message(Severity.WARNING, "w")
    reporter.report_message(Severity.WARNING, "w2")

    stats = reporter.stats()
    assert stats == ReportStats(n_error=1, n_warning=2)
    assert stats.total == 3
    assert stats.n_failures == 1
    assert reporter.to_dict() == {
        "internal_error": 0,
        "error": 1,
        "warning": 2,
        "note": 0,
        "help": 0,
        "total": 3,
    }


@mark_diagnostic
def test_has_errors_ignores_warnings() -> None:
    """Warnings, notes and help never fail a run."""
    reporter, _ = make_reporter(echo=False)
    for severity in (Severity.WARNING, Severity.NOTE, Severity.HELP):
        reporter.report_message(severity, "x")
    assert not reporter.has_errors()
    reporter.report_message(Severity.ERROR, "x")
    assert reporter.has_errors()


@mark_diagnostic
def test_clear_forgets_everything() -> None:
    """After ``clear`` the reporter is empty."""
    reporter, _ = make_reporter(echo=False)
    reporter.report(Diagnostic.error("x"))
    reporter.clear()
    assert len(reporter) == 0
    assert not reporter.has_errors()
    assert reporter.stats().total == 0


@mark_diagnostic
def test_compute_report_stats_empty() -> None:
    """No diagnostics means all-zero counts."""
    assert compute_report_stats([]) == ReportStats()


@mark_diagnostic
def test_print_all_to_other_sink() -> None:
    """``print_all`` accepts an explicit sink."""
    reporter, sink = make_reporter(echo=False)
    reporter.report(Diagnostic.help("h"))
    other = io.StringIO()
    reporter.print_all(other)
    assert other.getvalue() == "Help: h\n"
    assert sink.getvalue() == ""
