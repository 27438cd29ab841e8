# spanmark:header:start
#
#   project      : SpanMark
#   file         : errors.py
#   file_relpath : src/spanmark/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# spanmark:header:end

"""Exceptions raised by SpanMark commands.

Each class pins an `ExitCode`; Click prints ``Error: <message>`` to stderr and
exits with that code. Errors in the rendered document itself are not exceptions:
they are diagnostics, and only turn into ``ExitCode.FAILURE`` after rendering.
"""

from __future__ import annotations

import click

from spanmark.cli.exit_codes import ExitCode


class SpanmarkError(click.ClickException):
    """Base class for SpanMark command errors."""

    exit_code = ExitCode.FAILURE


class SpanmarkUsageError(SpanmarkError):
    """Conflicting command-line flags (``-v`` with ``-q``)."""

    exit_code = ExitCode.USAGE_ERROR


class SpanmarkDataError(SpanmarkError):
    """The diagnostic document is not UTF-8, not TOML, or has a bad entry."""

    exit_code = ExitCode.DATA_ERROR


class SpanmarkFileNotFoundError(SpanmarkError):
    """The document or an explicit ``--config`` file does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class SpanmarkIOError(SpanmarkError):
    """The document exists but cannot be read."""

    exit_code = ExitCode.IO_ERROR


class SpanmarkConfigError(SpanmarkError):
    """The packaged default configuration cannot be loaded."""

    exit_code = ExitCode.CONFIG_ERROR
