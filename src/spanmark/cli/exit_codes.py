# spanmark:header:start
#
#   project      : SpanMark
#   file         : exit_codes.py
#   file_relpath : src/spanmark/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# spanmark:header:end

"""Exit statuses of ``spanmark render`` and the informational commands.

A build step wrapping ``spanmark render`` can tell "the document reported
errors" (1) from "the document could not be used" (65, 66, 74). The non-zero
values other than 1 follow BSD ``sysexits.h``. Click's own parse errors keep
status 2.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit statuses of the SpanMark CLI."""

    SUCCESS = 0
    # At least one Error or InternalError diagnostic was rendered.
    FAILURE = 1

    USAGE_ERROR = 64  # EX_USAGE
    DATA_ERROR = 65  # EX_DATAERR
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    IO_ERROR = 74  # EX_IOERR
    CONFIG_ERROR = 78  # EX_CONFIG
