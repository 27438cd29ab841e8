# spanmark:header:start
#
#   project      : SpanMark
#   file         : logging.py
#   file_relpath : src/spanmark/config/logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# spanmark:header:end

"""Logging for SpanMark: a TRACE level and level-colored stderr output.

Render stages log their inner steps at TRACE (line fetches, overlap rows,
reporter queueing), so ``SPANMARK_LOG_LEVEL=TRACE`` or ``spanmark -vvv`` shows
how a diagnostic was laid out.

Only the ``spanmark`` logger hierarchy is configured by `setup_logging`; an
application that embeds the render core keeps full control of the root logger.
Logs go to stderr and never interleave with rendered diagnostics on stdout.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Any, Callable, Final, cast

from yachalk import chalk

if TYPE_CHECKING:
    from typing import TextIO

TRACE_LEVEL: Final[int] = logging.DEBUG - 5

LOG_LEVEL_ENV_VAR: Final[str] = "SPANMARK_LOG_LEVEL"

PACKAGE_LOGGER: Final[str] = "spanmark"

LOG_FORMAT: Final[str] = "%(level_tag)s %(message)s"
DEBUG_LOG_FORMAT: Final[str] = "%(level_tag)s %(name)s:%(lineno)d %(message)s"


class SpanmarkLogger(logging.Logger):
    """Logger with a `trace` method for per-row render details."""

    def trace(self, msg: object, *args: object, **kwargs: Any) -> None:
        """Log ``msg % args`` at TRACE level."""
        if self.isEnabledFor(TRACE_LEVEL):
            kwargs.setdefault("stacklevel", 2)
            self._log(TRACE_LEVEL, msg, args, **kwargs)


logging.addLevelName(TRACE_LEVEL, "TRACE")
logging.setLoggerClass(SpanmarkLogger)


# First matching floor wins.
_LEVEL_PAINTERS: Final[tuple[tuple[int, Callable[..., str]], ...]] = (
    (logging.ERROR, chalk.red_bright),
    (logging.WARNING, chalk.yellow),
    (logging.INFO, chalk.green),
    (logging.DEBUG, chalk.gray),
    (TRACE_LEVEL, chalk.blue),
)


class LevelTagFormatter(logging.Formatter):
    """Formatter that colors the ``[LEVEL]`` tag and keeps the message plain.

    The tag is exposed to format strings as ``%(level_tag)s``.
    """

    def format(self, record: logging.LogRecord) -> str:
        paint = next(
            (painter for floor, painter in _LEVEL_PAINTERS if record.levelno >= floor),
            chalk.dim,
        )
        record.level_tag = paint(f"[{record.levelname}]")
        return super().format(record)


def resolve_env_log_level() -> int | None:
    """Return the level named by ``SPANMARK_LOG_LEVEL``.

    Both level names (``trace``, ``DEBUG``, ``warn``...) and numbers are accepted.

    Returns:
        int | None: The level, or None when the variable is unset or names no
        known level.
    """
    raw = os.environ.get(LOG_LEVEL_ENV_VAR, "").strip().upper()
    if not raw:
        return None
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw)
    return level if isinstance(level, int) else None


def setup_logging(level: int | None = None, stream: TextIO | None = None) -> None:
    """Attach a single colored handler to the ``spanmark`` logger.

    Calling this again replaces the previous handler, so the CLI can reconfigure
    logging on every invocation.

    Args:
        level (int | None): Level to log at. When None, ``SPANMARK_LOG_LEVEL`` is
            consulted, and logging stays at CRITICAL if that is unset.
        stream (TextIO | None): Destination stream. Defaults to `sys.stderr`.
    """
    if level is None:
        level = resolve_env_log_level() or logging.CRITICAL

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(LevelTagFormatter(LOG_FORMAT if level >= logging.INFO else DEBUG_LOG_FORMAT))
    package_logger.addHandler(handler)


def get_logger(name: str) -> SpanmarkLogger:
    """Return the `SpanmarkLogger` for ``name`` (normally a module's ``__name__``)."""
    return cast("SpanmarkLogger", logging.getLogger(name))
