# spanmark:header:start
#
#   project      : SpanMark
#   file         : location.py
#   file_relpath : src/spanmark/diagnostic/location.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# spanmark:header:end

"""Location primitives: source references, spans and severities.

Sections:
    * SourceRef: structural interface for anything that can hand out a line of text.
    * FileSource / TextSource: file-backed and in-memory source references.
    * Span: immutable half-open ``[start, end)`` column range on one source line.
    * Severity: diagnostic severity (drives naming and coloring, never ordering).

Source references are shared, never copied: two spans point at "the same file"
only when they reference the same `SourceRef` object.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from spanmark.config.logging import get_logger

if TYPE_CHECKING:
    from spanmark.config.logging import SpanmarkLogger


logger: SpanmarkLogger = get_logger(__name__)


@runtime_checkable
class SourceRef(Protocol):
    """Structural interface for a source of text lines.

    Implementations must never raise from `get_line`: lines that cannot be read
    (past end-of-file, unreadable file, ``n < 1``) are returned as ``""``.
    """

    @property
    def name(self) -> str:
        """Return the display name shown in borders and short-mode prefixes."""
        ...

    def get_line(self, n: int) -> str:
        """Return the text of 1-based line ``n`` without its line terminator."""
        ...


class TextSource:
    """In-memory source reference.

    Args:
        name (str): Display name for the source.
        text (str): Full source text; split on universal newlines.
    """

    def __init__(self, name: str, text: str) -> None:
        self._name = name
        self._lines: list[str] = text.splitlines()

    @property
    def name(self) -> str:
        """Return the display name of this source."""
        return self._name

    def get_line(self, n: int) -> str:
        """Return line ``n`` (1-based), or ``""`` when out of range."""
        if 1 <= n <= len(self._lines):
            return self._lines[n - 1]
        return ""

    def __repr__(self) -> str:
        return f"TextSource({self._name!r})"


class FileSource:
    """File-backed source reference with a per-instance line cache.

    The file is read once, on the first `get_line` call. Read or decode
    failures are logged and the source then behaves like an empty file.

    Args:
        path (Path | str): Path of the file on disk.
        display_name (str | None): Name shown in output; defaults to ``str(path)``.
        encoding (str): Text encoding used to decode the file.
    """

    def __init__(
        self,
        path: Path | str,
        display_name: str | None = None,
        *,
        encoding: str = "utf-8",
    ) -> None:
        self.path: Path = Path(path)
        self._name: str = display_name if display_name is not None else str(path)
        self._encoding = encoding
        self._lines: list[str] | None = None

    @property
    def name(self) -> str:
        """Return the display name of this source."""
        return self._name

    def _load(self) -> list[str]:
        if self._lines is None:
            try:
                self._lines = self.path.read_text(encoding=self._encoding).splitlines()
                logger.trace("Cached %d line(s) from %s", len(self._lines), self.path)
            except (OSError, UnicodeDecodeError) as exc:
                logger.warning("Cannot read source %s: %s", self.path, exc)
                self._lines = []
        return self._lines

    def get_line(self, n: int) -> str:
        """Return line ``n`` (1-based), or ``""`` when out of range or unreadable."""
        lines = self._load()
        if 1 <= n <= len(lines):
            return lines[n - 1]
        return ""

    def __repr__(self) -> str:
        return f"FileSource({str(self.path)!r})"


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open column range ``[start, end)`` on one line of one source.

    Columns are 0-based character indices into the raw line (not visual columns);
    lines are 1-based. A span whose ``source`` is ``None`` denotes "no location".

    Invariant:
        ``end > start``. A missing or non-increasing ``end`` is normalized to
        ``start + 1`` at construction; negative values clamp to ``0``.
    """

    line: int
    start: int
    end: int | None = None
    source: SourceRef | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        line = max(self.line, 0)
        start = max(self.start, 0)
        end = self.end
        if end is None or end <= start:
            end = start + 1
        object.__setattr__(self, "line", line)
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)

    @staticmethod
    def at(line: int, column: int, source: SourceRef | None = None) -> Span:
        """Create a one-column span at ``column`` on ``line``."""
        return Span(line, column, column + 1, source)

    @property
    def stop(self) -> int:
        """Return ``end`` as a plain ``int`` (always set after construction)."""
        return self.end if self.end is not None else self.start + 1

    @property
    def width(self) -> int:
        """Return the number of raw columns covered by this span."""
        return self.stop - self.start

    @property
    def has_location(self) -> bool:
        """Return True if this span references a source."""
        return self.source is not None

    @property
    def key(self) -> tuple[int, int, int, int]:
        """Return the coalescing key: source identity, line, start and end."""
        return (id(self.source), self.line, self.start, self.stop)

    def same_line(self, other: Span) -> bool:
        """Return True if both spans sit on the same line of the same source."""
        return self.source is other.source and self.line == other.line

    def same_span(self, other: Span) -> bool:
        """Return True if both spans cover the same columns of the same source line."""
        return self.key == other.key

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Span):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)


class Severity(Enum):
    """Severity of a diagnostic.

    Severities select the default display name and color of a diagnostic.
    They never influence the order in which secondaries are rendered.
    """

    INTERNAL_ERROR = "internal_error"
    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"
    HELP = "help"

    @classmethod
    def parse(cls, text: str) -> Severity:
        """Parse a severity name, case-insensitively.

        Accepts the enum values as well as ``"internal"`` and ``"internal error"``.

        Args:
            text (str): Severity name.

        Returns:
            Severity: The matching severity.

        Raises:
            ValueError: If ``text`` names no known severity.
        """
        key = text.strip().lower().replace("-", "_").replace(" ", "_")
        if key == "internal":
            return cls.INTERNAL_ERROR
        for member in cls:
            if member.value == key:
                return member
        raise ValueError(f"Unknown severity {text!r}")

    @property
    def is_error(self) -> bool:
        """Return True for ERROR and INTERNAL_ERROR."""
        return self in (Severity.ERROR, Severity.INTERNAL_ERROR)
