# spanmark:header:start
#
#   project      : SpanMark
#   file         : loader.py
#   file_relpath : src/spanmark/diagnostic/loader.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# spanmark:header:end

"""Load diagnostics from a TOML document.

Document shape:

```toml
[[diagnostic]]
severity = "error"
code = "E010"
message = "type mismatch"
submessage = "expected int, got string"
span = { file = "main.txt", line = 4, start = 9, end = 13 }

[[diagnostic.children]]
severity = "note"
message = "declared here"
span = { file = "main.txt", line = 2, start = 4 }
```

Children use the same shape and may nest. Relative ``file`` paths resolve
against the document's directory. Every resolved path maps to one shared
`FileSource`, so spans in the same file share source identity.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import toml

from spanmark.config.io import is_toml_table
from spanmark.config.logging import get_logger
from spanmark.diagnostic.location import FileSource, Severity, Span
from spanmark.diagnostic.model import Diagnostic

if TYPE_CHECKING:
    from spanmark.config.io import TomlTable
    from spanmark.config.logging import SpanmarkLogger

logger: SpanmarkLogger = get_logger(__name__)


class DocumentError(ValueError):
    """Raised when a diagnostic document is malformed."""


class DocumentLoader:
    """Build `Diagnostic` trees from parsed TOML tables.

    Args:
        base_dir (Path): Directory against which relative ``file`` paths resolve.
    """

    def __init__(self, base_dir: Path) -> None:
        self.base_dir = base_dir
        self.sources: dict[Path, FileSource] = {}

    def source_for(self, file: str) -> FileSource:
        """Return the shared `FileSource` for ``file``."""
        path = Path(file)
        resolved = (path if path.is_absolute() else self.base_dir / path).resolve()
        source = self.sources.get(resolved)
        if source is None:
            source = FileSource(resolved, display_name=file)
            self.sources[resolved] = source
            logger.debug("New source %s -> %s", file, resolved)
        return source

    def load_span(self, data: Any, where: str) -> Span | None:
        """Parse an optional inline ``span`` table."""
        if data is None:
            return None
        if not is_toml_table(data):
            raise DocumentError(f"{where}: 'span' must be a table")
        line = data.get("line")
        start = data.get("start", 0)
        end = data.get("end")
        for key, value in (("line", line), ("start", start), ("end", end)):
            if value is not None and (not isinstance(value, int) or isinstance(value, bool)):
                raise DocumentError(f"{where}: span.{key} must be an integer")
        if line is None:
            raise DocumentError(f"{where}: span.line is required")
        file = data.get("file")
        if file is not None and not isinstance(file, str):
            raise DocumentError(f"{where}: span.file must be a string")
        source = self.source_for(file) if file else None
        return Span(line, start, end, source)

    def load_entry(self, data: Any, where: str) -> Diagnostic:
        """Parse one ``[[diagnostic]]`` (or child) table, recursively."""
        if not is_toml_table(data):
            raise DocumentError(f"{where}: expected a table")
        raw_severity = data.get("severity", "error")
        if not isinstance(raw_severity, str):
            raise DocumentError(f"{where}: severity must be a string")
        try:
            severity = Severity.parse(raw_severity)
        except ValueError as exc:
            raise DocumentError(f"{where}: {exc}") from exc

        texts: dict[str, str] = {}
        for key in ("message", "submessage"):
            value = data.get(key, "")
            if not isinstance(value, str):
                raise DocumentError(f"{where}: {key} must be a string")
            texts[key] = value
        code = data.get("code")
        if code is not None and not isinstance(code, str):
            raise DocumentError(f"{where}: code must be a string")

        diagnostic = Diagnostic(
            severity,
            texts["message"],
            texts["submessage"],
            code=code,
            span=self.load_span(data.get("span"), where),
        )
        children = data.get("children", [])
        if not isinstance(children, list):
            raise DocumentError(f"{where}: children must be an array of tables")
        for n, child in enumerate(children):
            diagnostic.with_child(self.load_entry(child, f"{where}.children[{n}]"))
        return diagnostic

    def load_document(self, data: TomlTable) -> list[Diagnostic]:
        """Parse every top-level ``[[diagnostic]]`` entry of ``data``."""
        entries = data.get("diagnostic", [])
        if not isinstance(entries, list):
            raise DocumentError("'diagnostic' must be an array of tables")
        return [self.load_entry(entry, f"diagnostic[{n}]") for n, entry in enumerate(entries)]


def load_diagnostics_text(text: str, base_dir: Path | None = None) -> list[Diagnostic]:
    """Parse a diagnostic document from a string.

    Args:
        text (str): TOML text.
        base_dir (Path | None): Directory for relative ``file`` paths; the
            current directory when None.

    Returns:
        list[Diagnostic]: The diagnostics in document order.

    Raises:
        DocumentError: If the text is not valid TOML or an entry is malformed.
    """
    try:
        data: TomlTable = toml.loads(text)
    except toml.TomlDecodeError as exc:
        raise DocumentError(f"Invalid TOML: {exc}") from exc
    return DocumentLoader(base_dir or Path.cwd()).load_document(data)


def load_diagnostics(path: Path) -> list[Diagnostic]:
    """Load a diagnostic document from ``path``.

    Args:
        path (Path): Path to the TOML document.

    Returns:
        list[Diagnostic]: The diagnostics in document order.

    Raises:
        OSError: If the document cannot be read.
        DocumentError: If the document is not UTF-8 or is malformed.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise DocumentError(f"Not valid UTF-8: {exc}") from exc
    diagnostics = load_diagnostics_text(text, path.parent)
    logger.debug("Loaded %d diagnostic(s) from %s", len(diagnostics), path)
    return diagnostics


__all__ = [
    "DocumentError",
    "DocumentLoader",
    "load_diagnostics",
    "load_diagnostics_text",
]
