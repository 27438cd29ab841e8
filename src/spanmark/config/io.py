# spanmark:header:start
#
#   project      : SpanMark
#   file         : io.py
#   file_relpath : src/spanmark/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# spanmark:header:end

"""Lightweight TOML I/O helpers for SpanMark configuration.

This module centralizes **pure** helpers for reading and writing TOML used by
SpanMark's configuration layer and by the diagnostic document loader. Keeping
these utilities separate avoids import cycles and keeps the model classes small.

Typical flow:
    1. Load defaults from the packaged resource (``load_defaults_dict``).
    2. Load project/user TOML files (``load_toml_dict``).
    3. Normalize and inspect values using typed helpers
       (``get_table_value``, ``get_string_value``, ``get_int_value``, etc.).
    4. Serialize back to TOML when needed (``to_toml``).

Notes:
    - Reading uses `toml`; writing uses `tomlkit` so that the emitted document
      keeps table order and can carry a leading comment block.
"""

from __future__ import annotations

from importlib.resources import files
from typing import TYPE_CHECKING, Any, TypeGuard

import toml
import tomlkit

from spanmark.config.logging import get_logger
from spanmark.constants import (
    DEFAULT_TOML_CONFIG_NAME,
    DEFAULT_TOML_CONFIG_PACKAGE,
)

if TYPE_CHECKING:
    from importlib.resources.abc import Traversable
    from pathlib import Path

    from spanmark.config.logging import SpanmarkLogger

logger: SpanmarkLogger = get_logger(__name__)

TomlTable = dict[str, Any]


__all__: list[str] = [
    "TomlTable",
    "is_toml_table",
    "get_table_value",
    "get_string_value",
    "get_string_value_or_none",
    "get_bool_value_or_none",
    "get_int_value_or_none",
    "load_defaults_dict",
    "load_toml_dict",
    "to_toml",
]


def is_toml_table(val: Any) -> TypeGuard[TomlTable]:
    """Type guard for a TOML table-like mapping.

    Args:
        val (Any): Value to test.

    Returns:
        TypeGuard[TomlTable]: ``True`` if ``val`` is a ``dict[str, Any]``.
    """
    return isinstance(val, dict)


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Extract a sub-table from a TOML table.

    Returns a new empty dict if the sub-table is missing or not a mapping.

    Args:
        table (TomlTable): Parent table mapping.
        key (str): Sub-table key.

    Returns:
        TomlTable: The sub-table if present and a mapping, otherwise an empty dict.
    """
    value: Any | None = table.get(key)
    return value if is_toml_table(value) else {}


def get_string_value(table: TomlTable, key: str, default: str = "") -> str:
    """Extract a string value from a TOML table.

    Scalars (``int``, ``float``, ``bool``) are coerced with ``str(...)``. When the
    key is missing or the value is not coercible, ``default`` is returned.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.
        default (str): Default value if the key is not found or not coercible.

    Returns:
        str: The extracted or coerced string value, or ``default``.
    """
    value: Any | None = table.get(key)
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float, bool)):
        return str(value)
    return default


def get_string_value_or_none(table: TomlTable, key: str) -> str | None:
    """Extract a string value from a TOML table, or None when absent."""
    if key not in table:
        return None
    value: Any = table[key]
    if isinstance(value, str):
        return value
    logger.warning("Expected a string for %r, got %s; ignoring", key, type(value).__name__)
    return None


def get_bool_value_or_none(table: TomlTable, key: str) -> bool | None:
    """Extract a boolean value from a TOML table, or None when absent or invalid."""
    if key not in table:
        return None
    value: Any = table[key]
    if isinstance(value, bool):
        return value
    logger.warning("Expected a boolean for %r, got %r; ignoring", key, value)
    return None


def get_int_value_or_none(table: TomlTable, key: str) -> int | None:
    """Extract an integer value from a TOML table, or None when absent or invalid.

    Booleans are rejected even though ``bool`` subclasses ``int``.
    """
    if key not in table:
        return None
    value: Any = table[key]
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    logger.warning("Expected an integer for %r, got %r; ignoring", key, value)
    return None


def load_defaults_dict() -> TomlTable:
    """Return the packaged default configuration as a Python dict.

    Returns:
        TomlTable: The parsed default configuration.

    Raises:
        RuntimeError: If the bundled default config resource cannot be read or
            parsed as TOML.
    """
    resource: Traversable = files(DEFAULT_TOML_CONFIG_PACKAGE).joinpath(DEFAULT_TOML_CONFIG_NAME)
    logger.debug("Loading defaults from package resource: %s", resource)
    try:
        text: str = resource.read_text(encoding="utf8")
    except OSError as exc:
        raise RuntimeError(
            f"Cannot read bundled default config {DEFAULT_TOML_CONFIG_PACKAGE!r}/"
            f"{DEFAULT_TOML_CONFIG_NAME!r}: {exc}"
        ) from exc

    try:
        data: TomlTable = toml.loads(text)
    except toml.TomlDecodeError as exc:
        raise RuntimeError(
            f"Bundled default config {DEFAULT_TOML_CONFIG_PACKAGE!r}/"
            f"{DEFAULT_TOML_CONFIG_NAME!r} is invalid TOML: {exc}"
        ) from exc

    return data


def load_defaults_text() -> str:
    """Return the packaged default configuration verbatim (comments included)."""
    resource: Traversable = files(DEFAULT_TOML_CONFIG_PACKAGE).joinpath(DEFAULT_TOML_CONFIG_NAME)
    return resource.read_text(encoding="utf8")


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document.

    Returns:
        TomlTable: The parsed TOML content.

    Notes:
        - Errors are logged and an empty dict is returned on failure.
        - Encoding is assumed to be UTF-8.
    """
    try:
        val: TomlTable = toml.load(path)
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        val = {}
    except toml.TomlDecodeError as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        val = {}
    return val


def to_toml(toml_dict: TomlTable, *, header: str | None = None) -> str:
    """Serialize a TOML dict to a string.

    Args:
        toml_dict (TomlTable): The TOML data to serialize.
        header (str | None): Optional comment text placed above the document;
            each line becomes a ``#`` comment.

    Returns:
        str: The serialized TOML string.
    """
    doc: tomlkit.TOMLDocument = tomlkit.document()
    if header:
        for line in header.splitlines():
            doc.add(tomlkit.comment(line))
        doc.add(tomlkit.nl())
    for key, value in toml_dict.items():
        doc.add(key, value)
    return tomlkit.dumps(doc)
