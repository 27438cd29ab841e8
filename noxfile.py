# spanmark:header:start
#
#   project      : SpanMark
#   file         : noxfile.py
#   file_relpath : noxfile.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# spanmark:header:end

"""SpanMark project automation via Nox.

Sessions:
  - `qa`: Per-Python session that runs pytest and pyright.
  - `lint`: Ruff lint on the whole tree.
  - `format_check`: Verify formatting with ruff.
  - `format`: Apply formatting with ruff.
  - `package_check`: Build sdist/wheel and validate metadata (twine).

Common invocations:
  - `nox -s lint`
  - `nox -s qa` (runs for all configured Python versions)
"""

from __future__ import annotations

import pathlib
import sys
import warnings
from typing import TYPE_CHECKING, Any, cast

import nox

if TYPE_CHECKING:
    from collections.abc import Callable

if sys.version_info >= (3, 11):
    import tomllib

    _toml_loads = cast("Callable[[str], dict[str, Any]]", tomllib.loads)  # type: ignore[assignment]
else:
    import toml

    _toml_loads = cast("Callable[[str], dict[str, Any]]", toml.loads)  # type: ignore[assignment]

CURRENT_PYTHON_VERSION: str = f"{sys.version_info[0]}.{sys.version_info[1]}"


def _parse_pyproject_toml() -> dict[str, Any]:
    """Parse `pyproject.toml` (runs at noxfile import time, before any install)."""
    path = pathlib.Path(__file__).parent / "pyproject.toml"
    try:
        return _toml_loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        warnings.warn(f"Cannot parse {path}: {exc}", RuntimeWarning, stacklevel=2)
        return {}


def get_supported_pythons() -> list[str]:
    """Resolve supported Python versions from `pyproject.toml` classifiers.

    Returns:
        list[str]: Supported versions like ["3.10", "3.11", ...], sorted.
    """
    project_any = _parse_pyproject_toml().get("project")
    if not isinstance(project_any, dict):
        return [CURRENT_PYTHON_VERSION]
    classifiers = cast("dict[str, Any]", project_any).get("classifiers") or []

    prefix = "Programming Language :: Python :: "
    versions: set[str] = set()
    for c in classifiers:
        if not c.startswith(prefix):
            continue
        parts = c.removeprefix(prefix).strip().split(".")
        if len(parts) == 2 and all(p.isdigit() for p in parts):
            versions.add(f"{int(parts[0])}.{int(parts[1])}")

    out = sorted(versions, key=lambda s: tuple(int(p) for p in s.split(".")))
    if out:
        return out
    warnings.warn(
        f"No Python versions found in classifiers. Falling back to {CURRENT_PYTHON_VERSION}.",
        RuntimeWarning,
        stacklevel=2,
    )
    return [CURRENT_PYTHON_VERSION]


PYTHONS: list[str] = get_supported_pythons()

nox.options.sessions = ["lint", "format_check"]


@nox.session(python=PYTHONS)
def qa(session: nox.Session) -> None:
    """Run the test suite and the type checker."""
    session.install("-e", ".[dev]")
    session.run("pytest", "-q", "tests", *session.posargs)
    session.run("pyright", "--pythonversion", str(session.python))


@nox.session
def lint(session: nox.Session) -> None:
    """Run ruff lint."""
    session.install("ruff")
    session.run("ruff", "check", ".")


@nox.session
def format_check(session: nox.Session) -> None:
    """Verify formatting."""
    session.install("ruff")
    session.run("ruff", "format", "--check", ".")


@nox.session
def format(session: nox.Session) -> None:
    """Apply formatting."""
    session.install("ruff")
    session.run("ruff", "format", ".")


@nox.session(python=CURRENT_PYTHON_VERSION)
def package_check(session: nox.Session) -> None:
    """Build sdist/wheel and validate the metadata."""
    session.install("build", "twine")
    session.run("python", "-m", "build", "--sdist", "--wheel")
    session.run("twine", "check", "dist/*")
