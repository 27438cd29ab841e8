# spanmark:header:start
#
#   project      : SpanMark
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# spanmark:header:end

"""Pytest configuration for the SpanMark test suite.

Sets up TRACE logging for the whole run, clears ``SPANMARK_LOG_LEVEL`` and the
color environment variables per test, and provides small builders shared by
the rendering tests.

Notes:
    Tests should respect the immutable/mutable configuration split: build a
    `MutableRenderConfig`, then ``freeze()`` it; to tweak a frozen
    `RenderConfig`, use ``with_overrides`` or ``thaw()``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar, cast

import pytest

from spanmark.config import logging
from spanmark.config.model import RenderConfig, get_default_config
from spanmark.diagnostic.location import TextSource
from spanmark.rendering.color import ColorMode

F = TypeVar("F", bound=Callable[..., object])

DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.cli`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_diagnostic: DecoratorType[Any] = as_typed_mark(pytest.mark.diagnostic)
mark_rendering: DecoratorType[Any] = as_typed_mark(pytest.mark.rendering)
mark_config: DecoratorType[Any] = as_typed_mark(pytest.mark.config)
mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`."""
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_spanmark_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's shell environment out of test runs.

    ``SPANMARK_LOG_LEVEL`` would change CLI logging, and ``FORCE_COLOR`` /
    ``NO_COLOR`` would change color resolution.

    Args:
        monkeypatch (pytest.MonkeyPatch): Used to drop environment variables.
    """
    monkeypatch.delenv(logging.LOG_LEVEL_ENV_VAR, raising=False)
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:
    """Log at TRACE for the whole test session.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


# Source used by most layout tests. Line 4 carries the E010 example.
SAMPLE_TEXT = "\n".join(
    [
        "fn main() {",
        "    let x: i32 = 0;",
        "    let y = x;",
        "    let z: i32 = \"hi\";",
        "    return;",
        "    // filler 6",
        "    // filler 7",
        "    // filler 8",
        "    // filler 9",
        "    // filler 10",
        "    // filler 11",
        "    let w = z;",
        "}",
    ]
)


def sample_source(name: str = "main.rs") -> TextSource:
    """Return a fresh in-memory source with `SAMPLE_TEXT`."""
    return TextSource(name, SAMPLE_TEXT)


def plain_config(**overrides: Any) -> RenderConfig:
    """Return the default config with color off and the given fields replaced."""
    return get_default_config().with_overrides(color_mode=ColorMode.NEVER, **overrides)
