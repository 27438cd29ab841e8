# spanmark:header:start
#
#   project      : SpanMark
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# spanmark:header:end

"""CLI test helpers for running SpanMark in a controlled working directory.

`run_cli_in()` changes the process working directory to the given `tmp_path`
before invoking the Click CLI, so that relative document paths and local
config discovery (``spanmark.toml`` / ``pyproject.toml``) resolve against the
temporary test directory.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Sequence

from click.testing import CliRunner, Result

from spanmark.cli.exit_codes import ExitCode
from spanmark.cli.main import cli

if TYPE_CHECKING:
    from pathlib import Path


def run_cli_in(tmp_path: Path, argv: str | Sequence[str] | None) -> Result:
    """Invoke the CLI with `tmp_path` as the working directory.

    Args:
        tmp_path (Path): Pytest-provided temporary directory used as the CWD for
            the command invocation.
        argv (str | Sequence[str] | None): CLI argument vector, e.g.
            ``["render", "doc.toml"]``.

    Returns:
        Result: The `click.testing.Result` produced by `CliRunner.invoke`.
    """
    runner = CliRunner()
    cwd: str = os.getcwd()
    try:
        os.chdir(tmp_path)
        return runner.invoke(cli, argv)
    finally:
        os.chdir(cwd)


def run_cli(argv: str | Sequence[str] | None) -> Result:
    """Invoke the CLI without changing the working directory.

    Use this helper when the test does not depend on files created in
    ``tmp_path`` (e.g. ``version`` or ``show-defaults``).

    Args:
        argv (str | Sequence[str] | None): CLI argument vector.

    Returns:
        Result: The `click.testing.Result` produced by `CliRunner.invoke`.
    """
    return CliRunner().invoke(cli, argv)


def assert_SUCCESS(result: Result) -> None:
    """Assert that the command exited successfully (code 0).

    Args:
        result (Result): The Result object returned by `run_cli` or `run_cli_in`.
    """
    assert result.exit_code == ExitCode.SUCCESS, result.output


def assert_FAILURE(result: Result) -> None:
    """Assert that the command exited with FAILURE (code 1).

    Args:
        result (Result): The Result object returned by `run_cli` or `run_cli_in`.
    """
    # FAILURE is the normal outcome when errors were rendered.
    assert result.exit_code == ExitCode.FAILURE, result.output
