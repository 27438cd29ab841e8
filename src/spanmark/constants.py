# spanmark:header:start
#
#   project      : SpanMark
#   file         : constants.py
#   file_relpath : src/spanmark/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# spanmark:header:end

"""SpanMark Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

try:
    SPANMARK_VERSION: str = get_version("spanmark")
except PackageNotFoundError:  # running from a source checkout
    SPANMARK_VERSION = "0.0.0"

# Name of the bundled default config inside the package `spanmark.config`:
DEFAULT_TOML_CONFIG_PACKAGE: str = "spanmark.config"
DEFAULT_TOML_CONFIG_NAME: str = "spanmark-default.toml"

# Project-local config file names, in lookup order.
LOCAL_CONFIG_NAMES: tuple[str, ...] = ("spanmark.toml", "pyproject.toml")

ABORT_MESSAGE: str = "aborting due to previous error"
