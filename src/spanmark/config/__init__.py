# spanmark:header:start
#
#   project      : SpanMark
#   file         : __init__.py
#   file_relpath : src/spanmark/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# spanmark:header:end

"""Render configuration and logging for SpanMark.

Design:
    - [`spanmark.config.model`][spanmark.config.model] holds the immutable
      `RenderConfig` threaded read-only through every render stage, and the
      `MutableRenderConfig` builder used while merging packaged defaults, TOML
      files and CLI overrides.
    - [`spanmark.config.io`][spanmark.config.io] holds the TOML helpers.
    - [`spanmark.config.logging`][spanmark.config.logging] configures logging.

This package initializer stays import-light: the location model imports the
logging helpers from here, and the config model imports the location model.
"""

from __future__ import annotations

from spanmark.config import logging

__all__ = ["logging"]
