# spanmark:header:start
#
#   project      : SpanMark
#   file         : __init__.py
#   file_relpath : src/spanmark/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# spanmark:header:end

"""SpanMark CLI subcommands (one module per command)."""

from __future__ import annotations
