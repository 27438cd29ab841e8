# spanmark:header:start
#
#   project      : SpanMark
#   file         : __init__.py
#   file_relpath : src/spanmark/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# spanmark:header:end

"""Click-based command line interface for SpanMark."""

from __future__ import annotations
