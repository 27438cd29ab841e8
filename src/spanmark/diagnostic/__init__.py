# spanmark:header:start
#
#   project      : SpanMark
#   file         : __init__.py
#   file_relpath : src/spanmark/diagnostic/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# spanmark:header:end

"""Diagnostic primitives.

Modules:
    * `spanmark.diagnostic.location`: source references, spans and severities.
    * `spanmark.diagnostic.model`: the arena-backed `Diagnostic` tree and its
      render entry points.
    * `spanmark.diagnostic.reporter`: the caller-owned `Reporter` session.
    * `spanmark.diagnostic.loader`: TOML diagnostic documents.

Import from the submodules, or from `spanmark.api`.
"""

from __future__ import annotations
