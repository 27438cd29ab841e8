# spanmark:header:start
#
#   project      : SpanMark
#   file         : __init__.py
#   file_relpath : src/spanmark/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# spanmark:header:end

"""SpanMark package.

SpanMark renders compiler-style diagnostics: a primary message anchored to a
column span in a source file, with secondary notes and help messages drawn as
stacked underlines, in a bordered, line-numbered listing or as one-line
``file:line:start:end`` records. The stable programmatic surface lives in
`spanmark.api`; the ``spanmark`` console script is `spanmark.cli.main.cli`.
"""

from __future__ import annotations
