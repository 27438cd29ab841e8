# spanmark:header:start
#
#   project      : SpanMark
#   file         : __init__.py
#   file_relpath : src/spanmark/rendering/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# spanmark:header:end

"""Rendering pipeline for diagnostics.

Modules:
    * `spanmark.rendering.color`: color names and color-mode resolution.
    * `spanmark.rendering.styling`: styled segments and the `Styler`.
    * `spanmark.rendering.sorter`: deterministic secondary order.
    * `spanmark.rendering.snippet`: source line access and tab expansion.
    * `spanmark.rendering.overlap`: stacked underline rows for one line.
    * `spanmark.rendering.layout`: the rich and short layout engines.
"""

from __future__ import annotations
