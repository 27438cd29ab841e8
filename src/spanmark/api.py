# spanmark:header:start
#
#   project      : SpanMark
#   file         : api.py
#   file_relpath : src/spanmark/api.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# spanmark:header:end

"""Public SpanMark API (stable surface).

Everything an embedding program needs to build, render and collect
diagnostics, importable from one place:

```python
from spanmark.api import Diagnostic, Reporter, Span, TextSource

src = TextSource("main.txt", text)
reporter = Reporter()
reporter.report(
    Diagnostic.error("type mismatch", "expected int", code="E010", span=Span(4, 9, 13, src))
    .with_note("declared here", Span(2, 4, 5, src))
)
if reporter.has_errors():
    reporter.report_abort()
```

Versioning policy:
    - Names exported here follow semver; internal modules remain private.
    - Adding optional parameters with defaults is allowed in minor releases.
"""

from __future__ import annotations

from spanmark.config.model import (
    Glyphs,
    MutableRenderConfig,
    RenderConfig,
    RenderStyle,
    SeverityStyle,
    get_default_config,
)
from spanmark.constants import SPANMARK_VERSION
from spanmark.diagnostic.loader import DocumentError, load_diagnostics, load_diagnostics_text
from spanmark.diagnostic.location import FileSource, Severity, SourceRef, Span, TextSource
from spanmark.diagnostic.model import Diagnostic
from spanmark.diagnostic.reporter import Reporter, ReportStats
from spanmark.rendering.color import ColorMode

__version__: str = SPANMARK_VERSION

__all__ = [
    "ColorMode",
    "Diagnostic",
    "DocumentError",
    "FileSource",
    "Glyphs",
    "MutableRenderConfig",
    "RenderConfig",
    "RenderStyle",
    "ReportStats",
    "Reporter",
    "Severity",
    "SeverityStyle",
    "SourceRef",
    "Span",
    "TextSource",
    "__version__",
    "get_default_config",
    "load_diagnostics",
    "load_diagnostics_text",
]
