# spanmark:header:start
#
#   project      : SpanMark
#   file         : model.py
#   file_relpath : src/spanmark/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# spanmark:header:end

"""Render configuration model and merge policy.

This module defines:
    - `RenderConfig`: an immutable snapshot read by every render stage.
    - `MutableRenderConfig`: a mutable builder used while merging defaults, TOML
      files and CLI overrides; it can be frozen into `RenderConfig` and thawed
      back for edits.

Scope:
    - *In scope*: data shapes, field-level defaulting, merge policy
      (`MutableRenderConfig.merge_with`), sanitation and freeze/thaw mechanics.
    - *Out of scope*: TOML parsing/serialization, delegated to `spanmark.config.io`.

Immutability:
    `RenderConfig` is ``frozen=True`` and carries no hidden state, so the same
    snapshot can be shared by concurrent renders.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Final

from spanmark.config.io import (
    get_bool_value_or_none,
    get_int_value_or_none,
    get_string_value_or_none,
    get_table_value,
    load_defaults_dict,
    load_toml_dict,
)
from spanmark.config.logging import get_logger
from spanmark.diagnostic.location import Severity
from spanmark.rendering.color import INHERIT, ColorMode, is_known_color

if TYPE_CHECKING:
    from collections.abc import Mapping

    from spanmark.config.io import TomlTable
    from spanmark.config.logging import SpanmarkLogger

logger: SpanmarkLogger = get_logger(__name__)


class RenderStyle(str, Enum):
    """Overall output style."""

    RICH = "rich"
    SHORT = "short"


@dataclass(frozen=True, slots=True)
class SeverityStyle:
    """Display name and color for one severity."""

    name: str
    color: str


DEFAULT_SEVERITY_STYLES: Final[Mapping[Severity, SeverityStyle]] = MappingProxyType(
    {
        Severity.INTERNAL_ERROR: SeverityStyle("Internal Error", "red"),
        Severity.ERROR: SeverityStyle("Error", "red"),
        Severity.WARNING: SeverityStyle("Warning", "yellow"),
        Severity.NOTE: SeverityStyle("Note", "bright_black"),
        Severity.HELP: SeverityStyle("Help", "blue"),
    }
)


@dataclass(frozen=True, slots=True)
class Glyphs:
    """Characters used to draw borders, gutters and markers.

    Every glyph except ``top_open`` and ``top_close`` occupies exactly one cell;
    `MutableRenderConfig.freeze` rejects wider replacements.
    """

    bar: str = "│"
    top_open: str = "╭─"
    top_close: str = "─╴"
    bottom_rule: str = "─"
    bottom_corner: str = "╯"
    ellipsis: str = "⋯"
    arrow_up: str = "^"
    arrow_down: str = "v"
    underline: str = "~"
    connector: str = "│"
    corner: str = "╰"
    bullet: str = "•"


# Glyphs whose width is free-form (they only appear on border rows).
_WIDE_GLYPHS: Final[frozenset[str]] = frozenset({"top_open", "top_close"})

DEFAULT_TAB_WIDTH: Final[int] = 4


@dataclass(frozen=True, slots=True)
class RenderConfig:
    """Immutable render configuration.

    Attributes:
        style (RenderStyle): Rich bordered output or one-line short output.
        tab_width (int): Tab stop distance used for visual column expansion.
        gutter_padding (int): Spaces between the widest line number and the bar.
        top_padding (int): Blank gutter rows printed below each top border.
        short_separator (str): Replacement for newlines inside short-mode messages.
        color_mode (ColorMode): Whether to emit ANSI styles.
        coalesce_identical_spans (bool): Merge same-line secondaries with identical
            spans into one annotation with stacked messages.
        inline_single_annotation (bool): Put the message of a lone secondary on
            its underline row.
        border_color (str): Color of gutters and borders (`INHERIT` allowed).
        severity_styles (Mapping[Severity, SeverityStyle]): Name and color per severity.
        glyphs (Glyphs): Drawing characters.
        config_files (tuple[str, ...]): Provenance of merged config sources.
    """

    style: RenderStyle = RenderStyle.RICH
    tab_width: int = DEFAULT_TAB_WIDTH
    gutter_padding: int = 1
    top_padding: int = 1
    short_separator: str = " "
    color_mode: ColorMode = ColorMode.AUTO
    coalesce_identical_spans: bool = False
    inline_single_annotation: bool = True
    border_color: str = INHERIT
    severity_styles: Mapping[Severity, SeverityStyle] = field(
        default_factory=lambda: DEFAULT_SEVERITY_STYLES
    )
    glyphs: Glyphs = field(default_factory=Glyphs)
    config_files: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        # Also runs on `with_overrides`, which bypasses `MutableRenderConfig.sanitize`.
        if self.tab_width < 1:
            logger.warning("tab_width must be >= 1 (got %d); using default", self.tab_width)
            object.__setattr__(self, "tab_width", DEFAULT_TAB_WIDTH)
        for name in ("gutter_padding", "top_padding"):
            if getattr(self, name) < 0:
                logger.warning("%s must be >= 0 (got %d)", name, getattr(self, name))
                object.__setattr__(self, name, 0)

    def severity_style(self, severity: Severity) -> SeverityStyle:
        """Return the style for ``severity``, falling back to the built-in default."""
        style = self.severity_styles.get(severity)
        if style is None:
            logger.debug("No style configured for %s; using default", severity.value)
            return DEFAULT_SEVERITY_STYLES[severity]
        return style

    def severity_label(self, severity: Severity, code: str | None = None) -> str:
        """Return ``"Name"`` or ``"Name(code)"`` for a severity."""
        name = self.severity_style(severity).name
        return f"{name}({code})" if code else name

    def with_overrides(self, **changes: Any) -> RenderConfig:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def to_toml_dict(self) -> TomlTable:
        """Convert this config into a TOML-serializable dict (same shape as the defaults)."""
        glyphs = {f.name: getattr(self.glyphs, f.name) for f in fields(Glyphs)}
        return {
            "render": {
                "style": self.style.value,
                "tab_width": self.tab_width,
                "gutter_padding": self.gutter_padding,
                "top_padding": self.top_padding,
                "short_separator": self.short_separator,
                "color": self.color_mode.value,
                "coalesce_identical_spans": self.coalesce_identical_spans,
                "inline_single_annotation": self.inline_single_annotation,
            },
            "theme": {
                "border_color": self.border_color,
                "severity": {
                    sev.value: {
                        "name": self.severity_style(sev).name,
                        "color": self.severity_style(sev).color,
                    }
                    for sev in Severity
                },
                "glyphs": glyphs,
            },
        }

    def thaw(self) -> MutableRenderConfig:
        """Return a mutable builder pre-populated from this snapshot."""
        return MutableRenderConfig(
            style=self.style,
            tab_width=self.tab_width,
            gutter_padding=self.gutter_padding,
            top_padding=self.top_padding,
            short_separator=self.short_separator,
            color_mode=self.color_mode,
            coalesce_identical_spans=self.coalesce_identical_spans,
            inline_single_annotation=self.inline_single_annotation,
            border_color=self.border_color,
            severity_names={sev: st.name for sev, st in self.severity_styles.items()},
            severity_colors={sev: st.color for sev, st in self.severity_styles.items()},
            glyphs={f.name: getattr(self.glyphs, f.name) for f in fields(Glyphs)},
            config_files=list(self.config_files),
        )


@dataclass
class MutableRenderConfig:
    """Mutable render configuration used while merging layers.

    Every scalar field is ``None`` when the layer does not set it, so that
    `merge_with` can apply "later layer wins" per field.
    """

    style: RenderStyle | None = None
    tab_width: int | None = None
    gutter_padding: int | None = None
    top_padding: int | None = None
    short_separator: str | None = None
    color_mode: ColorMode | None = None
    coalesce_identical_spans: bool | None = None
    inline_single_annotation: bool | None = None
    border_color: str | None = None
    severity_names: dict[Severity, str] = field(default_factory=lambda: {})
    severity_colors: dict[Severity, str] = field(default_factory=lambda: {})
    glyphs: dict[str, str] = field(default_factory=lambda: {})
    config_files: list[str] = field(default_factory=lambda: [])

    # ---------------------------- Build/freeze ----------------------------
    def freeze(self) -> RenderConfig:
        """Sanitize this builder and freeze it into a `RenderConfig`."""
        self.sanitize()
        base = RenderConfig()

        styles: dict[Severity, SeverityStyle] = {}
        for sev in Severity:
            default = DEFAULT_SEVERITY_STYLES[sev]
            styles[sev] = SeverityStyle(
                name=self.severity_names.get(sev, default.name),
                color=self.severity_colors.get(sev, default.color),
            )

        return RenderConfig(
            style=self.style or base.style,
            tab_width=self.tab_width if self.tab_width is not None else base.tab_width,
            gutter_padding=(
                self.gutter_padding if self.gutter_padding is not None else base.gutter_padding
            ),
            top_padding=self.top_padding if self.top_padding is not None else base.top_padding,
            short_separator=(
                self.short_separator if self.short_separator is not None else base.short_separator
            ),
            color_mode=self.color_mode or base.color_mode,
            coalesce_identical_spans=(
                self.coalesce_identical_spans
                if self.coalesce_identical_spans is not None
                else base.coalesce_identical_spans
            ),
            inline_single_annotation=(
                self.inline_single_annotation
                if self.inline_single_annotation is not None
                else base.inline_single_annotation
            ),
            border_color=self.border_color or base.border_color,
            severity_styles=MappingProxyType(styles),
            glyphs=replace(base.glyphs, **self.glyphs),
            config_files=tuple(self.config_files),
        )

    def sanitize(self) -> None:
        """Replace out-of-range values with defaults, logging each correction."""
        if self.tab_width is not None and self.tab_width < 1:
            logger.warning("tab_width must be >= 1 (got %d); using default", self.tab_width)
            self.tab_width = None
        if self.gutter_padding is not None and self.gutter_padding < 0:
            logger.warning("gutter_padding must be >= 0 (got %d)", self.gutter_padding)
            self.gutter_padding = 0
        if self.top_padding is not None and self.top_padding < 0:
            logger.warning("top_padding must be >= 0 (got %d)", self.top_padding)
            self.top_padding = 0
        if self.border_color is not None and not is_known_color(self.border_color):
            logger.warning("Unknown border color %r; using default", self.border_color)
            self.border_color = None
        for sev, color in list(self.severity_colors.items()):
            if not is_known_color(color) or color == INHERIT:
                logger.warning("Unknown color %r for %s; using default", color, sev.value)
                del self.severity_colors[sev]
        known_glyphs = {f.name for f in fields(Glyphs)}
        for name, glyph in list(self.glyphs.items()):
            if name not in known_glyphs:
                logger.warning("Unknown glyph %r ignored", name)
                del self.glyphs[name]
            elif not glyph or (name not in _WIDE_GLYPHS and len(glyph) != 1):
                logger.warning("Glyph %r must be a single character (got %r)", name, glyph)
                del self.glyphs[name]

    # --------------------------- Loaders/parsers --------------------------
    @classmethod
    def from_defaults(cls) -> MutableRenderConfig:
        """Load the bundled ``spanmark-default.toml``."""
        return cls.from_toml_dict(load_defaults_dict(), config_file="<defaults>")

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableRenderConfig | None:
        """Load configuration from a ``spanmark.toml`` or ``pyproject.toml`` file.

        For ``pyproject.toml`` the ``[tool.spanmark]`` table is used.

        Args:
            path (Path): Path to the TOML file.

        Returns:
            MutableRenderConfig | None: The loaded layer, or None when the file
            holds no SpanMark configuration or could not be parsed.
        """
        data: TomlTable = load_toml_dict(path)
        if not data:
            return None
        if path.name == "pyproject.toml":
            data = get_table_value(get_table_value(data, "tool"), "spanmark")
            if not data:
                logger.debug("No [tool.spanmark] table in %s", path)
                return None
        return cls.from_toml_dict(data, config_file=str(path))

    @classmethod
    def from_toml_dict(
        cls,
        data: TomlTable,
        *,
        config_file: str | None = None,
    ) -> MutableRenderConfig:
        """Build a layer from a parsed TOML mapping.

        Unknown enum values are logged and ignored so that one bad key never
        invalidates a whole file.
        """
        render: TomlTable = get_table_value(data, "render")
        theme: TomlTable = get_table_value(data, "theme")
        cfg = cls()

        style = get_string_value_or_none(render, "style")
        if style is not None:
            try:
                cfg.style = RenderStyle(style.lower())
            except ValueError:
                logger.warning("Unknown render style %r in %s", style, config_file)
        color = get_string_value_or_none(render, "color")
        if color is not None:
            try:
                cfg.color_mode = ColorMode(color.lower())
            except ValueError:
                logger.warning("Unknown color mode %r in %s", color, config_file)

        cfg.tab_width = get_int_value_or_none(render, "tab_width")
        cfg.gutter_padding = get_int_value_or_none(render, "gutter_padding")
        cfg.top_padding = get_int_value_or_none(render, "top_padding")
        cfg.short_separator = get_string_value_or_none(render, "short_separator")
        cfg.coalesce_identical_spans = get_bool_value_or_none(render, "coalesce_identical_spans")
        cfg.inline_single_annotation = get_bool_value_or_none(render, "inline_single_annotation")
        cfg.border_color = get_string_value_or_none(theme, "border_color")

        severities: TomlTable = get_table_value(theme, "severity")
        for key in severities:
            try:
                sev = Severity.parse(key)
            except ValueError:
                logger.warning("Unknown severity table [theme.severity.%s]", key)
                continue
            table = get_table_value(severities, key)
            name = get_string_value_or_none(table, "name")
            if name is not None:
                cfg.severity_names[sev] = name
            sev_color = get_string_value_or_none(table, "color")
            if sev_color is not None:
                cfg.severity_colors[sev] = sev_color

        glyphs: TomlTable = get_table_value(theme, "glyphs")
        for key in glyphs:
            glyph = get_string_value_or_none(glyphs, key)
            if glyph is not None:
                cfg.glyphs[key] = glyph

        if config_file:
            cfg.config_files.append(config_file)
        return cfg

    @classmethod
    def load_merged(cls, config_path: Path | None = None) -> MutableRenderConfig:
        """Merge packaged defaults with an optional config file.

        Args:
            config_path (Path | None): A ``spanmark.toml`` or ``pyproject.toml``.

        Returns:
            MutableRenderConfig: The merged layers (defaults first).
        """
        merged = cls.from_defaults()
        if config_path is not None:
            layer = cls.from_toml_file(config_path)
            if layer is not None:
                merged = merged.merge_with(layer)
        return merged

    # ------------------------------ Merging -------------------------------
    def merge_with(self, other: MutableRenderConfig) -> MutableRenderConfig:
        """Return a new builder where fields set in ``other`` override ``self``."""
        merged = MutableRenderConfig(
            severity_names={**self.severity_names, **other.severity_names},
            severity_colors={**self.severity_colors, **other.severity_colors},
            glyphs={**self.glyphs, **other.glyphs},
            config_files=[*self.config_files, *other.config_files],
        )
        for name in (
            "style",
            "tab_width",
            "gutter_padding",
            "top_padding",
            "short_separator",
            "color_mode",
            "coalesce_identical_spans",
            "inline_single_annotation",
            "border_color",
        ):
            value = getattr(other, name)
            setattr(merged, name, value if value is not None else getattr(self, name))
        return merged

    def apply_overrides(
        self,
        *,
        style: RenderStyle | None = None,
        tab_width: int | None = None,
        color_mode: ColorMode | None = None,
    ) -> MutableRenderConfig:
        """Apply CLI-level overrides in place and return ``self``."""
        if style is not None:
            self.style = style
        if tab_width is not None:
            self.tab_width = tab_width
        if color_mode is not None:
            self.color_mode = color_mode
        return self


@functools.cache
def get_default_config() -> RenderConfig:
    """Return the process-default `RenderConfig` (packaged defaults, frozen once)."""
    return MutableRenderConfig.from_defaults().freeze()
