# spanmark:header:start
#
#   project      : SpanMark
#   file         : cli_types.py
#   file_relpath : src/spanmark/cli/cli_types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# spanmark:header:end

"""Click parameter type for options whose values are SpanMark enums.

``--style`` takes a `RenderStyle` and ``--color`` a `ColorMode`. Both accept
the enum values in any letter case, and commands receive the member itself.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Generic, TypeVar

import click

E = TypeVar("E", bound=Enum)


class EnumChoiceParam(click.ParamType, Generic[E]):
    """Case-insensitive choice over the values of ``enum_cls``."""

    def __init__(self, enum_cls: type[E]) -> None:
        self.enum_cls = enum_cls
        self.name = enum_cls.__name__.lower()
        self.members: dict[str, E] = {str(m.value).lower(): m for m in enum_cls}

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> E:
        if isinstance(value, self.enum_cls):
            return value
        member = self.members.get(str(value).strip().lower())
        if member is None:
            self.fail(f"{value!r} is not one of: {', '.join(self.members)}", param, ctx)
        return member

    def __repr__(self) -> str:
        return f"EnumChoiceParam({self.enum_cls.__name__})"
