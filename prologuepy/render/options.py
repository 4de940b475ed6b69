"""Rendering modes and configuration options."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from enum import StrEnum
import os
from typing import TextIO

from prologuepy.render.style import supports_color


class ColorMode(StrEnum):
    """When to style rendered blocks with terminal colors."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


@dataclass(frozen=True, slots=True)
class RenderOptions:
    """Knobs controlling excerpt size, tab handling, color, naming and marker glyphs.

    `marker` draws the primary span and non-help labels; `help_marker` draws
    help labels.
    """

    context_before: int = 0
    context_after: int = 0
    tab_width: int = 1
    color: ColorMode = ColorMode.AUTO
    anonymous_name: str = "<anonymous>"
    marker: str = "^"
    help_marker: str = "-"

    def __post_init__(self):
        if self.context_before < 0 or self.context_after < 0:
            raise ValueError("context line counts cannot be negative")
        if self.tab_width < 1:
            raise ValueError("tab_width must be at least 1")
        if len(self.marker) != 1:
            raise ValueError("marker must be a single character")
        if len(self.help_marker) != 1:
            raise ValueError("help_marker must be a single character")

    @staticmethod
    def for_mode(mode: ColorMode) -> "RenderOptions":
        return RenderOptions(color=mode)

    @staticmethod
    def from_env(environ: Mapping[str, str] | None = None) -> "RenderOptions":
        """Build options from `PROLOGUE_CONTEXT`, `PROLOGUE_TAB_WIDTH` and `PROLOGUE_COLOR`."""
        env = os.environ if environ is None else environ
        options = RenderOptions()

        context = env.get("PROLOGUE_CONTEXT")
        if context:
            lines = _parse_int("PROLOGUE_CONTEXT", context)
            options = replace(options, context_before=lines, context_after=lines)

        tab_width = env.get("PROLOGUE_TAB_WIDTH")
        if tab_width:
            options = replace(options, tab_width=_parse_int("PROLOGUE_TAB_WIDTH", tab_width))

        color = env.get("PROLOGUE_COLOR")
        if color:
            try:
                mode = ColorMode(color.strip().lower())
            except ValueError:
                raise ValueError(f"PROLOGUE_COLOR must be one of auto/always/never, got {color!r}") from None
            options = replace(options, color=mode)

        return options

    def with_context(self, before: int, after: int | None = None) -> "RenderOptions":
        return replace(self, context_before=before, context_after=before if after is None else after)

    def resolve_color(self, stream: TextIO) -> bool:
        if self.color == ColorMode.ALWAYS:
            return True
        if self.color == ColorMode.NEVER:
            return False
        return supports_color(stream)


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
