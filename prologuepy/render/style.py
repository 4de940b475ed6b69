"""Severity -> terminal style mapping and conditional styling of rendered blocks."""

from __future__ import annotations

from collections.abc import Mapping
import os
from types import MappingProxyType
from typing import Final, TextIO

from prologuepy.diagnostics import Severity
from prologuepy.render.block import RenderedBlock, Role, TextStyle

SEVERITY_STYLES: Final[Mapping[Severity, TextStyle]] = MappingProxyType(
    {
        Severity.ERROR: TextStyle("red", ("bold",)),
        Severity.WARNING: TextStyle("yellow", ("bold",)),
        Severity.INFO: TextStyle("blue", ("bold",)),
        Severity.NOTE: TextStyle("green", ("bold",)),
        Severity.HELP: TextStyle("cyan", ("bold",)),
    }
)

FRAME_STYLE: Final[TextStyle] = TextStyle("blue", ("bold",))
EMPHASIS_STYLE: Final[TextStyle] = TextStyle(None, ("bold",))
TASK_STYLE: Final[TextStyle] = TextStyle("green", ("bold",))


def supports_color(stream: TextIO, environ: Mapping[str, str] | None = None) -> bool:
    """Whether styled output should be written to stream.

    `NO_COLOR` wins, then `FORCE_COLOR`, then the stream must be a terminal.
    """
    env = os.environ if environ is None else environ
    if env.get("NO_COLOR"):
        return False
    if env.get("FORCE_COLOR"):
        return True
    if env.get("TERM") == "dumb":
        return False
    isatty = getattr(stream, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except ValueError:
        # closed stream
        return False


def styles_for(severity: Severity) -> dict[Role, TextStyle]:
    severity_style = SEVERITY_STYLES[severity]
    return {
        Role.LABEL: severity_style,
        Role.MARKER: severity_style,
        Role.MESSAGE: EMPHASIS_STYLE,
        Role.ARROW: FRAME_STYLE,
        Role.GUTTER: FRAME_STYLE,
        Role.SEPARATOR: FRAME_STYLE,
        Role.NOTE_KIND: EMPHASIS_STYLE,
        Role.TASK_VERB: TASK_STYLE,
    }


def style(block: RenderedBlock, severity: Severity, color_enabled: bool) -> RenderedBlock:
    """Attach styles to block when color is enabled; text content never changes."""
    if not color_enabled:
        return block
    styles = styles_for(severity)
    return RenderedBlock(tuple(line.restyle(styles, SEVERITY_STYLES) for line in block.lines))

