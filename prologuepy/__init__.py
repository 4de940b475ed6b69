"""Compiler-style diagnostics over arbitrary text."""

from prologuepy.errors import (
    DestinationWriteError,
    InvalidSpan,
    MissingSource,
    OffsetOutOfRange,
    OverlappingAnnotation,
    PrologueError,
    TargetAlreadyExists,
)
from prologuepy.text import LineCol, Span, TextSource
from prologuepy.diagnostics import Diagnostic, DiagnosticBuilder, Label, Note, NoteKind, Severity
from prologuepy.render import (
    ColorMode,
    RenderedBlock,
    RenderOptions,
    compose,
    compose_group,
    render_diagnostic,
)
from prologuepy.emit import (
    PrologueHandler,
    RenderSink,
    Target,
    TargetList,
    Task,
    TqdmIndicator,
    install_handler,
    progress_bar,
)

__all__ = [
    "ColorMode",
    "DestinationWriteError",
    "Diagnostic",
    "DiagnosticBuilder",
    "InvalidSpan",
    "Label",
    "LineCol",
    "MissingSource",
    "Note",
    "NoteKind",
    "OffsetOutOfRange",
    "OverlappingAnnotation",
    "PrologueError",
    "PrologueHandler",
    "RenderOptions",
    "RenderSink",
    "RenderedBlock",
    "Severity",
    "Span",
    "Target",
    "TargetAlreadyExists",
    "TargetList",
    "Task",
    "TextSource",
    "TqdmIndicator",
    "compose",
    "compose_group",
    "install_handler",
    "progress_bar",
    "render_diagnostic",
]
