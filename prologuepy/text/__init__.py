"""Text sources, spans and line/column resolution."""

from prologuepy.text.source import LineCol, TextSource, line_starts, locate, offset_of
from prologuepy.text.span import Span

__all__ = [
    "LineCol",
    "Span",
    "TextSource",
    "line_starts",
    "locate",
    "offset_of",
]
