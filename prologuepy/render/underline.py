"""Caret underline rows drawn beneath spanned excerpt lines."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from prologuepy.diagnostics import Severity
from prologuepy.render.block import RenderedLine, Role, Segment
from prologuepy.text import LineCol

CONNECTOR = "|"


def expand_tabs(text: str, tab_width: int = 1) -> str:
    """Replace every tab with `tab_width` spaces (no tab stops)."""
    return text.replace("\t", " " * tab_width)


def display_width(text: str, tab_width: int = 1) -> int:
    return sum(tab_width if ch == "\t" else 1 for ch in text)


def marked_columns(line_text: str, line_number: int, start: LineCol, end: LineCol) -> tuple[int, int]:
    """1-based half-open column range of line_text covered by the span start..end.

    Columns past the end of the text are kept as they are: an offset inside a
    `\\r\\n` terminator locates one column beyond the visible text, and the
    marker is drawn there too.
    """
    first = start.column if start.line == line_number else 1
    last = end.column if end.line == line_number else len(line_text) + 1
    first = max(first, 1)
    last = max(last, first)
    return first, last


def underline_parts(
    line_text: str,
    line_number: int,
    start: LineCol,
    end: LineCol,
    *,
    tab_width: int = 1,
    marker: str = "^",
) -> tuple[str, str]:
    """Build the underline for one excerpt line.

    Returns the leading padding and the markers separately so the caller can
    style the markers alone. A tab takes `tab_width` columns both in the
    padding and under the markers, matching how the excerpt row is drawn.
    An empty marked range still yields a single marker at its column.
    """
    first, last = marked_columns(line_text, line_number, start, end)
    column, width = _placement(line_text, first, last, tab_width)
    return " " * column, marker * width


def underline(
    line_text: str,
    line_number: int,
    start: LineCol,
    end: LineCol,
    *,
    tab_width: int = 1,
    marker: str = "^",
) -> str:
    padding, markers = underline_parts(line_text, line_number, start, end, tab_width=tab_width, marker=marker)
    return padding + markers


@dataclass(frozen=True, slots=True)
class Annotation:
    """One marked column range on an excerpt line, 1-based and half-open."""

    first: int
    last: int
    glyph: str
    text: str = ""
    kind: Severity | None = None


def annotation_rows(line_text: str, annotations: Iterable[Annotation], *, tab_width: int = 1) -> list[RenderedLine]:
    """Draw the rows under one excerpt line for all of its annotations.

    The first row holds every annotation's glyphs, followed by the text of
    the rightmost one. Each other annotation with text then hangs below on a
    `|` connector, the rightmost first, so no text crosses a connector.
    Annotations must not overlap.
    """
    placed = sorted(
        ((*_placement(line_text, annotation.first, annotation.last, tab_width), annotation) for annotation in annotations),
        key=lambda item: item[0],
    )
    if not placed:
        return []

    pieces: list[tuple[int, Segment]] = [
        (column, Segment(annotation.glyph * width, Role.MARKER, kind=annotation.kind))
        for column, width, annotation in placed
    ]
    column, width, rightmost = placed[-1]
    if rightmost.text:
        pieces.append((column + width + 1, Segment(rightmost.text, Role.ANNOTATION, kind=rightmost.kind)))
    rows = [_row(pieces)]

    pending = [(column, annotation) for column, _, annotation in placed[:-1] if annotation.text]
    while pending:
        rows.append(_row([_connector(column, annotation) for column, annotation in pending]))
        column, annotation = pending.pop()
        rows.append(
            _row(
                [_connector(other, waiting) for other, waiting in pending]
                + [(column, Segment(annotation.text, Role.ANNOTATION, kind=annotation.kind))]
            )
        )
    return rows


def _placement(line_text: str, first: int, last: int, tab_width: int) -> tuple[int, int]:
    """0-based display column and marker width of the columns first..last."""
    before = line_text[: first - 1]
    column = display_width(before, tab_width) + max(0, first - 1 - len(line_text))
    width = display_width(line_text[first - 1 : last - 1], tab_width)
    return column, max(width, 1)


def _connector(column: int, annotation: Annotation) -> tuple[int, Segment]:
    return column, Segment(CONNECTOR, Role.MARKER, kind=annotation.kind)


def _row(pieces: list[tuple[int, Segment]]) -> RenderedLine:
    segments: list[Segment] = []
    cursor = 0
    for column, segment in pieces:
        if column > cursor:
            segments.append(Segment(" " * (column - cursor)))
        segments.append(segment)
        cursor = max(cursor, column) + len(segment.text)
    return RenderedLine.of(*segments)
