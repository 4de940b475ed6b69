"""Diagnostic block composition: header, locator, framed excerpt and notes."""

from __future__ import annotations

from collections.abc import Sequence

from prologuepy.diagnostics import Diagnostic, Note, Severity
from prologuepy.render.block import RenderedBlock, RenderedLine, Role, Segment
from prologuepy.render.excerpt import ExcerptLine, extract_ranges, primary_line_range
from prologuepy.render.gutter import (
    ARROW,
    NOTE_MARKER,
    SEPARATOR,
    blank_gutter,
    format_gutter,
    gutter_width,
)
from prologuepy.render.options import RenderOptions
from prologuepy.render.style import style
from prologuepy.render.underline import Annotation, annotation_rows, expand_tabs, marked_columns
from prologuepy.text import Span, TextSource

NO_SOURCE_PLACEHOLDER = "<no source available>"
ELISION = "..."


def excerpt_for(diagnostic: Diagnostic, options: RenderOptions) -> tuple[ExcerptLine, ...]:
    if diagnostic.source is None or diagnostic.span is None:
        return ()
    ranges = [primary_line_range(diagnostic.source, diagnostic.span)]
    for label in diagnostic.labels:
        line = diagnostic.source.locate(label.span.start).line
        ranges.append((line, line))
    return extract_ranges(diagnostic.source, ranges, options.context_before, options.context_after)


def required_width(diagnostic: Diagnostic, options: RenderOptions) -> int:
    """Gutter width this diagnostic needs on its own (0 when it has no source)."""
    if diagnostic.source is None:
        return 0
    return gutter_width(excerpt_for(diagnostic, options))


def compose(
    diagnostic: Diagnostic,
    options: RenderOptions | None = None,
    *,
    width: int | None = None,
) -> RenderedBlock:
    """Compose the unstyled block for one diagnostic.

    `width` forces a gutter width, which lets grouped diagnostics share one.
    """
    resolved = options if options is not None else RenderOptions()
    excerpt = excerpt_for(diagnostic, resolved)
    if width is None:
        width = gutter_width(excerpt) if diagnostic.source is not None else 0

    lines = _header(diagnostic)
    if diagnostic.source is not None and diagnostic.span is not None:
        position = diagnostic.source.locate(diagnostic.span.start)
        name = diagnostic.source.display_name(resolved.anonymous_name)
        lines.append(
            RenderedLine.of(
                Segment(ARROW, Role.ARROW),
                Segment(f" {name}:{position.line}:{position.column}", Role.LOCATION),
            )
        )
        if excerpt:
            lines.append(_frame_row(width))
            lines.extend(_excerpt_rows(diagnostic, diagnostic.source, diagnostic.span, excerpt, width, resolved))
        else:
            lines.append(_frame_row(width, NO_SOURCE_PLACEHOLDER))
        if diagnostic.notes:
            lines.append(_frame_row(width))
    for note in diagnostic.notes:
        lines.extend(_note_rows(note, width))
    return RenderedBlock(tuple(lines))


def render_diagnostic(
    diagnostic: Diagnostic,
    options: RenderOptions | None = None,
    *,
    color_enabled: bool = False,
    width: int | None = None,
) -> RenderedBlock:
    """Compose and, when color is enabled, style one diagnostic."""
    return style(compose(diagnostic, options, width=width), diagnostic.severity, color_enabled)


def compose_group(
    diagnostics: Sequence[Diagnostic],
    options: RenderOptions | None = None,
    *,
    color_enabled: bool = False,
) -> RenderedBlock:
    """Render related diagnostics back to back, aligned on one shared gutter width."""
    resolved = options if options is not None else RenderOptions()
    width = max((required_width(diagnostic, resolved) for diagnostic in diagnostics), default=0)
    block = RenderedBlock()
    for diagnostic in diagnostics:
        part_width = width if diagnostic.source is not None else 0
        block += render_diagnostic(diagnostic, resolved, color_enabled=color_enabled, width=part_width)
    return block


def _header(diagnostic: Diagnostic) -> list[RenderedLine]:
    label = diagnostic.severity.label
    first, *rest = diagnostic.message.split("\n")
    lines = [
        RenderedLine.of(
            Segment(label, Role.LABEL),
            Segment(": ", Role.PLAIN),
            Segment(first, Role.MESSAGE),
        )
    ]
    indent = " " * (len(label) + 2)
    lines.extend(RenderedLine.of(Segment(indent), Segment(line, Role.MESSAGE)) for line in rest)
    return lines


def _frame_row(width: int, text: str = "") -> RenderedLine:
    return RenderedLine.of(
        Segment(blank_gutter(width)),
        Segment(f" {SEPARATOR}" if width else SEPARATOR, Role.SEPARATOR),
        Segment(f" {text}" if text else "", Role.PLAIN),
    )


def _excerpt_rows(
    diagnostic: Diagnostic,
    source: TextSource,
    span: Span,
    excerpt: tuple[ExcerptLine, ...],
    width: int,
    options: RenderOptions,
) -> list[RenderedLine]:
    start = source.locate(span.start)
    end = source.locate(span.end)
    first_line, last_line = primary_line_range(source, span)

    rows: list[RenderedLine] = []
    previous: int | None = None
    for line in excerpt:
        if previous is not None and line.number > previous + 1:
            rows.append(RenderedLine.of(Segment(ELISION, Role.GUTTER)))
        previous = line.number

        shown = expand_tabs(line.text, options.tab_width)
        rows.append(
            RenderedLine.of(
                Segment(format_gutter(line.number, width), Role.GUTTER),
                Segment(f" {SEPARATOR}", Role.SEPARATOR),
                Segment(f" {shown}" if shown else "", Role.EXCERPT),
            )
        )

        annotations: list[Annotation] = []
        if first_line <= line.number <= last_line:
            first, last = marked_columns(line.text, line.number, start, end)
            text = diagnostic.label if line.number == last_line else ""
            annotations.append(Annotation(first, last, options.marker, text, diagnostic.severity))
        for label in diagnostic.labels:
            label_start = source.locate(label.span.start)
            if label_start.line != line.number:
                continue
            first, last = marked_columns(line.text, line.number, label_start, source.locate(label.span.end))
            glyph = options.help_marker if label.kind is Severity.HELP else options.marker
            annotations.append(Annotation(first, last, glyph, label.text, label.kind))

        for row in annotation_rows(line.text, annotations, tab_width=options.tab_width):
            rows.append(
                RenderedLine.of(
                    Segment(blank_gutter(width)),
                    Segment(f" {SEPARATOR}", Role.SEPARATOR),
                    Segment(" "),
                    *row.segments,
                )
            )
    return rows


def _note_rows(note: Note, width: int) -> list[RenderedLine]:
    first, *rest = note.text.split("\n")
    lead = blank_gutter(width + 1)
    rows = [
        RenderedLine.of(
            Segment(lead),
            Segment(NOTE_MARKER, Role.SEPARATOR),
            Segment(" "),
            Segment(note.kind.value, Role.NOTE_KIND),
            Segment(": "),
            Segment(first, Role.NOTE_TEXT),
        )
    ]
    indent = " " * (len(lead) + len(NOTE_MARKER) + len(note.kind.value) + 3)
    rows.extend(RenderedLine.of(Segment(indent), Segment(line, Role.NOTE_TEXT)) for line in rest)
    return rows
