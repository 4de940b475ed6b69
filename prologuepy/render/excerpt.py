"""Excerpt extraction: the source lines shown around a span."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from prologuepy.text import Span, TextSource


@dataclass(frozen=True, slots=True)
class ExcerptLine:
    """One physical line of the source, terminator stripped."""

    number: int
    text: str
    in_span: bool


def primary_line_range(source: TextSource, span: Span) -> tuple[int, int]:
    """First and last line touched by span.

    A multi-line span that ends right at the start of a line (column 1) does
    not touch that line.
    """
    start = source.locate(span.start)
    end = source.locate(span.end)
    last_line = end.line
    if end.line > start.line and end.column == 1:
        last_line -= 1
    return start.line, last_line


def extract(
    source: TextSource,
    first_line: int,
    last_line: int,
    context_before: int = 0,
    context_after: int = 0,
) -> tuple[ExcerptLine, ...]:
    """Slice the lines [first_line, last_line] plus clamped context around them."""
    if source.is_empty:
        return ()
    if first_line > last_line:
        raise ValueError(f"invalid line range {first_line}..{last_line}")

    # The trailing empty line after a final separator only shows up when
    # the span itself points at it.
    last_available = max(source.line_count, last_line)
    start = max(1, first_line - context_before)
    end = min(last_available, last_line + context_after)

    return tuple(
        ExcerptLine(
            number=number,
            text=source.line_text(number),
            in_span=first_line <= number <= last_line,
        )
        for number in range(start, end + 1)
    )


def extract_span(
    source: TextSource,
    span: Span,
    context_before: int = 0,
    context_after: int = 0,
) -> tuple[ExcerptLine, ...]:
    return extract_ranges(source, [primary_line_range(source, span)], context_before, context_after)


def extract_ranges(
    source: TextSource,
    ranges: Iterable[tuple[int, int]],
    context_before: int = 0,
    context_after: int = 0,
) -> tuple[ExcerptLine, ...]:
    """Lines of several [first, last] ranges, each with its own clamped context.

    Windows that overlap or touch are merged, and a gap of a single line is
    filled rather than elided. A line is `in_span` when any range covers it.
    """
    ordered = sorted(ranges)
    if source.is_empty or not ordered:
        return ()
    for first_line, last_line in ordered:
        if first_line > last_line:
            raise ValueError(f"invalid line range {first_line}..{last_line}")

    last_available = max(source.line_count, max(last for _, last in ordered))
    windows: list[list[int]] = []
    for first_line, last_line in ordered:
        start = max(1, first_line - context_before)
        end = min(last_available, last_line + context_after)
        if windows and start <= windows[-1][1] + 2:
            windows[-1][1] = max(windows[-1][1], end)
        else:
            windows.append([start, end])

    return tuple(
        ExcerptLine(
            number=number,
            text=source.line_text(number),
            in_span=any(first <= number <= last for first, last in ordered),
        )
        for start, end in windows
        for number in range(start, end + 1)
    )
