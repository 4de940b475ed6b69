"""Line-number gutter formatting."""

from __future__ import annotations

from collections.abc import Iterable

from prologuepy.render.excerpt import ExcerptLine

SEPARATOR = "|"
NOTE_MARKER = "="
ARROW = "-->"


def gutter_width(lines: Iterable[ExcerptLine]) -> int:
    """Digits of the largest line number in the excerpt, at least 1."""
    largest = max((line.number for line in lines), default=0)
    return max(1, len(str(largest)))


def format_gutter(line_number: int, width: int) -> str:
    """Right-align a line number in a gutter of the given width."""
    return f"{line_number:>{width}}"


def blank_gutter(width: int) -> str:
    return " " * width
