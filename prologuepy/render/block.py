"""Rendered output carriers: segments, lines and blocks."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, replace
from enum import StrEnum

from termcolor import colored

from prologuepy.diagnostics import Severity


class Role(StrEnum):
    """What a piece of a rendered line is, used to decide how it may be styled."""

    PLAIN = "plain"
    LABEL = "label"
    MESSAGE = "message"
    ARROW = "arrow"
    LOCATION = "location"
    GUTTER = "gutter"
    SEPARATOR = "separator"
    EXCERPT = "excerpt"
    MARKER = "marker"
    ANNOTATION = "annotation"
    NOTE_KIND = "note_kind"
    NOTE_TEXT = "note_text"
    TASK_VERB = "task_verb"


@dataclass(frozen=True, slots=True)
class TextStyle:
    """termcolor color name plus attributes (e.g. ``bold``)."""

    color: str | None = None
    attrs: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Segment:
    text: str
    role: Role = Role.PLAIN
    style: TextStyle | None = None
    kind: Severity | None = None

    def render(self, color: bool) -> str:
        if not color or self.style is None or not self.text:
            return self.text
        return colored(
            self.text,
            self.style.color,
            attrs=list(self.style.attrs) or None,
            force_color=True,
        )


@dataclass(frozen=True, slots=True)
class RenderedLine:
    segments: tuple[Segment, ...] = ()

    @staticmethod
    def of(*segments: Segment) -> "RenderedLine":
        return RenderedLine(tuple(segment for segment in segments if segment.text))

    @property
    def text(self) -> str:
        return "".join(segment.text for segment in self.segments)

    def render(self, color: bool) -> str:
        return "".join(segment.render(color) for segment in self.segments)

    def restyle(
        self,
        styles: dict[Role, TextStyle],
        kind_styles: Mapping[Severity, TextStyle] | None = None,
    ) -> "RenderedLine":
        """Attach styles by role; a segment carrying its own `kind` takes `kind_styles[kind]` instead."""
        return RenderedLine(tuple(self._styled(segment, styles, kind_styles) for segment in self.segments))

    @staticmethod
    def _styled(
        segment: Segment,
        styles: dict[Role, TextStyle],
        kind_styles: Mapping[Severity, TextStyle] | None,
    ) -> Segment:
        if kind_styles is not None and segment.kind is not None and segment.kind in kind_styles:
            return replace(segment, style=kind_styles[segment.kind])
        if segment.role in styles:
            return replace(segment, style=styles[segment.role])
        return segment


@dataclass(frozen=True, slots=True)
class RenderedBlock:
    """Ordered rows of one rendered diagnostic; styles are metadata on segments."""

    lines: tuple[RenderedLine, ...] = ()

    def __iter__(self) -> Iterator[RenderedLine]:
        return iter(self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    def __add__(self, other: "RenderedBlock") -> "RenderedBlock":
        return RenderedBlock(self.lines + other.lines)

    @property
    def is_styled(self) -> bool:
        return any(segment.style is not None for line in self.lines for segment in line.segments)

    def lines_text(self) -> list[str]:
        return [line.text for line in self.lines]

    @property
    def text(self) -> str:
        """Unstyled content, one `\\n`-terminated row per line."""
        return "".join(f"{line}\n" for line in self.lines_text())

    def render(self, color: bool = False) -> str:
        return "".join(f"{line.render(color)}\n" for line in self.lines)

    def __str__(self) -> str:
        return self.render(color=self.is_styled)
