"""Diagnostics core types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from prologuepy.diagnostics.severity import Severity
from prologuepy.errors import InvalidSpan, MissingSource, OffsetOutOfRange, OverlappingAnnotation
from prologuepy.text import LineCol, Span, TextSource


class NoteKind(StrEnum):
    """Kind of a trailing secondary row."""

    HELP = "help"
    NOTE = "note"


@dataclass(frozen=True, slots=True)
class Note:
    kind: NoteKind
    text: str


@dataclass(frozen=True, slots=True)
class Label:
    """A secondary annotation: a single-line span drawn under the excerpt, with optional text.

    `kind` picks the glyph and color; HELP labels are drawn with `-`, the
    others with the primary marker.
    """

    span: Span
    text: str = ""
    kind: Severity = Severity.HELP

    def __post_init__(self):
        if "\n" in self.text or "\r" in self.text:
            raise ValueError("label text must be a single line")


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """One annotated message: severity, message, optional located excerpt and notes.

    `source` and `span` are either both set or both None; a diagnostic without
    them renders as a header only. `label` is optional text drawn after the
    primary span's markers; `labels` are secondary annotations in the same text.
    Every span is validated against the text here, so an out-of-range or
    overlapping diagnostic can never reach the renderer.
    """

    severity: Severity
    message: str
    source: TextSource | None = None
    span: Span | None = None
    notes: tuple[Note, ...] = ()
    label: str = ""
    labels: tuple[Label, ...] = ()

    def __post_init__(self):
        if self.span is not None and self.source is None:
            raise MissingSource()
        if self.source is not None and self.span is None:
            raise ValueError("a text source requires a span")
        if self.source is None or self.span is None:
            if self.labels:
                raise MissingSource()
            if self.label:
                raise ValueError("a primary label requires a span")
            return
        if "\n" in self.label or "\r" in self.label:
            raise ValueError("label text must be a single line")

        length = len(self.source.text)
        for span in (self.span, *(label.span for label in self.labels)):
            for offset in (span.start, span.end):
                if offset > length:
                    raise OffsetOutOfRange(offset, length)
        for label in self.labels:
            start = self.source.locate(label.span.start)
            end = self.source.locate(label.span.end)
            if end.line != start.line and not (end.line == start.line + 1 and end.column == 1):
                raise InvalidSpan(label.span.start, label.span.end, "a label must stay on one line")
        _check_overlaps([self.span, *(label.span for label in self.labels)])

    @staticmethod
    def error(message: str) -> DiagnosticBuilder:
        return DiagnosticBuilder(Severity.ERROR, message)

    @staticmethod
    def warning(message: str) -> DiagnosticBuilder:
        return DiagnosticBuilder(Severity.WARNING, message)

    @staticmethod
    def info(message: str) -> DiagnosticBuilder:
        return DiagnosticBuilder(Severity.INFO, message)

    @staticmethod
    def note(message: str) -> DiagnosticBuilder:
        return DiagnosticBuilder(Severity.NOTE, message)

    @staticmethod
    def help(message: str) -> DiagnosticBuilder:
        return DiagnosticBuilder(Severity.HELP, message)

    @property
    def has_source(self) -> bool:
        return self.source is not None

    def start_position(self) -> LineCol | None:
        if self.source is None or self.span is None:
            return None
        return self.source.locate(self.span.start)

    def end_position(self) -> LineCol | None:
        if self.source is None or self.span is None:
            return None
        return self.source.locate(self.span.end)


def _check_overlaps(spans: list[Span]) -> None:
    """Raise `OverlappingAnnotation` when two spans cover a common character.

    An empty span still occupies the one column its marker is drawn in.
    """
    occupied = sorted((span.start, span.start + max(span.len(), 1)) for span in spans)
    for previous, current in zip(occupied, occupied[1:]):
        if current[0] < previous[1]:
            raise OverlappingAnnotation(previous, current)


class DiagnosticBuilder:
    """Chaining builder for `Diagnostic`.

    Example::

        diagnostic = (
            Diagnostic.error("unknown identifier")
            .source("fn main() {\\n    retrun;\\n}")
            .span(16, 22)
            .help("did you mean `return`?")
            .build()
        )
    """

    def __init__(self, severity: Severity, message: str) -> None:
        self._severity = severity
        self._message = message
        self._source: TextSource | None = None
        self._span: Span | None = None
        self._notes: list[Note] = []
        self._label = ""
        self._labels: list[Label] = []

    def source(self, source: TextSource | str, name: str | None = None) -> DiagnosticBuilder:
        """Attach the annotated text, either as a `TextSource` or as a raw string."""
        if isinstance(source, TextSource):
            if name is not None and name != source.name:
                source = TextSource(source.text, name)
            self._source = source
        else:
            self._source = TextSource(source, name)
        return self

    def span(self, start: Span | int, end: int | None = None) -> DiagnosticBuilder:
        """Set the primary span as a `Span` or as `start, end` offsets (end defaults to start)."""
        if isinstance(start, Span):
            if end is not None:
                raise TypeError("pass either a Span or start/end offsets, not both")
            self._span = start
        else:
            self._span = Span(start, start if end is None else end)
        return self

    def at(self, line: int, column: int, length: int = 0) -> DiagnosticBuilder:
        """Set the primary span from a 1-based line/column and a length in characters."""
        if self._source is None:
            raise MissingSource()
        start = self._source.offset_of(LineCol(line, column))
        self._span = Span.at(start, length)
        return self

    def primary_label(self, text: str) -> DiagnosticBuilder:
        """Set the text drawn after the primary span's markers."""
        self._label = text
        return self

    def label(
        self,
        span: Span | int,
        end: int | None = None,
        *,
        text: str = "",
        kind: Severity = Severity.HELP,
    ) -> DiagnosticBuilder:
        """Add a secondary annotation over `span` (or `span, end` offsets) on a single line."""
        if isinstance(span, Span):
            if end is not None:
                raise TypeError("pass either a Span or start/end offsets, not both")
        else:
            span = Span(span, span if end is None else end)
        self._labels.append(Label(span, text, kind))
        return self

    def help(self, text: str) -> DiagnosticBuilder:
        self._notes.append(Note(NoteKind.HELP, text))
        return self

    def note(self, text: str) -> DiagnosticBuilder:
        self._notes.append(Note(NoteKind.NOTE, text))
        return self

    def build(self) -> Diagnostic:
        return Diagnostic(
            severity=self._severity,
            message=self._message,
            source=self._source,
            span=self._span,
            notes=tuple(self._notes),
            label=self._label,
            labels=tuple(self._labels),
        )
