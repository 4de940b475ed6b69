"""`logging` integration: records become rendered diagnostics."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from types import MappingProxyType
from typing import Final

from prologuepy.diagnostics import Diagnostic, Note, NoteKind, Severity
from prologuepy.emit.sink import RenderSink
from prologuepy.emit.target import TargetList
from prologuepy.render import RenderOptions
from prologuepy.text import Span, TextSource

LEVEL_SEVERITIES: Final[Mapping[int, Severity]] = MappingProxyType(
    {
        logging.CRITICAL: Severity.ERROR,
        logging.ERROR: Severity.ERROR,
        logging.WARNING: Severity.WARNING,
        logging.INFO: Severity.INFO,
        logging.DEBUG: Severity.HELP,
    }
)

_OWN_LOGGER = "prologuepy"


def severity_for_level(levelno: int) -> Severity:
    """Severity of the nearest known level at or below levelno (HELP below DEBUG)."""
    known = [level for level in LEVEL_SEVERITIES if level <= levelno]
    if not known:
        return Severity.HELP
    return LEVEL_SEVERITIES[max(known)]


class PrologueHandler(logging.Handler):
    """Renders log records as diagnostics on a `RenderSink`.

    A record may carry a ready `Diagnostic` as ``extra={"diagnostic": ...}``,
    or a text and a span as ``extra={"source": ..., "span": ...}``; anything
    else renders as a header-only diagnostic of the formatted message. When
    a target named after the record's logger exists, it receives the record
    so its error/warning counts stay accurate.
    """

    def __init__(
        self,
        sink: RenderSink | None = None,
        targets: TargetList | None = None,
        options: RenderOptions | None = None,
        level: int = logging.NOTSET,
    ) -> None:
        super().__init__(level)
        if sink is None:
            sink = targets.sink if targets is not None else RenderSink()
        self.sink = sink
        self.targets = targets
        self.options = options if options is not None else RenderOptions()

    def emit(self, record: logging.LogRecord) -> None:
        if record.name == _OWN_LOGGER or record.name.startswith(f"{_OWN_LOGGER}."):
            return
        try:
            diagnostic = self.diagnostic_for(record)
            target = self.targets.find(record.name) if self.targets is not None else None
            if target is not None:
                target.log(diagnostic)
            else:
                self.sink.emit_diagnostic(diagnostic, self.options)
        except RecursionError:
            raise
        except Exception:
            self.handleError(record)

    def diagnostic_for(self, record: logging.LogRecord) -> Diagnostic:
        attached = getattr(record, "diagnostic", None)
        if isinstance(attached, Diagnostic):
            return attached

        severity = severity_for_level(record.levelno)
        notes: tuple[Note, ...] = ()
        if record.exc_info:
            formatter = self.formatter if self.formatter is not None else logging.Formatter()
            notes = (Note(NoteKind.NOTE, formatter.formatException(record.exc_info)),)

        source = getattr(record, "source", None)
        span = getattr(record, "span", None)
        if source is None or span is None:
            return Diagnostic(severity, record.getMessage(), notes=notes)
        if not isinstance(source, TextSource):
            source = TextSource(str(source))
        if not isinstance(span, Span):
            start, end = span
            span = Span(start, end)
        return Diagnostic(severity, record.getMessage(), source, span, notes)


def install_handler(
    logger: logging.Logger | str | None = None,
    *,
    level: int = logging.INFO,
    sink: RenderSink | None = None,
    targets: TargetList | None = None,
    options: RenderOptions | None = None,
) -> PrologueHandler:
    """Attach a `PrologueHandler` to logger (the root logger by default)."""
    if logger is None or isinstance(logger, str):
        logger = logging.getLogger(logger)
    handler = PrologueHandler(sink=sink, targets=targets, options=options, level=level)
    logger.addHandler(handler)
    if logger.level == logging.NOTSET or logger.level > level:
        logger.setLevel(level)
    return handler
