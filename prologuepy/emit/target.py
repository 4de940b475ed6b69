"""Named output targets that count the errors and warnings logged through them."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
import logging
import threading
from typing import Final

from tqdm import tqdm

from prologuepy.diagnostics import Diagnostic, Severity, most_severe
from prologuepy.emit.progress import TqdmIndicator
from prologuepy.emit.sink import RenderSink
from prologuepy.errors import TargetAlreadyExists
from prologuepy.render import (
    RenderedBlock,
    RenderedLine,
    RenderOptions,
    Role,
    Segment,
    compose_group,
    render_diagnostic,
)
from prologuepy.render.style import TASK_STYLE

logger = logging.getLogger(__name__)

TASK_VERB_WIDTH: Final[int] = 12


@dataclass(frozen=True, slots=True)
class Task:
    """A one-line progress note such as ``   Compiling core``."""

    verb: str
    description: str

    def compose(self, width: int = TASK_VERB_WIDTH) -> RenderedBlock:
        return RenderedBlock(
            (
                RenderedLine.of(
                    Segment(f"{self.verb:>{width}}", Role.TASK_VERB),
                    Segment(f" {self.description}"),
                ),
            )
        )

    def render(self, color_enabled: bool = False, width: int = TASK_VERB_WIDTH) -> RenderedBlock:
        block = self.compose(width)
        if not color_enabled:
            return block
        styles = {Role.TASK_VERB: TASK_STYLE}
        return RenderedBlock(tuple(line.restyle(styles) for line in block.lines))

    @property
    def text(self) -> str:
        return self.compose().text


class Target:
    """Emits diagnostics and tasks under one name and keeps error/warning counts.

    A group of related diagnostics counts once, at its most severe member.
    """

    def __init__(
        self,
        name: str,
        sink: RenderSink | None = None,
        options: RenderOptions | None = None,
    ) -> None:
        self.name = name
        self.sink = sink if sink is not None else RenderSink()
        self.options = options if options is not None else RenderOptions()
        self._errors = 0
        self._warnings = 0
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"Target(name={self.name!r}, errors={self.error_count}, warnings={self.warning_count})"

    @property
    def error_count(self) -> int:
        with self._lock:
            return self._errors

    @property
    def warning_count(self) -> int:
        with self._lock:
            return self._warnings

    def count(self, severity: Severity) -> None:
        with self._lock:
            if severity is Severity.ERROR:
                self._errors += 1
            elif severity is Severity.WARNING:
                self._warnings += 1

    def log(self, diagnostic: Diagnostic) -> None:
        self.count(diagnostic.severity)
        color = self.sink.color_enabled(self.options)
        block = render_diagnostic(diagnostic, self.options, color_enabled=color)
        if diagnostic.has_source:
            block += RenderedBlock((RenderedLine(),))
        self.sink.emit(block)

    def log_group(self, diagnostics: Sequence[Diagnostic]) -> None:
        """Emit related diagnostics back to back on a shared gutter, then one blank line."""
        severity = most_severe(diagnostics)
        if severity is None:
            return
        self.count(severity)
        color = self.sink.color_enabled(self.options)
        block = compose_group(diagnostics, self.options, color_enabled=color)
        self.sink.emit(block + RenderedBlock((RenderedLine(),)))

    def log_task(self, task: Task) -> None:
        self.sink.emit(task.render(self.sink.color_enabled(self.options)))

    def if_errors(self, callback: Callable[[int], object]) -> object | None:
        count = self.error_count
        if count > 0:
            return callback(count)
        return None

    def if_warnings(self, callback: Callable[[int], object]) -> object | None:
        count = self.warning_count
        if count > 0:
            return callback(count)
        return None


class TargetList:
    """Registry of uniquely named targets sharing one sink."""

    def __init__(self, sink: RenderSink | None = None, options: RenderOptions | None = None) -> None:
        self.sink = sink if sink is not None else RenderSink()
        self.options = options if options is not None else RenderOptions()
        self._targets: dict[str, Target] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._targets)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._targets

    def names(self) -> list[str]:
        with self._lock:
            return list(self._targets)

    def find(self, name: str) -> Target | None:
        with self._lock:
            return self._targets.get(name)

    def create_target(self, name: str) -> Target:
        target = Target(name, self.sink, self.options)
        self.add_target(target)
        return target

    def add_target(self, target: Target) -> None:
        with self._lock:
            if target.name in self._targets:
                raise TargetAlreadyExists(target.name)
            self._targets[target.name] = target
        logger.debug("created target %r", target.name)

    def add_progress_bar(self, bar: tqdm) -> TqdmIndicator:
        """Have every write through the shared sink step around `bar`."""
        indicator = TqdmIndicator(bar.fp)
        self.sink.register_indicator(indicator)
        return indicator

    def clear_progress_bar(self) -> None:
        self.sink.unregister_indicator()
