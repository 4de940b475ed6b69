"""Progress indicators the sink suspends around every write."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from contextlib import AbstractContextManager, contextmanager
import logging
from typing import TYPE_CHECKING, Any, Protocol, TextIO, TypeVar

from tqdm import tqdm

if TYPE_CHECKING:
    from prologuepy.emit.sink import RenderSink

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ProgressIndicator(Protocol):
    """Something drawn on the terminal that has to step aside while a block is written."""

    def suspend(self) -> None: ...

    def resume(self) -> None: ...


class NullIndicator:
    """No-op indicator used when nothing is drawing on the stream."""

    def suspend(self) -> None:
        return None

    def resume(self) -> None:
        return None


class TqdmIndicator:
    """Adapts tqdm bars drawing on `file` to the suspend/resume contract.

    `suspend` clears every bar on that stream and holds tqdm's lock until
    `resume` redraws them.
    """

    def __init__(self, file: TextIO | None = None) -> None:
        self.file = file
        self._active: AbstractContextManager[Any] | None = None

    def suspend(self) -> None:
        if self._active is not None:
            return
        mode = tqdm.external_write_mode(file=self.file)
        mode.__enter__()
        self._active = mode

    def resume(self) -> None:
        mode, self._active = self._active, None
        if mode is None:
            return
        mode.__exit__(None, None, None)


@contextmanager
def progress_bar(iterable: Iterable[T], *, sink: RenderSink, **tqdm_kwargs: Any) -> Iterator[tqdm]:
    """Create a tqdm bar drawing on the sink's stream and keep the sink aware of it.

    Diagnostics emitted through `sink` while the bar is alive are written above it.
    """
    tqdm_kwargs.setdefault("file", sink.stream)
    bar = tqdm(iterable, **tqdm_kwargs)
    previous = sink.register_indicator(TqdmIndicator(tqdm_kwargs["file"]))
    try:
        yield bar
    finally:
        sink.register_indicator(previous)
        bar.close()
