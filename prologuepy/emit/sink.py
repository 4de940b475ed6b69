"""The render sink: the one shared output stream and the indicator drawing on it."""

from __future__ import annotations

import logging
import sys
import threading
from typing import TextIO

from prologuepy.diagnostics import Diagnostic
from prologuepy.emit.progress import NullIndicator, ProgressIndicator
from prologuepy.errors import DestinationWriteError
from prologuepy.render import RenderedBlock, RenderOptions, render_diagnostic

logger = logging.getLogger(__name__)


class RenderSink:
    """Serializes writes of rendered blocks to one stream.

    Every write holds the sink's lock, suspends the registered progress
    indicator, writes the block in a single call, flushes, then resumes the
    indicator. `color=None` means "decide per write from the options and stream".
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        indicator: ProgressIndicator | None = None,
        color: bool | None = None,
    ) -> None:
        self.stream = stream if stream is not None else sys.stderr
        self.color = color
        self._indicator: ProgressIndicator = indicator if indicator is not None else NullIndicator()
        self._lock = threading.RLock()

    @property
    def indicator(self) -> ProgressIndicator:
        return self._indicator

    def register_indicator(self, indicator: ProgressIndicator) -> ProgressIndicator:
        """Swap in indicator and return the one it replaces."""
        with self._lock:
            previous, self._indicator = self._indicator, indicator
        logger.debug("registered progress indicator %r on %r", indicator, self.stream)
        return previous

    def unregister_indicator(self) -> ProgressIndicator:
        return self.register_indicator(NullIndicator())

    def color_enabled(self, options: RenderOptions | None = None) -> bool:
        if self.color is not None:
            return self.color
        resolved = options if options is not None else RenderOptions()
        return resolved.resolve_color(self.stream)

    def emit(self, block: RenderedBlock) -> None:
        """Write one block; styles on its segments are honored only if color is on."""
        self._write(block.render(color=self.color is not False and block.is_styled))

    def emit_diagnostic(self, diagnostic: Diagnostic, options: RenderOptions | None = None) -> None:
        block = render_diagnostic(diagnostic, options, color_enabled=self.color_enabled(options))
        self.emit(block)

    def emit_text(self, text: str) -> None:
        """Write preformatted text, adding the final newline if it is missing."""
        if text and not text.endswith("\n"):
            text += "\n"
        self._write(text)

    def _write(self, text: str) -> None:
        if not text:
            return
        with self._lock:
            indicator = self._indicator
            indicator.suspend()
            try:
                self.stream.write(text)
                self.stream.flush()
            except (OSError, ValueError) as exc:
                logger.debug("write to %r failed: %s", self.stream, exc)
                raise DestinationWriteError(self.stream, exc) from exc
            finally:
                indicator.resume()
