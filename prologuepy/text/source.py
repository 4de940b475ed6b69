"""Text sources and offset -> line/column resolution."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field
from pathlib import Path

from prologuepy.errors import OffsetOutOfRange


@dataclass(frozen=True, slots=True, order=True)
class LineCol:
    """Resolved 1-based (line, column) coordinate, columns counted in characters."""

    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


def line_starts(text: str) -> tuple[int, ...]:
    """Offsets at which each line of text starts.

    `\\n`, `\\r\\n` and a lone `\\r` all end a line; `\\r\\n` counts once.
    Empty text has no lines. A trailing separator opens one last, empty line.
    """
    if not text:
        return ()
    starts = [0]
    index = 0
    length = len(text)
    while index < length:
        ch = text[index]
        if ch == "\n":
            starts.append(index + 1)
        elif ch == "\r":
            if index + 1 < length and text[index + 1] == "\n":
                index += 1
            starts.append(index + 1)
        index += 1
    return tuple(starts)


def locate(text: str, offset: int, *, starts: tuple[int, ...] | None = None) -> LineCol:
    """Resolve a character offset into a 1-based line/column pair."""
    if offset < 0 or offset > len(text):
        raise OffsetOutOfRange(offset, len(text))
    if starts is None:
        starts = line_starts(text)
    if not starts:
        return LineCol(1, 1)
    row = bisect_right(starts, offset) - 1
    return LineCol(row + 1, offset - starts[row] + 1)


def offset_of(text: str, position: LineCol, *, starts: tuple[int, ...] | None = None) -> int:
    """Inverse of `locate`: the character offset of a line/column pair."""
    if starts is None:
        starts = line_starts(text)
    if not starts:
        if position != LineCol(1, 1):
            raise OffsetOutOfRange(position.column - 1, 0)
        return 0
    if not 1 <= position.line <= len(starts):
        raise OffsetOutOfRange(len(text) + 1, len(text))
    offset = starts[position.line - 1] + position.column - 1
    if position.column < 1 or offset > len(text):
        raise OffsetOutOfRange(offset, len(text))
    return offset


def _strip_terminator(line: str) -> str:
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith(("\n", "\r")):
        return line[:-1]
    return line


@dataclass(frozen=True, slots=True)
class TextSource:
    """Immutable text to annotate, plus an optional display name (e.g. a file path)."""

    text: str
    name: str | None = None
    _starts: tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_starts", line_starts(self.text))

    @staticmethod
    def from_path(path: str | Path, *, name: str | None = None) -> "TextSource":
        """Read a UTF-8 file, dropping a leading BOM."""
        file_path = Path(path)
        decoded = file_path.read_bytes().decode("utf-8")
        text = decoded[1:] if decoded.startswith("\ufeff") else decoded
        return TextSource(text, name if name is not None else str(file_path).replace("\\", "/"))

    @property
    def is_empty(self) -> bool:
        return not self.text

    @property
    def line_count(self) -> int:
        """Number of lines holding content; a trailing empty line is not counted."""
        starts = self._starts
        if not starts:
            return 0
        if starts[-1] == len(self.text):
            return len(starts) - 1
        return len(starts)

    def display_name(self, anonymous: str = "<anonymous>") -> str:
        return self.name if self.name is not None else anonymous

    def locate(self, offset: int) -> LineCol:
        return locate(self.text, offset, starts=self._starts)

    def offset_of(self, position: LineCol) -> int:
        return offset_of(self.text, position, starts=self._starts)

    def line_text(self, line: int) -> str:
        """Content of a 1-based line without its terminator."""
        starts = self._starts
        if not 1 <= line <= len(starts):
            raise IndexError(f"line {line} is out of range (1..{len(starts)})")
        start = starts[line - 1]
        end = starts[line] if line < len(starts) else len(self.text)
        return _strip_terminator(self.text[start:end])
