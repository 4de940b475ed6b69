from dataclasses import dataclass

from prologuepy.errors import InvalidSpan


@dataclass(frozen=True, slots=True, order=True)
class Span:
    """
    Half-open range [start, end) of character offsets into a text.

    Invariant:
    - 0 <= start <= end

    Offsets index the text the same way Python strings do, so a span is
    correct under multi-byte text without any byte/char conversion.
    """

    start: int
    end: int

    def __post_init__(self):
        if self.start < 0 or self.end < 0:
            raise InvalidSpan(self.start, self.end, "span offsets cannot be negative")
        if self.start > self.end:
            raise InvalidSpan(self.start, self.end)

    @staticmethod
    def at(offset: int, length: int) -> "Span":
        """Create a span starting at offset covering length characters."""
        return Span(offset, offset + length)

    @staticmethod
    def empty(offset: int) -> "Span":
        """Create a zero-width span at the given offset."""
        return Span(offset, offset)

    def len(self) -> int:
        return self.end - self.start

    def is_empty(self) -> bool:
        return self.start == self.end

    def __repr__(self) -> str:
        return f"Span({self.start}, {self.end})"
