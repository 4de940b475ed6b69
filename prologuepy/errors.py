"""Errors raised while building or emitting diagnostics."""

from __future__ import annotations


class PrologueError(Exception):
    """Base class for every error raised by prologuepy."""


class InvalidSpan(PrologueError, ValueError):
    """A span whose offsets are negative or whose start is after its end."""

    def __init__(self, start: int, end: int, reason: str = "span start is after its end") -> None:
        super().__init__(f"invalid span {start}..{end}: {reason}")
        self.start = start
        self.end = end


class OffsetOutOfRange(PrologueError, ValueError):
    """An offset that points outside of the annotated text."""

    def __init__(self, offset: int, length: int) -> None:
        super().__init__(f"offset {offset} is out of range for text of length {length}")
        self.offset = offset
        self.length = length


class MissingSource(PrologueError, ValueError):
    """A span was given to a diagnostic builder that has no text to point into."""

    def __init__(self) -> None:
        super().__init__("a span requires a text source")


class DestinationWriteError(PrologueError, OSError):
    """The output stream failed while a rendered block was being written.

    The underlying stream error is kept as ``__cause__``.
    """

    def __init__(self, destination: object, cause: BaseException) -> None:
        super().__init__(f"could not write diagnostic to {destination!r}: {cause}")
        self.destination = destination


class TargetAlreadyExists(PrologueError, ValueError):
    """A target with the same name is already registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"target `{name}` already exists")
        self.name = name


class OverlappingAnnotation(PrologueError, ValueError):
    """Two annotations of one diagnostic cover the same characters."""

    def __init__(self, first: tuple[int, int], second: tuple[int, int]) -> None:
        super().__init__(
            f"annotation {second[0]}..{second[1]} overlaps with annotation {first[0]}..{first[1]}"
        )
        self.first = first
        self.second = second
