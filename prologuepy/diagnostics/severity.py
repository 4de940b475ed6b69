"""Diagnostic severity levels."""

from __future__ import annotations

from enum import Enum


class Severity(Enum):
    """
    Severity of a diagnostic.

    Members compare by how severe they are: ERROR > WARNING > INFO > NOTE > HELP.
    The order is fixed and total; it drives default styling and the order of
    batched diagnostics.
    """

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    NOTE = "note"
    HELP = "help"

    @property
    def label(self) -> str:
        """Header label, e.g. ``error``."""
        return self.value

    @property
    def rank(self) -> int:
        """0 for the most severe level, increasing as severity drops."""
        return _RANKS[self]

    @classmethod
    def from_label(cls, label: str) -> Severity:
        normalized = label.strip().lower()
        if normalized == "warn":
            normalized = "warning"
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(f"unknown severity label: {label!r}") from None

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank > other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank >= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank <= other.rank


_RANKS: dict[Severity, int] = {severity: rank for rank, severity in enumerate(Severity)}
