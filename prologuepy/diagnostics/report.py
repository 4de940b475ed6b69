"""Diagnostics helpers."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from prologuepy.diagnostics.diagnostic import Diagnostic
from prologuepy.diagnostics.severity import Severity


def collect_diagnostics(*groups: Iterable[Diagnostic]) -> list[Diagnostic]:
    diagnostics: list[Diagnostic] = []
    for group in groups:
        diagnostics.extend(group)
    return diagnostics


def has_errors(diagnostics: Iterable[Diagnostic]) -> bool:
    return any(d.severity is Severity.ERROR for d in diagnostics)


def count_by_severity(diagnostics: Iterable[Diagnostic]) -> dict[Severity, int]:
    counts = Counter(d.severity for d in diagnostics)
    return {severity: counts.get(severity, 0) for severity in Severity}


def most_severe(diagnostics: Iterable[Diagnostic]) -> Severity | None:
    return max((d.severity for d in diagnostics), default=None)


def sort_diagnostics(diagnostics: Iterable[Diagnostic]) -> list[Diagnostic]:
    """Most severe first, then by source name and span position; stable otherwise."""
    return sorted(
        diagnostics,
        key=lambda diagnostic: (
            diagnostic.severity.rank,
            (diagnostic.source.name or "") if diagnostic.source is not None else "",
            diagnostic.span.start if diagnostic.span is not None else -1,
            diagnostic.span.end if diagnostic.span is not None else -1,
        ),
    )
