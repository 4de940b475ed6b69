"""Diagnostics."""

from prologuepy.diagnostics.diagnostic import (
    Diagnostic,
    DiagnosticBuilder,
    Label,
    Note,
    NoteKind,
)
from prologuepy.diagnostics.report import (
    collect_diagnostics,
    count_by_severity,
    has_errors,
    most_severe,
    sort_diagnostics,
)
from prologuepy.diagnostics.severity import Severity

__all__ = [
    "Diagnostic",
    "DiagnosticBuilder",
    "Label",
    "Note",
    "NoteKind",
    "Severity",
    "collect_diagnostics",
    "count_by_severity",
    "has_errors",
    "most_severe",
    "sort_diagnostics",
]
