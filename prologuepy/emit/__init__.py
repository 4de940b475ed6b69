"""Output side: the render sink, progress indicators, targets and logging."""

from prologuepy.emit.handler import (
    LEVEL_SEVERITIES,
    PrologueHandler,
    install_handler,
    severity_for_level,
)
from prologuepy.emit.progress import NullIndicator, ProgressIndicator, TqdmIndicator, progress_bar
from prologuepy.emit.sink import RenderSink
from prologuepy.emit.target import Target, TargetList, Task

__all__ = [
    "LEVEL_SEVERITIES",
    "NullIndicator",
    "ProgressIndicator",
    "PrologueHandler",
    "RenderSink",
    "Target",
    "TargetList",
    "Task",
    "TqdmIndicator",
    "install_handler",
    "progress_bar",
    "severity_for_level",
]
