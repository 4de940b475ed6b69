#!/usr/bin/env python3
"""Simulated multi-threaded build printing diagnostics above a tqdm bar."""

from __future__ import annotations

import argparse
from queue import Empty, Queue
import threading
import time

from tqdm import tqdm

from prologuepy import ColorMode, Diagnostic, RenderOptions, RenderSink, TargetList, Task

UNITS: dict[str, float] = {
    "lexer": 0.8,
    "parser": 0.35,
    "ast": 0.75,
    "resolver": 0.225,
    "typecheck": 1.15,
    "lint": 0.78,
    "format": 0.34,
    "pipeline": 0.55,
}

LINT_SOURCE = """\
#![warn(missing_docs)]

pub struct Reporter {
    pub fn new() -> Reporter {
"""


def _build_unit(name: str, targets: TargetList, bar: tqdm, delay: float) -> None:
    target = targets.create_target(name)
    target.log_task(Task("Compiling", name))
    if name == "resolver":
        target.log(
            Diagnostic.warning("unused `Result` that must be used")
            .source('    targets.create_target("");\n', name="resolver.rs")
            .span(4, 30)
            .note("this `Result` may be an `Err` variant, which should be handled")
            .build()
        )
    if name == "lint":
        target.log_group(
            [
                Diagnostic.warning("missing documentation for a struct")
                .source(LINT_SOURCE, name="lint.rs")
                .at(3, 1, 19)
                .build(),
                Diagnostic.note("the lint level is defined here")
                .source(LINT_SOURCE, name="lint.rs")
                .at(1, 9, 12)
                .build(),
            ]
        )
    if name == "typecheck":
        target.log(
            Diagnostic.error("mismatched types")
            .source("let count: u32 = \"three\";\n", name="typecheck.rs")
            .span(17, 24)
            .help("expected `u32`, found `&str`")
            .build()
        )
    time.sleep(delay)

    target.if_errors(
        lambda count: target.log(
            Diagnostic.error(f"could not compile `{name}` due to {count} previous error{'s' if count > 1 else ''}")
            .build()
        )
    )
    target.if_warnings(
        lambda count: target.log(
            Diagnostic.warning(f"`{name}` generated {count} warning{'s' if count > 1 else ''}").build()
        )
    )
    bar.update(1)


def _worker(queue: Queue[str], targets: TargetList, bar: tqdm, scale: float) -> None:
    while True:
        try:
            name = queue.get_nowait()
        except Empty:
            return
        _build_unit(name, targets, bar, UNITS[name] * scale)


def main() -> int:
    parser = argparse.ArgumentParser(description="Render diagnostics while a progress bar is drawing")
    parser.add_argument("--workers", type=int, default=2, help="Worker threads (default: 2)")
    parser.add_argument(
        "--scale",
        type=float,
        default=1.0,
        help="Multiplier applied to every simulated compile time",
    )
    parser.add_argument(
        "--color",
        type=ColorMode,
        choices=list(ColorMode),
        default=ColorMode.AUTO,
        help="Colorize output (default: auto)",
    )
    args = parser.parse_args()

    sink = RenderSink()
    targets = TargetList(sink, RenderOptions.for_mode(args.color))
    main_target = targets.create_target("")
    main_target.log(Diagnostic.warning("this is a simulation, nothing is being compiled").build())

    queue: Queue[str] = Queue()
    for name in UNITS:
        queue.put(name)

    bar = tqdm(total=len(UNITS), desc="Building", unit="unit", file=sink.stream)
    targets.add_progress_bar(bar)
    try:
        threads = [
            threading.Thread(target=_worker, args=(queue, targets, bar, args.scale))
            for _ in range(max(args.workers, 1))
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
    finally:
        targets.clear_progress_bar()
        bar.close()

    main_target.log_task(Task("Finished", f"{len(UNITS)} units"))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
