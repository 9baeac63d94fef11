# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from pathlib import Path

import typer
from rich.markup import escape

from timed_tasks.cli.ui import build_report_table, console, print_error, print_header, print_success
from timed_tasks.config import ExecutorSettings
from timed_tasks.errors import InvalidConfigError, ResourceExhaustedError, TaskError
from timed_tasks.executor import BoundedTimedExecutor
from timed_tasks.logging import LoggingConfig, configure_logging
from timed_tasks.task import TimedTask


class SleepTask(TimedTask[int]):
    """Sleeps for a fixed time, then returns its index or fails."""

    def __init__(self, index: int, sleep_ms: int, fail: bool = False) -> None:
        super().__init__()
        self.index = index
        self.sleep_ms = sleep_ms
        self.fail = fail

    def run_inner(self) -> int:
        self.sleep(self.sleep_ms / 1000)
        if self.fail:
            raise RuntimeError(f"Task {self.index} failed on request.")
        return self.index


def bench_command(
    tasks: int = typer.Option(8, "--tasks", "-n", min=1, help="Number of tasks in the batch"),
    parallelism: int = typer.Option(4, "--parallelism", "-p", min=1, help="Number of worker threads"),
    sleep_ms: int = typer.Option(10, "--sleep-ms", min=0, help="How long each task sleeps"),
    fail: list[int] | None = typer.Option(None, "--fail", help="Index of a task that should fail (repeatable)"),
    settings_file: Path | None = typer.Option(None, "--settings", help="YAML file with executor settings"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Run a batch of sleeping tasks and print the execution report.

    Examples:
        # Eight 50ms tasks on two threads
        timed-tasks bench -n 8 -p 2 --sleep-ms 50

        # Make tasks 1 and 3 fail
        timed-tasks bench --fail 1 --fail 3
    """
    configure_logging(LoggingConfig.debug() if verbose else LoggingConfig.default())

    try:
        settings = ExecutorSettings.from_yaml(settings_file) if settings_file is not None else ExecutorSettings()
    except InvalidConfigError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1)

    print_header("timed-tasks bench")
    console.print(f"  Tasks: [bold]{tasks}[/bold]  Parallelism: [bold]{parallelism}[/bold]")
    console.print()

    failing = set(fail or [])
    batch = [SleepTask(index, sleep_ms, fail=index in failing) for index in range(tasks)]
    executor = BoundedTimedExecutor(settings)

    try:
        report = executor.run("bench", batch, parallelism)
    except ResourceExhaustedError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1)
    except TaskError as e:
        if e.report is not None:
            console.print(build_report_table(e.report))
        print_error(f"{escape(str(e))} ({len(e.suppressed)} more failure(s) suppressed)")
        raise typer.Exit(code=1)

    console.print(build_report_table(report))
    print_success(f"All {report.completed_count} tasks completed")
