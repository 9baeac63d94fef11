# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from timed_tasks.report import NANOS_PER_MILLI, ExecutionReport

console = Console()


def print_header(title: str) -> None:
    console.print()
    console.rule(f"[bold]{title}[/bold]")


def print_success(message: str) -> None:
    console.print(f"[green]✔[/green] {message}")


def print_error(message: str) -> None:
    console.print(f"[red]✘[/red] {message}")


def print_warning(message: str) -> None:
    console.print(f"[yellow]![/yellow] {message}")


def build_report_table(report: ExecutionReport) -> Table:
    table = Table(title=f"Activity: {escape(report.activity)}", show_header=True, header_style="bold")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Tasks", str(report.submitted_count))
    table.add_row("Completed", str(report.completed_count))
    table.add_row("Failed", str(report.failed_count))
    table.add_row("Threads", str(report.parallelism))
    table.add_row("Wall time", f"{report.wall_time_ns / NANOS_PER_MILLI:.1f}ms")
    table.add_row("Mean task time", f"{report.mean_time_ns / NANOS_PER_MILLI:.1f}ms")
    table.add_row("Max task time", f"{report.max_time_ns / NANOS_PER_MILLI:.1f}ms")
    return table
