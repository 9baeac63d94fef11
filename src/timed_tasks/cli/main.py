# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import typer

from timed_tasks.cli.commands import bench

app = typer.Typer(
    name="timed-tasks",
    help="timed-tasks CLI - run batches of timed tasks on a bounded worker pool",
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command(name="bench", help="Run a synthetic batch of sleeping tasks and report timings")(bench.bench_command)


@app.callback()
def callback() -> None:
    """timed-tasks command line interface."""


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
