# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from timed_tasks.report import ExecutionReport


class TimedTasksError(Exception):
    """Base exception for all errors raised by timed_tasks."""


class InvalidArgumentError(TimedTasksError, ValueError):
    """Raised when a run is requested with arguments that cannot be executed, e.g. an empty batch."""


class InvalidConfigError(TimedTasksError):
    """Raised when executor settings are invalid."""


class InvalidFilePathError(InvalidConfigError):
    """Raised when a settings file does not exist."""


class InvalidFileFormatError(InvalidConfigError):
    """Raised when a settings file cannot be parsed."""


class ResourceExhaustedError(TimedTasksError):
    """Raised when a batch does not finish within its aggregate timeout.

    Any outstanding work has already been cancelled by the time this is raised. `terminated` tells whether
    the interrupted workers actually stopped within the grace period.
    """

    def __init__(
        self,
        message: str,
        *,
        activity: str,
        timeout_ms: int,
        task_count: int,
        parallelism: int,
        terminated: bool,
    ) -> None:
        super().__init__(message)
        self.activity = activity
        self.timeout_ms = timeout_ms
        self.task_count = task_count
        self.parallelism = parallelism
        self.terminated = terminated


class TaskError(TimedTasksError):
    """Failure surfaced by a single task.

    When several tasks of a batch fail, the first one (in submission order) is raised and the others are
    attached to it as suppressed errors, available through `suppressed`.
    """

    def __init__(self, *args: object) -> None:
        super().__init__(*args)
        self._suppressed: list[BaseException] = []
        self.report: ExecutionReport | None = None

    @property
    def suppressed(self) -> tuple[BaseException, ...]:
        return tuple(self._suppressed)

    def add_suppressed(self, error: BaseException) -> None:
        if error is self:
            raise ValueError("An error cannot suppress itself.")
        self._suppressed.append(error)


class TaskIOError(TaskError, OSError):
    """Task failure for IO-bound work."""


class TaskInterruptedError(TaskError):
    """Raised by a task that observed the interruption signal of its worker pool."""
