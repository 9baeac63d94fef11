# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("timed-tasks")
except PackageNotFoundError:
    __version__ = "0.0.0.dev0+unknown"

from timed_tasks.config import ExecutorSettings
from timed_tasks.errors import (
    InvalidArgumentError,
    InvalidConfigError,
    ResourceExhaustedError,
    TaskError,
    TaskInterruptedError,
    TaskIOError,
    TimedTasksError,
)
from timed_tasks.executor import BoundedTimedExecutor, run_timed_tasks
from timed_tasks.report import ExecutionReport
from timed_tasks.task import CallableTask, IOTimedTask, TimedTask

__all__ = [
    "__version__",
    "BoundedTimedExecutor",
    "CallableTask",
    "ExecutionReport",
    "ExecutorSettings",
    "InvalidArgumentError",
    "InvalidConfigError",
    "IOTimedTask",
    "ResourceExhaustedError",
    "TaskError",
    "TaskInterruptedError",
    "TaskIOError",
    "TimedTask",
    "TimedTasksError",
    "run_timed_tasks",
]
