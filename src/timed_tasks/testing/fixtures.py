# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Pytest fixtures for timed_tasks testing."""

from __future__ import annotations

import threading
from collections.abc import Iterator

import pytest

from timed_tasks.config import ExecutorSettings
from timed_tasks.executor import BoundedTimedExecutor


@pytest.fixture
def fast_settings() -> ExecutorSettings:
    """Settings with a short timeout so timeout paths finish quickly."""
    return ExecutorSettings(per_task_timeout_ms=50, grace_termination_ms=500)


@pytest.fixture
def executor() -> BoundedTimedExecutor:
    return BoundedTimedExecutor()


@pytest.fixture
def fast_executor(fast_settings: ExecutorSettings) -> BoundedTimedExecutor:
    return BoundedTimedExecutor(fast_settings)


@pytest.fixture
def gate() -> Iterator[threading.Event]:
    """Event for blocking tasks; always released at teardown so no worker thread is left stuck."""
    event = threading.Event()
    yield event
    event.set()
