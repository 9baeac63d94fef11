# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import contextvars
import logging
from concurrent.futures import ALL_COMPLETED, Future, ThreadPoolExecutor, wait
from threading import Condition, Event, Lock
from typing import Any, Callable

logger = logging.getLogger(__name__)


class CountDownLatch:
    """Completion signal shared between the workers of a batch and the waiting caller.

    Workers call `count_down` once each; the caller blocks in `wait` until the count reaches zero or the
    timeout elapses.
    """

    def __init__(self, count: int) -> None:
        if count < 0:
            raise ValueError(f"Latch count must be non-negative, got {count}.")
        self._count = count
        self._condition = Condition(Lock())

    @property
    def count(self) -> int:
        with self._condition:
            return self._count

    def count_down(self) -> None:
        with self._condition:
            if self._count == 0:
                return
            self._count -= 1
            if self._count == 0:
                self._condition.notify_all()

    def wait(self, timeout_s: float | None = None) -> bool:
        """Block until the count reaches zero. Returns False if the timeout elapsed first."""
        with self._condition:
            return self._condition.wait_for(lambda: self._count == 0, timeout=timeout_s)


class WorkerPool:
    """Fixed-size, single-use thread pool for one batch of tasks.

    Unlike a bare ThreadPoolExecutor, the pool exposes an interruption event that is set by
    `shutdown_now`. Running work cannot be stopped forcibly, so tasks are expected to poll the event and
    bail out when it is set.

    ContextVars from the thread that creates the pool are propagated to all worker threads.
    """

    def __init__(self, *, max_workers: int, name: str = "WorkerPool") -> None:
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}.")
        self._max_workers = max_workers
        self._interrupted = Event()
        self._lock = Lock()
        self._futures: list[Future] = []
        self._is_shutdown = False
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix=name,
            initializer=_set_worker_contextvars,
            initargs=(contextvars.copy_context(),),
        )

    @property
    def max_workers(self) -> int:
        return self._max_workers

    @property
    def interrupted(self) -> Event:
        return self._interrupted

    @property
    def is_shutdown(self) -> bool:
        return self._is_shutdown

    def submit(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Future:
        with self._lock:
            if self._is_shutdown:
                raise RuntimeError("Cannot submit work to a pool that has been shut down.")
            future = self._executor.submit(fn, *args, **kwargs)
            self._futures.append(future)
            return future

    def shutdown(self) -> None:
        """Stop accepting work and let submitted work finish. Safe to call more than once."""
        with self._lock:
            if self._is_shutdown:
                return
            self._is_shutdown = True
        self._executor.shutdown(wait=True)

    def shutdown_now(self) -> list[Future]:
        """Signal interruption to running work and discard queued work.

        Returns:
            The futures that were cancelled before they started.
        """
        with self._lock:
            self._is_shutdown = True
            futures = list(self._futures)
        self._interrupted.set()
        # Running futures cannot be cancelled; they only see the interruption event.
        self._executor.shutdown(wait=False, cancel_futures=True)
        cancelled = [future for future in futures if future.cancelled()]
        if cancelled:
            logger.debug("Discarded %d queued task(s) during forced shutdown.", len(cancelled))
        return cancelled

    def await_termination(self, timeout_s: float | None) -> bool:
        """Wait for all submitted work to finish or be cancelled. Returns False on timeout."""
        with self._lock:
            pending = [future for future in self._futures if not future.cancelled()]
        # Cancelled futures never reach the notified state that wait() looks for.
        if not pending:
            return True
        _, not_done = wait(pending, timeout=timeout_s, return_when=ALL_COMPLETED)
        return not not_done


def _set_worker_contextvars(context: contextvars.Context) -> None:
    for var, value in context.items():
        var.set(value)
