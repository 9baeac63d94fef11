# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import contextvars
import threading

import pytest

from timed_tasks.concurrency import CountDownLatch, WorkerPool

color: contextvars.ContextVar[str] = contextvars.ContextVar("color", default="none")


# -- CountDownLatch ---------------------------------------------------------


def test_latch_rejects_negative_count() -> None:
    with pytest.raises(ValueError):
        CountDownLatch(-1)


def test_latch_wait_times_out_while_count_is_positive() -> None:
    latch = CountDownLatch(2)
    latch.count_down()

    assert latch.count == 1
    assert latch.wait(0.01) is False


def test_latch_wait_returns_once_count_reaches_zero() -> None:
    latch = CountDownLatch(3)
    threads = [threading.Thread(target=latch.count_down) for _ in range(3)]
    for thread in threads:
        thread.start()

    assert latch.wait(5.0) is True
    assert latch.count == 0
    for thread in threads:
        thread.join()


def test_latch_count_never_goes_negative() -> None:
    latch = CountDownLatch(1)
    latch.count_down()
    latch.count_down()

    assert latch.count == 0
    assert latch.wait(0) is True


# -- WorkerPool -------------------------------------------------------------


def test_pool_requires_at_least_one_worker() -> None:
    with pytest.raises(ValueError):
        WorkerPool(max_workers=0)


def test_pool_runs_submitted_work() -> None:
    pool = WorkerPool(max_workers=2)
    futures = [pool.submit(pow, 2, n) for n in range(4)]
    pool.shutdown()

    assert [f.result() for f in futures] == [1, 2, 4, 8]
    assert pool.await_termination(0) is True


def test_pool_shutdown_is_idempotent() -> None:
    pool = WorkerPool(max_workers=1)
    pool.shutdown()
    pool.shutdown()

    assert pool.is_shutdown is True


def test_pool_rejects_work_after_shutdown() -> None:
    pool = WorkerPool(max_workers=1)
    pool.shutdown()

    with pytest.raises(RuntimeError, match="shut down"):
        pool.submit(print)


def test_pool_shutdown_now_interrupts_and_discards_queued_work() -> None:
    pool = WorkerPool(max_workers=1)
    started = threading.Event()
    queued_ran = threading.Event()

    def _blocking() -> None:
        started.set()
        pool.interrupted.wait(5.0)

    running = pool.submit(_blocking)
    queued = pool.submit(queued_ran.set)
    assert started.wait(5.0)

    cancelled = pool.shutdown_now()

    assert cancelled == [queued]
    assert pool.interrupted.is_set() is True
    assert pool.await_termination(5.0) is True
    assert running.done() is True
    assert queued_ran.is_set() is False


def test_pool_shutdown_after_shutdown_now_does_not_hang() -> None:
    gate = threading.Event()
    pool = WorkerPool(max_workers=1)
    pool.submit(gate.wait)

    pool.shutdown_now()
    pool.shutdown()

    assert pool.await_termination(0.01) is False
    gate.set()
    assert pool.await_termination(5.0) is True


def test_pool_await_termination_without_work() -> None:
    pool = WorkerPool(max_workers=1)
    assert pool.await_termination(0) is True
    pool.shutdown()


def test_pool_propagates_context_vars() -> None:
    token = color.set("blue")
    try:
        pool = WorkerPool(max_workers=1)
    finally:
        color.reset(token)

    future = pool.submit(color.get)
    pool.shutdown()

    assert future.result() == "blue"


def test_pool_await_termination_ignores_cancelled_work() -> None:
    pool = WorkerPool(max_workers=1)
    started = threading.Event()

    def _blocking() -> None:
        started.set()
        pool.interrupted.wait(5.0)

    pool.submit(_blocking)
    for _ in range(3):
        pool.submit(print)
    assert started.wait(5.0)

    assert len(pool.shutdown_now()) == 3
    assert pool.await_termination(1.0) is True
