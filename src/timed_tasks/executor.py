# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
import time
from typing import Any, Sequence

from timed_tasks.concurrency import CountDownLatch, WorkerPool
from timed_tasks.config import ExecutorSettings
from timed_tasks.errors import InvalidArgumentError, ResourceExhaustedError, TaskError
from timed_tasks.report import NANOS_PER_MILLI, ExecutionReport
from timed_tasks.task import TimedTask, V


class BoundedTimedExecutor:
    """Runs a batch of TimedTasks on a short-lived, bounded thread pool and reports their timings.

    The whole batch is given `ceil(per_task_timeout_ms * len(tasks) / parallelism)` milliseconds. If it does
    not finish in time the pool is shut down, running tasks are interrupted, queued tasks are discarded and
    ResourceExhaustedError is raised. Otherwise every task is visited in submission order: successful values
    are collected and, if any task failed, the first failure is raised with the others attached as
    suppressed errors.

    Example:
        executor = BoundedTimedExecutor()
        report = executor.run("read footers", [CallableTask(read_footer, path) for path in paths], parallelism=8)
    """

    def __init__(self, settings: ExecutorSettings | None = None, *, logger: logging.Logger | None = None) -> None:
        self._settings = settings or ExecutorSettings()
        self._logger = logger if logger is not None else logging.getLogger(__name__)

    @property
    def settings(self) -> ExecutorSettings:
        return self._settings

    def run(self, activity: str, tasks: Sequence[TimedTask[Any]], parallelism: int) -> ExecutionReport:
        """Execute all tasks and collect their outcome.

        Args:
            activity: Name of the activity, used in log messages and errors.
            tasks: The batch to execute. A single task is run on the calling thread.
            parallelism: Requested number of worker threads, clamped to [1, len(tasks)].

        Returns:
            The report of the run, holding the values of all tasks.

        Raises:
            InvalidArgumentError: If no task was submitted.
            ResourceExhaustedError: If the batch did not complete within its timeout.
            TaskError: The first task failure, carrying the remaining failures as suppressed errors and
                the run's report.
        """
        start = time.perf_counter_ns()
        tasks = list(tasks)
        if not tasks:
            raise InvalidArgumentError("You must submit at least one task.")

        if len(tasks) == 1:
            parallelism = 1
            tasks[0].run()
        else:
            parallelism = max(1, min(parallelism, len(tasks)))
            self._run_on_pool(activity, tasks, parallelism)

        report = self._collect(activity, tasks, parallelism, start)
        self._log_summary(report)

        if report.failure is not None:
            report.failure.report = report
            raise report.failure
        return report

    def _run_on_pool(self, activity: str, tasks: list[TimedTask[Any]], parallelism: int) -> None:
        latch = CountDownLatch(len(tasks))
        pool = WorkerPool(max_workers=parallelism, name=f"TimedTask[{activity}]")
        try:
            for task in tasks:
                task.attach_interrupt_event(pool.interrupted)
                pool.submit(_run_latched, latch, task)

            timeout_ms = self._settings.timeout_ms_for(len(tasks), parallelism)
            if not latch.wait(timeout_ms / 1000):
                # Interrupts running tasks and cancels pending ones. Tasks that ignore the interruption
                # event keep running until they return on their own.
                pool.shutdown_now()
                terminated = pool.await_termination(self._settings.grace_termination_ms / 1000)
                if not terminated:
                    self._logger.warning(
                        "Tasks for activity '%s' did not terminate within %dms of being interrupted.",
                        activity,
                        self._settings.grace_termination_ms,
                    )

                message = (
                    f"Waited for {timeout_ms}ms, but tasks for '{activity}' are not complete. "
                    f"Total task count {len(tasks)}, parallelism {parallelism}."
                )
                self._logger.error(message)
                raise ResourceExhaustedError(
                    message,
                    activity=activity,
                    timeout_ms=timeout_ms,
                    task_count=len(tasks),
                    parallelism=parallelism,
                    terminated=terminated,
                )
        except BaseException:
            # Never block on unfinished work when leaving early; interrupt it instead.
            pool.shutdown_now()
            raise
        pool.shutdown()

    def _collect(
        self, activity: str, tasks: list[TimedTask[Any]], parallelism: int, start_ns: int
    ) -> ExecutionReport:
        values: list[Any] = []
        total_ns = 0
        max_ns = 0
        count = 0
        failure: TaskError | None = None
        for task in tasks:
            try:
                values.append(task.get_value())
            except TaskError as e:
                if failure is None:
                    failure = e
                elif e is not failure and not any(e is s for s in failure.suppressed):
                    failure.add_suppressed(e)
                continue
            total_ns += task.time_spent_ns
            max_ns = max(max_ns, task.time_spent_ns)
            count += 1

        return ExecutionReport(
            activity=activity,
            submitted_count=len(tasks),
            completed_count=count,
            parallelism=parallelism,
            values=values,
            total_time_ns=total_ns,
            max_time_ns=max_ns,
            wall_time_ns=time.perf_counter_ns() - start_ns,
            failure=failure,
        )

    def _log_summary(self, report: ExecutionReport) -> None:
        if not self._logger.isEnabledFor(logging.INFO):
            return
        self._logger.info(
            "%s: Executed %d out of %d using %d threads. Time: %dms total, %fms avg, %dms max.",
            report.activity,
            report.completed_count,
            report.submitted_count,
            report.parallelism,
            report.wall_time_ns // NANOS_PER_MILLI,
            report.mean_time_ns / NANOS_PER_MILLI,
            report.max_time_ns // NANOS_PER_MILLI,
        )


def run_timed_tasks(
    activity: str,
    tasks: Sequence[TimedTask[V]],
    parallelism: int,
    *,
    logger: logging.Logger | None = None,
    settings: ExecutorSettings | None = None,
) -> list[V]:
    """Run a batch with a one-off executor and return the values of the tasks."""
    return BoundedTimedExecutor(settings, logger=logger).run(activity, tasks, parallelism).values


def _run_latched(latch: CountDownLatch, task: TimedTask[Any]) -> None:
    try:
        task.run()
    finally:
        latch.count_down()
