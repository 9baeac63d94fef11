# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from threading import Event
from typing import Any, Callable, ClassVar, Generic, TypeVar

from timed_tasks.errors import TaskError, TaskInterruptedError, TaskIOError

V = TypeVar("V")


class TimedTask(ABC, Generic[V]):
    """A unit of work whose outcome and execution time are recorded for later collection.

    Subclasses implement `run_inner`. Whatever it raises is captured rather than propagated, and surfaces
    from `get_value` as an instance of the task's declared `error_class`: errors already of that class
    pass through unchanged, anything else goes through `convert_to_error`.

    Long-running work should call `check_interrupted` (or use `sleep`) regularly so it stops once its
    worker pool is shut down after a timeout.
    """

    error_class: ClassVar[type[TaskError]] = TaskError

    def __init__(self) -> None:
        self._value: V | None = None
        self._error: Exception | None = None
        self._failure: TaskError | None = None
        self._time_spent_ns = 0
        self._interrupted: Event | None = None

    def run(self) -> None:
        start = time.perf_counter_ns()
        try:
            self._value = self.run_inner()
        except Exception as e:
            self._error = e
        finally:
            self._time_spent_ns = time.perf_counter_ns() - start

    @abstractmethod
    def run_inner(self) -> V: ...

    def convert_to_error(self, error: Exception) -> TaskError:
        """Translate a failure that is not an instance of `error_class`."""
        converted = self.error_class(f"{type(self).__name__} failed: {error}")
        converted.__cause__ = error
        return converted

    @property
    def time_spent_ns(self) -> int:
        return self._time_spent_ns

    @property
    def failed(self) -> bool:
        return self._error is not None

    def get_value(self) -> V:
        if self._error is None:
            return self._value
        if self._failure is None:
            if isinstance(self._error, self.error_class):
                self._failure = self._error
            else:
                converted = self.convert_to_error(self._error)
                if not isinstance(converted, TaskError):
                    raise TypeError(
                        f"{type(self).__name__}.convert_to_error must return a TaskError, "
                        f"got {type(converted).__name__}."
                    ) from self._error
                self._failure = converted
        raise self._failure

    def attach_interrupt_event(self, event: Event) -> None:
        self._interrupted = event

    def is_interrupted(self) -> bool:
        return self._interrupted is not None and self._interrupted.is_set()

    def check_interrupted(self) -> None:
        if self.is_interrupted():
            raise TaskInterruptedError(f"{type(self).__name__} was interrupted.")

    def sleep(self, seconds: float) -> None:
        """Sleep that wakes up early and raises TaskInterruptedError when the task is interrupted."""
        if self._interrupted is None:
            time.sleep(seconds)
            return
        self._interrupted.wait(seconds)
        self.check_interrupted()


class IOTimedTask(TimedTask[V]):
    """Task whose failures surface as TaskIOError."""

    error_class: ClassVar[type[TaskError]] = TaskIOError


class CallableTask(TimedTask[V]):
    """Adapts a plain callable to a TimedTask.

    Example:
        tasks = [CallableTask(load_partition, path) for path in paths]
    """

    def __init__(
        self,
        fn: Callable[..., V],
        *args: Any,
        error_class: type[TaskError] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__()
        self._fn = fn
        self._args = args
        self._kwargs = kwargs
        if error_class is not None:
            self.error_class = error_class

    def run_inner(self) -> V:
        return self._fn(*self._args, **self._kwargs)

    def __repr__(self) -> str:
        name = getattr(self._fn, "__name__", repr(self._fn))
        return f"{type(self).__name__}({name})"
