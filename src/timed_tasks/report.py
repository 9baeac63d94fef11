# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field

NANOS_PER_MILLI = 1_000_000


class ExecutionReport(BaseModel):
    """Outcome of one batch run.

    `values` holds the results of the successful tasks only. When any task failed, `failure` is the error
    that `run` raised, with the other task failures attached to it as suppressed errors.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    activity: str
    submitted_count: int  # How many tasks were in the batch
    completed_count: int  # How many tasks completed successfully
    parallelism: int  # Effective number of workers
    values: list[Any] = Field(default_factory=list)
    total_time_ns: int = 0  # Sum of per-task times of the successful tasks
    max_time_ns: int = 0
    wall_time_ns: int = 0  # Elapsed time of the whole run
    failure: Exception | None = Field(default=None, exclude=True)

    @computed_field
    def mean_time_ns(self) -> float:
        if self.completed_count == 0:
            return 0.0
        return self.total_time_ns / self.completed_count

    @computed_field
    def failed_count(self) -> int:
        return self.submitted_count - self.completed_count

    @property
    def succeeded(self) -> bool:
        return self.failure is None

    @property
    def summary(self) -> dict:
        summary = self.model_dump(exclude={"values"})
        summary |= {
            "wall_time_ms": self.wall_time_ns / NANOS_PER_MILLI,
            "mean_time_ms": self.mean_time_ns / NANOS_PER_MILLI,
            "max_time_ms": self.max_time_ns / NANOS_PER_MILLI,
            "failure": repr(self.failure) if self.failure is not None else None,
        }
        return summary
