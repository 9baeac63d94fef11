# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import math
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from timed_tasks.errors import InvalidConfigError, InvalidFileFormatError, InvalidFilePathError

DEFAULT_PER_TASK_TIMEOUT_MS = 15_000
DEFAULT_GRACE_TERMINATION_MS = 5_000


class ExecutorSettings(BaseModel):
    """Timing policy of a BoundedTimedExecutor.

    Attributes:
        per_task_timeout_ms: Contribution of each task to the aggregate timeout of a batch.
        grace_termination_ms: How long to wait for interrupted workers to stop after a forced shutdown.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    per_task_timeout_ms: int = Field(default=DEFAULT_PER_TASK_TIMEOUT_MS, gt=0)
    grace_termination_ms: int = Field(default=DEFAULT_GRACE_TERMINATION_MS, ge=0)

    def timeout_ms_for(self, task_count: int, parallelism: int) -> int:
        """Aggregate timeout for a batch; higher parallelism shortens the window."""
        return math.ceil(self.per_task_timeout_ms * task_count / parallelism)

    @classmethod
    def from_yaml(cls, file_path: str | Path) -> ExecutorSettings:
        """Load settings from a YAML file.

        Args:
            file_path: Path to the YAML file

        Returns:
            Validated settings

        Raises:
            InvalidFilePathError: If file doesn't exist
            InvalidFileFormatError: If YAML is malformed
            InvalidConfigError: If file is empty or the values are invalid
        """
        file_path = Path(file_path)
        if not file_path.exists():
            raise InvalidFilePathError(f"Settings file not found: {file_path}")

        try:
            with open(file_path) as f:
                content = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise InvalidFileFormatError(f"Invalid YAML format in {file_path}: {e}")

        if content is None:
            raise InvalidConfigError(f"Settings file is empty: {file_path}")
        if not isinstance(content, dict):
            raise InvalidFileFormatError(f"Settings file must contain a mapping: {file_path}")

        try:
            return cls.model_validate(content)
        except ValidationError as e:
            raise InvalidConfigError(f"Invalid executor settings in {file_path}: {e}") from e
