# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import TextIO

PACKAGE_LOGGER_NAME = "timed_tasks"
DEFAULT_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"
DEBUG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(threadName)s] %(name)s: %(message)s"


@dataclass
class LoggerConfig:
    name: str
    level: str


@dataclass
class OutputConfig:
    destination: TextIO
    level: str = "INFO"
    fmt: str = DEFAULT_FORMAT


@dataclass
class LoggingConfig:
    logger_configs: list[LoggerConfig]
    output_configs: list[OutputConfig]
    to_silence: list[str] = field(default_factory=list)

    @classmethod
    def default(cls) -> LoggingConfig:
        return cls(
            logger_configs=[LoggerConfig(name=PACKAGE_LOGGER_NAME, level="INFO")],
            output_configs=[OutputConfig(destination=sys.stderr, level="INFO")],
        )

    @classmethod
    def debug(cls) -> LoggingConfig:
        return cls(
            logger_configs=[LoggerConfig(name=PACKAGE_LOGGER_NAME, level="DEBUG")],
            output_configs=[OutputConfig(destination=sys.stderr, level="DEBUG", fmt=DEBUG_FORMAT)],
        )


def configure_logging(config: LoggingConfig) -> None:
    """Install handlers for the configured loggers.

    Handlers previously installed by this function are replaced, so it can be called repeatedly.
    """
    handlers = []
    for output_config in config.output_configs:
        handler = logging.StreamHandler(output_config.destination)
        handler.setLevel(output_config.level)
        handler.setFormatter(logging.Formatter(output_config.fmt))
        handlers.append(handler)

    for logger_config in config.logger_configs:
        logger = logging.getLogger(logger_config.name)
        logger.setLevel(logger_config.level)
        for handler in list(logger.handlers):
            if getattr(handler, "_timed_tasks_handler", False):
                logger.removeHandler(handler)
        for handler in handlers:
            handler._timed_tasks_handler = True
            logger.addHandler(handler)

    for name in config.to_silence:
        logging.getLogger(name).setLevel(logging.WARNING)
