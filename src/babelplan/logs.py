# src/babelplan/logs.py

import argparse
import logging
from typing import cast

from apathetic_logging import (
    Logger,
    registerDefaultLogLevel,
    registerLogger,
    registerLogLevelEnvVars,
)

from .constants import DEFAULT_ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL, LOG_LEVEL_CHOICES
from .meta import PROGRAM_ENV, PROGRAM_PACKAGE


class AppLogger(Logger):
    """Logger for babelplan.

    Level precedence: -q/-v/--log-level, then BABELPLAN_LOG_LEVEL / LOG_LEVEL,
    then the config file's `log_level`, then the default.
    """

    def applyCliLevel(self, args: argparse.Namespace) -> str:  # noqa: N802
        """Set the level from the command line, env vars, or default."""
        level = self.determineLogLevel(args=args)
        self.setLevel(level)
        return level

    def applyConfigLevel(  # noqa: N802
        self,
        args: argparse.Namespace,
        config_level: object,
    ) -> bool:
        """Let a config file's `log_level` apply where CLI and env are silent.

        Unknown values are left for config validation to report.
        """
        if (
            not isinstance(config_level, str)
            or config_level.lower() not in LOG_LEVEL_CHOICES
        ):
            return False
        self.setLevel(self.determineLogLevel(args=args, root_log_level=config_level))
        return True


# TRACE / SILENT levels and env lookup must exist before the logger is created.
logging.setLoggerClass(AppLogger)
AppLogger.extendLoggingModule()
registerLogLevelEnvVars(
    [f"{PROGRAM_ENV}_{DEFAULT_ENV_LOG_LEVEL}", DEFAULT_ENV_LOG_LEVEL]
)
registerDefaultLogLevel(DEFAULT_LOG_LEVEL)
registerLogger(PROGRAM_PACKAGE)

_APP_LOGGER = cast("AppLogger", logging.getLogger(PROGRAM_PACKAGE))


def getAppLogger() -> AppLogger:  # noqa: N802
    """Return the babelplan logger."""
    return _APP_LOGGER
