"""
Logging setup for the command-line tool.
"""

import logging
import os
import sys
from dataclasses import dataclass
from typing import Optional


@dataclass
class LoggingConfig:
    """Configuration settings for application logging."""

    level: str = "WARNING"
    format_string: str = "%(levelname)s %(name)s: %(message)s"
    force_reconfigure: bool = False

    @classmethod
    def from_environment(cls) -> "LoggingConfig":
        return cls(
            level=os.getenv("FINTRACKER_LOG_LEVEL", "WARNING").upper(),
            force_reconfigure=os.getenv("FINTRACKER_LOG_FORCE", "false").lower() == "true",
        )


def setup_logging(config: Optional[LoggingConfig] = None, verbose: bool = False) -> None:
    """
    Install a console handler on the root logger.

    Args:
        config: Logging configuration. If None, loads from environment.
        verbose: If True, log at DEBUG level regardless of config.
    """
    if config is None:
        config = LoggingConfig.from_environment()

    if verbose:
        level = logging.DEBUG
    else:
        level = getattr(logging, config.level, logging.WARNING)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(config.format_string))

    logging.basicConfig(level=level, handlers=[handler], force=config.force_reconfigure)
