"""Centralized logging configuration using loguru.

``TRACKSTITCH_LOG_LEVEL`` sets the console level (default INFO) and
``TRACKSTITCH_LOG_DIR`` the directory for rotating log files (default
``logs``). An empty ``TRACKSTITCH_LOG_DIR`` disables file logging.
"""

from __future__ import annotations

import os
import sys
from collections import Counter
from pathlib import Path
from typing import Dict, Iterable, Optional

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"

logger.remove()

logger.add(
    sys.stderr,
    level=os.environ.get("TRACKSTITCH_LOG_LEVEL", "INFO"),
    format=CONSOLE_FORMAT,
    colorize=True,
)

_log_dir = os.environ.get("TRACKSTITCH_LOG_DIR", "logs")
if _log_dir:
    logs_dir = Path(_log_dir)
    logs_dir.mkdir(parents=True, exist_ok=True)

    # Per-frame stitch decisions are DEBUG and only reach this file
    logger.add(
        logs_dir / "trackstitch_{time}.log",
        rotation="50 MB",
        retention="10 days",
        level="DEBUG",
        format=FILE_FORMAT,
        enqueue=True,
    )
    logger.add(
        logs_dir / "errors_{time}.log",
        rotation="10 MB",
        retention="30 days",
        level="ERROR",
        format=FILE_FORMAT,
        enqueue=True,
    )


def get_logger(name: Optional[str] = None):
    """Get a logger instance with the given name.

    Args:
        name: Module name for the logger (usually __name__)

    Returns:
        Configured logger instance
    """
    if name:
        return logger.bind(name=name)
    return logger


def log_stitch_timing(frame_number: int, duration_ms: float, threshold_ms: float = 250.0) -> None:
    """Log the time one stitch call took, warning when it is slow.

    Matching dominates the cost, so a slow call usually means a long search
    window or large feature sets.
    """
    if duration_ms > threshold_ms:
        logger.warning(f"Slow stitch at frame {frame_number}: {duration_ms:.2f}ms (threshold: {threshold_ms}ms)")
    else:
        logger.debug(f"Stitch at frame {frame_number} took {duration_ms:.2f}ms")


def log_outcome_summary(outcomes: Iterable[str]) -> Dict[str, int]:
    """Log how often each stitch outcome occurred over a run and return the counts."""
    counts = dict(Counter(outcomes))
    if counts:
        summary = ", ".join(f"{name}={count}" for name, count in sorted(counts.items()))
        logger.info(f"Stitch outcomes: {summary}")
    return counts


__all__ = ["logger", "get_logger", "log_outcome_summary", "log_stitch_timing"]
