"""
================================================================================
Global Logging Setup for the UI Suite
================================================================================

Centralized Loguru configuration plus the small logging vocabulary used by
page objects, hooks and step definitions.

Features:
    - One-time logger initialization (console + optional rotating file)
    - Step / assertion / success helpers with consistent prefixes
    - Scenario start/end banners for readable CI output

Author: Automation Team
License: MIT
================================================================================
"""

import sys
from pathlib import Path
from typing import Optional, Union

from loguru import logger

DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {name}:{function}:{line} | {message}"

_logger_initialized: bool = False


def init_logger(
    level: Optional[str] = None,
    log_file: Optional[Union[str, Path]] = None,
    format_str: Optional[str] = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """
    Initializes the global Loguru logger with consistent configuration.

    Safe to call repeatedly; only the first call configures sinks.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to INFO.
        log_file: Optional file path for a rotating file sink.
        format_str: Custom console format string.
        rotation: Size/time based rotation for the file sink.
        retention: How long rotated files are kept.
    """
    global _logger_initialized

    if _logger_initialized:
        return

    log_level = (level or "INFO").upper()

    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level,
        format=format_str or DEFAULT_FORMAT,
        colorize=True,
        backtrace=True,
        diagnose=False,
    )

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(log_path),
            level=log_level,
            format=FILE_FORMAT,
            rotation=rotation,
            retention=retention,
            encoding="utf-8",
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {log_level}")


def reset_logger() -> None:
    """Drop all sinks and allow init_logger() to run again."""
    global _logger_initialized
    logger.remove()
    _logger_initialized = False


# ============================================================
# Logging vocabulary
# ============================================================

def log_step(message: str) -> None:
    """Log a test step."""
    logger.info(f"📍 STEP: {message}")


def log_assertion(message: str) -> None:
    """Log a verified assertion."""
    logger.info(f"🧪 ASSERT: {message}")


def log_success(message: str) -> None:
    """Log a successful action."""
    logger.info(f"✅ {message}")


def log_scenario_start(name: str) -> None:
    logger.info(f"========== SCENARIO START: {name} ==========")


def log_scenario_end(name: str) -> None:
    logger.info(f"========== SCENARIO END: {name} ==========")


__all__ = [
    "init_logger",
    "reset_logger",
    "log_step",
    "log_assertion",
    "log_success",
    "log_scenario_start",
    "log_scenario_end",
]
