"""
================================================================================
Autotest Tools Common Utilities
================================================================================

Shared logging setup for the UI suite.

Exports:
    - init_logger: Initialize loguru with console and rotating file sinks
    - log_step / log_assertion / log_success: Test log vocabulary
    - log_scenario_start / log_scenario_end: Scenario banners

Usage:
    from autotest_tools.common import init_logger, log_step

    init_logger(level="DEBUG", log_file="reports/logs/test-execution.log")
    log_step("Login with valid credentials")

================================================================================
"""

from .global_config import (
    init_logger,
    log_assertion,
    log_scenario_end,
    log_scenario_start,
    log_step,
    log_success,
    reset_logger,
)

__all__ = [
    "init_logger",
    "reset_logger",
    "log_step",
    "log_assertion",
    "log_success",
    "log_scenario_start",
    "log_scenario_end",
]
