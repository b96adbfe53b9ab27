"""
================================================================================
Autotest Tools
================================================================================

Support utilities for the OrangeHRM UI automation suite.

Modules:
    - common: Loguru setup and the shared logging vocabulary
    - report_tools: Allure attachments, live HTML report, partial Cucumber report

Example:
    from autotest_tools.common import init_logger, log_step
    from autotest_tools.report_tools import LiveReportTracker

    init_logger(level="INFO", log_file="reports/logs/test-execution.log")

    tracker = LiveReportTracker("reports")
    tracker.record("Valid login", "PASSED", start, end)
    log_step(tracker.stats())

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "report_tools",
]
