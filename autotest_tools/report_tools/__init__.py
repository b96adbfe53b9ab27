"""
================================================================================
Report Tools
================================================================================

Reporting helpers for the UI suite.

Modules:
    - allure_utils: Allure attachments, result summary, CLI report generation
    - live_report: Incremental HTML report rewritten after every scenario
    - cucumber_report: Partial report from the Cucumber JSON at shutdown

================================================================================
"""

from .allure_utils import (
    AllureReportProcessor,
    TestResultSummary,
    attach_png,
    attach_text,
)
from .cucumber_report import generate_partial_report
from .live_report import LiveReportTracker, ScenarioResult, render_live_report

__all__ = [
    "attach_png",
    "attach_text",
    "TestResultSummary",
    "AllureReportProcessor",
    "LiveReportTracker",
    "ScenarioResult",
    "render_live_report",
    "generate_partial_report",
]
