"""
================================================================================
Allure Report Utilities
================================================================================

Attachment helpers and result summaries shared by the UI hooks, the live
report and the test runner.

Features:
- Screenshot and text attachments
- Pass-rate summary used by the live report
- Allure CLI report generation for run_tests.py

================================================================================
"""

import json
import subprocess
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import allure
from loguru import logger


# ================================================================================
# Attachment Helpers
# ================================================================================

def attach_png(data: bytes, name: str = "Screenshot"):
    """
    Attach a PNG screenshot to the Allure report.

    Args:
        data: Raw PNG bytes (as returned by page.screenshot())
        name: Attachment name
    """
    allure.attach(
        data,
        name=name,
        attachment_type=allure.attachment_type.PNG
    )


def attach_text(text: str, name: str = "Text"):
    allure.attach(
        text,
        name=name,
        attachment_type=allure.attachment_type.TEXT
    )


# ================================================================================
# Result Summary
# ================================================================================

@dataclass
class TestResultSummary:
    """Summary of scenario results."""
    __test__ = False

    total: int = 0
    passed: int = 0
    failed: int = 0
    duration_ms: int = 0
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def pass_rate(self) -> float:
        """Pass rate percentage (0.0 when nothing ran)."""
        if self.total == 0:
            return 0.0
        return (self.passed / self.total) * 100

    @property
    def pass_rate_label(self) -> str:
        return f"{self.pass_rate:.1f}%"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "pass_rate": self.pass_rate_label,
            "duration_ms": self.duration_ms,
            "timestamp": self.timestamp,
        }

    def __str__(self) -> str:
        return f"Total: {self.total} | Passed: {self.passed} | Failed: {self.failed}"


# ================================================================================
# Report Generation
# ================================================================================

class AllureReportProcessor:
    """
    Reads raw Allure results and drives the Allure CLI.

    The CLI is optional; a missing binary is reported and skipped.
    """

    def __init__(self, results_dir: Path, report_dir: Optional[Path] = None):
        """
        Args:
            results_dir: Allure results directory (--alluredir)
            report_dir: Output report directory
        """
        self.results_dir = Path(results_dir)
        self.report_dir = Path(report_dir or self.results_dir.parent / "allure-report")

    def parse_results(self) -> List[Dict[str, Any]]:
        results = []
        for result_file in self.results_dir.glob("*-result.json"):
            try:
                with open(result_file, encoding="utf-8") as f:
                    results.append(json.load(f))
            except (OSError, ValueError) as e:
                logger.warning(f"Failed to parse {result_file}: {e}")
        return results

    def generate_summary(self) -> TestResultSummary:
        """
        Build a summary from the result files.

        Allure's "broken" status counts as failed, "skipped" is not counted.
        """
        summary = TestResultSummary()
        for result in self.parse_results():
            status = result.get("status", "unknown")
            if status == "skipped":
                continue
            summary.total += 1
            if status == "passed":
                summary.passed += 1
            else:
                summary.failed += 1
            summary.duration_ms += result.get("stop", 0) - result.get("start", 0)
        return summary

    def generate_report(self) -> bool:
        """
        Generate the Allure HTML report.

        Returns:
            True if successful
        """
        cmd = [
            "allure", "generate",
            str(self.results_dir),
            "-o", str(self.report_dir),
            "--clean"
        ]
        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except FileNotFoundError:
            logger.warning("Allure CLI not found. Please install Allure to generate reports.")
            return False

        if result.returncode == 0:
            logger.info(f"Report generated at {self.report_dir}")
            return True
        logger.error(f"Report generation failed: {result.stderr}")
        return False

    def log_summary(self):
        summary = self.generate_summary()
        logger.info("=" * 60)
        logger.info("ALLURE RESULT SUMMARY")
        logger.info("=" * 60)
        logger.info(f"Total Scenarios: {summary.total}")
        logger.info(f"Passed:          {summary.passed} ✅")
        logger.info(f"Failed:          {summary.failed} ❌")
        logger.info(f"Pass Rate:       {summary.pass_rate_label}")
        logger.info(f"Duration:        {summary.duration_ms / 1000:.2f}s")
        logger.info("=" * 60)


__all__ = [
    "attach_png",
    "attach_text",
    "TestResultSummary",
    "AllureReportProcessor",
]
