"""
================================================================================
Screenshot Helper
================================================================================

PNG capture for scenarios and steps, saved under the screenshot directory
and optionally attached to the Allure report.

File names:
    <scenario>[_<step>][_<STATUS>]_<yyyy-mm-dd_HH-MM-SS-mmm>.png

Capturing never raises: a screenshot is evidence, not a test step, so
driver and disk errors are logged and the helpers return None.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from loguru import logger
from playwright.sync_api import Error as PlaywrightError, Page

from autotest_tools.report_tools.allure_utils import attach_png

DEFAULT_SCREENSHOT_DIR = Path("reports") / "screenshots"

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9_-]")


def sanitize_name(name: str) -> str:
    """
    Make a scenario/step name safe for file names.

        >>> sanitize_name("Login: valid user")
        'Login__valid_user'
    """
    return _UNSAFE_CHARS.sub("_", name)


def screenshot_filename(
    scenario: str,
    step: Optional[str] = None,
    status: Optional[str] = None,
    now: Optional[datetime] = None,
) -> str:
    """Build a screenshot file name with a millisecond timestamp."""
    timestamp = (now or datetime.now()).strftime("%Y-%m-%d_%H-%M-%S-%f")[:-3]
    parts = [sanitize_name(scenario)]
    if step:
        parts.append(sanitize_name(step))
    if status:
        parts.append(sanitize_name(status.upper()))
    parts.append(timestamp)
    return "_".join(parts) + ".png"


class ScreenshotHelper:
    """
    Takes and stores screenshots for one test run.

    Usage:
        helper = ScreenshotHelper("reports/screenshots")
        helper.capture(page, "Valid login")
        helper.capture_failure(page, "Valid login")
        helper.attach_step(page, "Valid login", "I click the login button", "PASSED")
    """

    def __init__(self, output_dir: Union[str, Path] = DEFAULT_SCREENSHOT_DIR):
        self.output_dir = Path(output_dir)

    def capture(
        self,
        page: Page,
        scenario: str,
        step: Optional[str] = None,
        status: Optional[str] = None,
        full_page: bool = False,
    ) -> Optional[Path]:
        """
        Save a screenshot to disk.

        Returns:
            Path of the PNG, or None if capturing failed
        """
        filepath = self.output_dir / screenshot_filename(scenario, step, status)
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            page.screenshot(path=str(filepath), full_page=full_page)
        except (PlaywrightError, OSError) as e:
            logger.warning(f"⚠️ Failed to capture screenshot for '{scenario}': {e}")
            return None

        logger.debug(f"Screenshot saved: {filepath}")
        return filepath

    def capture_failure(self, page: Page, scenario: str) -> Optional[Path]:
        """Full-page screenshot named <scenario>_FAILED_<timestamp>.png."""
        filepath = self.capture(page, scenario, status="FAILED", full_page=True)
        if filepath is not None:
            logger.info(f"Failure screenshot captured: {filepath}")
        return filepath

    def attach_step(
        self,
        page: Page,
        scenario: str,
        step: str,
        status: str,
    ) -> Optional[Path]:
        """
        Save a step screenshot and attach it to the Allure report as "<step> [<status>]".
        """
        filepath = self.capture(page, scenario, step=step, status=status)
        if filepath is None:
            return None
        try:
            attach_png(filepath.read_bytes(), name=f"{step} [{status.upper()}]")
        except OSError as e:
            logger.warning(f"⚠️ Could not attach screenshot {filepath}: {e}")
        return filepath


__all__ = [
    "ScreenshotHelper",
    "sanitize_name",
    "screenshot_filename",
    "DEFAULT_SCREENSHOT_DIR",
]
