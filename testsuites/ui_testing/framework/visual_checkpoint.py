"""
================================================================================
Visual Checkpoints
================================================================================

Named screenshots taken at meaningful points of a scenario (page, full page
or a single region) and kept under reports/visual-checkpoints/ for manual or
offline visual comparison.

No visual comparison service is called. VISUAL_TESTING_API_KEY is only
checked for presence so the run header can show whether a service key
would be available.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional, Union

from loguru import logger
from playwright.sync_api import Error as PlaywrightError, Page

from .screenshot_helper import screenshot_filename

API_KEY_VARIABLE = "VISUAL_TESTING_API_KEY"
DEFAULT_CHECKPOINT_DIR = Path("reports") / "visual-checkpoints"


class VisualCheckpoints:
    """
    Checkpoint capture for one test run.

    Every method is a no-op while disabled, and capture failures are logged
    without failing the scenario.
    """

    def __init__(
        self,
        output_dir: Union[str, Path] = DEFAULT_CHECKPOINT_DIR,
        enabled: bool = False,
    ):
        self.output_dir = Path(output_dir)
        self.enabled = enabled
        self.captured: List[Path] = []
        self._scenario: Optional[str] = None

    @property
    def api_key_configured(self) -> bool:
        return bool(os.environ.get(API_KEY_VARIABLE))

    def enable(self) -> None:
        self.enabled = True
        logger.debug("Visual testing enabled")

    def disable(self) -> None:
        self.enabled = False
        logger.debug("Visual testing disabled")

    def start(self, scenario: str) -> None:
        """Begin a scenario; checkpoint counts are per scenario."""
        self.captured = []
        if not self.enabled:
            return
        self._scenario = scenario
        logger.info(
            f"Visual checkpoint tracking initialized for: {scenario} "
            f"(API key {'present' if self.api_key_configured else 'absent'})"
        )

    def check(self, page: Page, name: str) -> Optional[Path]:
        """Viewport checkpoint."""
        if not self.enabled:
            return None
        return self._capture(page, name)

    def check_full_page(self, page: Page, name: str) -> Optional[Path]:
        if not self.enabled:
            return None
        return self._capture(page, f"{name}_full_page", full_page=True)

    def check_region(self, page: Page, selector: str, region_name: str) -> Optional[Path]:
        """Checkpoint of a single element's bounding box."""
        if not self.enabled:
            return None
        filepath = self.output_dir / screenshot_filename(region_name)
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            page.locator(selector).first.screenshot(path=str(filepath))
        except (PlaywrightError, OSError) as e:
            logger.warning(f"⚠️ Failed to check region: {region_name} ({str(e)[:100]})")
            return None
        self.captured.append(filepath)
        logger.debug(f"Region visual checkpoint: {filepath}")
        return filepath

    def close(self) -> int:
        """End tracking for the current scenario; returns the checkpoint count."""
        if self.enabled and self._scenario:
            logger.info(f"✅ Visual checkpoint tracking completed: {len(self.captured)} checkpoint(s)")
        self._scenario = None
        return len(self.captured)

    def _capture(self, page: Page, name: str, full_page: bool = False) -> Optional[Path]:
        filepath = self.output_dir / screenshot_filename(name)
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            page.screenshot(path=str(filepath), full_page=full_page)
        except (PlaywrightError, OSError) as e:
            logger.warning(f"⚠️ Failed to capture visual checkpoint: {name} ({str(e)[:100]})")
            return None
        self.captured.append(filepath)
        logger.debug(f"Visual checkpoint saved: {filepath}")
        return filepath


__all__ = [
    "VisualCheckpoints",
    "API_KEY_VARIABLE",
    "DEFAULT_CHECKPOINT_DIR",
]
