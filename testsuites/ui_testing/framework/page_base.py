"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - Click / fill through the self-healing SmartLocator
    - Visibility and presence checks that never raise
    - Navigation, URL / title access and wait strategies

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Optional

import allure
from loguru import logger
from playwright.sync_api import Error as PlaywrightError, Page

from autotest_tools.common import log_success

from .config_loader import ConfigLoader
from .smart_locator import ElementNotFoundError, SelectorCache, SmartLocator


class BasePage:
    """
    Base class for all page objects.

    Interactions resolve their element through the shared SmartLocator so a
    renamed attribute or reworded label can be healed; checks use the plain
    selector so they report the page as it really is.

    Usage:
        class LoginPage(BasePage):
            USERNAME_INPUT = "input[name='username']"

            def enter_username(self, username: str):
                self.fill(self.USERNAME_INPUT, username, "username field")
    """

    def __init__(
        self,
        page: Page,
        smart: Optional[SmartLocator] = None,
        config: Optional[ConfigLoader] = None,
    ):
        """
        Initialize page object.

        Args:
            page: Playwright Page object
            smart: Shared SmartLocator (built around a private cache if omitted)
            config: Configuration (the process-wide ConfigLoader if omitted)
        """
        self.page = page
        self.config = config or ConfigLoader()
        self.timeout = self.config.get_int("element.wait.timeout", 5000)
        self.smart = smart or SmartLocator(
            page,
            SelectorCache(),
            healing_enabled=self.config.get_bool("self.healing.enabled", True),
            timeout=self.timeout,
        )

    # =========================================================================
    # Interactions
    # =========================================================================

    def click(self, selector: str, description: str) -> None:
        """
        Click an element.

        Raises:
            ElementNotFoundError: Element could not be clicked
        """
        with allure.step(f"Click: {description}"):
            locator = self.smart.locate(selector, description)
            try:
                locator.click(timeout=self.timeout)
            except PlaywrightError as e:
                logger.error(f"Failed to click element: {description} ({selector})")
                raise ElementNotFoundError(
                    f"Unable to click {description}: {selector}"
                ) from e
            log_success(f"Clicked element: {description}")

    def fill(self, selector: str, value: str, description: str) -> None:
        """
        Fill an input field.

        Raises:
            ElementNotFoundError: Field could not be filled
        """
        shown = "*" * len(value) if "password" in description.lower() else value
        with allure.step(f"Fill {description}: {shown}"):
            locator = self.smart.locate(selector, description)
            try:
                locator.fill(value, timeout=self.timeout)
            except PlaywrightError as e:
                logger.error(f"Failed to fill field: {description} ({selector})")
                raise ElementNotFoundError(
                    f"Unable to fill {description}: {selector}"
                ) from e
            log_success(f"Filled field: {description}")

    # =========================================================================
    # Checks
    # =========================================================================

    def is_visible(self, selector: str, timeout: int = 0) -> bool:
        """True if the first match is visible (optionally after waiting)."""
        try:
            locator = self.page.locator(selector).first
            if timeout:
                locator.wait_for(state="visible", timeout=timeout)
            return locator.is_visible()
        except PlaywrightError:
            logger.debug(f"Element not visible: {selector}")
            return False

    def is_present(self, selector: str) -> bool:
        try:
            return self.page.locator(selector).count() > 0
        except PlaywrightError:
            return False

    def get_text(self, selector: str) -> str:
        """Text content of the first match, or "" if it never appeared."""
        try:
            locator = self.page.locator(selector).first
            locator.wait_for(state="visible", timeout=self.timeout)
            text = locator.text_content() or ""
            logger.debug(f"Retrieved text from: {selector} = {text}")
            return text
        except PlaywrightError as e:
            logger.warning(f"Failed to get text from element: {selector} ({str(e)[:100]})")
            return ""

    def element_count(self, selector: str) -> int:
        return self.page.locator(selector).count()

    # =========================================================================
    # Navigation and waits
    # =========================================================================

    @property
    def current_url(self) -> str:
        return self.page.url

    @property
    def title(self) -> str:
        return self.page.title()

    def navigate(self, url: str) -> None:
        with allure.step(f"Navigate to {url}"):
            self.page.goto(url)
            self.wait_for_page_load()
            log_success(f"Navigated to: {url}")

    def wait_for_page_load(self, state: str = "load") -> None:
        """
        Wait for the page to reach a load state.

        Args:
            state: Playwright load state ('load', 'domcontentloaded', 'networkidle')
        """
        self.page.wait_for_load_state(state)
        logger.debug("Page loaded")

    def wait_for_selector(self, selector: str, timeout: Optional[int] = None) -> None:
        """Wait for a selector to appear; raises Playwright's TimeoutError."""
        self.page.wait_for_selector(selector, timeout=timeout or self.timeout)

    def wait(self, milliseconds: int) -> None:
        self.page.wait_for_timeout(milliseconds)


__all__ = [
    "BasePage",
]
