"""
================================================================================
Browser Manager
================================================================================

Browser lifecycle management for UI automation.

Features:
    - One Playwright instance + one browser per scenario
    - Browser selection: chrome, chromium, firefox, webkit
    - Full-HD viewport and config-driven timeouts
    - Navigation with a single reload retry

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from loguru import logger
from playwright.sync_api import (
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    Playwright,
    sync_playwright,
)

from .config_loader import ConfigLoader


LOGIN_READY_SELECTOR = "input[name='username']"
READY_SELECTOR_TIMEOUT = 5000


class NavigationError(RuntimeError):
    """Raised when a page could not be loaded even after a reload."""
    pass


def resolve_browser(name: Optional[str]) -> Tuple[str, Dict[str, Any]]:
    """
    Map a configured browser name to a Playwright browser type.

    Args:
        name: "chrome", "chromium", "firefox" or "webkit" (case-insensitive)

    Returns:
        (browser_type_attribute, extra_launch_options)

    Examples:
        >>> resolve_browser("chrome")
        ('chromium', {'channel': 'chrome'})

        >>> resolve_browser("opera")
        ('chromium', {})
    """
    normalized = (name or "chromium").strip().lower()
    if normalized == "chrome":
        return "chromium", {"channel": "chrome"}
    if normalized in ("chromium", "firefox", "webkit"):
        return normalized, {}
    logger.warning(f"Unknown browser '{name}', falling back to chromium")
    return "chromium", {}


def navigate_with_retry(
    page: Page,
    url: str,
    ready_selector: str = LOGIN_READY_SELECTOR,
    timeout: int = 15000,
    ready_timeout: int = READY_SELECTOR_TIMEOUT,
) -> None:
    """
    Open `url` and wait for `ready_selector`, reloading once on failure.

    Args:
        page: Playwright page
        url: Target URL
        ready_selector: Element that marks the page as usable
        timeout: Navigation timeout (ms)
        ready_timeout: Wait for the ready selector (ms)

    Raises:
        NavigationError: The page was not ready after the reload
    """
    try:
        page.goto(url, wait_until="networkidle", timeout=timeout)
        page.wait_for_selector(ready_selector, timeout=ready_timeout)
        logger.debug(f"Navigated to: {url}")
        return
    except PlaywrightError as e:
        logger.warning(f"⚠️ Page did not load properly, reloading: {url} ({str(e)[:100]})")

    try:
        page.reload(wait_until="networkidle", timeout=timeout)
        page.wait_for_selector(ready_selector, timeout=ready_timeout)
        logger.info(f"Page loaded after reload: {url}")
    except PlaywrightError as e:
        raise NavigationError(f"Failed to load {url} after reload: {e}") from e


class BrowserManager:
    """
    Manages the Playwright runtime, the browser and its contexts.

    Usage:
        with BrowserManager(browser_name="firefox", headless=False) as manager:
            page = manager.new_page()
            page.goto("https://example.com")

        # Or from configuration
        manager = BrowserManager.from_config(ConfigLoader())
    """

    # Default browser launch options
    DEFAULT_LAUNCH_OPTIONS: Dict[str, Any] = {
        "headless": True,
        "args": [
            "--ignore-certificate-errors",
        ],
    }

    # Default context options
    DEFAULT_CONTEXT_OPTIONS: Dict[str, Any] = {
        "viewport": {"width": 1920, "height": 1080},
        "ignore_https_errors": True,
    }

    def __init__(
        self,
        browser_name: str = "chromium",
        headless: bool = True,
        default_timeout: int = 10000,
        navigation_timeout: int = 15000,
    ):
        """
        Initialize browser manager.

        Args:
            browser_name: 'chrome', 'chromium', 'firefox' or 'webkit'
            headless: Run browser in headless mode
            default_timeout: Default action timeout for new pages (ms)
            navigation_timeout: Default navigation timeout for new pages (ms)
        """
        self.browser_name = browser_name
        self.headless = headless
        self.default_timeout = default_timeout
        self.navigation_timeout = navigation_timeout

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._contexts: List[BrowserContext] = []

    @classmethod
    def from_config(cls, config: ConfigLoader) -> "BrowserManager":
        return cls(
            browser_name=config.get("browser.name", "chromium"),
            headless=config.get_bool("browser.headless", True),
            default_timeout=config.get_int("page.load.timeout", 10000),
            navigation_timeout=config.get_int("navigation.timeout", 15000),
        )

    def __enter__(self) -> "BrowserManager":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def start(self) -> None:
        """Start Playwright and launch browser."""
        browser_type, extra_options = resolve_browser(self.browser_name)
        self._playwright = sync_playwright().start()
        launcher = getattr(self._playwright, browser_type)

        launch_options = {
            **self.DEFAULT_LAUNCH_OPTIONS,
            **extra_options,
            "headless": self.headless,
        }
        try:
            self._browser = launcher.launch(**launch_options)
        except PlaywrightError:
            self._playwright.stop()
            self._playwright = None
            raise
        logger.info(
            f"Browser started: {self.browser_name} "
            f"(headless={self.headless})"
        )

    def new_context(self, **options: Any) -> BrowserContext:
        """
        Create new isolated browser context.

        Raises:
            RuntimeError: start() was not called
        """
        if not self._browser:
            raise RuntimeError("Browser not started. Call start() first.")

        context_options = {**self.DEFAULT_CONTEXT_OPTIONS, **options}
        context = self._browser.new_context(**context_options)
        self._contexts.append(context)
        return context

    def new_page(self, **context_options: Any) -> Page:
        """Create a page in a fresh context with the configured timeouts."""
        context = self.new_context(**context_options)
        page = context.new_page()
        page.set_default_timeout(self.default_timeout)
        page.set_default_navigation_timeout(self.navigation_timeout)
        return page

    def close(self) -> None:
        """Close all contexts, the browser and Playwright."""
        for context in self._contexts:
            try:
                context.close()
            except PlaywrightError as e:
                logger.debug(f"Context already closed: {e}")
        self._contexts.clear()

        if self._browser:
            self._browser.close()
            self._browser = None

        if self._playwright:
            self._playwright.stop()
            self._playwright = None

        logger.debug("Browser closed")

    @property
    def browser(self) -> Optional[Browser]:
        return self._browser


__all__ = [
    "BrowserManager",
    "NavigationError",
    "navigate_with_retry",
    "resolve_browser",
    "LOGIN_READY_SELECTOR",
]
