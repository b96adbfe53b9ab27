"""
================================================================================
UI Assertions
================================================================================

Fluent assertions over a Playwright page with readable failure messages.

Usage:
    UIAssertions(page).with_context("after login") \\
        .url_contains("dashboard") \\
        .element_is_visible("h6:has-text('Dashboard')") \\
        .element_count_greater_than("ul.oxd-main-menu li", 7)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Optional

from playwright.sync_api import Error as PlaywrightError, Page

from autotest_tools.common import log_success


class UIAssertions:
    """Chainable page assertions. Every failure raises AssertionError."""

    def __init__(self, page: Page):
        self.page = page
        self._context: Optional[str] = None

    def with_context(self, context: str) -> "UIAssertions":
        """Prefix following failure messages with `[context]`."""
        self._context = context
        return self

    def _message(self, text: str) -> str:
        return f"[{self._context}] {text}" if self._context else text

    def _fail(self, text: str, cause: Optional[BaseException] = None) -> None:
        raise AssertionError(self._message(text)) from cause

    # =========================================================================
    # Element assertions
    # =========================================================================

    def element_is_visible(self, selector: str, timeout: int = 5000) -> "UIAssertions":
        try:
            self.page.locator(selector).first.wait_for(state="visible", timeout=timeout)
        except PlaywrightError as e:
            self._fail(f"Element not visible within {timeout} ms: {selector}", e)
        log_success(self._message(f"Element is visible: {selector}"))
        return self

    def element_contains_text(self, selector: str, expected_text: str) -> "UIAssertions":
        try:
            actual = self.page.locator(selector).first.text_content() or ""
        except PlaywrightError as e:
            self._fail(f"Could not read text of element: {selector}", e)
        if expected_text not in actual:
            self._fail(f"Element {selector} text '{actual}' does not contain '{expected_text}'")
        log_success(self._message(f"Element {selector} contains text: {expected_text}"))
        return self

    def element_count_equals(self, selector: str, expected_count: int) -> "UIAssertions":
        actual = self.page.locator(selector).count()
        if actual != expected_count:
            self._fail(f"Expected {expected_count} elements for {selector}, found {actual}")
        log_success(self._message(f"Element count for {selector} is {actual}"))
        return self

    def element_count_greater_than(self, selector: str, min_count: int) -> "UIAssertions":
        actual = self.page.locator(selector).count()
        if actual <= min_count:
            self._fail(f"Expected more than {min_count} elements for {selector}, found {actual}")
        log_success(self._message(f"Element count for {selector} is {actual} (> {min_count})"))
        return self

    def element_has_attribute(
        self,
        selector: str,
        attribute: str,
        expected_value: str,
    ) -> "UIAssertions":
        try:
            actual = self.page.locator(selector).first.get_attribute(attribute)
        except PlaywrightError as e:
            self._fail(f"Could not read attribute '{attribute}' of element: {selector}", e)
        if actual != expected_value:
            self._fail(
                f"Attribute '{attribute}' of {selector} is '{actual}', expected '{expected_value}'"
            )
        log_success(self._message(f"Attribute '{attribute}' of {selector} is '{expected_value}'"))
        return self

    # =========================================================================
    # Page assertions
    # =========================================================================

    def page_body_contains_text(self, expected_text: str) -> "UIAssertions":
        try:
            body = self.page.locator("body").inner_text()
        except PlaywrightError as e:
            self._fail("Could not read page body text", e)
        if expected_text not in body:
            self._fail(f"Page body does not contain '{expected_text}'")
        log_success(self._message(f"Page body contains text: {expected_text}"))
        return self

    def url_contains(self, expected_part: str) -> "UIAssertions":
        url = self.page.url
        if expected_part not in url:
            self._fail(f"URL '{url}' does not contain '{expected_part}'")
        log_success(self._message(f"URL contains: {expected_part}"))
        return self

    def url_equals(self, expected_url: str) -> "UIAssertions":
        url = self.page.url
        if url != expected_url:
            self._fail(f"URL '{url}' does not equal '{expected_url}'")
        log_success(self._message(f"URL equals: {expected_url}"))
        return self

    def title_contains(self, expected_title: str) -> "UIAssertions":
        """Case-insensitive page title check."""
        title = self.page.title()
        if expected_title.lower() not in title.lower():
            self._fail(f"Page title '{title}' does not contain '{expected_title}'")
        log_success(self._message(f"Page title contains: {expected_title}"))
        return self


__all__ = ["UIAssertions"]
