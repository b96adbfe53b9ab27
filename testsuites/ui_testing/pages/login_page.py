"""
================================================================================
Login Page Object
================================================================================

OrangeHRM login screen: credentials form, login button and the error toast
shown for invalid credentials.

================================================================================
"""

from __future__ import annotations

from typing import Optional

import allure
from loguru import logger
from playwright.sync_api import Error as PlaywrightError

from autotest_tools.common import log_assertion, log_step
from testsuites.ui_testing.framework.page_base import BasePage

from .dashboard_page import DashboardPage


class LoginPage(BasePage):
    """Login page object."""

    USERNAME_INPUT = 'input[name="username"]'
    PASSWORD_INPUT = 'input[name="password"]'
    LOGIN_BUTTON = 'button[type="submit"]'
    ERROR_MESSAGE = ".oxd-text--toast-message"
    LOGIN_TITLE = "h5:has-text('Login')"

    @allure.step("Verify login page is loaded")
    def verify_loaded(self) -> "LoginPage":
        """
        Wait for the username field.

        Raises:
            AssertionError: Login page did not load
        """
        try:
            self.page.wait_for_selector(
                self.USERNAME_INPUT,
                timeout=max(self.timeout, 15000),
            )
        except PlaywrightError as e:
            logger.error(f"Login page failed to load: {str(e)[:100]}")
            raise AssertionError("Login page did not load") from e
        log_assertion("Login page loaded successfully")
        return self

    def enter_username(self, username: str) -> "LoginPage":
        log_step(f"Enter username: {username}")
        self.fill(self.USERNAME_INPUT, username, "username field")
        return self

    def enter_password(self, password: str) -> "LoginPage":
        log_step("Enter password")
        self.fill(self.PASSWORD_INPUT, password, "password field")
        return self

    def click_login(self) -> DashboardPage:
        log_step("Click login button")
        self.click(self.LOGIN_BUTTON, "login button")
        self.wait_for_page_load()
        return DashboardPage(self.page, self.smart, self.config)

    @allure.step("Login (username={username})")
    def login(
        self,
        username: Optional[str] = None,
        password: Optional[str] = None,
    ) -> DashboardPage:
        """
        Perform login.

        Args:
            username: Defaults to `app.username` from configuration
            password: Defaults to `app.password` from configuration

        Returns:
            DashboardPage (not yet verified; call verify_loaded())
        """
        if username is None:
            username = self.config.get("app.username", "Admin")
        if password is None:
            password = self.config.get("app.password", "admin123")

        return (
            self.enter_username(username)
            .enter_password(password)
            .click_login()
        )

    def is_error_displayed(self) -> bool:
        return self.is_visible(self.ERROR_MESSAGE)

    def error_message(self) -> str:
        return self.get_text(self.ERROR_MESSAGE)

    def has_login_title(self) -> bool:
        return self.is_present(self.LOGIN_TITLE)

    def is_field_visible(self, selector: str, attempts: int = 3, interval_ms: int = 500) -> bool:
        """
        Poll a form field; after a failed login the form re-renders briefly.
        """
        for attempt in range(1, attempts + 1):
            if self.is_visible(selector):
                return True
            if attempt < attempts:
                logger.debug(f"Field not visible yet (attempt {attempt}/{attempts}), waiting before retry...")
                self.wait(interval_ms)
        return False

    def form_elements_visible(self) -> bool:
        return (
            self.is_visible(self.USERNAME_INPUT)
            and self.is_visible(self.PASSWORD_INPUT)
            and self.is_visible(self.LOGIN_BUTTON)
        )


__all__ = ["LoginPage"]
