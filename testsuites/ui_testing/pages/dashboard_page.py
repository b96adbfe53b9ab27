"""
================================================================================
Dashboard Page Object
================================================================================

OrangeHRM dashboard: page header, main side menu and the user dropdown.

================================================================================
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import allure
from loguru import logger
from playwright.sync_api import Error as PlaywrightError

from autotest_tools.common import log_assertion, log_step, log_success
from testsuites.ui_testing.framework.page_base import BasePage

if TYPE_CHECKING:
    from .login_page import LoginPage


class DashboardPage(BasePage):
    """Dashboard page object."""

    DASHBOARD_HEADER = "h6:has-text('Dashboard')"
    USER_DROPDOWN = "span.oxd-userdropdown-tab"
    LOGOUT_LINK = "a:has-text('Logout')"
    MAIN_MENU_ITEMS = "ul.oxd-main-menu li"
    DROPDOWN_MENU = "ul.oxd-dropdown-menu"

    @staticmethod
    def menu_item_selector(menu_name: str) -> str:
        return f"span:has-text('{menu_name}')"

    @staticmethod
    def dropdown_item_selector(item_name: str) -> str:
        return f"ul.oxd-dropdown-menu a:has-text('{item_name}')"

    @allure.step("Verify dashboard is loaded")
    def verify_loaded(self, attempts: int = 2) -> "DashboardPage":
        """
        Wait for the dashboard header, retrying once after a short pause.

        Raises:
            AssertionError: Dashboard did not load
        """
        timeout = max(self.config.get_int("page.load.timeout", 10000), 15000)
        for attempt in range(1, attempts + 1):
            try:
                self.page.wait_for_selector(self.DASHBOARD_HEADER, timeout=timeout)
                log_assertion("Dashboard loaded successfully")
                log_assertion(f"Dashboard URL contains 'dashboard': {'dashboard' in self.current_url}")
                return self
            except PlaywrightError as e:
                logger.warning(f"Dashboard load attempt {attempt} failed: {str(e)[:100]}")
                if attempt < attempts:
                    self.wait(1000)
                else:
                    raise AssertionError("Dashboard did not load") from e
        raise AssertionError("Dashboard did not load")

    @allure.step("Navigate to menu: {menu_name}")
    def navigate_to_menu(self, menu_name: str) -> "DashboardPage":
        log_step(f"Navigate to menu: {menu_name}")
        self.click(self.menu_item_selector(menu_name), f"{menu_name} menu item")
        self.wait_for_page_load()
        # page transition
        self.wait(500)
        log_success(f"Navigated to: {menu_name}")
        return self

    def open_user_dropdown(self) -> "DashboardPage":
        log_step("Click user profile dropdown")
        self.click(self.USER_DROPDOWN, "user dropdown")
        self.wait(300)
        return self

    @allure.step("Logout")
    def logout(self) -> "LoginPage":
        from .login_page import LoginPage

        log_step("Logout from application")
        self.open_user_dropdown()
        self.click(self.LOGOUT_LINK, "logout link")
        self.wait_for_page_load()
        log_success("Logged out successfully")
        return LoginPage(self.page, self.smart, self.config)

    def main_menu_count(self, attempts: int = 2) -> int:
        """Number of side menu entries, 0 if the menu never rendered."""
        timeout = max(self.timeout, 8000)
        for attempt in range(1, attempts + 1):
            try:
                self.page.wait_for_selector(self.MAIN_MENU_ITEMS, timeout=timeout)
                count = self.element_count(self.MAIN_MENU_ITEMS)
                if count > 0:
                    log_assertion(f"Main menu items count: {count}")
                    return count
            except PlaywrightError as e:
                logger.warning(f"Menu count attempt {attempt} failed: {str(e)[:100]}")
            if attempt < attempts:
                self.wait(500)

        log_assertion("Main menu items count: 0")
        return 0

    def is_user_menu_visible(self) -> bool:
        return self.is_visible(self.DROPDOWN_MENU)

    def is_menu_item_present(self, menu_name: str) -> bool:
        return self.is_present(self.menu_item_selector(menu_name))

    def is_dropdown_item_present(self, item_name: str) -> bool:
        try:
            self.page.wait_for_selector(self.DROPDOWN_MENU, timeout=5000)
        except PlaywrightError as e:
            logger.warning(f"Dropdown menu item check failed for: {item_name} ({str(e)[:100]})")
            return False
        return self.is_visible(self.dropdown_item_selector(item_name))

    def welcome_message(self) -> str:
        return self.get_text(self.DASHBOARD_HEADER)


__all__ = ["DashboardPage"]
