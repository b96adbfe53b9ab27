"""
================================================================================
Scenario Context
================================================================================

Per-scenario state shared between step functions: the browser page, the
page objects bound to it, and a small free-form data map.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from loguru import logger
from playwright.sync_api import Page

from testsuites.ui_testing.pages import DashboardPage, LoginPage

from .config_loader import ConfigLoader
from .smart_locator import SmartLocator


class ScenarioContext:
    """
    State for one scenario, created by the `scenario_context` fixture.

    Page objects are created once per scenario; steps replace them when a
    navigation returns a new page object (login, logout).

    Usage:
        >>> ctx.login_page.verify_loaded()
        >>> ctx.set("lastMenuNavigation", "Admin")
        >>> ctx.get_str("lastMenuNavigation")
        'Admin'
    """

    def __init__(
        self,
        page: Page,
        smart: SmartLocator,
        config: Optional[ConfigLoader] = None,
    ):
        self.page = page
        self.smart = smart
        self.config = config or ConfigLoader()
        self.login_page = LoginPage(page, smart, self.config)
        self.dashboard_page = DashboardPage(page, smart, self.config)
        self._data: Dict[str, Any] = {}

    # =========================================================================
    # Test data
    # =========================================================================

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def get_str(self, key: str) -> Optional[str]:
        value = self._data.get(key)
        return None if value is None else str(value)

    def get_int(self, key: str) -> int:
        """Stored value as int; 0 when missing."""
        value = self._data.get(key)
        return 0 if value is None else int(value)

    def get_bool(self, key: str) -> bool:
        """Stored value as bool; "true" (any case) or a true bool is True."""
        value = self._data.get(key)
        if isinstance(value, bool):
            return value
        return value is not None and str(value).strip().lower() == "true"

    def has(self, key: str) -> bool:
        return key in self._data

    def clear(self) -> None:
        self._data.clear()

    def dump(self) -> Dict[str, Any]:
        """Log and return a copy of the stored data."""
        for key, value in self._data.items():
            logger.debug(f"TestData - {key}: {value}")
        return dict(self._data)


__all__ = ["ScenarioContext"]
