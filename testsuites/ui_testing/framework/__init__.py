"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based UI automation framework with self-healing element location.

Components:
    - smart_locator: Self-healing element location and the session selector cache
    - page_base: Base page object for common operations
    - browser_manager: Browser lifecycle and navigation with retry
    - config_loader: YAML configuration with environment overrides
    - screenshot_helper: Scenario / step / failure screenshots
    - ui_assertions: Fluent page assertions
    - visual_checkpoint: Named checkpoint screenshots
    - scenario_context: Per-scenario page objects and test data
      (import it from its module; it depends on the page objects)

Author: Automation Team
License: MIT
================================================================================
"""

from .browser_manager import BrowserManager, NavigationError, navigate_with_retry
from .config_loader import ConfigLoader, ConfigurationError
from .page_base import BasePage
from .screenshot_helper import ScreenshotHelper
from .smart_locator import ElementNotFoundError, SelectorCache, SmartLocator
from .ui_assertions import UIAssertions
from .visual_checkpoint import VisualCheckpoints

__all__ = [
    "SmartLocator",
    "SelectorCache",
    "ElementNotFoundError",
    "BasePage",
    "BrowserManager",
    "NavigationError",
    "navigate_with_retry",
    "ConfigLoader",
    "ConfigurationError",
    "ScreenshotHelper",
    "UIAssertions",
    "VisualCheckpoints",
]
