"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for the OrangeHRM pages.

Each page class encapsulates:
    - Element selectors
    - Page-specific actions
    - Verification methods

Author: Automation Team
License: MIT
================================================================================
"""

from .dashboard_page import DashboardPage
from .login_page import LoginPage

__all__ = [
    "LoginPage",
    "DashboardPage",
]
