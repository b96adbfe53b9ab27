"""
================================================================================
Test Suites Pytest Configuration
================================================================================

Registers the markers used by the feature-file tags and the unit suite, and
prints a run header.

================================================================================
"""

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification scenarios"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression scenarios"
    )
    config.addinivalue_line(
        "markers", "negative: Invalid input / error path scenarios"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "ui: Browser-driven scenarios"
    )
    config.addinivalue_line(
        "markers", "unit: Browser-free unit tests"
    )

    # Feature markers
    config.addinivalue_line(
        "markers", "login: Login and logout scenarios"
    )
    config.addinivalue_line(
        "markers", "dashboard: Dashboard scenarios"
    )
    config.addinivalue_line(
        "markers", "navigation: Main menu navigation scenarios"
    )


def pytest_collection_modifyitems(config, items):
    """Auto-mark tests by directory."""
    for item in items:
        if "ui_testing" in str(item.path):
            item.add_marker(pytest.mark.ui)
        elif "unit" in str(item.path):
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "OrangeHRM UI Automation Suite (Playwright + pytest-bdd)",
        "=" * 60,
        "",
    ]
