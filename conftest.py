"""
Repository-level pytest configuration.

Registers the command-line options of the UI suite and layers them over
config/config.yaml as runtime overrides, so every fixture, page object and
hook reads a single merged configuration.

    pytest testsuites/ui_testing/tests --browser firefox --headed --step-delay 500 --test-env staging

Credentials and URLs live in config/config.yaml (or APP_URL / APP_USERNAME /
APP_PASSWORD environment variables in CI).
"""

from __future__ import annotations

from testsuites.ui_testing.framework.config_loader import ConfigLoader

pytest_plugins = ["pytester"]


def pytest_addoption(parser):
    group = parser.getgroup("orangehrm", "OrangeHRM UI suite")
    group.addoption(
        "--browser",
        action="store",
        default=None,
        help="Browser: chrome, chromium, firefox or webkit (default: browser.name)",
    )
    group.addoption(
        "--headed",
        action="store_true",
        default=False,
        help="Run the browser with a visible window",
    )
    group.addoption(
        "--step-delay",
        action="store",
        type=int,
        default=None,
        help="Pause after every BDD step, in milliseconds (default: test.step.delay)",
    )
    group.addoption(
        "--test-env",
        action="store",
        default=None,
        help="Environment for <key>.<env> config entries (default: TEST_ENV or dev)",
    )


def pytest_configure(config):
    """Apply command-line options as configuration overrides."""
    overrides = {}
    if config.getoption("--browser"):
        overrides["browser.name"] = config.getoption("--browser")
    if config.getoption("--headed"):
        overrides["browser.headless"] = False
    if config.getoption("--step-delay") is not None:
        overrides["test.step.delay"] = config.getoption("--step-delay")

    environment = config.getoption("--test-env")
    if not overrides and not environment:
        return

    hrm_config = ConfigLoader()
    if environment:
        hrm_config.set_environment(environment)
    for key, value in overrides.items():
        hrm_config.set_override(key, value)
