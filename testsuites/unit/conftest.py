"""
Browser-free doubles for Playwright's Page and Locator.

A FakePage knows which selectors are "visible" and records every selector
it was asked to locate, so tests can assert the exact resolution order.
"""

from pathlib import Path

import pytest
from playwright.sync_api import Error as PlaywrightError, TimeoutError as PlaywrightTimeoutError

from testsuites.ui_testing.framework.config_loader import ConfigLoader


class FakeLocator:
    def __init__(self, page, selector, is_first=False):
        self.page = page
        self.selector = selector
        self.is_first = is_first

    @property
    def first(self):
        return FakeLocator(self.page, self.selector, is_first=True)

    def _check_broken(self):
        if self.selector in self.page.broken:
            raise PlaywrightError(f"Unexpected token in selector: {self.selector}")

    def count(self):
        self._check_broken()
        return self.page.counts.get(self.selector, 1 if self.selector in self.page.visible else 0)

    def is_visible(self):
        self._check_broken()
        return self.selector in self.page.visible

    def wait_for(self, state="visible", timeout=None):
        self._check_broken()
        self.page.waits_for.append((self.selector, timeout))
        if self.selector not in self.page.visible:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {self.selector}")

    def click(self, timeout=None):
        if self.selector not in self.page.visible:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded clicking {self.selector}")
        self.page.clicked.append(self.selector)

    def fill(self, value, timeout=None):
        if self.selector not in self.page.visible:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded filling {self.selector}")
        self.page.filled[self.selector] = value

    def text_content(self):
        return self.page.texts.get(self.selector, "")

    def inner_text(self):
        return self.page.texts.get(self.selector, "")

    def get_attribute(self, name):
        return self.page.attributes.get((self.selector, name))

    def screenshot(self, path=None):
        Path(path).write_bytes(b"\x89PNG region")


class FakePage:
    def __init__(self, visible=(), url="https://hrm.example.com/web/index.php/auth/login", title="OrangeHRM"):
        self.visible = set(visible)
        self.broken = set()
        self.counts = {}
        self.texts = {}
        self.attributes = {}
        self.url = url
        self._title = title
        self.tried = []
        self.waits_for = []
        self.clicked = []
        self.filled = {}
        self.timeouts = []
        self.navigations = []
        self.screenshot_error = None
        self.reload_reveals = set()

    def locator(self, selector):
        self.tried.append(selector)
        return FakeLocator(self, selector)

    def title(self):
        return self._title

    def wait_for_selector(self, selector, timeout=None, **kwargs):
        if selector not in self.visible:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {selector}")

    def wait_for_timeout(self, milliseconds):
        self.timeouts.append(milliseconds)

    def wait_for_load_state(self, state=None, **kwargs):
        pass

    def goto(self, url, **kwargs):
        self.navigations.append(("goto", url))
        self.url = url

    def reload(self, **kwargs):
        self.navigations.append(("reload", self.url))
        self.visible |= self.reload_reveals

    def screenshot(self, path=None, full_page=False):
        if self.screenshot_error is not None:
            raise self.screenshot_error
        data = b"\x89PNG fake"
        if path:
            Path(path).write_bytes(data)
        return data


@pytest.fixture
def make_page():
    """Factory: make_page(visible=[...], url=..., title=...)."""
    return FakePage


@pytest.fixture
def hrm_config(tmp_path, monkeypatch):
    """ConfigLoader over a small temp config; singleton reset around the test."""
    for name in ("TEST_ENV", "APP_USERNAME", "APP_PASSWORD", "ELEMENT_WAIT_TIMEOUT", "SELF_HEALING_ENABLED"):
        monkeypatch.delenv(name, raising=False)

    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "app.username: Admin\n"
        "app.password: admin123\n"
        "element.wait.timeout: 100\n"
        "page.load.timeout: 100\n"
        "self.healing.enabled: true\n",
        encoding="utf-8",
    )
    ConfigLoader.reset()
    loader = ConfigLoader(config_path=config_path)
    yield loader
    ConfigLoader.reset()
