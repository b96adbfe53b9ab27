"""
================================================================================
UI Testing Pytest Configuration
================================================================================

Fixtures and hooks for the OrangeHRM BDD suite.

Key Features:
- One browser + page per scenario, opened on the login page
- Session-wide selector cache shared by every scenario's SmartLocator
- Step screenshots attached to Allure, failure screenshots on disk
- Live HTML report updated after each scenario
- Report flush at session end (also on Ctrl-C) and at interpreter exit

================================================================================
"""

import atexit
from datetime import datetime
from pathlib import Path
from typing import Generator, Optional

import pytest
from loguru import logger
from playwright.sync_api import Page

from autotest_tools.common import (
    init_logger,
    log_scenario_end,
    log_scenario_start,
)
from autotest_tools.report_tools.allure_utils import attach_text
from autotest_tools.report_tools.cucumber_report import DEFAULT_JSON_PATH, generate_partial_report
from autotest_tools.report_tools.live_report import FAILED, PASSED, LiveReportTracker
from testsuites.ui_testing.framework.browser_manager import BrowserManager, navigate_with_retry
from testsuites.ui_testing.framework.config_loader import ConfigLoader
from testsuites.ui_testing.framework.scenario_context import ScenarioContext
from testsuites.ui_testing.framework.screenshot_helper import ScreenshotHelper
from testsuites.ui_testing.framework.smart_locator import SelectorCache, SmartLocator
from testsuites.ui_testing.framework.ui_assertions import UIAssertions
from testsuites.ui_testing.framework.visual_checkpoint import VisualCheckpoints


tracker_key = pytest.StashKey[LiveReportTracker]()
screenshots_key = pytest.StashKey[ScreenshotHelper]()
flushed_key = pytest.StashKey[bool]()
started_key = pytest.StashKey[datetime]()
page_key = pytest.StashKey[Page]()


# ================================================================================
# Pytest Configuration
# ================================================================================

def pytest_configure(config):
    """Set up logging and the run-wide report objects."""
    hrm_config = ConfigLoader()
    init_logger(
        level=hrm_config.get("logging.level", "INFO"),
        log_file=hrm_config.get("logging.file"),
    )
    logger.info("\n" + hrm_config.describe())

    report_dir = Path(hrm_config.get("report.output.dir", "reports"))
    config.stash[tracker_key] = LiveReportTracker(report_dir)
    config.stash[screenshots_key] = ScreenshotHelper(
        hrm_config.get("screenshot.dir", str(report_dir / "screenshots"))
    )
    config.stash[flushed_key] = False
    config.stash[tracker_key].write()

    atexit.register(_flush_reports, config)


@pytest.hookimpl(trylast=True)
def pytest_sessionfinish(session, exitstatus):
    """
    Flush reports once the run is over.

    Runs after the Cucumber JSON plugin has written its file; an
    interrupted run (Ctrl-C) still reaches this hook.
    """
    _flush_reports(session.config)


def _flush_reports(config) -> None:
    if config.stash.get(flushed_key, True):
        return
    config.stash[flushed_key] = True

    tracker = config.stash[tracker_key]
    summary = tracker.summary()

    logger.info("=" * 60)
    logger.info("TEST EXECUTION FINISHED")
    logger.info(f"Scenarios executed: {summary.total}")
    logger.info(f"Passed: {summary.passed} ✅")
    logger.info(f"Failed: {summary.failed} ❌")
    logger.info(f"Pass rate: {summary.pass_rate_label}")
    logger.info("=" * 60)

    artifacts = [tracker.finalize(), tracker.data_file]

    json_path = getattr(config.option, "cucumber_json_path", None) or DEFAULT_JSON_PATH
    partial = generate_partial_report(
        json_path,
        tracker.output_dir / "cucumber-report-partial.html",
    )
    if partial is not None:
        artifacts.append(partial)

    logger.info("Available reports:")
    for artifact in artifacts:
        if Path(artifact).exists():
            logger.info(f"  - {artifact}")
    allure_dir = getattr(config.option, "allure_report_dir", None)
    if allure_dir:
        logger.info(f"  - Allure results: {allure_dir}")


# ================================================================================
# Core Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def hrm_config() -> ConfigLoader:
    """Process-wide configuration (command-line overrides already applied)."""
    return ConfigLoader()


@pytest.fixture(scope="session")
def selector_cache() -> Generator[SelectorCache, None, None]:
    """
    Session-scoped selector cache.

    Healed selectors found in one scenario are tried first in the next.
    """
    cache = SelectorCache()
    yield cache
    logger.info(cache.health_report())


@pytest.fixture(scope="session")
def visual_checkpoints(hrm_config: ConfigLoader) -> VisualCheckpoints:
    report_dir = Path(hrm_config.get("report.output.dir", "reports"))
    return VisualCheckpoints(
        report_dir / "visual-checkpoints",
        enabled=hrm_config.get_bool("visual.testing.enabled", False),
    )


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest.fixture
def browser_manager(hrm_config: ConfigLoader) -> Generator[BrowserManager, None, None]:
    """Fresh Playwright + browser for each scenario."""
    manager = BrowserManager.from_config(hrm_config)
    manager.start()
    yield manager
    manager.close()


@pytest.fixture
def page(
    request,
    browser_manager: BrowserManager,
    hrm_config: ConfigLoader,
) -> Generator[Page, None, None]:
    """Page opened on the application URL and ready for login."""
    page = browser_manager.new_page()
    request.node.stash[page_key] = page
    navigate_with_retry(
        page,
        hrm_config.get("app.url"),
        timeout=hrm_config.get_int("navigation.timeout", 15000),
    )
    yield page


@pytest.fixture
def smart_locator(
    page: Page,
    selector_cache: SelectorCache,
    hrm_config: ConfigLoader,
) -> SmartLocator:
    return SmartLocator(
        page,
        selector_cache,
        healing_enabled=hrm_config.get_bool("self.healing.enabled", True),
        timeout=hrm_config.get_int("element.wait.timeout", 5000),
    )


@pytest.fixture
def scenario_context(
    page: Page,
    smart_locator: SmartLocator,
    selector_cache: SelectorCache,
    hrm_config: ConfigLoader,
) -> Generator[ScenarioContext, None, None]:
    """Page objects and shared data for one scenario."""
    context = ScenarioContext(page, smart_locator, hrm_config)
    yield context
    selector_cache.log_stats()
    context.clear()


@pytest.fixture
def ui_assert(page: Page) -> UIAssertions:
    return UIAssertions(page)


# ================================================================================
# BDD Hooks
# ================================================================================

def pytest_bdd_before_scenario(request, feature, scenario):
    log_scenario_start(scenario.name)
    request.getfixturevalue("visual_checkpoints").start(scenario.name)


def pytest_bdd_after_scenario(request, feature, scenario):
    request.getfixturevalue("visual_checkpoints").close()
    log_scenario_end(scenario.name)


def pytest_bdd_after_step(request, feature, scenario, step, step_func, step_func_args):
    _after_step(request, scenario, step, PASSED)


def pytest_bdd_step_error(request, feature, scenario, step, step_func, step_func_args, exception):
    logger.error(f"Step failed: {step.keyword} {step.name} ({exception})")
    _after_step(request, scenario, step, FAILED)


def _after_step(request, scenario, step, status: str) -> None:
    """Step screenshot for Allure, then the configured step delay."""
    page: Optional[Page] = request.node.stash.get(page_key, None)
    if page is None:
        return

    hrm_config = ConfigLoader()
    if hrm_config.get_bool("screenshot.every.step", True):
        request.config.stash[screenshots_key].attach_step(page, scenario.name, step.name, status)

    delay = hrm_config.get_int("test.step.delay", 0)
    if delay > 0:
        page.wait_for_timeout(delay)


# ================================================================================
# Scenario Result Recording
# ================================================================================

@pytest.hookimpl(tryfirst=True)
def pytest_runtest_setup(item):
    item.stash[started_key] = datetime.now()


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Record the scenario result in the live report.

    The call phase decides the outcome; a failing setup (browser launch,
    navigation) is recorded as a failed scenario too.
    """
    outcome = yield
    report = outcome.get_result()

    if report.skipped:
        return
    if report.when == "call" or (report.when == "setup" and report.failed):
        _record_scenario(item, call, report)


def _record_scenario(item, call, report) -> None:
    scenario = getattr(getattr(item, "obj", None), "__scenario__", None)
    name = scenario.name if scenario is not None else item.name
    start = item.stash.get(started_key, datetime.now())

    error_message = None
    screenshot = None
    if report.failed:
        if call.excinfo is not None:
            error_message = f"{call.excinfo.typename}: {call.excinfo.value}"[:1000]
            attach_text(error_message, name="Failure reason")
        page = item.stash.get(page_key, None)
        if page is not None:
            path = item.config.stash[screenshots_key].capture_failure(page, name)
            screenshot = str(path) if path else None

    tracker = item.config.stash[tracker_key]
    tracker.record(
        name,
        FAILED if report.failed else PASSED,
        start,
        datetime.now(),
        error_message=error_message,
        screenshot=screenshot,
    )
    logger.info(f"Scenario {'FAILED ❌' if report.failed else 'PASSED ✅'}: {name} | {tracker.stats()}")
