"""
Scenario recording and the report flush of the UI suite's conftest,
run against stub tests that never start a browser.
"""

import json
from types import SimpleNamespace

import pytest
import yaml

from autotest_tools.common import global_config
from autotest_tools.report_tools.live_report import DATA_FILE_NAME, HTML_FILE_NAME, LiveReportTracker
from testsuites.ui_testing.framework.config_loader import ConfigLoader
from testsuites.ui_testing.tests import conftest as ui_hooks

UI_PLUGIN = "testsuites.ui_testing.tests.conftest"

STUB_SCENARIOS = """
from pathlib import Path

import pytest

from testsuites.ui_testing.tests.conftest import page_key


class StubPage:
    def screenshot(self, path=None, full_page=False):
        Path(path).write_bytes(b"\\x89PNG stub")


@pytest.fixture
def page(request):
    stub = StubPage()
    request.node.stash[page_key] = stub
    return stub


@pytest.fixture
def broken_browser():
    raise RuntimeError("browser did not start")


def test_valid_login(page):
    assert page is not None


def test_invalid_login(page):
    assert 1 == 2, "toast missing"


def test_browser_setup(broken_browser):
    pass
"""


@pytest.fixture
def report_dir(pytester, monkeypatch):
    """Singleton config pointing the live report into the pytester directory."""
    monkeypatch.setattr(global_config, "_logger_initialized", True)
    for name in ("REPORT_OUTPUT_DIR", "SCREENSHOT_DIR", "SCREENSHOT_EVERY_STEP", "TEST_ENV"):
        monkeypatch.delenv(name, raising=False)

    directory = pytester.path / "reports"
    config_path = pytester.path / "config.yaml"
    config_path.write_text(
        yaml.dump({
            "report.output.dir": str(directory),
            "screenshot.dir": str(directory / "screenshots"),
            "screenshot.every.step": False,
            "visual.testing.enabled": False,
        }),
        encoding="utf-8",
    )
    ConfigLoader.reset()
    ConfigLoader(config_path=config_path)
    yield directory
    ConfigLoader.reset()


@pytest.fixture
def attached(monkeypatch):
    names = []
    monkeypatch.setattr(ui_hooks, "attach_text", lambda text, name: names.append((name, text)))
    return names


def test_scenarios_recorded_in_live_report(pytester, report_dir, attached):
    pytester.makepyfile(test_stub_scenarios=STUB_SCENARIOS)

    result = pytester.runpytest("-p", UI_PLUGIN, "-p", "no:cacheprovider")

    result.assert_outcomes(passed=1, failed=1, errors=1)

    lines = (report_dir / DATA_FILE_NAME).read_text(encoding="utf-8").splitlines()
    statuses = [line.split("|")[1:3] for line in lines if line.startswith("SCENARIO|")]
    assert statuses == [
        ["test_valid_login", "PASSED"],
        ["test_invalid_login", "FAILED"],
        ["test_browser_setup", "FAILED"],
    ]
    assert "PASSED=1" in lines
    assert "FAILED=2" in lines

    html = (report_dir / HTML_FILE_NAME).read_text(encoding="utf-8")
    assert "AssertionError: toast missing" in html
    assert "RuntimeError: browser did not start" in html
    assert 'href="screenshots/test_invalid_login_FAILED_' in html
    assert len(list((report_dir / "screenshots").glob("test_invalid_login_FAILED_*.png"))) == 1

    assert [name for name, _ in attached] == ["Failure reason", "Failure reason"]
    assert attached[0][1].startswith("AssertionError: toast missing")


def test_passing_run_has_no_failure_artifacts(pytester, report_dir, attached):
    pytester.makepyfile(test_single="def test_dashboard():\n    assert True\n")

    result = pytester.runpytest("-p", UI_PLUGIN, "-p", "no:cacheprovider")

    result.assert_outcomes(passed=1)
    data = (report_dir / DATA_FILE_NAME).read_text(encoding="utf-8")
    assert "SCENARIO|test_dashboard|PASSED|" in data
    assert "FAILED=0" in data
    assert not (report_dir / "screenshots").exists()
    assert attached == []


class CountingTracker(LiveReportTracker):
    def __init__(self, output_dir):
        super().__init__(output_dir)
        self.finalized = 0

    def finalize(self):
        self.finalized += 1
        return super().finalize()


def _session_config(tracker, json_path):
    stash = pytest.Stash()
    stash[ui_hooks.tracker_key] = tracker
    stash[ui_hooks.flushed_key] = False
    option = SimpleNamespace(cucumber_json_path=str(json_path), allure_report_dir=None)
    return SimpleNamespace(stash=stash, option=option)


def test_flush_runs_once(tmp_path):
    json_path = tmp_path / "cucumber.json"
    json_path.write_text(
        json.dumps([{"name": "Login", "elements": [{"name": "Valid login", "steps": []}]}]),
        encoding="utf-8",
    )
    tracker = CountingTracker(tmp_path / "reports")
    config = _session_config(tracker, json_path)

    ui_hooks._flush_reports(config)
    ui_hooks._flush_reports(config)

    assert tracker.finalized == 1
    assert (tmp_path / "reports" / HTML_FILE_NAME).exists()
    assert (tmp_path / "reports" / "cucumber-report-partial.html").exists()


def test_flush_without_cucumber_json(tmp_path):
    tracker = CountingTracker(tmp_path / "reports")
    config = _session_config(tracker, tmp_path / "missing.json")

    ui_hooks._flush_reports(config)

    assert tracker.finalized == 1
    assert not (tmp_path / "reports" / "cucumber-report-partial.html").exists()
