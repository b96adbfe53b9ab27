"""
================================================================================
Live Execution Report
================================================================================

Incremental HTML report that is rewritten after every finished scenario, so
a run that is interrupted still leaves a readable report behind.

Two files are produced under the report output directory:
    - test-execution-data.txt    flat key=value snapshot of all results
    - test-execution-report.html auto-refreshing summary + scenario table

Rendering is a pure function of the result list and two timestamps
(render_live_report); LiveReportTracker only owns the list and the file I/O.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from jinja2 import Environment
from loguru import logger

from .allure_utils import TestResultSummary

DATA_FILE_NAME = "test-execution-data.txt"
HTML_FILE_NAME = "test-execution-report.html"
TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
REFRESH_SECONDS = 5

PASSED = "PASSED"
FAILED = "FAILED"

# field separator and line breaks of the text snapshot
_SNAPSHOT_UNSAFE = re.compile(r"[|\r\n]")


@dataclass(frozen=True)
class ScenarioResult:
    """Outcome of one scenario. Immutable once recorded."""
    name: str
    status: str
    start: datetime
    end: datetime
    duration_ms: int
    error_message: Optional[str] = None
    screenshot: Optional[str] = None

    @property
    def passed(self) -> bool:
        return self.status == PASSED


def summarize(results: Sequence[ScenarioResult]) -> TestResultSummary:
    """Totals for a result list: total = passed + failed."""
    summary = TestResultSummary()
    for result in results:
        summary.total += 1
        if result.passed:
            summary.passed += 1
        else:
            summary.failed += 1
        summary.duration_ms += result.duration_ms
    return summary


def render_text_snapshot(results: Sequence[ScenarioResult], started_at: datetime) -> str:
    """
    Flat text snapshot of the run.

    Format:
        TEST_START_TIME=2024-01-01 10:00:00
        TOTAL_SCENARIOS=2
        SCENARIO|<name>|<status>|<start>|<end>|<duration_ms>
        PASSED=1
        FAILED=1
        TOTAL_DURATION_MS=420
    """
    summary = summarize(results)
    lines = [
        f"TEST_START_TIME={started_at.strftime(TIME_FORMAT)}",
        f"TOTAL_SCENARIOS={summary.total}",
    ]
    for result in results:
        lines.append(
            "|".join([
                "SCENARIO",
                _SNAPSHOT_UNSAFE.sub(" ", result.name),
                result.status,
                result.start.strftime(TIME_FORMAT),
                result.end.strftime(TIME_FORMAT),
                str(result.duration_ms),
            ])
        )
    lines.extend([
        f"PASSED={summary.passed}",
        f"FAILED={summary.failed}",
        f"TOTAL_DURATION_MS={summary.duration_ms}",
    ])
    return "\n".join(lines) + "\n"


def render_live_report(
    results: Sequence[ScenarioResult],
    started_at: datetime,
    generated_at: datetime,
    screenshot_base: Optional[Union[str, Path]] = None,
) -> str:
    """
    Render the live HTML report.

    Uses Jinja2 with autoescape so scenario names and error messages from
    the application under test cannot inject markup into the report.

    Args:
        results: Recorded scenario results in completion order
        started_at: Run start time
        generated_at: Timestamp printed in the page header
        screenshot_base: Directory screenshot links are made relative to
            (the report's own directory)
    """
    summary = summarize(results)
    rows = []
    for index, result in enumerate(results, start=1):
        rows.append({
            "index": index,
            "name": result.name,
            "status": result.status,
            "css": "passed" if result.passed else "failed",
            "start": result.start.strftime(TIME_FORMAT),
            "end": result.end.strftime(TIME_FORMAT),
            "duration": _format_duration(result.duration_ms),
            "error_message": result.error_message,
            "screenshot": _screenshot_link(result.screenshot, screenshot_base),
        })

    env = Environment(autoescape=True)
    template = env.from_string(HTML_TEMPLATE)
    return template.render(
        summary=summary,
        rows=rows,
        started_at=started_at.strftime(TIME_FORMAT),
        generated_at=generated_at.strftime(TIME_FORMAT),
        total_duration=_format_duration(summary.duration_ms),
        refresh_seconds=REFRESH_SECONDS,
    )


def _format_duration(duration_ms: int) -> str:
    if duration_ms < 1000:
        return f"{duration_ms} ms"
    return f"{duration_ms / 1000:.2f} s"


def _screenshot_link(
    screenshot: Optional[str],
    base: Optional[Union[str, Path]],
) -> Optional[str]:
    if not screenshot:
        return None
    if base is None:
        return Path(screenshot).as_posix()
    try:
        return Path(os.path.relpath(screenshot, str(base))).as_posix()
    except ValueError:
        # different drive on Windows
        return Path(screenshot).as_posix()


class LiveReportTracker:
    """
    Collects scenario results and rewrites the report files on every record.

    Usage:
        >>> tracker = LiveReportTracker("reports")
        >>> tracker.record("Valid login", "PASSED", start, end)
        >>> tracker.stats()
        'Total: 1 | Passed: 1 | Failed: 0'

    File writes never raise; a failed write is logged and the in-memory
    results stay authoritative.
    """

    def __init__(self, output_dir: Union[str, Path] = "reports"):
        self.output_dir = Path(output_dir)
        self.data_file = self.output_dir / DATA_FILE_NAME
        self.html_file = self.output_dir / HTML_FILE_NAME
        self._results: List[ScenarioResult] = []
        self.started_at = datetime.now()

    @property
    def results(self) -> Tuple[ScenarioResult, ...]:
        return tuple(self._results)

    def record(
        self,
        name: str,
        status: str,
        start: datetime,
        end: datetime,
        error_message: Optional[str] = None,
        screenshot: Optional[str] = None,
    ) -> ScenarioResult:
        """
        Append a scenario result and refresh both report files.

        Args:
            name: Scenario name
            status: "PASSED" or "FAILED" (case-insensitive)
            start: Scenario start time
            end: Scenario end time
            error_message: Failure message shown in the report
            screenshot: Path of the failure screenshot

        Returns:
            The stored ScenarioResult

        Raises:
            ValueError: Unknown status
        """
        normalized = status.upper()
        if normalized not in (PASSED, FAILED):
            raise ValueError(f"Unsupported scenario status: {status!r}")

        duration_ms = max(0, int((end - start).total_seconds() * 1000))
        result = ScenarioResult(
            name=name,
            status=normalized,
            start=start,
            end=end,
            duration_ms=duration_ms,
            error_message=error_message,
            screenshot=screenshot,
        )
        self._results.append(result)
        logger.debug(f"Recorded scenario: {name} - {normalized} ({duration_ms} ms)")
        self.write()
        return result

    def summary(self) -> TestResultSummary:
        return summarize(self._results)

    def stats(self) -> str:
        return str(self.summary())

    def write(self) -> bool:
        """Write the text snapshot and the HTML report. Returns False on I/O failure."""
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            self.data_file.write_text(
                render_text_snapshot(self._results, self.started_at),
                encoding="utf-8",
            )
            self.html_file.write_text(
                render_live_report(
                    self._results,
                    self.started_at,
                    datetime.now(),
                    screenshot_base=self.output_dir,
                ),
                encoding="utf-8",
            )
        except OSError as e:
            logger.warning(f"⚠️ Could not update live report in {self.output_dir}: {e}")
            return False
        return True

    def finalize(self) -> Path:
        """Re-render the report at shutdown and log the final totals."""
        self.write()
        logger.info(f"Live report finalized: {self.stats()}")
        return self.html_file

    def reset(self) -> None:
        """Drop all results and restart the run clock."""
        self._results.clear()
        self.started_at = datetime.now()
        logger.debug("Live report tracker reset")


HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <meta http-equiv="refresh" content="{{ refresh_seconds }}">
    <title>OrangeHRM Test Execution Report</title>
    <style>
        body { font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif;
               background: #f4f6f9; color: #2c3e50; margin: 0; padding: 24px; }
        header { background: #ff7b1d; color: #fff; padding: 20px 24px; border-radius: 8px; }
        header h1 { margin: 0 0 6px 0; font-size: 24px; }
        header p { margin: 2px 0; opacity: 0.9; }
        .stats { display: grid; grid-template-columns: repeat(auto-fit, minmax(160px, 1fr));
                 gap: 16px; margin: 24px 0; }
        .stat { background: #fff; border-radius: 8px; padding: 16px; text-align: center;
                box-shadow: 0 1px 3px rgba(0,0,0,0.08); }
        .stat .value { font-size: 28px; font-weight: 700; }
        .stat .label { font-size: 13px; color: #7f8c8d; text-transform: uppercase; }
        .stat.passed .value { color: #27ae60; }
        .stat.failed .value { color: #c0392b; }
        .waiting { background: #fff8e1; border: 1px solid #ffe082; border-radius: 8px;
                   padding: 24px; text-align: center; font-size: 18px; }
        table { width: 100%; border-collapse: collapse; background: #fff; border-radius: 8px;
                overflow: hidden; box-shadow: 0 1px 3px rgba(0,0,0,0.08); }
        th, td { padding: 10px 12px; text-align: left; border-bottom: 1px solid #ecf0f1;
                 vertical-align: top; }
        th { background: #34495e; color: #fff; font-weight: 600; }
        .badge { padding: 3px 10px; border-radius: 12px; font-size: 12px; font-weight: 700;
                 color: #fff; }
        .badge.passed { background: #27ae60; }
        .badge.failed { background: #c0392b; }
        .error { margin-top: 6px; padding: 8px; background: #fdecea; border-left: 3px solid #c0392b;
                 font-family: monospace; font-size: 12px; white-space: pre-wrap; }
        footer { margin-top: 24px; font-size: 12px; color: #95a5a6; text-align: center; }
    </style>
</head>
<body>
    <header>
        <h1>OrangeHRM Test Execution Report</h1>
        <p>Run started: {{ started_at }}</p>
        <p>Last updated: {{ generated_at }} (refreshes every {{ refresh_seconds }} seconds)</p>
    </header>

    <section class="stats">
        <div class="stat"><div class="value">{{ summary.total }}</div><div class="label">Total</div></div>
        <div class="stat passed"><div class="value">{{ summary.passed }}</div><div class="label">Passed</div></div>
        <div class="stat failed"><div class="value">{{ summary.failed }}</div><div class="label">Failed</div></div>
        <div class="stat"><div class="value">{{ summary.pass_rate_label }}</div><div class="label">Pass Rate</div></div>
        <div class="stat"><div class="value">{{ total_duration }}</div><div class="label">Duration</div></div>
    </section>

    {% if not rows %}
    <div class="waiting">Waiting for test execution... no scenario has completed yet.</div>
    {% else %}
    <table>
        <thead>
            <tr><th>#</th><th>Scenario</th><th>Status</th><th>Start</th><th>End</th><th>Duration</th></tr>
        </thead>
        <tbody>
            {% for row in rows %}
            <tr>
                <td>{{ row.index }}</td>
                <td>
                    {{ row.name }}
                    {% if row.error_message %}<div class="error">{{ row.error_message }}</div>{% endif %}
                    {% if row.screenshot %}<div><a href="{{ row.screenshot }}" target="_blank">Failure screenshot</a></div>{% endif %}
                </td>
                <td><span class="badge {{ row.css }}">{{ row.status }}</span></td>
                <td>{{ row.start }}</td>
                <td>{{ row.end }}</td>
                <td>{{ row.duration }}</td>
            </tr>
            {% endfor %}
        </tbody>
    </table>
    {% endif %}

    <footer>Generated by the OrangeHRM UI automation suite</footer>
</body>
</html>
"""


__all__ = [
    "ScenarioResult",
    "LiveReportTracker",
    "render_live_report",
    "render_text_snapshot",
    "summarize",
    "PASSED",
    "FAILED",
]
