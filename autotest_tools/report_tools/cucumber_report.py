"""
================================================================================
Partial Cucumber Report
================================================================================

Builds a standalone HTML summary from the Cucumber JSON written by
`pytest --cucumberjson`. Runs at shutdown, so it also covers runs that were
interrupted before the regular reports were produced.

A missing, empty or half-written JSON file is expected after an early stop;
those cases are logged at info level and no report is written.

================================================================================
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from jinja2 import Environment
from loguru import logger

DEFAULT_JSON_PATH = Path("reports") / "cucumber.json"
DEFAULT_HTML_PATH = Path("reports") / "cucumber-report-partial.html"


@dataclass
class StepRow:
    keyword: str
    name: str
    status: str
    error_message: Optional[str] = None


@dataclass
class ScenarioRow:
    feature: str
    name: str
    failed: bool
    steps: List[StepRow] = field(default_factory=list)


@dataclass
class CucumberSummary:
    """Scenario and step counts taken from a Cucumber JSON document."""
    scenarios: List[ScenarioRow] = field(default_factory=list)
    total_steps: int = 0
    passed_steps: int = 0
    failed_steps: int = 0
    skipped_steps: int = 0

    @property
    def total_scenarios(self) -> int:
        return len(self.scenarios)

    @property
    def failed_scenarios(self) -> int:
        return sum(1 for scenario in self.scenarios if scenario.failed)

    @property
    def passed_scenarios(self) -> int:
        return self.total_scenarios - self.failed_scenarios

    @property
    def scenario_pass_rate(self) -> float:
        if not self.scenarios:
            return 0.0
        return self.passed_scenarios * 100.0 / self.total_scenarios

    @property
    def step_pass_rate(self) -> float:
        if not self.total_steps:
            return 0.0
        return self.passed_steps * 100.0 / self.total_steps


def _iter_scenarios(document: Any):
    """Yield (feature_name, scenario) pairs; bare scenario lists are accepted too."""
    if not isinstance(document, list):
        return
    for item in document:
        if not isinstance(item, dict):
            continue
        if "elements" in item:
            for scenario in item.get("elements") or []:
                if isinstance(scenario, dict):
                    yield item.get("name", ""), scenario
        elif "steps" in item:
            yield "", item


def summarize_cucumber(document: Any) -> CucumberSummary:
    """
    Count scenarios and steps.

    A scenario fails when any of its steps failed. "undefined" steps count
    as skipped.
    """
    summary = CucumberSummary()
    for feature_name, scenario in _iter_scenarios(document):
        row = ScenarioRow(feature=feature_name, name=scenario.get("name", ""), failed=False)
        for step in scenario.get("steps") or []:
            result: Dict[str, Any] = step.get("result") or {}
            status = str(result.get("status", "")).lower()
            summary.total_steps += 1
            if status == "passed":
                summary.passed_steps += 1
            elif status == "failed":
                summary.failed_steps += 1
                row.failed = True
            elif status in ("skipped", "undefined"):
                summary.skipped_steps += 1
            row.steps.append(
                StepRow(
                    keyword=str(step.get("keyword", "")).strip(),
                    name=step.get("name", ""),
                    status=status or "unknown",
                    error_message=result.get("error_message"),
                )
            )
        summary.scenarios.append(row)
    return summary


def load_cucumber_json(json_path: Union[str, Path]) -> Optional[CucumberSummary]:
    """
    Read and summarize a Cucumber JSON file.

    Returns:
        None when the file is missing, empty, holds no scenarios or is malformed
    """
    path = Path(json_path)
    if not path.exists():
        logger.info("Cucumber JSON file not found - this is normal if tests were stopped early")
        return None

    content = path.read_text(encoding="utf-8").strip()
    if not content or content == "[]":
        logger.info("No scenario data in Cucumber JSON - tests stopped before completion")
        return None

    try:
        document = json.loads(content)
    except ValueError:
        logger.info("Cucumber JSON is incomplete or malformed - tests were likely interrupted mid-scenario")
        return None

    summary = summarize_cucumber(document)
    if not summary.scenarios:
        logger.info("No scenario data in Cucumber JSON - tests stopped before completion")
        return None
    return summary


def render_partial_report(summary: CucumberSummary, generated_at: datetime) -> str:
    env = Environment(autoescape=True)
    template = env.from_string(PARTIAL_TEMPLATE)
    return template.render(
        s=summary,
        generated_at=generated_at.strftime("%Y-%m-%d %H:%M:%S"),
        scenario_pass_rate=f"{summary.scenario_pass_rate:.1f}%",
        step_pass_rate=f"{summary.step_pass_rate:.1f}%",
    )


def generate_partial_report(
    json_path: Union[str, Path] = DEFAULT_JSON_PATH,
    html_path: Union[str, Path] = DEFAULT_HTML_PATH,
) -> Optional[Path]:
    """
    Generate the partial HTML report.

    Returns:
        Path of the written report, or None if there was nothing to report
        or the file could not be written
    """
    try:
        summary = load_cucumber_json(json_path)
    except OSError as e:
        logger.warning(f"⚠️ Could not read Cucumber JSON {json_path}: {e}")
        return None
    if summary is None:
        return None

    output = Path(html_path)
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(render_partial_report(summary, datetime.now()), encoding="utf-8")
    except OSError as e:
        logger.warning(f"⚠️ Failed to write partial report {output}: {e}")
        return None

    logger.info(f"✅ Partial HTML report generated: {output}")
    return output


PARTIAL_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>Cucumber Test Report (Partial)</title>
    <style>
        body { font-family: Arial, sans-serif; margin: 20px; background-color: #f5f5f5; }
        .header { background-color: #333; color: white; padding: 20px; border-radius: 5px; }
        .summary { display: grid; grid-template-columns: repeat(auto-fit, minmax(200px, 1fr)); gap: 15px; margin: 20px 0; }
        .card { background: white; padding: 20px; border-radius: 5px; box-shadow: 0 2px 4px rgba(0,0,0,0.1); }
        .card h3 { margin: 0 0 10px 0; }
        .number { font-size: 32px; font-weight: bold; color: #666; }
        .passed { color: #28a745; }
        .failed { color: #dc3545; }
        .skipped { color: #e0a800; }
        .warning { background-color: #fff3cd; border-left: 4px solid #ffc107; padding: 15px; margin: 15px 0; }
        table { width: 100%; border-collapse: collapse; margin: 10px 0 25px 0; background: white; }
        th, td { padding: 8px 10px; text-align: left; border-bottom: 1px solid #ddd; vertical-align: top; }
        th { background-color: #f8f9fa; }
        pre { margin: 4px 0 0 0; white-space: pre-wrap; font-size: 12px; color: #dc3545; }
    </style>
</head>
<body>
    <div class="header">
        <h1>Cucumber Test Report (Partial)</h1>
        <p>Report Generated: {{ generated_at }}</p>
    </div>

    <div class="warning">
        <strong>Note:</strong> This report is built from the Cucumber JSON as it was at shutdown.
        Scenarios that had not finished are not included.
    </div>

    <h2>Scenario Summary</h2>
    <div class="summary">
        <div class="card"><h3>Total Scenarios</h3><div class="number">{{ s.total_scenarios }}</div></div>
        <div class="card"><h3 class="passed">Passed</h3><div class="number passed">{{ s.passed_scenarios }}</div></div>
        <div class="card"><h3 class="failed">Failed</h3><div class="number failed">{{ s.failed_scenarios }}</div></div>
        <div class="card"><h3>Pass Rate</h3><div class="number">{{ scenario_pass_rate }}</div></div>
    </div>

    <h2>Step Summary</h2>
    <div class="summary">
        <div class="card"><h3>Total Steps</h3><div class="number">{{ s.total_steps }}</div></div>
        <div class="card"><h3 class="passed">Passed</h3><div class="number passed">{{ s.passed_steps }}</div></div>
        <div class="card"><h3 class="failed">Failed</h3><div class="number failed">{{ s.failed_steps }}</div></div>
        <div class="card"><h3 class="skipped">Skipped/Undefined</h3><div class="number skipped">{{ s.skipped_steps }}</div></div>
        <div class="card"><h3>Step Pass Rate</h3><div class="number">{{ step_pass_rate }}</div></div>
    </div>

    <h2>Scenarios</h2>
    {% for scenario in s.scenarios %}
    <h3 class="{{ 'failed' if scenario.failed else 'passed' }}">
        {% if scenario.feature %}{{ scenario.feature }}: {% endif %}{{ scenario.name }}
    </h3>
    <table>
        <thead><tr><th>Step</th><th>Status</th></tr></thead>
        <tbody>
        {% for step in scenario.steps %}
            <tr>
                <td>{{ step.keyword }} {{ step.name }}
                    {% if step.error_message %}<pre>{{ step.error_message }}</pre>{% endif %}
                </td>
                <td class="{{ step.status }}">{{ step.status }}</td>
            </tr>
        {% endfor %}
        </tbody>
    </table>
    {% endfor %}
</body>
</html>
"""


__all__ = [
    "CucumberSummary",
    "ScenarioRow",
    "StepRow",
    "summarize_cucumber",
    "load_cucumber_json",
    "render_partial_report",
    "generate_partial_report",
    "DEFAULT_JSON_PATH",
    "DEFAULT_HTML_PATH",
]
