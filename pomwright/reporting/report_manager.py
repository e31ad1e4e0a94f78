"""
Report Manager

Collects test and step results during a run and writes them to the run's
report directory as a JSON report plus a static HTML summary.
"""

import html
import json
import logging
import threading
import time
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

PASS = 'pass'
FAIL = 'fail'
SKIP = 'skip'
INFO = 'info'


@dataclass
class ReportStep:
    """A single logged step of a test."""
    status: str
    message: str
    timestamp: float = field(default_factory=time.time)
    screenshot: Optional[str] = None


@dataclass
class ReportTest:
    """A test entry in the report."""
    name: str
    started_at: float = field(default_factory=time.time)
    steps: List[ReportStep] = field(default_factory=list)

    @property
    def status(self) -> str:
        statuses = {step.status for step in self.steps}
        for status in (FAIL, SKIP, PASS):
            if status in statuses:
                return status
        return INFO

    def log(self, status: str, message: str, screenshot: Optional[str] = None) -> ReportStep:
        step = ReportStep(status=status, message=message, screenshot=screenshot)
        self.steps.append(step)
        return step


class ReportManager:
    """
    Report sink for a test run.

    The current test is tracked per thread so parallel workers never write
    into each other's entries. Logging calls made while no test is current
    are ignored.
    """

    def __init__(self, report_dir: str, system_info: Optional[Dict[str, Any]] = None):
        self.report_dir = Path(report_dir)
        self.system_info: Dict[str, Any] = dict(system_info or {})
        self.tests: List[ReportTest] = []
        self.initialized = False

        self._lock = threading.Lock()
        self._local = threading.local()

    @classmethod
    def from_config(cls, config) -> 'ReportManager':
        return cls(config.report_dir, system_info={
            'Author': config.get('name'),
            'Framework': 'Playwright Python',
            'Environment': 'QA',
        })

    def init_reports(self) -> None:
        """Create the report directory. Safe to call more than once."""
        with self._lock:
            if self.initialized:
                return
            self.report_dir.mkdir(parents=True, exist_ok=True)
            self.initialized = True
            logger.info(f"📁 Report directory created: {self.report_dir}")

    # --- Tests ---

    def create_test(self, name: str) -> ReportTest:
        test = ReportTest(name=name)
        with self._lock:
            self.tests.append(test)
        self._local.test = test
        return test

    def get_test(self) -> Optional[ReportTest]:
        return getattr(self._local, 'test', None)

    def end_test(self) -> None:
        self._local.test = None

    # --- Step logging ---

    def step_pass(self, message: str, screenshot_path: Optional[str] = None) -> None:
        self._log(PASS, message, self.relative_path(screenshot_path))

    def step_fail(self, message: str, screenshot_path: Optional[str] = None) -> None:
        self._log(FAIL, message, self.relative_path(screenshot_path))

    def log_fail_with_screenshot(self, message: str, screenshot_path: Optional[str]) -> None:
        self.step_fail(message, screenshot_path)

    def log_pass(self, message: str) -> None:
        self._log(PASS, message)

    def log_skip(self, message: str) -> None:
        self._log(SKIP, message)

    def log_info(self, message: str) -> None:
        self._log(INFO, message)

    info = log_info

    def _log(self, status: str, message: str, screenshot: Optional[str] = None) -> None:
        test = self.get_test()
        if test is None:
            return
        test.log(status, message, screenshot)

    def relative_path(self, path: Optional[str]) -> Optional[str]:
        """Path of a screenshot relative to the report directory, POSIX style."""
        if not path:
            return None
        absolute = Path(path).resolve()
        base = self.report_dir.resolve()
        try:
            return absolute.relative_to(base).as_posix()
        except ValueError:
            return absolute.as_posix()

    # --- Output ---

    def summary(self) -> Dict[str, int]:
        counts = {PASS: 0, FAIL: 0, SKIP: 0, INFO: 0}
        for test in self.tests:
            counts[test.status] += 1
        counts['total'] = len(self.tests)
        return counts

    def generate_json_report(self) -> str:
        report = {
            'system_info': self.system_info,
            'generated_at': time.time(),
            'summary': self.summary(),
            'tests': [
                {'name': test.name, 'status': test.status, 'started_at': test.started_at,
                 'steps': [asdict(step) for step in test.steps]}
                for test in self.tests
            ],
        }
        return json.dumps(report, indent=2, default=str)

    def generate_html_report(self) -> str:
        summary = self.summary()
        info_rows = ''.join(
            f"<tr><th>{html.escape(str(k))}</th><td>{html.escape(str(v))}</td></tr>"
            for k, v in self.system_info.items()
        )
        sections = []
        for test in self.tests:
            steps = []
            for step in test.steps:
                shot = ''
                if step.screenshot:
                    src = html.escape(step.screenshot, quote=True)
                    shot = f'<a href="{src}"><img src="{src}" width="240"></a>'
                steps.append(
                    f'<tr class="{step.status}"><td>{step.status.upper()}</td>'
                    f'<td>{html.escape(step.message)}</td><td>{shot}</td></tr>'
                )
            sections.append(
                f'<section class="{test.status}"><h2>{html.escape(test.name)} '
                f'[{test.status.upper()}]</h2><table>{"".join(steps)}</table></section>'
            )
        return (
            '<!DOCTYPE html><html><head><meta charset="utf-8"><title>Test Report</title>'
            '<style>.pass{color:#2e7d32}.fail{color:#c62828}.skip{color:#ef6c00}'
            'td,th{padding:4px 8px;text-align:left;vertical-align:top}</style></head><body>'
            f'<h1>Test Report</h1><table>{info_rows}</table>'
            f'<p>Total: {summary["total"]} | Passed: {summary[PASS]} | '
            f'Failed: {summary[FAIL]} | Skipped: {summary[SKIP]}</p>'
            f'{"".join(sections)}</body></html>'
        )

    def flush(self) -> Optional[Path]:
        """Write ``report.json`` and ``index.html``; returns the HTML path."""
        if not self.initialized:
            return None
        json_path = self.report_dir / 'report.json'
        html_path = self.report_dir / 'index.html'
        json_path.write_text(self.generate_json_report(), encoding='utf-8')
        html_path.write_text(self.generate_html_report(), encoding='utf-8')
        logger.info(f"📊 Report written: {html_path}")
        return html_path
