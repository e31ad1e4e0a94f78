"""
pytest Plugin

Wires the browser lifecycle, reporting, page objects, data files and retries
into pytest. Enable it from a ``conftest.py``::

    pytest_plugins = ["pomwright.plugin"]

Session scope owns the browser and the report; every test gets a fresh
context and page, and its outcome is written to the report (with a
screenshot on failure) after the call phase.
"""

import logging
from pathlib import Path
from typing import Any, List, Optional

import pytest

from .config import ConfigManager
from .core.browser import BrowserLifecycleManager
from .log_config import configure_logging
from .reporting import ReportManager
from .utils.excel import read_records, read_rows
from .utils.page_actions import PageActions
from .utils.retry import RetryAnalyzer
from .utils.screenshot import ScreenshotUtil

logger = logging.getLogger(__name__)


def pytest_addoption(parser):
    group = parser.getgroup('pomwright', 'Playwright page-object framework')
    group.addoption('--pw-config', action='store', default=None,
                    help='Path to the framework YAML config (default: config.yml)')
    group.addoption('--pw-browser', action='store', default=None,
                    help='Browser to run: chrome, msedge, chromium, firefox or webkit')
    group.addoption('--pw-headed', action='store_true', default=False,
                    help='Run the browser with a visible window')
    group.addoption('--pw-maximize', action='store_true', default=False,
                    help='Maximize the browser window')


def pytest_configure(config):
    config.addinivalue_line(
        'markers', 'datafile(path, sheet=None, records=False, argnames=None): parametrize "row", or the named "argnames" columns, from an Excel or CSV file'
    )
    config.addinivalue_line(
        'markers', 'retry(count=None): rerun the test on failure, default count from retry.count'
    )


def load_framework_config(pytest_config) -> ConfigManager:
    """Framework config for this pytest run, loaded once."""
    cached = getattr(pytest_config, '_pomwright_config', None)
    if cached is not None:
        return cached

    overrides = {'browser': pytest_config.getoption('--pw-browser')}
    if pytest_config.getoption('--pw-headed'):
        overrides['headless'] = 'false'
    if pytest_config.getoption('--pw-maximize'):
        overrides['maximize.window'] = 'true'

    cached = ConfigManager.load(path=pytest_config.getoption('--pw-config'), overrides=overrides)
    pytest_config._pomwright_config = cached
    return cached


# --- Collection ---

def resolve_data_path(test_dir: Path, name: str) -> Path:
    """Find a data file next to the test, in its data/ folder, or in a sibling data/ folder."""
    path = Path(name)
    if path.is_absolute():
        return path
    candidates = [test_dir / path, test_dir / 'data' / path, test_dir.parent / 'data' / path]
    for candidate in candidates:
        if candidate.exists():
            return candidate
    return candidates[0]


def _split_argnames(argnames) -> List[str]:
    if isinstance(argnames, str):
        argnames = argnames.split(',')
    return [name.strip() for name in argnames if name.strip()]


def spread_columns(rows: List[List[str]], argnames: List[str], nodeid: str) -> List[Any]:
    """Shape data rows into parametrize values for ``argnames``, padding short rows with ""."""
    values = []
    for index, row in enumerate(rows):
        if len(row) > len(argnames):
            raise pytest.UsageError(
                f"{nodeid}: data row {index + 1} has {len(row)} columns but only "
                f"{len(argnames)} argnames: {', '.join(argnames)}"
            )
        padded = list(row) + [""] * (len(argnames) - len(row))
        values.append(padded[0] if len(argnames) == 1 else tuple(padded))
    return values


def pytest_generate_tests(metafunc):
    marker = metafunc.definition.get_closest_marker('datafile')
    if marker is None:
        return
    nodeid = metafunc.definition.nodeid
    argnames = marker.kwargs.get('argnames')
    if argnames is None and 'row' not in metafunc.fixturenames:
        return
    if not marker.args:
        raise pytest.UsageError(f"{nodeid}: datafile marker needs a file name")

    data_path = resolve_data_path(Path(metafunc.definition.path).parent, marker.args[0])
    sheet = marker.kwargs.get('sheet')
    if argnames is not None:
        names = _split_argnames(argnames)
        if not names:
            raise pytest.UsageError(f"{nodeid}: datafile argnames is empty")
        if marker.kwargs.get('records', False):
            raise pytest.UsageError(f"{nodeid}: datafile takes either argnames or records, not both")
        rows = spread_columns(read_rows(data_path, sheet), names, nodeid)
        logger.debug(f"Loaded {len(rows)} rows from {data_path} for {nodeid}")
        metafunc.parametrize(names, rows)
        return

    if marker.kwargs.get('records', False):
        rows = read_records(data_path, sheet)
    else:
        rows = [tuple(row) for row in read_rows(data_path, sheet)]

    logger.debug(f"Loaded {len(rows)} rows from {data_path} for {nodeid}")
    metafunc.parametrize('row', rows)


def pytest_collection_modifyitems(session, config, items):
    for item in items:
        marker = item.get_closest_marker('retry')
        if marker is None:
            continue
        count = marker.args[0] if marker.args else marker.kwargs.get('count')
        analyzer = RetryAnalyzer(count, config=load_framework_config(config) if count is None else None)
        item._pomwright_retry = analyzer
        if item.get_closest_marker('flaky') is None:
            item.add_marker(pytest.mark.flaky(reruns=analyzer.max_retry))


# --- Reporting hook ---

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


# --- Session fixtures ---

@pytest.fixture(scope='session')
def framework_config(pytestconfig) -> ConfigManager:
    config = load_framework_config(pytestconfig)
    log_file = config.get('log.file')
    if log_file:
        configure_logging(config.get('log.level', 'INFO'), Path(config.report_dir) / log_file)
    return config


@pytest.fixture(scope='session')
def report_manager(framework_config):
    report = ReportManager.from_config(framework_config)
    report.init_reports()
    yield report
    report.flush()


@pytest.fixture(scope='session')
def screenshot_util(report_manager) -> ScreenshotUtil:
    return ScreenshotUtil.for_report(report_manager.report_dir)


@pytest.fixture(scope='session')
def engine_factory():
    """Override to supply a custom Playwright engine; None starts the real driver."""
    return None


@pytest.fixture(scope='session')
def screen_size_provider():
    """Override to fix the screen size used for maximized Firefox/WebKit/Chromium."""
    return None


@pytest.fixture(scope='session')
def browser_manager(framework_config, report_manager, engine_factory, screen_size_provider):
    manager = BrowserLifecycleManager(
        framework_config,
        engine_factory=engine_factory,
        screen_size_provider=screen_size_provider,
        report_sink=report_manager,
    )
    manager.start()
    yield manager
    manager.stop()


@pytest.fixture(scope='session')
def browser(browser_manager):
    return browser_manager.active_browser()


@pytest.fixture(scope='session')
def base_url(framework_config) -> Optional[str]:
    return framework_config.get('base.url')


# --- Per-test fixtures ---

@pytest.fixture
def context(browser_manager):
    context = browser_manager.new_context()
    yield context
    context.close()


@pytest.fixture
def page(request, context, report_manager, screenshot_util):
    node = request.node
    node.rep_call = None
    page = context.new_page()
    report_manager.create_test(node.name)

    yield page

    try:
        _report_outcome(node, page, report_manager, screenshot_util)
    except Exception as e:
        logger.error(f"Failed to report result for {node.name}: {e}")
    finally:
        report_manager.end_test()


def _report_outcome(node, page, report_manager: ReportManager, screenshot_util: ScreenshotUtil) -> None:
    result = getattr(node, 'rep_call', None)
    if result is None:
        return

    if result.failed:
        analyzer = getattr(node, '_pomwright_retry', None)
        if analyzer is not None and analyzer.retry(node.name):
            report_manager.log_skip(f"Test failed, retrying ({analyzer.retry_count}/{analyzer.max_retry}): {node.name}")
            return
        try:
            screenshot = screenshot_util.take_screenshot(page, f"{node.name}_failure")
        except Exception as e:
            logger.warning(f"Failure screenshot not captured for {node.name}: {e}")
            screenshot = None
        report_manager.log_fail_with_screenshot(f"Test failed: {node.name}", screenshot)
    elif result.skipped:
        report_manager.log_skip(f"Test skipped: {node.name}")
    elif result.passed:
        report_manager.log_pass(f"Test passed: {node.name}")


@pytest.fixture
def actions(request, page, report_manager, screenshot_util) -> PageActions:
    return PageActions(page, request.node.name, report=report_manager, screenshots=screenshot_util)


@pytest.fixture
def get_page(request, page, report_manager, screenshot_util):
    """Factory building page objects bound to the current page and test name."""

    def factory(page_class):
        try:
            return page_class(page, request.node.name, report=report_manager, screenshots=screenshot_util)
        except Exception as e:
            raise RuntimeError(f"Failed to create page: {page_class.__name__}") from e

    return factory
