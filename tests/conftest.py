"""Shared fakes standing in for the Playwright object graph."""

import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest
from playwright.sync_api import Error as PlaywrightError

from pomwright.config import ConfigManager


class FakeLocator:
    def __init__(self, page: 'FakePage', selector: str):
        self.page = page
        self.selector = selector

    def _record(self, action: str, *args, **kwargs):
        self.page.calls.append((action, self.selector, args, kwargs))
        failures = self.page.failures.get((action, self.selector))
        if failures:
            self.page.failures[(action, self.selector)] -= 1
            raise PlaywrightError(f"{action} failed on {self.selector}")

    def click(self, **kwargs):
        self._record('click', **kwargs)

    def fill(self, value):
        self._record('fill', value)

    def inner_text(self):
        self._record('inner_text')
        return self.page.texts.get(self.selector, '')

    def all_inner_texts(self):
        self._record('all_inner_texts')
        return list(self.page.all_texts.get(self.selector, []))

    def wait_for(self, **kwargs):
        self._record('wait_for', **kwargs)

    def select_option(self, **kwargs):
        self._record('select_option', **kwargs)

    def check(self):
        self._record('check')

    def uncheck(self):
        self._record('uncheck')

    def is_visible(self):
        self._record('is_visible')
        return True

    def is_enabled(self):
        self._record('is_enabled')
        return True

    def is_checked(self):
        self._record('is_checked')
        return False


class FakePage:
    def __init__(self, context: Optional['FakeContext'] = None):
        self.context = context
        self.calls: List[Any] = []
        self.failures: Dict[Any, int] = {}
        self.texts: Dict[str, str] = {}
        self.all_texts: Dict[str, List[str]] = {}
        self.handlers: List[Any] = []
        self.url = 'about:blank'
        self.screenshot_error: Optional[Exception] = None
        self.closed = False

    def locator(self, selector):
        return FakeLocator(self, selector)

    def goto(self, url):
        self.calls.append(('goto', url, (), {}))
        self.url = url

    def title(self):
        return 'Swag Labs'

    def once(self, event, handler):
        self.handlers.append((event, handler))

    def screenshot(self, path=None, full_page=False):
        if self.screenshot_error is not None:
            raise self.screenshot_error
        Path(path).write_bytes(b'\x89PNG fake')
        return b''

    def close(self):
        self.closed = True


class FakeContext:
    def __init__(self, browser: 'FakeBrowser', options: Dict[str, Any]):
        self.browser = browser
        self.options = options
        self.pages: List[FakePage] = []
        self.closed = False

    def new_page(self):
        page = FakePage(self)
        self.pages.append(page)
        return page

    def close(self):
        self.closed = True


class FakeBrowser:
    def __init__(self, browser_type: 'FakeBrowserType', launch_kwargs: Dict[str, Any]):
        self.browser_type = browser_type
        self.launch_kwargs = launch_kwargs
        self.contexts: List[FakeContext] = []
        self.close_calls = 0
        self.fail_on_close = False
        self._lock = threading.Lock()

    def new_context(self, **options):
        context = FakeContext(self, options)
        with self._lock:
            self.contexts.append(context)
        return context

    def close(self):
        self.close_calls += 1
        if self.fail_on_close:
            raise PlaywrightError('Browser has been closed')


class FakeBrowserType:
    def __init__(self, name: str, engine: 'FakeEngine'):
        self.name = name
        self.engine = engine

    def launch(self, **kwargs):
        if self.engine.launch_error is not None:
            raise self.engine.launch_error
        browser = FakeBrowser(self, kwargs)
        self.engine.launched.append(browser)
        return browser


class FakeEngine:
    def __init__(self):
        self.chromium = FakeBrowserType('chromium', self)
        self.firefox = FakeBrowserType('firefox', self)
        self.webkit = FakeBrowserType('webkit', self)
        self.launched: List[FakeBrowser] = []
        self.launch_error: Optional[Exception] = None
        self.stopped = False

    def stop(self):
        self.stopped = True


class EngineFactory:
    """Callable engine factory that remembers every engine it created."""

    def __init__(self):
        self.engines: List[FakeEngine] = []
        self.launch_error: Optional[Exception] = None

    def __call__(self):
        engine = FakeEngine()
        engine.launch_error = self.launch_error
        self.engines.append(engine)
        return engine


class RecordingSink:
    def __init__(self, fail: bool = False):
        self.messages: List[str] = []
        self.fail = fail

    def log_info(self, message):
        if self.fail:
            raise RuntimeError('report not initialized')
        self.messages.append(message)


@pytest.fixture
def engine_factory():
    return EngineFactory()


@pytest.fixture
def make_config():
    def factory(**values):
        return ConfigManager({key.replace('_', '.'): value for key, value in values.items()})
    return factory


@pytest.fixture
def fake_page():
    return FakePage()
