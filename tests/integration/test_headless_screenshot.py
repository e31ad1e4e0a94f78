"""
Headless browser smoke test against a real Playwright driver.

Needs installed browsers (``playwright install chromium``); enable with
``POMWRIGHT_RUN_INTEGRATION=1``.
"""

import os
from pathlib import Path

import pytest

from pomwright.config import ConfigManager
from pomwright.core.browser import BrowserLifecycleManager
from pomwright.utils import ScreenshotUtil

pytestmark = pytest.mark.skipif(
    os.environ.get('POMWRIGHT_RUN_INTEGRATION') != '1',
    reason='set POMWRIGHT_RUN_INTEGRATION=1 to drive a real browser',
)

PAGE = 'data:text/html,<title>Swag Labs</title><div class="title">Products</div>'


def test_headless_screenshot(tmp_path):
    config = ConfigManager({'browser': 'chromium', 'headless': 'true'})

    with BrowserLifecycleManager(config) as manager:
        page = manager.new_page()
        page.goto(PAGE)

        assert page.title() == 'Swag Labs'
        assert page.locator('.title').inner_text() == 'Products'

        path = ScreenshotUtil(tmp_path).take_screenshot(page, 'headless')
        assert Path(path).stat().st_size > 0
        page.context.close()
