"""
pomwright

Page-object test automation scaffold over Playwright: browser lifecycle,
page objects, logged page actions, data files, retries and reporting.
"""

from .config import ConfigManager
from .core.browser import (
    BrowserLifecycleManager,
    EngineSelection,
    LaunchConfig,
    StartupError,
    UnsupportedBrowserError,
    ViewportPolicy,
)
from .pages import BasePage
from .reporting import ReportManager
from .utils import PageActions, RetryAnalyzer, ScreenshotUtil, read_records, read_sheet

__version__ = '1.0.0'

__all__ = [
    'BrowserLifecycleManager', 'EngineSelection', 'LaunchConfig', 'ViewportPolicy',
    'StartupError', 'UnsupportedBrowserError',
    'ConfigManager', 'ReportManager',
    'BasePage', 'PageActions', 'ScreenshotUtil', 'RetryAnalyzer',
    'read_sheet', 'read_records',
]
