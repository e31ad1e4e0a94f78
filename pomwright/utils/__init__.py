"""
Utilities

Page actions, screenshots, test data files and retry handling.
"""

from .excel import DataFileError, read_records, read_rows, read_sheet
from .page_actions import PageActions
from .retry import RetryAnalyzer
from .screenshot import ScreenshotUtil, sanitize_filename

__all__ = [
    'PageActions', 'ScreenshotUtil', 'sanitize_filename',
    'read_sheet', 'read_records', 'read_rows', 'DataFileError',
    'RetryAnalyzer',
]
