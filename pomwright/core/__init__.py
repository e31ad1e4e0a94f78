"""
Core Components

Browser lifecycle management shared by every test in a session.
"""

from .browser import BrowserLifecycleManager, EngineSelection, StartupError, UnsupportedBrowserError

__all__ = [
    'BrowserLifecycleManager', 'EngineSelection',
    'StartupError', 'UnsupportedBrowserError',
]
