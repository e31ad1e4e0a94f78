"""
Browser Lifecycle Errors
"""

from typing import Optional


class StartupError(RuntimeError):
    """Raised when the browser lifecycle cannot be started."""


class UnsupportedBrowserError(StartupError, ValueError):
    """Configured browser name is not one of the supported browsers."""

    def __init__(self, browser: Optional[str]):
        self.browser = browser
        super().__init__(f"Unsupported browser: {browser!r}")
