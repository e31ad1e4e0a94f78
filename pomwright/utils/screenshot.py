"""
Screenshot Utility

Captures full-page screenshots into the run's screenshot directory.
"""

import logging
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 80


def sanitize_filename(text: str) -> str:
    """Sanitize text for safe filename usage."""
    if not text:
        return ""
    safe_chars = "".join(c if c.isalnum() or c in ('-', '_') else '_' for c in text.strip())
    return safe_chars[:MAX_NAME_LENGTH]


class ScreenshotUtil:
    """Writes screenshots under a single directory with unique names."""

    def __init__(self, directory):
        self.directory = Path(directory)

    @classmethod
    def for_report(cls, report_dir) -> 'ScreenshotUtil':
        return cls(Path(report_dir) / 'screenshots')

    def take_screenshot(self, page, name: str) -> str:
        """
        Capture a full-page screenshot.

        Args:
            page: Playwright page object
            name: Descriptive name, sanitized for the filename

        Returns:
            Path to the saved PNG
        """
        self.directory.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%H%M%S_%f")
        filename = f"{sanitize_filename(name) or 'screenshot'}_{timestamp}.png"
        path = self.directory / filename

        page.screenshot(path=str(path), full_page=True)
        logger.debug(f"📸 Screenshot captured: {filename}")
        return str(path)
