"""
Retry Analyzer

Count-based retry decision for failed tests, configured through
``retry.count``.
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRY = 1


class RetryAnalyzer:
    """Allows a failed test to be retried up to ``max_retry`` times."""

    def __init__(self, max_retry: Optional[int] = None, config=None):
        if max_retry is None:
            max_retry = config.get_int('retry.count', DEFAULT_MAX_RETRY) if config else DEFAULT_MAX_RETRY
        if max_retry < 0:
            raise ValueError(f"max_retry must be >= 0, got {max_retry}")
        self.max_retry = max_retry
        self.retry_count = 0

    def retry(self, result=None) -> bool:
        """Return True if the failed test should run again."""
        if self.retry_count < self.max_retry:
            self.retry_count += 1
            logger.info(f"🔁 Retrying {result or 'test'} ({self.retry_count}/{self.max_retry})")
            return True
        return False
