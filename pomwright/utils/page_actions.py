"""
Page Actions

Wrapper around a Playwright page that performs common UI interactions and
logs every step to the report with a screenshot.
"""

import logging
import re
from typing import List, Optional

from playwright.sync_api import Error as PlaywrightError, Page

from .screenshot import ScreenshotUtil

logger = logging.getLogger(__name__)

SAFE_CLICK_TIMEOUT = 3000
WHITESPACE = re.compile(r'\s+')


class PageActions:
    """
    Locator-based actions with step logging.

    Every action runs first and is logged afterwards, so a failing action
    propagates Playwright's error without a misleading pass step.
    """

    def __init__(self, page: Page, prefix: str, report=None,
                 screenshots: Optional[ScreenshotUtil] = None):
        self.page = page
        self.prefix = prefix
        self.report = report
        self.screenshots = screenshots

    def _log_each_action(self, desc: str) -> None:
        logger.info(f"[{self.prefix}] {desc}")
        if self.report is None:
            return
        try:
            screenshot = None
            if self.screenshots is not None:
                step_name = WHITESPACE.sub('_', desc)
                screenshot = self.screenshots.take_screenshot(self.page, f"{self.prefix}_{step_name}")
            self.report.step_pass(desc, screenshot)
        except Exception as e:
            logger.debug(f"Screenshot failed for {desc}: {e}")
            self.report.log_info(f"Screenshot failed for: {desc}")

    # --- Navigation ---

    def navigate(self, url: str) -> None:
        self.page.goto(url)
        self._log_each_action(f"Navigate -> {url}")

    # --- Clicks ---

    def click(self, selector: str) -> None:
        """Click with Playwright's auto-wait for visible and enabled."""
        self.page.locator(selector).click()
        self._log_each_action(f"Click -> {selector}")

    def safe_click(self, selector: str, retries: int = 3) -> None:
        """
        Retry-safe click for flaky elements.

        Each attempt waits at most ``SAFE_CLICK_TIMEOUT`` ms; the error from
        the final attempt is raised.
        """
        for attempt in range(1, max(retries, 1) + 1):
            try:
                self.page.locator(selector).click(timeout=SAFE_CLICK_TIMEOUT)
            except PlaywrightError as e:
                if attempt >= retries:
                    raise
                logger.debug(f"SafeClick attempt {attempt}/{retries} failed for {selector}: {e}")
                continue
            self._log_each_action(f"SafeClick -> {selector}")
            return

    # --- Typing ---

    def fill(self, selector: str, value: str) -> None:
        self.page.locator(selector).fill(value)
        self._log_each_action(f"Fill -> {selector} = {value}")

    # --- Text ---

    def get_text(self, selector: str) -> str:
        text = self.page.locator(selector).inner_text()
        self._log_each_action(f"GetText -> {selector} = {text}")
        return text

    def get_all_texts(self, selector: str) -> List[str]:
        texts = self.page.locator(selector).all_inner_texts()
        self._log_each_action(f"GetAllTexts -> {selector} = {texts}")
        return texts

    # --- Waits ---

    def wait_for_visible(self, selector: str) -> None:
        self.page.locator(selector).wait_for(state='visible')
        self._log_each_action(f"WaitForVisible -> {selector}")

    def wait_for_hidden(self, selector: str) -> None:
        self.page.locator(selector).wait_for(state='hidden')
        self._log_each_action(f"WaitForHidden -> {selector}")

    # --- Dropdowns ---

    def select_by_value(self, selector: str, value: str) -> None:
        self.page.locator(selector).select_option(value=value)
        self._log_each_action(f"SelectByValue -> {selector} = {value}")

    def select_by_text(self, selector: str, text: str) -> None:
        self.page.locator(selector).select_option(label=text)
        self._log_each_action(f"SelectByText -> {selector} = {text}")

    # --- Checkbox & radio ---

    def check(self, selector: str) -> None:
        self.page.locator(selector).check()
        self._log_each_action(f"Check -> {selector}")

    def uncheck(self, selector: str) -> None:
        self.page.locator(selector).uncheck()
        self._log_each_action(f"Uncheck -> {selector}")

    def select_radio(self, selector: str) -> None:
        self.page.locator(selector).check()
        self._log_each_action(f"SelectRadio -> {selector}")

    # --- State ---

    def is_visible(self, selector: str) -> bool:
        visible = self.page.locator(selector).is_visible()
        self._log_each_action(f"IsVisible -> {selector} = {visible}")
        return visible

    def is_enabled(self, selector: str) -> bool:
        enabled = self.page.locator(selector).is_enabled()
        self._log_each_action(f"IsEnabled -> {selector} = {enabled}")
        return enabled

    def is_checked(self, selector: str) -> bool:
        checked = self.page.locator(selector).is_checked()
        self._log_each_action(f"IsChecked -> {selector} = {checked}")
        return checked

    # --- Alerts ---
    # Dialog handlers are registered for the next dialog only.

    def accept_alert(self) -> None:
        self.page.once('dialog', lambda dialog: dialog.accept())
        self._log_each_action("Accept Alert")

    def dismiss_alert(self) -> None:
        self.page.once('dialog', lambda dialog: dialog.dismiss())
        self._log_each_action("Dismiss Alert")

    def type_in_alert(self, text: str) -> None:
        self.page.once('dialog', lambda dialog: dialog.accept(text))
        self._log_each_action(f"TypeInAlert -> {text}")
