"""
Base Page

Root class for page objects: holds the Playwright page and a PageActions
wrapper bound to the current test name.
"""

from playwright.sync_api import Page

from ..utils.page_actions import PageActions


class BasePage:
    """
    Base class for all page objects.

    Subclasses declare their locators and expose business-level actions
    built on ``self.actions``.
    """

    def __init__(self, page: Page, test_name: str, report=None, screenshots=None):
        self.page = page
        self.test_name = test_name
        self.actions = PageActions(page, test_name, report=report, screenshots=screenshots)

    def get_page_title(self) -> str:
        return self.page.title()

    def get_page_url(self) -> str:
        return self.page.url
