"""Tests for the page objects."""

import pytest

from pomwright.pages import BasePage, HomePage, LoginPage
from pomwright.reporting import ReportManager
from pomwright.utils import PageActions, ScreenshotUtil


@pytest.fixture
def report(tmp_path):
    report = ReportManager(str(tmp_path / 'run'))
    report.init_reports()
    report.create_test('test_login')
    return report


def test_base_page_exposes_title_url_and_actions(fake_page):
    fake_page.url = 'https://www.saucedemo.com/inventory.html'
    page = BasePage(fake_page, 'test_login')

    assert isinstance(page.actions, PageActions)
    assert page.get_page_title() == 'Swag Labs'
    assert page.get_page_url() == 'https://www.saucedemo.com/inventory.html'


def test_login_flow_is_chainable_and_reported(fake_page, report, tmp_path):
    screenshots = ScreenshotUtil(tmp_path / 'run' / 'screenshots')
    login = LoginPage(fake_page, 'test_login', report=report, screenshots=screenshots)

    result = login.open('https://www.saucedemo.com').login('standard_user', 'secret_sauce')

    assert result is login
    assert [(call[0], call[1]) for call in fake_page.calls] == [
        ('goto', 'https://www.saucedemo.com'),
        ('fill', '#user-name'),
        ('fill', '#password'),
        ('click', '#login-button'),
    ]
    steps = report.get_test().steps
    assert len(steps) == 4
    assert all(step.screenshot for step in steps)


def test_login_error_message(fake_page):
    fake_page.texts['[data-test="error"]'] = 'Epic sadface: Sorry, this user has been locked out.'
    login = LoginPage(fake_page, 'test_locked_out')

    assert login.get_error_message().startswith('Epic sadface')


def test_home_page_title(fake_page):
    fake_page.texts['.title'] = 'Products'
    assert HomePage(fake_page, 'test_login').get_title() == 'Products'
