#!/usr/bin/env python3
"""
Basic Usage Example

Drives the browser lifecycle manager directly, outside pytest: launch the
configured browser, log in through the page objects and write a report.
"""

from pomwright import BrowserLifecycleManager, ConfigManager, ReportManager, ScreenshotUtil
from pomwright.log_config import configure_logging
from pomwright.pages import HomePage, LoginPage


def login_example():
    """Log in to the demo store and print the landing page title."""

    config = ConfigManager.load()
    report = ReportManager.from_config(config)
    report.init_reports()
    screenshots = ScreenshotUtil.for_report(report.report_dir)

    with BrowserLifecycleManager(config, report_sink=report) as manager:
        page = manager.new_page()
        report.create_test('login_example')
        try:
            LoginPage(page, 'login_example', report, screenshots) \
                .open(config.get('base.url')) \
                .login('standard_user', 'secret_sauce')
            title = HomePage(page, 'login_example', report, screenshots).get_title()
            print(f"✅ Logged in, landing page: {title}")
            report.log_pass('Login example finished')
        finally:
            report.end_test()
            page.context.close()

    print(f"📊 Report written to {report.flush()}")


if __name__ == "__main__":
    configure_logging()
    login_example()
