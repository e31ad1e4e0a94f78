"""
Page Objects

One class per application page; locators and page-specific workflows live
here, UI interactions go through PageActions.
"""

from .base import BasePage
from .home import HomePage
from .login import LoginPage

__all__ = ['BasePage', 'HomePage', 'LoginPage']
