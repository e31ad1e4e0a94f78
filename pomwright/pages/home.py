from .base import BasePage


class HomePage(BasePage):
    products_title = '.title'

    def get_title(self) -> str:
        return self.actions.get_text(self.products_title)
