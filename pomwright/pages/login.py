from .base import BasePage


class LoginPage(BasePage):
    # Locators
    username_input = '#user-name'
    password_input = '#password'
    login_button = '#login-button'
    error_message = '[data-test="error"]'

    def open(self, url: str) -> 'LoginPage':
        self.actions.navigate(url)
        return self

    def login(self, username: str, password: str) -> 'LoginPage':
        self.actions.fill(self.username_input, username)
        self.actions.fill(self.password_input, password)
        self.actions.click(self.login_button)
        return self

    def get_error_message(self) -> str:
        return self.actions.get_text(self.error_message)
