from typing import Optional

from textual import on, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import LoadingIndicator

from utils.logger import get_logger
from utils.messages import (
    LoginRequestedMessage,
    ModeSwitchedMessage,
    QuitRequestedMessage,
    SessionChangedMessage,
    UserLogoutMessage,
)
from utils.state import AppState
from views.scr_auth import AuthScreen
from views.scr_cart import CartScreen
from views.scr_home import HomeScreen

_logger = get_logger(__name__)


class ShopHubApp(App):
    BINDINGS = [
        Binding("ctrl+t", "switch_light", "Toggle Theme", show=True),
    ]

    MODES = {
        "home": HomeScreen,
        "cart": CartScreen,
    }

    MENU_MODES = {
        "home": "Products",
        "cart": "Cart",
    }

    CSS_PATH = [
        "views/styles/index.tcss",
        "views/styles/auth.tcss",
        "views/styles/home.tcss",
        "views/styles/cart.tcss",
    ]

    state: AppState

    def __init__(self, state: Optional[AppState] = None):
        super().__init__()
        self.state = state or AppState()

    def compose(self) -> ComposeResult:
        yield LoadingIndicator()

    async def on_mount(self) -> None:
        await self.state.start()
        await self.switch_mode("home")

    def action_switch_light(self):
        if self.theme == "textual-dark":
            self.theme = "solarized-light"
        else:
            self.theme = "textual-dark"
        self.notify(f"Theme changed to {self.theme}")

    @on(ModeSwitchedMessage)
    def log_mode_switch(self, message: ModeSwitchedMessage) -> None:
        _logger.debug(f"Mode {message.old_mode} -> {message.new_mode}")

    @on(LoginRequestedMessage)
    def handle_login_requested(self):
        self.push_screen(AuthScreen())

    @on(UserLogoutMessage)
    @work
    async def handle_user_logout(self):
        await self.state.session.logout()
        self.notify("Logout successful.")
        if self.current_mode != "home":
            self.post_message(ModeSwitchedMessage(self.current_mode, "home"))
            await self.switch_mode("home")
        self.screen.post_message(SessionChangedMessage())

    @on(QuitRequestedMessage)
    def handle_quit(self):
        self.state.close()
        self.exit()


def main() -> None:
    ShopHubApp().run()


if __name__ == "__main__":
    main()
