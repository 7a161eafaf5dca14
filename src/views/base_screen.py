from textual import on, work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.events import ScreenResume
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, Label, ListItem, ListView, Markdown

from utils.messages import (
    CartChangedMessage,
    LoginRequestedMessage,
    ModeSwitchedMessage,
    SessionChangedMessage,
    UserLogoutMessage,
)
from utils.pure import format_price, generate_markdown_table
from views.modal_dialog import DialogModal, QuitDialogModal


class Sidebar(Container):
    init_mode = ""

    def compose(self) -> ComposeResult:
        yield Label("User Info", id="label-info-1")
        yield Markdown("", id="md-userinfo")
        yield Button("Log in", id="btn-login", variant="primary")
        yield Button("Log out", id="btn-logout", variant="error")
        yield Label("Menu", id="label-info-2")
        yield ListView(
            *[
                ListItem(Label(v), id="list-menu-item-" + k)
                for k, v in self.app.MENU_MODES.items()
            ],
            id="list-menu",
        )

    async def on_mount(self):
        self.init_mode = self.app.current_mode
        await self.refresh_info()
        self.highlight_item(self.init_mode)

    async def refresh_info(self) -> None:
        """Re-render user info and the cart badge from app state."""
        state = self.app.state
        user = state.session.current_user

        table_rows = [["Name", user.name if user else "Guest"]]
        if user:
            table_rows.append(["Email", user.email])
        table_rows.append(["Cart total", format_price(state.cart.get_cart_total())])
        md_table_str = generate_markdown_table(
            ["Field", "Value"], table_rows, ["l", "l"]
        )
        await self.query_one(Markdown).update(md_table_str)

        self.query_one("#btn-login").display = user is None
        self.query_one("#btn-logout").display = user is not None

        count = state.cart.get_cart_item_count()
        cart_label = self.app.MENU_MODES["cart"]
        if count > 0:
            cart_label = f"{cart_label} ({count})"
        self.query_one("#list-menu-item-cart", ListItem).query_one(Label).update(
            cart_label
        )

    async def on_list_view_selected(self, event: ListView.Selected):
        selected_mode = event.item.id.removeprefix("list-menu-item-")
        self.highlight_item(self.init_mode)
        if self.app.current_mode != selected_mode:
            self.post_message(ModeSwitchedMessage(self.app.current_mode, selected_mode))
            await self.app.switch_mode(selected_mode)

    @on(Button.Pressed, "#btn-login")
    def handle_login(self):
        self.post_message(LoginRequestedMessage())

    @on(Button.Pressed, "#btn-logout")
    @work()
    async def handle_logout(self):
        if not await self.app.push_screen_wait(
            DialogModal(
                "Are you sure you want to log out?",
                primary_text="Yes",
                secondary_text="No",
                tone="warning",
            )
        ):
            return

        self.post_message(UserLogoutMessage())

    def highlight_item(self, mode_str: str):
        list_menu = self.query_one("#list-menu")
        for item in list_menu.children:
            item.highlighted = item.id == "list-menu-item-" + mode_str


class BaseScreen(Screen):
    """
    Inherited by all screens, contains common elements like
    headers, footers, sidebar, and keybindings.
    """

    BINDINGS = [
        Binding("ctrl+z", "quit", "Quit App", show=True),
    ]

    def __init__(self):
        super().__init__()

        self.configure()

    def configure(
        self,
        header_sub_title: str = "",
        show_sidebar: bool = True,
    ) -> None:
        """
        configure behavior of the base screen
        """
        self.app.title = "ShopHub"
        self.sub_title = header_sub_title
        for k, v in self.app.MODES.items():
            if isinstance(self, v):
                self.sub_title = self.app.MENU_MODES.get(k, header_sub_title)

        self._show_sidebar = show_sidebar

    def compose(self) -> ComposeResult:
        if self._show_sidebar:
            yield Sidebar()
        yield Header()
        yield Footer(show_command_palette=False)

    @on(ScreenResume)
    @on(CartChangedMessage)
    @on(SessionChangedMessage)
    async def refresh_sidebar(self) -> None:
        # the sidebar may not be mounted yet on first resume
        for sidebar in self.query(Sidebar):
            await sidebar.refresh_info()

    @work()
    async def action_quit(self):
        await self.app.push_screen_wait(QuitDialogModal())
