from textual import on, work
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.events import Key
from textual.widgets import Button, Input, Label, TabbedContent, TabPane

from utils.pure import validate_auth_form
from views.base_screen import BaseScreen


class AuthScreen(BaseScreen):
    """
    Login / sign up. Dismisses with True once a user is logged in.

    Demo accounts only: credentials live in plaintext in the local store.
    """

    def __init__(self):
        super().__init__()
        self.configure(header_sub_title="Login", show_sidebar=False)
        self._submitting = False

    def compose(self) -> ComposeResult:
        yield from super().compose()
        with TabbedContent(id="super-tab-authscr"):
            with TabPane("Login", id="tab-login"):
                with Vertical(id="div-login"):
                    yield Label("Welcome Back!", classes="label-form-title")
                    yield Label("", id="label-login-msg", classes="label-form-msg")
                    yield Label("Email Address")
                    yield Input(placeholder="you@example.com", id="input-login-email")
                    yield Label("Password")
                    yield Input(
                        placeholder="*********", password=True, id="input-login-pwd"
                    )
                    with Horizontal(id="div-login-btns"):
                        yield Button("Back to Shopping", id="btn-back")
                        yield Button("Login", id="btn-login", variant="primary")

            with TabPane("Sign up", id="tab-signup"):
                with Vertical(id="div-reg"):
                    yield Label("Create Account", classes="label-form-title")
                    yield Label("", id="label-reg-msg", classes="label-form-msg")
                    yield Label("Full Name")
                    yield Input(placeholder="Jane Doe", id="input-reg-name")
                    yield Label("Email Address")
                    yield Input(placeholder="you@example.com", id="input-reg-email")
                    yield Label("Password (minimum 6 characters)")
                    yield Input(
                        placeholder="*********", password=True, id="input-reg-pwd"
                    )
                    with Horizontal(id="div-reg-btns"):
                        yield Button("Back to Shopping", id="btn-back-reg")
                        yield Button("Create Account", id="btn-reg", variant="primary")
        yield Button("Continue with Google", id="btn-google")

    def on_mount(self):
        self.query_one("#input-login-email").focus()

    def on_key(self, event: Key) -> None:
        if event.key == "enter" and self.focused == self.query_one("#input-login-pwd"):
            self.handle_login_submit()
        if event.key == "enter" and self.focused == self.query_one("#input-reg-pwd"):
            self.handle_registration_submit()
        if event.key == "escape":
            self.dismiss(False)

    def show_message(self, label_id: str, text: str, error: bool = True) -> None:
        label = self.query_one(label_id, Label)
        label.update(text)
        label.set_class(error and bool(text), "-error")
        label.set_class(not error and bool(text), "-success")

    @on(Input.Changed)
    def handle_input_changed(self, message: Input.Changed) -> None:
        if message.input.id.startswith("input-login"):
            self.show_message("#label-login-msg", "")
        else:
            self.show_message("#label-reg-msg", "")

    @on(TabbedContent.TabActivated)
    def handle_tab_switch(self) -> None:
        for field in self.query(Input):
            field.value = ""
        self.show_message("#label-login-msg", "")
        self.show_message("#label-reg-msg", "")

    def set_submitting(self, busy: bool) -> None:
        # one submit at a time, a second Enter must not start another store call
        self._submitting = busy
        self.query_one("#btn-login", Button).disabled = busy
        self.query_one("#btn-reg", Button).disabled = busy

    @on(Button.Pressed, "#btn-login")
    @work()
    async def handle_login_submit(self) -> None:
        if self._submitting:
            return
        email = self.query_one("#input-login-email", Input).value.strip()
        pwd = self.query_one("#input-login-pwd", Input).value

        error = validate_auth_form(email, pwd, is_login=True)
        if error:
            self.show_message("#label-login-msg", error)
            return

        self.set_submitting(True)
        result = await self.app.state.session.login(email, pwd)
        if result.success:
            self.notify(result.message)
            self.dismiss(True)
        else:
            self.set_submitting(False)
            self.show_message("#label-login-msg", result.message)
            input_login_pwd = self.query_one("#input-login-pwd", Input)
            input_login_pwd.value = ""
            input_login_pwd.focus()
            input_login_pwd.add_class("-invalid")

    @on(Button.Pressed, "#btn-reg")
    @work()
    async def handle_registration_submit(self) -> None:
        if self._submitting:
            return
        name = self.query_one("#input-reg-name", Input).value.strip()
        email = self.query_one("#input-reg-email", Input).value.strip()
        pwd = self.query_one("#input-reg-pwd", Input).value

        error = validate_auth_form(email, pwd, name=name, is_login=False)
        if error:
            self.show_message("#label-reg-msg", error)
            return

        self.set_submitting(True)
        result = await self.app.state.session.signup(name, email, pwd)
        if result.success:
            self.notify(result.message)
            self.dismiss(True)
        else:
            self.set_submitting(False)
            self.show_message("#label-reg-msg", result.message)
            self.query_one("#input-reg-email", Input).focus()

    @on(Button.Pressed, "#btn-google")
    def handle_google(self) -> None:
        self.notify("Google login coming soon!", severity="warning")

    @on(Button.Pressed, "#btn-back")
    @on(Button.Pressed, "#btn-back-reg")
    def handle_back(self) -> None:
        self.dismiss(False)
