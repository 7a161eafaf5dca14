from textual.message import Message


class QuitRequestedMessage(Message):
    """
    broadcasted when the app is about to quit
    """

    bubble = True


class UserLogoutMessage(Message):
    """
    Posted by the sidebar once the user confirmed logging out.
    The app clears the session and goes back to the product list.
    """

    bubble = True


class LoginRequestedMessage(Message):
    """
    Posted by the sidebar login button, the app opens the auth screen
    """

    bubble = True


class SessionChangedMessage(Message):
    """
    Posted to the active screen after logout, so it can refresh user info.
    Login and sign up need no message, the screen below gets ScreenResume.
    """

    bubble = True


class CartChangedMessage(Message):
    """
    Fired whenever a cart operation was applied (add, remove, +/-).
    Refreshes the cart screen and the cart badge in the sidebar.

    If posted from outside CartScreen, make sure to post at App level
    """

    bubble = True


class ModeSwitchedMessage(Message):
    """
    fired whenever switch_mode is called
    must be fired from app level
    """

    bubble = True

    def __init__(self, old_mode: str, new_mode: str) -> None:
        super().__init__()
        self.old_mode = old_mode
        self.new_mode = new_mode
