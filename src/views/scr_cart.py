from textual import on, work
from textual.app import ComposeResult
from textual.containers import Container, Horizontal, HorizontalGroup, VerticalScroll
from textual.events import ScreenResume
from textual.widgets import Button, Label, Rule

from db.models import CartLineItem
from utils.messages import CartChangedMessage, ModeSwitchedMessage
from utils.pure import format_price
from views.base_screen import BaseScreen
from views.modal_dialog import DialogModal


class CartItemWidget(HorizontalGroup):
    """One line item: title, unit price, -/+ quantity controls, remove, subtotal."""

    def __init__(self, item: CartLineItem):
        super().__init__()
        self.item = item

    def compose(self):
        with Container(classes="div-item"):
            yield Label(self.item.title, classes="label-item-title")
            yield Label(format_price(self.item.price), classes="label-item-price")
        with Horizontal(classes="div-item-qty"):
            yield Button("-", classes="btn-dec-qty")
            yield Label(str(self.item.quantity), classes="label-item-qty")
            yield Button("+", classes="btn-inc-qty")
            yield Button("Remove", classes="btn-remove", variant="error")
        yield Label(
            "Subtotal " + format_price(self.item.subtotal),
            classes="label-item-subtotal",
        )

    @on(Button.Pressed, ".btn-inc-qty")
    def handle_inc_qty(self):
        self.app.state.cart.increase_quantity(self.item.id)
        self.post_message(CartChangedMessage())

    @on(Button.Pressed, ".btn-dec-qty")
    def handle_dec_qty(self):
        # dropping the last unit removes the line
        self.app.state.cart.decrease_quantity(self.item.id)
        self.post_message(CartChangedMessage())

    @on(Button.Pressed, ".btn-remove")
    @work()
    async def handle_remove_item(self):
        remove_confirmed = await self.app.push_screen_wait(
            DialogModal(
                "Do you really want to remove this item from cart?",
                primary_text="Yes",
                secondary_text="No",
                tone="warning",
            )
        )

        if remove_confirmed:
            self.app.state.cart.remove_from_cart(self.item.id)
            self.post_message(CartChangedMessage())
            self.notify("Item removed from cart.", severity="information")


class CartScreen(BaseScreen):
    """
    Line items with quantity controls, plus the order summary
    """

    def compose(self) -> ComposeResult:
        yield from super().compose()
        with Container(id="div-cart-empty"):
            yield Label("Your Cart is Empty", id="label-cart-empty")
            yield Label(
                "Looks like you haven't added any products to your cart yet.",
                id="label-cart-empty-hint",
            )
        yield VerticalScroll(id="vertscroll-content")
        yield Rule(line_style="dashed")
        yield Label("", id="label-cart-summary")
        with Horizontal(id="hort-buttons"):
            yield Button("Continue Shopping", id="btn-continue")
            yield Button("Proceed to Checkout", id="btn-checkout", variant="primary")

    async def on_mount(self):
        self.handle_cart_change()

    @on(CartChangedMessage)
    @on(ModeSwitchedMessage)
    @on(ScreenResume)
    @work(exclusive=True)  # must be exclusive, two rebuilds racing duplicate rows
    async def handle_cart_change(self):
        """
        Rebuild the line items from the cart store when they changed
        """
        cart = self.app.state.cart
        cart_items = list(cart.items)

        content = self.query_one("#vertscroll-content")
        content_items = [c.item for c in content.children]

        if content_items != cart_items:
            await content.remove_children()
            await content.mount_all([CartItemWidget(item) for item in cart_items])

        is_empty = not cart_items
        self.query_one("#div-cart-empty").display = is_empty
        content.display = not is_empty
        self.query_one("#btn-checkout").disabled = is_empty

        total = format_price(cart.get_cart_total())
        self.query_one("#label-cart-summary", Label).update(
            f"Items ({cart.get_cart_item_count()}): {total}   "
            f"Shipping: FREE   Total: {total}"
        )

    @on(Button.Pressed, "#btn-continue")
    async def handle_continue(self) -> None:
        self.app.post_message(ModeSwitchedMessage(self.app.current_mode, "home"))
        await self.app.switch_mode("home")

    @on(Button.Pressed, "#btn-checkout")
    def handle_checkout(self) -> None:
        self.notify("Checkout is not available in this demo.", severity="warning")
