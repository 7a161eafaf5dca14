from textual import events, on, work
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Label, LoadingIndicator, MarkdownViewer

from db.models import Product
from services.catalog import FetchResult
from utils.pure import format_price, generate_markdown_table


class ProdDetailModal(ModalScreen[bool]):
    """
    Product detail, fetched by id when the modal opens.
    Will return True if the cart changed, False if not.
    """

    def __init__(self, product_id: int) -> None:
        super().__init__()

        self._product_id = product_id
        self._result: FetchResult[Product] = FetchResult.loading()
        self._cart_changed = False

    def compose(self) -> ComposeResult:
        with Vertical(id="div-prod-detail"):
            yield LoadingIndicator(id="loading-product")
            yield MarkdownViewer("", show_table_of_contents=False)
            with Vertical(id="div-fetch-error"):
                yield Label("Error!", id="label-error-title")
                yield Label("", id="label-error-msg")
            with Horizontal(id="hort-detail-btns"):
                yield Button("Back to Products", id="btn-quit")
                yield Button("Add to Cart", id="btn-addcart", variant="primary")

    def on_mount(self):
        self.load_product()

    @work(exclusive=True)
    async def load_product(self) -> None:
        self._result = FetchResult.loading()
        self.render_result()
        self._result = await self.app.state.catalog.fetch_product(self._product_id)
        self.render_result()
        if self._result.data is not None:
            await self.render_product(self._result.data)

    def render_result(self) -> None:
        result = self._result
        self.query_one("#loading-product").display = result.is_loading
        self.query_one("#div-fetch-error").display = result.is_error
        self.query_one(MarkdownViewer).display = result.data is not None
        self.query_one("#btn-addcart").display = result.data is not None
        if result.is_error:
            self.query_one("#label-error-msg", Label).update(result.error)
            self.query_one("#btn-quit").focus()

    async def render_product(self, product: Product) -> None:
        table_rows = [
            ["Category", product.category],
            ["Price", format_price(product.price)],
            [
                "Rating",
                f"{product.rating.rate} ({product.rating.count} reviews)",
            ],
        ]
        in_cart = self.app.state.cart.get_item(product.id)
        if in_cart:
            table_rows.append(["In cart", in_cart.quantity])
        md_table_str = generate_markdown_table(
            ["Attribute", "Value"], table_rows, ["l", "l"]
        )
        md = (
            f"### {product.title}\n\n"
            f"{md_table_str}\n\n"
            "#### Description\n\n"
            f"{product.description}\n"
        )
        await self.query_one(MarkdownViewer).document.update(md)
        self.query_one("#btn-addcart").focus()

    def on_key(self, event: events.Key) -> None:
        if event.key == "escape":
            self.dismiss(self._cart_changed)

    @on(Button.Pressed, "#btn-quit")
    def handle_quit(self):
        self.dismiss(self._cart_changed)

    @on(Button.Pressed, "#btn-addcart")
    async def handle_addcart(self):
        product = self._result.data
        if product is None:
            return
        self.app.state.cart.add_to_cart(product)
        self._cart_changed = True
        self.app.notify("Item added to cart successfully.")
        self.dismiss(True)
