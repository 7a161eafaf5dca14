from typing import Dict, List, Optional

from textual import on, work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, DataTable, Input, Label, LoadingIndicator

from db.models import Product
from services.catalog import FetchResult
from utils.messages import CartChangedMessage
from utils.pure import filter_products, format_price
from views.base_screen import BaseScreen
from views.modal_prod_detail import ProdDetailModal


class HomeScreen(BaseScreen):
    """
    Product listing. Fetches the catalog once per mount, filters it by the
    shared search query.
    """

    BINDINGS = [
        Binding("a", "add_to_cart", "Add to Cart", show=True),
        Binding("ctrl+r", "retry", "Reload", show=True),
        Binding("enter", "noop", "View Product", show=True, key_display="⏎"),
    ]

    def __init__(self):
        super().__init__()
        self._result: FetchResult[List[Product]] = FetchResult.loading()
        self._products: Dict[int, Product] = {}

    def compose(self) -> ComposeResult:
        yield from super().compose()
        with Horizontal(id="hort-search"):
            yield Input(id="input-search", placeholder="Search products by title...")
            yield Button("Clear", id="btn-clear-search")
        yield LoadingIndicator(id="loading-products")
        yield DataTable(id="table-products")
        with Vertical(id="div-fetch-error"):
            yield Label("Error!", id="label-error-title")
            yield Label("", id="label-error-msg")
            yield Button("Retry", id="btn-retry", variant="error")
        yield Label("", id="label-result-cnt")

    def on_mount(self):
        table = self.query_one(DataTable)
        table.cursor_type = "row"
        table.zebra_stripes = True
        table.add_columns("ID", "Title", "Category", "Price", "Rating")

        search = self.query_one("#input-search", Input)
        search.value = self.app.state.search.query
        search.focus()

        self.load_products()

    @work(exclusive=True)
    async def load_products(self) -> None:
        self._result = FetchResult.loading()
        self.render_result()
        self._result = await self.app.state.catalog.fetch_products()
        self.render_result()

    def render_result(self) -> None:
        result = self._result
        self.query_one("#loading-products").display = result.is_loading
        self.query_one("#div-fetch-error").display = result.is_error
        self.query_one(DataTable).display = not (result.is_loading or result.is_error)
        self.query_one("#label-result-cnt").display = not (
            result.is_loading or result.is_error
        )

        if result.is_error:
            self.query_one("#label-error-msg", Label).update(result.error)
            return
        if result.is_loading:
            return

        self._products = {p.id: p for p in result.data}
        self.update_table()

    def update_table(self) -> None:
        if self._result.data is None:
            return
        query = self.app.state.search.query
        shown = filter_products(self._result.data, query)

        table = self.query_one(DataTable)
        table.clear()
        for p in shown:
            table.add_row(
                p.id,
                p.title,
                p.category,
                format_price(p.price),
                f"{p.rating.rate} ({p.rating.count})",
                key=str(p.id),
            )

        label = self.query_one("#label-result-cnt", Label)
        if query and not shown:
            label.update(f'No products match "{query}".')
        else:
            label.update(f"Showing {len(shown)} of {len(self._result.data)} products")

    def _highlighted_product(self) -> Optional[Product]:
        table = self.query_one(DataTable)
        if table.row_count == 0:
            return None
        row_key, _ = table.coordinate_to_cell_key(table.cursor_coordinate)
        return self._products.get(int(row_key.value))

    @on(Input.Changed, "#input-search")
    def handle_search_changed(self, message: Input.Changed) -> None:
        self.app.state.search.update_search(message.value)
        self.update_table()

    @on(Button.Pressed, "#btn-clear-search")
    def handle_clear_search(self) -> None:
        self.app.state.search.clear_search()
        self.query_one("#input-search", Input).value = ""
        self.update_table()

    @on(Button.Pressed, "#btn-retry")
    def action_retry(self) -> None:
        self.load_products()

    @on(DataTable.RowSelected)
    @work()
    async def handle_row_selected(self, event: DataTable.RowSelected) -> None:
        product_id = int(event.row_key.value)
        if await self.app.push_screen_wait(ProdDetailModal(product_id)):
            self.post_message(CartChangedMessage())

    def action_add_to_cart(self) -> None:
        product = self._highlighted_product()
        if product is None:
            self.notify("Nothing to add.", severity="warning")
            return
        self.app.state.cart.add_to_cart(product)
        self.notify(f"Added {product.title} to cart.")
        self.post_message(CartChangedMessage())

    def action_noop(self) -> None:
        pass
