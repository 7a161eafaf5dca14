from __future__ import annotations

from dataclasses import dataclass, field

from services.catalog import CatalogClient
from stores.cart import CartStore
from stores.search import SearchStore
from stores.session import SessionStore
from utils.logger import get_logger

_logger = get_logger(__name__)


@dataclass
class AppState:
    """
    Application state shared by screens (reached as ``self.app.state``).

    Fields:
      - cart: in-memory cart, empty on every start
      - search: current product search query
      - session: logged-in user, restored from the local store by ``start``
      - catalog: HTTP client for the product catalog
    """

    cart: CartStore = field(default_factory=CartStore)
    search: SearchStore = field(default_factory=SearchStore)
    session: SessionStore = field(default_factory=SessionStore)
    catalog: CatalogClient = field(default_factory=CatalogClient)

    async def start(self) -> None:
        """Restore whatever outlives a restart. Called once from App.on_mount."""
        await self.session.restore()
        _logger.debug("Application state started.")

    def close(self) -> None:
        """Drop per-run state before exit. The session stays persisted."""
        self.cart = CartStore()
        self.search.clear_search()
        _logger.debug("Application state closed.")
