# storefront/services/search_service.py
from typing import Callable

from storefront.domain.schemas import Product
from storefront.services.debounce import Debouncer
from storefront.services.storefront_client import StorefrontClient
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

SEARCH_KEY = "search"


class SearchService:
    def __init__(self, client: StorefrontClient, debouncer: Debouncer | None = None):
        self.client = client
        self.debouncer = debouncer or Debouncer()

    def search(self, text: str) -> list[Product]:
        """Immediate search (Enter / search icon). Empty text lists everything."""
        if not text.strip():
            return self.client.list_products()
        products = self.client.search_products(text)
        logger.info(f"Search {text!r} returned {len(products)} products")
        return products

    def on_keystroke(self, text: str, callback: Callable[[list[Product]], None]) -> None:
        self.debouncer.schedule(SEARCH_KEY, self._run, text, callback)

    def _run(self, text: str, callback: Callable[[list[Product]], None]) -> None:
        callback(self.search(text))

    def cancel(self) -> None:
        self.debouncer.cancel(SEARCH_KEY)
