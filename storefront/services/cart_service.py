# storefront/services/cart_service.py
from typing import Sequence

from storefront.domain.errors import DuplicateCartItemError, NotAuthenticatedError
from storefront.domain.schemas import CartLine, CartView, Product, SessionContext
from storefront.services.cart_pricing import is_present, reconcile, total_item_count, total_value
from storefront.services.storefront_client import StorefrontClient
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _require_session(
    session: SessionContext | None,
    message: str = "Login to add an item to the Cart",
) -> SessionContext:
    if session is None:
        raise NotAuthenticatedError(message)
    return session


def build_view(cart_lines: Sequence[CartLine], catalog: Sequence[Product]) -> CartView:
    items = reconcile(cart_lines, catalog)
    return CartView(
        items=items,
        total=total_value(items),
        item_count=total_item_count(items),
    )


class CartService:
    """
    Client-side cart use cases:
    query (load_cart) - fetches catalog + cart and joins them into a CartView
    commands (add_to_cart, change_quantity) - send the new quantity to the backend
    """

    def __init__(self, client: StorefrontClient):
        self.client = client

    #query
    def load_cart(
        self,
        session: SessionContext | None,
        catalog: Sequence[Product] | None = None,
    ) -> CartView:
        session = _require_session(session, "Login to view your cart")

        if catalog is None:
            catalog = self.client.list_products()
        lines = self.client.fetch_cart(session.token)

        return build_view(lines, catalog)

    #commands
    def add_to_cart(
        self,
        session: SessionContext | None,
        cart_lines: Sequence[CartLine],
        product_id: str,
        qty: int = 1,
        prevent_duplicate: bool = True,
    ) -> list[CartLine]:
        session = _require_session(session)

        if prevent_duplicate and is_present(cart_lines, product_id):
            logger.info(f"Product {product_id} already in cart of {session.username}")
            raise DuplicateCartItemError(product_id)

        logger.info(f"Adding {qty} x {product_id} to cart of {session.username}")
        return self.client.update_cart(session.token, product_id, qty)

    def change_quantity(
        self,
        session: SessionContext | None,
        product_id: str,
        qty: int,
    ) -> list[CartLine]:
        session = _require_session(session)

        if qty < 0:
            raise ValueError("Quantity cannot be negative")

        logger.info(f"Setting quantity of {product_id} to {qty} for {session.username}")
        return self.client.update_cart(session.token, product_id, qty)
