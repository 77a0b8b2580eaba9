# storefront/services/checkout_service.py
from typing import Sequence

from storefront.domain.errors import (
    CheckoutValidationError,
    NotAuthenticatedError,
    StorefrontApiError,
)
from storefront.domain.schemas import AddressBook, CartItem, SessionContext
from storefront.services.cart_pricing import total_value
from storefront.services.notification_service import NotificationService
from storefront.services.session_store import SessionStore
from storefront.services.storefront_client import StorefrontClient
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _require_session(session: SessionContext | None) -> SessionContext:
    if session is None:
        raise NotAuthenticatedError("You must be logged in to access checkout page")
    return session


def select_address(book: AddressBook, address_id: str) -> AddressBook:
    if address_id and not any(a.id == address_id for a in book.all):
        raise ValueError(f"Address {address_id} does not exist")
    return AddressBook(all=book.all, selected=address_id)


def validate_request(
    items: Sequence[CartItem],
    book: AddressBook,
    session: SessionContext,
) -> None:
    """
    Checks before placing an order, in this order:
    1. there is at least one address
    2. an address is selected
    3. the wallet balance covers the cart total
    """
    if not book.all:
        raise CheckoutValidationError("Please add a new address before proceeding.")

    if book.selected == "":
        raise CheckoutValidationError("Please select one shipping address to proceed.")

    if session.balance < total_value(items):
        raise CheckoutValidationError(
            "You do not have enough balance in your wallet for this purchase"
        )


class CheckoutService:
    def __init__(
        self,
        client: StorefrontClient,
        store: SessionStore,
        notification_service: NotificationService | None = None,
    ):
        self.client = client
        self.store = store
        self.notification_service = notification_service or NotificationService()

    # addresses

    def load_addresses(self, session: SessionContext | None) -> AddressBook:
        session = _require_session(session)
        return AddressBook(all=self.client.list_addresses(session.token), selected="")

    def add_address(self, session: SessionContext | None, address: str) -> AddressBook:
        session = _require_session(session)

        addresses = self.client.add_address(session.token, address)
        #the new address is last in the list
        selected = addresses[-1].id if addresses else ""
        return AddressBook(all=addresses, selected=selected)

    def delete_address(self, session: SessionContext | None, address_id: str) -> AddressBook:
        session = _require_session(session)

        addresses = self.client.delete_address(session.token, address_id)
        selected = addresses[0].id if addresses else ""
        return AddressBook(all=addresses, selected=selected)

    # order

    def perform_checkout(
        self,
        session: SessionContext | None,
        items: Sequence[CartItem],
        book: AddressBook,
    ) -> SessionContext:
        session = _require_session(session)
        validate_request(items, book, session)

        total = total_value(items)
        logger.info(f"Placing order of {total} for {session.username}")

        if not self.client.checkout(session.token, book.selected):
            raise StorefrontApiError("Something is not right!")

        updated = session.model_copy(update={"balance": session.balance - total})
        self.store.save(updated)

        # the order is final at this point, a broker outage must not fail the request
        try:
            self.notification_service.send_order_notification(
                session.username, total, book.selected
            )
        except Exception:
            logger.exception(f"Could not queue order notification for {session.username}")

        logger.info(f"Order placed for {session.username}, balance now {updated.balance}")
        return updated
