# storefront/api/routers/checkout.py
from fastapi import APIRouter, Depends

from storefront.api.dependencies import (
    HANDLED_ERRORS,
    get_client,
    get_session,
    get_session_store,
    to_http_error,
)
from storefront.domain.schemas import (
    AddressBook,
    AddressIn,
    CheckoutIn,
    CheckoutOut,
    SessionContext,
)
from storefront.services.cart_service import CartService
from storefront.services.checkout_service import CheckoutService, select_address
from storefront.services.cart_pricing import total_value
from storefront.services.session_store import SessionStore
from storefront.services.storefront_client import StorefrontClient

router = APIRouter(tags=["checkout"])


def get_service(
    client: StorefrontClient = Depends(get_client),
    store: SessionStore = Depends(get_session_store),
):
    return CheckoutService(client=client, store=store)


@router.get("/addresses", response_model=AddressBook)
def list_addresses(
    session: SessionContext | None = Depends(get_session),
    svc: CheckoutService = Depends(get_service),
):
    try:
        return svc.load_addresses(session)
    except HANDLED_ERRORS as e:
        raise to_http_error(e)


@router.post("/addresses", response_model=AddressBook)
def add_address(
    payload: AddressIn,
    session: SessionContext | None = Depends(get_session),
    svc: CheckoutService = Depends(get_service),
):
    try:
        return svc.add_address(session, payload.address)
    except HANDLED_ERRORS as e:
        raise to_http_error(e)


@router.delete("/addresses/{address_id}", response_model=AddressBook)
def delete_address(
    address_id: str,
    session: SessionContext | None = Depends(get_session),
    svc: CheckoutService = Depends(get_service),
):
    try:
        return svc.delete_address(session, address_id)
    except HANDLED_ERRORS as e:
        raise to_http_error(e)


@router.post("/checkout", response_model=CheckoutOut)
def checkout(
    payload: CheckoutIn,
    session: SessionContext | None = Depends(get_session),
    svc: CheckoutService = Depends(get_service),
):
    try:
        cart = CartService(svc.client).load_cart(session)
        book = svc.load_addresses(session)
        if payload.address_id:
            book = select_address(book, payload.address_id)

        updated = svc.perform_checkout(session, cart.items, book)
    except HANDLED_ERRORS as e:
        raise to_http_error(e)

    return CheckoutOut(success=True, balance=updated.balance, total=total_value(cart.items))
