# storefront/api/routers/carts.py
from fastapi import APIRouter, Depends

from storefront.api.dependencies import HANDLED_ERRORS, get_client, get_session, to_http_error
from storefront.domain.schemas import CartView, ItemIn, QuantityIn, SessionContext
from storefront.services.cart_service import CartService, build_view
from storefront.services.storefront_client import StorefrontClient

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(client: StorefrontClient = Depends(get_client)):
    return CartService(client=client)


@router.get("", response_model=CartView)
def get_cart(
    session: SessionContext | None = Depends(get_session),
    svc: CartService = Depends(get_service),
):
    try:
        return svc.load_cart(session)
    except HANDLED_ERRORS as e:
        raise to_http_error(e)


@router.post("/items", response_model=CartView)
def add_item(
    payload: ItemIn,
    session: SessionContext | None = Depends(get_session),
    svc: CartService = Depends(get_service),
):
    try:
        catalog = svc.client.list_products()
        current = svc.load_cart(session, catalog)
        lines = svc.add_to_cart(
            session,
            cart_lines=current.items,
            product_id=payload.product_id,
            qty=payload.quantity,
            prevent_duplicate=payload.prevent_duplicate,
        )
        return build_view(lines, catalog)
    except HANDLED_ERRORS as e:
        raise to_http_error(e)


@router.put("/items/{product_id}", response_model=CartView)
def change_quantity(
    product_id: str,
    payload: QuantityIn,
    session: SessionContext | None = Depends(get_session),
    svc: CartService = Depends(get_service),
):
    try:
        lines = svc.change_quantity(session, product_id, payload.quantity)
        return build_view(lines, svc.client.list_products())
    except HANDLED_ERRORS as e:
        raise to_http_error(e)
