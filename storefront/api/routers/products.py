# storefront/api/routers/products.py
from typing import List

from fastapi import APIRouter, Depends, Query

from storefront.api.dependencies import HANDLED_ERRORS, get_client, to_http_error
from storefront.domain.schemas import Product
from storefront.services.search_service import SearchService
from storefront.services.storefront_client import StorefrontClient

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=List[Product])
def list_products(client: StorefrontClient = Depends(get_client)):
    try:
        return client.list_products()
    except HANDLED_ERRORS as e:
        raise to_http_error(e)


@router.get("/search", response_model=List[Product])
def search_products(
    value: str = Query(""),
    client: StorefrontClient = Depends(get_client),
):
    # keystroke debouncing belongs to the UI, this endpoint searches right away
    try:
        return SearchService(client).search(value)
    except HANDLED_ERRORS as e:
        raise to_http_error(e)
