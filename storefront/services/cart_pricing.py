# storefront/services/cart_pricing.py
"""
Reconciliation of raw cart lines against the product catalog, plus the
aggregates every view needs (order total, number of items).

All functions here are pure: no I/O, no state, same input -> same output.
"""
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Mapping, Sequence

from pydantic import ValidationError

from storefront.domain.errors import (
    DanglingReferenceError,
    MalformedNumberError,
    MalformedRecordError,
)
from storefront.domain.schemas import CartItem, CartLine, Product

NUMERIC_FIELDS = {"cost", "rating", "quantity", "qty"}


def _as_model(model, value):
    if isinstance(value, model):
        return value
    try:
        return model.model_validate(value)
    except ValidationError as e:
        fields = {err["loc"][0] for err in e.errors() if err["loc"]}
        if fields and fields <= NUMERIC_FIELDS:
            raise MalformedNumberError(f"Invalid number in {model.__name__}: {e}") from e
        raise MalformedRecordError(f"Invalid {model.__name__} record: {e}") from e


def _index_catalog(catalog: Iterable[Product | Mapping[str, Any]]) -> dict[str, Product]:
    index: dict[str, Product] = {}
    for raw in catalog:
        product = _as_model(Product, raw)
        #first match wins
        index.setdefault(product.id, product)
    return index


def reconcile(
    cart_lines: Sequence[CartLine | Mapping[str, Any]],
    catalog: Sequence[Product | Mapping[str, Any]],
) -> list[CartItem]:
    """
    Join cart lines with their products.

    Output keeps the order and length of ``cart_lines``. Raises
    DanglingReferenceError for a line whose product is not in ``catalog``.
    """
    products = _index_catalog(catalog)
    items = []

    for raw in cart_lines:
        line = _as_model(CartLine, raw)
        product = products.get(line.product_id)
        if product is None:
            raise DanglingReferenceError(line.product_id)

        items.append(
            CartItem(
                product_id=line.product_id,
                name=product.name,
                category=product.category,
                cost=product.cost,
                rating=product.rating,
                image=product.image,
                quantity=line.quantity,
            )
        )

    return items


def _non_negative(value: Any, field: str) -> Decimal:
    if isinstance(value, bool) or value is None:
        raise MalformedNumberError(f"{field} must be a number, got {value!r}")
    try:
        number = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise MalformedNumberError(f"{field} must be a number, got {value!r}") from e

    if not number.is_finite() or number < 0:
        raise MalformedNumberError(f"{field} must be finite and non-negative, got {value!r}")
    return number


def total_value(items: Iterable[CartItem] | None) -> Decimal:
    """Sum of cost * quantity over all items (0 for an empty cart)."""
    total = Decimal("0")
    for item in items or ():
        total += _non_negative(item.cost, "cost") * _non_negative(item.quantity, "quantity")
    return total


def total_item_count(items: Iterable[CartItem] | None) -> int:
    count = 0
    for item in items or ():
        quantity = _non_negative(item.quantity, "quantity")
        if quantity != quantity.to_integral_value():
            raise MalformedNumberError(f"quantity must be an integer, got {item.quantity!r}")
        count += int(quantity)
    return count


def is_present(items: Iterable[CartItem | CartLine] | None, product_id: str) -> bool:
    return any(item.product_id == product_id for item in items or ())
