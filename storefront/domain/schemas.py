# storefront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List
from decimal import Decimal


class Product(BaseModel):
    """Catalog product, issued by the backend and read-only here."""

    id: str = Field(..., alias="_id", min_length=1)
    name: str
    category: str
    cost: Decimal = Field(..., ge=0)
    rating: int = Field(..., ge=0, le=5)
    image: str

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class CartLine(BaseModel):
    """Raw cart entry from the backend: productId + qty."""

    product_id: str = Field(..., alias="productId", min_length=1)
    quantity: int = Field(..., alias="qty", gt=0)

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class CartItem(BaseModel):
    """CartLine joined with its Product, used for display and totals."""

    product_id: str
    name: str
    category: str
    cost: Decimal = Field(..., ge=0)
    rating: int = Field(..., ge=0, le=5)
    image: str
    quantity: int = Field(..., gt=0)

    model_config = ConfigDict(frozen=True)


class CartView(BaseModel):
    items: List[CartItem]
    total: Decimal
    item_count: int


class Address(BaseModel):
    id: str = Field(..., alias="_id")
    address: str

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class AddressBook(BaseModel):
    """All user addresses + id of the selected one ("" when none)."""

    all: List[Address] = Field(default_factory=list)
    selected: str = ""

    model_config = ConfigDict(frozen=True)


class SessionContext(BaseModel):
    token: str = Field(..., min_length=1)
    username: str
    balance: Decimal

    model_config = ConfigDict(frozen=True)


# ----- HTTP payloads -----


class LoginIn(BaseModel):
    username: str = ""
    password: str = ""


class RegisterIn(BaseModel):
    username: str = ""
    password: str = ""
    confirm_password: str = ""


class SessionOut(BaseModel):
    username: str
    balance: Decimal


class ItemIn(BaseModel):
    """Payload for adding a product to the cart."""

    product_id: str = Field(..., min_length=1)
    quantity: int = Field(1, gt=0)
    prevent_duplicate: bool = True


class QuantityIn(BaseModel):
    # 0 removes the product from the cart
    quantity: int = Field(..., ge=0)


class AddressIn(BaseModel):
    address: str = Field(..., min_length=1)


class CheckoutIn(BaseModel):
    address_id: str = ""


class CheckoutOut(BaseModel):
    success: bool
    balance: Decimal
    total: Decimal
