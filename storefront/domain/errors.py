# storefront/domain/errors.py


class StorefrontError(Exception):
    """Base error for the whole storefront client."""


class CartError(StorefrontError, ValueError):
    pass


class DanglingReferenceError(CartError):
    """Cart line points at a product that is not in the catalog."""

    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__(f"Product {product_id} is not in the catalog")


class MalformedRecordError(CartError):
    """A product or cart record from the backend does not fit its schema."""


class MalformedNumberError(MalformedRecordError):
    """Cost or quantity is not a finite non-negative number."""


class DuplicateCartItemError(CartError):
    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__(
            "Item already in cart. Use the cart sidebar to update quantity or remove item."
        )


class FormValidationError(StorefrontError, ValueError):
    pass


class CheckoutValidationError(StorefrontError, ValueError):
    pass


class NotAuthenticatedError(StorefrontError, PermissionError):
    pass


class StorefrontApiError(StorefrontError):
    """Backend answered with an error (or with a status we do not expect)."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class BackendUnreachableError(StorefrontApiError):
    def __init__(self, message: str = "Server is not reachable."):
        super().__init__(message, status_code=None)
