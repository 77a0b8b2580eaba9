# storefront/services/storefront_client.py
from decimal import Decimal
from typing import Any

import requests
from requests import RequestException

from storefront.domain.errors import BackendUnreachableError, StorefrontApiError
from storefront.domain.schemas import Address, CartLine, Product, SessionContext
from storefront.utils.retry import http_retry
from storefront.utils.settings import HTTP_TIMEOUT_SECONDS, STOREFRONT_API_URL
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

UNEXPECTED_STATUS = "Something is not right!"


class StorefrontClient:
    """
    REST client of the storefront backend.
    One method per endpoint; backend errors
    ({"success": false, "message": ...}) are raised as StorefrontApiError.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: int = HTTP_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ):
        self.base_url = (base_url or STOREFRONT_API_URL).rstrip("/")
        self.timeout = timeout
        self.http = session or requests.Session()

    def _send(
        self,
        method: str,
        path: str,
        token: str | None = None,
        **kwargs: Any,
    ) -> requests.Response:
        url = f"{self.base_url}{path}"
        headers = kwargs.pop("headers", {})
        if token:
            headers["Authorization"] = f"Bearer {token}"

        logger.info(f"StorefrontClient {method} {url}")
        return self.http.request(method, url, headers=headers, timeout=self.timeout, **kwargs)

    @staticmethod
    def _error_from(resp: requests.Response) -> StorefrontApiError:
        try:
            message = resp.json().get("message") or UNEXPECTED_STATUS
        except (ValueError, AttributeError):
            message = UNEXPECTED_STATUS
        return StorefrontApiError(message, status_code=resp.status_code)

    @staticmethod
    def _json(resp: requests.Response) -> Any:
        try:
            return resp.json()
        except ValueError as e:
            raise StorefrontApiError(
                "Backend returned invalid JSON", status_code=resp.status_code
            ) from e

    def _call(
        self,
        method: str,
        path: str,
        expected: int = 200,
        token: str | None = None,
        **kwargs: Any,
    ) -> Any:
        try:
            resp = self._send(method, path, token=token, **kwargs)
        except (requests.ConnectionError, requests.Timeout) as e:
            logger.error(f"Backend unreachable for {method} {path}: {e}")
            raise BackendUnreachableError() from e

        if resp.status_code >= 400:
            raise self._error_from(resp)
        if resp.status_code != expected:
            logger.warning(f"{method} {path} returned unexpected status {resp.status_code}")
            raise StorefrontApiError(UNEXPECTED_STATUS, status_code=resp.status_code)

        return self._json(resp)

    @http_retry()
    def _get(self, path: str, token: str | None = None, **kwargs: Any) -> requests.Response:
        return self._send("GET", path, token=token, **kwargs)

    def _query(self, path: str, token: str | None = None, **kwargs: Any) -> Any:
        """GET with retry on network errors."""
        try:
            resp = self._get(path, token=token, **kwargs)
        except RequestException as e:
            logger.error(f"Backend unreachable for GET {path}: {e}")
            raise BackendUnreachableError() from e

        if resp.status_code >= 400:
            raise self._error_from(resp)
        if resp.status_code != 200:
            raise StorefrontApiError(UNEXPECTED_STATUS, status_code=resp.status_code)
        return self._json(resp)

    # auth

    def login(self, username: str, password: str) -> SessionContext:
        data = self._call(
            "POST",
            "/auth/login",
            expected=201,
            json={"username": username, "password": password},
        )
        return SessionContext(
            token=data["token"],
            username=data["username"],
            balance=Decimal(str(data["balance"])),
        )

    def register(self, username: str, password: str) -> None:
        self._call(
            "POST",
            "/auth/register",
            expected=201,
            json={"username": username, "password": password},
        )

    # catalog

    def list_products(self) -> list[Product]:
        return [Product.model_validate(p) for p in self._query("/products")]

    def search_products(self, text: str) -> list[Product]:
        try:
            data = self._query("/products/search", params={"value": text})
        except StorefrontApiError as e:
            # 404 = no results
            if e.status_code == 404:
                return []
            raise
        return [Product.model_validate(p) for p in data]

    # cart

    def fetch_cart(self, token: str) -> list[CartLine]:
        return [CartLine.model_validate(line) for line in self._query("/cart", token=token)]

    def update_cart(self, token: str, product_id: str, qty: int) -> list[CartLine]:
        data = self._call(
            "POST",
            "/cart",
            token=token,
            json={"productId": product_id, "qty": qty},
        )
        return [CartLine.model_validate(line) for line in data]

    def checkout(self, token: str, address_id: str) -> bool:
        data = self._call(
            "POST",
            "/cart/checkout",
            token=token,
            json={"addressId": address_id},
        )
        return bool(data.get("success", False))

    # addresses

    def list_addresses(self, token: str) -> list[Address]:
        return [Address.model_validate(a) for a in self._query("/user/addresses", token=token)]

    def add_address(self, token: str, address: str) -> list[Address]:
        data = self._call(
            "POST",
            "/user/addresses",
            token=token,
            json={"address": address},
        )
        return [Address.model_validate(a) for a in data]

    def delete_address(self, token: str, address_id: str) -> list[Address]:
        data = self._call("DELETE", f"/user/addresses/{address_id}", token=token)
        return [Address.model_validate(a) for a in data]
