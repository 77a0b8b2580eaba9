"""
Tests for the REST client: status handling, error mapping, retries.
The underlying requests.Session is replaced by a MagicMock.
"""
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
import requests

from storefront.domain.errors import BackendUnreachableError, StorefrontApiError
from storefront.services.storefront_client import StorefrontClient


def response(status_code=200, body=None):
    resp = MagicMock(spec=requests.Response)
    resp.status_code = status_code
    if isinstance(body, Exception):
        resp.json.side_effect = body
    else:
        resp.json.return_value = body
    return resp


@pytest.fixture
def http():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(http):
    return StorefrontClient(base_url="http://backend/api/v1/", timeout=1, session=http)


PRODUCTS = [
    {"name": "iPhone XR", "category": "Phones", "cost": 100, "rating": 4,
     "image": "https://i.imgur.com/lulqWzW.jpg", "_id": "v4sLtEcMpzabRyfx"},
    {"name": "Basketball", "category": "Sports", "cost": 100, "rating": 5,
     "image": "https://i.imgur.com/lulqWzW.jpg", "_id": "upLK9JbQ4rMhTwt4"},
]


class TestAuth:

    def test_login_returns_session(self, client, http):
        http.request.return_value = response(
            201, {"success": True, "token": "testtoken", "username": "criodo", "balance": 5000}
        )

        session = client.login("criodo", "secret1")

        assert session.token == "testtoken"
        assert session.username == "criodo"
        assert session.balance == Decimal("5000")
        http.request.assert_called_once_with(
            "POST",
            "http://backend/api/v1/auth/login",
            headers={},
            timeout=1,
            json={"username": "criodo", "password": "secret1"},
        )

    def test_login_error_message_from_backend(self, client, http):
        http.request.return_value = response(400, {"success": False, "message": "Password is incorrect"})

        with pytest.raises(StorefrontApiError) as exc:
            client.login("criodo", "wrongpass")

        assert exc.value.message == "Password is incorrect"
        assert exc.value.status_code == 400

    def test_unexpected_success_status(self, client, http):
        http.request.return_value = response(200, {"success": True})

        with pytest.raises(StorefrontApiError) as exc:
            client.register("criodo", "secret1")

        assert exc.value.message == "Something is not right!"

    def test_unreachable_backend(self, client, http):
        http.request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(BackendUnreachableError) as exc:
            client.login("criodo", "secret1")

        assert exc.value.message == "Server is not reachable."


class TestCatalog:

    def test_list_products(self, client, http):
        http.request.return_value = response(200, PRODUCTS)

        products = client.list_products()

        assert [p.id for p in products] == ["v4sLtEcMpzabRyfx", "upLK9JbQ4rMhTwt4"]
        assert products[1].name == "Basketball"

    def test_search_passes_value_param(self, client, http):
        http.request.return_value = response(200, PRODUCTS[:1])

        client.search_products("iphone")

        args, kwargs = http.request.call_args
        assert args == ("GET", "http://backend/api/v1/products/search")
        assert kwargs["params"] == {"value": "iphone"}

    def test_search_404_means_no_results(self, client, http):
        http.request.return_value = response(404, {"success": False, "message": "No products"})

        assert client.search_products("zzz") == []

    def test_search_500_is_raised(self, client, http):
        http.request.return_value = response(500, {"success": False, "message": "Something went wrong"})

        with pytest.raises(StorefrontApiError) as exc:
            client.search_products("x")

        assert exc.value.status_code == 500

    def test_get_retried_on_connection_error(self, client, http):
        http.request.side_effect = [requests.ConnectionError("blip"), response(200, PRODUCTS)]

        products = client.list_products()

        assert len(products) == 2
        assert http.request.call_count == 2

    def test_get_gives_up_after_three_attempts(self, client, http):
        http.request.side_effect = requests.Timeout("slow")

        with pytest.raises(BackendUnreachableError):
            client.list_products()

        assert http.request.call_count == 3

    def test_get_with_invalid_json_blames_backend(self, client, http):
        http.request.return_value = response(200, ValueError("not json"))

        with pytest.raises(StorefrontApiError) as exc:
            client.list_products()

        assert exc.value.message == "Backend returned invalid JSON"
        assert exc.value.status_code == 200

    def test_get_not_retried_on_http_error(self, client, http):
        http.request.return_value = response(500, {"message": "boom"})

        with pytest.raises(StorefrontApiError):
            client.list_products()

        assert http.request.call_count == 1


class TestCartAndAddresses:

    def test_fetch_cart_sends_bearer_token(self, client, http):
        http.request.return_value = response(200, [{"productId": "KCRwjF7lN97HnEaY", "qty": 3}])

        lines = client.fetch_cart("testtoken")

        assert lines[0].product_id == "KCRwjF7lN97HnEaY"
        assert lines[0].quantity == 3
        _, kwargs = http.request.call_args
        assert kwargs["headers"] == {"Authorization": "Bearer testtoken"}

    def test_update_cart_posts_wire_names(self, client, http):
        http.request.return_value = response(200, [{"productId": "A", "qty": 2}])

        client.update_cart("testtoken", "A", 2)

        _, kwargs = http.request.call_args
        assert kwargs["json"] == {"productId": "A", "qty": 2}

    def test_update_cart_unknown_product(self, client, http):
        http.request.return_value = response(404, {"success": False, "message": "Product doesn't exist"})

        with pytest.raises(StorefrontApiError) as exc:
            client.update_cart("testtoken", "nope", 1)

        assert exc.value.status_code == 404

    def test_post_not_retried(self, client, http):
        http.request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(BackendUnreachableError):
            client.checkout("testtoken", "addr1")

        assert http.request.call_count == 1

    def test_checkout(self, client, http):
        http.request.return_value = response(200, {"success": True})

        assert client.checkout("testtoken", "addr1") is True
        _, kwargs = http.request.call_args
        assert kwargs["json"] == {"addressId": "addr1"}

    def test_addresses(self, client, http):
        body = [{"_id": "a1", "address": "Test address\n12th street, Mumbai"}]
        http.request.return_value = response(200, body)

        assert client.list_addresses("t")[0].id == "a1"
        assert client.add_address("t", "Test address")[0].address.startswith("Test")
        client.delete_address("t", "a1")

        args, _ = http.request.call_args
        assert args == ("DELETE", "http://backend/api/v1/user/addresses/a1")

    def test_error_body_without_json(self, client, http):
        http.request.return_value = response(502, ValueError("not json"))

        with pytest.raises(StorefrontApiError) as exc:
            client.add_address("t", "x")

        assert exc.value.message == "Something is not right!"
        assert exc.value.status_code == 502
