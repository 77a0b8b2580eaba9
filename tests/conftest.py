"""
Shared fixtures: catalog data, an in-memory stand-in for the redis client,
a mocked backend client and a FastAPI TestClient wired to both.
"""
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from storefront.api import create_app
from storefront.api.dependencies import get_client, get_session_store
from storefront.domain.schemas import Address, CartLine, Product, SessionContext
from storefront.services.session_store import SessionStore
from storefront.services.storefront_client import StorefrontClient


class InMemoryRedis:
    """Implements the three redis calls SessionStore makes."""

    def __init__(self):
        self.data = {}

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value
        return True

    def delete(self, *keys):
        removed = 0
        for key in keys:
            if self.data.pop(key, None) is not None:
                removed += 1
        return removed


@pytest.fixture
def catalog():
    return [
        Product(id="A", name="Ball", category="Sports", cost=Decimal("100"), rating=5, image="x"),
        Product(id="B", name="iPhone XR", category="Phones", cost=Decimal("10"), rating=4, image="y"),
        Product(id="C", name="Tan Leatherette Weekender Duffle", category="Fashion", cost=Decimal("5"), rating=3, image="z"),
    ]


@pytest.fixture
def session():
    return SessionContext(token="testtoken", username="crio.do", balance=Decimal("5000"))


@pytest.fixture
def addresses():
    return [
        Address(id="addr1", address="Test address\n12th street, Mumbai"),
        Address(id="addr2", address="New address \nKolam lane, Chennai"),
    ]


@pytest.fixture
def redis_client():
    return InMemoryRedis()


@pytest.fixture
def store(redis_client):
    return SessionStore(client=redis_client, prefix="test:")


@pytest.fixture
def backend(catalog, addresses):
    """Mocked StorefrontClient with a happy-path backend."""
    client = MagicMock(spec=StorefrontClient)
    client.list_products.return_value = catalog
    client.search_products.return_value = catalog[:1]
    client.fetch_cart.return_value = [CartLine(product_id="A", quantity=3)]
    client.update_cart.return_value = [
        CartLine(product_id="A", quantity=3),
        CartLine(product_id="B", quantity=1),
    ]
    client.list_addresses.return_value = addresses
    client.add_address.return_value = addresses
    client.delete_address.return_value = addresses[1:]
    client.checkout.return_value = True
    return client


@pytest.fixture
def test_client(backend, store):
    app = create_app()
    app.dependency_overrides[get_client] = lambda: backend
    app.dependency_overrides[get_session_store] = lambda: store
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def logged_in(store, session):
    store.save(session)
    return session


@pytest.fixture(autouse=True)
def eager_celery():
    from storefront.celery_worker import celery_app

    celery_app.conf.task_always_eager = True
    yield
    celery_app.conf.task_always_eager = False
