from decimal import Decimal

from storefront.domain.schemas import SessionContext


class TestSessionStore:

    def test_load_without_login(self, store):
        assert store.load() is None

    def test_save_then_load(self, store, session):
        store.save(session)

        assert store.load() == session

    def test_keys_are_prefixed(self, store, redis_client, session):
        store.save(session)

        assert redis_client.data == {
            "test:token": "testtoken",
            "test:username": "crio.do",
            "test:balance": "5000",
        }

    def test_clear_removes_only_session_keys(self, store, redis_client, session):
        redis_client.set("other:key", "keep me")
        store.save(session)

        store.clear()

        assert store.load() is None
        assert redis_client.data == {"other:key": "keep me"}

    def test_garbage_balance_falls_back_to_zero(self, store, redis_client):
        redis_client.set("test:token", "t")
        redis_client.set("test:username", "someone")
        redis_client.set("test:balance", "lots")

        assert store.load() == SessionContext(token="t", username="someone", balance=Decimal("0"))
