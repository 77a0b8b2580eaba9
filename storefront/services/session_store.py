# storefront/services/session_store.py
from decimal import Decimal, InvalidOperation

import redis

from storefront.domain.schemas import SessionContext
from storefront.utils.retry import redis_retry
from storefront.utils.settings import REDIS_URL, SESSION_KEY_PREFIX
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

SESSION_FIELDS = ("token", "username", "balance")


class SessionStore:
    """
    -persists the session (token, username, balance) in redis
    -init on login, teardown on logout
    -clear removes only the session keys, nothing else
    """

    def __init__(self, client: redis.Redis | None = None, prefix: str = SESSION_KEY_PREFIX):
        self.redis = client or redis.Redis.from_url(REDIS_URL, decode_responses=True)
        self.prefix = prefix

    def _key(self, name: str) -> str:
        return f"{self.prefix}{name}"

    @redis_retry()
    def get(self, name: str) -> str | None:
        return self.redis.get(self._key(name))

    @redis_retry()
    def set(self, name: str, value: str) -> None:
        self.redis.set(self._key(name), value)

    @redis_retry()
    def clear(self) -> None:
        self.redis.delete(*(self._key(f) for f in SESSION_FIELDS))
        logger.info("Session cleared")

    def save(self, session: SessionContext) -> None:
        self.set("token", session.token)
        self.set("username", session.username)
        self.set("balance", str(session.balance))
        logger.info(f"Session saved for {session.username}")

    def load(self) -> SessionContext | None:
        token = self.get("token")
        if not token:
            return None

        raw_balance = self.get("balance")
        try:
            balance = Decimal(raw_balance) if raw_balance else Decimal("0")
        except InvalidOperation:
            logger.warning(f"Stored balance {raw_balance!r} is not a number, using 0")
            balance = Decimal("0")

        return SessionContext(
            token=token,
            username=self.get("username") or "",
            balance=balance,
        )
