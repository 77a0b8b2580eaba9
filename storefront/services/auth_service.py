# storefront/services/auth_service.py
from storefront.domain.errors import FormValidationError
from storefront.domain.schemas import SessionContext
from storefront.services.session_store import SessionStore
from storefront.services.storefront_client import StorefrontClient
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

MIN_LENGTH = 6


def validate_login(username: str, password: str) -> None:
    """Raise FormValidationError with the first failing rule."""
    if not username:
        raise FormValidationError("Username is a required field.")
    if len(username) < MIN_LENGTH:
        raise FormValidationError(f"Username must be at least {MIN_LENGTH} characters.")
    if not password:
        raise FormValidationError("Password is a required field.")
    if len(password) < MIN_LENGTH:
        raise FormValidationError(f"Password must be at least {MIN_LENGTH} characters.")


def validate_registration(username: str, password: str, confirm_password: str) -> None:
    validate_login(username, password)
    if password != confirm_password:
        raise FormValidationError("Passwords do not match.")


class AuthService:
    def __init__(self, client: StorefrontClient, store: SessionStore):
        self.client = client
        self.store = store

    def login(self, username: str, password: str) -> SessionContext:
        validate_login(username, password)

        session = self.client.login(username, password)
        self.store.save(session)

        logger.info(f"User {session.username} logged in")
        return session

    def register(self, username: str, password: str, confirm_password: str) -> None:
        validate_registration(username, password, confirm_password)
        self.client.register(username, password)
        logger.info(f"User {username} registered")

    def logout(self) -> None:
        self.store.clear()

    def current_session(self) -> SessionContext | None:
        return self.store.load()
