# storefront/api/dependencies.py
import redis
from fastapi import Depends, HTTPException

from storefront.domain.errors import (
    BackendUnreachableError,
    DanglingReferenceError,
    NotAuthenticatedError,
    StorefrontApiError,
)
from storefront.domain.schemas import SessionContext
from storefront.services.session_store import SessionStore
from storefront.services.storefront_client import StorefrontClient


def get_client() -> StorefrontClient:
    return StorefrontClient()


def get_session_store() -> SessionStore:
    return SessionStore()


def get_session(store: SessionStore = Depends(get_session_store)) -> SessionContext | None:
    try:
        return store.load()
    except redis.RedisError as e:
        raise to_http_error(e)


def to_http_error(e: Exception) -> HTTPException:
    """Map domain errors to HTTP responses."""
    if isinstance(e, NotAuthenticatedError):
        return HTTPException(status_code=401, detail=str(e))
    if isinstance(e, DanglingReferenceError):
        return HTTPException(status_code=409, detail=str(e))
    if isinstance(e, redis.RedisError):
        return HTTPException(status_code=503, detail="Session storage is unavailable")
    if isinstance(e, BackendUnreachableError):
        return HTTPException(status_code=503, detail=e.message)
    if isinstance(e, StorefrontApiError):
        # backend failures that came with a success status are a bad gateway
        status = e.status_code if e.status_code and e.status_code >= 400 else 502
        return HTTPException(status_code=status, detail=e.message)
    if isinstance(e, PermissionError):
        return HTTPException(status_code=403, detail=str(e))
    return HTTPException(status_code=400, detail=str(e))


HANDLED_ERRORS = (StorefrontApiError, redis.RedisError, ValueError, PermissionError)
