# storefront/api/routers/auth.py
from fastapi import APIRouter, Depends, HTTPException

from storefront.api.dependencies import (
    HANDLED_ERRORS,
    get_client,
    get_session,
    get_session_store,
    to_http_error,
)
from storefront.domain.schemas import LoginIn, RegisterIn, SessionContext, SessionOut
from storefront.services.auth_service import AuthService
from storefront.services.session_store import SessionStore
from storefront.services.storefront_client import StorefrontClient

router = APIRouter(prefix="/auth", tags=["auth"])


def get_service(
    client: StorefrontClient = Depends(get_client),
    store: SessionStore = Depends(get_session_store),
):
    return AuthService(client=client, store=store)


@router.post("/login", response_model=SessionOut, status_code=201)
def login(payload: LoginIn, svc: AuthService = Depends(get_service)):
    try:
        session = svc.login(payload.username, payload.password)
    except HANDLED_ERRORS as e:
        raise to_http_error(e)
    return SessionOut(username=session.username, balance=session.balance)


@router.post("/register", status_code=201)
def register(payload: RegisterIn, svc: AuthService = Depends(get_service)):
    try:
        svc.register(payload.username, payload.password, payload.confirm_password)
    except HANDLED_ERRORS as e:
        raise to_http_error(e)
    return {"success": True}


@router.post("/logout")
def logout(svc: AuthService = Depends(get_service)):
    try:
        svc.logout()
    except HANDLED_ERRORS as e:
        raise to_http_error(e)
    return {"success": True}


@router.get("/session", response_model=SessionOut)
def current_session(session: SessionContext | None = Depends(get_session)):
    if session is None:
        raise HTTPException(status_code=401, detail="Not logged in")
    return SessionOut(username=session.username, balance=session.balance)
