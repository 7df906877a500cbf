"""Signup, login and session endpoints with token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, Request, status

from cravesmart.api.schemas import LoginRequest, SignupRequest, account_summary
from cravesmart.errors import AuthenticationError
from cravesmart.services.sessions import SessionContext  # noqa: TC001

if TYPE_CHECKING:
    from cravesmart.containers import AppContainer

router = APIRouter(prefix="/auth", tags=["auth"])


def get_container(request: Request) -> AppContainer:
    """Return the container attached to the running app."""
    return request.app.state.container


async def require_session(
    request: Request,
    x_session_token: str | None = Header(default=None),
) -> SessionContext:
    """Resolve the caller's session from the X-Session-Token header."""
    if not x_session_token:
        raise AuthenticationError("Please log in.")
    session = get_container(request).session_store.get(x_session_token)
    if session is None:
        raise AuthenticationError("Your session has expired. Please log in again.")
    return session


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(body: SignupRequest, request: Request) -> dict[str, object]:
    """Create an account and log it in."""
    container = get_container(request)
    account = container.account_service.signup(
        username=body.username,
        email=body.email,
        password=body.password,
        confirm_password=body.confirm_password,
    )
    session = container.session_store.open(account)
    return {"token": session.token, "account": account_summary(account)}


@router.post("/login")
async def login(body: LoginRequest, request: Request) -> dict[str, object]:
    """Exchange credentials for a session token."""
    container = get_container(request)
    account = container.account_service.login(body.username_or_email, body.password)
    session = container.session_store.open(account)
    return {"token": session.token, "account": account_summary(account)}


@router.post("/logout")
async def logout(
    request: Request, session: SessionContext = Depends(require_session)
) -> dict[str, str]:
    """End the caller's session."""
    get_container(request).session_store.close(session.token)
    return {"status": "ok"}


@router.get("/me")
async def me(
    request: Request, session: SessionContext = Depends(require_session)
) -> dict[str, object]:
    """Return the logged-in account."""
    account = get_container(request).account_service.get_account(session.account_id)
    return {"account": account_summary(account)}
