"""
Binding of session tokens to the session cookie.
"""
from datetime import datetime
from typing import Optional
from fastapi import Request, Response
from ledger.core.config import Settings, settings
from ledger.core.utils import as_utc


def set_session_cookie(response: Response, token: str, expires: datetime, config: Settings = settings) -> None:
    """Attach the raw token as an HttpOnly, SameSite=Lax cookie expiring with the session."""
    response.set_cookie(
        key=config.SESSION_COOKIE_NAME,
        value=token,
        expires=as_utc(expires),
        path="/",
        httponly=True,
        samesite="lax",
        secure=config.cookie_secure,
    )


def read_session_cookie(request: Request, config: Settings = settings) -> Optional[str]:
    """Raw cookie value, or None when the request carries no session."""
    return request.cookies.get(config.SESSION_COOKIE_NAME) or None


def clear_session_cookie(response: Response, config: Settings = settings) -> None:
    """Expire the session cookie on the client."""
    response.delete_cookie(
        key=config.SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        samesite="lax",
        secure=config.cookie_secure,
    )
