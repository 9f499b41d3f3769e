"""
Request dependencies: authentication context and per-request services.
"""
from dataclasses import dataclass
from typing import Optional
from fastapi import Depends, Request
from sqlalchemy.orm import Session
from ledger.api.cookies import read_session_cookie
from ledger.core.config import settings
from ledger.core.exceptions import AuthenticationError
from ledger.db.session import get_db
from ledger.repositories.ledger_repository import LedgerRepository
from ledger.schemas.user import Identity
from ledger.services.notification_service import LineNotifier
from ledger.services.session_store import SessionStore


@dataclass(frozen=True)
class AuthContext:
    """Outcome of resolving the session cookie for one request."""
    identity: Optional[Identity] = None
    cookie_cleared: bool = False

    @property
    def is_authenticated(self) -> bool:
        return self.identity is not None


def get_session_store(db: Session = Depends(get_db)) -> SessionStore:
    """Session store bound to the request's database session."""
    return SessionStore(db, settings)


def resolve_auth_context(request: Request, store: SessionStore) -> AuthContext:
    """
    Resolve the caller from the session cookie.

    No cookie means unauthenticated. A cookie whose session is unknown or
    expired is also unauthenticated and the cookie must be cleared.
    """
    token = read_session_cookie(request)
    if not token:
        return AuthContext()

    identity = store.resolve_session(token)
    if identity is None:
        return AuthContext(cookie_cleared=True)
    return AuthContext(identity=identity)


def get_auth_context(
    request: Request,
    store: SessionStore = Depends(get_session_store)
) -> AuthContext:
    return resolve_auth_context(request, store)


def get_current_identity(context: AuthContext = Depends(get_auth_context)) -> Identity:
    """Dependency for protected routes; 401 when there is no live session."""
    if not context.is_authenticated:
        raise AuthenticationError(clear_session=context.cookie_cleared)
    return context.identity


def get_repository(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db)
) -> LedgerRepository:
    """Ledger repository scoped to the signed-in user."""
    return LedgerRepository(db, identity.id)


def get_notifier() -> LineNotifier:
    return LineNotifier(settings)
