"""
Server-side session storage keyed by a keyed hash of an opaque token.
"""
import logging
from datetime import datetime, timedelta
from typing import Callable, Optional, Tuple
from sqlalchemy.orm import Session
from ledger.core.config import Settings
from ledger.core.security import generate_session_token, hash_session_token
from ledger.core.utils import utcnow
from ledger.models.session import AuthSession
from ledger.schemas.user import Identity

logger = logging.getLogger(__name__)


class SessionStore:
    """Create, resolve and destroy login sessions."""

    def __init__(self, db: Session, settings: Settings, clock: Callable[[], datetime] = utcnow):
        self.db = db
        self.settings = settings
        self.clock = clock

    @property
    def lifetime(self) -> timedelta:
        return timedelta(days=self.settings.SESSION_MAX_AGE_DAYS)

    def _hash(self, raw_token: str) -> str:
        return hash_session_token(raw_token, self.settings.AUTH_SECRET)

    def create_session(self, user_id: int) -> Tuple[str, datetime]:
        """
        Store a new session for the user.

        Returns the raw token and its expiry (naive UTC). The raw token is
        not persisted; this is the only place it is handed out.
        """
        raw_token = generate_session_token()
        expires = self.clock() + self.lifetime
        record = AuthSession(
            token_hash=self._hash(raw_token),
            user_id=user_id,
            expires=expires
        )
        self.db.add(record)
        self.db.commit()
        logger.debug("Created session %s for user %s", record.id, user_id)
        return raw_token, expires

    def resolve_session(self, raw_token: str) -> Optional[Identity]:
        """Identity for a live token; None if unknown or expired (expired records are removed)."""
        if not raw_token:
            return None
        record = self.db.query(AuthSession).filter(
            AuthSession.token_hash == self._hash(raw_token)
        ).first()
        if not record:
            return None

        if record.expires < self.clock():
            logger.info("Session %s for user %s expired, removing", record.id, record.user_id)
            self.db.delete(record)
            self.db.commit()
            return None

        user = record.user
        return Identity(id=user.id, email=user.email, name=user.name)

    def destroy_session(self, raw_token: str) -> None:
        """Delete the session for a token. Unknown tokens are ignored."""
        if not raw_token:
            return
        self.db.query(AuthSession).filter(
            AuthSession.token_hash == self._hash(raw_token)
        ).delete(synchronize_session=False)
        self.db.commit()
