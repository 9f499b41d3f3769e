"""
Server-side session records for cookie authentication.
"""
from sqlalchemy import Column, String, DateTime, ForeignKey, Integer
from sqlalchemy.orm import relationship
from ledger.db.base import BaseModel


class AuthSession(BaseModel):
    """One active login. Only the keyed hash of the bearer token is stored."""
    __tablename__ = "sessions"

    token_hash = Column(String(64), unique=True, nullable=False, index=True)
    expires = Column(DateTime, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Relationships
    user = relationship("User", back_populates="sessions")
