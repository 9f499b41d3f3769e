"""
Person model: a ledger subject tracked by a user.
"""
from sqlalchemy import Column, String, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship
from ledger.db.base import BaseModel


class Person(BaseModel):
    """Tracked person; owns its saving entries."""
    __tablename__ = "people"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(64), nullable=False)

    # Relationships
    user = relationship("User", back_populates="people")
    entries = relationship("Entry", back_populates="person", cascade="all, delete-orphan")

    # Names are unique per owner
    __table_args__ = (
        UniqueConstraint('user_id', 'name', name='uq_person_user_name'),
    )
