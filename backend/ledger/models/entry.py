"""
Saving entry model: one deposit or withdrawal.
"""
from sqlalchemy import Column, String, Numeric, DateTime, ForeignKey, Integer, Enum as SQLEnum
from sqlalchemy.orm import relationship
from ledger.db.base import BaseModel
import enum


class EntryType(str, enum.Enum):
    """Entry type. The sign of an amount is derived from it."""
    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"


class Entry(BaseModel):
    """Immutable ledger transaction. Amount is always positive."""
    __tablename__ = "saving_entries"

    person_id = Column(Integer, ForeignKey("people.id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("saving_categories.id", ondelete="SET NULL"), nullable=True, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    label = Column(String(128), nullable=False)
    type = Column(SQLEnum(EntryType), nullable=False, default=EntryType.DEPOSIT)
    transaction_date = Column(DateTime, nullable=False, index=True)  # User supplied, distinct from created_at

    # Relationships
    person = relationship("Person", back_populates="entries")
    category = relationship("Category", back_populates="entries")
