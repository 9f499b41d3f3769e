"""
Category model: an optional tag on saving entries.
"""
from sqlalchemy import Column, String, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship
from ledger.db.base import BaseModel


class Category(BaseModel):
    """User-defined category. Entries only reference it weakly."""
    __tablename__ = "saving_categories"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(64), nullable=False)
    description = Column(String(256), nullable=True)

    # Relationships
    user = relationship("User", back_populates="categories")
    entries = relationship("Entry", back_populates="category", passive_deletes=True)

    __table_args__ = (
        UniqueConstraint('user_id', 'name', name='uq_category_user_name'),
    )
