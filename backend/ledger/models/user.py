"""
User model for authentication and tenancy.
"""
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from ledger.db.base import BaseModel


class User(BaseModel):
    """Account owning people, categories and sessions."""
    __tablename__ = "users"

    email = Column(String(255), unique=True, nullable=False, index=True)  # Stored lowercased
    name = Column(String(100), nullable=True)
    password_hash = Column(String(255), nullable=False)

    # Relationships
    sessions = relationship("AuthSession", back_populates="user", cascade="all, delete-orphan")
    people = relationship("Person", back_populates="user", cascade="all, delete-orphan")
    categories = relationship("Category", back_populates="user", cascade="all, delete-orphan")
