"""Models package - Import all models for SQLAlchemy registration."""
from ledger.models.user import User
from ledger.models.session import AuthSession
from ledger.models.person import Person
from ledger.models.category import Category
from ledger.models.entry import Entry, EntryType

__all__ = [
    "User",
    "AuthSession",
    "Person",
    "Category",
    "Entry",
    "EntryType",
]
