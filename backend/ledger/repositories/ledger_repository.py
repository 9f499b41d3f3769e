"""
Tenant-scoped access to people, categories and entries.

Every query issued here is filtered by the owning user id given at
construction, so a repository built from the resolved identity cannot read
or modify another user's rows. Rows that are missing and rows owned by
someone else both surface as NotFoundError.
"""
import logging
from datetime import datetime
from typing import List, Optional, Union
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload
from ledger.core.exceptions import ConflictError, NotFoundError
from ledger.models.person import Person
from ledger.models.category import Category
from ledger.models.entry import Entry, EntryType
from ledger.services.ledger_service import validate_entry_amount

logger = logging.getLogger(__name__)


class LedgerRepository:
    """Data access for one owner's ledger."""

    def __init__(self, db: Session, owner_id: int):
        self.db = db
        self.owner_id = owner_id

    # People

    def list_people(self) -> List[Person]:
        return self.db.query(Person).filter(
            Person.user_id == self.owner_id
        ).order_by(Person.name.asc()).all()

    def get_person(self, person_id: int) -> Person:
        person = self.db.query(Person).filter(
            Person.id == person_id,
            Person.user_id == self.owner_id
        ).first()
        if not person:
            raise NotFoundError("Person not found")
        return person

    def create_person(self, name: str) -> Person:
        person = Person(user_id=self.owner_id, name=name)
        self._insert(person, "A person with this name already exists")
        return person

    # Categories

    def list_categories(self) -> List[Category]:
        return self.db.query(Category).filter(
            Category.user_id == self.owner_id
        ).order_by(Category.name.asc()).all()

    def get_category(self, category_id: int) -> Category:
        category = self.db.query(Category).filter(
            Category.id == category_id,
            Category.user_id == self.owner_id
        ).first()
        if not category:
            raise NotFoundError("Category not found")
        return category

    def create_category(self, name: str, description: Optional[str] = None) -> Category:
        category = Category(user_id=self.owner_id, name=name, description=description)
        self._insert(category, "A category with this name already exists")
        return category

    # Entries

    def _entries(self):
        return self.db.query(Entry).join(Person, Entry.person_id == Person.id).filter(
            Person.user_id == self.owner_id
        )

    def list_entries(
        self,
        person_id: Optional[int] = None,
        category_id: Optional[int] = None,
        uncategorized: bool = False,
    ) -> List[Entry]:
        """Entries ordered by transaction date, newest first."""
        query = self._entries().options(
            joinedload(Entry.person),
            joinedload(Entry.category)
        )
        if person_id is not None:
            query = query.filter(Entry.person_id == person_id)
        if category_id is not None:
            query = query.filter(Entry.category_id == category_id)
        if uncategorized:
            query = query.filter(Entry.category_id.is_(None))
        return query.order_by(Entry.transaction_date.desc(), Entry.id.desc()).all()

    def recent_entries(self, limit: int = 25) -> List[Entry]:
        """Most recently recorded entries."""
        return self._entries().options(
            joinedload(Entry.person),
            joinedload(Entry.category)
        ).order_by(Entry.created_at.desc(), Entry.id.desc()).limit(limit).all()

    def count_entries(self, person_id: Optional[int] = None, category_id: Optional[int] = None) -> int:
        query = self.db.query(func.count(Entry.id)).select_from(Entry).join(
            Person, Entry.person_id == Person.id
        ).filter(
            Person.user_id == self.owner_id
        )
        if person_id is not None:
            query = query.filter(Entry.person_id == person_id)
        if category_id is not None:
            query = query.filter(Entry.category_id == category_id)
        return query.scalar() or 0

    def create_entry(
        self,
        person: Person,
        amount,
        label: str,
        entry_type: EntryType,
        transaction_date: datetime,
        category: Optional[Category] = None,
    ) -> Entry:
        """Insert one entry. The person and category must come from this repository."""
        amount = validate_entry_amount(amount)
        if person.user_id != self.owner_id:
            raise NotFoundError("Person not found")
        if category is not None and category.user_id != self.owner_id:
            raise NotFoundError("Category not found")
        entry = Entry(
            person_id=person.id,
            category_id=category.id if category is not None else None,
            amount=amount,
            label=label,
            type=EntryType(entry_type),
            transaction_date=transaction_date,
        )
        self.db.add(entry)
        self.db.commit()
        self.db.refresh(entry)
        return entry

    # Deletion

    def lock_for_delete(self, target: Union[Person, Category]) -> None:
        """
        Take a row lock on ``target`` for the rest of the transaction.

        Inserting an entry takes a shared lock on the person and category rows
        it references, so between this call and the commit in
        delete_person/delete_category no entry can be added that the dependent
        count would miss.
        """
        model = type(target)
        self.db.query(model).filter(
            model.id == target.id,
            model.user_id == self.owner_id
        ).with_for_update().populate_existing().one()

    def release(self) -> None:
        """End the current transaction without changes, dropping any locks."""
        self.db.rollback()

    def delete_person(self, person: Person) -> int:
        """Delete a person together with its entries. Returns the entry count removed."""
        removed = len(person.entries)
        self.db.delete(person)
        self.db.commit()
        return removed

    def delete_category(self, category: Category) -> int:
        """Delete a category, keeping its entries uncategorized. Returns the entry count detached."""
        detached = self.db.query(Entry).filter(
            Entry.category_id == category.id
        ).update({Entry.category_id: None}, synchronize_session=False)
        self.db.delete(category)
        self.db.commit()
        return detached

    def _insert(self, obj, conflict_message: str):
        self.db.add(obj)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.info("Unique constraint rejected %s for user %s", type(obj).__name__, self.owner_id)
            raise ConflictError(conflict_message)
        self.db.refresh(obj)
