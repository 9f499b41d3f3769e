"""
Confirm-then-force deletion for people and categories.

A target with dependent entries is only removed when the caller passes
``force``. What happens to those entries depends on the policy: people
take their entries with them, categories leave theirs uncategorized.
"""
import enum
import logging
from dataclasses import dataclass
from typing import Union
from ledger.core.exceptions import ConfirmationRequiredError
from ledger.models.category import Category
from ledger.models.person import Person
from ledger.repositories.ledger_repository import LedgerRepository

logger = logging.getLogger(__name__)


class DeletionPolicy(str, enum.Enum):
    """What happens to dependent entries on a forced delete."""
    CASCADE = "cascade"  # Entries are deleted
    DETACH = "detach"    # Entries stay, category reference cleared


@dataclass(frozen=True)
class DeletionOutcome:
    """Result of a completed deletion."""
    target_id: int
    name: str
    policy: DeletionPolicy
    affected_entries: int


def _confirmation_message(target: Union[Person, Category], policy: DeletionPolicy, count: int) -> str:
    if policy is DeletionPolicy.CASCADE:
        return (
            f"{target.name} has {count} saving entries. "
            "Deleting will remove the whole balance. Delete anyway?"
        )
    return (
        f"Category {target.name} has {count} entries. "
        "The entries will be kept without a category. Delete anyway?"
    )


def guarded_delete(
    repo: LedgerRepository,
    target: Union[Person, Category],
    policy: DeletionPolicy,
    force: bool = False
) -> DeletionOutcome:
    """
    Delete ``target`` according to ``policy``.

    Raises ConfirmationRequiredError without touching storage when the
    target still has entries and ``force`` is false. The count and the
    delete happen under one row lock on ``target``.
    """
    repo.lock_for_delete(target)
    if policy is DeletionPolicy.CASCADE:
        count = repo.count_entries(person_id=target.id)
    else:
        count = repo.count_entries(category_id=target.id)

    if count and not force:
        message = _confirmation_message(target, policy, count)
        repo.release()
        raise ConfirmationRequiredError(count, message)

    target_id, name = target.id, target.name
    if policy is DeletionPolicy.CASCADE:
        affected = repo.delete_person(target)
    else:
        affected = repo.delete_category(target)

    logger.info(
        "Deleted %s %s (%s, %s entries affected)",
        type(target).__name__, target_id, policy.value, affected
    )
    return DeletionOutcome(target_id=target_id, name=name, policy=policy, affected_entries=affected)
