"""
Saving entry routes.
"""
import logging
from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from typing import Optional
from ledger.models.entry import Entry
from ledger.schemas.common import ApiResponse
from ledger.schemas.entry import EntryCreate, EntryResponse, EntryListResponse, EntryCreatedResponse
from ledger.api.dependencies import get_repository, get_notifier
from ledger.repositories.ledger_repository import LedgerRepository
from ledger.services.ledger_service import aggregate
from ledger.services.notification_service import LineNotifier, EntryNotice, dispatch_entry_notification

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/entries", tags=["entries"])


def entry_response(entry: Entry) -> EntryResponse:
    """Build the response for an entry with person and category loaded."""
    return EntryResponse(
        id=entry.id,
        person_id=entry.person_id,
        person_name=entry.person.name,
        category_id=entry.category_id,
        category_name=entry.category.name if entry.category else None,
        amount=entry.amount,
        type=entry.type,
        label=entry.label,
        transaction_date=entry.transaction_date,
        created_at=entry.created_at
    )


@router.get("", response_model=ApiResponse[EntryListResponse])
async def list_entries(
    person_id: Optional[int] = Query(None, alias="personId"),
    category_id: Optional[int] = Query(None, alias="categoryId"),
    uncategorized: bool = False,
    repo: LedgerRepository = Depends(get_repository)
):
    """Entry history, newest transaction first, with the balance of the listed entries."""
    if person_id is not None:
        repo.get_person(person_id)
    if category_id is not None:
        repo.get_category(category_id)

    entries = repo.list_entries(
        person_id=person_id,
        category_id=category_id,
        uncategorized=uncategorized
    )
    return {
        "success": True,
        "data": EntryListResponse(
            entries=[entry_response(e) for e in entries],
            count=len(entries),
            balance=aggregate(entries)
        )
    }


@router.post("", response_model=ApiResponse[EntryCreatedResponse], status_code=status.HTTP_201_CREATED)
async def create_entry(
    entry_data: EntryCreate,
    background_tasks: BackgroundTasks,
    repo: LedgerRepository = Depends(get_repository),
    notifier: LineNotifier = Depends(get_notifier)
):
    """Record a deposit or withdrawal and notify LINE in the background."""
    person = repo.get_person(entry_data.person_id)
    category = None
    if entry_data.category_id is not None:
        category = repo.get_category(entry_data.category_id)

    entry = repo.create_entry(
        person=person,
        amount=entry_data.amount,
        label=entry_data.label,
        entry_type=entry_data.type,
        transaction_date=entry_data.transaction_date,
        category=category
    )

    balance = aggregate(repo.list_entries(person_id=person.id))

    # Runs after the response is sent; failures are logged only
    background_tasks.add_task(
        dispatch_entry_notification,
        notifier,
        EntryNotice(
            person_name=person.name,
            entry_type=entry.type,
            amount=entry.amount,
            label=entry.label,
            transaction_date=entry.transaction_date,
            balance=balance,
            category_name=category.name if category else None
        )
    )

    return {
        "success": True,
        "data": EntryCreatedResponse(entry=entry_response(entry), balance=balance)
    }
