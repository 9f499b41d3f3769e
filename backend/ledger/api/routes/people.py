"""
Person management routes.
"""
from collections import defaultdict
from fastapi import APIRouter, Depends, status
from typing import List
from ledger.schemas.common import ApiResponse
from ledger.schemas.person import PersonCreate, PersonResponse, PersonSummary, PersonHistory
from ledger.api.dependencies import get_repository, get_notifier
from ledger.api.routes.entries import entry_response
from ledger.repositories.ledger_repository import LedgerRepository
from ledger.services.deletion_guard import DeletionPolicy, guarded_delete
from ledger.services.ledger_service import aggregate, summarize
from ledger.services.notification_service import LineNotifier, send_summary

router = APIRouter(prefix="/people", tags=["people"])


def summarize_people(repo: LedgerRepository) -> List[PersonSummary]:
    """Every person of the owner with balance, entry count and last transaction date."""
    entries_by_person = defaultdict(list)
    for entry in repo.list_entries():
        entries_by_person[entry.person_id].append(entry)

    summaries = []
    for person in repo.list_people():
        entries = entries_by_person.get(person.id, [])
        summaries.append(PersonSummary(
            id=person.id,
            name=person.name,
            created_at=person.created_at,
            balance=aggregate(entries),
            entry_count=len(entries),
            # Entries are ordered newest transaction first
            last_transaction_at=entries[0].transaction_date if entries else None
        ))
    return summaries


@router.get("", response_model=ApiResponse[List[PersonSummary]])
async def list_people(repo: LedgerRepository = Depends(get_repository)):
    """List people with their balances."""
    return {"success": True, "data": summarize_people(repo)}


@router.post("", response_model=ApiResponse[PersonResponse], status_code=status.HTTP_201_CREATED)
async def create_person(
    person_data: PersonCreate,
    repo: LedgerRepository = Depends(get_repository)
):
    """Add a person."""
    person = repo.create_person(person_data.name)
    return {"success": True, "data": PersonResponse.model_validate(person)}


@router.get("/{person_id}", response_model=ApiResponse[PersonHistory])
async def get_person_history(
    person_id: int,
    repo: LedgerRepository = Depends(get_repository)
):
    """A person's entries and running balance."""
    person = repo.get_person(person_id)
    entries = repo.list_entries(person_id=person.id)
    summary = summarize(entries)

    return {
        "success": True,
        "data": PersonHistory(
            person=PersonResponse.model_validate(person),
            balance=aggregate(entries),
            deposit_count=summary.deposit_count,
            withdraw_count=summary.withdraw_count,
            total_deposit=summary.total_deposit,
            total_withdraw=summary.total_withdraw,
            entries=[entry_response(e) for e in entries]
        )
    }


@router.delete("/{person_id}", response_model=ApiResponse[None])
async def delete_person(
    person_id: int,
    force: bool = False,
    repo: LedgerRepository = Depends(get_repository)
):
    """Delete a person. With entries, requires force=true and removes them too."""
    person = repo.get_person(person_id)
    outcome = guarded_delete(repo, person, DeletionPolicy.CASCADE, force=force)
    return {
        "success": True,
        "message": f"Deleted {outcome.name} and {outcome.affected_entries} entries"
    }


@router.post("/{person_id}/send-summary", response_model=ApiResponse[None])
async def send_person_summary(
    person_id: int,
    repo: LedgerRepository = Depends(get_repository),
    notifier: LineNotifier = Depends(get_notifier)
):
    """Push the person's deposit/withdraw summary to LINE."""
    person = repo.get_person(person_id)
    summary = summarize(repo.list_entries(person_id=person.id))
    await send_summary(notifier, person.name, summary)
    return {"success": True, "message": "Summary sent to LINE"}
