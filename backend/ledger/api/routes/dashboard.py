"""
Dashboard route.
"""
from fastapi import APIRouter, Depends
from ledger.schemas.common import ApiResponse
from ledger.schemas.category import CategoryResponse
from ledger.schemas.dashboard import DashboardResponse
from ledger.api.dependencies import get_repository
from ledger.api.routes.entries import entry_response
from ledger.api.routes.people import summarize_people
from ledger.repositories.ledger_repository import LedgerRepository
from ledger.services.ledger_service import aggregate

RECENT_ENTRY_LIMIT = 25

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=ApiResponse[DashboardResponse])
async def get_dashboard(repo: LedgerRepository = Depends(get_repository)):
    """People with balances, latest entries and the overall balance."""
    # The total is computed over every entry, never over the recent page
    all_entries = repo.list_entries()

    return {
        "success": True,
        "data": DashboardResponse(
            people=summarize_people(repo),
            recent_entries=[entry_response(e) for e in repo.recent_entries(RECENT_ENTRY_LIMIT)],
            categories=[CategoryResponse.model_validate(c) for c in repo.list_categories()],
            total_balance=aggregate(all_entries),
            entry_count=len(all_entries)
        )
    }
