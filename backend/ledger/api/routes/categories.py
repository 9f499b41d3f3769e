"""
Category management routes.
"""
from collections import defaultdict
from fastapi import APIRouter, Depends, status
from ledger.schemas.common import ApiResponse
from ledger.schemas.category import (
    CategoryCreate, CategoryResponse, CategorySummary,
    CategoryListResponse, UncategorizedSummary
)
from ledger.api.dependencies import get_repository
from ledger.repositories.ledger_repository import LedgerRepository
from ledger.services.deletion_guard import DeletionPolicy, guarded_delete
from ledger.services.ledger_service import aggregate

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=ApiResponse[CategoryListResponse])
async def list_categories(repo: LedgerRepository = Depends(get_repository)):
    """List categories with entry counts and balances, plus uncategorized entries."""
    entries_by_category = defaultdict(list)
    for entry in repo.list_entries():
        entries_by_category[entry.category_id].append(entry)

    categories = []
    for category in repo.list_categories():
        entries = entries_by_category.get(category.id, [])
        categories.append(CategorySummary(
            id=category.id,
            name=category.name,
            description=category.description,
            created_at=category.created_at,
            entry_count=len(entries),
            balance=aggregate(entries)
        ))

    uncategorized = entries_by_category.get(None, [])
    return {
        "success": True,
        "data": CategoryListResponse(
            categories=categories,
            uncategorized=UncategorizedSummary(
                entry_count=len(uncategorized),
                balance=aggregate(uncategorized)
            )
        )
    }


@router.post("", response_model=ApiResponse[CategoryResponse], status_code=status.HTTP_201_CREATED)
async def create_category(
    category_data: CategoryCreate,
    repo: LedgerRepository = Depends(get_repository)
):
    """Create a category."""
    category = repo.create_category(category_data.name, category_data.description)
    return {"success": True, "data": CategoryResponse.model_validate(category)}


@router.delete("/{category_id}", response_model=ApiResponse[None])
async def delete_category(
    category_id: int,
    force: bool = False,
    repo: LedgerRepository = Depends(get_repository)
):
    """Delete a category. With entries, requires force=true; entries are kept uncategorized."""
    category = repo.get_category(category_id)
    outcome = guarded_delete(repo, category, DeletionPolicy.DETACH, force=force)
    return {"success": True, "message": f"Deleted category {outcome.name}"}
