"""
Pydantic schemas for the dashboard.
"""
from typing import List
from decimal import Decimal
from ledger.schemas.common import CamelModel
from ledger.schemas.person import PersonSummary
from ledger.schemas.category import CategoryResponse
from ledger.schemas.entry import EntryResponse


class DashboardResponse(CamelModel):
    """Overview of every person, the latest entries and the overall balance."""
    people: List[PersonSummary] = []
    recent_entries: List[EntryResponse] = []
    categories: List[CategoryResponse] = []
    total_balance: Decimal
    entry_count: int
