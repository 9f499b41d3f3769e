"""
Pydantic schemas for Person entity.
"""
from pydantic import field_validator
from typing import List, Optional
from datetime import datetime
from decimal import Decimal
from ledger.schemas.common import CamelModel
from ledger.schemas.entry import EntryResponse

MAX_PERSON_NAME_LENGTH = 64


class PersonCreate(CamelModel):
    """Schema for person creation."""
    name: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Please enter a name")
        if len(v) > MAX_PERSON_NAME_LENGTH:
            raise ValueError(f"Name must be at most {MAX_PERSON_NAME_LENGTH} characters")
        return v


class PersonResponse(CamelModel):
    """Schema for person response."""
    id: int
    name: str
    created_at: datetime


class PersonSummary(PersonResponse):
    """Person with aggregated balance."""
    balance: Decimal
    entry_count: int
    last_transaction_at: Optional[datetime] = None


class PersonHistory(CamelModel):
    """A person's entries, newest transaction first, with the running balance."""
    person: PersonResponse
    balance: Decimal
    deposit_count: int
    withdraw_count: int
    total_deposit: Decimal
    total_withdraw: Decimal
    entries: List[EntryResponse] = []
