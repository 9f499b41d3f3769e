"""
Pydantic schemas for saving entries.
"""
from pydantic import field_validator
from typing import List, Optional
from datetime import datetime, timezone
from decimal import Decimal
from ledger.models.entry import EntryType
from ledger.core.exceptions import ValidationError
from ledger.schemas.common import CamelModel
from ledger.services.ledger_service import validate_entry_amount

MAX_LABEL_LENGTH = 128


class EntryCreate(CamelModel):
    """Schema for entry creation."""
    person_id: int
    amount: Decimal
    label: str
    type: EntryType = EntryType.DEPOSIT
    transaction_date: datetime
    category_id: Optional[int] = None

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v: Decimal) -> Decimal:
        try:
            return validate_entry_amount(v)
        except ValidationError as e:
            raise ValueError(e.message)

    @field_validator("label")
    @classmethod
    def validate_label(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Please enter a label")
        if len(v) > MAX_LABEL_LENGTH:
            raise ValueError(f"Label must be at most {MAX_LABEL_LENGTH} characters")
        return v

    @field_validator("transaction_date")
    @classmethod
    def to_naive_utc(cls, v: datetime) -> datetime:
        # Stored as naive UTC
        if v.tzinfo is not None:
            return v.astimezone(timezone.utc).replace(tzinfo=None)
        return v


class EntryResponse(CamelModel):
    """Schema for entry response."""
    id: int
    person_id: int
    person_name: str
    category_id: Optional[int] = None
    category_name: Optional[str] = None
    amount: Decimal
    type: EntryType
    label: str
    transaction_date: datetime
    created_at: datetime


class EntryListResponse(CamelModel):
    """Entry history with its balance."""
    entries: List[EntryResponse] = []
    count: int
    balance: Decimal


class EntryCreatedResponse(CamelModel):
    """Created entry with the person's balance after it."""
    entry: EntryResponse
    balance: Decimal
