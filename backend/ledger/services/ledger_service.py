"""
Ledger aggregation: signed balances and summary statistics over entries.

Amounts are stored positive; the sign comes from the entry type at
aggregation time. Everything here works on any object exposing ``amount``
and ``type`` and never touches the database, so the same rules apply to a
person's history, a category, the dashboard and notifications.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable
from ledger.core.exceptions import ValidationError
from ledger.models.entry import EntryType

ZERO = Decimal("0")
CENT = Decimal("0.01")
# Largest value a Numeric(12, 2) column holds
MAX_ENTRY_AMOUNT = Decimal("9999999999.99")


@dataclass(frozen=True)
class LedgerSummary:
    """Counts and totals split by entry type."""
    deposit_count: int = 0
    withdraw_count: int = 0
    total_deposit: Decimal = ZERO
    total_withdraw: Decimal = ZERO

    @property
    def balance(self) -> Decimal:
        return self.total_deposit - self.total_withdraw

    @property
    def entry_count(self) -> int:
        return self.deposit_count + self.withdraw_count

    def __add__(self, other: "LedgerSummary") -> "LedgerSummary":
        return LedgerSummary(
            deposit_count=self.deposit_count + other.deposit_count,
            withdraw_count=self.withdraw_count + other.withdraw_count,
            total_deposit=self.total_deposit + other.total_deposit,
            total_withdraw=self.total_withdraw + other.total_withdraw,
        )


def signed_amount(entry) -> Decimal:
    """+amount for a deposit, -amount for a withdrawal."""
    amount = Decimal(entry.amount)
    if EntryType(entry.type) is EntryType.WITHDRAW:
        return -amount
    return amount


def aggregate(entries: Iterable) -> Decimal:
    """Signed total of the given entries. Empty input sums to zero."""
    return sum((signed_amount(entry) for entry in entries), ZERO)


def summarize(entries: Iterable) -> LedgerSummary:
    """Deposit/withdraw counts and totals for the given entries."""
    deposit_count = withdraw_count = 0
    total_deposit = total_withdraw = ZERO
    for entry in entries:
        amount = Decimal(entry.amount)
        if EntryType(entry.type) is EntryType.WITHDRAW:
            withdraw_count += 1
            total_withdraw += amount
        else:
            deposit_count += 1
            total_deposit += amount
    return LedgerSummary(deposit_count, withdraw_count, total_deposit, total_withdraw)


def validate_entry_amount(amount) -> Decimal:
    """
    Coerce and check an entry amount before it is written.

    Only finite values above zero with at most two decimal places and no
    more than MAX_ENTRY_AMOUNT are accepted, so the stored value is exactly
    the one entered.
    """
    try:
        value = Decimal(str(amount))
    except ArithmeticError:
        raise ValidationError("Amount must be greater than 0")
    if not value.is_finite() or value <= 0:
        raise ValidationError("Amount must be greater than 0")
    if value > MAX_ENTRY_AMOUNT:
        raise ValidationError(f"Amount must be at most {MAX_ENTRY_AMOUNT:,}")
    if value.quantize(CENT) != value:
        raise ValidationError("Amount can have at most 2 decimal places")
    return value
