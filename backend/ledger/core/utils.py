"""
Utility functions for the application.
"""
from typing import Any, Dict, Optional
from decimal import Decimal, ROUND_HALF_UP
from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the form stored in the database."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to a naive datetime read back from the database."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_money(amount: Decimal, symbol: str = "฿") -> str:
    """Format an amount with thousands separators and two decimals."""
    quantized = Decimal(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if quantized < 0 else ""
    return f"{sign}{symbol}{abs(quantized):,.2f}"


def format_response(data: Any = None, message: Optional[str] = None) -> Dict[str, Any]:
    """Format a successful API response envelope."""
    response: Dict[str, Any] = {"success": True}
    if message is not None:
        response["message"] = message
    if data is not None:
        response["data"] = data
    return response


def format_error(message: str, **extra: Any) -> Dict[str, Any]:
    """Format an error response envelope."""
    response: Dict[str, Any] = {"success": False, "message": message}
    response.update(extra)
    return response
