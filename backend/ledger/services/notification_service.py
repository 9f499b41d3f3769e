"""
Push notifications through the LINE Messaging API.

Entry notifications run as background tasks after the entry is committed;
a failed push is logged and never changes the outcome of the write.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional
import httpx
from ledger.core.config import Settings, settings
from ledger.core.exceptions import DependencyError
from ledger.core.utils import format_money
from ledger.models.entry import EntryType
from ledger.services.ledger_service import LedgerSummary

logger = logging.getLogger(__name__)

DIVIDER = "-" * 18


@dataclass(frozen=True)
class EntryNotice:
    """Data rendered into a deposit/withdraw message."""
    person_name: str
    entry_type: EntryType
    amount: Decimal
    label: str
    transaction_date: datetime
    balance: Decimal
    category_name: Optional[str] = None


class LineNotifier:
    """Sends text messages to a LINE user, group or room."""

    def __init__(self, config: Settings = settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self.transport = transport

    async def send(self, message: str, recipient: Optional[str] = None) -> bool:
        """Push a text message. Returns False when unconfigured or on any failure."""
        access_token = self.config.LINE_CHANNEL_ACCESS_TOKEN
        target = recipient or self.config.LINE_USER_ID

        if not access_token:
            logger.warning("LINE_CHANNEL_ACCESS_TOKEN is not configured")
            return False
        if not target:
            logger.warning("LINE_USER_ID is not configured")
            return False

        try:
            async with httpx.AsyncClient(
                timeout=self.config.LINE_TIMEOUT_SECONDS,
                transport=self.transport
            ) as client:
                response = await client.post(
                    self.config.LINE_API_URL,
                    headers={
                        "Authorization": f"Bearer {access_token}",
                        "Content-Type": "application/json"
                    },
                    json={
                        "to": target,
                        "messages": [{"type": "text", "text": message}]
                    }
                )
        except httpx.TimeoutException:
            logger.error("LINE push request timed out")
            return False
        except httpx.HTTPError as e:
            logger.error(f"Error sending LINE message: {e}")
            return False

        if response.status_code != 200:
            logger.error(f"LINE API error {response.status_code}: {response.text}")
            return False
        return True


def build_entry_message(notice: EntryNotice, symbol: str = "฿") -> str:
    """Render a deposit or withdrawal notification."""
    if notice.entry_type is EntryType.WITHDRAW:
        heading = "New withdrawal!"
    else:
        heading = "New deposit!"

    lines = [
        heading,
        "",
        f"Member: {notice.person_name}",
        f"Item: {notice.label}",
    ]
    if notice.category_name:
        lines.append(f"Category: {notice.category_name}")
    lines += [
        f"Amount: {format_money(notice.amount, symbol)}",
        f"Date: {notice.transaction_date:%d %b %Y %H:%M}",
        DIVIDER,
        f"Balance: {format_money(notice.balance, symbol)}",
    ]
    return "\n".join(lines)


def build_summary_message(person_name: str, summary: LedgerSummary, symbol: str = "฿") -> str:
    """Render a person's deposit/withdraw summary."""
    return "\n".join([
        f"Summary: {person_name}",
        "",
        "Deposits",
        f"   - Count: {summary.deposit_count}",
        f"   - Total: {format_money(summary.total_deposit, symbol)}",
        "",
        "Withdrawals",
        f"   - Count: {summary.withdraw_count}",
        f"   - Total: {format_money(summary.total_withdraw, symbol)}",
        "",
        DIVIDER,
        f"Balance: {format_money(summary.balance, symbol)}",
    ])


async def dispatch_entry_notification(notifier: LineNotifier, notice: EntryNotice) -> None:
    """Background task: push an entry notification, logging any failure."""
    try:
        sent = await notifier.send(build_entry_message(notice, notifier.config.CURRENCY_SYMBOL))
        if not sent:
            raise DependencyError(f"LINE notification for {notice.person_name} was not delivered")
    except DependencyError as e:
        logger.warning(e.message)
    except Exception:
        logger.exception("Failed to send LINE notification")


async def send_summary(notifier: LineNotifier, person_name: str, summary: LedgerSummary) -> None:
    """Push a summary now; raises DependencyError if LINE did not accept it."""
    message = build_summary_message(person_name, summary, notifier.config.CURRENCY_SYMBOL)
    if not await notifier.send(message):
        raise DependencyError()
