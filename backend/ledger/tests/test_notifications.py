"""
Tests for LINE message rendering and delivery.
"""
import asyncio
import json
from datetime import datetime
from decimal import Decimal
import httpx
import pytest
from pydantic import ValidationError as SettingsValidationError
from ledger.core.config import Settings
from ledger.core.exceptions import DependencyError
from ledger.models.entry import EntryType
from ledger.services.ledger_service import LedgerSummary
from ledger.services.notification_service import (
    EntryNotice, LineNotifier, build_entry_message, build_summary_message,
    dispatch_entry_notification, send_summary
)


def make_settings(**overrides):
    values = {
        "AUTH_SECRET": "test-secret-key",
        "LINE_CHANNEL_ACCESS_TOKEN": "channel-token",
        "LINE_USER_ID": "U123",
    }
    values.update(overrides)
    return Settings(**values)


def notice(entry_type=EntryType.DEPOSIT, category_name=None):
    return EntryNotice(
        person_name="Alice",
        entry_type=entry_type,
        amount=Decimal("1234.5"),
        label="Bonus",
        transaction_date=datetime(2024, 1, 15, 9, 30),
        balance=Decimal("-20"),
        category_name=category_name
    )


def test_deposit_message():
    message = build_entry_message(notice(category_name="Work"))
    assert message.startswith("New deposit!")
    assert "Member: Alice" in message
    assert "Category: Work" in message
    assert "Amount: ฿1,234.50" in message
    assert "Date: 15 Jan 2024 09:30" in message
    assert "Balance: -฿20.00" in message


def test_withdraw_message_without_category():
    message = build_entry_message(notice(EntryType.WITHDRAW))
    assert message.startswith("New withdrawal!")
    assert "Category" not in message


def test_summary_message():
    summary = LedgerSummary(2, 1, Decimal("150"), Decimal("30"))
    message = build_summary_message("Alice", summary)
    assert "Summary: Alice" in message
    assert "Count: 2" in message
    assert "Total: ฿150.00" in message
    assert "Balance: ฿120.00" in message


def test_send_posts_to_line():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={})

    notifier = LineNotifier(make_settings(), transport=httpx.MockTransport(handler))

    assert asyncio.run(notifier.send("hello")) is True
    request = seen[0]
    assert request.headers["Authorization"] == "Bearer channel-token"
    assert json.loads(request.content) == {
        "to": "U123",
        "messages": [{"type": "text", "text": "hello"}]
    }


def test_send_reports_api_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(400, text="bad"))
    notifier = LineNotifier(make_settings(), transport=transport)
    assert asyncio.run(notifier.send("hello")) is False


def test_send_reports_network_error():
    def handler(request):
        raise httpx.ConnectError("down", request=request)

    notifier = LineNotifier(make_settings(), transport=httpx.MockTransport(handler))
    assert asyncio.run(notifier.send("hello")) is False


def test_send_unconfigured_returns_false():
    notifier = LineNotifier(make_settings(LINE_CHANNEL_ACCESS_TOKEN=""))
    assert asyncio.run(notifier.send("hello")) is False

    notifier = LineNotifier(make_settings(LINE_USER_ID=""))
    assert asyncio.run(notifier.send("hello")) is False


def test_dispatch_swallows_delivery_failure():
    class BrokenNotifier:
        config = make_settings()

        async def send(self, message, recipient=None):
            raise RuntimeError("boom")

    # Must not raise
    asyncio.run(dispatch_entry_notification(BrokenNotifier(), notice()))


def test_send_summary_raises_dependency_error():
    notifier = LineNotifier(make_settings(LINE_USER_ID=""))
    with pytest.raises(DependencyError):
        asyncio.run(send_summary(notifier, "Alice", LedgerSummary()))


def test_missing_auth_secret_is_fatal(monkeypatch):
    monkeypatch.delenv("AUTH_SECRET", raising=False)
    with pytest.raises(SettingsValidationError):
        Settings(_env_file=None)
    with pytest.raises(SettingsValidationError):
        Settings(AUTH_SECRET="   ", _env_file=None)
